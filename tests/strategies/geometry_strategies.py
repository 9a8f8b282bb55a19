"""Define strategies for generating geometric primitives for property-based testing."""

import hypothesis.strategies as st

from cuboid_grasps.geometry import Point3D


@st.composite
def positions(draw: st.DrawFn) -> Point3D:
    """Generate random (x,y,z) points."""
    x = draw(st.floats(min_value=-100.0, max_value=100.0, allow_infinity=False, allow_nan=False))
    y = draw(st.floats(min_value=-100.0, max_value=100.0, allow_infinity=False, allow_nan=False))
    z = draw(st.floats(min_value=-100.0, max_value=100.0, allow_infinity=False, allow_nan=False))
    return Point3D(x, y, z)
