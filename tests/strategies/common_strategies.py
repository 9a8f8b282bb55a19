"""Define strategies for generating common representations for property-based testing."""

from __future__ import annotations

from pathlib import Path

import hypothesis.strategies as st
import numpy as np


@st.composite
def angles_rad(draw: st.DrawFn) -> float:
    """Generate random angles (radians) in [-pi, pi]."""
    return draw(st.floats(min_value=-np.pi, max_value=np.pi, allow_infinity=False, allow_nan=False))


@st.composite
def unit_fractions(draw: st.DrawFn) -> float:
    """Generate random fractions in [0, 1]."""
    return draw(st.floats(min_value=0.0, max_value=1.0, allow_infinity=False, allow_nan=False))


@st.composite
def lengths_m(draw: st.DrawFn, min_value: float = 0.005, max_value: float = 0.5) -> float:
    """Generate random positive lengths (meters) of graspable magnitude."""
    return draw(st.floats(min_value=min_value, max_value=max_value, allow_infinity=False, allow_nan=False))


def get_test_data_path() -> Path:
    """Retrieve the path to the `test_data` folder."""
    path = Path(__file__).parent.parent / "test_data"
    assert path.exists()
    return path
