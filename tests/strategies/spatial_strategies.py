"""Hypothesis strategies producing orientations and poses of grasp-related frames."""

from __future__ import annotations

import hypothesis.strategies as st

from cuboid_grasps.spatial import RPY, Axis, Pose3D, Quaternion

from .common_strategies import angles_rad
from .geometry_strategies import positions

FRAME_NAMES = ("world", "base_link", "object", "gripper_tip")


@st.composite
def axes(draw: st.DrawFn) -> Axis:
    return draw(st.sampled_from(list(Axis)))


@st.composite
def rpy_angles(draw: st.DrawFn) -> RPY:
    """Generate fixed-frame (roll, pitch, yaw) triples."""
    return (draw(angles_rad()), draw(angles_rad()), draw(angles_rad()))


@st.composite
def quaternions(draw: st.DrawFn) -> Quaternion:
    """Generate unit quaternions from a random rotation axis and angle."""
    components = st.floats(min_value=-1.0, max_value=1.0, allow_infinity=False, allow_nan=False)
    axis = draw(st.tuples(components, components, components).filter(lambda v: sum(c * c for c in v) > 1e-3))
    return Quaternion.from_axis_angle(axis, draw(angles_rad()))


@st.composite
def poses_3d(draw: st.DrawFn, frames: st.SearchStrategy[str] | None = None) -> Pose3D:
    """Generate poses w.r.t. one of a few named frames (or frames drawn from ``frames``)."""
    ref_frame = draw(frames if frames is not None else st.sampled_from(FRAME_NAMES))
    return Pose3D(draw(positions()), draw(quaternions()), ref_frame)
