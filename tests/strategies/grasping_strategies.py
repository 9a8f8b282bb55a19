"""Define strategies for generating cuboids, gripper profiles, and score weights."""

from __future__ import annotations

import hypothesis.strategies as st

from cuboid_grasps.geometry import Cuboid
from cuboid_grasps.grasping import EndEffectorKind, GripperProfile, ScoreWeights

from .common_strategies import lengths_m
from .spatial_strategies import poses_3d


@st.composite
def cuboids(draw: st.DrawFn) -> Cuboid:
    """Generate random cuboids with graspable extents."""
    pose = draw(poses_3d(frames=st.just("world")))
    return Cuboid(pose, draw(lengths_m()), draw(lengths_m()), draw(lengths_m()))


@st.composite
def finger_profiles(draw: st.DrawFn) -> GripperProfile:
    """Generate random (valid) profiles of two-finger grippers."""
    min_depth = draw(st.floats(min_value=0.0, max_value=0.02))
    max_depth = min_depth + draw(st.floats(min_value=0.005, max_value=0.05))
    min_finger_width = draw(st.floats(min_value=0.0, max_value=0.02))
    return GripperProfile(
        kind=EndEffectorKind.FINGER,
        angle_resolution_deg=draw(st.sampled_from([15.0, 30.0, 45.0, 60.0, 90.0])),
        grasp_resolution=draw(lengths_m(min_value=0.005, max_value=0.05)),
        grasp_depth_resolution=draw(lengths_m(min_value=0.005, max_value=0.05)),
        grasp_min_depth=min_depth,
        grasp_max_depth=max_depth,
        max_grasp_width=draw(lengths_m(min_value=0.02, max_value=0.2)),
        min_finger_width=min_finger_width,
        max_finger_width=min_finger_width + draw(lengths_m(min_value=0.01, max_value=0.2)),
        gripper_finger_width=draw(lengths_m(min_value=0.0, max_value=0.03)),
        joint_names=("finger_joint",),
        open_joint_positions=(0.8,),
        closed_joint_positions=(0.0,),
    )


@st.composite
def score_weights(draw: st.DrawFn) -> ScoreWeights:
    """Generate random non-negative score weights (never all zero)."""
    weight = st.floats(min_value=0.0, max_value=10.0, allow_infinity=False, allow_nan=False)
    names = (
        "orientation_x",
        "orientation_y",
        "orientation_z",
        "translation_x",
        "translation_y",
        "translation_z",
        "width",
        "depth",
        "overhang",
    )
    values = {name: draw(weight) for name in names}
    values["orientation_z"] += 0.1
    return ScoreWeights(**values)
