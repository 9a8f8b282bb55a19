"""Define fixtures shared by the grasp generation tests."""

import pytest

from cuboid_grasps.geometry import Cuboid
from cuboid_grasps.grasping import EndEffectorKind, GraspCandidateConfig, GripperProfile
from cuboid_grasps.spatial import Pose3D


@pytest.fixture
def small_box() -> Cuboid:
    """Return a 5 x 3 x 2 cm cuboid centered at the origin."""
    return Cuboid(Pose3D.identity(), depth=0.05, width=0.03, height=0.02)


@pytest.fixture
def finger_profile() -> GripperProfile:
    """Return the profile of a parallel-jaw gripper with 1 cm fingers and 45 degree resolution."""
    return GripperProfile(
        kind=EndEffectorKind.FINGER,
        angle_resolution_deg=45.0,
        grasp_resolution=0.01,
        grasp_depth_resolution=0.01,
        grasp_min_depth=0.01,
        grasp_max_depth=0.03,
        grasp_pose_to_eef_pose=Pose3D.from_xyz_rpy(z=-0.1),
        approach_distance_desired=0.05,
        retreat_distance_desired=0.05,
        lift_distance_desired=0.1,
        grasp_padding_on_approach=0.005,
        parent_link="wrist_link",
        max_grasp_width=0.08,
        max_finger_width=0.085,
        min_finger_width=0.0,
        gripper_finger_width=0.01,
        joint_names=("finger_joint",),
        open_joint_positions=(0.8,),
        closed_joint_positions=(0.0,),
    )


@pytest.fixture
def suction_profile() -> GripperProfile:
    """Return the profile of a 2 x 2 cm suction cup split into a 2 x 2 voxel grid."""
    return GripperProfile(
        kind=EndEffectorKind.SUCTION,
        angle_resolution_deg=90.0,
        grasp_resolution=0.01,
        grasp_depth_resolution=0.01,
        grasp_min_depth=0.0,
        grasp_max_depth=0.01,
        grasp_pose_to_eef_pose=Pose3D.from_xyz_rpy(z=-0.05),
        parent_link="suction_link",
        active_suction_range_x=0.02,
        active_suction_range_y=0.02,
        suction_regions_x=2,
        suction_regions_y=2,
    )


@pytest.fixture
def corner_and_face_config() -> GraspCandidateConfig:
    """Return a config generating only corner and face grasps."""
    return GraspCandidateConfig(enable_variable_angle_grasps=False, enable_edge_grasps=False)
