"""Unit tests for the enumeration of suction grasp poses over the top face of a cuboid."""

import dataclasses
import math

import numpy as np
import pytest

from cuboid_grasps.geometry import Cuboid, Point3D
from cuboid_grasps.grasping import GripperProfile, RecordingDiagnostics, enumerate_suction_poses
from cuboid_grasps.grasping.suction_enumeration import (
    num_inclusive_steps,
    num_yaw_steps,
    orient_suction_seed,
    suction_xy_limit,
    top_face_pose,
)
from cuboid_grasps.spatial import Axis, Pose3D


@pytest.fixture
def tray() -> Cuboid:
    """Return a 10 x 8 x 5 cm cuboid centered at the origin."""
    return Cuboid(Pose3D.identity(), depth=0.1, width=0.08, height=0.05)


def test_top_face_pose_sits_on_the_local_top_face() -> None:
    """Verify that the top face is found along the cuboid's own z-axis, not the reference z-axis."""
    # Arrange - A cuboid rolled a quarter-turn, so its local z-axis points along reference -y
    cuboid = Cuboid(Pose3D.from_xyz_rpy(x=1.0, roll_rad=math.pi / 2.0), depth=0.1, width=0.08, height=0.06)

    # Act
    top = top_face_pose(cuboid)

    # Assert
    assert top.position.to_array() == pytest.approx([1.0, -0.03, 0.0], abs=1e-9)
    assert top.orientation.approx_equal(cuboid.pose.orientation)


@pytest.mark.parametrize(("angle_deg", "expected"), [(90.0, 3), (45.0, 7), (120.0, 2), (360.0, 0), (100.0, 3)])
def test_num_yaw_steps_stops_short_of_a_full_turn(angle_deg: float, expected: int) -> None:
    """Verify that yaw steps never include a full turn (which would duplicate the unyawed pose)."""
    # Act/Assert
    assert num_yaw_steps(math.radians(angle_deg)) == expected


def test_num_inclusive_steps() -> None:
    """Verify that offset steps include the limit itself, despite floating-point rounding."""
    # Act/Assert
    assert num_inclusive_steps(0.03, 0.01) == 3
    assert num_inclusive_steps(0.035, 0.01) == 3
    assert num_inclusive_steps(0.0, 0.01) == 0
    assert num_inclusive_steps(-0.01, 0.01) == 0


def test_suction_xy_limit_uses_the_tighter_face_axis(tray: Cuboid, suction_profile: GripperProfile) -> None:
    """Verify that the offset limit keeps a square suction footprint on the face along both axes."""
    # Act/Assert - (min(0.10, 0.08) - 0.02) / 2
    assert suction_xy_limit(tray, suction_profile) == pytest.approx(0.03)


def test_seed_flips_toward_an_upside_down_ideal_orientation() -> None:
    """Verify that the seed is flipped about x when the ideal grasp points down onto the face."""
    # Arrange
    top = Pose3D.from_xyz_rpy(z=0.025)
    ideal = Pose3D.from_xyz_rpy(roll_rad=math.pi)

    # Act
    seed = orient_suction_seed(top, ideal)

    # Assert
    assert seed.position.approx_equal(top.position)
    assert seed.axis_direction(Axis.Z) == pytest.approx([0.0, 0.0, -1.0], abs=1e-9)
    assert seed.axis_direction(Axis.X) == pytest.approx([1.0, 0.0, 0.0], abs=1e-9)


def test_seed_flips_about_z_when_x_axes_oppose() -> None:
    """Verify that the seed is yawed a half-turn when its x-axis opposes the ideal x-axis."""
    # Arrange
    top = Pose3D.identity()
    ideal = Pose3D.from_xyz_rpy(yaw_rad=math.pi)

    # Act
    seed = orient_suction_seed(top, ideal)

    # Assert
    assert seed.axis_direction(Axis.Z) == pytest.approx([0.0, 0.0, 1.0], abs=1e-9)
    assert seed.axis_direction(Axis.X) == pytest.approx([-1.0, 0.0, 0.0], abs=1e-9)


def test_suction_grid_size(tray: Cuboid, suction_profile: GripperProfile) -> None:
    """Verify the deterministic size of each sweep of the suction grid."""
    # Arrange
    diagnostics = RecordingDiagnostics()

    # Act
    poses = enumerate_suction_poses(tray, suction_profile, Pose3D.identity(), diagnostics)

    # Assert - 1 center; x4 yaws; x2 depths; x7 y-offsets; x7 x-offsets
    assert diagnostics.stage_sizes() == {"center": 1, "yaw": 3, "depth": 4, "offset_y": 48, "offset_x": 336}
    assert len(poses) == 392


def test_suction_center_pose_is_first(tray: Cuboid, suction_profile: GripperProfile) -> None:
    """Verify that the first pose is the top-face center, moved along its z-axis by the minimum grasp depth."""
    # Arrange
    profile = dataclasses.replace(suction_profile, grasp_min_depth=0.005)

    # Act
    poses = enumerate_suction_poses(tray, profile, Pose3D.identity())

    # Assert
    assert poses[0].position.to_array() == pytest.approx([0.0, 0.0, 0.03])
    assert poses[0].orientation.approx_equal(tray.pose.orientation)


def test_suction_grid_stays_within_the_offset_limit(tray: Cuboid, suction_profile: GripperProfile) -> None:
    """Verify that every suction pose lies within the offset limit of the top-face center."""
    # Arrange
    limit = suction_xy_limit(tray, suction_profile)

    # Act
    poses = enumerate_suction_poses(tray, suction_profile, Pose3D.identity())

    # Assert - Offsets are applied in each (yawed) pose's frame, so check the radial bound
    xy = np.vstack([pose.position.to_array()[:2] for pose in poses])
    assert np.all(np.abs(xy) <= math.sqrt(2.0) * limit + 1e-9)
    assert np.abs(xy).max() == pytest.approx(limit)


def test_suction_grid_without_room_for_offsets(tray: Cuboid, suction_profile: GripperProfile) -> None:
    """Verify that a suction cup wider than the face produces no offset grasps."""
    # Arrange
    profile = dataclasses.replace(suction_profile, active_suction_range_x=0.2, active_suction_range_y=0.2)

    # Act
    poses = enumerate_suction_poses(tray, profile, Pose3D.identity())

    # Assert - Only yaw and depth copies of the center remain
    assert len(poses) == 8
    for pose in poses:
        assert pose.position.to_array()[:2] == pytest.approx([0.0, 0.0], abs=1e-12)


@pytest.fixture
def long_cup_profile(suction_profile: GripperProfile) -> GripperProfile:
    """Return a suction profile with a 15 x 2 cm footprint and 2.5 cm grid steps."""
    return dataclasses.replace(
        suction_profile,
        active_suction_range_x=0.15,
        active_suction_range_y=0.02,
        grasp_resolution=0.025,
    )


@pytest.mark.parametrize(
    ("angle_resolution_deg", "expected_limit"),
    [
        (180.0, 0.075),  # Unturned or half-turned: the footprint stays along the 30 cm side
        (90.0, 0.025),  # Quarter-turns: (min(0.3, 0.2) - max(0.15, 0.02)) / 2
    ],
)
def test_suction_xy_limit_accounts_for_yawed_footprints(
    long_cup_profile: GripperProfile,
    angle_resolution_deg: float,
    expected_limit: float,
) -> None:
    """Verify that the offset limit shrinks once yaw steps turn a long footprint across the face."""
    # Arrange
    cuboid = Cuboid(Pose3D.identity(), depth=0.3, width=0.2, height=0.05)
    profile = dataclasses.replace(long_cup_profile, angle_resolution_deg=angle_resolution_deg)

    # Act/Assert
    assert suction_xy_limit(cuboid, profile) == pytest.approx(expected_limit)


@pytest.mark.parametrize("angle_resolution_deg", [180.0, 90.0, 45.0])
def test_suction_footprint_never_leaves_the_top_face(
    long_cup_profile: GripperProfile,
    angle_resolution_deg: float,
) -> None:
    """Verify that every corner of every suction voxel of every pose lies on the top face."""
    # Arrange
    cuboid = Cuboid(Pose3D.from_xyz_rpy(0.5, 0.2, 0.1, yaw_rad=0.3), depth=0.3, width=0.2, height=0.05)
    profile = dataclasses.replace(long_cup_profile, angle_resolution_deg=angle_resolution_deg)
    face_from_ref = top_face_pose(cuboid).inverse("top_face")
    corners = [
        Point3D(voxel.center.x + sx * voxel.x_width / 2.0, voxel.center.y + sy * voxel.y_width / 2.0, 0.0)
        for voxel in profile.suction_voxels
        for sx in (-1.0, 1.0)
        for sy in (-1.0, 1.0)
    ]

    # Act
    poses = enumerate_suction_poses(cuboid, profile, Pose3D.identity())

    # Assert - Some poses are offset, and none of them pushes the footprint past a face edge
    assert len(poses) > 2 * (num_yaw_steps(profile.angle_resolution_rad) + 1)
    for pose in poses:
        for corner in corners:
            on_face = face_from_ref @ (pose @ corner)
            assert abs(on_face.x) <= cuboid.depth / 2.0 + 1e-9
            assert abs(on_face.y) <= cuboid.width / 2.0 + 1e-9
