"""Enumerate candidate suction grasp poses as a dense grid over the top face of a cuboid."""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING

import numpy as np

from cuboid_grasps.grasping.diagnostics import NullDiagnostics
from cuboid_grasps.grasping.finger_enumeration import robust_ceil, robust_floor
from cuboid_grasps.spatial import Axis, Pose3D, compose_pose

if TYPE_CHECKING:
    from collections.abc import Sequence

    from cuboid_grasps.geometry import Cuboid
    from cuboid_grasps.grasping.diagnostics import DiagnosticsSink
    from cuboid_grasps.grasping.gripper_profile import GripperProfile

logger = logging.getLogger(__name__)


def top_face_pose(cuboid: Cuboid) -> Pose3D:
    """Compute the pose at the center of the cuboid's top face (local +z), sharing its orientation."""
    return compose_pose(cuboid.pose, (), (0.0, 0.0, cuboid.height / 2.0))


def orient_suction_seed(top_pose: Pose3D, ideal_pose: Pose3D) -> Pose3D:
    """Flip the top-face pose to be as close as possible to the ideal grasp orientation.

    The pose is first rotated a half-turn about its x-axis if its z-axis opposes the ideal
        z-axis, then a half-turn about its z-axis if its x-axis opposes the ideal x-axis.
    """
    seed = top_pose
    if np.dot(seed.axis_direction(Axis.Z), ideal_pose.axis_direction(Axis.Z)) < 0:
        logger.debug("Flipping the top-face pose about its x-axis")
        seed = compose_pose(seed, [(Axis.X, math.pi)])

    if np.dot(seed.axis_direction(Axis.X), ideal_pose.axis_direction(Axis.X)) < 0:
        logger.debug("Flipping the top-face pose about its z-axis")
        seed = compose_pose(seed, [(Axis.Z, math.pi)])

    return seed


def suction_yaw_angles(angle_resolution_rad: float) -> list[float]:
    """List every yaw (radians) of the suction grid: the seed's own, then each yaw step."""
    return [k * angle_resolution_rad for k in range(num_yaw_steps(angle_resolution_rad) + 1)]


def suction_xy_limit(cuboid: Cuboid, profile: GripperProfile) -> float:
    """Compute the largest x/y offset (m) from the face center keeping the suction footprint on the face.

    Offsets are taken in each yawed pose's frame, so for a yaw of theta both the offset and the
        footprint's extents are rotated into the face frame. The limit is the tightest one over
        every yaw the grid enumerates. A negative limit means the footprint never fits on the face.
    """
    range_x = profile.active_suction_range_x
    range_y = profile.active_suction_range_y
    limit = math.inf
    for yaw in suction_yaw_angles(profile.angle_resolution_rad):
        cos_yaw, sin_yaw = abs(math.cos(yaw)), abs(math.sin(yaw))
        half_extent_x = (range_x * cos_yaw + range_y * sin_yaw) / 2.0
        half_extent_y = (range_x * sin_yaw + range_y * cos_yaw) / 2.0
        slack = min(cuboid.depth / 2.0 - half_extent_x, cuboid.width / 2.0 - half_extent_y)
        limit = min(limit, slack / (cos_yaw + sin_yaw))
    return limit


def num_yaw_steps(angle_resolution_rad: float) -> int:
    """Count the yaw steps k >= 1 satisfying k * resolution < 2 pi."""
    return max(0, robust_ceil(2.0 * math.pi / angle_resolution_rad) - 1)


def num_inclusive_steps(limit: float, increment: float) -> int:
    """Count the steps k >= 1 satisfying k * increment <= limit."""
    if limit <= 0.0:
        return 0
    return max(0, robust_floor(limit / increment))


def _expand_yaw(poses: Sequence[Pose3D], angle_res: float) -> list[Pose3D]:
    steps = num_yaw_steps(angle_res)
    return [compose_pose(pose, [(Axis.Z, k * angle_res)]) for pose in poses for k in range(1, steps + 1)]


def _expand_depth(poses: Sequence[Pose3D], finger_depth: float, depth_res: float) -> list[Pose3D]:
    steps = num_inclusive_steps(finger_depth, depth_res)
    return [compose_pose(pose, (), (0.0, 0.0, k * depth_res)) for pose in poses for k in range(1, steps + 1)]


def _expand_offsets(poses: Sequence[Pose3D], axis: Axis, limit: float, resolution: float) -> list[Pose3D]:
    steps = num_inclusive_steps(limit, resolution)
    expanded = []
    for pose in poses:
        for k in range(1, steps + 1):
            offset = k * resolution * axis.unit_vector
            expanded.append(compose_pose(pose, (), offset))
            expanded.append(compose_pose(pose, (), -offset))
    return expanded


def enumerate_suction_poses(
    cuboid: Cuboid,
    profile: GripperProfile,
    ideal_pose: Pose3D,
    diagnostics: DiagnosticsSink | None = None,
) -> list[Pose3D]:
    """Enumerate every candidate suction grasp pose on the top face of a cuboid.

    Starting from the center of the top face (re-oriented toward the ideal grasp), the set
        of poses is expanded by successive sweeps (yaw, depth, y-offset, then x-offset), each
        sweep appending copies of every pose generated so far. All offsets are applied in
        each pose's own frame.

    :param cuboid: Cuboid whose top face (local +z) is grasped
    :param profile: Suction gripper profile
    :param ideal_pose: Pose whose orientation is the preferred grasp orientation
    :param diagnostics: Optional receiver of each sweep's poses
    :return: Ordered list of candidate poses, beginning with the center pose
    """
    diagnostics = diagnostics or NullDiagnostics()

    seed = orient_suction_seed(top_face_pose(cuboid), ideal_pose)
    center_pose = compose_pose(seed, (), (0.0, 0.0, profile.grasp_min_depth))
    poses = [center_pose]
    diagnostics.on_poses("center", [center_pose])

    xy_limit = suction_xy_limit(cuboid, profile)
    logger.debug("Suction grid limited to offsets of %.4f m from the face center", xy_limit)

    sweeps = (
        ("yaw", lambda ps: _expand_yaw(ps, profile.angle_resolution_rad)),
        ("depth", lambda ps: _expand_depth(ps, profile.finger_depth, profile.grasp_depth_resolution)),
        ("offset_y", lambda ps: _expand_offsets(ps, Axis.Y, xy_limit, profile.grasp_resolution)),
        ("offset_x", lambda ps: _expand_offsets(ps, Axis.X, xy_limit, profile.grasp_resolution)),
    )
    for stage, expand in sweeps:
        new_poses = expand(poses)
        diagnostics.on_poses(stage, new_poses)
        poses.extend(new_poses)

    return poses
