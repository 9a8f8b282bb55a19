"""Distance and angle measures used to score grasp poses against an ideal pose."""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from numpy.typing import NDArray

    from cuboid_grasps.spatial.poses import Pose3D
    from cuboid_grasps.spatial.rotations import Axis


def euclidean_distance_3d_m(pose_a: Pose3D, pose_b: Pose3D) -> float:
    """Straight-line distance (meters) between the positions of two poses; frames are not checked."""
    return float(np.linalg.norm(pose_a.position.to_array() - pose_b.position.to_array()))


def angle_between_vectors_rad(u: NDArray[np.float64], v: NDArray[np.float64]) -> float:
    """Unsigned angle (radians, in [0, pi]) between two nonzero vectors."""
    cos_angle = np.dot(u, v) / (np.linalg.norm(u) * np.linalg.norm(v))
    return float(np.arccos(np.clip(cos_angle, -1.0, 1.0)))


def angle_between_axes_rad(pose_a: Pose3D, pose_b: Pose3D, axis: Axis) -> float:
    """Angle (radians, in [0, pi]) by which the given local axis differs between two poses.

    :param pose_a: Pose providing the first axis direction
    :param pose_b: Pose providing the second axis direction
    :param axis: Local axis compared between the poses
    :return: Unsigned angle between the two directions
    """
    return angle_between_vectors_rad(pose_a.axis_direction(axis), pose_b.axis_direction(axis))
