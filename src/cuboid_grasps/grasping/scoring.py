"""Define pure functions scoring candidate grasp poses against geometric criteria.

Every score lies in [0, 1] and higher is better. Per-criterion scores are combined into a
    single quality value by a weighted average (see `combine_scores`).
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

import numpy as np

from cuboid_grasps.math import ClosedInterval
from cuboid_grasps.spatial import Axis, angle_between_axes_rad, euclidean_distance_3d_m

if TYPE_CHECKING:
    from collections.abc import Mapping

    from numpy.typing import NDArray

    from cuboid_grasps.grasping.batch_extrema import BatchExtrema
    from cuboid_grasps.grasping.gripper_profile import GripperProfile
    from cuboid_grasps.grasping.score_weights import ScoreWeights
    from cuboid_grasps.spatial import Pose3D

AXES = (Axis.X, Axis.Y, Axis.Z)
AXIS_NAMES = ("x", "y", "z")


def _clip_unit(value: float) -> float:
    return float(np.clip(value, 0.0, 1.0))


def _normalized_from_minimum(value: float, minimum: float, maximum: float) -> float:
    """Score a value by how close it is to the minimum of a range (1 at the minimum, 0 at the maximum)."""
    span = maximum - minimum
    if span <= 0.0:
        return 1.0
    return _clip_unit(1.0 - (value - minimum) / span)


def score_rotations_from_desired(pose: Pose3D, ideal: Pose3D) -> dict[str, float]:
    """Score how well each local axis of a grasp pose aligns with the same axis of the ideal pose.

    :param pose: Candidate grasp pose
    :param ideal: Pose whose orientation is the ideal grasp orientation
    :return: Map from "orientation_x", "orientation_y", "orientation_z" to (pi - angle) / pi
    """
    return {
        f"orientation_{name}": (math.pi - angle_between_axes_rad(pose, ideal, axis)) / math.pi
        for name, axis in zip(AXIS_NAMES, AXES)
    }


def score_translation_from_extrema(pose: Pose3D, extrema: BatchExtrema) -> dict[str, float]:
    """Score a finger grasp's position by its closeness to the batch's per-axis minimum translation."""
    position = pose.position.to_array()
    minimums = extrema.min_translations.to_array()
    maximums = extrema.max_translations.to_array()
    return {
        f"translation_{name}": _normalized_from_minimum(position[i], minimums[i], maximums[i])
        for i, name in enumerate(AXIS_NAMES)
    }


def score_translation_from_ideal(
    pose: Pose3D,
    ideal: Pose3D,
    cuboid_size: NDArray[np.float64],
) -> dict[str, float]:
    """Score a suction grasp's position by its deviation from the ideal grasp position.

    The deviation is expressed in the ideal pose's frame and each component is normalized
        by half the object's extent along that axis.

    :param pose: Candidate grasp pose
    :param ideal: Ideal grasp pose (positioned at the center of the grasped face)
    :param cuboid_size: Extents (depth, width, height) of the grasped cuboid
    :return: Map from "translation_x", "translation_y", "translation_z" to scores in [0, 1]
    """
    deviation = (ideal.inverse("ideal_grasp") @ pose.position).to_array()
    half_size = np.asarray(cuboid_size, dtype=float) / 2.0
    return {
        f"translation_{name}": _clip_unit(1.0 - abs(deviation[i]) / half_size[i])
        for i, name in enumerate(AXIS_NAMES)
    }


def score_grasp_width(percent_open: float) -> float:
    """Score the opening of a finger gripper, preferring wider approaches."""
    return percent_open**2


def score_distance_to_palm(pose: Pose3D, object_pose: Pose3D, extrema: BatchExtrema) -> float:
    """Score a finger grasp by how close its position is to the grasped object's centroid.

    :param pose: Candidate grasp pose
    :param object_pose: Pose of the grasped object's centroid
    :param extrema: Extrema of the grasp distances over the enumerated batch
    :return: 1 at the batch's minimum distance, 0 at its maximum
    """
    distance = euclidean_distance_3d_m(pose, object_pose)
    return _normalized_from_minimum(distance, extrema.min_grasp_distance, extrema.max_grasp_distance)


def score_grasp_overhang(
    pose: Pose3D,
    profile: GripperProfile,
    top_pose: Pose3D,
    cuboid_size: NDArray[np.float64],
) -> tuple[float, float]:
    """Score how much of a suction gripper's active footprint lies over the grasped face.

    Each suction voxel is projected into the frame of the top face, and the extent of its
        footprint along the face's x- and y-axes is compared with the face's extent.

    :param pose: Candidate suction grasp pose
    :param profile: Suction gripper profile defining the voxel grid
    :param top_pose: Pose at the center of the cuboid's grasped (top) face
    :param cuboid_size: Extents (depth, width, height) of the grasped cuboid
    :return: Pair (x, y) of the fractions of the footprint overlapping the face, averaged over voxels
    """
    face_x = ClosedInterval.centered(0.0, float(cuboid_size[0]))
    face_y = ClosedInterval.centered(0.0, float(cuboid_size[1]))
    pose_w_face = top_pose.inverse("cuboid_top")  # Transforms reference-frame points into the face frame

    fractions_x = []
    fractions_y = []
    for voxel in profile.suction_voxels:
        corners = np.vstack([(pose_w_face @ (pose @ corner)).to_array() for corner in voxel.corners])
        footprint_x = ClosedInterval(float(corners[:, 0].min()), float(corners[:, 0].max()))
        footprint_y = ClosedInterval(float(corners[:, 1].min()), float(corners[:, 1].max()))
        fractions_x.append(footprint_x.overlap_fraction(face_x))
        fractions_y.append(footprint_y.overlap_fraction(face_y))

    return float(np.mean(fractions_x)), float(np.mean(fractions_y))


def combine_scores(scores: Mapping[str, float], weights: ScoreWeights) -> float:
    """Combine named per-criterion scores into one quality value using a weighted average.

    Zero weights still count toward the normalization, contributing nothing to the sum.

    :param scores: Map from criterion names to scores in [0, 1]
    :param weights: Weights of the scoring criteria
    :return: Weighted average of the scores
    :raises ValueError: If every weight of the given criteria is zero
    """
    weighted_sum = 0.0
    weight_total = 0.0
    for criterion, score in scores.items():
        weight = weights.weight_of(criterion)
        weighted_sum += weight * score
        weight_total += weight

    if weight_total == 0.0:
        raise ValueError(f"Cannot combine scores {sorted(scores)} whose weights are all zero")
    return weighted_sum / weight_total


def score_finger_grasp(
    pose: Pose3D,
    ideal: Pose3D,
    object_pose: Pose3D,
    extrema: BatchExtrema,
    percent_open: float,
    weights: ScoreWeights,
) -> tuple[float, dict[str, float]]:
    """Score a finger grasp pose commanded to the given opening.

    :return: Tuple of the combined quality and the per-criterion scores
    """
    scores = {"width": score_grasp_width(percent_open)}
    scores.update(score_rotations_from_desired(pose, ideal))
    scores["depth"] = score_distance_to_palm(pose, object_pose, extrema)
    scores.update(score_translation_from_extrema(pose, extrema))
    return combine_scores(scores, weights), scores


def score_suction_grasp(
    pose: Pose3D,
    ideal: Pose3D,
    profile: GripperProfile,
    top_pose: Pose3D,
    cuboid_size: NDArray[np.float64],
    weights: ScoreWeights,
) -> tuple[float, dict[str, float]]:
    """Score a suction grasp pose.

    :param ideal: Ideal grasp pose, positioned at the center of the grasped face
    :return: Tuple of the combined quality and the per-criterion scores
    """
    scores = score_rotations_from_desired(pose, ideal)
    scores.update(score_translation_from_ideal(pose, ideal, cuboid_size))
    overhang_x, overhang_y = score_grasp_overhang(pose, profile, top_pose, cuboid_size)
    scores["overhang_x"] = overhang_x
    scores["overhang_y"] = overhang_y
    return combine_scores(scores, weights), scores
