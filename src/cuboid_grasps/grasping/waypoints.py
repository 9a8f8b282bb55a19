"""Define the end-effector waypoints used to execute a scored grasp candidate."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from numpy.typing import NDArray

    from cuboid_grasps.grasping.candidates import ScoredCandidate
    from cuboid_grasps.spatial import Pose3D


def pre_grasp_direction(candidate: ScoredCandidate) -> NDArray[np.float64]:
    """Rotate a candidate's approach direction from the end-effector frame into the reference frame.

    :param candidate: Scored grasp candidate
    :return: Unit vector (reference frame) along which the end effector approaches the grasp
    """
    return candidate.eef_pose.orientation.rotate_vector(candidate.approach_direction)


@dataclass(frozen=True)
class GraspWaypoints:
    """End-effector poses used to approach, grasp, lift, and retreat from an object."""

    pregrasp_pose: Pose3D
    grasp_pose: Pose3D
    lifted_pose: Pose3D
    retreat_pose: Pose3D

    @staticmethod
    def compute_pregrasp_pose(candidate: ScoredCandidate) -> Pose3D:
        """Compute the pose backed off from the grasp by the approach distance, against the approach."""
        offset = -pre_grasp_direction(candidate) * candidate.approach_distance
        return candidate.eef_pose.translated(offset)

    @staticmethod
    def compute_lifted_pose(grasp_pose: Pose3D, lift_distance: float) -> Pose3D:
        """Compute the grasp pose lifted "up" (+z) in its reference frame."""
        return grasp_pose.translated([0.0, 0.0, lift_distance])

    @staticmethod
    def compute_retreat_pose(candidate: ScoredCandidate, lifted_pose: Pose3D) -> Pose3D:
        """Compute the pose reached by retreating from the lifted pose along the retreat direction."""
        retreat = np.asarray(candidate.retreat_direction, dtype=float)
        retreat = retreat / np.linalg.norm(retreat)
        offset = lifted_pose.orientation.rotate_vector(retreat) * candidate.retreat_distance
        return lifted_pose.translated(offset)

    @classmethod
    def from_candidate(cls, candidate: ScoredCandidate, lift_distance: float) -> GraspWaypoints:
        """Compute all waypoints needed to execute the given grasp candidate.

        :param candidate: Scored grasp candidate
        :param lift_distance: Distance (m) the object is lifted along the reference z-axis
        :return: Constructed GraspWaypoints instance
        """
        grasp_pose = candidate.eef_pose
        lifted_pose = GraspWaypoints.compute_lifted_pose(grasp_pose, lift_distance)
        return GraspWaypoints(
            pregrasp_pose=GraspWaypoints.compute_pregrasp_pose(candidate),
            grasp_pose=grasp_pose,
            lifted_pose=lifted_pose,
            retreat_pose=GraspWaypoints.compute_retreat_pose(candidate, lifted_pose),
        )

    def as_list(self) -> list[Pose3D]:
        """Return the waypoints in execution order."""
        return [self.pregrasp_pose, self.grasp_pose, self.lifted_pose, self.retreat_pose]
