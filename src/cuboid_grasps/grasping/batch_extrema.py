"""Define the extrema of an enumerated set of grasp poses, used to normalize scores."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from cuboid_grasps.geometry import Point3D

if TYPE_CHECKING:
    from collections.abc import Sequence

    from cuboid_grasps.spatial import Pose3D


@dataclass(frozen=True)
class BatchExtrema:
    """Distance and translation bounds over one complete set of enumerated grasp poses."""

    min_grasp_distance: float
    """Smallest distance (m) from a grasp pose's position to the object's centroid."""

    max_grasp_distance: float
    """Largest distance (m) from a grasp pose's position to the object's centroid."""

    min_translations: Point3D
    """Per-axis minimum of the grasp poses' positions (reference frame)."""

    max_translations: Point3D
    """Per-axis maximum of the grasp poses' positions (reference frame)."""

    @classmethod
    def from_poses(cls, poses: Sequence[Pose3D], centroid: Point3D) -> BatchExtrema:
        """Compute the extrema over a full set of grasp poses.

        :param poses: Every pose enumerated in one batch
        :param centroid: Position of the grasped object's centroid
        :return: Extrema of the poses' distances to the centroid and of their positions
        :raises ValueError: If no poses are given
        """
        if not poses:
            raise ValueError("Cannot compute batch extrema over zero grasp poses.")

        positions = np.vstack([pose.position.to_array() for pose in poses])  # (N, 3)
        distances = np.linalg.norm(positions - centroid.to_array(), axis=1)

        return BatchExtrema(
            min_grasp_distance=float(distances.min()),
            max_grasp_distance=float(distances.max()),
            min_translations=Point3D.from_array(positions.min(axis=0)),
            max_translations=Point3D.from_array(positions.max(axis=0)),
        )
