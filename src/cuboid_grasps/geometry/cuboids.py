"""Define a class to represent cuboids, the box abstraction of graspable objects."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from cuboid_grasps.geometry.points import Point3D

if TYPE_CHECKING:
    from numpy.typing import NDArray

    from cuboid_grasps.spatial.poses import Pose3D
    from cuboid_grasps.spatial.rotations import Axis


@dataclass(frozen=True)
class Cuboid:
    """A rectangular box with a centroid pose and extents along its local axes (in meters)."""

    pose: Pose3D
    """Pose of the cuboid's centroid (its local frame) w.r.t. the reference frame."""

    depth: float
    """Extent (m) along the cuboid's local x-axis."""

    width: float
    """Extent (m) along the cuboid's local y-axis."""

    height: float
    """Extent (m) along the cuboid's local z-axis."""

    def __post_init__(self) -> None:
        """Verify that the cuboid has strictly positive extents."""
        for name, extent in (("depth", self.depth), ("width", self.width), ("height", self.height)):
            if not extent > 0:
                raise ValueError(f"Cuboid {name} must be positive, got {extent}")

    @property
    def centroid(self) -> Point3D:
        """Retrieve the position of the cuboid's centroid in the reference frame."""
        return self.pose.position

    @property
    def size(self) -> NDArray[np.float64]:
        """Retrieve the (depth, width, height) extents of the cuboid as an array."""
        return np.array([self.depth, self.width, self.height], dtype=np.float64)

    @property
    def half_extents(self) -> NDArray[np.float64]:
        """Retrieve half of each extent of the cuboid, i.e., its local AABB bounds."""
        return self.size / 2.0

    def extent_along(self, axis: Axis) -> float:
        """Retrieve the extent (m) of the cuboid along one of its local axes."""
        return float(self.size[axis.value])

    def contains(self, point: Point3D) -> bool:
        """Evaluate whether a point (w.r.t. the reference frame) lies inside the cuboid."""
        local = self.pose.inverse("cuboid") @ point
        return bool(np.all(np.abs(local.to_array()) <= self.half_extents))
