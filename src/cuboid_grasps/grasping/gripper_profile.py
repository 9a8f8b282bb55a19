"""Define the read-only description of an end effector used to generate grasps."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

import numpy as np

from cuboid_grasps.geometry import Point3D
from cuboid_grasps.spatial import DEFAULT_FRAME, Pose3D

if TYPE_CHECKING:
    from numpy.typing import NDArray

FINGER_WIDTH_TOLERANCE_M = 1e-9
"""Tolerance (m) allowed when checking a commanded finger separation against its limits."""


class EndEffectorKind(Enum):
    """The closed set of end-effector families for which grasps are generated."""

    FINGER = "finger"
    SUCTION = "suction"


class OpeningWidthError(ValueError):
    """Raised when a finger gripper cannot be commanded to a requested opening width."""


@dataclass(frozen=True)
class GripperPosture:
    """Joint-level representation of a finger gripper commanded to some opening."""

    joint_names: tuple[str, ...]
    positions: tuple[float, ...]
    finger_separation_m: float
    """Distance (m) between the fingers in this posture."""

    percent_open: float
    """Fraction in [0, 1] of the feasible opening range used by this posture."""


@dataclass(frozen=True)
class SuctionVoxel:
    """One rectangular cell of a suction cup's active region, in the end-effector frame."""

    center: Point3D
    x_width: float
    y_width: float

    def _corner(self, x_sign: float, y_sign: float) -> Point3D:
        offset = np.array([x_sign * self.x_width / 2.0, y_sign * self.y_width / 2.0, 0.0])
        return Point3D.from_array(self.center.to_array() + offset)

    @property
    def top_left(self) -> Point3D:
        return self._corner(-1.0, 1.0)

    @property
    def top_right(self) -> Point3D:
        return self._corner(1.0, 1.0)

    @property
    def bottom_left(self) -> Point3D:
        return self._corner(-1.0, -1.0)

    @property
    def bottom_right(self) -> Point3D:
        return self._corner(1.0, -1.0)

    @property
    def corners(self) -> tuple[Point3D, Point3D, Point3D, Point3D]:
        """Retrieve the four corners of the voxel (counter-clockwise from bottom-left)."""
        return (self.bottom_left, self.bottom_right, self.top_right, self.top_left)


@dataclass(frozen=True)
class GripperProfile:
    """Geometric description of an end effector, read-only while grasps are generated.

    Lengths are in meters. Finger-specific fields are ignored for suction grippers and
        suction-specific fields are ignored for finger grippers.
    """

    kind: EndEffectorKind

    angle_resolution_deg: float
    """Generate rotated grasps at increments of this angle (degrees)."""

    grasp_resolution: float
    """Linear spacing (m) between neighboring grasps along a face."""

    grasp_depth_resolution: float
    """Spacing (m) between grasps generated at increasing depths."""

    grasp_min_depth: float
    """Minimum amount (m) the fingers (or suction cup) must overlap the object."""

    grasp_max_depth: float
    """Maximum distance (m) from the end-effector tip inward that an object can be grasped."""

    grasp_pose_to_eef_pose: Pose3D = field(default_factory=Pose3D.identity)
    """Static transform converting a generic grasp pose into this end effector's frame."""

    approach_distance_desired: float = 0.0
    """Approach distance (m) in addition to the maximum grasp depth."""

    retreat_distance_desired: float = 0.0
    """Retreat distance (m) in addition to the maximum grasp depth."""

    lift_distance_desired: float = 0.0
    """Distance (m) the object is lifted (along the reference frame's z-axis) after grasping."""

    grasp_padding_on_approach: float = 0.0
    """Clearance (m) added on each side of the object when opening the fingers to approach."""

    parent_link: str = ""
    """Last link in the kinematic chain before the end effector."""

    base_link: str = DEFAULT_FRAME
    """Global frame with z pointing up."""

    max_grasp_width: float = 0.0
    """Widest object extent (m) that the fingers can wrap around."""

    max_finger_width: float = 0.0
    """Finger separation (m) when the gripper is fully open."""

    min_finger_width: float = 0.0
    """Finger separation (m) when the gripper is fully closed."""

    gripper_finger_width: float = 0.0
    """Width (m) of one finger, used to keep grasps overlapping the object."""

    joint_names: tuple[str, ...] = ()
    open_joint_positions: tuple[float, ...] = ()
    closed_joint_positions: tuple[float, ...] = ()

    active_suction_range_x: float = 0.0
    """Extent (m) of the suction cup's active region along the end-effector x-axis."""

    active_suction_range_y: float = 0.0
    """Extent (m) of the suction cup's active region along the end-effector y-axis."""

    suction_regions_x: int = 1
    suction_regions_y: int = 1

    def __post_init__(self) -> None:
        """Validate the profile so that invalid values fail before any grasps are generated."""
        for name in ("angle_resolution_deg", "grasp_resolution", "grasp_depth_resolution"):
            value = getattr(self, name)
            if not value > 0:
                raise ValueError(f"Gripper profile {name} must be positive, got {value}")

        if self.grasp_min_depth < 0:
            raise ValueError(f"Minimum grasp depth cannot be negative, got {self.grasp_min_depth}")
        if self.grasp_max_depth < self.grasp_min_depth:
            raise ValueError(
                f"Maximum grasp depth {self.grasp_max_depth} is less than the "
                f"minimum grasp depth {self.grasp_min_depth}",
            )

        if self.kind is EndEffectorKind.FINGER:
            self._validate_finger_fields()
        else:
            self._validate_suction_fields()

    def _validate_finger_fields(self) -> None:
        if not self.max_grasp_width > 0:
            raise ValueError(f"Maximum grasp width must be positive, got {self.max_grasp_width}")
        if self.min_finger_width < 0 or self.max_finger_width <= self.min_finger_width:
            raise ValueError(
                f"Finger widths must satisfy 0 <= min < max, got min={self.min_finger_width}, "
                f"max={self.max_finger_width}",
            )
        if self.gripper_finger_width < 0:
            raise ValueError(f"Gripper finger width cannot be negative: {self.gripper_finger_width}")

        num_joints = len(self.joint_names)
        if len(self.open_joint_positions) != num_joints:
            raise ValueError(f"Expected {num_joints} open joint positions for {self.joint_names}")
        if len(self.closed_joint_positions) != num_joints:
            raise ValueError(f"Expected {num_joints} closed joint positions for {self.joint_names}")

    def _validate_suction_fields(self) -> None:
        if not (self.active_suction_range_x > 0 and self.active_suction_range_y > 0):
            raise ValueError(
                "Active suction range must be positive, got "
                f"({self.active_suction_range_x}, {self.active_suction_range_y})",
            )
        if self.suction_regions_x < 1 or self.suction_regions_y < 1:
            raise ValueError(
                "Suction voxel grid needs at least one region per axis, got "
                f"({self.suction_regions_x}, {self.suction_regions_y})",
            )

    @property
    def angle_resolution_rad(self) -> float:
        """Retrieve the angular resolution of generated grasps in radians."""
        return math.radians(self.angle_resolution_deg)

    @property
    def finger_depth(self) -> float:
        """Retrieve the range of depths (m) over which an object can be grasped."""
        return self.grasp_max_depth - self.grasp_min_depth

    @property
    def approach_direction(self) -> NDArray[np.float64]:
        """Unit vector (end-effector parent frame) along which the end effector approaches.

        Points from the end effector's frame toward the grasp frame. Defaults to +z (the
            approach axis of generated grasp poses) if the two frames coincide.
        """
        approach = -self.grasp_pose_to_eef_pose.position.to_array()
        norm = float(np.linalg.norm(approach))
        if norm == 0.0:
            return np.array([0.0, 0.0, 1.0])
        return approach / norm

    @property
    def retreat_direction(self) -> NDArray[np.float64]:
        """Unit vector along which the end effector retreats (opposite the approach)."""
        return -self.approach_direction

    @property
    def approach_distance(self) -> float:
        return self.grasp_max_depth + self.approach_distance_desired

    @property
    def retreat_distance(self) -> float:
        return self.grasp_max_depth + self.retreat_distance_desired

    def suction_region_dims(self, index_x: int, index_y: int) -> tuple[float, float]:
        """Retrieve the (x, y) dimensions (m) of one region of the suction voxel grid.

        :raises IndexError: If the region index lies outside the voxel grid
        """
        if not (0 <= index_x < self.suction_regions_x and 0 <= index_y < self.suction_regions_y):
            raise IndexError(
                f"Suction region ({index_x}, {index_y}) outside grid of "
                f"{self.suction_regions_x}x{self.suction_regions_y} regions",
            )
        return (
            self.active_suction_range_x / self.suction_regions_x,
            self.active_suction_range_y / self.suction_regions_y,
        )

    @property
    def suction_voxels(self) -> list[SuctionVoxel]:
        """Retrieve the cells of the suction cup's active region, row by row (y-major)."""
        voxels = []
        for iy in range(self.suction_regions_y):
            for ix in range(self.suction_regions_x):
                x_width, y_width = self.suction_region_dims(ix, iy)
                center_x = -self.active_suction_range_x / 2.0 + (ix + 0.5) * x_width
                center_y = -self.active_suction_range_y / 2.0 + (iy + 0.5) * y_width
                voxels.append(SuctionVoxel(Point3D(center_x, center_y, 0.0), x_width, y_width))
        return voxels

    def set_opening_width(self, percent_open: float, min_required_open_width: float) -> GripperPosture:
        """Compute the gripper posture opening the fingers to a fraction of their feasible range.

        The feasible range spans from the larger of the required and the closed finger
            separation, up to the fully open separation.

        :param percent_open: Fraction in [0, 1] of the feasible opening range
        :param min_required_open_width: Smallest finger separation (m) that clears the object
        :return: Posture with interpolated joint positions and the resulting finger separation
        :raises OpeningWidthError: If the requested opening cannot be commanded
        """
        if not 0.0 <= percent_open <= 1.0:
            raise OpeningWidthError(f"Percent open must be within [0, 1], got {percent_open}")

        min_width_adjusted = max(min_required_open_width, self.min_finger_width)
        separation = min_width_adjusted + (self.max_finger_width - min_width_adjusted) * percent_open

        if (
            separation > self.max_finger_width + FINGER_WIDTH_TOLERANCE_M
            or separation < self.min_finger_width - FINGER_WIDTH_TOLERANCE_M
        ):
            raise OpeningWidthError(
                f"Finger separation {separation:.4f} m is outside of the gripper's limits "
                f"[{self.min_finger_width:.4f}, {self.max_finger_width:.4f}] m",
            )

        fraction = (separation - self.min_finger_width) / (self.max_finger_width - self.min_finger_width)
        closed = np.array(self.closed_joint_positions, dtype=float)
        opened = np.array(self.open_joint_positions, dtype=float)
        positions = closed + fraction * (opened - closed)

        return GripperPosture(
            joint_names=self.joint_names,
            positions=tuple(float(p) for p in positions),
            finger_separation_m=separation,
            percent_open=percent_open,
        )
