"""Rigid poses of cuboids, grasps, and end effectors, plus the helper composing grasp poses."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Tuple, TypeVar

import numpy as np

from cuboid_grasps.geometry.points import Point3D
from cuboid_grasps.spatial.frames import DEFAULT_FRAME
from cuboid_grasps.spatial.rotations import Axis, Quaternion

if TYPE_CHECKING:
    from collections.abc import Sequence

    from numpy.typing import NDArray

TransformedT = TypeVar("TransformedT", "Pose3D", Point3D)

XYZ_RPY = Tuple[float, float, float, float, float, float]
"""Position (x, y, z) followed by fixed-frame (roll, pitch, yaw) angles in radians."""

AxisRotation = Tuple[Axis, float]
"""An angle (radians) to rotate by about one local axis of the frame being composed."""


@dataclass(frozen=True)
class Pose3D:
    """Position and orientation of a frame, expressed w.r.t. the named reference frame."""

    position: Point3D
    orientation: Quaternion
    ref_frame: str = DEFAULT_FRAME

    def __matmul__(self, other: TransformedT) -> TransformedT:
        """Map a pose or point given in this pose's frame into this pose's reference frame.

        Chaining follows the frame names: pose_a_b @ pose_b_c yields pose_a_c, so the result
            keeps the reference frame of the left operand.
        """
        transform = self.to_homogeneous_matrix()
        if isinstance(other, Pose3D):
            return Pose3D.from_homogeneous_matrix(transform @ other.to_homogeneous_matrix(), self.ref_frame)
        if isinstance(other, Point3D):
            return Point3D.from_array(transform @ other.to_homogeneous_array())
        raise NotImplementedError(f"Pose3D cannot transform an object of type {type(other).__name__}")

    @classmethod
    def identity(cls, ref_frame: str = DEFAULT_FRAME) -> Pose3D:
        return cls(Point3D.origin(), Quaternion.identity(), ref_frame)

    @classmethod
    def from_xyz_rpy(
        cls,
        x: float = 0.0,
        y: float = 0.0,
        z: float = 0.0,
        roll_rad: float = 0.0,
        pitch_rad: float = 0.0,
        yaw_rad: float = 0.0,
        ref_frame: str = DEFAULT_FRAME,
    ) -> Pose3D:
        """Build a pose from its position and fixed-frame roll, pitch, and yaw (radians)."""
        return cls(Point3D(x, y, z), Quaternion.from_rpy(roll_rad, pitch_rad, yaw_rad), ref_frame)

    def to_xyz_rpy(self) -> XYZ_RPY:
        return (*self.position.to_tuple(), *self.orientation.to_rpy())

    @classmethod
    def from_sequence(cls, data: XYZ_RPY | Sequence[float], ref_frame: str = DEFAULT_FRAME) -> Pose3D:
        """Build a pose from six values ordered as (x, y, z, roll, pitch, yaw).

        :raises ValueError: If the sequence does not hold exactly six values
        """
        if len(data) != 6:
            raise ValueError(f"A pose needs 6 values (x, y, z, roll, pitch, yaw), got length {len(data)}.")
        return cls.from_xyz_rpy(*(float(value) for value in data), ref_frame=ref_frame)

    @classmethod
    def from_homogeneous_matrix(cls, matrix: NDArray[np.float64], ref_frame: str = DEFAULT_FRAME) -> Pose3D:
        if matrix.shape != (4, 4):
            raise ValueError(f"Expected a 4x4 transform, got an array of shape {matrix.shape}")
        return cls(Point3D.from_array(matrix[:3, 3]), Quaternion.from_homogeneous_matrix(matrix), ref_frame)

    def to_homogeneous_matrix(self) -> NDArray[np.float64]:
        matrix = self.orientation.to_homogeneous_matrix()
        matrix[:3, 3] = self.position.to_array()
        return matrix

    @classmethod
    def from_yaml_data(cls, pose_data: dict | list | tuple, default_frame: str = DEFAULT_FRAME) -> Pose3D:
        """Build a pose from YAML data, either a bare XYZ-RPY list or an ``{xyz_rpy, frame}`` mapping.

        :param pose_data: Pose loaded from YAML
        :param default_frame: Reference frame used when the data names none
        :return: Pose described by the data
        :raises TypeError: If the data is neither a mapping nor a sequence
        """
        if isinstance(pose_data, dict):
            return cls.from_sequence(pose_data["xyz_rpy"], pose_data["frame"])
        if isinstance(pose_data, (list, tuple)):
            return cls.from_sequence(pose_data, default_frame)
        raise TypeError(f"Pose data must be a mapping or a sequence, not {type(pose_data).__name__}")

    def to_yaml_data(self) -> dict[str, Any]:
        return {"xyz_rpy": list(self.to_xyz_rpy()), "frame": self.ref_frame}

    def axis_direction(self, axis: Axis) -> NDArray[np.float64]:
        """Direction of one of this pose's local axes, in its reference frame."""
        return self.orientation.axis_direction(axis)

    def translated(self, offset: Sequence[float] | NDArray[np.float64]) -> Pose3D:
        """Move the pose by an offset given in its reference frame; the orientation is unchanged."""
        moved = self.position.to_array() + np.asarray(offset, dtype=float)
        return Pose3D(Point3D.from_array(moved), self.orientation, self.ref_frame)

    def inverse(self, pose_frame: str) -> Pose3D:
        """Invert the transform: the result locates this pose's reference frame within ``pose_frame``.

        :param pose_frame: Name of the frame that this pose describes
        """
        return Pose3D.from_homogeneous_matrix(np.linalg.inv(self.to_homogeneous_matrix()), pose_frame)

    def approx_equal(self, other: Pose3D, rtol: float = 1e-05, atol: float = 1e-08) -> bool:
        if self.ref_frame != other.ref_frame:
            return False
        return self.position.approx_equal(other.position, rtol=rtol, atol=atol) and self.orientation.approx_equal(
            other.orientation, rtol=rtol, atol=atol
        )


def compose_pose(
    base: Pose3D,
    rotations: Sequence[AxisRotation] = (),
    translation: Sequence[float] | NDArray[np.float64] = (0.0, 0.0, 0.0),
) -> Pose3D:
    """Compose a pose from a base pose, a sequence of axis rotations, then a translation.

    Rotations are applied in order about the axes of the current (already rotated) frame.
    The translation is then applied in the fully rotated frame. With no rotations, the
        orientation of the base pose is carried over unchanged.

    :param base: Pose from which the new pose is composed
    :param rotations: Sequence of (axis, angle in radians) rotations applied in order
    :param translation: Offset (x, y, z) expressed in the rotated frame
    :return: Newly composed pose, sharing the reference frame of the base pose
    """
    pose = base
    for axis, angle_rad in rotations:
        rotation = Pose3D(Point3D.origin(), Quaternion.from_axis_angle(axis, angle_rad))
        pose = pose @ rotation

    offset = np.asarray(translation, dtype=float)
    if not np.any(offset):
        return pose

    position = pose @ Point3D.from_array(offset)
    return Pose3D(position, pose.orientation, pose.ref_frame)
