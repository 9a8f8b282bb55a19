"""Orientations of grasp and end-effector frames, stored as unit quaternions."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Tuple

import numpy as np
from pyquaternion import Quaternion as Q
from trimesh.transformations import euler_from_quaternion, quaternion_from_euler, quaternion_from_matrix, quaternion_matrix

if TYPE_CHECKING:
    from collections.abc import Sequence

    from numpy.typing import NDArray

RPY = Tuple[float, float, float]
"""Fixed-frame (roll, pitch, yaw) angles in radians."""

_EULER_AXES = "sxyz"


class Axis(Enum):
    """Local axis of a frame, indexed like the columns of its rotation matrix."""

    X = 0
    Y = 1
    Z = 2

    @property
    def unit_vector(self) -> NDArray[np.float64]:
        return np.eye(3)[self.value]


@dataclass(frozen=True)
class Quaternion:
    """A unit quaternion (x, y, z, w); the components are normalized on construction."""

    x: float
    y: float
    z: float
    w: float

    def __post_init__(self) -> None:
        components = np.array([self.x, self.y, self.z, self.w], dtype=float)
        norm = float(np.linalg.norm(components))
        if norm == 0:
            raise ValueError(f"A zero quaternion has no orientation: {self}")
        for name, value in zip("xyzw", components / norm):
            object.__setattr__(self, name, float(value))

    def __mul__(self, other: Quaternion) -> Quaternion:
        """Chain two orientations; ``a * b`` applies ``b`` within the frame rotated by ``a``."""
        if not isinstance(other, Quaternion):
            raise TypeError(f"Quaternion cannot be multiplied by {type(other).__name__}")
        return Quaternion._from_pyquaternion(self._to_pyquaternion() * other._to_pyquaternion())

    def _to_pyquaternion(self) -> Q:
        return Q(self.w, self.x, self.y, self.z)

    @staticmethod
    def _from_pyquaternion(q: Q) -> Quaternion:
        return Quaternion(q.x, q.y, q.z, q.w)

    @classmethod
    def identity(cls) -> Quaternion:
        return cls(0.0, 0.0, 0.0, 1.0)

    @classmethod
    def from_axis_angle(cls, axis: Axis | Sequence[float], angle_rad: float) -> Quaternion:
        """Build the right-handed rotation by an angle about an axis.

        :param axis: Local axis, or an arbitrary 3-vector, to rotate about
        :param angle_rad: Rotation angle (radians)
        :return: Quaternion for the rotation
        """
        direction = axis.unit_vector if isinstance(axis, Axis) else np.asarray(axis, dtype=float)
        return cls._from_pyquaternion(Q(axis=direction, angle=angle_rad))

    @classmethod
    def from_rpy(cls, roll_rad: float, pitch_rad: float, yaw_rad: float) -> Quaternion:
        """Build an orientation from fixed-frame roll, pitch, and yaw angles."""
        w, x, y, z = quaternion_from_euler(roll_rad, pitch_rad, yaw_rad, axes=_EULER_AXES)
        return cls(float(x), float(y), float(z), float(w))

    def to_rpy(self) -> RPY:
        roll, pitch, yaw = euler_from_quaternion([self.w, self.x, self.y, self.z], axes=_EULER_AXES)
        return (float(roll), float(pitch), float(yaw))

    @classmethod
    def from_homogeneous_matrix(cls, matrix: NDArray[np.float64]) -> Quaternion:
        """Extract the rotation from a 4x4 transform; trimesh orders quaternions as (w, x, y, z)."""
        if matrix.shape != (4, 4):
            raise ValueError(f"Expected a 4x4 transform, got an array of shape {matrix.shape}")
        w, x, y, z = quaternion_from_matrix(matrix)
        return cls(float(x), float(y), float(z), float(w))

    def to_homogeneous_matrix(self) -> NDArray[np.float64]:
        return quaternion_matrix([self.w, self.x, self.y, self.z])

    def to_rotation_matrix(self) -> NDArray[np.float64]:
        return self.to_homogeneous_matrix()[:3, :3]

    def to_array(self) -> NDArray[np.float64]:
        return np.array([self.x, self.y, self.z, self.w])

    def rotate_vector(self, vector: Sequence[float] | NDArray[np.float64]) -> NDArray[np.float64]:
        """Express a vector given in the rotated frame in the unrotated frame."""
        return self.to_rotation_matrix() @ np.asarray(vector, dtype=float)

    def axis_direction(self, axis: Axis) -> NDArray[np.float64]:
        """Direction of one rotated axis, as seen from the unrotated frame."""
        return self.to_rotation_matrix()[:, axis.value]

    def approx_equal(self, other: Quaternion, rtol: float = 1e-05, atol: float = 1e-08) -> bool:
        """Compare orientations, treating q and -q as the same rotation."""
        mine = self.to_array()
        theirs = other.to_array()
        return bool(
            np.allclose(mine, theirs, rtol=rtol, atol=atol) or np.allclose(-mine, theirs, rtol=rtol, atol=atol)
        )
