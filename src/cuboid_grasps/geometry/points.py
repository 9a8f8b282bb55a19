"""Define the Point3D class used for grasp positions, box corners, and suction voxel centers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from numpy.typing import NDArray


@dataclass(frozen=True)
class Point3D:
    """Cartesian coordinates (meters) w.r.t. some implicit reference frame."""

    x: float
    y: float
    z: float

    @classmethod
    def origin(cls) -> Point3D:
        return cls(0.0, 0.0, 0.0)

    @classmethod
    def from_array(cls, arr: NDArray[np.float64]) -> Point3D:
        """Read a point from a 3-vector, or from a homogeneous 4-vector whose last entry is dropped."""
        if arr.shape not in ((3,), (4,)):
            raise ValueError(f"Point3D needs a 3-vector or homogeneous 4-vector, got shape {arr.shape}")
        return cls(float(arr[0]), float(arr[1]), float(arr[2]))

    def to_array(self) -> NDArray[np.float64]:
        return np.array([self.x, self.y, self.z], dtype=np.float64)

    def to_homogeneous_array(self) -> NDArray[np.float64]:
        return np.append(self.to_array(), 1.0)

    def to_tuple(self) -> tuple[float, float, float]:
        return (float(self.x), float(self.y), float(self.z))

    def approx_equal(self, other: Point3D, rtol: float = 1e-05, atol: float = 1e-08) -> bool:
        return bool(np.allclose(self.to_array(), other.to_array(), rtol=rtol, atol=atol))
