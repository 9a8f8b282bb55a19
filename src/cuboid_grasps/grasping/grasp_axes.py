"""Define the principal cuboid axes around which finger grasps are generated."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

from cuboid_grasps.spatial import Axis


@dataclass(frozen=True)
class EdgeSigns:
    """Signs selecting which cuboid edges (and which tilt) edge grasps use for one axis."""

    a_sign: float
    b_sign: float
    a_rot_sign: float
    b_rot_sign: float


@dataclass(frozen=True)
class AxisLayout:
    """Roles played by the cuboid's local axes when grasping around one principal axis.

    Grasps are laid out on the face spanned by the a- and b-axes; the fingers close along
        the c-axis, so the object's extent along c is the width the fingers must span.
    """

    a_axis: Axis
    b_axis: Axis
    c_axis: Axis
    seed_rotations_rad: tuple[float, float, float]
    """Rotations about the x-, y-, then z-axes aligning a grasp frame with the c-axis."""

    edge_signs: EdgeSigns


class GraspAxis(Enum):
    """A principal axis of a cuboid around which finger grasps are generated."""

    X = "x"
    Y = "y"
    Z = "z"

    @property
    def layout(self) -> AxisLayout:
        """Retrieve the layout of face axes and seed rotations for this grasp axis."""
        return AXIS_LAYOUTS[self]


AXIS_LAYOUTS: dict[GraspAxis, AxisLayout] = {
    GraspAxis.X: AxisLayout(
        a_axis=Axis.Y,
        b_axis=Axis.Z,
        c_axis=Axis.X,
        seed_rotations_rad=(-math.pi / 2.0, 0.0, -math.pi / 2.0),
        edge_signs=EdgeSigns(a_sign=1.0, b_sign=1.0, a_rot_sign=1.0, b_rot_sign=1.0),
    ),
    GraspAxis.Y: AxisLayout(
        a_axis=Axis.X,
        b_axis=Axis.Z,
        c_axis=Axis.Y,
        seed_rotations_rad=(0.0, math.pi / 2.0, math.pi),
        edge_signs=EdgeSigns(a_sign=-1.0, b_sign=1.0, a_rot_sign=1.0, b_rot_sign=-1.0),
    ),
    GraspAxis.Z: AxisLayout(
        a_axis=Axis.X,
        b_axis=Axis.Y,
        c_axis=Axis.Z,
        seed_rotations_rad=(math.pi / 2.0, math.pi / 2.0, 0.0),
        edge_signs=EdgeSigns(a_sign=-1.0, b_sign=-1.0, a_rot_sign=-1.0, b_rot_sign=-1.0),
    ),
}
