"""Define the named weights used to combine per-criterion grasp scores."""

from __future__ import annotations

from dataclasses import asdict, dataclass

from cuboid_grasps.grasping.gripper_profile import EndEffectorKind

FINGER_CRITERIA = (
    "width",
    "orientation_x",
    "orientation_y",
    "orientation_z",
    "depth",
    "translation_x",
    "translation_y",
    "translation_z",
)
"""Names of the criteria combined into the score of a finger grasp."""

SUCTION_CRITERIA = (
    "orientation_x",
    "orientation_y",
    "orientation_z",
    "translation_x",
    "translation_y",
    "translation_z",
    "overhang_x",
    "overhang_y",
)
"""Names of the criteria combined into the score of a suction grasp."""


@dataclass(frozen=True)
class ScoreWeights:
    """Non-negative weights of each scoring criterion."""

    orientation_x: float = 1.0
    orientation_y: float = 1.0
    orientation_z: float = 1.0
    translation_x: float = 1.0
    translation_y: float = 1.0
    translation_z: float = 1.0
    width: float = 1.0
    depth: float = 1.0
    """Weight of the grasp's distance to the palm (finger grippers)."""

    overhang: float = 1.0
    """Weight shared by the x and y overhang criteria (suction grippers)."""

    def __post_init__(self) -> None:
        """Verify that no weight is negative."""
        for name, weight in asdict(self).items():
            if weight < 0:
                raise ValueError(f"Score weight '{name}' cannot be negative, got {weight}")

    def weight_of(self, criterion: str) -> float:
        """Retrieve the weight of a named scoring criterion.

        :param criterion: Name of a criterion (e.g., "orientation_x" or "overhang_y")
        :return: Weight applied to the criterion's score
        :raises KeyError: If the criterion is unknown
        """
        if criterion in ("overhang_x", "overhang_y"):
            return self.overhang

        weights = asdict(self)
        if criterion not in weights:
            raise KeyError(f"Unknown scoring criterion: '{criterion}'")
        return weights[criterion]

    def criteria_for(self, kind: EndEffectorKind) -> tuple[str, ...]:
        """Retrieve the names of the criteria scored for the given end-effector kind."""
        return FINGER_CRITERIA if kind is EndEffectorKind.FINGER else SUCTION_CRITERIA

    def validate_for(self, kind: EndEffectorKind) -> None:
        """Verify that the weights can normalize the combined score of the given kind of grasp.

        :raises ValueError: If every weight used by the end-effector kind is zero
        """
        total = sum(self.weight_of(c) for c in self.criteria_for(kind))
        if total == 0:
            raise ValueError(f"All score weights used for {kind.value} grasps are zero")
