"""Define scored grasp candidates and the assembler that emits them to a sink."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from cuboid_grasps.grasping.diagnostics import NullDiagnostics
from cuboid_grasps.grasping.gripper_profile import EndEffectorKind, OpeningWidthError
from cuboid_grasps.grasping.scoring import score_finger_grasp, score_suction_grasp

if TYPE_CHECKING:
    from collections.abc import Mapping

    import numpy as np
    from numpy.typing import NDArray

    from cuboid_grasps.grasping.batch_extrema import BatchExtrema
    from cuboid_grasps.grasping.diagnostics import DiagnosticsSink
    from cuboid_grasps.grasping.gripper_profile import GripperPosture, GripperProfile
    from cuboid_grasps.grasping.score_weights import ScoreWeights
    from cuboid_grasps.spatial import Pose3D

logger = logging.getLogger(__name__)

OPENING_FRACTIONS = (1.0, 0.5, 0.0)
"""Fractions of the feasible opening range at which each finger grasp pose is scored."""


@dataclass(frozen=True)
class ScoredCandidate:
    """A candidate grasp together with its quality and the data needed to execute it."""

    grasp_id: str
    grasp_pose: Pose3D
    """Pose of the generic grasp frame (z-axis pointing along the approach)."""

    eef_pose: Pose3D
    """Pose of the end effector's parent link when executing the grasp."""

    object_pose: Pose3D
    quality: float
    """Weighted combination of the per-criterion scores, in [0, 1]."""

    scores: Mapping[str, float]
    approach_direction: NDArray[np.float64]
    """Unit vector (end-effector parent frame) along which the gripper approaches."""

    approach_distance: float
    retreat_direction: NDArray[np.float64]
    retreat_distance: float
    kind: EndEffectorKind
    percent_open: float | None = None
    """Opening fraction used on approach (finger grasps only)."""

    pregrasp_posture: GripperPosture | None = None
    """Gripper posture used on approach (finger grasps only)."""


class CandidateSink(Protocol):
    """Receiver of emitted grasp candidates (a plain list satisfies this protocol)."""

    def append(self, candidate: ScoredCandidate) -> None: ...


@dataclass(frozen=True)
class ScoringContext:
    """Inputs shared by every candidate scored for one enumerated batch of grasp poses."""

    ideal_pose: Pose3D
    object_pose: Pose3D
    weights: ScoreWeights
    object_width: float = 0.0
    """Extent (m) of the object between the fingers (finger grasps only)."""

    extrema: BatchExtrema | None = None
    """Extrema of the enumerated batch (finger grasps only)."""

    top_pose: Pose3D | None = None
    """Pose of the grasped face's center (suction grasps only)."""

    object_size: NDArray[np.float64] | None = None
    """Extents (depth, width, height) of the grasped cuboid (suction grasps only)."""


class CandidateAssembler:
    """Turns enumerated grasp poses into scored candidates and forwards them to a sink.

    The assembler holds no candidate state; grasp IDs come from the sequence value passed in.
    """

    def __init__(self, profile: GripperProfile, diagnostics: DiagnosticsSink | None = None) -> None:
        """Initialize the assembler for the given end effector.

        :param profile: Gripper profile of the end effector being grasped with
        :param diagnostics: Optional receiver of emitted candidates and skipped variants
        """
        self.profile = profile
        self.diagnostics = diagnostics or NullDiagnostics()

    def emit(self, pose: Pose3D, context: ScoringContext, sink: CandidateSink, next_id: int) -> int:
        """Score a grasp pose and emit the resulting candidate(s) to the sink.

        Finger grasps produce one candidate per feasible opening fraction; a fraction the
            gripper cannot be opened to is skipped without affecting the others.

        :param pose: Enumerated grasp pose
        :param context: Inputs shared by the batch the pose belongs to
        :param sink: Receiver of the emitted candidates
        :param next_id: Sequence value used to name the next emitted candidate
        :return: Sequence value following the last emitted candidate
        """
        if self.profile.kind is EndEffectorKind.FINGER:
            return self._emit_finger(pose, context, sink, next_id)
        return self._emit_suction(pose, context, sink, next_id)

    def _emit_finger(self, pose: Pose3D, context: ScoringContext, sink: CandidateSink, next_id: int) -> int:
        if context.extrema is None:
            raise ValueError("Finger grasps cannot be scored without the batch extrema")

        min_open_width = context.object_width + 2.0 * self.profile.grasp_padding_on_approach
        for percent_open in OPENING_FRACTIONS:
            try:
                posture = self.profile.set_opening_width(percent_open, min_open_width)
            except OpeningWidthError as error:
                message = (
                    f"Skipping opening {percent_open:.1f} for object width {context.object_width:.4f} m "
                    f"(padding {self.profile.grasp_padding_on_approach:.4f} m): {error}"
                )
                logger.debug(message)
                self.diagnostics.on_event(message)
                continue

            quality, scores = score_finger_grasp(
                pose,
                context.ideal_pose,
                context.object_pose,
                context.extrema,
                percent_open,
                context.weights,
            )
            candidate = self._build(pose, context, next_id, quality, scores, percent_open, posture)
            self._forward(candidate, sink)
            next_id += 1

        return next_id

    def _emit_suction(self, pose: Pose3D, context: ScoringContext, sink: CandidateSink, next_id: int) -> int:
        if context.top_pose is None or context.object_size is None:
            raise ValueError("Suction grasps cannot be scored without the grasped face and object size")

        quality, scores = score_suction_grasp(
            pose,
            context.ideal_pose,
            self.profile,
            context.top_pose,
            context.object_size,
            context.weights,
        )
        self._forward(self._build(pose, context, next_id, quality, scores), sink)
        return next_id + 1

    def _build(
        self,
        pose: Pose3D,
        context: ScoringContext,
        next_id: int,
        quality: float,
        scores: dict[str, float],
        percent_open: float | None = None,
        posture: GripperPosture | None = None,
    ) -> ScoredCandidate:
        return ScoredCandidate(
            grasp_id=f"Grasp{next_id}",
            grasp_pose=pose,
            eef_pose=pose @ self.profile.grasp_pose_to_eef_pose,
            object_pose=context.object_pose,
            quality=quality,
            scores=scores,
            approach_direction=self.profile.approach_direction,
            approach_distance=self.profile.approach_distance,
            retreat_direction=self.profile.retreat_direction,
            retreat_distance=self.profile.retreat_distance,
            kind=self.profile.kind,
            percent_open=percent_open,
            pregrasp_posture=posture,
        )

    def _forward(self, candidate: ScoredCandidate, sink: CandidateSink) -> None:
        sink.append(candidate)
        self.diagnostics.on_candidate(candidate)
