"""Define the grasp generator, which dispatches grasp enumeration and scoring per end effector."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from cuboid_grasps.grasping.batch_extrema import BatchExtrema
from cuboid_grasps.grasping.candidate_config import GraspCandidateConfig
from cuboid_grasps.grasping.candidates import CandidateAssembler, ScoringContext
from cuboid_grasps.grasping.diagnostics import NullDiagnostics
from cuboid_grasps.grasping.finger_enumeration import enumerate_axis_poses
from cuboid_grasps.grasping.grasp_axes import GraspAxis
from cuboid_grasps.grasping.gripper_profile import EndEffectorKind
from cuboid_grasps.grasping.score_weights import ScoreWeights
from cuboid_grasps.grasping.suction_enumeration import enumerate_suction_poses, top_face_pose
from cuboid_grasps.io.logging import console
from cuboid_grasps.spatial import Axis, Pose3D, Quaternion

if TYPE_CHECKING:
    from collections.abc import Sequence

    from cuboid_grasps.geometry import Cuboid
    from cuboid_grasps.grasping.candidates import CandidateSink
    from cuboid_grasps.grasping.diagnostics import DiagnosticsSink
    from cuboid_grasps.grasping.gripper_profile import GripperProfile

logger = logging.getLogger(__name__)


class GraspGenerator:
    """Generates scored grasp candidates around cuboids for finger and suction grippers."""

    def __init__(
        self,
        weights: ScoreWeights | None = None,
        ideal_pose: Pose3D | None = None,
        diagnostics: DiagnosticsSink | None = None,
    ) -> None:
        """Initialize the generator with its scoring preferences.

        :param weights: Weights combining per-criterion scores (defaults to uniform weights)
        :param ideal_pose: Pose whose orientation is the ideal grasp orientation (defaults to identity)
        :param diagnostics: Optional receiver of intermediate results
        """
        self.weights = weights or ScoreWeights()
        self.ideal_pose = ideal_pose or Pose3D.identity()
        self.diagnostics = diagnostics or NullDiagnostics()

    def set_ideal_grasp_pose_rpy(self, rpy: Sequence[float]) -> None:
        """Set the orientation of the ideal grasp from rotations about its x-, y-, then z-axes.

        Only the orientation of the ideal grasp pose is replaced; its position is kept.

        :param rpy: Rotations (radians) applied in order about the rotating x-, y-, and z-axes
        :raises ValueError: If the sequence does not hold exactly three angles
        """
        if len(rpy) != 3:
            raise ValueError(f"Expected three (roll, pitch, yaw) angles but received {len(rpy)}")

        orientation = Quaternion.identity()
        for axis, angle in zip((Axis.X, Axis.Y, Axis.Z), rpy):
            orientation = orientation * Quaternion.from_axis_angle(axis, angle)

        self.ideal_pose = Pose3D(self.ideal_pose.position, orientation, self.ideal_pose.ref_frame)

    def generate_grasps(
        self,
        cuboid: Cuboid,
        profile: GripperProfile,
        sink: CandidateSink,
        config: GraspCandidateConfig | None = None,
    ) -> int:
        """Generate scored grasp candidates around a cuboid and emit them to the sink.

        :param cuboid: Cuboid to be grasped
        :param profile: Profile of the end effector performing the grasp
        :param sink: Receiver of the emitted candidates (e.g., a list)
        :param config: Grasp types and axes to generate (finger grippers only; defaults to all)
        :return: Number of candidates emitted
        :raises ValueError: If the score weights cannot be normalized for the end effector
        """
        self.weights.validate_for(profile.kind)
        config = config or GraspCandidateConfig()

        if profile.kind is EndEffectorKind.FINGER:
            num_emitted = self._generate_finger_grasps(cuboid, profile, sink, config)
        else:
            num_emitted = self._generate_suction_grasps(cuboid, profile, sink)

        if num_emitted == 0:
            message = "Generated 0 grasps"
            logger.warning(message)
            self.diagnostics.on_event(message)
        else:
            logger.info("Generated %d grasps", num_emitted)

        return num_emitted

    def _generate_finger_grasps(
        self,
        cuboid: Cuboid,
        profile: GripperProfile,
        sink: CandidateSink,
        config: GraspCandidateConfig,
    ) -> int:
        """Generate finger grasps around each enabled principal axis of the cuboid."""
        axis_toggles = (
            (GraspAxis.X, config.generate_x_axis_grasps),
            (GraspAxis.Y, config.generate_y_axis_grasps),
            (GraspAxis.Z, config.generate_z_axis_grasps),
        )

        num_emitted = 0
        for axis, enabled in axis_toggles:
            if not enabled:
                continue

            logger.debug("Generating grasps around %s-axis of cuboid", axis.value)
            object_width = cuboid.extent_along(axis.layout.c_axis)
            axis_config = config
            if object_width > profile.max_grasp_width:
                axis_config = config.restrict_to_wide_object()

            poses = enumerate_axis_poses(cuboid, axis, profile, axis_config, self.diagnostics)
            if not poses:
                continue

            context = ScoringContext(
                ideal_pose=self.ideal_pose,
                object_pose=cuboid.pose,
                weights=self.weights,
                object_width=object_width,
                extrema=BatchExtrema.from_poses(poses, cuboid.centroid),
            )
            num_emitted += self._emit_all(poses, profile, context, sink, next_id=num_emitted)

        return num_emitted

    def _generate_suction_grasps(self, cuboid: Cuboid, profile: GripperProfile, sink: CandidateSink) -> int:
        """Generate suction grasps over the top face of the cuboid."""
        top_pose = top_face_pose(cuboid)
        ideal_on_top = Pose3D(top_pose.position, self.ideal_pose.orientation, top_pose.ref_frame)

        poses = enumerate_suction_poses(cuboid, profile, ideal_on_top, self.diagnostics)
        context = ScoringContext(
            ideal_pose=ideal_on_top,
            object_pose=top_pose,
            weights=self.weights,
            top_pose=top_pose,
            object_size=cuboid.size,
        )
        return self._emit_all(poses, profile, context, sink, next_id=0)

    def _emit_all(
        self,
        poses: Sequence[Pose3D],
        profile: GripperProfile,
        context: ScoringContext,
        sink: CandidateSink,
        next_id: int,
    ) -> int:
        """Score every pose of a batch and emit its candidates, returning the number emitted."""
        assembler = CandidateAssembler(profile, self.diagnostics)
        first_id = next_id
        num_poses_added = 0
        for pose in poses:
            following_id = assembler.emit(pose, context, sink, next_id)
            if following_id > next_id:
                num_poses_added += 1
            next_id = following_id

        console.print(f"[cyan]added {num_poses_added} of {len(poses)} grasp poses created[/]")
        return next_id - first_id
