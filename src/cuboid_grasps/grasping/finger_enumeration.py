"""Enumerate candidate finger grasp poses around one principal axis of a cuboid.

Poses are generated in a fixed sequence of stages, each appending to one ordered list:

    corner -> face -> variable angle -> edge -> depth -> bidirectional

Later stages read every pose produced by the earlier ones, so the order of the stages (and
    of the poses within each stage) determines the final, reproducible list of poses.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from cuboid_grasps.geometry import segment_intersects_cuboid
from cuboid_grasps.grasping.diagnostics import NullDiagnostics
from cuboid_grasps.spatial import Axis, compose_pose

if TYPE_CHECKING:
    from collections.abc import Sequence

    from numpy.typing import NDArray

    from cuboid_grasps.geometry import Cuboid
    from cuboid_grasps.grasping.candidate_config import GraspCandidateConfig
    from cuboid_grasps.grasping.diagnostics import DiagnosticsSink
    from cuboid_grasps.grasping.grasp_axes import AxisLayout, GraspAxis
    from cuboid_grasps.grasping.gripper_profile import GripperProfile
    from cuboid_grasps.spatial import AxisRotation, Pose3D

logger = logging.getLogger(__name__)

PALM_OFFSET_M = 0.001
"""Distance (m) the palm is backed off from the object for poses on its boundary."""

COUNT_TOLERANCE = 1e-9
"""Slack allowed when rounding ratios of lengths into grasp counts."""

DEGENERATE_FACE_GRASP_COUNT = 3
"""Number of face grasps (top/center/bottom) used when the object is narrower than a finger."""


def robust_floor(value: float) -> int:
    """Round down, treating values within tolerance below an integer as that integer."""
    return math.floor(value + COUNT_TOLERANCE)


def robust_ceil(value: float) -> int:
    """Round up, treating values within tolerance above an integer as that integer."""
    return math.ceil(value - COUNT_TOLERANCE)


def num_radial_grasps(angle_resolution_rad: float) -> int:
    """Compute the number of radial grasps swept around each corner of a face (at least 1)."""
    return max(1, robust_ceil((math.pi / 2.0) / angle_resolution_rad))


def num_grasps_along(length: float, finger_width: float, resolution: float) -> int:
    """Compute the number of face grasps laid out along an edge of the given length.

    If the object is narrower than the finger, three grasps are used instead, aligning the
        finger with the top, center, and bottom of the object.
    """
    count = robust_floor((length - finger_width) / resolution) + 1
    return count if count > 0 else DEGENERATE_FACE_GRASP_COUNT


def grasp_spacing(length: float, finger_width: float, num_grasps: int) -> float:
    """Compute the spacing between consecutive face grasps so that they span (length - finger)."""
    if num_grasps == 1:
        return 0.0
    return (length - finger_width) / (num_grasps - 1)


def num_depth_grasps(finger_depth: float, depth_resolution: float) -> int:
    """Compute the number of deeper copies made of each pose (at least 1)."""
    return max(1, robust_ceil(finger_depth / depth_resolution))


def max_variable_angle_steps(angle_resolution_rad: float) -> int:
    """Compute the iteration ceiling of one variable-angle sweep."""
    return robust_ceil(math.pi / angle_resolution_rad) + 1


@dataclass(frozen=True)
class FaceFrame:
    """Lengths and reference-frame directions of the cuboid's a/b/c axes for one grasp axis."""

    length_a: float
    length_b: float
    length_c: float
    a_dir: NDArray[np.float64]
    b_dir: NDArray[np.float64]
    c_dir: NDArray[np.float64]
    seed_rotations: tuple[AxisRotation, ...]

    @classmethod
    def from_layout(cls, cuboid: Cuboid, layout: AxisLayout) -> FaceFrame:
        """Resolve an axis layout against a specific cuboid."""
        ax, ay, az = layout.seed_rotations_rad
        return FaceFrame(
            length_a=cuboid.extent_along(layout.a_axis),
            length_b=cuboid.extent_along(layout.b_axis),
            length_c=cuboid.extent_along(layout.c_axis),
            a_dir=_unit(cuboid.pose.axis_direction(layout.a_axis)),
            b_dir=_unit(cuboid.pose.axis_direction(layout.b_axis)),
            c_dir=_unit(cuboid.pose.axis_direction(layout.c_axis)),
            seed_rotations=((Axis.X, ax), (Axis.Y, ay), (Axis.Z, az)),
        )


@dataclass(frozen=True)
class FaceLine:
    """A row of evenly spaced grasps along one edge of the grasped face."""

    origin: NDArray[np.float64]
    """Offset (reference frame) from the cuboid centroid to the first grasp."""

    step: NDArray[np.float64]
    """Offset (reference frame) between consecutive grasps."""

    count: int
    alignment_rad: float
    """Rotation about the grasp's y-axis turning it toward this edge."""

    tilt_rad: float = 0.0
    """Rotation about the grasp's x-axis tilting it toward a cuboid edge (edge grasps only)."""


def _unit(vector: NDArray[np.float64]) -> NDArray[np.float64]:
    return vector / np.linalg.norm(vector)


def _line_poses(cuboid_pose: Pose3D, frame: FaceFrame, line: FaceLine) -> list[Pose3D]:
    """Lay out the poses of one face line; all of them share a single orientation."""
    rotations = (*frame.seed_rotations, (Axis.Y, line.alignment_rad))
    if line.tilt_rad:
        rotations = (*rotations, (Axis.X, line.tilt_rad))
    seed = compose_pose(cuboid_pose, rotations)
    return [seed.translated(line.origin + i * line.step) for i in range(line.count)]


def corner_poses(cuboid: Cuboid, frame: FaceFrame, num_radial: int) -> list[Pose3D]:
    """Generate grasps swept radially around the four corners of the face.

    :param cuboid: Cuboid being grasped
    :param frame: Face axes and seed rotations for the current grasp axis
    :param num_radial: Number of radial grasps per corner
    :return: 4 * num_radial poses, corner by corner
    """
    half_a = 0.5 * (frame.length_a + PALM_OFFSET_M) * frame.a_dir
    half_b = 0.5 * (frame.length_b + PALM_OFFSET_M) * frame.b_dir
    corners = (
        (-half_a - half_b, 0.0),
        (-half_a + half_b, -math.pi / 2.0),
        (half_a + half_b, math.pi),
        (half_a - half_b, math.pi / 2.0),
    )
    delta_angle = (math.pi / 2.0) / (num_radial + 1)

    poses = []
    for translation, corner_rotation in corners:
        rotations = (*frame.seed_rotations, (Axis.Y, corner_rotation))
        seed = compose_pose(cuboid.pose.translated(translation), rotations)
        poses.extend(compose_pose(seed, [(Axis.Y, i * delta_angle)]) for i in range(1, num_radial + 1))
    return poses


def _face_lines(frame: FaceFrame, finger_width: float, resolution: float) -> list[FaceLine]:
    """Compute the four lines of face grasps, one per edge of the face (before edge offsets)."""
    n_a = num_grasps_along(frame.length_a, finger_width, resolution)
    n_b = num_grasps_along(frame.length_b, finger_width, resolution)
    delta_a = grasp_spacing(frame.length_a, finger_width, n_a)
    delta_b = grasp_spacing(frame.length_b, finger_width, n_b)
    logger.debug("delta_a : delta_b = %f : %f", delta_a, delta_b)
    logger.debug("num_grasps_along_a : num_grasps_along_b = %d : %d", n_a, n_b)

    start_a = -0.5 * (frame.length_a - finger_width) * frame.a_dir
    start_b = -0.5 * (frame.length_b - finger_width) * frame.b_dir
    face_a = 0.5 * (frame.length_a + PALM_OFFSET_M) * frame.a_dir
    face_b = 0.5 * (frame.length_b + PALM_OFFSET_M) * frame.b_dir

    return [
        FaceLine(-face_a + start_b, delta_b * frame.b_dir, n_b, 0.0),  # -a face, sweeping +b
        FaceLine(face_b - start_a, -delta_a * frame.a_dir, n_a, -math.pi / 2.0),  # +b face, sweeping -a
        FaceLine(face_a - start_b, -delta_b * frame.b_dir, n_b, math.pi),  # +a face, sweeping -b
        FaceLine(-face_b + start_a, delta_a * frame.a_dir, n_a, math.pi / 2.0),  # -b face, sweeping +a
    ]


def face_poses(cuboid: Cuboid, frame: FaceFrame, finger_width: float, resolution: float) -> list[Pose3D]:
    """Generate axis-aligned grasps along the four edges of the face."""
    poses = []
    for line in _face_lines(frame, finger_width, resolution):
        poses.extend(_line_poses(cuboid.pose, frame, line))
    return poses


def edge_poses(
    cuboid: Cuboid,
    frame: FaceFrame,
    layout: AxisLayout,
    finger_width: float,
    resolution: float,
) -> list[Pose3D]:
    """Generate grasps along the face's edges, moved onto a cuboid edge and tilted 45 degrees."""
    signs = layout.edge_signs
    half_c = 0.5 * (frame.length_c + PALM_OFFSET_M) * frame.c_dir
    edge_offsets = (-half_c * signs.a_sign, half_c * signs.b_sign, half_c * signs.a_sign, -half_c * signs.b_sign)
    tilts = (
        -math.pi / 4.0 * signs.a_rot_sign,
        math.pi / 4.0 * signs.b_rot_sign,
        math.pi / 4.0 * signs.a_rot_sign,
        -math.pi / 4.0 * signs.b_rot_sign,
    )

    poses = []
    face_lines = _face_lines(frame, finger_width, resolution)
    for line, edge_offset, tilt in zip(face_lines, edge_offsets, tilts):
        edge_line = FaceLine(line.origin + edge_offset, line.step, line.count, line.alignment_rad, tilt)
        poses.extend(_line_poses(cuboid.pose, frame, edge_line))
    return poses


def variable_angle_poses(
    cuboid: Cuboid,
    seeds: Sequence[Pose3D],
    profile: GripperProfile,
    diagnostics: DiagnosticsSink,
) -> list[Pose3D]:
    """Tilt each seed pose about its y-axis, in both directions, while it still reaches the object.

    Each sweep stops at the first pose whose approach segment misses the cuboid, or at the
        iteration ceiling (reported but not fatal; poses already generated are kept).

    :param cuboid: Cuboid being grasped
    :param seeds: Poses to be tilted (face grasps)
    :param profile: Gripper profile providing the angular step and approach depth
    :param diagnostics: Receiver of a note whenever a sweep reaches its ceiling
    :return: Tilted poses, seed by seed, positive sweep before negative sweep
    """
    angle_res = profile.angle_resolution_rad
    max_steps = max_variable_angle_steps(angle_res)
    size = (cuboid.depth, cuboid.width, cuboid.height)

    poses = []
    for base_pose in seeds:
        for direction in (1.0, -1.0):
            steps = 0
            pose = compose_pose(base_pose, [(Axis.Y, direction * angle_res)])
            while segment_intersects_cuboid(cuboid.pose, *size, pose, profile.grasp_max_depth):
                if steps >= max_steps:
                    message = "Exceeded max iterations while creating variable angle grasps"
                    logger.warning(message)
                    diagnostics.on_event(message)
                    break
                poses.append(pose)
                steps += 1
                pose = compose_pose(base_pose, [(Axis.Y, direction * (steps + 1) * angle_res)])
    return poses


def depth_poses(poses: Sequence[Pose3D], finger_depth: float, depth_resolution: float) -> list[Pose3D]:
    """Replicate every pose at increasing depths along its own approach (z) axis."""
    count = num_depth_grasps(finger_depth, depth_resolution)
    delta = finger_depth / count
    return [compose_pose(pose, (), (0.0, 0.0, j * delta)) for pose in poses for j in range(1, count + 1)]


def bidirectional_poses(poses: Sequence[Pose3D]) -> list[Pose3D]:
    """Replicate every pose rotated a half-turn about its approach axis (same position)."""
    return [compose_pose(pose, [(Axis.Z, math.pi)]) for pose in poses]


def enumerate_axis_poses(
    cuboid: Cuboid,
    axis: GraspAxis,
    profile: GripperProfile,
    config: GraspCandidateConfig,
    diagnostics: DiagnosticsSink | None = None,
) -> list[Pose3D]:
    """Enumerate every candidate finger grasp pose around one principal axis of a cuboid.

    :param cuboid: Cuboid to be grasped
    :param axis: Principal axis of the cuboid along which the fingers close
    :param profile: Finger gripper profile (resolutions, depths, finger width)
    :param config: Toggles selecting which stages generate poses
    :param diagnostics: Optional receiver of each stage's poses
    :return: Ordered list of candidate poses
    """
    diagnostics = diagnostics or NullDiagnostics()
    layout = axis.layout
    frame = FaceFrame.from_layout(cuboid, layout)
    finger_width = profile.gripper_finger_width

    poses: list[Pose3D] = []

    def append_stage(stage: str, new_poses: list[Pose3D]) -> None:
        logger.debug("Adding %d %s grasps around the %s-axis", len(new_poses), stage, axis.value)
        diagnostics.on_poses(stage, new_poses)
        poses.extend(new_poses)

    if config.enable_corner_grasps:
        num_radial = num_radial_grasps(profile.angle_resolution_rad)
        append_stage("corner", corner_poses(cuboid, frame, num_radial))
    num_corner_poses = len(poses)

    if config.enable_face_grasps:
        append_stage("face", face_poses(cuboid, frame, finger_width, profile.grasp_resolution))

    if config.enable_variable_angle_grasps:
        seeds = poses[num_corner_poses:]  # Corner grasps at zero depth don't need variable angles
        append_stage("variable_angle", variable_angle_poses(cuboid, seeds, profile, diagnostics))

    if config.enable_edge_grasps:
        append_stage("edge", edge_poses(cuboid, frame, layout, finger_width, profile.grasp_resolution))

    append_stage("depth", depth_poses(poses, profile.finger_depth, profile.grasp_depth_resolution))
    append_stage("bidirectional", bidirectional_poses(poses))

    return poses
