"""Import classes and definitions used to generate and score grasps around cuboids."""

from .batch_extrema import BatchExtrema as BatchExtrema
from .candidate_config import GraspCandidateConfig as GraspCandidateConfig
from .candidates import CandidateAssembler as CandidateAssembler
from .candidates import CandidateSink as CandidateSink
from .candidates import ScoredCandidate as ScoredCandidate
from .candidates import ScoringContext as ScoringContext
from .diagnostics import DiagnosticsSink as DiagnosticsSink
from .diagnostics import NullDiagnostics as NullDiagnostics
from .diagnostics import RecordingDiagnostics as RecordingDiagnostics
from .finger_enumeration import enumerate_axis_poses as enumerate_axis_poses
from .generator import GraspGenerator as GraspGenerator
from .grasp_axes import GraspAxis as GraspAxis
from .gripper_profile import EndEffectorKind as EndEffectorKind
from .gripper_profile import GripperPosture as GripperPosture
from .gripper_profile import GripperProfile as GripperProfile
from .gripper_profile import OpeningWidthError as OpeningWidthError
from .gripper_profile import SuctionVoxel as SuctionVoxel
from .score_weights import ScoreWeights as ScoreWeights
from .suction_enumeration import enumerate_suction_poses as enumerate_suction_poses
from .waypoints import GraspWaypoints as GraspWaypoints
from .waypoints import pre_grasp_direction as pre_grasp_direction
