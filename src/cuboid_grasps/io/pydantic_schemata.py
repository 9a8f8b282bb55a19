"""Define Pydantic models for validating grasp generation YAML configuration files."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, RootModel, ValidationError, model_validator

from cuboid_grasps.grasping.candidate_config import GraspCandidateConfig
from cuboid_grasps.grasping.generator import GraspGenerator
from cuboid_grasps.grasping.gripper_profile import EndEffectorKind, GripperProfile
from cuboid_grasps.grasping.score_weights import ScoreWeights
from cuboid_grasps.io.yaml_utils import load_yaml_data
from cuboid_grasps.spatial import DEFAULT_FRAME, RPY, XYZ_RPY, Pose3D

if TYPE_CHECKING:
    from cuboid_grasps.grasping.diagnostics import DiagnosticsSink

# =============================================================================
# Pose Schemata
# =============================================================================


class Pose3DDictSchema(BaseModel):
    """Schema for specifying a Pose3D as a dictionary."""

    xyz_rpy: XYZ_RPY
    frame: str

    model_config = ConfigDict(extra="forbid")


Pose3DSchema = Union[XYZ_RPY, Pose3DDictSchema]
"""A Pose3D can be specified using a 6-tuple or a dictionary with `xyz_rpy` and `frame`."""


def pose_from_schema(pose: Pose3DSchema, default_frame: str = DEFAULT_FRAME) -> Pose3D:
    """Convert validated pose data into a Pose3D."""
    pose_data = pose.model_dump() if isinstance(pose, Pose3DDictSchema) else list(pose)
    return Pose3D.from_yaml_data(pose_data, default_frame)


# =============================================================================
# Gripper Profile Schemata
# =============================================================================

FINGER_REQUIRED_FIELDS = ("max_grasp_width", "max_finger_width", "min_finger_width", "gripper_finger_width")
SUCTION_REQUIRED_FIELDS = ("active_suction_range_x", "active_suction_range_y")


class GripperProfileSchema(BaseModel):
    """Schema for the grasp data of one end effector."""

    end_effector_type: Literal["finger", "suction"]
    angle_resolution: float = Field(gt=0, description="Angular resolution of grasps (degrees)")
    grasp_resolution: float = Field(gt=0, description="Spacing between grasps along a face (meters)")
    grasp_depth_resolution: float = Field(gt=0, description="Spacing between grasp depths (meters)")
    grasp_min_depth: float = Field(ge=0, description="Minimum overlap of the gripper and object (meters)")
    grasp_max_depth: float = Field(ge=0, description="Maximum graspable depth from the tip (meters)")
    grasp_pose_to_eef: Pose3DSchema = (0.0, 0.0, 0.0, 0.0, 0.0, 0.0)

    approach_distance_desired: float = Field(default=0.0, ge=0)
    retreat_distance_desired: float = Field(default=0.0, ge=0)
    lift_distance_desired: float = Field(default=0.0, ge=0)
    grasp_padding_on_approach: float = Field(default=0.0, ge=0)
    parent_link: str = ""
    base_link: str = DEFAULT_FRAME

    # Finger grippers
    max_grasp_width: Optional[float] = Field(default=None, gt=0)
    max_finger_width: Optional[float] = Field(default=None, gt=0)
    min_finger_width: Optional[float] = Field(default=None, ge=0)
    gripper_finger_width: Optional[float] = Field(default=None, ge=0)
    joint_names: List[str] = Field(default_factory=list)
    open_joint_positions: List[float] = Field(default_factory=list)
    closed_joint_positions: List[float] = Field(default_factory=list)

    # Suction grippers
    active_suction_range_x: Optional[float] = Field(default=None, gt=0)
    active_suction_range_y: Optional[float] = Field(default=None, gt=0)
    suction_regions_x: int = Field(default=1, gt=0)
    suction_regions_y: int = Field(default=1, gt=0)

    model_config = ConfigDict(extra="forbid")

    @model_validator(mode="after")
    def check_type_specific_fields(self) -> GripperProfileSchema:
        """Validate that the fields required by the end-effector type are provided."""
        required = FINGER_REQUIRED_FIELDS if self.end_effector_type == "finger" else SUCTION_REQUIRED_FIELDS
        missing = [name for name in required if getattr(self, name) is None]
        if missing:
            raise ValueError(f"A {self.end_effector_type} gripper requires fields: {', '.join(missing)}")
        if self.grasp_max_depth < self.grasp_min_depth:
            raise ValueError("grasp_max_depth cannot be less than grasp_min_depth")
        return self

    def to_gripper_profile(self) -> GripperProfile:
        """Convert the validated schema into a GripperProfile."""
        return GripperProfile(
            kind=EndEffectorKind(self.end_effector_type),
            angle_resolution_deg=self.angle_resolution,
            grasp_resolution=self.grasp_resolution,
            grasp_depth_resolution=self.grasp_depth_resolution,
            grasp_min_depth=self.grasp_min_depth,
            grasp_max_depth=self.grasp_max_depth,
            grasp_pose_to_eef_pose=pose_from_schema(self.grasp_pose_to_eef),
            approach_distance_desired=self.approach_distance_desired,
            retreat_distance_desired=self.retreat_distance_desired,
            lift_distance_desired=self.lift_distance_desired,
            grasp_padding_on_approach=self.grasp_padding_on_approach,
            parent_link=self.parent_link,
            base_link=self.base_link,
            max_grasp_width=self.max_grasp_width or 0.0,
            max_finger_width=self.max_finger_width or 0.0,
            min_finger_width=self.min_finger_width or 0.0,
            gripper_finger_width=self.gripper_finger_width or 0.0,
            joint_names=tuple(self.joint_names),
            open_joint_positions=tuple(self.open_joint_positions),
            closed_joint_positions=tuple(self.closed_joint_positions),
            active_suction_range_x=self.active_suction_range_x or 0.0,
            active_suction_range_y=self.active_suction_range_y or 0.0,
            suction_regions_x=self.suction_regions_x,
            suction_regions_y=self.suction_regions_y,
        )


class GripperProfilesSchema(RootModel[Dict[str, GripperProfileSchema]]):
    """Schema mapping end-effector names to their grasp data."""

    @classmethod
    def validate_yaml(cls, yaml_path: Path) -> GripperProfilesSchema:
        """Validate a gripper YAML file and return the resulting schema.

        :param yaml_path: Path to a YAML file to be validated by the schema
        :return: Validated GripperProfilesSchema instance
        """
        yaml_data = load_yaml_data(yaml_path)

        try:
            return GripperProfilesSchema.model_validate(yaml_data)
        except ValidationError as v_err:
            raise RuntimeError(f"Validation error in {yaml_path}: {v_err}") from v_err


# =============================================================================
# Grasp Generator Schemata
# =============================================================================


class ScoreWeightsSchema(BaseModel):
    """Schema for the weights combining per-criterion grasp scores."""

    orientation_x: float = Field(default=1.0, ge=0)
    orientation_y: float = Field(default=1.0, ge=0)
    orientation_z: float = Field(default=1.0, ge=0)
    translation_x: float = Field(default=1.0, ge=0)
    translation_y: float = Field(default=1.0, ge=0)
    translation_z: float = Field(default=1.0, ge=0)
    width: float = Field(default=1.0, ge=0)
    depth: float = Field(default=1.0, ge=0)
    overhang: float = Field(default=1.0, ge=0)

    model_config = ConfigDict(extra="forbid")

    def to_score_weights(self) -> ScoreWeights:
        return ScoreWeights(**self.model_dump())


class GraspCandidateConfigSchema(BaseModel):
    """Schema for the grasp types and cuboid axes used to generate finger grasps."""

    enable_corner_grasps: bool = True
    enable_face_grasps: bool = True
    enable_variable_angle_grasps: bool = True
    enable_edge_grasps: bool = True
    generate_x_axis_grasps: bool = True
    generate_y_axis_grasps: bool = True
    generate_z_axis_grasps: bool = True

    model_config = ConfigDict(extra="forbid")

    def to_candidate_config(self) -> GraspCandidateConfig:
        return GraspCandidateConfig(**self.model_dump())


class GraspGeneratorSchema(BaseModel):
    """Schema for the settings of a grasp generator."""

    ideal_grasp_rpy: RPY = (0.0, 0.0, 0.0)
    """Rotations (radians) about the ideal grasp's x-, y-, then z-axes."""

    weights: ScoreWeightsSchema = Field(default_factory=ScoreWeightsSchema)
    candidate_config: GraspCandidateConfigSchema = Field(default_factory=GraspCandidateConfigSchema)
    verbose: bool = False

    model_config = ConfigDict(extra="forbid")

    @classmethod
    def validate_yaml(cls, yaml_path: Path) -> GraspGeneratorSchema:
        """Validate a grasp generator YAML file and return the resulting schema.

        :param yaml_path: Path to a YAML file to be validated by the schema
        :return: Validated GraspGeneratorSchema instance
        """
        yaml_data = load_yaml_data(yaml_path)

        try:
            return GraspGeneratorSchema.model_validate(yaml_data)
        except ValidationError as v_err:
            raise RuntimeError(f"Validation error in {yaml_path}: {v_err}") from v_err

    def build_generator(self, diagnostics: DiagnosticsSink | None = None) -> GraspGenerator:
        """Construct a grasp generator using the validated settings."""
        generator = GraspGenerator(weights=self.weights.to_score_weights(), diagnostics=diagnostics)
        generator.set_ideal_grasp_pose_rpy(self.ideal_grasp_rpy)
        return generator


# =============================================================================
# Loaders
# =============================================================================


def load_gripper_profile(yaml_path: Path, end_effector: str) -> GripperProfile:
    """Load the profile of a named end effector from a gripper YAML file.

    :param yaml_path: Path to a YAML file mapping end-effector names to their grasp data
    :param end_effector: Name of the end effector to be loaded
    :return: Validated GripperProfile for the end effector
    :raises KeyError: If the file does not describe the named end effector
    """
    profiles = GripperProfilesSchema.validate_yaml(yaml_path).root
    if end_effector not in profiles:
        raise KeyError(f"End effector '{end_effector}' not found in {yaml_path}: {sorted(profiles)}")
    return profiles[end_effector].to_gripper_profile()


def load_grasp_generator_schema(yaml_path: Path | None) -> GraspGeneratorSchema:
    """Load grasp generator settings from YAML, using the defaults if no path is given."""
    if yaml_path is None:
        return GraspGeneratorSchema()
    return GraspGeneratorSchema.validate_yaml(yaml_path)
