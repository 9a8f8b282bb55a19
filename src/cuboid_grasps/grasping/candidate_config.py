"""Define the feature toggles selecting which families of grasps are generated."""

from __future__ import annotations

from dataclasses import dataclass, replace


@dataclass(frozen=True)
class GraspCandidateConfig:
    """Toggles for the grasp types and cuboid axes swept during finger grasp generation."""

    enable_corner_grasps: bool = True
    enable_face_grasps: bool = True
    enable_variable_angle_grasps: bool = True
    enable_edge_grasps: bool = True
    generate_x_axis_grasps: bool = True
    generate_y_axis_grasps: bool = True
    generate_z_axis_grasps: bool = True

    def enable_all_grasp_types(self) -> GraspCandidateConfig:
        """Return a copy of the config with every grasp type enabled (axes unchanged)."""
        return replace(
            self,
            enable_corner_grasps=True,
            enable_face_grasps=True,
            enable_variable_angle_grasps=True,
            enable_edge_grasps=True,
        )

    def disable_all_grasp_types(self) -> GraspCandidateConfig:
        """Return a copy of the config with every grasp type disabled (axes unchanged)."""
        return replace(
            self,
            enable_corner_grasps=False,
            enable_face_grasps=False,
            enable_variable_angle_grasps=False,
            enable_edge_grasps=False,
        )

    def restrict_to_wide_object(self) -> GraspCandidateConfig:
        """Return the config used for an axis along which the object is too wide to grip.

        Only corner and edge grasps (if enabled in this config) remain, as both reach around
            the object's boundary rather than spanning the full extent between the fingers.
        """
        return replace(
            self.disable_all_grasp_types(),
            enable_corner_grasps=self.enable_corner_grasps,
            enable_edge_grasps=self.enable_edge_grasps,
        )
