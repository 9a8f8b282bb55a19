"""Unit tests for the Quaternion orientations of grasp frames."""

import math

import numpy as np
import pytest
from hypothesis import given

from cuboid_grasps.spatial import RPY, Axis, Quaternion

from .strategies.common_strategies import angles_rad
from .strategies.spatial_strategies import axes, quaternions, rpy_angles


def test_zero_quaternion_is_rejected() -> None:
    """Verify that a quaternion without any rotation information cannot be constructed."""
    # Arrange/Act/Assert
    with pytest.raises(ValueError, match="zero quaternion"):
        Quaternion(0.0, 0.0, 0.0, 0.0)


def test_components_are_normalized() -> None:
    """Verify that a non-unit quaternion is scaled to unit length on construction."""
    # Arrange/Act
    quat = Quaternion(0.0, 0.0, 2.0, 2.0)

    # Assert
    assert np.linalg.norm(quat.to_array()) == pytest.approx(1.0)
    assert quat.z == pytest.approx(math.sqrt(0.5))


@given(quaternions())
def test_rpy_angles_describe_the_same_orientation(quat: Quaternion) -> None:
    """Verify that converting a quaternion to roll-pitch-yaw angles loses no orientation."""
    # Arrange/Act
    result = Quaternion.from_rpy(*quat.to_rpy())

    # Assert - q and -q are the same orientation
    assert quat.approx_equal(result)


@given(rpy_angles())
def test_rpy_angles_apply_roll_then_pitch_then_yaw(rpy: RPY) -> None:
    """Verify that fixed-frame angles match rotating about x, then y, then z of the fixed frame."""
    # Arrange
    roll, pitch, yaw = rpy
    expected = (
        Quaternion.from_axis_angle(Axis.Z, yaw)
        * Quaternion.from_axis_angle(Axis.Y, pitch)
        * Quaternion.from_axis_angle(Axis.X, roll)
    )

    # Act
    result = Quaternion.from_rpy(roll, pitch, yaw)

    # Assert
    assert result.approx_equal(expected, atol=1e-7)


@given(quaternions())
def test_homogeneous_matrix_holds_only_a_rotation(quat: Quaternion) -> None:
    """Verify that a quaternion's 4x4 transform has no translation and converts back unchanged."""
    # Arrange/Act
    matrix = quat.to_homogeneous_matrix()

    # Assert
    assert np.allclose(matrix[:3, 3], 0.0)
    assert np.allclose(matrix[3], [0.0, 0.0, 0.0, 1.0])
    assert Quaternion.from_homogeneous_matrix(matrix).approx_equal(quat)


def test_homogeneous_matrix_must_be_4x4() -> None:
    """Verify that a 3x3 matrix is not accepted as a homogeneous transform."""
    # Arrange/Act/Assert
    with pytest.raises(ValueError, match="4x4"):
        Quaternion.from_homogeneous_matrix(np.eye(3))


@given(axes(), angles_rad())
def test_rotating_about_an_axis_leaves_it_fixed(axis: Axis, angle_rad: float) -> None:
    """Verify that a rotation about a local axis keeps that axis and turns the others by the angle."""
    # Arrange
    rotation = Quaternion.from_axis_angle(axis, angle_rad)
    other_axis = Axis((axis.value + 1) % 3)

    # Act
    fixed_direction = rotation.axis_direction(axis)
    turned_direction = rotation.axis_direction(other_axis)

    # Assert
    assert np.allclose(fixed_direction, axis.unit_vector, atol=1e-9)
    assert float(np.dot(turned_direction, other_axis.unit_vector)) == pytest.approx(math.cos(angle_rad), abs=1e-9)


@pytest.mark.parametrize(
    ("axis", "vector", "expected"),
    [
        (Axis.Z, [1.0, 0.0, 0.0], [0.0, 1.0, 0.0]),
        (Axis.X, [0.0, 1.0, 0.0], [0.0, 0.0, 1.0]),
        (Axis.Y, [0.0, 0.0, 1.0], [1.0, 0.0, 0.0]),
    ],
)
def test_quarter_turns_follow_the_right_hand_rule(axis: Axis, vector: list, expected: list) -> None:
    """Verify the handedness of quarter-turns about each principal axis."""
    # Arrange
    rotation = Quaternion.from_axis_angle(axis, math.pi / 2.0)

    # Act
    rotated = rotation.rotate_vector(vector)

    # Assert
    assert np.allclose(rotated, expected, atol=1e-9)


@given(quaternions(), quaternions())
def test_product_chains_rotation_matrices(q1: Quaternion, q2: Quaternion) -> None:
    """Verify that multiplying quaternions composes their rotation matrices in the same order."""
    # Arrange/Act
    product = q1 * q2

    # Assert
    assert np.allclose(product.to_rotation_matrix(), q1.to_rotation_matrix() @ q2.to_rotation_matrix(), atol=1e-6)


def test_product_with_a_non_quaternion_fails() -> None:
    """Verify that multiplying a quaternion by a scalar is refused."""
    # Arrange/Act/Assert
    with pytest.raises(TypeError):
        _ = Quaternion.identity() * 2.0
