"""Unit tests for ClosedInterval, used to measure the overlap of footprints and faces."""

import pytest
from hypothesis import given

from cuboid_grasps.math import ClosedInterval

from .strategies.common_strategies import lengths_m, unit_fractions


def test_interval_rejects_unordered_bounds() -> None:
    """Verify that an interval's minimum cannot exceed its maximum."""
    # Arrange/Act/Assert
    with pytest.raises(ValueError, match="above maximum"):
        ClosedInterval(1.0, 0.0)


@pytest.mark.parametrize(
    ("footprint", "face", "expected"),
    [
        (ClosedInterval(-0.1, 0.1), ClosedInterval(-1.0, 1.0), 1.0),
        (ClosedInterval(0.9, 1.1), ClosedInterval(-1.0, 1.0), 0.5),
        (ClosedInterval(2.0, 3.0), ClosedInterval(-1.0, 1.0), 0.0),
        (ClosedInterval(0.5, 0.5), ClosedInterval(-1.0, 1.0), 1.0),
        (ClosedInterval(1.5, 1.5), ClosedInterval(-1.0, 1.0), 0.0),
    ],
)
def test_overlap_fraction(footprint: ClosedInterval, face: ClosedInterval, expected: float) -> None:
    """Verify the fraction of an interval covered by another interval."""
    # Act/Assert
    assert footprint.overlap_fraction(face) == pytest.approx(expected)


@given(lengths_m(), unit_fractions())
def test_centered_interval(length: float, center: float) -> None:
    """Verify that a centered interval has the requested length and midpoint."""
    # Arrange/Act
    interval = ClosedInterval.centered(center, length)

    # Assert
    assert interval.length == pytest.approx(length)
    assert interval.midpoint == pytest.approx(center)
    assert interval.contains(center)
