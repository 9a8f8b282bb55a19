"""Closed intervals, used to measure how far a suction footprint overlaps a cuboid face."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ClosedInterval:
    """The real numbers x with minimum <= x <= maximum."""

    minimum: float
    maximum: float

    def __post_init__(self) -> None:
        if self.minimum > self.maximum:
            raise ValueError(f"Empty interval: minimum {self.minimum} is above maximum {self.maximum}")

    @classmethod
    def centered(cls, center: float, length: float) -> ClosedInterval:
        """Build the interval of the given length (sign ignored) around a center value."""
        radius = abs(length) / 2.0
        return cls(center - radius, center + radius)

    @property
    def length(self) -> float:
        return self.maximum - self.minimum

    @property
    def midpoint(self) -> float:
        return 0.5 * (self.minimum + self.maximum)

    def contains(self, x: float) -> bool:
        return self.minimum <= x <= self.maximum

    def overlap_fraction(self, other: ClosedInterval) -> float:
        """Share of this interval that also lies within ``other``, in [0, 1].

        A degenerate (single-point) interval counts as fully covered when ``other`` contains it.
        """
        if self.length == 0.0:
            return float(other.contains(self.minimum))
        shared = min(self.maximum, other.maximum) - max(self.minimum, other.minimum)
        return min(1.0, max(0.0, shared) / self.length)
