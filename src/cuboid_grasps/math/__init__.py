"""Import definitions relating to general mathematical operations."""

from .intervals import ClosedInterval as ClosedInterval
