# reservoir_arm/ranges.py
"""Closed intervals used for distances and expansion windows."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Range:
    """
    Closed interval [min, max].

    min <= max is not enforced: a reversed range is a legal value, and
    tighter_range() simply works on whatever bounds it is given.
    """
    min: float
    max: float

    def contains(self, value: float) -> bool:
        return self.min <= value <= self.max

    @property
    def width(self) -> float:
        return self.max - self.min


def tighter_range(range1: Range, range2: Range) -> Range:
    """Intersection-like combination: (max of mins, min of maxs)."""
    return Range(max(range1.min, range2.min), min(range1.max, range2.max))
