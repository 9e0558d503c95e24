"""Geometric value objects for curve processing."""

from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple
import math


# A coordinate: (x, y) or (x, y, z)
Position = Tuple[float, ...]
# Ordered positions, open (first != last) or a ring (first == last)
Curve = List[Position]
MultiCurve = List[Curve]
# Outer ring first, holes after it
PolygonCoords = List[Curve]


def position_distance(a: Sequence[float], b: Sequence[float]) -> float:
    """Planar Euclidean distance between two positions, in coordinate units."""
    dx = a[0] - b[0]
    dy = a[1] - b[1]
    return math.sqrt(dx * dx + dy * dy)


@dataclass(frozen=True)
class BBox:
    """Immutable axis-aligned bounding box."""
    x_min: float
    y_min: float
    x_max: float
    y_max: float

    @property
    def width(self) -> float:
        return self.x_max - self.x_min

    @property
    def height(self) -> float:
        return self.y_max - self.y_min

    @property
    def center(self) -> Position:
        return (
            (self.x_min + self.x_max) / 2,
            (self.y_min + self.y_max) / 2
        )

    def contains(self, position: Sequence[float]) -> bool:
        """Check if a position is inside the box, edges included."""
        return (self.x_min <= position[0] <= self.x_max and
                self.y_min <= position[1] <= self.y_max)

    def overlaps(self, other: BBox) -> bool:
        """Check if two boxes share any area or edge.

        On each axis the ranges overlap when either box has an edge inside
        the other's range. Touching edges count as overlap.
        """
        x_overlap = (
            _within_range(self.x_min, other.x_min, other.x_max)
            or _within_range(self.x_max, other.x_min, other.x_max)
            or _within_range(other.x_min, self.x_min, self.x_max)
            or _within_range(other.x_max, self.x_min, self.x_max)
        )
        y_overlap = (
            _within_range(self.y_min, other.y_min, other.y_max)
            or _within_range(self.y_max, other.y_min, other.y_max)
            or _within_range(other.y_min, self.y_min, self.y_max)
            or _within_range(other.y_max, self.y_min, self.y_max)
        )
        return x_overlap and y_overlap

    def to_tuple(self) -> Tuple[float, float, float, float]:
        """Convert to (x_min, y_min, x_max, y_max)."""
        return (self.x_min, self.y_min, self.x_max, self.y_max)

    @classmethod
    def from_tuple(cls, t: Sequence[float]) -> BBox:
        """Create from (x_min, y_min, x_max, y_max)."""
        return cls(t[0], t[1], t[2], t[3])

    @classmethod
    def from_positions(cls, positions: Iterable[Sequence[float]]) -> BBox:
        """Create bounding box containing all positions."""
        positions = list(positions)
        if not positions:
            return cls(0, 0, 0, 0)
        xs = [p[0] for p in positions]
        ys = [p[1] for p in positions]
        return cls(min(xs), min(ys), max(xs), max(ys))

    @classmethod
    def at_center(cls, center: Sequence[float], width: float, height: float) -> BBox:
        """Create a box of the given size centered on a position."""
        return cls(
            center[0] - width / 2,
            center[1] - height / 2,
            center[0] + width / 2,
            center[1] + height / 2
        )


def _within_range(value: float, low: float, high: float) -> bool:
    return low <= value <= high
