"""Records describing rings produced by iterative offsetting."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Hashable

from .geometry import MultiCurve, Position


@dataclass(frozen=True)
class BufferRingRecord:
    """Origin of one offset ring.

    Attributes:
        group_id: Identity of the source polygon, shared by every ring that
            was offset from it.
        depth: Number of offset steps applied to reach this ring (0 for the
            source polygon's own rings).
        curve_index: Index of the ring's coordinates in the accompanying
            curve list.
    """
    group_id: Hashable
    depth: int
    curve_index: int


@dataclass(frozen=True)
class RingDeviation:
    """Connection from an inner ring to the nearest point of its outer ring.

    Attributes:
        inner_ring: Curve index of the deeper ring.
        outer_ring: Curve index of the ring one offset step shallower.
        insertion_index: Index in the outer ring of the coordinate
            immediately preceding the connection point.
        arc_location: Distance in meters along the outer ring to the
            connection point. Orders deviations that share an insertion index.
        connection_point: Position on the outer ring where the path leaves
            for the inner ring and comes back.
    """
    inner_ring: int
    outer_ring: int
    insertion_index: int
    arc_location: float
    connection_point: Position

    @property
    def sort_key(self) -> tuple[int, float]:
        return (self.insertion_index, self.arc_location)


@dataclass
class BufferRingSet:
    """Offset rings with their origin records.

    Attributes:
        records: One record per ring, in production order.
        curves: Ring coordinates, addressed by ``BufferRingRecord.curve_index``.
    """
    records: list[BufferRingRecord] = field(default_factory=list)
    curves: MultiCurve = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.records)

    def add(self, group_id: Hashable, depth: int, curve: list[Position]) -> BufferRingRecord:
        """Append a ring and return its record."""
        record = BufferRingRecord(group_id, depth, len(self.curves))
        self.curves.append(curve)
        self.records.append(record)
        return record

    def group_ids(self) -> list[Hashable]:
        """Distinct group ids in first-seen order."""
        seen = []
        for record in self.records:
            if record.group_id not in seen:
                seen.append(record.group_id)
        return seen

    def max_depth(self) -> int:
        return max((r.depth for r in self.records), default=-1)
