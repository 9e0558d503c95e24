"""Splicing of nested offset rings into continuous paths.

Iterative offsetting of a polygon yields a family of concentric rings, one
or more per offset step. Drawn one by one they leave a pen-up between
every ring. The RingStitcher turns each family into a single path by
making a short excursion from every ring into the next deeper ring and back.

Algorithm Overview:
    1. Rotation: every closed ring is rotated so a random coordinate becomes
       its start (and its closing coordinate). This keeps connection points
       away from the seam the offsetting produced, where splicing degenerates.
    2. Deviation discovery: for a ring at depth d > 0 the candidates are the
       rings of the same group at depth d - 1. The ring's terminal coordinate
       is projected onto every candidate; the closest projection becomes the
       ring's only RingDeviation. Rings at depth 0, and rings without
       candidates, get none.
    3. Splicing: a ring is walked coordinate by coordinate. At the insertion
       index of each of its deviations (sorted by insertion index, then arc
       location) the path goes to the connection point, around the whole
       inner ring (spliced the same way), back to the connection point, and
       continues on the outer ring.
    4. Roots are the rings that are not the inner ring of any deviation; each
       produces one path. Anything left unvisited becomes its own path.

    Rings are addressed by curve index and deviations are kept in a table
    keyed by outer ring, so the traversal is an explicit stack walk over
    indices and cannot run deeper than the Python stack allows.

Example usage:
    Stitching rings produced by offsetting::

        import numpy as np
        from curve_lib.analysis.offset import buffer_collect_rings
        from curve_lib.analysis.stitch import RingStitcher

        ring_set = buffer_collect_rings(square, [-1.0, -1.0])
        stitcher = RingStitcher(rng=np.random.default_rng(7))
        paths = stitcher.stitch(ring_set.records, ring_set.curves)
"""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from ..domain.curves import is_ring, to_curve
from ..domain.geometry import Curve, MultiCurve
from ..domain.rings import BufferRingRecord, BufferRingSet, RingDeviation
from ..domain.units import METERS, LinearUnits
from ..utils.geometry import clean_coords, nearest_point_on_line

logger = logging.getLogger(__name__)


@dataclass
class _TraceFrame:
    """One ring being walked during splicing.

    Attributes:
        ring: Curve index of the ring.
        coord_index: Next coordinate of the ring to emit.
        deviation_index: Next deviation of the ring to follow.
        rejoin_point: Connection point to emit once the ring is done, None
            for a root ring.
    """
    ring: int
    coord_index: int = 0
    deviation_index: int = 0
    rejoin_point: tuple | None = None


def rotate_ring(ring: Curve, split: int) -> Curve:
    """Rotate a closed ring so ``ring[split]`` becomes its start.

    The old closing coordinate is skipped and the new start is repeated at
    the end, so the result is closed and has the same length.
    """
    return list(ring[split:]) + list(ring[1:split + 1])


class RingStitcher:
    """Splices families of nested rings into single continuous paths.

    Attributes:
        rng: numpy Generator used for ring rotation.
        rotate: Whether to rotate rings before splicing.
        units: Units of the ring coordinates.

    Example:
        >>> stitcher = RingStitcher(rng=np.random.default_rng(0))
        >>> paths = stitcher.stitch(records, curves)
        >>> len(paths)  # one per ring family
        1
    """

    def __init__(self, rng: np.random.Generator | None = None, rotate: bool = True,
                 units: LinearUnits = METERS, seed: int | None = None):
        self.rng = rng if rng is not None else np.random.default_rng(seed)
        self.rotate = rotate
        self.units = units

    def stitch(self, records: Sequence[BufferRingRecord], curves: Sequence[Curve]) -> MultiCurve:
        """Splice ring families into one path each.

        Args:
            records: Group, depth and curve index of every ring.
            curves: Ring coordinates addressed by ``curve_index``.

        Returns:
            One cleaned path per connected ring family, in the order of the
            family's outermost ring.
        """
        records = self._usable_records(records, curves)
        rings = self.prepare_rings(records, curves)
        deviations = self.find_deviations(records, rings)

        by_outer: dict[int, list[RingDeviation]] = defaultdict(list)
        inner_rings = set()
        for deviation in deviations:
            by_outer[deviation.outer_ring].append(deviation)
            inner_rings.add(deviation.inner_ring)
        for outer in by_outer:
            by_outer[outer].sort(key=lambda d: d.sort_key)

        visited: set[int] = set()
        paths: MultiCurve = []
        for record in records:
            index = record.curve_index
            if index in visited or index in inner_rings:
                continue
            paths.append(self._trace(index, rings, by_outer, visited))

        for record in records:
            if record.curve_index not in visited:
                logger.debug("Ring %d not reachable from any root, emitting it alone", record.curve_index)
                paths.append(self._trace(record.curve_index, rings, by_outer, visited))

        result = []
        for path in paths:
            cleaned = clean_coords(path)
            if cleaned:
                result.append(cleaned)

        logger.debug("Stitched %d rings (%d deviations) into %d paths",
                     len(records), len(deviations), len(result))
        return result

    def stitch_ring_set(self, ring_set: BufferRingSet) -> MultiCurve:
        """Splice the rings of a BufferRingSet."""
        return self.stitch(ring_set.records, ring_set.curves)

    def prepare_rings(self, records: Sequence[BufferRingRecord],
                      curves: Sequence[Curve]) -> dict[int, Curve]:
        """Copy the referenced rings, rotating closed ones at a random index."""
        rings = {}
        for record in records:
            ring = to_curve(curves[record.curve_index])
            if self.rotate and is_ring(ring):
                split = int(self.rng.integers(len(ring)))
                ring = rotate_ring(ring, split)
            rings[record.curve_index] = ring
        return rings

    def find_deviations(self, records: Sequence[BufferRingRecord],
                        rings: dict[int, Curve]) -> list[RingDeviation]:
        """Connect every ring at depth > 0 to the nearest ring one level up.

        Only rings of the same group exactly one offset step shallower are
        considered.

        Returns:
            At most one RingDeviation per ring.
        """
        levels: dict[tuple, list[int]] = defaultdict(list)
        for record in records:
            levels[(record.group_id, record.depth)].append(record.curve_index)

        deviations = []
        for record in records:
            if record.depth <= 0:
                continue
            candidates = levels.get((record.group_id, record.depth - 1), [])
            terminal = rings[record.curve_index][-1]

            best = None
            best_outer = None
            for outer in candidates:
                nearest = nearest_point_on_line(rings[outer], terminal, self.units)
                if best is None or nearest.distance < best.distance:
                    best = nearest
                    best_outer = outer

            if best is None:
                logger.debug("Ring %d (group %s, depth %d) has no outer candidate",
                             record.curve_index, record.group_id, record.depth)
                continue

            deviations.append(RingDeviation(
                inner_ring=record.curve_index,
                outer_ring=best_outer,
                insertion_index=best.index,
                arc_location=best.arc_location,
                connection_point=best.position,
            ))
        return deviations

    def _trace(self, root: int, rings: dict[int, Curve],
               by_outer: dict[int, list[RingDeviation]], visited: set[int]) -> Curve:
        path: Curve = []
        visited.add(root)
        stack = [_TraceFrame(root)]

        while stack:
            frame = stack[-1]
            ring = rings[frame.ring]
            deviations = by_outer.get(frame.ring, [])

            if frame.deviation_index < len(deviations):
                deviation = deviations[frame.deviation_index]
                frame.deviation_index += 1
                if deviation.inner_ring in visited:
                    continue
                # Up to and including the coordinate before the connection point
                end = deviation.insertion_index + 1
                path.extend(ring[frame.coord_index:end])
                frame.coord_index = max(frame.coord_index, end)
                path.append(deviation.connection_point)
                visited.add(deviation.inner_ring)
                stack.append(_TraceFrame(deviation.inner_ring, rejoin_point=deviation.connection_point))
                continue

            path.extend(ring[frame.coord_index:])
            stack.pop()
            if frame.rejoin_point is not None:
                path.append(frame.rejoin_point)

        return path

    @staticmethod
    def _usable_records(records: Sequence[BufferRingRecord],
                        curves: Sequence[Curve]) -> list[BufferRingRecord]:
        usable = []
        seen = set()
        for record in records:
            index = record.curve_index
            if not 0 <= index < len(curves):
                logger.warning("Ring record %s points past the %d curves, skipping", record, len(curves))
                continue
            if index in seen:
                logger.warning("Curve %d referenced by more than one ring record, skipping duplicate", index)
                continue
            if len(curves[index]) < 2:
                logger.debug("Skipping degenerate ring %d", index)
                continue
            seen.add(index)
            usable.append(record)
        return usable


def stitch_rings(records: Sequence[BufferRingRecord], curves: Sequence[Curve],
                 rng: np.random.Generator | None = None, rotate: bool = True,
                 units: LinearUnits = METERS) -> MultiCurve:
    """Splice ring families into one continuous path each.

    Convenience wrapper around ``RingStitcher``.
    """
    return RingStitcher(rng=rng, rotate=rotate, units=units).stitch(records, curves)
