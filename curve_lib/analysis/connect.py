"""Greedy endpoint connection of open curves.

Fragmented strokes (from clipping, dashing input, or tracing) are joined
whenever one of their endpoints lies close to an endpoint of another curve.

Algorithm Overview:
    1. All curves go into a worklist, in input order.
    2. The first curve in the worklist is the anchor. Its start and end are
       compared with the start and end of every other curve, in the order
       (start, start), (start, end), (end, start), (end, end). The closest
       pair strictly within tolerance wins; on equal distances the earliest
       candidate and combination found wins.
    3. A winning pair is joined into one curve (each side reversed as needed
       so the matched endpoints meet), both originals leave the worklist and
       the joined curve is appended to its end, so it is considered again.
    4. An anchor without a partner is final and is never reconsidered.
    5. Final curves are cleaned of duplicate and collinear positions.

    The result depends on input order and is not globally optimal. Each
    round is a linear scan, so the total cost is quadratic in the typical
    case.

Example usage:
    Joining two touching strokes::

        from curve_lib.analysis.connect import connect_curves

        curves = [[(0, 0), (1, 0)], [(2, 0), (1, 0.0000005)]]
        connect_curves(curves, tolerance=1.0)
        # [[(0.0, 0.0), (1.0, 0.0), (1.0, 5e-07), (2.0, 0.0)]]
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from typing import Any

import numpy as np

from ..domain.curves import destructure_curves
from ..domain.geometry import Curve, MultiCurve
from ..domain.units import METERS, LinearUnits
from ..utils.geometry import clean_coords

logger = logging.getLogger(__name__)

# Endpoint combinations in scan order: (anchor side, candidate side)
_COMBINATIONS = (('start', 'start'), ('start', 'end'), ('end', 'start'), ('end', 'end'))


@dataclass(frozen=True)
class EndpointMatch:
    """Closest endpoint pair found for an anchor.

    Attributes:
        candidate: Position of the candidate in the worklist (0 is the anchor).
        anchor_side: 'start' or 'end' of the anchor.
        candidate_side: 'start' or 'end' of the candidate.
        distance: Distance between the endpoints in meters.
    """
    candidate: int
    anchor_side: str
    candidate_side: str
    distance: float


class EndpointConnector:
    """Joins curves whose endpoints lie within a tolerance.

    Attributes:
        tolerance: Maximum endpoint distance in meters (exclusive).
        units: Units of the curve coordinates.

    Example:
        >>> connector = EndpointConnector(tolerance=0.5)
        >>> connector.connect([[(0, 0), (1, 0)], [(1, 0), (2, 1)]])
        [[(0.0, 0.0), (1.0, 0.0), (2.0, 1.0)]]
    """

    def __init__(self, tolerance: float, units: LinearUnits = METERS):
        if tolerance < 0:
            raise ValueError(f"tolerance must be non-negative, got {tolerance}")
        self.tolerance = tolerance
        self.units = units

    def connect(self, curves: Any) -> MultiCurve:
        """Join curves greedily by nearest endpoints.

        Args:
            curves: Curves as a list of coordinate lists or a shapely
                (Multi)LineString. Members with fewer than 2 positions are
                dropped.

        Returns:
            New list of joined and cleaned curves.
        """
        worklist = deque(destructure_curves(curves))
        n_input = len(worklist)
        finalized: MultiCurve = []
        merges = 0

        while worklist:
            match = self.find_match(worklist)
            anchor = worklist.popleft()
            if match is None:
                finalized.append(anchor)
                continue

            # The anchor is gone, so the candidate moved one slot forward
            candidate = worklist[match.candidate - 1]
            del worklist[match.candidate - 1]
            worklist.append(join_curves(anchor, candidate, match.anchor_side, match.candidate_side))
            merges += 1

        result = []
        for curve in finalized:
            cleaned = clean_coords(curve)
            if cleaned:
                result.append(cleaned)

        logger.debug("Connected %d curves into %d (%d merges, tolerance %.3f m)",
                     n_input, len(result), merges, self.tolerance)
        return result

    def find_match(self, worklist: deque) -> EndpointMatch | None:
        """Find the closest endpoint partner of the first curve in the worklist.

        Args:
            worklist: Curves under consideration; the first one is the anchor.

        Returns:
            EndpointMatch for the closest pair strictly within tolerance, or
            None if there is none.
        """
        if len(worklist) < 2:
            return None

        anchor = worklist[0]
        anchor_ends = np.array([anchor[0][:2], anchor[-1][:2]], dtype=float)
        candidate_ends = np.array(
            [[c[0][:2], c[-1][:2]] for c in list(worklist)[1:]], dtype=float
        )

        # distances[i, k]: candidate i + 1, combination k in _COMBINATIONS order
        deltas = anchor_ends[None, :, None, :] - candidate_ends[:, None, :, :]
        distances = self.units.to_meters(np.hypot(deltas[..., 0], deltas[..., 1]))
        distances = distances.reshape(len(candidate_ends), 4)

        # argmin returns the first minimum, matching a strictly-less running scan
        flat = int(np.argmin(distances))
        best = float(distances.flat[flat])
        if not best < self.tolerance:
            return None

        row, combination = divmod(flat, 4)
        anchor_side, candidate_side = _COMBINATIONS[combination]
        return EndpointMatch(row + 1, anchor_side, candidate_side, best)


def join_curves(anchor: Curve, candidate: Curve, anchor_side: str, candidate_side: str) -> Curve:
    """Concatenate two curves so the matched endpoints meet.

    The anchor is reversed when its start was matched, the candidate when
    its end was matched; the anchor always comes first.
    """
    head = anchor[::-1] if anchor_side == 'start' else list(anchor)
    tail = candidate[::-1] if candidate_side == 'end' else list(candidate)
    return head + tail


def connect_curves(curves: Any, tolerance: float, units: LinearUnits = METERS) -> MultiCurve:
    """Join curves whose nearest endpoints lie within ``tolerance`` meters.

    Convenience wrapper around ``EndpointConnector``.
    """
    return EndpointConnector(tolerance, units).connect(curves)
