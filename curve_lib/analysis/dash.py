"""Dash pattern generation by arc length.

A dash pattern is laid out as repeating periods of ``dash_length / 2``,
``gap_length``, ``dash_length / 2``. Each period contributes one 2-point
curve spanning its middle ``gap_length`` part, so consecutive periods
leave a ``dash_length`` spacing between emitted pieces.

Note the naming: the emitted pieces are ``gap_length`` long and
``dash_length`` is the blank spacing between them. The names follow the
pattern's period layout (half dash, gap, half dash), not the ink.

Example usage:
    A 30 m line with ``dash_length=4`` and ``gap_length=6`` has three 10 m
    periods and yields three 6 m pieces with 4 m of blank between them and
    2 m of blank at each end::

        from curve_lib.analysis.dash import dash_curves

        dash_curves([[(0, 0), (30, 0)]], dash_length=4.0, gap_length=6.0)
        # [[(2.0, 0.0), (8.0, 0.0)],
        #  [(12.0, 0.0), (18.0, 0.0)],
        #  [(22.0, 0.0), (28.0, 0.0)]]

The number of periods on a curve is always odd and the requested lengths
are scaled so a whole number of periods fits the curve exactly. Both ends of
a curve therefore look the same and a closed ring shows no seam.

Fragments are joined first (EndpointConnector with ``connect_tolerance``)
so that a stroke split into pieces gets one consistent phase instead of
restarting the pattern at every piece. The join also bridges any gap
narrower than the tolerance, so cut curves around obstacles after dashing,
not before.
"""

from __future__ import annotations

import logging
import math
from typing import Any

from ..config import DASH_CONNECT_TOLERANCE
from ..domain.geometry import Curve, MultiCurve
from ..domain.units import METERS, LinearUnits
from ..utils.geometry import along, curve_length
from .connect import connect_curves

logger = logging.getLogger(__name__)


def dash_count_for(length: float, period: float) -> int:
    """Number of dash periods for a curve of ``length`` meters.

    The ratio is rounded half up and bumped to the next odd number.
    """
    count = int(math.floor(length / period + 0.5))
    if count % 2 == 0:
        count += 1
    return count


def dash_curve(curve: Curve, dash_length: float, gap_length: float,
               units: LinearUnits = METERS) -> MultiCurve:
    """Dash a single curve.

    Args:
        curve: Curve to dash.
        dash_length: Blank spacing in meters between emitted pieces, split
            in halves at both ends of every period.
        gap_length: Length in meters of the piece emitted per period (the
            drawn part).
        units: Units of the curve coordinates.

    Returns:
        List of 2-point curves, one per period. Empty for zero-length curves.
    """
    length = curve_length(curve, units)
    if length <= 0:
        return []

    period = dash_length / 2 + gap_length + dash_length / 2
    count = dash_count_for(length, period)

    # Scale so exactly `count` periods fit the curve
    scaled_period = length / count
    scaled_dash = scaled_period * dash_length / period
    scaled_gap = scaled_period * gap_length / period

    dashes = []
    for i in range(count):
        start = i * scaled_period + scaled_dash / 2
        dashes.append([
            along(curve, start, units),
            along(curve, start + scaled_gap, units),
        ])
    return dashes


def dash_curves(curves: Any, dash_length: float, gap_length: float,
                units: LinearUnits = METERS,
                connect_tolerance: float = DASH_CONNECT_TOLERANCE) -> MultiCurve:
    """Convert curves into a dash pattern.

    Args:
        curves: Curves as coordinate lists or a shapely (Multi)LineString.
        dash_length: Blank spacing in meters between pieces (see the
            module docstring for the naming).
        gap_length: Length in meters of every emitted (drawn) piece.
        units: Units of the curve coordinates.
        connect_tolerance: Endpoint tolerance in meters for joining
            fragments before dashing.

    Returns:
        List of 2-point curves.

    Raises:
        ValueError: If a length is negative or the period is zero.
    """
    if dash_length < 0 or gap_length < 0:
        raise ValueError(f"dash and gap lengths must be non-negative, got {dash_length}, {gap_length}")
    if dash_length + gap_length <= 0:
        raise ValueError("dash_length + gap_length must be positive")

    connected = connect_curves(curves, connect_tolerance, units)
    dashes: MultiCurve = []
    for curve in connected:
        dashes.extend(dash_curve(curve, dash_length, gap_length, units))

    logger.debug("Dashed %d curves into %d dashes", len(connected), len(dashes))
    return dashes
