"""Clipping of curves against a region, keeping the outside parts.

Used to cut strokes around obstacles (labels, symbols, other areas) that
must stay clear. Each curve is cut wherever it crosses the region boundary
and every piece is kept or dropped depending on whether its midpoint lies
inside the region.

Algorithm Overview:
    1. Clean and simplify the curve (offset curves carry near-duplicate
       positions that break intersection math).
    2. Cheap rejection: if the curve's bounding box overlaps none of the
       region polygons' bounding boxes, keep the curve as is.
    3. Zero-length curves that reach this point are dropped.
    4. Cut locations are the start (0), the arc location of every boundary
       crossing and the end (L), sorted with consecutive duplicates removed.
    5. With fewer than 3 cuts the whole curve is classified by its midpoint.
       Otherwise each slice between consecutive cuts is classified by its
       own midpoint. Only pieces whose midpoint is not strictly inside the
       region are kept.
"""

from __future__ import annotations

import logging
from typing import Any

from shapely.geometry import Polygon, MultiPolygon

from ..config import DEFAULT_SIMPLIFY_TOLERANCE
from ..domain.curves import as_region, destructure_curves, destructure_polygons
from ..domain.geometry import BBox, Curve, MultiCurve
from ..utils.geometry import (
    along,
    bbox_of,
    clean_and_simplify_curve,
    curve_length,
    line_intersections,
    nearest_point_on_line,
    point_in_region,
    slice_along,
)

logger = logging.getLogger(__name__)


class BoundaryClipper:
    """Cuts curves at a region boundary and keeps the exterior pieces.

    Attributes:
        region: Shapely Polygon or MultiPolygon to clip against.
        bboxes: Bounding box of every polygon of the region.
        simplify_tolerance: Douglas-Peucker tolerance in coordinate units.

    Example:
        >>> clipper = BoundaryClipper([[(0, 0), (10, 0), (10, 10), (0, 10), (0, 0)]])
        >>> clipper.clip([[(-5, 5), (15, 5)]])
        [[(-5.0, 5.0), (0.0, 5.0)], [(10.0, 5.0), (15.0, 5.0)]]
    """

    def __init__(self, region: Any, simplify_tolerance: float = DEFAULT_SIMPLIFY_TOLERANCE):
        self.region: Polygon | MultiPolygon = as_region(region)
        self.bboxes: list[BBox] = [bbox_of(p) for p in destructure_polygons(self.region)]
        self.simplify_tolerance = simplify_tolerance

    def clip(self, curves: Any) -> MultiCurve:
        """Clip every curve and concatenate the kept pieces.

        Args:
            curves: Curves as coordinate lists or a shapely (Multi)LineString.

        Returns:
            New list of curves lying outside the region.
        """
        remaining: MultiCurve = []
        for curve in destructure_curves(curves):
            remaining.extend(self.clip_curve(curve))
        return remaining

    def clip_curve(self, curve: Curve) -> MultiCurve:
        """Clip a single curve. Returns the kept pieces."""
        cleaned = clean_and_simplify_curve(curve, self.simplify_tolerance)
        if not cleaned:
            logger.debug("Dropping curve that degenerated during cleanup")
            return []

        curve_bbox = bbox_of(cleaned)
        if not any(curve_bbox.overlaps(b) for b in self.bboxes):
            return [cleaned]

        length = curve_length(cleaned)
        if length <= 0:
            return []

        cuts = self.cut_locations(cleaned, length)
        if len(cuts) < 3:
            if self._is_inside(cleaned, length):
                return []
            return [cleaned]

        kept = []
        for start, end in zip(cuts[:-1], cuts[1:]):
            piece = slice_along(cleaned, start, end)
            if not piece:
                continue
            if not self._is_inside(piece, curve_length(piece)):
                kept.append(piece)
        return kept

    def cut_locations(self, curve: Curve, length: float) -> list[float]:
        """Sorted, de-duplicated arc locations where the curve must be cut.

        Always starts with 0 and ends with ``length``.
        """
        locations = [0.0, length]
        for crossing in line_intersections(curve, self.region):
            locations.append(nearest_point_on_line(curve, crossing).arc_location)
        locations.sort()

        deduplicated = []
        for location in locations:
            if not deduplicated or location != deduplicated[-1]:
                deduplicated.append(location)
        return deduplicated

    def _is_inside(self, curve: Curve, length: float) -> bool:
        return point_in_region(along(curve, length / 2), self.region)


def clip_curves(curves: Any, region: Any,
                simplify_tolerance: float = DEFAULT_SIMPLIFY_TOLERANCE) -> MultiCurve:
    """Keep the parts of ``curves`` that lie outside ``region``.

    Convenience wrapper around ``BoundaryClipper``.
    """
    return BoundaryClipper(region, simplify_tolerance).clip(curves)
