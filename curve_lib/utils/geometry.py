"""Geometry primitives used by the curve algorithms.

This module wraps shapely and numpy behind one small, unit-aware API so
every algorithm measures, samples and cleans curves the same way. Curves go
in and come out as plain coordinate lists; shapely geometries are built on
the fly and never handed back where a curve is expected.

Lengths and distances passed in or returned are in meters. Coordinates are
planar and in the unit described by a ``LinearUnits`` value (``METERS`` by
default), so a distance measured between coordinates is scaled by
``units.meters_per_unit``.

The module provides the following functions:
    distance: Distance between two positions.
    curve_length: Arc length of a curve.
    along: Position at a distance along a curve.
    slice_along: Sub-curve between two distances along a curve.
    nearest_point_on_line: Projection of a position onto a curve.
    line_intersections: Crossings of a curve with a region boundary.
    point_in_region: Strict containment test.
    clean_coords: Remove duplicate and collinear positions.
    clean_and_simplify_curve: Clean plus Douglas-Peucker simplification.
    clean_empty_curves / clean_empty_polygons: Drop zero length/area members.
    bbox_of, bbox_at_center, bbox_contains, bbox_overlap: Bounding boxes.
    bbox_clip_curves, bbox_clip_polygons: Cut geometry to a bounding box.
    union_polygons: Union of a list of polygons.
    filter_curves_shorter_than: Length filter.

Example usage:
    Measuring and sampling::

        from curve_lib.utils.geometry import along, curve_length

        curve = [(0, 0), (10, 0), (10, 10)]
        curve_length(curve)        # 20.0
        along(curve, 15.0)         # (10.0, 5.0)

    Cleaning::

        from curve_lib.utils.geometry import clean_coords

        clean_coords([(0, 0), (0, 0), (5, 0), (10, 0)])  # [(0.0, 0.0), (10.0, 0.0)]
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Sequence

import numpy as np
import shapely
from shapely.geometry import LineString, MultiPolygon, Point, Polygon
from shapely.geometry.base import BaseGeometry
from shapely.ops import substring, unary_union

from ..config import DEFAULT_SIMPLIFY_TOLERANCE
from ..domain.curves import (
    as_region,
    destructure_curves,
    destructure_polygons,
    restructure_curves,
    to_curve,
    to_position,
)
from ..domain.geometry import BBox, Curve, MultiCurve, Position, position_distance
from ..domain.units import METERS, LinearUnits


@dataclass(frozen=True)
class NearestPoint:
    """Result of projecting a position onto a curve.

    Attributes:
        position: Closest position on the curve.
        distance: Distance in meters from the projected position to it.
        arc_location: Distance in meters along the curve to ``position``.
        index: Index of the curve coordinate starting the segment that
            holds ``position``.
    """
    position: Position
    distance: float
    arc_location: float
    index: int


def distance(a: Sequence[float], b: Sequence[float], units: LinearUnits = METERS) -> float:
    """Distance in meters between two positions."""
    return units.to_meters(position_distance(a, b))


def curve_length(curve: Sequence[Sequence[float]], units: LinearUnits = METERS) -> float:
    """Arc length of a curve in meters. Curves with fewer than 2 positions have length 0."""
    if len(curve) < 2:
        return 0.0
    coords = np.asarray(curve, dtype=float)[:, :2]
    return units.to_meters(float(np.sum(np.hypot(*np.diff(coords, axis=0).T))))


def along(curve: Sequence[Sequence[float]], distance_m: float,
          units: LinearUnits = METERS) -> Position:
    """Position at a given distance along a curve.

    Args:
        curve: Curve with at least 2 positions.
        distance_m: Distance from the start in meters. Values outside
            [0, length] are clamped to the curve's ends.
        units: Units of the curve's coordinates.

    Returns:
        The interpolated position.
    """
    line = LineString(curve)
    point = line.interpolate(max(0.0, units.from_meters(distance_m)))
    return to_position(point.coords[0])


def slice_along(curve: Sequence[Sequence[float]], start_m: float, end_m: float,
                units: LinearUnits = METERS) -> Curve:
    """Part of a curve between two distances along it.

    Returns an empty list when the slice collapses to a single position.
    """
    line = LineString(curve)
    part = substring(line, units.from_meters(start_m), units.from_meters(end_m))
    if part.is_empty or part.geom_type != 'LineString':
        return []
    return to_curve(part.coords)


def nearest_point_on_line(curve: Sequence[Sequence[float]], point: Sequence[float],
                          units: LinearUnits = METERS) -> NearestPoint:
    """Project a position onto a curve.

    Args:
        curve: Curve with at least 2 positions.
        point: Position to project.
        units: Units of the coordinates.

    Returns:
        NearestPoint with the projected position, its distance from
        ``point``, its arc location along the curve and the index of the
        segment holding it.
    """
    line = LineString(curve)
    location = line.project(Point(point[0], point[1]))
    position = to_position(line.interpolate(location).coords[0])

    coords = np.asarray(line.coords, dtype=float)[:, :2]
    cumulative = np.concatenate([[0.0], np.cumsum(np.hypot(*np.diff(coords, axis=0).T))])
    index = int(np.searchsorted(cumulative, location, side='right')) - 1
    index = min(max(index, 0), len(coords) - 2)

    return NearestPoint(
        position=position,
        distance=units.to_meters(position_distance(position, point)),
        arc_location=units.to_meters(location),
        index=index,
    )


def line_intersections(curve: Sequence[Sequence[float]], region: Any) -> list[Position]:
    """Positions where a curve crosses the boundary of a region.

    Stretches where the curve runs along the boundary contribute both of
    their ends.
    """
    boundary = as_region(region).boundary
    if boundary.is_empty:
        return []
    crossing = LineString(curve).intersection(boundary)
    return _collect_points(crossing)


def _collect_points(geometry: BaseGeometry) -> list[Position]:
    if geometry.is_empty:
        return []
    if geometry.geom_type == 'Point':
        return [to_position(geometry.coords[0])]
    if geometry.geom_type in ('LineString', 'LinearRing'):
        coords = list(geometry.coords)
        return [to_position(coords[0]), to_position(coords[-1])]
    points = []
    for part in geometry.geoms:
        points.extend(_collect_points(part))
    return points


def point_in_region(point: Sequence[float], region: Any) -> bool:
    """Check if a position lies strictly inside a region (boundary excluded)."""
    return Point(point[0], point[1]).within(as_region(region))


def clean_coords(curve: Sequence[Sequence[float]]) -> Curve:
    """Remove duplicate and collinear positions from a curve.

    Consecutive duplicates are dropped first. Then a position is removed when
    it lies on the straight segment joining its kept predecessor and its
    successor, so straight runs collapse to their ends while reversals are
    kept.

    Args:
        curve: Curve to clean.

    Returns:
        New curve, or an empty list if fewer than 2 distinct positions remain.
    """
    if len(curve) < 2:
        return []

    coords = np.asarray(curve, dtype=float)
    keep = np.ones(len(coords), dtype=bool)
    keep[1:] = np.any(coords[1:] != coords[:-1], axis=1)
    coords = coords[keep]
    if len(coords) < 2:
        return []

    kept = [coords[0]]
    for position in coords[1:-1]:
        kept.append(position)
        if len(kept) > 2 and _on_segment(kept[-3], kept[-1], kept[-2]):
            del kept[-2]
    kept.append(coords[-1])
    if len(kept) > 2 and _on_segment(kept[-3], kept[-1], kept[-2]):
        del kept[-2]

    cleaned = [to_position(p) for p in kept]
    if len(set(cleaned)) < 2:
        return []
    return cleaned


def _on_segment(start: np.ndarray, end: np.ndarray, position: np.ndarray) -> bool:
    """Check if ``position`` is exactly on the segment from start to end."""
    dxc = position[0] - start[0]
    dyc = position[1] - start[1]
    dxl = end[0] - start[0]
    dyl = end[1] - start[1]
    # A reversal folds back onto its start: no segment to lie on
    if dxl == 0 and dyl == 0:
        return False
    if dxc * dyl - dyc * dxl != 0:
        return False
    if abs(dxl) >= abs(dyl):
        if dxl > 0:
            return start[0] <= position[0] <= end[0]
        return end[0] <= position[0] <= start[0]
    if dyl > 0:
        return start[1] <= position[1] <= end[1]
    return end[1] <= position[1] <= start[1]


def clean_and_simplify_curve(curve: Sequence[Sequence[float]],
                             tolerance: float = DEFAULT_SIMPLIFY_TOLERANCE) -> Curve:
    """Clean a curve, simplify it and clean again.

    Offset curves carry near-duplicate positions that break intersection
    math; Douglas-Peucker simplification with a tiny tolerance removes them.

    Args:
        curve: Curve to clean.
        tolerance: Simplification tolerance in coordinate units.

    Returns:
        New curve, or an empty list if it degenerates.
    """
    cleaned = clean_coords(curve)
    if not cleaned:
        return []
    simplified = shapely.simplify(LineString(cleaned), tolerance, preserve_topology=False)
    if simplified.is_empty:
        return []
    return clean_coords(list(simplified.coords))


def clean_and_simplify_curves(curves: Iterable[Sequence[Sequence[float]]],
                              tolerance: float = DEFAULT_SIMPLIFY_TOLERANCE) -> MultiCurve:
    """Clean and simplify every curve, dropping those with zero length."""
    result = []
    for curve in curves:
        cleaned = clean_and_simplify_curve(curve, tolerance)
        if cleaned and curve_length(cleaned) > 0:
            result.append(cleaned)
    return result


def clean_and_simplify_polygons(region: Any,
                                tolerance: float = DEFAULT_SIMPLIFY_TOLERANCE) -> list[Polygon]:
    """Simplify the polygons of a region, dropping those with zero area."""
    polygons = []
    for polygon in destructure_polygons(region):
        simplified = polygon.simplify(tolerance, preserve_topology=True)
        polygons.extend(destructure_polygons(simplified))
    return clean_empty_polygons(polygons)


def clean_empty_curves(curves: Iterable[Sequence[Sequence[float]]]) -> MultiCurve:
    """Keep only curves with positive length."""
    return [to_curve(c) for c in curves if curve_length(c) > 0]


def clean_empty_polygons(region: Any) -> list[Polygon]:
    """Keep only polygons with positive area."""
    return [p for p in destructure_polygons(region) if p.area > 0]


def filter_curves_shorter_than(curves: Iterable[Sequence[Sequence[float]]], min_length: float,
                               units: LinearUnits = METERS) -> MultiCurve:
    """Keep curves whose length in meters is at least ``min_length``."""
    return [to_curve(c) for c in curves if curve_length(c, units) >= min_length]


def bbox_of(geometry: Any) -> BBox:
    """Bounding box of a shapely geometry, a curve or a list of curves."""
    if isinstance(geometry, BaseGeometry):
        if geometry.is_empty:
            return BBox(0, 0, 0, 0)
        return BBox.from_tuple(geometry.bounds)
    curves = destructure_curves(geometry)
    return BBox.from_positions(p for c in curves for p in c)


def bbox_at_center(center: Sequence[float], width: float, height: float) -> BBox:
    return BBox.at_center(center, width, height)


def bbox_contains(bbox: BBox, position: Sequence[float]) -> bool:
    return bbox.contains(position)


def bbox_overlap(a: BBox, b: BBox) -> bool:
    """True if the boxes share any point, edges included."""
    return a.overlaps(b)


def bbox_clip_curves(curves: Any, bbox: BBox) -> MultiCurve:
    """Cut curves to a bounding box."""
    clipped = shapely.clip_by_rect(restructure_curves(destructure_curves(curves)), *bbox.to_tuple())
    return destructure_curves(clipped)


def bbox_clip_polygons(region: Any, bbox: BBox) -> list[Polygon]:
    """Cut polygons to a bounding box."""
    clipped = shapely.clip_by_rect(as_region(region), *bbox.to_tuple())
    return destructure_polygons(clipped)


def union_polygons(polygons: Iterable[Polygon]) -> Polygon | MultiPolygon:
    """Union of polygons; an empty Polygon for no input."""
    polygons = list(polygons)
    if not polygons:
        return Polygon()
    if len(polygons) == 1:
        return polygons[0]
    return unary_union(polygons)
