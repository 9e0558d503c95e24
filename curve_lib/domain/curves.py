"""Curve model: single and multi forms of curves and polygons.

Every operation of the package accepts curves and regions either as plain
coordinate lists or as shapely geometries. This module normalizes both into
one representation and converts back:

    Curve       list of positions, e.g. [(0, 0), (1, 0)]
    MultiCurve  list of curves
    Polygon     list of rings, outer boundary first, holes after it
    MultiPolygon list of polygons

Destructuring always returns new lists, so callers own the result and may
change it freely without touching the input. Members that cannot form a
curve (fewer than 2 positions, empty geometries) are left out rather than
raised, so one bad member never aborts a batch.

Example usage:
    Working with curves::

        from curve_lib.domain.curves import destructure_curves, restructure_curves

        curves = destructure_curves(multi_line_string)
        curves.append([(0, 0), (5, 0)])
        geometry = restructure_curves(curves)

    Regions::

        from curve_lib.domain.curves import as_region

        region = as_region([[(0, 0), (10, 0), (10, 10), (0, 10), (0, 0)]])
        region.area  # 100.0
"""

from __future__ import annotations

import logging
import numbers
from typing import Any, Iterable, Sequence

from shapely.geometry import (
    LineString,
    MultiLineString,
    MultiPolygon,
    Polygon,
)
from shapely.geometry.base import BaseGeometry

from .geometry import Curve, MultiCurve, PolygonCoords, Position, position_distance

logger = logging.getLogger(__name__)

_LINE_TYPES = ('LineString', 'LinearRing')
_POLYGON_TYPES = ('Polygon',)


def to_position(values: Sequence[float]) -> Position:
    """Copy a coordinate sequence into an immutable float tuple."""
    return tuple(float(v) for v in values)


def to_curve(positions: Iterable[Sequence[float]]) -> Curve:
    """Copy an iterable of coordinates into a curve."""
    return [to_position(p) for p in positions]


def nesting_depth(obj: Any) -> int:
    """Nesting depth of a coordinate structure.

    A number has depth 0, a position 1, a curve 2, a polygon 3 and a
    multi polygon 4. Empty lists count as one level.
    """
    depth = 0
    while not isinstance(obj, numbers.Real):
        depth += 1
        if len(obj) == 0:
            break
        obj = obj[0]
    return depth


def destructure_curves(geometry: Any) -> MultiCurve:
    """Split a curve or multi curve into a list of curves.

    Args:
        geometry: A shapely LineString, LinearRing, MultiLineString or
            GeometryCollection, a single curve as a list of positions, or a
            list of curves. None yields an empty list.

    Returns:
        List of curves (lists of position tuples). Members with fewer than
        2 positions are omitted.
    """
    if geometry is None:
        return []

    if _is_geometry_list(geometry):
        return [c for part in geometry for c in destructure_curves(part)]

    if isinstance(geometry, BaseGeometry):
        raw = _curves_from_geometry(geometry)
    else:
        depth = nesting_depth(geometry)
        if depth == 2:
            raw = [geometry]
        elif depth == 3:
            raw = list(geometry)
        elif depth <= 1:
            raw = []
        else:
            raise ValueError(f"Expected a curve or a list of curves, got nesting depth {depth}")

    curves = []
    for member in raw:
        curve = to_curve(member)
        if len(curve) < 2:
            logger.debug("Omitting curve with %d position(s)", len(curve))
            continue
        curves.append(curve)
    return curves


def _curves_from_geometry(geometry: BaseGeometry) -> list:
    if geometry.is_empty:
        return []
    if geometry.geom_type in _LINE_TYPES:
        return [list(geometry.coords)]
    if geometry.geom_type in ('MultiLineString', 'GeometryCollection'):
        result = []
        for part in geometry.geoms:
            result.extend(_curves_from_geometry(part))
        return result
    logger.debug("Ignoring non-linear geometry %s", geometry.geom_type)
    return []


def _is_geometry_list(obj: Any) -> bool:
    return isinstance(obj, (list, tuple)) and len(obj) > 0 and isinstance(obj[0], BaseGeometry)


def restructure_curves(curves: Iterable[Sequence[Sequence[float]]]) -> MultiLineString:
    """Join curves into a single shapely MultiLineString.

    Curves with fewer than 2 positions are omitted. An empty input gives an
    empty MultiLineString.
    """
    lines = [LineString(c) for c in curves if len(c) >= 2]
    if not lines:
        return empty_multi_curve()
    return MultiLineString(lines)


def destructure_polygons(geometry: Any) -> list[Polygon]:
    """Split a polygon or multi polygon into a list of shapely Polygons.

    Args:
        geometry: A shapely Polygon, MultiPolygon or GeometryCollection, a
            polygon as a list of rings, or a list of such polygons.

    Returns:
        List of non-empty shapely Polygons.
    """
    if geometry is None:
        return []

    if isinstance(geometry, BaseGeometry):
        return _polygons_from_geometry(geometry)
    if _is_geometry_list(geometry):
        return [p for part in geometry for p in destructure_polygons(part)]

    depth = nesting_depth(geometry)
    if depth == 3:
        raw = [geometry]
    elif depth == 4:
        raw = list(geometry)
    elif depth <= 2:
        raw = []
    else:
        raise ValueError(f"Expected a polygon or a list of polygons, got nesting depth {depth}")

    polygons = []
    for rings in raw:
        rings = [r for r in rings if _distinct_count(r) >= 3]
        if not rings:
            logger.debug("Omitting polygon without a usable outer ring")
            continue
        polygons.append(Polygon(rings[0], rings[1:]))
    return polygons


def _distinct_count(ring: Sequence[Sequence[float]]) -> int:
    return len({tuple(p) for p in ring})


def _polygons_from_geometry(geometry: BaseGeometry) -> list[Polygon]:
    if geometry.is_empty:
        return []
    if geometry.geom_type in _POLYGON_TYPES:
        return [geometry]
    if geometry.geom_type in ('MultiPolygon', 'GeometryCollection'):
        result = []
        for part in geometry.geoms:
            result.extend(_polygons_from_geometry(part))
        return result
    logger.debug("Ignoring non-areal geometry %s", geometry.geom_type)
    return []


def restructure_polygons(polygons: Iterable[Polygon]) -> MultiPolygon:
    """Join shapely Polygons into a MultiPolygon, dropping empty ones."""
    polygons = [p for p in polygons if not p.is_empty]
    if not polygons:
        return empty_multi_polygon()
    return MultiPolygon(polygons)


def polygon_coordinates(polygon: Polygon) -> PolygonCoords:
    """Rings of a shapely Polygon as coordinate lists, outer ring first."""
    if polygon.is_empty:
        return []
    rings = [to_curve(polygon.exterior.coords)]
    rings.extend(to_curve(interior.coords) for interior in polygon.interiors)
    return rings


def as_region(region: Any) -> Polygon | MultiPolygon:
    """Normalize a clip or buffer region to a shapely areal geometry.

    A single polygon is returned as a Polygon, several as a MultiPolygon.
    Nothing usable yields an empty Polygon.
    """
    if isinstance(region, (Polygon, MultiPolygon)):
        return region
    polygons = destructure_polygons(region)
    if not polygons:
        return Polygon()
    if len(polygons) == 1:
        return polygons[0]
    return MultiPolygon(polygons)


def curve_endpoints(curve: Sequence[Position]) -> tuple[Position, Position]:
    """First and last position of a curve."""
    return curve[0], curve[-1]


def is_ring(curve: Sequence[Position], tolerance: float = 0.0) -> bool:
    """Check if a curve is closed.

    Args:
        curve: Curve to test.
        tolerance: Maximum distance in coordinate units between the first
            and last position.

    Returns:
        True if the curve has at least 3 positions and its ends meet.
    """
    if len(curve) < 3:
        return False
    return position_distance(curve[0], curve[-1]) <= tolerance


def empty_multi_curve() -> MultiLineString:
    return MultiLineString()


def empty_multi_polygon() -> MultiPolygon:
    return MultiPolygon()
