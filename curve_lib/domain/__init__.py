"""Domain objects for curve processing.

This module provides the value objects and shapes shared by every algorithm
in the package: positions and curves, bounding boxes, linear units and the
records that describe rings produced by iterative offsetting.

The module exports the following:

Geometry:
    Position, Curve, MultiCurve, PolygonCoords: Plain coordinate shapes.
    BBox: Immutable bounding box with an inclusive overlap test.

Curve model:
    destructure_curves / restructure_curves: Multi form <-> list of curves.
    destructure_polygons / restructure_polygons: Same for polygons.
    as_region: Normalize a clip or buffer region.

Units:
    LinearUnits, METERS, FEET: Coordinate units and meter conversion.

Rings:
    BufferRingRecord: Group, depth and curve index of an offset ring.
    RingDeviation: Connection from an inner ring to its outer ring.
    BufferRingSet: Ring records together with their coordinates.

Example usage:
    Working with curves::

        from curve_lib.domain import BBox, destructure_curves

        curves = destructure_curves([[(0, 0), (10, 0)], [(10, 1), (20, 1)]])
        bbox = BBox.from_positions(curves[0])
        print(bbox.width)  # 10
"""

from .curves import (
    as_region,
    curve_endpoints,
    destructure_curves,
    destructure_polygons,
    empty_multi_curve,
    empty_multi_polygon,
    is_ring,
    polygon_coordinates,
    restructure_curves,
    restructure_polygons,
    to_curve,
)
from .geometry import BBox, Curve, MultiCurve, PolygonCoords, Position
from .rings import BufferRingRecord, BufferRingSet, RingDeviation
from .units import FEET, METERS, LinearUnits

__all__ = [
    'Position', 'Curve', 'MultiCurve', 'PolygonCoords', 'BBox',
    'as_region', 'curve_endpoints', 'destructure_curves', 'destructure_polygons',
    'empty_multi_curve', 'empty_multi_polygon', 'is_ring', 'polygon_coordinates',
    'restructure_curves', 'restructure_polygons', 'to_curve',
    'LinearUnits', 'METERS', 'FEET',
    'BufferRingRecord', 'RingDeviation', 'BufferRingSet',
]
