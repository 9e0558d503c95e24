"""Iterative polygon offsetting.

Produces the concentric ring families that RingStitcher splices together,
and buffered polygon lists for filling or closing small gaps.

The module provides the following functions:
    buffer_collect_rings: Offset every polygon step by step and record each
        resulting ring with its group id and depth.
    buffer_out_and_in: Apply a sequence of offsets to a whole region and
        return only the final polygons.
    buffer_collect_polygons: Like buffer_out_and_in, but collect the
        polygons of every step.

Example usage:
    Concentric outlines of a square, 1 m apart::

        from curve_lib.analysis.offset import buffer_collect_rings

        square = [[(0, 0), (10, 0), (10, 10), (0, 10), (0, 0)]]
        ring_set = buffer_collect_rings(square, [-1.0] * 4)
        for record in ring_set.records:
            print(record.group_id, record.depth, len(ring_set.curves[record.curve_index]))
"""

from __future__ import annotations

import logging
from typing import Any, Sequence

from shapely.geometry import Polygon

from ..config import BUFFER_QUAD_SEGMENTS, DEFAULT_SIMPLIFY_TOLERANCE
from ..domain.curves import as_region, destructure_polygons, polygon_coordinates
from ..domain.rings import BufferRingSet
from ..domain.units import METERS, LinearUnits
from ..utils.geometry import clean_and_simplify_polygons, clean_empty_polygons

logger = logging.getLogger(__name__)


def buffer_polygon(polygon: Any, distance_m: float, units: LinearUnits = METERS,
                   quad_segs: int = BUFFER_QUAD_SEGMENTS) -> list[Polygon]:
    """Offset a polygon by ``distance_m`` meters (negative shrinks).

    Returns:
        The resulting polygons; empty when the polygon collapses.
    """
    buffered = as_region(polygon).buffer(units.from_meters(distance_m), quad_segs=quad_segs)
    return destructure_polygons(buffered)


def buffer_collect_rings(region: Any, distances: Sequence[float], include_input: bool = True,
                         units: LinearUnits = METERS,
                         quad_segs: int = BUFFER_QUAD_SEGMENTS) -> BufferRingSet:
    """Offset every polygon of a region step by step, recording all rings.

    Each polygon of the region starts its own group (group ids are the
    polygon's position in the region). Its rings are recorded at depth 0 if
    ``include_input`` is set. Step ``i`` offsets every polygon produced by
    step ``i - 1`` by ``distances[i]`` and records every ring of the result
    at depth ``i + 1``. A polygon that collapses ends its branch.

    Args:
        region: Polygon or multi polygon (coordinate lists or shapely).
        distances: Offset per step in meters; negative values shrink.
        include_input: Whether to record the source rings at depth 0.
        units: Units of the coordinates.
        quad_segs: Segments per quarter circle for round joins.

    Returns:
        BufferRingSet with one record per ring.
    """
    ring_set = BufferRingSet()

    for group_id, source in enumerate(destructure_polygons(region)):
        if include_input:
            for ring in polygon_coordinates(source):
                ring_set.add(group_id, 0, ring)

        current = [source]
        for step, distance_m in enumerate(distances):
            produced = []
            for polygon in current:
                produced.extend(buffer_polygon(polygon, distance_m, units, quad_segs))
            for polygon in produced:
                for ring in polygon_coordinates(polygon):
                    ring_set.add(group_id, step + 1, ring)
            if not produced:
                logger.debug("Group %d collapsed at step %d", group_id, step + 1)
                break
            current = produced

    logger.debug("Collected %d rings over %d steps", len(ring_set), len(distances))
    return ring_set


def buffer_out_and_in(region: Any, distances: Sequence[float], units: LinearUnits = METERS,
                      quad_segs: int = BUFFER_QUAD_SEGMENTS) -> list[Polygon]:
    """Apply a sequence of offsets to a whole region.

    Typically a positive then a negative distance, which closes gaps and
    narrow inlets smaller than twice the distance. Zero-area members are
    removed first. An offset that empties the region stops the sequence and
    the last non-empty result is returned.
    """
    polygons = clean_empty_polygons(region)
    if not polygons:
        return []

    current = as_region(polygons)
    for distance_m in distances:
        buffered = current.buffer(units.from_meters(distance_m), quad_segs=quad_segs)
        if buffered.is_empty:
            logger.debug("Offset of %.3f m emptied the region, stopping", distance_m)
            break
        current = buffered
    return destructure_polygons(current)


def buffer_collect_polygons(region: Any, distances: Sequence[float], include_input: bool = True,
                            units: LinearUnits = METERS,
                            quad_segs: int = BUFFER_QUAD_SEGMENTS,
                            simplify_tolerance: float = DEFAULT_SIMPLIFY_TOLERANCE) -> list[Polygon]:
    """Apply offsets to a whole region in sequence, collecting every step.

    Each intermediate result is cleaned and simplified before it is
    collected and offset again.
    """
    polygons = destructure_polygons(region) if include_input else []

    current = as_region(region)
    if current.is_empty:
        return polygons

    for distance_m in distances:
        buffered = current.buffer(units.from_meters(distance_m), quad_segs=quad_segs)
        if buffered.is_empty:
            break
        step_polygons = clean_and_simplify_polygons(buffered, simplify_tolerance)
        if not step_polygons:
            break
        polygons.extend(step_polygons)
        current = as_region(step_polygons)
    return polygons
