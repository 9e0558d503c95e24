"""Utility functions for curve processing.

Geometry utilities (shapely and numpy behind a unit-aware API):
    distance, curve_length, along, slice_along: Measuring and sampling.
    nearest_point_on_line: Projection of a position onto a curve.
    line_intersections, point_in_region: Region tests.
    clean_coords, clean_and_simplify_curve(s), clean_and_simplify_polygons,
    clean_empty_curves, clean_empty_polygons, filter_curves_shorter_than:
        Cleanup.
    bbox_of, bbox_at_center, bbox_contains, bbox_overlap, bbox_clip_curves,
    bbox_clip_polygons, union_polygons: Boxes and unions.

Transformations:
    Matrix2D, transform_curves, transform_polygons, transform_geometry.

Projection:
    ProjectionProperties, ProjectableGeometry, project_curves,
    project_polygons, project_geometry.

Rendering:
    render_curves, render_polygons, render_layers: PIL previews.

Example usage:
    Measuring a curve in feet::

        from curve_lib.domain import FEET
        from curve_lib.utils import curve_length

        curve_length([(0, 0), (100, 0)], units=FEET)  # 30.48 (meters)
"""

from .geometry import (
    NearestPoint,
    along,
    bbox_at_center,
    bbox_clip_curves,
    bbox_clip_polygons,
    bbox_contains,
    bbox_of,
    bbox_overlap,
    clean_and_simplify_curve,
    clean_and_simplify_curves,
    clean_and_simplify_polygons,
    clean_coords,
    clean_empty_curves,
    clean_empty_polygons,
    curve_length,
    distance,
    filter_curves_shorter_than,
    line_intersections,
    nearest_point_on_line,
    point_in_region,
    slice_along,
    union_polygons,
)
from .projection import (
    ProjectableGeometry,
    ProjectionProperties,
    project_curves,
    project_geometry,
    project_polygons,
)
from .rendering import render_curves, render_layers, render_polygons
from .transform import Matrix2D, transform_curves, transform_geometry, transform_polygons

__all__ = [
    'NearestPoint', 'distance', 'curve_length', 'along', 'slice_along',
    'nearest_point_on_line', 'line_intersections', 'point_in_region',
    'clean_coords', 'clean_and_simplify_curve', 'clean_and_simplify_curves',
    'clean_and_simplify_polygons', 'clean_empty_curves', 'clean_empty_polygons',
    'filter_curves_shorter_than',
    'bbox_of', 'bbox_at_center', 'bbox_contains', 'bbox_overlap',
    'bbox_clip_curves', 'bbox_clip_polygons', 'union_polygons',
    'Matrix2D', 'transform_curves', 'transform_polygons', 'transform_geometry',
    'ProjectionProperties', 'ProjectableGeometry',
    'project_curves', 'project_polygons', 'project_geometry',
    'render_curves', 'render_polygons', 'render_layers',
]
