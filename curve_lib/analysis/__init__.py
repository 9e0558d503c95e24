"""Curve algorithms.

This module holds the algorithms that turn raw offset and clip output into
drawable strokes. All of them take plain coordinate lists (or shapely
geometries) and return new coordinate lists.

The module exports:
    EndpointConnector / connect_curves: Greedy joining of curves whose
        endpoints lie within a tolerance.
    RingStitcher / stitch_rings: Splicing of nested offset rings into one
        continuous path per ring family.
    dash_curves: Odd-count dash patterns laid out by arc length.
    BoundaryClipper / clip_curves: Cutting curves at a region boundary,
        keeping the outside pieces.
    buffer_collect_rings, buffer_out_and_in, buffer_collect_polygons:
        Iterative polygon offsetting.

Example usage:
    Concentric outline drawn as one stroke::

        import numpy as np
        from curve_lib.analysis import buffer_collect_rings, RingStitcher

        ring_set = buffer_collect_rings(region, [-2.0] * 5)
        paths = RingStitcher(rng=np.random.default_rng(1)).stitch_ring_set(ring_set)

    Dashed strokes kept clear of a label::

        from curve_lib.analysis import clip_curves, dash_curves

        visible = clip_curves(strokes, label_box)
        dashes = dash_curves(visible, dash_length=4.0, gap_length=6.0)
"""

from .clip import BoundaryClipper, clip_curves
from .connect import EndpointConnector, EndpointMatch, connect_curves, join_curves
from .dash import dash_count_for, dash_curve, dash_curves
from .offset import buffer_collect_polygons, buffer_collect_rings, buffer_out_and_in, buffer_polygon
from .stitch import RingStitcher, rotate_ring, stitch_rings

__all__ = [
    'EndpointConnector', 'EndpointMatch', 'connect_curves', 'join_curves',
    'RingStitcher', 'rotate_ring', 'stitch_rings',
    'dash_count_for', 'dash_curve', 'dash_curves',
    'BoundaryClipper', 'clip_curves',
    'buffer_polygon', 'buffer_collect_rings', 'buffer_out_and_in', 'buffer_collect_polygons',
]
