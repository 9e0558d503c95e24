"""Curve processing for rendering.

Tools for turning the output of polygon offsetting and clipping into
drawable strokes: nested contour outlines drawn as one continuous stroke,
dash patterns that look the same at both ends, and strokes cut around
obstacles.

Architecture Overview:
    Geometry primitives come from shapely and numpy, wrapped once in
    curve_lib.utils.geometry so every algorithm measures, samples and cleans
    curves the same way. The algorithms in curve_lib.analysis work on plain
    coordinate lists and return new lists; curve_lib.api chains them for
    callers.

The package is organized into the following modules:
    domain: Positions, curves, bounding boxes, linear units and the records
        that describe offset rings.
    analysis: EndpointConnector, RingStitcher, dashing, BoundaryClipper and
        iterative offsetting.
    utils: Geometry primitives, affine transformations, projection and
        preview rendering.
    api: PathService facade.
    config: Defaults and logging setup.
    cli: The curve-lib-preview command.

Example usage:
    Concentric outline as one stroke::

        from curve_lib import PathService

        service = PathService(seed=3)
        square = [[(0, 0), (20, 0), (20, 20), (0, 20), (0, 0)]]
        paths = service.outline(square, [-2.0, -2.0, -2.0])
        print(len(paths))  # 1

    Low-level connection of fragments::

        from curve_lib.analysis import connect_curves

        joined = connect_curves(fragments, tolerance=0.5)

Attributes:
    __version__ (str): Package version string.
    __all__ (list): List of public symbols exported by this package.
"""

from .analysis import (
    BoundaryClipper,
    EndpointConnector,
    RingStitcher,
    buffer_collect_polygons,
    buffer_collect_rings,
    buffer_out_and_in,
    clip_curves,
    connect_curves,
    dash_curves,
    stitch_rings,
)
from .api import PathService
from .domain import FEET, METERS, BBox, BufferRingRecord, BufferRingSet, LinearUnits, RingDeviation

__all__ = [
    # Domain objects
    'BBox', 'LinearUnits', 'METERS', 'FEET',
    'BufferRingRecord', 'RingDeviation', 'BufferRingSet',
    # Algorithms
    'EndpointConnector', 'connect_curves',
    'RingStitcher', 'stitch_rings',
    'dash_curves',
    'BoundaryClipper', 'clip_curves',
    'buffer_collect_rings', 'buffer_out_and_in', 'buffer_collect_polygons',
    # Services
    'PathService',
]

__version__ = '1.0.0'
