"""Service layer for curve processing.

This module provides a high-level facade that combines offsetting,
stitching, dashing and clipping into the operations a map or plotter
renderer actually needs. All methods take and return plain coordinate lists
(or dictionaries of plain values) suitable for JSON serialization.

The module contains one service class:
    PathService: Connects, outlines, dashes and clips curves, and renders
        previews of the results.

Example usage:
    Outline a lake with concentric strokes, keeping clear of a label::

        from curve_lib.api.services import PathService

        service = PathService(seed=42)
        paths = service.clip_outline(lake, [-5.0, -5.0, -5.0], obstacles=[label_box])
        service.preview(paths, region=lake).save('lake.png')

    Dash a trail::

        dashes = service.dash(trail, dash_length=8.0, gap_length=12.0)
        summary = service.summarize(dashes)
        print(summary['count'], summary['total_length'])
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Sequence

import numpy as np
from PIL import Image

from ..analysis.clip import BoundaryClipper
from ..analysis.connect import EndpointConnector
from ..analysis.dash import dash_curves
from ..analysis.offset import buffer_collect_rings
from ..analysis.stitch import RingStitcher
from ..config import DASH_CONNECT_TOLERANCE, DEFAULT_PREVIEW_SIZE, DEFAULT_SIMPLIFY_TOLERANCE
from ..domain.curves import destructure_curves, destructure_polygons
from ..domain.geometry import MultiCurve
from ..domain.units import METERS, LinearUnits
from ..utils.geometry import bbox_of, curve_length, union_polygons
from ..utils.rendering import FILL_COLOR, STROKE_COLOR, render_layers

_logger = logging.getLogger(__name__)

OBSTACLE_COLOR = (230, 120, 120)


class PathService:
    """Service for curve operations.

    Provides a clean interface for callers, hiding how the algorithms are
    chained. Every call creates its own worklists; the only state kept
    between calls is the random generator used for ring rotation, so a
    seeded service produces the same outlines for the same sequence of
    calls.

    Attributes:
        units: Units of all coordinates handled by the service.
        rng: numpy Generator shared by the ring stitching calls.
        simplify_tolerance: Tolerance used when cleaning curves for clipping.

    Example:
        >>> service = PathService(seed=0)
        >>> service.connect([[(0, 0), (1, 0)], [(1, 0), (2, 0)]], tolerance=0.1)
        [[(0.0, 0.0), (2.0, 0.0)]]
    """

    def __init__(self, units: LinearUnits = METERS, seed: Optional[int] = None,
                 simplify_tolerance: float = DEFAULT_SIMPLIFY_TOLERANCE):
        """Initialize the path service.

        Args:
            units: Units of the coordinates passed to and returned by the
                service. Tolerances and lengths are always in meters.
            seed: Seed for ring rotation. None draws fresh entropy.
            simplify_tolerance: Douglas-Peucker tolerance for clipping.
        """
        self.units = units
        self.rng = np.random.default_rng(seed)
        self.simplify_tolerance = simplify_tolerance

    def connect(self, curves: Any, tolerance: float) -> MultiCurve:
        """Join curves whose endpoints lie within ``tolerance`` meters.

        Raises:
            ValueError: If ``tolerance`` is negative.
        """
        try:
            connector = EndpointConnector(tolerance, self.units)
        except ValueError as e:
            _logger.warning("Rejected connect request: %s", e)
            raise
        return connector.connect(curves)

    def outline(self, region: Any, distances: Sequence[float],
                include_input: bool = True) -> MultiCurve:
        """Concentric outline of a region drawn as one path per polygon family.

        Args:
            region: Polygon or multi polygon.
            distances: Offset per step in meters; negative values go inward.
            include_input: Whether the region's own rings are part of the
                outline.

        Returns:
            One continuous path per connected ring family.
        """
        ring_set = buffer_collect_rings(region, distances, include_input, self.units)
        if not len(ring_set):
            _logger.debug("Outline produced no rings")
            return []
        stitcher = RingStitcher(rng=self.rng, units=self.units)
        return stitcher.stitch_ring_set(ring_set)

    def dash(self, curves: Any, dash_length: float, gap_length: float,
             connect_tolerance: float = DASH_CONNECT_TOLERANCE) -> MultiCurve:
        """Dash pattern for curves; see ``curve_lib.analysis.dash``.

        Raises:
            ValueError: If a length is negative or both are zero.
        """
        try:
            return dash_curves(curves, dash_length, gap_length, self.units, connect_tolerance)
        except ValueError as e:
            _logger.warning("Rejected dash request: %s", e)
            raise

    def clip(self, curves: Any, obstacles: Any) -> MultiCurve:
        """Parts of ``curves`` outside the union of ``obstacles``."""
        region = union_polygons(destructure_polygons(obstacles))
        return BoundaryClipper(region, self.simplify_tolerance).clip(curves)

    def clip_outline(self, region: Any, distances: Sequence[float], obstacles: Any,
                     include_input: bool = True) -> MultiCurve:
        """Outline a region, then cut the outline around obstacles."""
        paths = self.outline(region, distances, include_input)
        return self.clip(paths, obstacles)

    def summarize(self, curves: Any) -> Dict[str, Any]:
        """Describe a set of curves.

        Returns:
            Dictionary containing:
                - 'count' (int): Number of curves
                - 'positions' (int): Total number of positions
                - 'total_length' (float): Summed length in meters
                - 'bbox' (tuple): (x_min, y_min, x_max, y_max)
        """
        curves = destructure_curves(curves)
        return {
            'count': len(curves),
            'positions': sum(len(c) for c in curves),
            'total_length': sum(curve_length(c, self.units) for c in curves),
            'bbox': bbox_of(curves).to_tuple(),
        }

    def preview(self, curves: Any, region: Any = None, obstacles: Any = None,
                size: int = DEFAULT_PREVIEW_SIZE) -> Image.Image:
        """Render curves over an optional region and obstacles.

        The region is filled in gray, obstacles in red, and the curves are
        drawn in black on top.
        """
        layers: List[tuple] = []
        if region is not None:
            layers.append(('filled', region, FILL_COLOR))
        if obstacles is not None:
            layers.append(('filled', obstacles, OBSTACLE_COLOR))
        layers.append(('curves', curves, STROKE_COLOR))
        return render_layers(layers, size=size)
