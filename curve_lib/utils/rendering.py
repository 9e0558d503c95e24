"""Preview rendering of curves and polygons.

This module rasterizes coordinate lists onto a PIL image, for eyeballing
the output of the curve algorithms (stitched outlines, dash patterns, clip
results) and for the ``curve-lib-preview`` command.

Geometry is scaled uniformly to fit the canvas minus a margin and flipped
vertically, so the y axis points up as in a planar reference system.

The module provides the following functions:
    fit_matrix: Matrix mapping a bounding box onto the canvas.
    render_curves: Draw curves as polylines.
    render_polygons: Draw polygon rings, optionally filled.
    render_layers: Draw several layers with one shared fit.

Example usage:
    Rendering a stitched outline::

        from curve_lib.utils.rendering import render_curves

        image = render_curves(paths, size=512)
        image.save('outline.png')
"""

from __future__ import annotations

import logging
from typing import Any, Optional, Sequence, Tuple

from PIL import Image, ImageDraw

from ..config import DEFAULT_LINE_WIDTH, DEFAULT_PREVIEW_MARGIN, DEFAULT_PREVIEW_SIZE
from ..domain.curves import destructure_curves, destructure_polygons, polygon_coordinates
from ..domain.geometry import BBox
from .transform import Matrix2D

logger = logging.getLogger(__name__)

Color = Tuple[int, int, int]

BACKGROUND = (255, 255, 255)
STROKE_COLOR = (0, 0, 0)
FILL_COLOR = (200, 200, 200)


def fit_matrix(bbox: BBox, size: int = DEFAULT_PREVIEW_SIZE,
               margin: int = DEFAULT_PREVIEW_MARGIN) -> Matrix2D:
    """Matrix mapping ``bbox`` into a square canvas with y flipped.

    The box is scaled uniformly to fit ``size - 2 * margin`` pixels and
    centered. A degenerate box maps to the canvas center.
    """
    available = max(size - 2 * margin, 1)
    extent = max(bbox.width, bbox.height)
    scale = available / extent if extent > 0 else 1.0
    cx, cy = bbox.center
    return Matrix2D.multiply(
        Matrix2D.translation(size / 2, size / 2),
        Matrix2D.scale(scale, -scale),
        Matrix2D.translation(-cx, -cy),
    )


def _pixels(positions: Sequence[Sequence[float]], matrix: Matrix2D) -> list:
    return [matrix.apply(p[:2]) for p in positions]


def render_layers(layers: Sequence[Tuple[str, Any, Color]], size: int = DEFAULT_PREVIEW_SIZE,
                  margin: int = DEFAULT_PREVIEW_MARGIN, line_width: int = DEFAULT_LINE_WIDTH,
                  image: Optional[Image.Image] = None) -> Image.Image:
    """Draw layers of geometry with one shared fit.

    Args:
        layers: ``(kind, geometry, color)`` triples in drawing order. Kind is
            'curves', 'polygons' or 'filled'.
        size: Canvas side in pixels.
        margin: Empty border in pixels.
        line_width: Stroke width in pixels.
        image: Existing RGB image to draw on; a new white one by default.

    Returns:
        The image drawn on.

    Raises:
        ValueError: For an unknown layer kind.
    """
    if image is None:
        image = Image.new('RGB', (size, size), BACKGROUND)
    draw = ImageDraw.Draw(image)

    normalized = []
    positions = []
    for kind, geometry, color in layers:
        if kind == 'curves':
            parts = destructure_curves(geometry)
            positions.extend(p for c in parts for p in c)
        elif kind in ('polygons', 'filled'):
            parts = [polygon_coordinates(p) for p in destructure_polygons(geometry)]
            positions.extend(p for rings in parts for ring in rings for p in ring)
        else:
            raise ValueError(f"unknown layer kind: {kind!r}")
        normalized.append((kind, parts, color))

    if not positions:
        logger.debug("Nothing to render")
        return image

    matrix = fit_matrix(BBox.from_positions(positions), size, margin)
    for kind, parts, color in normalized:
        if kind == 'curves':
            for curve in parts:
                draw.line(_pixels(curve, matrix), fill=color, width=line_width, joint='curve')
            continue
        for rings in parts:
            for i, ring in enumerate(rings):
                pixels = _pixels(ring, matrix)
                if kind == 'filled':
                    # Holes are punched with the background color
                    draw.polygon(pixels, fill=color if i == 0 else BACKGROUND)
                draw.line(pixels, fill=STROKE_COLOR if kind == 'filled' else color, width=line_width)

    return image


def render_curves(curves: Any, size: int = DEFAULT_PREVIEW_SIZE,
                  margin: int = DEFAULT_PREVIEW_MARGIN, line_width: int = DEFAULT_LINE_WIDTH,
                  color: Color = STROKE_COLOR) -> Image.Image:
    """Render curves as polylines on a new white image."""
    return render_layers([('curves', curves, color)], size, margin, line_width)


def render_polygons(region: Any, size: int = DEFAULT_PREVIEW_SIZE,
                    margin: int = DEFAULT_PREVIEW_MARGIN, line_width: int = DEFAULT_LINE_WIDTH,
                    fill: bool = False) -> Image.Image:
    """Render polygon rings on a new white image, filled in gray if ``fill``."""
    if fill:
        return render_layers([('filled', region, FILL_COLOR)], size, margin, line_width)
    return render_layers([('polygons', region, STROKE_COLOR)], size, margin, line_width)
