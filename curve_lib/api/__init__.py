"""API layer for curve processing.

This module provides the service layer that chains the curve algorithms
into ready-made operations with plain-data inputs and outputs.

The module exports one service class:
    PathService: connect, outline, dash, clip, clip_outline, summarize and
        preview.

Example usage:
    Outline a region::

        from curve_lib.api import PathService

        service = PathService(seed=1)
        paths = service.outline(region, [-1.0, -1.0])
"""

from .services import PathService

__all__ = ['PathService']
