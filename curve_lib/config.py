"""Shared configuration for curve processing.

This module centralizes the default values used by:
    - curve_lib.analysis (connect, stitch, dash, clip, offset)
    - curve_lib.utils.rendering
    - curve_lib.cli

Every operation takes these as keyword defaults, so callers can override
them per call without touching this module.
"""

from __future__ import annotations

import logging

# Douglas-Peucker tolerance for cleaning curves before intersection math,
# in coordinate units
DEFAULT_SIMPLIFY_TOLERANCE = 0.000001

# Endpoint tolerance (meters) used to rejoin fragments before dashing
DASH_CONNECT_TOLERANCE = 10.0

# Segments per quarter circle for round buffer joins
BUFFER_QUAD_SEGMENTS = 8

# Preview rendering
DEFAULT_PREVIEW_SIZE = 512
DEFAULT_PREVIEW_MARGIN = 16
DEFAULT_LINE_WIDTH = 2

DEFAULT_LOG_FORMAT = '%(asctime)s %(levelname)-8s [%(name)s] %(message)s'
DEFAULT_LOG_DATEFMT = '%Y-%m-%d %H:%M:%S'

logger = logging.getLogger(__name__)


def configure_logging(level: str = 'INFO', log_file: str | None = None) -> None:
    """Configure application-wide logging.

    Sets up one formatter for all modules, a console handler and, if
    requested, a file handler. Call this once at program start.

    Args:
        level: Log level string ('DEBUG', 'INFO', 'WARNING', 'ERROR').
        log_file: Optional path to log file. If None, logs to stderr only.

    Example:
        Configure at startup::

            from curve_lib.config import configure_logging
            configure_logging(level='DEBUG', log_file='curve_lib.log')
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    formatter = logging.Formatter(fmt=DEFAULT_LOG_FORMAT, datefmt=DEFAULT_LOG_DATEFMT)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Remove existing handlers to avoid duplicates
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    # Third-party loggers stay at WARNING
    logging.getLogger('PIL').setLevel(logging.WARNING)
    logging.getLogger('shapely').setLevel(logging.WARNING)

    logger.info("Logging configured: level=%s, file=%s", level, log_file or 'stderr')
