"""Unit tests for curve_lib.config.

Tests cover:
    - configure_logging: level, handlers, third-party logger levels
    - default values used by the algorithms
"""

import logging
import os
import tempfile
import unittest

from curve_lib import config
from curve_lib.config import configure_logging


class TestConfigureLogging(unittest.TestCase):
    """Tests for configure_logging function."""

    def setUp(self):
        """Save original logging state."""
        self.root_logger = logging.getLogger()
        self.original_handlers = self.root_logger.handlers.copy()
        self.original_level = self.root_logger.level

    def tearDown(self):
        """Close handlers added by the test and restore logging state."""
        for handler in self.root_logger.handlers:
            if handler not in self.original_handlers:
                handler.close()
        self.root_logger.handlers = self.original_handlers
        self.root_logger.setLevel(self.original_level)

    def test_sets_level(self):
        configure_logging(level='DEBUG')
        self.assertEqual(self.root_logger.level, logging.DEBUG)

    def test_level_is_case_insensitive(self):
        configure_logging(level='warning')
        self.assertEqual(self.root_logger.level, logging.WARNING)

    def test_unknown_level_falls_back_to_info(self):
        configure_logging(level='CHATTY')
        self.assertEqual(self.root_logger.level, logging.INFO)

    def test_adds_console_handler(self):
        configure_logging(level='INFO')
        stream_handlers = [
            h for h in self.root_logger.handlers
            if isinstance(h, logging.StreamHandler) and not isinstance(h, logging.FileHandler)
        ]
        self.assertEqual(len(stream_handlers), 1)

    def test_with_file(self):
        with tempfile.NamedTemporaryFile(mode='w', suffix='.log', delete=False) as f:
            log_file = f.name

        try:
            configure_logging(level='INFO', log_file=log_file)
            file_handlers = [
                h for h in self.root_logger.handlers
                if isinstance(h, logging.FileHandler)
            ]
            self.assertEqual(len(file_handlers), 1)
            for handler in file_handlers:
                handler.close()
        finally:
            os.unlink(log_file)

    def test_clears_existing_handlers(self):
        self.root_logger.addHandler(logging.StreamHandler())
        self.root_logger.addHandler(logging.StreamHandler())

        configure_logging(level='INFO')

        self.assertEqual(len(self.root_logger.handlers), 1)

    def test_quiets_third_party_loggers(self):
        configure_logging(level='DEBUG')
        self.assertEqual(logging.getLogger('PIL').level, logging.WARNING)
        self.assertEqual(logging.getLogger('shapely').level, logging.WARNING)


class TestDefaults(unittest.TestCase):
    """Sanity checks on configured defaults."""

    def test_positive_tolerances(self):
        self.assertGreater(config.DEFAULT_SIMPLIFY_TOLERANCE, 0)
        self.assertGreater(config.DASH_CONNECT_TOLERANCE, 0)

    def test_preview_fits_margin(self):
        self.assertGreater(config.DEFAULT_PREVIEW_SIZE, 2 * config.DEFAULT_PREVIEW_MARGIN)

    def test_buffer_segments(self):
        self.assertIsInstance(config.BUFFER_QUAD_SEGMENTS, int)
        self.assertGreaterEqual(config.BUFFER_QUAD_SEGMENTS, 1)


if __name__ == '__main__':
    unittest.main()
