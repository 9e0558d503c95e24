"""Unit tests for curve_lib.utils.rendering."""

import unittest

from PIL import Image

from curve_lib.domain.geometry import BBox
from curve_lib.utils.rendering import (
    BACKGROUND,
    FILL_COLOR,
    fit_matrix,
    render_curves,
    render_layers,
    render_polygons,
)


SQUARE = [(0, 0), (10, 0), (10, 10), (0, 10), (0, 0)]


def drawn_pixels(image):
    """Count pixels that differ from the background."""
    return sum(1 for pixel in image.getdata() if pixel != BACKGROUND)


class TestFitMatrix(unittest.TestCase):
    """Tests for fit_matrix."""

    def test_corners_map_inside_margin(self):
        matrix = fit_matrix(BBox(0, 0, 10, 10), size=100, margin=10)
        x, y = matrix.apply((0, 0))
        self.assertAlmostEqual(x, 10.0)
        self.assertAlmostEqual(y, 90.0)
        x, y = matrix.apply((10, 10))
        self.assertAlmostEqual(x, 90.0)
        self.assertAlmostEqual(y, 10.0)

    def test_aspect_ratio_kept(self):
        matrix = fit_matrix(BBox(0, 0, 20, 10), size=100, margin=0)
        x0, y0 = matrix.apply((0, 0))
        x1, y1 = matrix.apply((20, 10))
        self.assertAlmostEqual(x1 - x0, 2 * (y0 - y1))

    def test_degenerate_box_maps_to_center(self):
        matrix = fit_matrix(BBox(3, 3, 3, 3), size=100, margin=10)
        self.assertEqual(matrix.apply((3, 3)), (50.0, 50.0))


class TestRender(unittest.TestCase):
    """Tests for the render functions."""

    def test_render_curves_size_and_mode(self):
        image = render_curves([[(0, 0), (10, 5)]], size=64)
        self.assertIsInstance(image, Image.Image)
        self.assertEqual(image.size, (64, 64))
        self.assertEqual(image.mode, 'RGB')

    def test_render_curves_draws(self):
        image = render_curves([[(0, 0), (10, 5)]], size=64)
        self.assertGreater(drawn_pixels(image), 0)

    def test_empty_input_gives_blank_image(self):
        image = render_curves([], size=32)
        self.assertEqual(drawn_pixels(image), 0)

    def test_render_polygons_outline(self):
        image = render_polygons([SQUARE], size=64, margin=8)
        self.assertEqual(image.getpixel((32, 32)), BACKGROUND)
        self.assertGreater(drawn_pixels(image), 0)

    def test_render_polygons_filled(self):
        image = render_polygons([SQUARE], size=64, margin=8, fill=True)
        self.assertEqual(image.getpixel((32, 32)), FILL_COLOR)

    def test_filled_hole_uses_background(self):
        hole = [(4, 4), (4, 6), (6, 6), (6, 4), (4, 4)]
        image = render_polygons([SQUARE, hole], size=100, margin=0, line_width=1, fill=True)
        self.assertEqual(image.getpixel((50, 50)), BACKGROUND)
        self.assertEqual(image.getpixel((15, 50)), FILL_COLOR)

    def test_layers_share_fit(self):
        """A small curve next to a large polygon is drawn at the polygon's scale."""
        image = render_layers([
            ('polygons', [SQUARE], (0, 0, 255)),
            ('curves', [[(4, 5), (6, 5)]], (255, 0, 0)),
        ], size=100, margin=0, line_width=1)
        self.assertEqual(image.getpixel((50, 50)), (255, 0, 0))
        self.assertEqual(image.getpixel((20, 50)), BACKGROUND)

    def test_draws_on_given_image(self):
        base = Image.new('RGB', (32, 32), BACKGROUND)
        image = render_layers([('curves', [[(0, 0), (1, 1)]], (0, 0, 0))], size=32, image=base)
        self.assertIs(image, base)

    def test_unknown_kind_raises(self):
        with self.assertRaises(ValueError):
            render_layers([('points', [(0, 0)], (0, 0, 0))])


if __name__ == '__main__':
    unittest.main()
