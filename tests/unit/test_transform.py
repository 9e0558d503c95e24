"""Unit tests for curve_lib.utils.transform."""

import math
import unittest

from shapely.geometry import LineString, Polygon

from curve_lib.utils.transform import (
    Matrix2D,
    transform_curves,
    transform_geometry,
    transform_polygons,
)


def assert_positions_equal(case, got, want, places=9):
    case.assertEqual(len(got), len(want))
    for p, q in zip(got, want):
        case.assertAlmostEqual(p[0], q[0], places=places)
        case.assertAlmostEqual(p[1], q[1], places=places)


class TestMatrix2D(unittest.TestCase):
    """Tests for Matrix2D construction and composition."""

    def test_identity(self):
        self.assertEqual(Matrix2D.identity().apply((3, 4)), (3.0, 4.0))

    def test_translation(self):
        self.assertEqual(Matrix2D.translation(1, -2).apply((3, 4)), (4.0, 2.0))

    def test_scale(self):
        self.assertEqual(Matrix2D.scale(2, 3).apply((3, 4)), (6.0, 12.0))

    def test_rotation_quarter_turn(self):
        x, y = Matrix2D.rotation(math.pi / 2).apply((1, 0))
        self.assertAlmostEqual(x, 0.0)
        self.assertAlmostEqual(y, 1.0)

    def test_third_ordinate_kept(self):
        self.assertEqual(Matrix2D.translation(1, 1).apply((0, 0, 7)), (1.0, 1.0, 7.0))

    def test_multiply_applies_rightmost_first(self):
        m = Matrix2D.multiply(Matrix2D.translation(10, 0), Matrix2D.scale(2, 2))
        self.assertEqual(m.apply((1, 1)), (12.0, 2.0))

        m = Matrix2D.multiply(Matrix2D.scale(2, 2), Matrix2D.translation(10, 0))
        self.assertEqual(m.apply((1, 1)), (22.0, 2.0))

    def test_multiply_single(self):
        m = Matrix2D.scale(2, 2)
        self.assertEqual(Matrix2D.multiply(m), m)

    def test_multiply_empty_raises(self):
        with self.assertRaises(ValueError):
            Matrix2D.multiply()

    def test_inverse_composes_to_identity(self):
        m = Matrix2D.multiply(
            Matrix2D.translation(5, -3),
            Matrix2D.rotation(0.7),
            Matrix2D.scale(2, 0.5),
        )
        product = Matrix2D.multiply(m, m.inverted())
        for got, want in zip(product.to_array().ravel(), Matrix2D.identity().to_array().ravel()):
            self.assertAlmostEqual(got, want)

    def test_singular_raises(self):
        singular = Matrix2D.scale(0, 1)
        self.assertFalse(singular.is_invertible)
        with self.assertRaises(ValueError):
            singular.inverted()

    def test_determinant(self):
        self.assertEqual(Matrix2D.scale(2, 3).determinant, 6.0)

    def test_to_array(self):
        array = Matrix2D(a=1, b=2, c=3, d=4, e=5, f=6).to_array()
        self.assertEqual(array.tolist(), [[1, 3, 5], [2, 4, 6], [0, 0, 1]])

    def test_frozen(self):
        with self.assertRaises(AttributeError):
            Matrix2D().a = 2.0


class TestTransformFunctions(unittest.TestCase):
    """Tests for transform_curves, transform_polygons and transform_geometry."""

    def setUp(self):
        self.matrix = Matrix2D.multiply(Matrix2D.translation(1, 2), Matrix2D.scale(2, 2))

    def test_transform_curves(self):
        result = transform_curves([[(0, 0), (1, 0)], [(1, 1), (2, 2)]], self.matrix)
        self.assertEqual(result, [[(1.0, 2.0), (3.0, 2.0)], [(3.0, 4.0), (5.0, 6.0)]])

    def test_round_trip(self):
        curves = [[(0.5, 1.5), (7.0, -2.0), (3.0, 3.0)]]
        matrix = Matrix2D.multiply(Matrix2D.rotation(1.1), self.matrix)
        restored = transform_curves(transform_curves(curves, matrix), matrix.inverted())
        assert_positions_equal(self, restored[0], curves[0])

    def test_transform_polygons(self):
        square = [[(0, 0), (1, 0), (1, 1), (0, 1), (0, 0)]]
        result = transform_polygons(square, self.matrix)
        self.assertEqual(len(result), 1)
        self.assertEqual(result[0][0][2], (3.0, 4.0))

    def test_transform_geometry_matches_apply(self):
        line = LineString([(0, 0), (3, 1)])
        moved = transform_geometry(line, self.matrix)
        assert_positions_equal(self, list(moved.coords), [self.matrix.apply(p) for p in line.coords])

    def test_transform_geometry_area(self):
        square = Polygon([(0, 0), (1, 0), (1, 1), (0, 1)])
        self.assertAlmostEqual(transform_geometry(square, self.matrix).area, 4.0)


if __name__ == '__main__':
    unittest.main()
