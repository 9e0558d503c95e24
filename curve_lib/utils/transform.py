"""2D affine transformations of curves and polygons.

A ``Matrix2D`` holds the six coefficients of an affine map in the canvas
convention::

    x' = a * x + c * y + e
    y' = b * x + d * y + f

which is the matrix::

    [a  c  e]
    [b  d  f]
    [0  0  1]

Matrices are composed with ``Matrix2D.multiply``; the rightmost matrix is
applied first, so ``multiply(translation, scale)`` scales and then
translates.

Example usage:
    Placing curves on a page::

        import math
        from curve_lib.utils.transform import Matrix2D, transform_curves

        matrix = Matrix2D.multiply(
            Matrix2D.translation(100, 50),
            Matrix2D.rotation(math.pi / 2),
            Matrix2D.scale(2, 2),
        )
        placed = transform_curves(curves, matrix)
        restored = transform_curves(placed, matrix.inverted())
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Sequence

import numpy as np
from shapely import affinity
from shapely.geometry.base import BaseGeometry

from ..domain.curves import destructure_curves, polygon_coordinates, destructure_polygons
from ..domain.geometry import MultiCurve, Position, PolygonCoords


@dataclass(frozen=True)
class Matrix2D:
    """Immutable 2D affine matrix."""
    a: float = 1.0
    b: float = 0.0
    c: float = 0.0
    d: float = 1.0
    e: float = 0.0
    f: float = 0.0

    @classmethod
    def identity(cls) -> Matrix2D:
        return cls()

    @classmethod
    def scale(cls, sx: float, sy: float) -> Matrix2D:
        return cls(a=sx, d=sy)

    @classmethod
    def translation(cls, tx: float, ty: float) -> Matrix2D:
        return cls(e=tx, f=ty)

    @classmethod
    def rotation(cls, radians: float) -> Matrix2D:
        """Counter-clockwise rotation about the origin."""
        cos, sin = math.cos(radians), math.sin(radians)
        return cls(a=cos, b=sin, c=-sin, d=cos)

    @staticmethod
    def multiply(*matrices: Matrix2D) -> Matrix2D:
        """Compose matrices left to right; the last one is applied first.

        Raises:
            ValueError: If no matrix is given.
        """
        if not matrices:
            raise ValueError("multiply() needs at least one matrix")
        result = matrices[0]
        for m in matrices[1:]:
            result = Matrix2D(
                a=result.a * m.a + result.c * m.b,
                b=result.b * m.a + result.d * m.b,
                c=result.a * m.c + result.c * m.d,
                d=result.b * m.c + result.d * m.d,
                e=result.a * m.e + result.c * m.f + result.e,
                f=result.b * m.e + result.d * m.f + result.f,
            )
        return result

    @property
    def determinant(self) -> float:
        return self.a * self.d - self.b * self.c

    @property
    def is_invertible(self) -> bool:
        return self.determinant != 0

    def inverted(self) -> Matrix2D:
        """Inverse matrix.

        Raises:
            ValueError: If the matrix is singular.
        """
        dt = self.determinant
        if dt == 0:
            raise ValueError(f"matrix is not invertible: {self}")
        return Matrix2D(
            a=self.d / dt,
            b=-self.b / dt,
            c=-self.c / dt,
            d=self.a / dt,
            e=(self.c * self.f - self.d * self.e) / dt,
            f=-(self.a * self.f - self.b * self.e) / dt,
        )

    def apply(self, position: Sequence[float]) -> Position:
        """Transform a position; a third ordinate is kept as is."""
        x, y = float(position[0]), float(position[1])
        transformed = (self.a * x + self.c * y + self.e, self.b * x + self.d * y + self.f)
        return transformed + tuple(float(v) for v in position[2:])

    def to_array(self) -> np.ndarray:
        """3x3 homogeneous matrix."""
        return np.array([
            [self.a, self.c, self.e],
            [self.b, self.d, self.f],
            [0.0, 0.0, 1.0],
        ])

    def to_shapely(self) -> list[float]:
        """Coefficients in the order ``shapely.affinity.affine_transform`` expects."""
        return [self.a, self.c, self.b, self.d, self.e, self.f]


def transform_curves(curves: Any, matrix: Matrix2D) -> MultiCurve:
    """Transformed copies of curves."""
    return [[matrix.apply(p) for p in curve] for curve in destructure_curves(curves)]


def transform_polygons(region: Any, matrix: Matrix2D) -> list[PolygonCoords]:
    """Transformed copies of polygons, as ring coordinate lists."""
    return [
        [[matrix.apply(p) for p in ring] for ring in polygon_coordinates(polygon)]
        for polygon in destructure_polygons(region)
    ]


def transform_geometry(geometry: BaseGeometry, matrix: Matrix2D) -> BaseGeometry:
    """Transformed copy of any shapely geometry."""
    return affinity.affine_transform(geometry, matrix.to_shapely())
