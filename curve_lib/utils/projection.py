"""Moving geometry between reference systems.

A projector is any callable mapping one position to another, for example a
geographic-to-planar conversion from a map projection library. The curve
algorithms work on planar coordinates, so geometry in a geographic
reference system is projected before processing and back afterwards.

The module provides:
    project_curves / project_polygons: Project coordinate lists.
    project_geometry: Project a shapely geometry.
    ProjectionProperties: The projector of every reference system plus the
        units of the planar one.
    ProjectableGeometry: Geometry tagged with its current reference system.

Example usage:
    Round trip through a planar system::

        from curve_lib.utils.projection import ProjectableGeometry, ProjectionProperties

        properties = ProjectionProperties(projectors={
            'proj': to_planar,
            '4326': to_lon_lat,
        })
        item = ProjectableGeometry(line, '4326', properties)
        planar = item.project('proj')
        planar.project('proj') is planar  # True
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Dict, Sequence

import numpy as np
import shapely
from shapely.geometry.base import BaseGeometry

from ..domain.curves import destructure_curves, destructure_polygons, polygon_coordinates, to_position
from ..domain.geometry import MultiCurve, Position, PolygonCoords
from ..domain.units import METERS, LinearUnits

logger = logging.getLogger(__name__)

Projector = Callable[[Sequence[float]], Sequence[float]]


def project_position(position: Sequence[float], projector: Projector) -> Position:
    return to_position(projector(tuple(position)))


def project_curves(curves: Any, projector: Projector) -> MultiCurve:
    """Projected copies of curves."""
    return [[project_position(p, projector) for p in curve] for curve in destructure_curves(curves)]


def project_polygons(region: Any, projector: Projector) -> list[PolygonCoords]:
    """Projected copies of polygons, as ring coordinate lists."""
    return [
        [[project_position(p, projector) for p in ring] for ring in polygon_coordinates(polygon)]
        for polygon in destructure_polygons(region)
    ]


def project_geometry(geometry: BaseGeometry, projector: Projector) -> BaseGeometry:
    """Projected copy of a shapely geometry of any type.

    Only x and y are passed through the projector; the result is 2D.
    """
    def _project_array(coords: np.ndarray) -> np.ndarray:
        projected = [tuple(projector((x, y)))[:2] for x, y in coords]
        return np.asarray(projected, dtype=float).reshape(-1, 2)

    return shapely.transform(geometry, _project_array)


@dataclass(frozen=True)
class ProjectionProperties:
    """Projectors keyed by the reference system they project into.

    Attributes:
        projectors: Reference system name to projector.
        units: Units of planar coordinates.
    """
    projectors: Dict[str, Projector] = field(default_factory=dict)
    units: LinearUnits = METERS

    def projector_for(self, proj_type: str) -> Projector:
        """Projector into ``proj_type``.

        Raises:
            KeyError: If no projector is registered for ``proj_type``.
        """
        try:
            return self.projectors[proj_type]
        except KeyError:
            raise KeyError(f"no projector for reference system {proj_type!r}, "
                           f"known: {sorted(self.projectors)}") from None


@dataclass(frozen=True)
class ProjectableGeometry:
    """A shapely geometry tagged with the reference system it is in."""
    geometry: BaseGeometry
    proj_type: str
    properties: ProjectionProperties

    def project(self, proj_type: str) -> ProjectableGeometry:
        """Geometry in ``proj_type``; ``self`` when already there."""
        if proj_type == self.proj_type:
            return self
        projector = self.properties.projector_for(proj_type)
        logger.debug("Projecting %s from %s to %s", self.geometry.geom_type, self.proj_type, proj_type)
        return replace(self, geometry=project_geometry(self.geometry, projector), proj_type=proj_type)
