"""Linear units of planar coordinates."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class LinearUnits:
    """Unit of a projected coordinate system.

    Tolerances, offsets and dash lengths are always given in meters. The
    coordinates themselves are in whatever linear unit the spatial reference
    uses, so every distance measured on coordinates is scaled by
    ``meters_per_unit`` before it is compared with a meter value.

    Attributes:
        name: Unit name ('meters', 'feet').
        abbr: Unit abbreviation ('m', 'ft').
        meters_per_unit: Number of meters in one coordinate unit.
    """
    name: str
    abbr: str
    meters_per_unit: float

    def to_meters(self, value: float) -> float:
        """Convert a length in coordinate units to meters."""
        return value * self.meters_per_unit

    def from_meters(self, value: float) -> float:
        """Convert a length in meters to coordinate units."""
        return value / self.meters_per_unit


METERS = LinearUnits('meters', 'm', 1.0)
FEET = LinearUnits('feet', 'ft', 0.3048)
