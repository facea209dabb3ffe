"""
Purpose: The coordinate value type shared by search, markers, routing and the map.

Coordinates are always (longitude, latitude), the order used by both the
routing backend and the map surface. Geocoding results arrive as (lat, lon)
strings and are converted at the client boundary.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Tuple

LonLat = Tuple[float, float]


@dataclass(frozen=True)
class Coordinate:
    """
    A point on Earth. Only range validation is performed.
    """
    longitude: float
    latitude: float

    def __post_init__(self):
        if not -180.0 <= self.longitude <= 180.0:
            raise ValueError(f"longitude out of range: {self.longitude}")
        if not -90.0 <= self.latitude <= 90.0:
            raise ValueError(f"latitude out of range: {self.latitude}")

    @classmethod
    def from_lon_lat(cls, pair: Sequence[float]) -> Coordinate:
        """Build from a [lon, lat] pair as found in GeoJSON geometries."""
        if len(pair) < 2:
            raise ValueError(f"expected a [lon, lat] pair, got {pair!r}")
        return cls(longitude=float(pair[0]), latitude=float(pair[1]))

    def as_lon_lat(self) -> LonLat:
        return (self.longitude, self.latitude)

    def to_osrm(self) -> str:
        return f"{self.longitude},{self.latitude}"
