"""
Purpose: Resolve the user's initial coordinate exactly once per session.

What it does:
- Asks the device geolocation source for its current position.
- Degrades to a fixed fallback coordinate when the source is missing,
  denies permission, times out or returns garbage.

Rule: resolve() never raises. LocationUnavailable is logged, never surfaced.
"""
from __future__ import annotations

import logging
from typing import Optional, Protocol, Tuple

from common.config import settings
from common.geometry import Coordinate
from common.results import ErrorKind, Result

logger = logging.getLogger(__name__)

# Device sources report (latitude, longitude), like the browser geolocation API.
LatLon = Tuple[float, float]


class LocationUnavailable(Exception):
    """Raised by a geolocation source when no position can be produced."""
    pass


class GeolocationSource(Protocol):
    async def get_current_position(self) -> LatLon:
        ...


class StaticGeolocationSource:
    """
    A source that always reports the same position. Useful for kiosks,
    demos and tests where no device sensor exists.
    """
    def __init__(self, latitude: float, longitude: float):
        self.latitude = latitude
        self.longitude = longitude

    async def get_current_position(self) -> LatLon:
        return (self.latitude, self.longitude)


def default_fallback() -> Coordinate:
    return Coordinate(longitude=settings.FALLBACK_LONGITUDE, latitude=settings.FALLBACK_LATITUDE)


class LocationProvider:
    """
    One-shot location resolver. A second call returns the first answer
    without touching the source again (no retry, no polling).
    """
    def __init__(self, source: Optional[GeolocationSource] = None, fallback: Optional[Coordinate] = None):
        self.source = source  # None means the device has no geolocation support
        self.fallback = fallback or default_fallback()
        self._resolved: Optional[Coordinate] = None
        self.last_result: Optional[Result[Coordinate]] = None

    async def resolve(self) -> Coordinate:
        if self._resolved is not None:
            return self._resolved

        self.last_result = await self._locate()
        if self.last_result.ok:
            self._resolved = self.last_result.value
        else:
            logger.warning(f"Location unavailable ({self.last_result.detail}), using fallback {self.fallback}")
            self._resolved = self.fallback
        return self._resolved

    async def _locate(self) -> Result[Coordinate]:
        if self.source is None:
            return Result.failure(ErrorKind.LOCATION_UNAVAILABLE, "geolocation not supported")
        try:
            latitude, longitude = await self.source.get_current_position()
            return Result.success(Coordinate(longitude=float(longitude), latitude=float(latitude)))
        except LocationUnavailable as e:
            return Result.failure(ErrorKind.LOCATION_UNAVAILABLE, str(e) or "position unavailable")
        except Exception as e:
            # denied permission, timeouts and malformed positions all degrade the same way
            return Result.failure(ErrorKind.LOCATION_UNAVAILABLE, f"{type(e).__name__}: {e}")
