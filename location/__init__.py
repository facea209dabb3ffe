from .provider import (
    LocationProvider,
    GeolocationSource,
    StaticGeolocationSource,
    LocationUnavailable,
    default_fallback,
)

__all__ = [
    "LocationProvider",
    "GeolocationSource",
    "StaticGeolocationSource",
    "LocationUnavailable",
    "default_fallback",
]
