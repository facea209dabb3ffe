"""
Map view package.

Public API:
- Surface port: MapSurface, InMemoryMapSurface, MapSurfaceError
- MapSession (single map, at most one route visual), MapStyle
- MarkerRegistry, Marker, MarkerRole
"""
from .surface import MapSurface, InMemoryMapSurface, MapSurfaceError
from .session import MapSession, MapStyle, default_map_style, ROUTE_ID
from .markers import MarkerRegistry, Marker, MarkerRole

__all__ = [
    "MapSurface",
    "InMemoryMapSurface",
    "MapSurfaceError",
    "MapSession",
    "MapStyle",
    "default_map_style",
    "ROUTE_ID",
    "MarkerRegistry",
    "Marker",
    "MarkerRole",
]
