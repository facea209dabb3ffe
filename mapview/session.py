"""
Purpose: Own the single map surface for the session.

What it does:
- Creates the map (center, zoom, style) and its navigation control once.
- Hosts markers on behalf of MarkerRegistry.
- Holds at most one route visual: a GeoJSON source and a line layer that
  share the fixed id "route". Replacing a route removes the old pair first.

Rule: No HTTP, no search state. Rendering only.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from common.config import settings
from common.geometry import Coordinate

from .surface import InMemoryMapSurface, MapSurface, MapSurfaceError

logger = logging.getLogger(__name__)

ROUTE_ID = "route"


@dataclass(frozen=True)
class MapStyle:
    style_url: str = "https://tiles.stadiamaps.com/styles/alidade_smooth.json"
    zoom: float = 12
    route_color: str = "#007cbf"
    route_width: float = 4

    def validate(self) -> None:
        if not self.style_url:
            raise ValueError("style_url must not be empty")
        if not 0 <= self.zoom <= 24:
            raise ValueError("zoom must be within 0..24")
        if self.route_width <= 0:
            raise ValueError("route_width must be > 0")


def default_map_style() -> MapStyle:
    s = MapStyle(style_url=settings.MAP_STYLE_URL, zoom=settings.MAP_ZOOM)
    s.validate()
    return s


class MapSession:
    def __init__(self, surface: Optional[MapSurface] = None, style: Optional[MapStyle] = None):
        self.surface = surface if surface is not None else InMemoryMapSurface()
        self.style = style or default_map_style()
        self._initialized = False
        self._rendered_route: Optional[Tuple[Dict[str, Any], Dict[str, Any]]] = None  # (source, layer)

    @property
    def initialized(self) -> bool:
        return self._initialized

    def _require_initialized(self) -> None:
        if not self._initialized:
            raise MapSurfaceError("map session is not initialized")

    def initialize(self, center: Coordinate) -> None:
        if self._initialized:
            raise MapSurfaceError("map session already initialized")
        self.surface.create_map(center=center, zoom=self.style.zoom, style=self.style.style_url)
        self.surface.add_navigation_control()
        self._initialized = True
        logger.info(f"Map initialized at {center}")

    def center_on(self, coordinate: Coordinate) -> None:
        self._require_initialized()
        self.surface.set_center(coordinate)

    def add_marker(self, color: str, coordinate: Coordinate) -> Any:
        self._require_initialized()
        return self.surface.create_marker(color, coordinate)

    def move_marker(self, handle: Any, coordinate: Coordinate) -> None:
        self._require_initialized()
        self.surface.move_marker(handle, coordinate)

    @property
    def has_route(self) -> bool:
        return self.surface.has_source(ROUTE_ID)

    def route_source(self, points: List[Coordinate]) -> Dict[str, Any]:
        return {
            "type": "geojson",
            "data": {
                "type": "Feature",
                "properties": {},
                "geometry": {
                    "type": "LineString",
                    "coordinates": [list(point.as_lon_lat()) for point in points],
                },
            },
        }

    def route_layer(self) -> Dict[str, Any]:
        return {
            "id": ROUTE_ID,
            "type": "line",
            "source": ROUTE_ID,
            "layout": {"line-join": "round", "line-cap": "round"},
            "paint": {"line-color": self.style.route_color, "line-width": self.style.route_width},
        }

    def clear_route(self) -> None:
        # layer goes first: a source cannot be removed while a layer uses it
        if self.surface.has_layer(ROUTE_ID):
            self.surface.remove_layer(ROUTE_ID)
        if self.surface.has_source(ROUTE_ID):
            self.surface.remove_source(ROUTE_ID)
        self._rendered_route = None

    def set_route_geometry(self, points: List[Coordinate]) -> None:
        """
        Replace the route visual with a line through `points`.
        Everything that can fail on bad input is checked before the old
        route is touched. If the surface rejects the new pair, the previous
        route is put back and the error is re-raised.
        """
        self._require_initialized()
        if len(points) < 2:
            raise ValueError("a route line needs at least two points")

        source = self.route_source(points)
        layer = self.route_layer()
        previous = self._rendered_route

        self.clear_route()
        try:
            self.surface.add_source(ROUTE_ID, source)
            self.surface.add_layer(layer)
        except Exception:
            # never leave a source without its layer
            self.clear_route()
            if previous is not None:
                self.surface.add_source(ROUTE_ID, previous[0])
                self.surface.add_layer(previous[1])
                self._rendered_route = previous
            raise
        self._rendered_route = (source, layer)
        logger.debug(f"Route rendered with {len(points)} points")
