"""
Purpose: The port to the map-rendering engine, plus a headless implementation.

The real engine (tiles, pan/zoom, drawing) is an external collaborator. The
session only needs the primitives below. InMemoryMapSurface keeps the same
bookkeeping a real engine would (named sources, layers bound to sources,
markers) and rejects the same misuse, so it doubles as the test surface.
"""
from __future__ import annotations

import itertools
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Protocol, Tuple

from common.geometry import Coordinate


class MapSurfaceError(Exception):
    """Raised when a surface primitive is used out of order."""
    pass


class MapSurface(Protocol):
    def create_map(self, center: Coordinate, zoom: float, style: str) -> None: ...

    def add_navigation_control(self) -> None: ...

    def create_marker(self, color: str, coordinate: Coordinate) -> Any: ...

    def move_marker(self, handle: Any, coordinate: Coordinate) -> None: ...

    def set_center(self, coordinate: Coordinate) -> None: ...

    def has_source(self, source_id: str) -> bool: ...

    def has_layer(self, layer_id: str) -> bool: ...

    def add_source(self, source_id: str, data: Dict[str, Any]) -> None: ...

    def add_layer(self, layer: Dict[str, Any]) -> None: ...

    def remove_layer(self, layer_id: str) -> None: ...

    def remove_source(self, source_id: str) -> None: ...


@dataclass
class SurfaceMarker:
    handle: int
    color: str
    coordinate: Coordinate


@dataclass
class InMemoryMapSurface:
    """
    Headless map surface. Every primitive call is appended to `calls`
    as (name, args...) so callers can assert on the exact sequence.
    """
    center: Optional[Coordinate] = None
    zoom: Optional[float] = None
    style: Optional[str] = None
    controls: List[str] = field(default_factory=list)
    markers: Dict[int, SurfaceMarker] = field(default_factory=dict)
    sources: Dict[str, Dict[str, Any]] = field(default_factory=dict)
    layers: Dict[str, Dict[str, Any]] = field(default_factory=dict)
    calls: List[Tuple[Any, ...]] = field(default_factory=list)

    _handles: Any = field(default_factory=lambda: itertools.count(1), repr=False)

    @property
    def created(self) -> bool:
        return self.style is not None

    def _require_map(self) -> None:
        if not self.created:
            raise MapSurfaceError("map has not been created")

    def create_map(self, center: Coordinate, zoom: float, style: str) -> None:
        if self.created:
            raise MapSurfaceError("map already created")
        self.center, self.zoom, self.style = center, zoom, style
        self.calls.append(("create_map", center, zoom, style))

    def add_navigation_control(self) -> None:
        self._require_map()
        self.controls.append("navigation")
        self.calls.append(("add_navigation_control",))

    def create_marker(self, color: str, coordinate: Coordinate) -> int:
        self._require_map()
        handle = next(self._handles)
        self.markers[handle] = SurfaceMarker(handle=handle, color=color, coordinate=coordinate)
        self.calls.append(("create_marker", handle, color, coordinate))
        return handle

    def move_marker(self, handle: int, coordinate: Coordinate) -> None:
        if handle not in self.markers:
            raise MapSurfaceError(f"unknown marker {handle}")
        self.markers[handle].coordinate = coordinate
        self.calls.append(("move_marker", handle, coordinate))

    def set_center(self, coordinate: Coordinate) -> None:
        self._require_map()
        self.center = coordinate
        self.calls.append(("set_center", coordinate))

    def has_source(self, source_id: str) -> bool:
        return source_id in self.sources

    def has_layer(self, layer_id: str) -> bool:
        return layer_id in self.layers

    def add_source(self, source_id: str, data: Dict[str, Any]) -> None:
        self._require_map()
        if source_id in self.sources:
            raise MapSurfaceError(f"source {source_id!r} already exists")
        self.sources[source_id] = data
        self.calls.append(("add_source", source_id))

    def add_layer(self, layer: Dict[str, Any]) -> None:
        self._require_map()
        layer_id = layer["id"]
        if layer_id in self.layers:
            raise MapSurfaceError(f"layer {layer_id!r} already exists")
        if layer.get("source") not in self.sources:
            raise MapSurfaceError(f"layer {layer_id!r} references missing source {layer.get('source')!r}")
        self.layers[layer_id] = layer
        self.calls.append(("add_layer", layer_id))

    def remove_layer(self, layer_id: str) -> None:
        if layer_id not in self.layers:
            raise MapSurfaceError(f"layer {layer_id!r} does not exist")
        del self.layers[layer_id]
        self.calls.append(("remove_layer", layer_id))

    def remove_source(self, source_id: str) -> None:
        if source_id not in self.sources:
            raise MapSurfaceError(f"source {source_id!r} does not exist")
        if any(layer.get("source") == source_id for layer in self.layers.values()):
            raise MapSurfaceError(f"source {source_id!r} is still used by a layer")
        del self.sources[source_id]
        self.calls.append(("remove_source", source_id))
