"""
Purpose: Own the two named markers (start, end) and keep them on the map.

Lifecycle:
- start: created on the first place_start(); later calls move it and recenter.
- end: created lazily on the first place_end(); later calls move it.

A marker is never removed and recreated; its identity lasts the session.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from common.geometry import Coordinate

from .session import MapSession

logger = logging.getLogger(__name__)


class MarkerRole(str, Enum):
    START = "start"
    END = "end"


MARKER_COLORS = {
    MarkerRole.START: "blue",
    MarkerRole.END: "red",
}


@dataclass
class Marker:
    role: MarkerRole
    coordinate: Coordinate
    color: str
    handle: Any = None  # surface-side marker handle


class MarkerRegistry:
    def __init__(self, session: MapSession):
        self.session = session
        self._markers: Dict[MarkerRole, Marker] = {}

    @property
    def start(self) -> Optional[Marker]:
        return self._markers.get(MarkerRole.START)

    @property
    def end(self) -> Optional[Marker]:
        return self._markers.get(MarkerRole.END)

    def _place(self, role: MarkerRole, coordinate: Coordinate) -> bool:
        """Create or move the marker for `role`. Returns True if it was created."""
        marker = self._markers.get(role)
        if marker is None:
            color = MARKER_COLORS[role]
            handle = self.session.add_marker(color, coordinate)
            self._markers[role] = Marker(role=role, coordinate=coordinate, color=color, handle=handle)
            logger.debug(f"Created {role.value} marker at {coordinate}")
            return True

        self.session.move_marker(marker.handle, coordinate)
        marker.coordinate = coordinate
        return False

    def place_start(self, coordinate: Coordinate) -> Marker:
        created = self._place(MarkerRole.START, coordinate)
        if not created:
            self.session.center_on(coordinate)
        return self._markers[MarkerRole.START]

    def place_end(self, coordinate: Coordinate) -> Marker:
        self._place(MarkerRole.END, coordinate)
        return self._markers[MarkerRole.END]
