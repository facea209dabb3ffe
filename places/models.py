"""
Purpose: Domain models for place search.

Rule: No HTTP calls here. Models only.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from common.geometry import Coordinate


class SearchRole(str, Enum):
    """Which endpoint of the trip a search box feeds."""
    START = "start"
    END = "end"


@dataclass(frozen=True)
class Place:
    """
    A single geocoding candidate. Only lives inside a suggestion list.
    """
    label: str
    coordinate: Coordinate

    @classmethod
    def from_nominatim(cls, item: dict) -> Place:
        # Nominatim reports lat/lon as stringified floats
        return cls(
            label=item["display_name"],
            coordinate=Coordinate(longitude=float(item["lon"]), latitude=float(item["lat"])),
        )
