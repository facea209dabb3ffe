"""
Purpose: Domain models for computed routes.
What it does:
- DirectionStep (instruction, distance_m, maneuver_type)
- RouteResult (geometry_points, directions, total_distance_m)

Rule: No OSRM calls. Models only.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from common.geometry import Coordinate


@dataclass(frozen=True)
class DirectionStep:
    """
    One maneuver of the route, in traversal order.
    """
    instruction: str
    distance_m: float
    maneuver_type: str


@dataclass(frozen=True)
class RouteResult:
    geometry_points: List[Coordinate] = field(default_factory=list)
    directions: List[DirectionStep] = field(default_factory=list)
    total_distance_m: float = 0.0  # sum over legs, not over steps
