"""
Purpose: View models for what the user reads next to the map.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import List

from common.results import ErrorKind, Result
from routing.models import RouteResult

ERROR_MESSAGES = {
    ErrorKind.SEARCH_FAILURE: "Place search failed. Please try again.",
    ErrorKind.ROUTE_FAILURE: "Could not build a route to this destination.",
}


def format_km(meters: float) -> str:
    return f"{meters / 1000:.2f} km"


@dataclass(frozen=True)
class DirectionsPanel:
    steps: List[str]
    total: str

    @classmethod
    def from_route(cls, route: RouteResult) -> DirectionsPanel:
        return cls(
            steps=[f"{step.instruction} - {format_km(step.distance_m)}" for step in route.directions],
            total=f"Total distance: {format_km(route.total_distance_m)}",
        )

    def render(self) -> str:
        return "\n".join(["Directions:", *self.steps, self.total])


@dataclass(frozen=True)
class ErrorIndicator:
    """Transient notice shown after a failed search or route request."""
    kind: ErrorKind
    message: str
    detail: str = ""

    @classmethod
    def for_result(cls, result: Result) -> ErrorIndicator:
        return cls(kind=result.error, message=ERROR_MESSAGES.get(result.error, "Something went wrong."),
                   detail=result.detail)
