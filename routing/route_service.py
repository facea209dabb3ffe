"""
Purpose: Route computation for map display and turn-by-turn guidance.

What it does:
- Asks the routing backend for a driving route between two coordinates.
- Takes the first route alternative only.
- Flattens every leg's steps, in order, into DirectionStep entries.
- Sums every leg's distance into total_distance_m.

Any failure (network, malformed body, zero routes) comes back as a failed
Result. Nothing partial is ever returned, so callers can keep what they show.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from common.geometry import Coordinate
from common.results import ErrorKind, Result

from .models import DirectionStep, RouteResult
from .osrm_client import OSRMClient, OSRMError

logger = logging.getLogger(__name__)


def describe_maneuver(step: Dict[str, Any]) -> str:
    """
    Fallback text for steps without an "instruction" (stock OSRM servers
    only return maneuver type/modifier and the road name).
    """
    maneuver = step["maneuver"]
    words = [maneuver["type"], maneuver.get("modifier", "")]
    text = " ".join(word for word in words if word)
    name = step.get("name")
    return f"{text} onto {name}" if name else text


def parse_route(data: Dict[str, Any]) -> RouteResult:
    """
    Normalize an OSRM /route body into a RouteResult.
    Raises KeyError/TypeError/ValueError/IndexError on a malformed body.
    """
    route = data["routes"][0]  # OSRM may return alternatives; the first is the best

    geometry = route["geometry"]
    if geometry.get("type") != "LineString":
        raise ValueError(f"expected LineString geometry, got {geometry.get('type')!r}")
    points = [Coordinate.from_lon_lat(pair) for pair in geometry["coordinates"]]
    if len(points) < 2:
        raise ValueError(f"route geometry has {len(points)} point(s)")

    legs = route["legs"]
    directions: List[DirectionStep] = []
    for leg in legs:
        for step in leg["steps"]:
            maneuver = step["maneuver"]
            directions.append(
                DirectionStep(
                    instruction=maneuver.get("instruction") or describe_maneuver(step),
                    distance_m=float(step["distance"]),
                    maneuver_type=maneuver["type"],
                )
            )

    total_distance_m = sum(float(leg["distance"]) for leg in legs)

    return RouteResult(
        geometry_points=points,
        directions=directions,
        total_distance_m=total_distance_m,
    )


class RouteService:
    def __init__(self, client: Optional[OSRMClient] = None):
        self.client = client or OSRMClient()

    async def fetch_route(self, start: Coordinate, end: Coordinate) -> Result[RouteResult]:
        try:
            data = await self.client.route(start, end)
            route = parse_route(data)
        except OSRMError as e:
            logger.error(f"Route {start} -> {end} failed: {e}")
            return Result.failure(ErrorKind.ROUTE_FAILURE, str(e))
        except (KeyError, IndexError, TypeError, ValueError, AttributeError) as e:
            logger.error(f"Malformed route {start} -> {end}: {e!r}")
            return Result.failure(ErrorKind.ROUTE_FAILURE, f"malformed route: {e!r}")

        logger.info(
            f"Route {start} -> {end}: {len(route.directions)} steps, {route.total_distance_m:.0f} m"
        )
        return Result.success(route)
