#Marks routing as a package.
#Re-exports the public API (RouteService, OSRMClient, models) so other
#modules import from routing without knowing internal file names.
#No business logic.

from .models import DirectionStep, RouteResult
from .osrm_client import OSRMClient, OSRMError
from .route_service import RouteService, parse_route

__all__ = [
    "DirectionStep",
    "RouteResult",
    "OSRMClient",
    "OSRMError",
    "RouteService",
    "parse_route",
]
