#Purpose: The OSRM "adapter/client".
#Sole responsibility: talk to OSRM via HTTP and return the decoded route payload.
#Encapsulates OSRM-specific details:
#coordinate formatting (lon,lat)
#URL construction (/route/v1/{profile}/...)
#timeouts and response validation ("code" must be "Ok")
#It should not contain parsing into domain models; RouteService does that.

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, List, Optional

import requests

from common.config import settings
from common.geometry import Coordinate

logger = logging.getLogger(__name__)


class OSRMError(Exception):
    """Custom exception for OSRM client errors."""
    pass


class OSRMClient:
    """
    OSRM Adapter / Client

    Sole responsibility:
    - Talk to OSRM via HTTP
    - Format Coordinate -> OSRM "lon,lat;lon,lat"
    - Return the raw JSON once the backend says "Ok"
    """
    def __init__(self, profile: Optional[str] = None, timeout: Optional[float] = None,
                 base_url: Optional[str] = None, session=None):
        self.base_url = (base_url if base_url is not None else settings.OSRM_BASE_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.OSRM_TIMEOUT
        self.profile = profile or settings.OSRM_PROFILE  # driving, walking, cycling
        # plain requests.get per call; a Session is not safe to share across worker threads
        self.http = session if session is not None else requests

        if not self.base_url:
            raise ValueError("OSRM base URL not set. Please set OSRM_BASE_URL in the .env file.")

    def format_coordinates(self, coords: List[Coordinate]) -> str:
        """Convert coordinates to OSRM format 'lon,lat;lon,lat;...'"""
        return ";".join(coord.to_osrm() for coord in coords)

    def route_url(self, coords: List[Coordinate]) -> str:
        return f"{self.base_url}/route/v1/{self.profile}/{self.format_coordinates(coords)}"

    async def route(self, start: Coordinate, end: Coordinate) -> Dict[str, Any]:
        """
        calls the OSRM /route endpoint asking for GeoJSON geometry and
        step-level maneuvers.

        Returns the decoded body:
            {
                "code": "Ok",
                "routes": [{"geometry": {...}, "legs": [{"distance": ..., "steps": [...]}]}],
            }
        """
        url = self.route_url([start, end])
        try:
            response = await asyncio.to_thread(
                self.http.get,
                url,
                params={
                    "geometries": "geojson",
                    "steps": "true",
                    "overview": "full",  # full path geometry, not the simplified one
                },
                timeout=self.timeout,
            )
            data = response.json()  # OSRM reports errors in the body, even with 4xx
        except requests.RequestException as e:
            raise OSRMError(f"OSRM request failed: {e}") from e
        except ValueError as e:
            raise OSRMError(f"OSRM returned invalid JSON: {e}") from e

        if not isinstance(data, dict):
            raise OSRMError(f"OSRM returned unexpected payload: {type(data).__name__}")

        #validating OSRM response
        if data.get("code") != "Ok":
            raise OSRMError(f"OSRM error: {data.get('message', data.get('code', 'Unknown error'))}")

        if not data.get("routes"):
            raise OSRMError("OSRM returned no routes")

        return data
