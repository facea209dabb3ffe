#Purpose: The Nominatim "adapter/client".
#Sole responsibility: talk to the geocoder via HTTP and return raw candidates.
#Encapsulates Nominatim-specific details:
#query parameters (format, addressdetails, limit, countrycodes)
#the User-Agent header the public instance requires
#timeouts and response validation
#It should not decide what to do with failures; PlaceSearch does.

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, List, Optional

import requests

from common.config import settings

logger = logging.getLogger(__name__)


class GeocodingError(Exception):
    """Custom exception for geocoding client errors."""
    pass


class NominatimClient:
    """
    Nominatim Adapter / Client

    - Builds the /search request
    - Runs the blocking HTTP call on a worker thread so the event loop keeps going
    - Returns the decoded JSON list untouched
    """
    def __init__(self, base_url: Optional[str] = None, timeout: Optional[float] = None,
                 user_agent: Optional[str] = None, session=None):
        self.base_url = (base_url if base_url is not None else settings.NOMINATIM_BASE_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.NOMINATIM_TIMEOUT
        self.user_agent = user_agent or settings.NOMINATIM_USER_AGENT
        # plain requests.get per call; a Session is not safe to share across worker threads
        self.http = session if session is not None else requests

        if not self.base_url:
            raise ValueError("Nominatim base URL not set. Please set NOMINATIM_BASE_URL in the .env file.")

    def build_params(self, query: str, limit: int, country_codes: str) -> Dict[str, Any]:
        return {
            "format": "json",
            "q": query,
            "addressdetails": 1,
            "limit": limit,
            "countrycodes": country_codes,
        }

    async def search(self, query: str, *, limit: int, country_codes: str) -> List[Dict[str, Any]]:
        """
        calls the Nominatim /search endpoint and returns the candidate list:
            [
                {"lat": "41.31", "lon": "69.24", "display_name": "...", ...},
            ]
        """
        url = f"{self.base_url}/search"
        try:
            response = await asyncio.to_thread(
                self.http.get,
                url,
                params=self.build_params(query, limit, country_codes),
                headers={"User-Agent": self.user_agent},
                timeout=self.timeout,
            )
            response.raise_for_status()
            data = response.json()
        except requests.RequestException as e:
            raise GeocodingError(f"Nominatim request failed: {e}") from e
        except ValueError as e:  # body was not JSON
            raise GeocodingError(f"Nominatim returned invalid JSON: {e}") from e

        if not isinstance(data, list):
            raise GeocodingError(f"Nominatim returned unexpected payload: {type(data).__name__}")
        return data
