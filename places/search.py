"""
Purpose: Turn a partial text query into a ranked list of candidate places.

What it does:
- Enforces the minimum-length gate: short queries return [] with no request.
- Scopes the lookup to the configured countries and result limit.
- Converts geocoder failures into a failed Result so the caller can keep
  the previous suggestion list untouched.

Ordering of concurrent searches is not handled here; the controller owns it.
"""
from __future__ import annotations

import logging
from typing import List, Optional

from common.results import ErrorKind, Result

from .models import Place, SearchRole
from .nominatim_client import GeocodingError, NominatimClient
from .policy import SearchPolicy, default_search_policy

logger = logging.getLogger(__name__)


class PlaceSearch:
    def __init__(self, client: Optional[NominatimClient] = None, policy: Optional[SearchPolicy] = None):
        self.client = client or NominatimClient()
        self.policy = policy or default_search_policy()

    def accepts(self, query: str) -> bool:
        """True when the query is long enough to be sent to the geocoder."""
        return len(query) >= self.policy.min_query_length

    async def search(self, query: str, role: SearchRole) -> Result[List[Place]]:
        if not self.accepts(query):
            return Result.success([])

        try:
            raw = await self.client.search(
                query,
                limit=self.policy.result_limit,
                country_codes=self.policy.country_codes,
            )
            places = [Place.from_nominatim(item) for item in raw[: self.policy.result_limit]]
        except GeocodingError as e:
            logger.error(f"Search failed for {role.value} query {query!r}: {e}")
            return Result.failure(ErrorKind.SEARCH_FAILURE, str(e))
        except (KeyError, TypeError, ValueError) as e:
            logger.error(f"Malformed geocoding result for {role.value} query {query!r}: {e!r}")
            return Result.failure(ErrorKind.SEARCH_FAILURE, f"malformed result: {e!r}")

        logger.debug(f"{len(places)} {role.value} suggestions for {query!r}")
        return Result.success(places)
