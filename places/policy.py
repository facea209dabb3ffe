"""
Purpose: Central configuration for place search.

MIN_QUERY_LENGTH = 3   (shorter queries never reach the backend)
RESULT_LIMIT = 5
COUNTRY_CODES = "uz"

Rule: No logic here, just parameters so you can tune without rewriting code.
"""
from __future__ import annotations

from dataclasses import dataclass

from common.config import settings


@dataclass(frozen=True)
class SearchPolicy:
    # Queries shorter than this return no suggestions and issue no request.
    min_query_length: int = 3

    # Maximum ranked candidates requested from the geocoder.
    result_limit: int = 5

    # Comma separated ISO 3166-1 alpha-2 codes the geocoder is scoped to.
    country_codes: str = "uz"

    # Wait this long after a keystroke before querying; a newer keystroke
    # arriving in the meantime supersedes the pending one. 0 disables it.
    debounce_seconds: float = 0.0

    def validate(self) -> None:
        if self.min_query_length < 1:
            raise ValueError("min_query_length must be >= 1")
        if self.result_limit <= 0:
            raise ValueError("result_limit must be > 0")
        if not self.country_codes:
            raise ValueError("country_codes must not be empty")
        if self.debounce_seconds < 0:
            raise ValueError("debounce_seconds must be >= 0")


def default_search_policy() -> SearchPolicy:
    p = SearchPolicy(
        min_query_length=settings.SEARCH_MIN_QUERY_LENGTH,
        result_limit=settings.SEARCH_RESULT_LIMIT,
        country_codes=settings.SEARCH_COUNTRY_CODES,
        debounce_seconds=settings.SEARCH_DEBOUNCE_SECONDS,
    )
    p.validate()
    return p
