"""
Places domain package.

Public API:
- Domain models: Place, SearchRole
- Policy: SearchPolicy, default_search_policy
- Geocoding adapter: NominatimClient, GeocodingError
- Search entry: PlaceSearch
"""
from .models import Place, SearchRole
from .policy import SearchPolicy, default_search_policy
from .nominatim_client import NominatimClient, GeocodingError
from .search import PlaceSearch

__all__ = [
    "Place",
    "SearchRole",
    "SearchPolicy",
    "default_search_policy",
    "NominatimClient",
    "GeocodingError",
    "PlaceSearch",
]
