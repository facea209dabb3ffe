"""
Purpose: Environment-driven configuration.

Values are read from the process environment (and a local .env file, if any)
once at import time. Example .env:

OSRM_BASE_URL=http://router.project-osrm.org
NOMINATIM_USER_AGENT=taximap/0.1 (ops@example.com)
ERROR_POLICY=log_and_ignore
"""
import logging
import os
from typing import Optional

from dotenv import load_dotenv

load_dotenv()


class Settings:
    # Logging
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    # Routing backend (OSRM)
    OSRM_BASE_URL = os.getenv("OSRM_BASE_URL", "https://router.project-osrm.org")
    OSRM_PROFILE = os.getenv("OSRM_PROFILE", "driving")
    OSRM_TIMEOUT = float(os.getenv("OSRM_TIMEOUT", "10"))

    # Geocoding backend (Nominatim)
    NOMINATIM_BASE_URL = os.getenv("NOMINATIM_BASE_URL", "https://nominatim.openstreetmap.org")
    NOMINATIM_USER_AGENT = os.getenv("NOMINATIM_USER_AGENT", "taximap/0.1")
    NOMINATIM_TIMEOUT = float(os.getenv("NOMINATIM_TIMEOUT", "10"))

    # Place search
    SEARCH_COUNTRY_CODES = os.getenv("SEARCH_COUNTRY_CODES", "uz")
    SEARCH_RESULT_LIMIT = int(os.getenv("SEARCH_RESULT_LIMIT", "5"))
    SEARCH_MIN_QUERY_LENGTH = int(os.getenv("SEARCH_MIN_QUERY_LENGTH", "3"))
    SEARCH_DEBOUNCE_SECONDS = float(os.getenv("SEARCH_DEBOUNCE_SECONDS", "0"))

    # Map surface
    MAP_STYLE_URL = os.getenv("MAP_STYLE_URL", "https://tiles.stadiamaps.com/styles/alidade_smooth.json")
    MAP_ZOOM = float(os.getenv("MAP_ZOOM", "12"))

    # Location fallback (Tashkent)
    FALLBACK_LONGITUDE = float(os.getenv("FALLBACK_LONGITUDE", "69.2401"))
    FALLBACK_LATITUDE = float(os.getenv("FALLBACK_LATITUDE", "41.3111"))

    # Interaction
    ERROR_POLICY = os.getenv("ERROR_POLICY", "surface")


settings = Settings()


def configure_logging(level: Optional[str] = None) -> None:
    logging.basicConfig(
        level=(level or settings.LOG_LEVEL).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
