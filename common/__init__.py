"""
Purpose: Shared building blocks used by every capability package.

Public API:
- Coordinate (lon, lat) value type
- Result / ErrorKind outcome type for swallowed component failures
- settings (environment-driven configuration)
"""
from .geometry import Coordinate
from .results import ErrorKind, Result
from .config import Settings, settings, configure_logging

__all__ = [
    "Coordinate",
    "ErrorKind",
    "Result",
    "Settings",
    "settings",
    "configure_logging",
]
