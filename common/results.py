"""
Purpose: Explicit outcome type returned at component boundaries.

LocationProvider, PlaceSearch and RouteService never raise to their callers.
Adapter exceptions are converted into a failed Result carrying an ErrorKind,
and the orchestrator decides whether to log-and-ignore or surface it.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class ErrorKind(str, Enum):
    LOCATION_UNAVAILABLE = "location_unavailable"
    SEARCH_FAILURE = "search_failure"
    ROUTE_FAILURE = "route_failure"


@dataclass(frozen=True)
class Result(Generic[T]):
    value: Optional[T] = None
    error: Optional[ErrorKind] = None
    detail: str = ""

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, kind: ErrorKind, detail: str = "") -> "Result[T]":
        return cls(error=kind, detail=detail)
