"""
Purpose: The per-role search box state machine.

StartSearch: IDLE <-> SUGGESTING
EndSearch:   IDLE <-> SUGGESTING -> ROUTE_FETCHING -> ROUTE_READY | IDLE

These functions only mutate the SearchState they are given. Deciding whether
a response is still current is the controller's job (see sequencing.py).
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import List

from places.models import Place, SearchRole


class SearchStateError(Exception):
    """Raised when an invalid search transition is attempted."""
    pass


class SearchPhase(str, Enum):
    IDLE = "idle"
    SUGGESTING = "suggesting"
    ROUTE_FETCHING = "route_fetching"
    ROUTE_READY = "route_ready"


@dataclass
class SearchState:
    role: SearchRole
    query: str = ""
    suggestions: List[Place] = field(default_factory=list)
    visible: bool = False
    phase: SearchPhase = SearchPhase.IDLE


def apply_query(state: SearchState, query: str, accepted: bool) -> SearchState:
    """
    A keystroke. `accepted` says whether the query passes the length gate;
    if not, the suggestions go away immediately.
    """
    state.query = query
    if accepted:
        state.phase = SearchPhase.SUGGESTING
    else:
        state.suggestions = []
        state.phase = SearchPhase.IDLE
    return state


def apply_suggestions(state: SearchState, places: List[Place]) -> SearchState:
    state.suggestions = list(places)
    return state


def clear_selection(state: SearchState) -> SearchState:
    """A suggestion was picked. Idempotent."""
    state.query = ""
    state.suggestions = []
    state.phase = SearchPhase.IDLE
    return state


def begin_route_fetch(state: SearchState) -> SearchState:
    if state.role != SearchRole.END:
        raise SearchStateError(f"Only the end search fetches routes, not {state.role.value}")
    state.phase = SearchPhase.ROUTE_FETCHING
    return state


def finish_route_fetch(state: SearchState, succeeded: bool) -> SearchState:
    if state.role != SearchRole.END:
        raise SearchStateError(f"Only the end search fetches routes, not {state.role.value}")
    # the user may have started typing again while the route was in flight
    if state.phase == SearchPhase.ROUTE_FETCHING:
        state.phase = SearchPhase.ROUTE_READY if succeeded else SearchPhase.IDLE
    return state
