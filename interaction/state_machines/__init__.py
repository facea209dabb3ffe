from .session_state import SessionPhase, SessionContext, SessionStateError, transition_session
from .search_state import (
    SearchPhase,
    SearchState,
    SearchStateError,
    apply_query,
    apply_suggestions,
    clear_selection,
    begin_route_fetch,
    finish_route_fetch,
)

__all__ = [
    "SessionPhase",
    "SessionContext",
    "SessionStateError",
    "transition_session",
    "SearchPhase",
    "SearchState",
    "SearchStateError",
    "apply_query",
    "apply_suggestions",
    "clear_selection",
    "begin_route_fetch",
    "finish_route_fetch",
]
