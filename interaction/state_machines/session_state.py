from dataclasses import dataclass
from enum import Enum

from common.geometry import Coordinate
from mapview.markers import MarkerRegistry
from mapview.session import MapSession


class SessionStateError(Exception):
    """Raised when an invalid session transition is attempted."""
    pass


class SessionPhase(str, Enum):
    UNINITIALIZED = "uninitialized"
    LOCATING = "locating"
    READY = "ready"


_ALLOWED = {
    SessionPhase.UNINITIALIZED: {SessionPhase.LOCATING},
    SessionPhase.LOCATING: {SessionPhase.READY, SessionPhase.UNINITIALIZED},  # back only on failed setup
    SessionPhase.READY: set(),
}


def transition_session(current: SessionPhase, target: SessionPhase) -> SessionPhase:
    """
    Uninitialized -> Locating -> Ready, once. Locating may fall back to
    Uninitialized when map setup fails; Ready is final, so a session can
    never be initialized twice.
    """
    if target not in _ALLOWED[current]:
        raise SessionStateError(f"Cannot move session from {current.value} to {target.value}")
    return target


@dataclass
class SessionContext:
    """
    Everything that exists only once the first coordinate is known.
    Built exactly once, at the Locating -> Ready transition.
    """
    user_location: Coordinate
    map_session: MapSession
    markers: MarkerRegistry
