"""
Purpose: Orchestrator / interaction state machine (the "glue").
What it does:
Resolves the user's location once, brings up the map with the start marker,
then routes keystrokes and suggestion picks to PlaceSearch, MarkerRegistry,
RouteService and MapSession while keeping visual state in step with logical
state.

Concurrency: everything runs on one event loop. Search and route requests
are awaited without cancellation, so responses can come back out of order;
RequestSequencer makes sure only the most recently issued one is applied.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Dict, Optional

from common.geometry import Coordinate
from common.results import ErrorKind, Result
from location.provider import LocationProvider
from mapview.markers import MarkerRegistry
from mapview.session import MapSession
from mapview.surface import MapSurfaceError
from places.models import Place, SearchRole
from places.search import PlaceSearch
from routing.models import RouteResult
from routing.route_service import RouteService

from .display import DirectionsPanel, ErrorIndicator
from .policy import ErrorPolicy, InteractionPolicy, default_interaction_policy
from .sequencing import RequestSequencer
from .state_machines.search_state import (
    SearchState,
    apply_query,
    apply_suggestions,
    begin_route_fetch,
    clear_selection,
    finish_route_fetch,
)
from .state_machines.session_state import (
    SessionContext,
    SessionPhase,
    SessionStateError,
    transition_session,
)

logger = logging.getLogger(__name__)

ROUTE_KEY = "route"


def search_key(role: SearchRole) -> str:
    return f"search:{role.value}"


class InteractionController:
    """
    Owns both SearchStates and the SessionContext. Collaborators are
    injected; anything left out is built from the environment settings.
    """
    def __init__(
        self,
        location_provider: Optional[LocationProvider] = None,
        place_search: Optional[PlaceSearch] = None,
        route_service: Optional[RouteService] = None,
        map_session: Optional[MapSession] = None,
        policy: Optional[InteractionPolicy] = None,
    ):
        self.location_provider = location_provider or LocationProvider()
        self.place_search = place_search or PlaceSearch()
        self.route_service = route_service or RouteService()
        self.map_session = map_session or MapSession()
        self.policy = policy or default_interaction_policy()

        self.phase = SessionPhase.UNINITIALIZED
        self.context: Optional[SessionContext] = None
        self.searches: Dict[SearchRole, SearchState] = {
            SearchRole.START: SearchState(SearchRole.START, visible=self.policy.start_panel_visible),
            SearchRole.END: SearchState(SearchRole.END, visible=self.policy.end_panel_visible),
        }
        self.route: Optional[RouteResult] = None
        self.error: Optional[ErrorIndicator] = None
        self.sequencer = RequestSequencer()

    # --- read side ---

    @property
    def start_search(self) -> SearchState:
        return self.searches[SearchRole.START]

    @property
    def end_search(self) -> SearchState:
        return self.searches[SearchRole.END]

    @property
    def user_location(self) -> Optional[Coordinate]:
        return self.context.user_location if self.context else None

    @property
    def markers(self) -> Optional[MarkerRegistry]:
        return self.context.markers if self.context else None

    @property
    def directions_panel(self) -> Optional[DirectionsPanel]:
        if self.route is None:
            return None
        return DirectionsPanel.from_route(self.route)

    # --- lifecycle ---

    async def mount(self) -> SessionContext:
        """
        Uninitialized -> Locating -> Ready. Raises SessionStateError if the
        session was already mounted. If the map cannot be brought up the
        session drops back to Uninitialized and the error propagates, so
        mount() can be retried.
        """
        self.phase = transition_session(self.phase, SessionPhase.LOCATING)
        location = await self.location_provider.resolve()

        try:
            if not self.map_session.initialized:
                self.map_session.initialize(location)
            markers = MarkerRegistry(self.map_session)
            markers.place_start(location)
        except Exception:
            logger.error(f"Map setup at {location} failed, session back to {SessionPhase.UNINITIALIZED.value}")
            self.phase = transition_session(self.phase, SessionPhase.UNINITIALIZED)
            raise

        self.context = SessionContext(user_location=location, map_session=self.map_session, markers=markers)
        self.phase = transition_session(self.phase, SessionPhase.READY)
        logger.info(f"Session ready at {location}")
        return self.context

    def _require_ready(self) -> SessionContext:
        if self.phase != SessionPhase.READY or self.context is None:
            raise SessionStateError(f"Session is {self.phase.value}, not ready")
        return self.context

    # --- input panels ---

    def toggle_panel(self, role: SearchRole) -> bool:
        """Show/hide a search box. Search and route state are left alone."""
        state = self.searches[role]
        state.visible = not state.visible
        return state.visible

    # --- search ---

    async def handle_query(self, role: SearchRole, text: str) -> None:
        self._require_ready()
        state = self.searches[role]
        if not state.visible:
            logger.debug(f"Ignoring input for hidden {role.value} panel")
            return

        key = search_key(role)
        accepted = self.place_search.accepts(text)
        apply_query(state, text, accepted)
        ticket = self.sequencer.issue(key)
        if not accepted:
            return

        debounce = self.place_search.policy.debounce_seconds
        if debounce > 0:
            await asyncio.sleep(debounce)
            if not self.sequencer.is_latest(key, ticket):
                return

        result = await self.place_search.search(text, role)
        if not self.sequencer.is_latest(key, ticket):
            logger.debug(f"Dropping stale {role.value} suggestions for {text!r}")
            return

        if not result.ok:
            self._report(result)
            return
        apply_suggestions(state, result.value)
        self._clear_error(ErrorKind.SEARCH_FAILURE)

    # --- selection ---

    async def select_suggestion(self, role: SearchRole, index: int) -> Optional[RouteResult]:
        """Pick the index-th suggestion currently shown for `role`."""
        place = self.searches[role].suggestions[index]
        if role == SearchRole.START:
            self.select_start(place)
            return None
        return await self.select_end(place)

    def select_start(self, place: Place) -> None:
        context = self._require_ready()
        self.sequencer.invalidate(search_key(SearchRole.START))

        context.user_location = place.coordinate
        context.markers.place_start(place.coordinate)
        clear_selection(self.start_search)

    async def select_end(self, place: Place) -> Optional[RouteResult]:
        """
        Move/create the end marker and fetch a route to it from the current
        start. Returns the route if it was applied, None otherwise.
        """
        context = self._require_ready()
        self.sequencer.invalidate(search_key(SearchRole.END))

        context.markers.place_end(place.coordinate)
        clear_selection(self.end_search)
        begin_route_fetch(self.end_search)

        ticket = self.sequencer.issue(ROUTE_KEY)
        result = await self.route_service.fetch_route(context.user_location, place.coordinate)
        if not self.sequencer.is_latest(ROUTE_KEY, ticket):
            logger.debug(f"Dropping stale route to {place.coordinate}")
            return None

        if not result.ok:
            finish_route_fetch(self.end_search, succeeded=False)
            self._report(result)
            return None

        route = result.value
        try:
            self.map_session.set_route_geometry(route.geometry_points)
        except MapSurfaceError as e:
            # the session has put the previous route back, so keep showing its directions
            logger.error(f"Rendering route to {place.coordinate} failed: {e}")
            finish_route_fetch(self.end_search, succeeded=False)
            self._report(Result.failure(ErrorKind.ROUTE_FAILURE, f"render failed: {e}"))
            return None
        self.route = route
        finish_route_fetch(self.end_search, succeeded=True)
        self._clear_error(ErrorKind.ROUTE_FAILURE)
        return route

    # --- errors ---

    def _report(self, result: Result) -> None:
        # the component already logged the failure
        if self.policy.error_policy == ErrorPolicy.SURFACE and result.error != ErrorKind.LOCATION_UNAVAILABLE:
            self.error = ErrorIndicator.for_result(result)

    def _clear_error(self, kind: ErrorKind) -> None:
        if self.error is not None and self.error.kind == kind:
            self.error = None

    def dismiss_error(self) -> None:
        self.error = None
