"""
Purpose: Last-issued-wins ordering for async requests.

Every request takes a ticket for its key ("search:start", "search:end",
"route"). When the response comes back it is applied only if its ticket is
still the latest for that key; anything older is stale and dropped.
"""
from typing import Dict


class RequestSequencer:
    def __init__(self):
        self._latest: Dict[str, int] = {}

    def issue(self, key: str) -> int:
        ticket = self._latest.get(key, 0) + 1
        self._latest[key] = ticket
        return ticket

    # Advancing the key without sending anything invalidates whatever is in flight.
    invalidate = issue

    def is_latest(self, key: str, ticket: int) -> bool:
        return self._latest.get(key, 0) == ticket
