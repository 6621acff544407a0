"""
Client-side state: the last search and the in-memory favorites list
"""
import copy
import logging
from dataclasses import replace
from typing import List, Optional, Tuple

from eventfinder.client.api import GatewayClient, GatewayError
from eventfinder.client.models import EventItem, SearchParams

logger = logging.getLogger("main")


class SearchSession:
    """Most recent (params, results) pair, overwritten by every search"""

    def __init__(self):
        self._params: Optional[SearchParams] = None
        self._results: Optional[List[EventItem]] = None

    def save(self, params: SearchParams, results: List[EventItem]) -> None:
        self._params = replace(params)
        self._results = list(results)

    def get(self) -> Optional[Tuple[SearchParams, List[EventItem]]]:
        """Copies of the stored pair, so callers cannot mutate the cache"""
        if self._params is None or self._results is None:
            return None
        return replace(self._params), copy.deepcopy(self._results)

    def clear(self) -> None:
        self._params = None
        self._results = None


class FavoritesStore:
    """
    Ephemeral favorites cache kept in step with the gateway.

    Local changes apply immediately; the matching server call is
    fire-and-log, so concurrent edits resolve last-write-wins.
    """

    def __init__(self, api: GatewayClient):
        self.api = api
        self._favorites: List[EventItem] = []

    def sync(self) -> bool:
        """Replace the local list with the server's; False if the call failed"""
        try:
            self._favorites = self.api.list_favorites()
            return True
        except GatewayError as e:
            logger.error(f"Failed to sync favorites from server: {e}")
            return False

    def get_favorites(self) -> List[EventItem]:
        return list(self._favorites)

    def is_favorite(self, event_id: str) -> bool:
        return any(e.id == event_id for e in self._favorites)

    def add(self, event: EventItem) -> None:
        if self.is_favorite(event.id):
            return
        self._favorites.append(event)
        try:
            self.api.add_favorite(event)
        except GatewayError as e:
            logger.error(f"Failed to POST favorite {event.id}: {e}")

    def remove(self, event_id: str) -> None:
        self._favorites = [e for e in self._favorites if e.id != event_id]
        try:
            self.api.remove_favorite(event_id)
        except GatewayError as e:
            logger.error(f"Failed to DELETE favorite {event_id}: {e}")

    def toggle(self, event: EventItem) -> bool:
        """Flip the favorite state of `event`; returns the new state"""
        if self.is_favorite(event.id):
            self.remove(event.id)
            return False
        self.add(event)
        return True
