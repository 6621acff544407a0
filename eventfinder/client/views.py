"""
View controllers for the three pages: search, favorites and event detail.
They hold page state and talk to the gateway; rendering is left to the UI.
"""
import logging
from typing import Dict, List, Optional
from urllib.parse import quote

from eventfinder.client.api import GatewayClient, GatewayError
from eventfinder.client.debounce import Debouncer
from eventfinder.client.detail import map_event_detail
from eventfinder.client.models import EventDetail, EventItem, SearchParams, SpotifyAlbum, SpotifyArtist, Toast
from eventfinder.client.state import FavoritesStore, SearchSession
from eventfinder.client.toast import ToastBus
from eventfinder.constants import DEFAULT_RADIUS, DEFAULT_UNIT, SUGGEST_DEBOUNCE_SECONDS, SUGGEST_DROPDOWN_SIZE
from eventfinder.services.ticketmaster import segment_for_category

logger = logging.getLogger("main")

LOCATION_FAILED_MESSAGE = "Failed to auto-detect location. Please enter it manually."
LOCATION_PENDING_MESSAGE = "Detecting location, please try again in a moment."


def build_search_query(params: SearchParams) -> Dict[str, str]:
    """Translate the search form into /api/events query parameters"""
    query = {}

    keywords = (params.keywords or "").strip()
    if keywords:
        query["keyword"] = keywords

    segment = segment_for_category(params.category)
    if segment:
        query["segmentId"] = segment

    query["radius"] = str(params.distance) if params.distance else str(DEFAULT_RADIUS)
    query["unit"] = DEFAULT_UNIT

    location = (params.location or "").strip()
    if params.auto_detect_location and params.lat is not None and params.lon is not None:
        query["lat"] = str(params.lat)
        query["lon"] = str(params.lon)
    elif location:
        query["city"] = location

    return query


def _removed_toast(bus: ToastBus, favorites: FavoritesStore, event: EventItem, on_undo=None) -> Toast:
    """Info toast whose Undo re-adds the client-held event"""

    def undo():
        favorites.add(event)
        if on_undo:
            on_undo()
        bus.show(Toast(type="success", message=f"{event.name} added back to favorites!"))

    toast = Toast(type="info", message=f"{event.name} removed from favorites!", action_text="Undo", on_action=undo)
    bus.show(toast)
    return toast


class SearchView:
    def __init__(
        self,
        api: GatewayClient,
        session: SearchSession,
        favorites: FavoritesStore,
        toasts: ToastBus,
        timer_factory=None,
        debounce_delay: float = SUGGEST_DEBOUNCE_SECONDS,
    ):
        self.api = api
        self.session = session
        self.favorites = favorites
        self.toasts = toasts

        # Form fields
        self.keywords = ""
        self.category = "all"
        self.auto_detect_location = False
        self.location = ""
        self.distance = DEFAULT_RADIUS

        # Results
        self.events: List[EventItem] = []
        self.no_results = False
        self.is_searching = False

        # Auto-detect
        self.lat: Optional[float] = None
        self.lon: Optional[float] = None
        self.is_loc_loading = False
        self.loc_error: Optional[str] = None

        # Autocomplete
        self.suggestions: List[str] = []
        self.is_suggestion_open = False
        self.is_suggest_loading = False
        self._suggest_debouncer = Debouncer(self.fetch_suggestions, delay=debounce_delay, timer_factory=timer_factory)

    def restore(self) -> bool:
        """Reload the last search into the form; True when there was one"""
        cached = self.session.get()
        if cached is None:
            if self.auto_detect_location:
                self.fetch_location()
            return False

        params, results = cached
        self.keywords = params.keywords
        self.category = params.category
        self.location = params.location
        self.distance = params.distance
        self.auto_detect_location = params.auto_detect_location
        self.lat = params.lat
        self.lon = params.lon
        self.events = results
        self.no_results = len(results) == 0
        return True

    def current_params(self) -> SearchParams:
        return SearchParams(
            keywords=self.keywords.strip(),
            category=self.category,
            location="" if self.auto_detect_location else self.location.strip(),
            distance=self.distance,
            auto_detect_location=self.auto_detect_location,
            lat=self.lat if self.auto_detect_location else None,
            lon=self.lon if self.auto_detect_location else None,
        )

    def search(self) -> Optional[List[EventItem]]:
        """
        Run the search and remember it in the session.
        Returns None when auto-detect is on but no coordinates are known yet.
        """
        if self.auto_detect_location and (self.lat is None or self.lon is None):
            self.loc_error = LOCATION_PENDING_MESSAGE
            return None

        params = self.current_params()
        self.is_searching = True
        try:
            events = self.api.search_events(build_search_query(params))
        except GatewayError as e:
            logger.error(f"Search error: {e}")
            events = []
        finally:
            self.is_searching = False

        self.events = events
        self.no_results = len(events) == 0
        self.session.save(params, events)
        return events

    def clear(self) -> None:
        """Reset the form, results and the stored search"""
        self.keywords = ""
        self.category = "all"
        self.location = ""
        self.distance = DEFAULT_RADIUS
        self.auto_detect_location = False
        self.lat = None
        self.lon = None
        self.loc_error = None
        self.events = []
        self.no_results = False
        self.clear_keywords()
        self.session.clear()

    # Autocomplete
    def on_keyword_input(self, value: str) -> None:
        self.keywords = value

        if not value or not value.strip():
            self.suggestions = []
            self.is_suggestion_open = False
            self.is_suggest_loading = False
            self._suggest_debouncer.cancel()
            return

        self._suggest_debouncer.call(value.strip())

    def fetch_suggestions(self, value: str) -> None:
        self.is_suggest_loading = True
        try:
            suggestions = self.api.suggest(value)
        except GatewayError as e:
            logger.warning(f"Suggest error: {e}")
            self.suggestions = []
            self.is_suggestion_open = False
        else:
            self.suggestions = suggestions[:SUGGEST_DROPDOWN_SIZE]
            self.is_suggestion_open = len(self.suggestions) > 0
        finally:
            self.is_suggest_loading = False

    def pick_suggestion(self, item: str) -> None:
        self.keywords = item
        self.is_suggestion_open = False
        self.suggestions = []

    def clear_keywords(self) -> None:
        self.keywords = ""
        self.suggestions = []
        self.is_suggestion_open = False
        self._suggest_debouncer.cancel()

    # Location
    def set_auto_detect(self, enabled: bool) -> None:
        self.auto_detect_location = enabled
        if enabled:
            self.location = ""
            self.fetch_location()
        else:
            self.lat = None
            self.lon = None
            self.is_loc_loading = False
            self.loc_error = None

    def fetch_location(self) -> bool:
        self.is_loc_loading = True
        self.loc_error = None
        try:
            loc = self.api.get_ip_location()
        except GatewayError as e:
            logger.warning(f"IP location error: {e}")
            self.loc_error = LOCATION_FAILED_MESSAGE
            self.auto_detect_location = False
            return False
        finally:
            self.is_loc_loading = False

        self.lat = loc.lat
        self.lon = loc.lon
        return True

    # Favorites
    def is_favorite(self, event: EventItem) -> bool:
        return self.favorites.is_favorite(event.id)

    def toggle_favorite(self, event: EventItem) -> Toast:
        if self.favorites.toggle(event):
            toast = Toast(type="success", message=f"{event.name} added to favorites!")
            self.toasts.show(toast)
            return toast
        return _removed_toast(self.toasts, self.favorites, event)


class FavoritesView:
    def __init__(self, favorites: FavoritesStore, toasts: ToastBus):
        self.favorites_store = favorites
        self.toasts = toasts
        self.favorites: List[EventItem] = []
        self.no_favorites = False
        self.is_loading = False

    def load(self) -> List[EventItem]:
        self.is_loading = True
        if self.favorites_store.sync():
            self.favorites = self.favorites_store.get_favorites()
        else:
            self.favorites = []
        self.no_favorites = len(self.favorites) == 0
        self.is_loading = False
        return self.favorites

    def remove(self, event: EventItem) -> Toast:
        """Remove from store and page; the toast's Undo puts it back on both"""
        self.favorites_store.remove(event.id)
        self.favorites = [e for e in self.favorites if e.id != event.id]
        self.no_favorites = len(self.favorites) == 0

        def restore_on_page():
            if not any(e.id == event.id for e in self.favorites):
                self.favorites.append(event)
            self.no_favorites = False

        return _removed_toast(self.toasts, self.favorites_store, event, on_undo=restore_on_page)


class EventDetailView:
    TABS = ("info", "artist", "venue")

    def __init__(self, api: GatewayClient, favorites: FavoritesStore, toasts: ToastBus):
        self.api = api
        self.favorites = favorites
        self.toasts = toasts
        self._reset()

    def _reset(self):
        self.event: Optional[EventDetail] = None
        self.loading = False
        self.error_message = ""
        self.active_tab = "info"
        self.is_music_event = False

        self.artist_loading = False
        self.artist_loaded = False
        self.artist_error: Optional[str] = None
        self.artist_info: Optional[SpotifyArtist] = None
        self.artist_albums: List[SpotifyAlbum] = []

    def load(self, event_id: Optional[str]) -> Optional[EventDetail]:
        """Fetch and map one event; resets tabs and artist state"""
        self._reset()
        if not event_id:
            self.error_message = "Invalid event id"
            return None

        self.loading = True
        try:
            data = self.api.get_event_details(event_id)
        except GatewayError as e:
            logger.error(f"Failed to load event details: {e}")
            self.error_message = "Failed to load event details"
            return None
        finally:
            self.loading = False

        self.event = map_event_detail(data)
        self.is_music_event = self.event.category.lower() == "music"
        return self.event

    def set_active_tab(self, tab: str) -> None:
        if tab not in self.TABS:
            raise ValueError(f"Unknown tab: {tab}")
        self.active_tab = tab
        if tab == "artist" and not self.artist_loaded:
            self.load_artist_data()

    def artist_query(self) -> str:
        if self.event is None:
            return ""
        if self.event.attraction_names:
            return self.event.attraction_names[0].strip()
        return (self.event.name or "").strip()

    def load_artist_data(self) -> None:
        """Spotify artist and albums; always ends with artist_loaded set"""
        if self.event is None:
            self.artist_error = "Event not loaded"
            self.artist_loaded = True
            return

        name = self.artist_query()
        if not name:
            self.artist_error = "Artist name unavailable"
            self.artist_loaded = True
            return

        self.artist_loading = True
        self.artist_error = None
        try:
            try:
                artist = self.api.search_artist(name)
            except GatewayError as e:
                logger.error(f"Failed to search artist from Spotify: {e}")
                self.artist_error = "Failed to load artist from Spotify"
                return

            if artist is None:
                self.artist_error = "Artist not found on Spotify"
                return
            self.artist_info = artist

            try:
                self.artist_albums = self.api.get_artist_albums(artist.id)
            except GatewayError as e:
                logger.error(f"Failed to load artist albums: {e}")
                self.artist_error = "Failed to load albums from Spotify"
        finally:
            self.artist_loading = False
            self.artist_loaded = True

    @property
    def is_favorite(self) -> bool:
        return self.event is not None and self.favorites.is_favorite(self.event.id)

    def toggle_favorite(self) -> Optional[Toast]:
        if self.event is None:
            return None

        item = self.event.to_event_item()
        if self.favorites.toggle(item):
            toast = Toast(
                type="success",
                message=f"{self.event.name} added to favorites!",
                sub_message="You can view it in the Favorites page.",
            )
            self.toasts.show(toast)
            return toast
        return _removed_toast(self.toasts, self.favorites, item)

    def _share_target(self) -> str:
        if self.event is None:
            return ""
        return self.event.share_url or self.event.buy_ticket_url or ""

    @property
    def facebook_share_url(self) -> str:
        url = self._share_target()
        return f"https://www.facebook.com/sharer/sharer.php?u={quote(url, safe='')}" if url else ""

    @property
    def twitter_share_url(self) -> str:
        url = self._share_target()
        if not url:
            return ""
        text = self.event.name if self.event and self.event.name else "Check out this event"
        return f"https://twitter.com/intent/tweet?url={quote(url, safe='')}&text={quote(text, safe='')}"
