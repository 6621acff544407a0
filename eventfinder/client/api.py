"""
JSON HTTP client for the EventFinder gateway
"""
import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import requests

from eventfinder.client.models import EventItem, IpLocation, SpotifyAlbum, SpotifyArtist

logger = logging.getLogger("main")


class GatewayError(Exception):
    """Any failed call to the gateway"""

    def __init__(self, message: str, status_code: Optional[int] = None, payload: Any = None):
        self.message = message
        self.status_code = status_code
        self.payload = payload
        super().__init__(message)


class GatewayClient:
    """Client for the /api routes of a running gateway"""

    def __init__(self, base_url: str = "http://localhost:8080", session: Optional[requests.Session] = None, timeout: float = 15):
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    def _call(self, method: str, path: str, **kwargs) -> Any:
        url = f"{self.base_url}/api{path}"
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            raise GatewayError(f"{method} {path} failed: {e}")

        try:
            payload = response.json()
        except ValueError:
            payload = None

        if response.status_code >= 400:
            message = payload.get("message") if isinstance(payload, dict) else None
            raise GatewayError(message or f"{method} {path} returned {response.status_code}", response.status_code, payload)
        return payload

    # Events
    def search_events(self, params: Dict[str, str]) -> List[EventItem]:
        data = self._call("GET", "/events", params=params) or []
        return [EventItem.from_dict(e) for e in data]

    def suggest(self, keyword: str) -> List[str]:
        return list(self._call("GET", "/suggest", params={"keyword": keyword}) or [])

    def get_event_details(self, event_id: str) -> Dict[str, Any]:
        return self._call("GET", f"/event/{quote(event_id, safe='')}") or {}

    def get_ip_location(self) -> IpLocation:
        data = self._call("GET", "/ip-location")
        return IpLocation(
            lat=data["lat"],
            lon=data["lon"],
            city=data.get("city"),
            region=data.get("region"),
            country=data.get("country"),
        )

    # Spotify
    def search_artist(self, name: str) -> Optional[SpotifyArtist]:
        data = self._call("GET", "/spotify/search-artist", params={"q": name})
        return SpotifyArtist.from_dict(data) if data else None

    def get_artist_albums(self, artist_id: str) -> List[SpotifyAlbum]:
        data = self._call("GET", f"/spotify/artist-albums/{quote(artist_id, safe='')}") or []
        return [SpotifyAlbum.from_dict(a) for a in data]

    # Favorites
    def list_favorites(self) -> List[EventItem]:
        return [EventItem.from_dict(f) for f in self._call("GET", "/favorites") or []]

    def add_favorite(self, item: EventItem) -> None:
        self._call("POST", "/favorites", json=item.to_dict())

    def remove_favorite(self, event_id: str) -> None:
        self._call("DELETE", f"/favorites/{quote(event_id, safe='')}")
