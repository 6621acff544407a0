"""
Spotify Web API client used for artist enrichment on the event detail page
"""
import logging
import threading
import time
from typing import Dict, List, Optional
from urllib.parse import quote

import requests

from eventfinder.constants import (
    SPOTIFY_ALBUM_GROUPS,
    SPOTIFY_ALBUM_LIMIT,
    SPOTIFY_API_URL,
    SPOTIFY_MARKET,
    SPOTIFY_TOKEN_MARGIN,
    SPOTIFY_TOKEN_URL,
)
from eventfinder.exceptions import ConfigurationException, UpstreamException, ValidationException
from eventfinder.metrics import spotify_token_refresh_total, track_upstream
from eventfinder.services.base import UpstreamClient
from eventfinder.utils import dig

logger = logging.getLogger("main")


class TokenCache:
    """
    One access token and its expiry, shared by every request of a process.

    The lock only covers reading and writing the pair. Two callers that both
    see a stale token will both refresh it, the last write wins.
    """

    def __init__(self, margin: float = SPOTIFY_TOKEN_MARGIN, clock=time.time):
        self.margin = margin
        self.clock = clock
        self._lock = threading.Lock()
        self._access_token = None
        self._expires_at = 0.0

    def get(self) -> Optional[str]:
        """Cached token if more than `margin` seconds remain, else None"""
        with self._lock:
            if self._access_token and self.clock() < self._expires_at - self.margin:
                return self._access_token
            return None

    def store(self, access_token: str, expires_in: float, issued_at: Optional[float] = None):
        issued_at = self.clock() if issued_at is None else issued_at
        with self._lock:
            self._access_token = access_token
            self._expires_at = issued_at + float(expires_in)

    def clear(self):
        with self._lock:
            self._access_token = None
            self._expires_at = 0.0

    @property
    def expires_at(self) -> float:
        with self._lock:
            return self._expires_at


def map_artist(artist: Dict) -> Dict:
    return {
        "id": artist.get("id"),
        "name": artist.get("name"),
        "followers": dig(artist, "followers", "total", default=0),
        "popularity": artist.get("popularity"),
        "genres": artist.get("genres") or [],
        "imageUrl": dig(artist, "images", 0, "url", default=""),
        "spotifyUrl": dig(artist, "external_urls", "spotify", default=""),
    }


def map_album(album: Dict) -> Dict:
    return {
        "id": album.get("id"),
        "name": album.get("name"),
        "releaseDate": album.get("release_date"),
        "totalTracks": album.get("total_tracks"),
        "imageUrl": dig(album, "images", 0, "url", default=""),
        "spotifyUrl": dig(album, "external_urls", "spotify", default=""),
    }


class SpotifyClient(UpstreamClient):
    """Client for the Spotify Web API (client-credentials flow)"""

    provider = "spotify"

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        token_cache: TokenCache,
        api_url: str = SPOTIFY_API_URL,
        token_url: str = SPOTIFY_TOKEN_URL,
        **kwargs,
    ):
        super().__init__(**kwargs)
        self.client_id = client_id
        self.client_secret = client_secret
        self.token_cache = token_cache
        self.api_url = api_url.rstrip("/")
        self.token_url = token_url

    def get_access_token(self) -> str:
        """Cached token, or a fresh one from the client-credentials exchange"""
        token = self.token_cache.get()
        if token:
            return token

        if not self.client_id or not self.client_secret:
            raise ConfigurationException("Spotify client id/secret not configured")

        issued_at = self.token_cache.clock()
        try:
            response = self.session.post(
                self.token_url,
                data={"grant_type": "client_credentials"},
                auth=(self.client_id, self.client_secret),
                timeout=self.timeout,
            )
            response.raise_for_status()
            data = response.json()
            access_token = data["access_token"]
            expires_in = data["expires_in"]
        except requests.RequestException as e:
            status = e.response.status_code if e.response is not None else None
            spotify_token_refresh_total.labels(status="error").inc()
            logger.error(f"Spotify auth failed: status={status} error={e}")
            raise UpstreamException("Spotify authentication failed", provider=self.provider, upstream_status=status)
        except (ValueError, KeyError, TypeError) as e:
            spotify_token_refresh_total.labels(status="error").inc()
            logger.error(f"Spotify auth returned an unexpected payload: {e}")
            raise UpstreamException("Spotify authentication failed", provider=self.provider)

        self.token_cache.store(access_token, expires_in, issued_at=issued_at)
        spotify_token_refresh_total.labels(status="success").inc()
        logger.info(f"Spotify access token refreshed, valid for {expires_in}s")
        return access_token

    def _auth_headers(self) -> Dict:
        return {"Authorization": f"Bearer {self.get_access_token()}"}

    @track_upstream("spotify", "search_artist")
    def search_artist(self, name: Optional[str]) -> Optional[Dict]:
        """Best single match for `name`, or None when Spotify has none"""
        query = (name or "").strip()
        if not query:
            raise ValidationException("Missing query q")

        data = self._request_json(
            "GET",
            f"{self.api_url}/search",
            "Failed to search artist from Spotify",
            params={"q": query, "type": "artist", "limit": 1},
            headers=self._auth_headers(),
        )

        artist = dig(data, "artists", "items", 0)
        if not artist:
            logger.info(f"No Spotify artist for '{query}'")
            return None
        return map_artist(artist)

    @track_upstream("spotify", "artist_albums")
    def get_albums_for_artist(self, artist_id: str) -> List[Dict]:
        """Albums and singles for one artist, US market"""
        if not artist_id:
            raise ValidationException("Missing artist id")

        data = self._request_json(
            "GET",
            f"{self.api_url}/artists/{quote(artist_id, safe='')}/albums",
            "Failed to fetch artist albums from Spotify",
            params={
                "include_groups": SPOTIFY_ALBUM_GROUPS,
                "limit": SPOTIFY_ALBUM_LIMIT,
                "market": SPOTIFY_MARKET,
            },
            headers=self._auth_headers(),
        )
        return [map_album(a) for a in (data or {}).get("items") or [] if isinstance(a, dict)]
