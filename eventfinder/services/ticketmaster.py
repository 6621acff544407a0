"""
Ticketmaster Discovery API client: event search, keyword suggestions and
event detail lookups
"""
import logging
from typing import Dict, List, Optional
from urllib.parse import quote

from eventfinder.constants import (
    CATEGORY_SEGMENTS,
    DEFAULT_RADIUS,
    DEFAULT_UNIT,
    SEARCH_PAGE_SIZE,
    SEARCH_SORT,
    SUGGEST_MAX_RESULTS,
    SUGGEST_UPSTREAM_SIZE,
    TICKETMASTER_BASE_URL,
)
from eventfinder.exceptions import ValidationException
from eventfinder.metrics import track_upstream
from eventfinder.services.base import UpstreamClient
from eventfinder.utils import dig, pick_widest_image

logger = logging.getLogger("main")


def segment_for_category(category: Optional[str]) -> Optional[str]:
    """
    Map a category label to its Ticketmaster segment id.

    Labels are matched case-insensitively. "all", empty and unknown labels
    return None, meaning no segment filter.
    """
    key = (category or "").strip().lower()
    if not key or key == "all":
        return None
    return CATEGORY_SEGMENTS.get(key)


def map_event(event: Dict) -> Dict:
    """Reshape one upstream event into the search-result structure"""
    segment = dig(event, "classifications", 0, "segment", "name", default="")
    venue = dig(event, "_embedded", "venues", 0, default={})
    image = pick_widest_image(event.get("images"))

    return {
        "id": event.get("id"),
        "name": event.get("name"),
        "date": dig(event, "dates", "start", "localDate", default=""),
        "time": dig(event, "dates", "start", "localTime", default=""),
        "genre": segment,
        "category": segment,
        "venue": dig(venue, "name", default=""),
        "city": dig(venue, "city", "name", default=""),
        "state": dig(venue, "state", "name", default=""),
        "country": dig(venue, "country", "name", default=""),
        "imageUrl": image.get("url", "") if image else "",
        "url": event.get("url") or "",
    }


def collect_suggestions(payload: Dict, limit: int = SUGGEST_MAX_RESULTS) -> List[str]:
    """Distinct names from attractions, then events, then venues"""
    names = {}
    for group in ("attractions", "events", "venues"):
        for entry in dig(payload, "_embedded", group, default=[]) or []:
            name = entry.get("name") if isinstance(entry, dict) else None
            if name:
                names.setdefault(name, None)
    return list(names)[:limit]


def _parse_radius(radius) -> int:
    if radius is None or str(radius).strip() == "":
        return DEFAULT_RADIUS
    try:
        value = float(radius)
    except (TypeError, ValueError):
        raise ValidationException(f"Invalid radius: {radius!r}")
    if value <= 0:
        raise ValidationException(f"Radius must be positive: {radius!r}")
    return int(value) if value.is_integer() else value


def _parse_coordinate(name, value) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ValidationException(f"Invalid {name}: {value!r}")


class TicketmasterClient(UpstreamClient):
    """Client for the Ticketmaster Discovery API"""

    provider = "ticketmaster"

    def __init__(self, api_key: str, base_url: str = TICKETMASTER_BASE_URL, **kwargs):
        super().__init__(**kwargs)
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")

    def build_search_params(
        self,
        keyword: Optional[str] = None,
        segment_id: Optional[str] = None,
        category: Optional[str] = None,
        radius=None,
        unit: Optional[str] = None,
        lat=None,
        lon=None,
        city: Optional[str] = None,
    ) -> Dict:
        """Translate gateway query parameters into Discovery API parameters"""
        params = {
            "apikey": self.api_key,
            "size": SEARCH_PAGE_SIZE,
            "sort": SEARCH_SORT,
            "radius": _parse_radius(radius),
            "unit": (unit or "").strip() or DEFAULT_UNIT,
        }

        keyword = (keyword or "").strip()
        if keyword:
            params["keyword"] = keyword

        segment = (segment_id or "").strip() or segment_for_category(category)
        if segment:
            params["segmentId"] = segment

        has_lat = lat is not None and str(lat).strip() != ""
        has_lon = lon is not None and str(lon).strip() != ""
        city = (city or "").strip()
        if has_lat and has_lon:
            params["latlong"] = f"{_parse_coordinate('lat', lat)},{_parse_coordinate('lon', lon)}"
        elif city:
            params["city"] = city

        return params

    @track_upstream("ticketmaster", "search")
    def search_events(self, **query) -> List[Dict]:
        """Up to 20 events sorted by date; an empty list when nothing matches"""
        params = self.build_search_params(**query)
        data = self._request_json(
            "GET",
            f"{self.base_url}/events.json",
            "Failed to fetch events from Ticketmaster",
            params=params,
        )

        events = dig(data, "_embedded", "events", default=None)
        if not events:
            logger.info(f"No Ticketmaster events for {_loggable(params)}")
            return []

        return [map_event(e) for e in events if isinstance(e, dict)]

    @track_upstream("ticketmaster", "suggest")
    def suggest(self, keyword: Optional[str]) -> List[str]:
        """Autocomplete names; blank keywords never reach the API"""
        keyword = (keyword or "").strip()
        if not keyword:
            return []

        data = self._request_json(
            "GET",
            f"{self.base_url}/suggest.json",
            "Failed to get suggestions",
            params={"apikey": self.api_key, "keyword": keyword, "size": SUGGEST_UPSTREAM_SIZE},
        )
        return collect_suggestions(data or {})

    @track_upstream("ticketmaster", "detail")
    def get_event(self, event_id: str) -> Dict:
        """Raw upstream detail payload for one event"""
        if not event_id:
            raise ValidationException("Missing event id")

        return self._request_json(
            "GET",
            f"{self.base_url}/events/{quote(event_id, safe='')}.json",
            "Failed to fetch event details from Ticketmaster",
            params={"apikey": self.api_key},
        )


def _loggable(params):
    return {k: v for k, v in params.items() if k != "apikey"}
