"""
Mapping of the raw Ticketmaster detail payload into EventDetail
"""
import re
from typing import Any, Dict, List, Optional
from urllib.parse import quote

from eventfinder.client.models import EventDetail
from eventfinder.constants import TICKET_STATUS_LABELS
from eventfinder.utils import dig, pick_widest_image

SEATMAP_PATTERN = re.compile(r"seat|map|chart", re.IGNORECASE)
GOOGLE_MAPS_SEARCH_URL = "https://www.google.com/maps/search/?api=1&query="


def ticket_status_label(code: Optional[str]) -> str:
    """Display label for a Ticketmaster status code"""
    if not code:
        return "N/A"
    return TICKET_STATUS_LABELS.get(code.lower(), code)


def find_seatmap_url(event: Dict[str, Any]) -> str:
    static_url = dig(event, "seatmap", "staticUrl")
    if static_url:
        return static_url

    for image in dig(event, "_embedded", "venues", 0, "images", default=[]):
        url = image.get("url") if isinstance(image, dict) else None
        if url and SEATMAP_PATTERN.search(url):
            return url
    return ""


def attraction_names(event: Dict[str, Any]) -> List[str]:
    return [a.get("name") for a in dig(event, "_embedded", "attractions", default=[]) if isinstance(a, dict) and a.get("name")]


def genres_label(event: Dict[str, Any]) -> str:
    classification = dig(event, "classifications", 0, default={})
    parts = []
    for key in ("segment", "genre"):
        name = dig(classification, key, "name")
        if name:
            parts.append(name)
    sub_genre = dig(classification, "subGenre", "name")
    if sub_genre and sub_genre != "Undefined":
        parts.append(sub_genre)
    return ", ".join(parts) or "N/A"


def venue_address_line(venue: Dict[str, Any]) -> str:
    parts = [
        dig(venue, "address", "line1", default=""),
        dig(venue, "city", "name", default=""),
        dig(venue, "state", "stateCode") or dig(venue, "state", "name", default=""),
    ]
    return ", ".join(p for p in parts if p)


def _venue_rules(venue: Dict[str, Any]):
    general_info = venue.get("generalInfo")
    if isinstance(general_info, str):
        general_rule = general_info or venue.get("generalRule") or ""
        child_rule = venue.get("childRule") or ""
    else:
        general_rule = dig(general_info, "generalRule") or venue.get("generalRule") or ""
        child_rule = dig(general_info, "childRule") or venue.get("childRule") or ""
    return general_rule, child_rule


def map_event_detail(event: Dict[str, Any]) -> EventDetail:
    """Build the detail view model from the gateway's passthrough payload"""
    event = event or {}
    venue = dig(event, "_embedded", "venues", 0, default={})
    image = pick_widest_image(event.get("images"))
    names = attraction_names(event)
    general_rule, child_rule = _venue_rules(venue)
    address = venue_address_line(venue)

    return EventDetail(
        id=event.get("id") or "",
        name=event.get("name") or "N/A",
        date=dig(event, "dates", "start", "localDate", default="N/A"),
        time=dig(event, "dates", "start", "localTime", default=""),
        artist_team=", ".join(names) or "N/A",
        venue=venue.get("name") or "N/A",
        genres=genres_label(event),
        category=dig(event, "classifications", 0, "segment", "name", default="N/A"),
        ticket_status=ticket_status_label(dig(event, "dates", "status", "code")),
        buy_ticket_url=event.get("url") or "",
        seatmap_url=find_seatmap_url(event),
        share_url=event.get("url") or "",
        image_url=image.get("url", "") if image else "",
        venue_parking=venue.get("parkingDetail") or "",
        venue_general_rule=general_rule,
        venue_child_rule=child_rule,
        venue_address_line=address,
        google_maps_url=GOOGLE_MAPS_SEARCH_URL + quote(address, safe="") if address else None,
        venue_see_events_url=venue.get("url") or None,
        venue_image_url=dig(venue, "images", 0, "url"),
        attraction_names=names,
    )
