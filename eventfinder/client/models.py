"""
Client-side data structures. Field names follow the gateway's JSON via
from_dict()/to_dict().
"""
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from eventfinder.constants import DEFAULT_RADIUS, TOAST_DEFAULT_DURATION


@dataclass
class SearchParams:
    keywords: str = ""
    category: str = "all"
    location: str = ""
    distance: Optional[float] = DEFAULT_RADIUS
    auto_detect_location: bool = False
    lat: Optional[float] = None
    lon: Optional[float] = None


@dataclass
class EventItem:
    """Search result and favorite card"""
    id: str
    name: str = ""
    date: str = ""
    time: str = ""
    genre: str = ""
    category: str = ""
    venue: str = ""
    city: str = ""
    image_url: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EventItem":
        return cls(
            id=data.get("id", ""),
            name=data.get("name") or "",
            date=data.get("date") or "",
            time=data.get("time") or "",
            genre=data.get("genre") or "",
            category=data.get("category") or "",
            venue=data.get("venue") or "",
            city=data.get("city") or "",
            image_url=data.get("imageUrl") or "",
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "date": self.date,
            "time": self.time,
            "genre": self.genre,
            "category": self.category,
            "venue": self.venue,
            "city": self.city,
            "imageUrl": self.image_url,
        }


@dataclass
class EventDetail:
    id: str
    name: str
    date: str
    time: str
    artist_team: str
    venue: str
    genres: str
    category: str
    ticket_status: str
    buy_ticket_url: str
    seatmap_url: str
    share_url: str
    image_url: str = ""
    venue_parking: str = ""
    venue_general_rule: str = ""
    venue_child_rule: str = ""
    venue_address_line: str = ""
    google_maps_url: Optional[str] = None
    venue_see_events_url: Optional[str] = None
    venue_image_url: Optional[str] = None
    # Names used for artist enrichment, in upstream order
    attraction_names: List[str] = field(default_factory=list)

    def to_event_item(self) -> EventItem:
        """Projection stored when the detail page adds a favorite"""
        return EventItem(
            id=self.id,
            name=self.name,
            date=self.date,
            time=self.time,
            genre=self.genres,
            category="",
            venue=self.venue,
            city="",
            image_url=self.image_url,
        )


@dataclass
class SpotifyArtist:
    id: str
    name: str
    followers: int = 0
    popularity: Optional[int] = None
    genres: List[str] = field(default_factory=list)
    image_url: str = ""
    spotify_url: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SpotifyArtist":
        return cls(
            id=data.get("id", ""),
            name=data.get("name", ""),
            followers=data.get("followers") or 0,
            popularity=data.get("popularity"),
            genres=list(data.get("genres") or []),
            image_url=data.get("imageUrl") or "",
            spotify_url=data.get("spotifyUrl") or "",
        )


@dataclass
class SpotifyAlbum:
    id: str
    name: str
    release_date: str = ""
    total_tracks: int = 0
    image_url: str = ""
    spotify_url: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SpotifyAlbum":
        return cls(
            id=data.get("id", ""),
            name=data.get("name", ""),
            release_date=data.get("releaseDate") or "",
            total_tracks=data.get("totalTracks") or 0,
            image_url=data.get("imageUrl") or "",
            spotify_url=data.get("spotifyUrl") or "",
        )


@dataclass
class IpLocation:
    lat: float
    lon: float
    city: Optional[str] = None
    region: Optional[str] = None
    country: Optional[str] = None


@dataclass
class Toast:
    message: str
    sub_message: Optional[str] = None
    type: str = "success"  # success | info
    action_text: Optional[str] = None
    duration: int = TOAST_DEFAULT_DURATION
    on_action: Optional[Callable[[], None]] = None
