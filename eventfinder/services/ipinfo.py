"""
ipinfo.io client used to pre-fill the search location
"""
import logging
from typing import Dict

from eventfinder.constants import IPINFO_URL
from eventfinder.exceptions import UpstreamException
from eventfinder.metrics import track_upstream
from eventfinder.services.base import UpstreamClient

logger = logging.getLogger("main")


def parse_loc(loc: str):
    """Split an ipinfo "lat,lon" string into two floats"""
    parts = loc.split(",")
    if len(parts) != 2:
        raise ValueError(f"Unexpected loc format: {loc!r}")
    return float(parts[0]), float(parts[1])


class IpInfoClient(UpstreamClient):
    """Client for the ipinfo.io geolocation API"""

    provider = "ipinfo"

    def __init__(self, token: str, url: str = IPINFO_URL, **kwargs):
        super().__init__(**kwargs)
        self.token = token
        self.url = url

    @track_upstream("ipinfo", "locate")
    def locate(self) -> Dict:
        data = self._request_json(
            "GET",
            self.url,
            "Failed to fetch IP location",
            params={"token": self.token},
        )

        loc = (data or {}).get("loc")
        if not loc:
            raise UpstreamException("loc not found from ipinfo", provider=self.provider)

        try:
            lat, lon = parse_loc(loc)
        except ValueError as e:
            logger.error(f"ipinfo returned an unusable loc: {e}")
            raise UpstreamException("Failed to fetch IP location", provider=self.provider)

        return {
            "lat": lat,
            "lon": lon,
            "city": data.get("city"),
            "region": data.get("region"),
            "country": data.get("country"),
        }
