import os

APP_DIR = os.path.dirname(os.path.abspath(__file__))
BASE_DIR = os.path.dirname(APP_DIR)
CONFIG_DIR = os.environ.get("EVENTFINDER_CONFIG_DIR", os.path.join(BASE_DIR, "config"))
CONFIG_FILE = os.path.join(CONFIG_DIR, "settings.yaml")
ENV_FILE = os.path.join(BASE_DIR, ".env")
DB_FILE = os.path.join(CONFIG_DIR, "eventfinder.db")
STATIC_DIR = os.path.join(APP_DIR, "static")

EVENTFINDER_DB = "sqlite:///" + DB_FILE

BUILD_VERSION = "20261019_1200"

# Upstream endpoints
TICKETMASTER_BASE_URL = "https://app.ticketmaster.com/discovery/v2"
SPOTIFY_API_URL = "https://api.spotify.com/v1"
SPOTIFY_TOKEN_URL = "https://accounts.spotify.com/api/token"
IPINFO_URL = "https://ipinfo.io/json"

# Search defaults
SEARCH_PAGE_SIZE = 20
SEARCH_SORT = "date,asc"
DEFAULT_RADIUS = 10
DEFAULT_UNIT = "miles"
SUGGEST_UPSTREAM_SIZE = 5
SUGGEST_MAX_RESULTS = 10

# Spotify
SPOTIFY_TOKEN_MARGIN = 60  # seconds left before a cached token is refreshed
SPOTIFY_ALBUM_LIMIT = 30
SPOTIFY_ALBUM_GROUPS = "album,single"
SPOTIFY_MARKET = "US"

# Client
SUGGEST_DEBOUNCE_SECONDS = 0.3
SUGGEST_DROPDOWN_SIZE = 6
TOAST_DEFAULT_DURATION = 3000  # ms

# Ticketmaster segment ids, keyed by lowercase category label
CATEGORY_SEGMENTS = {
    "music": "KZFzniwnSyZfZ7v7nJ",
    "sports": "KZFzniwnSyZfZ7v7nE",
    "arts & theatre": "KZFzniwnSyZfZ7v7na",
    "film": "KZFzniwnSyZfZ7v7nn",
    "miscellaneous": "KZFzniwnSyZfZ7v7n1",
}

TICKET_STATUS_LABELS = {
    "onsale": "On Sale",
    "offsale": "Off Sale",
    "canceled": "Canceled",
    "postponed": "Postponed",
    "rescheduled": "Rescheduled",
}

DEFAULT_SETTINGS = {
    "server": {
        "host": "0.0.0.0",
        "port": 8080,
        "static_dir": STATIC_DIR,
    },
    "database": {
        "url": EVENTFINDER_DB,
    },
    "apis": {
        "ticketmaster_api_key": "",
        "spotify_client_id": "",
        "spotify_client_secret": "",
        "ipinfo_token": "",
        "timeout": 10,
    },
    "logging": {
        "level": "INFO",
        "format": "console",
    },
}

# Credentials that must be present before the gateway starts
REQUIRED_API_KEYS = [
    "ticketmaster_api_key",
    "spotify_client_id",
    "spotify_client_secret",
    "ipinfo_token",
]
