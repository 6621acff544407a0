"""
Pytest fixtures and configuration for EventFinder tests
"""
import json
import pytest
import requests
from unittest.mock import MagicMock

from eventfinder.app import create_app, get_services


def make_response(payload=None, status=200, text=None):
    """Fake requests.Response carrying `payload` as its JSON body"""
    response = MagicMock()
    response.status_code = status
    response.ok = status < 400
    if isinstance(payload, Exception):
        response.json.side_effect = payload
        response.text = text or ""
    else:
        response.json.return_value = payload
        response.text = text if text is not None else json.dumps(payload)

    def raise_for_status():
        if status >= 400:
            raise requests.HTTPError(f"{status} Error", response=response)

    response.raise_for_status.side_effect = raise_for_status
    return response


@pytest.fixture
def app_settings(tmp_path):
    """Settings for an isolated app: temp SQLite file and temp static dir"""
    static_dir = tmp_path / "static"
    static_dir.mkdir()
    (static_dir / "index.html").write_text("<html><body>EventFinder</body></html>")
    (static_dir / "main.js").write_text("console.log('main');")

    return {
        "server": {"host": "127.0.0.1", "port": 8080, "static_dir": str(static_dir)},
        "database": {"url": f"sqlite:///{tmp_path / 'test.db'}"},
        "apis": {
            "ticketmaster_api_key": "tm-test-key",
            "spotify_client_id": "spotify-id",
            "spotify_client_secret": "spotify-secret",
            "ipinfo_token": "ipinfo-token",
            "timeout": 5,
        },
        "logging": {"level": "DEBUG", "format": "console"},
    }


@pytest.fixture
def upstream():
    """Shared requests.Session stand-in for every upstream client"""
    return MagicMock()


@pytest.fixture
def app(app_settings, upstream):
    _app = create_app(app_settings, session=upstream)
    _app.config.update({"TESTING": True})
    with _app.app_context():
        yield _app


@pytest.fixture
def client(app):
    with app.test_client() as test_client:
        yield test_client


@pytest.fixture
def services(app):
    return get_services(app)


@pytest.fixture
def sample_tm_event():
    """Ticketmaster event as returned by events.json and events/<id>.json"""
    return {
        "id": "vvG1zZ9aBcDeF",
        "name": "Phoebe Bridgers",
        "url": "https://www.ticketmaster.com/event/vvG1zZ9aBcDeF",
        "images": [
            {"url": "https://img.example.com/small.jpg", "width": 100, "height": 56},
            {"url": "https://img.example.com/large.jpg", "width": 1024, "height": 576},
            {"url": "https://img.example.com/medium.jpg", "width": 640, "height": 360},
        ],
        "dates": {
            "start": {"localDate": "2026-11-20", "localTime": "19:30:00"},
            "status": {"code": "onsale"},
        },
        "classifications": [
            {
                "segment": {"name": "Music"},
                "genre": {"name": "Rock"},
                "subGenre": {"name": "Indie Rock"},
            }
        ],
        "seatmap": {"staticUrl": "https://maps.example.com/seatmap.png"},
        "_embedded": {
            "venues": [
                {
                    "name": "Hollywood Bowl",
                    "url": "https://www.ticketmaster.com/venue/hollywood-bowl",
                    "city": {"name": "Los Angeles"},
                    "state": {"name": "California", "stateCode": "CA"},
                    "country": {"name": "United States Of America"},
                    "address": {"line1": "2301 N Highland Ave"},
                    "parkingDetail": "Stacked parking available.",
                    "generalInfo": {
                        "generalRule": "No outside alcohol.",
                        "childRule": "Children 2 and over need a ticket.",
                    },
                    "images": [{"url": "https://img.example.com/venue.jpg"}],
                }
            ],
            "attractions": [{"name": "Phoebe Bridgers"}, {"name": "Muna"}],
        },
    }


@pytest.fixture
def sample_favorite():
    return {
        "id": "42",
        "name": "Test Event",
        "date": "2026-11-20",
        "time": "19:30:00",
        "genre": "Music",
        "category": "Music",
        "venue": "Hollywood Bowl",
        "city": "Los Angeles",
        "imageUrl": "https://img.example.com/large.jpg",
    }
