"""
Tests for the Spotify client and its token cache
"""
import pytest
import requests
from unittest.mock import MagicMock

from conftest import make_response
from eventfinder.exceptions import ConfigurationException, UpstreamException, ValidationException
from eventfinder.services.spotify import SpotifyClient, TokenCache, map_album, map_artist

API_URL = "https://spotify.example.com/v1"
TOKEN_URL = "https://accounts.example.com/api/token"


class FakeClock:
    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def session():
    return MagicMock()


@pytest.fixture
def spotify(session, clock):
    return SpotifyClient(
        "client-id",
        "client-secret",
        TokenCache(clock=clock),
        api_url=API_URL,
        token_url=TOKEN_URL,
        session=session,
        timeout=3,
    )


def token_response(token="token-1", expires_in=3600):
    return make_response({"access_token": token, "token_type": "Bearer", "expires_in": expires_in})


SAMPLE_ARTIST = {
    "id": "artist-1",
    "name": "Phoebe Bridgers",
    "followers": {"total": 2500000},
    "popularity": 74,
    "genres": ["indie pop"],
    "images": [{"url": "https://i.scdn.co/big.jpg", "width": 640}, {"url": "https://i.scdn.co/small.jpg"}],
    "external_urls": {"spotify": "https://open.spotify.com/artist/artist-1"},
}

SAMPLE_ALBUM = {
    "id": "album-1",
    "name": "Punisher",
    "release_date": "2020-06-18",
    "total_tracks": 11,
    "images": [{"url": "https://i.scdn.co/punisher.jpg"}],
    "external_urls": {"spotify": "https://open.spotify.com/album/album-1"},
}


class TestTokenCache:
    def test_empty(self, clock):
        assert TokenCache(clock=clock).get() is None

    def test_valid_until_margin(self, clock):
        cache = TokenCache(margin=60, clock=clock)
        cache.store("abc", 3600)

        clock.now += 3539
        assert cache.get() == "abc"

        clock.now += 1
        assert cache.get() is None

    def test_clear(self, clock):
        cache = TokenCache(clock=clock)
        cache.store("abc", 3600)
        cache.clear()

        assert cache.get() is None
        assert cache.expires_at == 0.0

    def test_issued_at(self, clock):
        cache = TokenCache(clock=clock)
        cache.store("abc", 100, issued_at=500)
        assert cache.expires_at == 600


class TestAccessToken:
    def test_token_is_reused_within_validity(self, spotify, session, clock):
        session.post.return_value = token_response()

        assert spotify.get_access_token() == "token-1"
        clock.now += 1800
        assert spotify.get_access_token() == "token-1"

        assert session.post.call_count == 1
        kwargs = session.post.call_args.kwargs
        assert session.post.call_args.args == (TOKEN_URL,)
        assert kwargs["data"] == {"grant_type": "client_credentials"}
        assert kwargs["auth"] == ("client-id", "client-secret")

    def test_token_refreshes_inside_margin(self, spotify, session, clock):
        session.post.side_effect = [token_response("token-1"), token_response("token-2")]

        assert spotify.get_access_token() == "token-1"
        clock.now += 3600 - 30
        assert spotify.get_access_token() == "token-2"
        assert session.post.call_count == 2

    def test_auth_failure(self, spotify, session):
        session.post.return_value = make_response({"error": "invalid_client"}, status=400)

        with pytest.raises(UpstreamException) as exc_info:
            spotify.get_access_token()

        assert exc_info.value.message == "Spotify authentication failed"
        assert exc_info.value.status_code == 400
        assert spotify.token_cache.get() is None

    def test_auth_transport_error(self, spotify, session):
        session.post.side_effect = requests.Timeout("timed out")

        with pytest.raises(UpstreamException) as exc_info:
            spotify.get_access_token()
        assert exc_info.value.status_code == 500

    def test_unexpected_token_payload(self, spotify, session):
        session.post.return_value = make_response({"token_type": "Bearer"})

        with pytest.raises(UpstreamException):
            spotify.get_access_token()

    def test_missing_credentials(self, session, clock):
        client = SpotifyClient("", "", TokenCache(clock=clock), session=session)

        with pytest.raises(ConfigurationException):
            client.get_access_token()
        session.post.assert_not_called()


class TestSearchArtist:
    def test_found(self, spotify, session):
        session.post.return_value = token_response()
        session.request.return_value = make_response({"artists": {"items": [SAMPLE_ARTIST]}})

        artist = spotify.search_artist("  Phoebe Bridgers ")

        assert artist == {
            "id": "artist-1",
            "name": "Phoebe Bridgers",
            "followers": 2500000,
            "popularity": 74,
            "genres": ["indie pop"],
            "imageUrl": "https://i.scdn.co/big.jpg",
            "spotifyUrl": "https://open.spotify.com/artist/artist-1",
        }
        args, kwargs = session.request.call_args
        assert args == ("GET", f"{API_URL}/search")
        assert kwargs["params"] == {"q": "Phoebe Bridgers", "type": "artist", "limit": 1}
        assert kwargs["headers"] == {"Authorization": "Bearer token-1"}

    def test_not_found(self, spotify, session):
        session.post.return_value = token_response()
        session.request.return_value = make_response({"artists": {"items": []}})

        assert spotify.search_artist("zzzz-nobody") is None

    def test_blank_query(self, spotify, session):
        with pytest.raises(ValidationException) as exc_info:
            spotify.search_artist(" ")

        assert exc_info.value.message == "Missing query q"
        session.post.assert_not_called()
        session.request.assert_not_called()

    def test_search_failure_keeps_status(self, spotify, session):
        session.post.return_value = token_response()
        session.request.return_value = make_response({"error": {"status": 429}}, status=429)

        with pytest.raises(UpstreamException) as exc_info:
            spotify.search_artist("Adele")
        assert exc_info.value.status_code == 429


class TestArtistAlbums:
    def test_albums(self, spotify, session):
        session.post.return_value = token_response()
        session.request.return_value = make_response({"items": [SAMPLE_ALBUM]})

        albums = spotify.get_albums_for_artist("artist-1")

        assert albums == [
            {
                "id": "album-1",
                "name": "Punisher",
                "releaseDate": "2020-06-18",
                "totalTracks": 11,
                "imageUrl": "https://i.scdn.co/punisher.jpg",
                "spotifyUrl": "https://open.spotify.com/album/album-1",
            }
        ]
        args, kwargs = session.request.call_args
        assert args[1] == f"{API_URL}/artists/artist-1/albums"
        assert kwargs["params"] == {"include_groups": "album,single", "limit": 30, "market": "US"}

    def test_no_items(self, spotify, session):
        session.post.return_value = token_response()
        session.request.return_value = make_response({})

        assert spotify.get_albums_for_artist("artist-1") == []

    def test_one_token_for_many_calls(self, spotify, session):
        session.post.return_value = token_response()
        session.request.return_value = make_response({"items": []})

        spotify.get_albums_for_artist("a")
        spotify.get_albums_for_artist("b")

        assert session.post.call_count == 1


class TestMappers:
    def test_artist_without_images(self):
        artist = map_artist({"id": "x", "name": "X"})
        assert artist["imageUrl"] == ""
        assert artist["followers"] == 0
        assert artist["genres"] == []

    def test_album_without_images(self):
        assert map_album({"id": "y", "name": "Y"})["imageUrl"] == ""
