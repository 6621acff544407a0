"""
Shared service context, built once per process in create_app() and handed
to every route blueprint
"""
from dataclasses import dataclass, field
from typing import Any, Dict

import requests

from eventfinder.db import db
from eventfinder.repositories.favorites_repository import FavoritesRepository
from eventfinder.services.ipinfo import IpInfoClient
from eventfinder.services.spotify import SpotifyClient, TokenCache
from eventfinder.services.ticketmaster import TicketmasterClient


@dataclass
class ServiceContext:
    settings: Dict[str, Any]
    ticketmaster: TicketmasterClient
    spotify: SpotifyClient
    ipinfo: IpInfoClient
    favorites: FavoritesRepository
    token_cache: TokenCache = field(default_factory=TokenCache)


def build_context(settings, session=None):
    """
    Wire every adapter from `settings`.

    All clients share one requests.Session (connection pool) unless one is
    passed in; the Spotify token cache is created here and nowhere else.
    """
    apis = settings.get("apis", {})
    timeout = apis.get("timeout", 10)
    session = session or requests.Session()
    token_cache = TokenCache()

    return ServiceContext(
        settings=settings,
        ticketmaster=TicketmasterClient(apis.get("ticketmaster_api_key", ""), session=session, timeout=timeout),
        spotify=SpotifyClient(
            apis.get("spotify_client_id", ""),
            apis.get("spotify_client_secret", ""),
            token_cache,
            session=session,
            timeout=timeout,
        ),
        ipinfo=IpInfoClient(apis.get("ipinfo_token", ""), session=session, timeout=timeout),
        favorites=FavoritesRepository(db),
        token_cache=token_cache,
    )
