"""Spotify authorization-code flow helpers."""
from __future__ import annotations

import secrets

from spotipy.cache_handler import MemoryCacheHandler
from spotipy.oauth2 import SpotifyOAuth

from automixify.config import Settings

SCOPE = (
    "playlist-read-private playlist-read-collaborative "
    "playlist-modify-private playlist-modify-public"
)


def build_oauth(settings: Settings) -> SpotifyOAuth:
    # Tokens are handed back to the caller, never cached to disk.
    return SpotifyOAuth(
        client_id=settings.client_id,
        client_secret=settings.client_secret,
        redirect_uri=settings.redirect_uri,
        scope=SCOPE,
        cache_handler=MemoryCacheHandler(),
        open_browser=False,
    )


def authorize_url(oauth: SpotifyOAuth) -> str:
    return oauth.get_authorize_url(state=secrets.token_urlsafe(12))


def exchange_code(oauth: SpotifyOAuth, code: str) -> dict:
    return oauth.get_access_token(code, as_dict=True, check_cache=False)


def refresh(oauth: SpotifyOAuth, refresh_token: str) -> dict:
    return oauth.refresh_access_token(refresh_token)
