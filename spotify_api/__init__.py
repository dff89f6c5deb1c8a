"""Clients for the Music Time backend, Spotify Web API and the playback layer."""

from .auth import build_spotify_connect_url, refresh_access_token
from .client import SpotifyApiError, SpotifyClient
from .http_client import BackendClient, BackendError
from .playback import PlaybackConfig, PlaybackLibrary, SpotifyUser

__all__ = [
    "build_spotify_connect_url",
    "refresh_access_token",
    "SpotifyApiError",
    "SpotifyClient",
    "BackendClient",
    "BackendError",
    "PlaybackConfig",
    "PlaybackLibrary",
    "SpotifyUser",
]
