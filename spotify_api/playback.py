import logging
from dataclasses import dataclass, replace
from typing import Any, Dict, Optional

import httpx

from spotify_api.client import SpotifyClient

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlaybackConfig:
    """Full configuration snapshot consumed by the playback library."""

    enable_itunes_desktop: bool = False
    enable_itunes_desktop_song_tracking: bool = False
    enable_spotify_desktop: bool = False
    spotify_client_id: str = ""
    spotify_client_secret: str = ""
    spotify_access_token: Optional[str] = None
    spotify_refresh_token: Optional[str] = None

    def is_logged_in(self) -> bool:
        return bool(self.spotify_access_token)


@dataclass(frozen=True)
class SpotifyUser:
    id: str
    email: str = ""
    product: str = ""
    display_name: str = ""

    @staticmethod
    def from_profile(payload: Dict[str, Any]) -> "SpotifyUser":
        return SpotifyUser(
            id=str(payload.get("id") or ""),
            email=str(payload.get("email") or ""),
            product=str(payload.get("product") or ""),
            display_name=str(payload.get("display_name") or ""),
        )


class PlaybackLibrary:
    """Playback-control layer: holds the active credentials and reads the Spotify profile.

    set_config always replaces the whole snapshot. Tokens refreshed while
    talking to Spotify are kept here only.
    """

    def __init__(self, *, transport: Optional[httpx.BaseTransport] = None):
        self.transport = transport
        self._config = PlaybackConfig()

    def set_config(self, config: PlaybackConfig) -> None:
        self._config = config

    def get_config(self) -> PlaybackConfig:
        return self._config

    def _on_token_refreshed(self, payload: Dict[str, Any]) -> None:
        self._config = replace(
            self._config,
            spotify_access_token=payload.get("access_token"),
            spotify_refresh_token=payload.get("refresh_token") or self._config.spotify_refresh_token,
        )

    def get_user_profile(self) -> Optional[SpotifyUser]:
        """Return the current Spotify profile, or None when logged out.

        Raises SpotifyApiError when Spotify cannot be reached.
        """
        config = self._config
        if not config.is_logged_in():
            return None

        client = SpotifyClient(
            access_token=str(config.spotify_access_token),
            refresh_token=config.spotify_refresh_token,
            client_id=config.spotify_client_id,
            client_secret=config.spotify_client_secret,
            on_token_refreshed=self._on_token_refreshed,
            transport=self.transport,
        )
        profile = client.me()
        if not profile.get("id"):
            logger.warning("Spotify profile response had no id")
            return None
        return SpotifyUser.from_profile(profile)
