from dataclasses import dataclass
from typing import Callable, Optional

from managers.integration_manager import IntegrationRecord
from spotify_api.playback import PlaybackConfig, PlaybackLibrary
from utils.logger import log_debug
from utils.platform import is_mac


@dataclass
class ClientCredentials:
    """Spotify app credentials fetched from the backend, held for the process lifetime."""

    client_id: str = ""
    client_secret: str = ""

    def update(self, client_id: str, client_secret: str) -> None:
        self.client_id = client_id or ""
        self.client_secret = client_secret or ""


class CredentialBridge:
    """Pushes a full PlaybackConfig snapshot to the playback library."""

    def __init__(self, library: PlaybackLibrary, *, mac: Callable[[], bool] = is_mac):
        self.library = library
        self._is_mac = mac

    def build(
        self,
        integration: Optional[IntegrationRecord],
        client_id: Optional[str],
        client_secret: Optional[str],
    ) -> PlaybackConfig:
        mac = bool(self._is_mac())
        return PlaybackConfig(
            enable_itunes_desktop=False,
            enable_itunes_desktop_song_tracking=mac,
            enable_spotify_desktop=mac,
            spotify_client_id=client_id or "",
            spotify_client_secret=client_secret or "",
            spotify_access_token=integration.access_token if integration else None,
            spotify_refresh_token=integration.refresh_token if integration else None,
        )

    def publish(
        self,
        integration: Optional[IntegrationRecord],
        client_id: Optional[str],
        client_secret: Optional[str],
    ) -> PlaybackConfig:
        config = self.build(integration, client_id, client_secret)
        self.library.set_config(config)
        log_debug(f"Published playback config (logged_in={config.is_logged_in()}, mac={config.enable_spotify_desktop})")
        return config
