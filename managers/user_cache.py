from typing import Optional

from constants import PREMIUM_PRODUCT
from managers.integration_manager import IntegrationStore
from spotify_api.client import SpotifyApiError
from spotify_api.playback import PlaybackLibrary, SpotifyUser
from utils.logger import log_warning


class SpotifyUserCache:
    """Process-wide cache of the connected Spotify profile."""

    def __init__(self, store: IntegrationStore, library: PlaybackLibrary):
        self.store = store
        self.library = library
        self._user: Optional[SpotifyUser] = None

    def get(self) -> Optional[SpotifyUser]:
        return self._user

    def has_user(self) -> bool:
        return bool(self._user and self._user.product)

    def invalidate(self) -> None:
        self._user = None

    def refresh(self, force: bool = False) -> Optional[SpotifyUser]:
        """Fetch the profile when a connection exists and the cache is stale or force is set.

        A failed or empty fetch keeps the previous value.
        """
        if not self.store.get_active_spotify_integration():
            return self._user

        if not force and self._user is not None and self._user.id:
            return self._user

        try:
            user = self.library.get_user_profile()
        except SpotifyApiError as e:
            log_warning(f"Unable to fetch the Spotify profile: {e}")
            return self._user

        if user is not None:
            self._user = user
        return self._user

    def is_premium(self) -> bool:
        if self._user is not None and self._user.product != PREMIUM_PRODUCT:
            # check one more time, the tier may have been upgraded upstream
            self.refresh(force=True)
        return bool(self._user and self._user.product == PREMIUM_PRODUCT)
