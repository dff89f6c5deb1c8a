from typing import Any, Callable

from constants import JWT_KEY, LEGACY_SPOTIFY_ACCESS_TOKEN_KEY
from managers.file_manager import SessionStore
from managers.integration_manager import IntegrationStore
from spotify_api.http_client import BackendClient, BackendError
from utils.logger import log_info, log_warning


class LegacyMigrator:
    """One-shot promotion of the pre-integration spotify_access_token into integration records."""

    def __init__(
        self,
        *,
        session: SessionStore,
        store: IntegrationStore,
        backend: BackendClient,
        publish: Callable[[], Any],
    ):
        self.session = session
        self.store = store
        self.backend = backend
        self.publish = publish

    def migrate(self) -> bool:
        """Run the migration if needed. Returns True when spotify records were written."""
        if self.store.get_active_spotify_integration():
            return False

        migrated = False
        legacy_access_token = self.session.get_item(LEGACY_SPOTIFY_ACCESS_TOKEN_KEY)
        if legacy_access_token:
            try:
                user = self.backend.get_user(self.session.get_item(JWT_KEY))
            except BackendError as e:
                log_warning(f"Unable to fetch user for legacy Spotify migration: {e}")
                user = None

            if user:
                records = self.store.replace_integrations_from_remote(user)
                self.publish()
                migrated = bool(records)
                log_info(f"Migrated legacy Spotify access into {len(records)} integration record(s)")

        # the legacy key is cleared whatever happened so the check never repeats
        self.session.set_item(LEGACY_SPOTIFY_ACCESS_TOKEN_KEY, None)
        return migrated
