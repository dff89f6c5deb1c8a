from typing import Any, Callable, Dict, Optional

from constants import JWT_KEY
from managers.credential_bridge import ClientCredentials, CredentialBridge
from managers.file_manager import SessionStore
from managers.integration_manager import IntegrationRecord, IntegrationStore
from managers.migration_manager import LegacyMigrator
from managers.notifications import MusicEvent, Notifier
from managers.user_cache import SpotifyUserCache
from menus.prompts import confirm_yes
from spotify_api.auth import build_spotify_connect_url
from spotify_api.http_client import BackendClient, BackendError
from spotify_api.playback import PlaybackConfig
from utils.logger import log_info, log_success, log_warning
from utils.platform import PendingCalls, is_mac, launch_web_url

CONNECT_DIFFERENT_ACCOUNT_PROMPT = "Connect with a different Spotify account?"
SWITCH_ACCOUNT_PROMPT = "Are you sure you would like to connect to a different Spotify account?"
DISCONNECT_PROMPT = "Are you sure you would like to disconnect Spotify?"
DISCONNECTED_MESSAGE = "Successfully disconnected your Spotify connection."


class SpotifyIntegrationController:
    """Owns the Spotify link lifecycle: connect, disconnect, switch and migrate.

    Only this class writes to the IntegrationStore or publishes through the
    CredentialBridge. Every state change ends in update_config() so the
    playback library never lags behind the store.

    Confirmation prompts are the only suspension points that can abort an
    operation; they run before any side effect.
    """

    def __init__(
        self,
        config: Dict[str, Any],
        *,
        session: SessionStore,
        store: IntegrationStore,
        backend: BackendClient,
        bridge: CredentialBridge,
        user_cache: SpotifyUserCache,
        credentials: ClientCredentials,
        notifier: Notifier,
        confirm: Callable[[str], bool] = confirm_yes,
        inform: Callable[[str], None] = log_success,
        launch_url: Callable[[str], Any] = launch_web_url,
        scheduler: Optional[Callable[[float, Callable[[], None]], Any]] = None,
        mac: Callable[[], bool] = is_mac,
    ):
        self.config = config or {}
        self.session = session
        self.store = store
        self.backend = backend
        self.bridge = bridge
        self.user_cache = user_cache
        self.credentials = credentials
        self.notifier = notifier
        self.confirm = confirm
        self.inform = inform
        self.launch_url = launch_url
        self.scheduler = scheduler if scheduler is not None else PendingCalls()
        self._is_mac = mac
        self.migrator = LegacyMigrator(
            session=session,
            store=store,
            backend=backend,
            publish=self.update_config,
        )

    def _jwt(self) -> Optional[str]:
        return self.session.get_item(JWT_KEY)

    def _confirmed(self, message: str) -> bool:
        return self.confirm(message) is True

    def get_spotify_integration(self) -> Optional[IntegrationRecord]:
        return self.store.get_active_spotify_integration()

    # -----------------
    # Connect / disconnect / switch
    # -----------------

    def connect(self) -> Optional[str]:
        """Start the browser OAuth flow. Returns the dispatched URL, or None if declined.

        An existing link is replaced only after the user confirms. The token
        exchange finishes out of process; see sync_integrations().
        """
        if self.get_spotify_integration():
            if not self._confirmed(CONNECT_DIFFERENT_ACCOUNT_PROMPT):
                return None
            self.disconnect(require_confirmation=False)

        url = build_spotify_connect_url(
            self.config,
            plugin_uuid=self.session.get_plugin_uuid(),
            auth_callback_state=self.session.new_auth_callback_state(),
            jwt=self._jwt(),
            mac=self._is_mac(),
        )

        if self.config.get("open_browser", True):
            self.launch_url(url)
        else:
            log_info(f"Open this URL in your browser to connect Spotify:\n{url}")
        return url

    def remove_spotify_integration(self) -> None:
        self.store.clear_spotify_integrations()
        # publish the logged out config, then drop the profile
        self.update_config()
        self.user_cache.invalidate()

    def disconnect(self, require_confirmation: bool = True) -> bool:
        """Unlink Spotify. Returns False when the user declined."""
        if require_confirmation and not self._confirmed(DISCONNECT_PROMPT):
            return False

        # remote invalidation goes first; local state is cleared even if it fails
        try:
            self.backend.disconnect_spotify(self._jwt())
        except BackendError as e:
            log_warning(f"Backend Spotify disconnect failed, clearing local connection anyway: {e}")

        self.remove_spotify_integration()

        self.notifier.publish(MusicEvent.SYNC_PLAYBACK_STATUS, running=False)
        self.scheduler(float(self.config.get("refresh_delay_seconds", 1.0)), self._refresh_views)

        if require_confirmation:
            self.inform(DISCONNECTED_MESSAGE)
        return True

    def _refresh_views(self) -> None:
        self.notifier.publish(MusicEvent.REFRESH_PLAYLISTS)
        self.notifier.publish(MusicEvent.REFRESH_RECOMMENDATIONS)

    def switch_account(self) -> Optional[str]:
        if not self._confirmed(SWITCH_ACCOUNT_PROMPT):
            return None
        self.disconnect(require_confirmation=False)
        return self.connect()

    def sync_integrations(self) -> Optional[IntegrationRecord]:
        """Pull the backend's view of the linked accounts after the browser flow completes."""
        try:
            user = self.backend.get_user(self._jwt())
        except BackendError as e:
            log_warning(f"Unable to fetch integrations from the backend: {e}")
            return self.get_spotify_integration()

        if not user:
            log_warning("No backend session available; connect Spotify first.")
            return self.get_spotify_integration()

        self.store.replace_integrations_from_remote(user)
        self.update_config()
        self.user_cache.refresh(force=True)
        return self.get_spotify_integration()

    # -----------------
    # Credentials / profile
    # -----------------

    def is_premium_user(self) -> bool:
        return self.user_cache.is_premium()

    def update_client_credentials(self) -> bool:
        try:
            info = self.backend.fetch_spotify_client_info(self._jwt())
        except BackendError as e:
            log_warning(f"Unable to fetch Spotify client info: {e}")
            return False

        self.credentials.update(info["clientId"], info["clientSecret"])
        return True

    def update_config(self) -> PlaybackConfig:
        integration = self.get_spotify_integration()
        if not integration:
            self.user_cache.invalidate()

        return self.bridge.publish(integration, self.credentials.client_id, self.credentials.client_secret)

    def migrate_legacy_access(self) -> bool:
        return self.migrator.migrate()
