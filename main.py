import json
from typing import Any, Dict

from config import load_config, validate_config
from managers.credential_bridge import ClientCredentials, CredentialBridge
from managers.file_manager import SessionStore
from managers.integration_manager import IntegrationStore
from managers.notifications import MusicEvent, Notifier
from managers.spotify_manager import SpotifyIntegrationController
from managers.user_cache import SpotifyUserCache
from menus.account_menu import account_menu
from spotify_api.http_client import BackendClient
from spotify_api.playback import PlaybackLibrary
from utils.logger import setup_logging, log_info, log_error


def build_controller(config: Dict[str, Any]) -> SpotifyIntegrationController:
    session = SessionStore(path=config["session_file"])
    store = IntegrationStore(session)
    library = PlaybackLibrary()

    return SpotifyIntegrationController(
        config,
        session=session,
        store=store,
        backend=BackendClient(config),
        bridge=CredentialBridge(library),
        user_cache=SpotifyUserCache(store, library),
        credentials=ClientCredentials(),
        notifier=Notifier(),
    )


def subscribe_console_handlers(notifier: Notifier) -> None:
    """Log every downstream notification so the refresh path is visible in the terminal."""
    notifier.subscribe(
        MusicEvent.SYNC_PLAYBACK_STATUS,
        lambda running=False: log_info(f"Playback {'running' if running else 'stopped'}"),
    )
    notifier.subscribe(MusicEvent.REFRESH_PLAYLISTS, lambda **payload: log_info("Refreshing playlists"))
    notifier.subscribe(MusicEvent.REFRESH_RECOMMENDATIONS, lambda **payload: log_info("Refreshing recommendations"))


def startup(controller: SpotifyIntegrationController) -> None:
    controller.update_client_credentials()
    controller.migrate_legacy_access()
    controller.update_config()
    controller.user_cache.refresh()


if __name__ == "__main__":
    setup_logging()

    try:
        config = load_config()
    except json.JSONDecodeError as e:
        log_error(f"Config file contains invalid JSON: {e}")
        exit(1)

    setup_logging(config.get("log_level", "INFO"))

    is_valid, errors = validate_config(config)
    if not is_valid:
        for err in errors:
            log_error(err)
        exit(1)

    controller = build_controller(config)
    subscribe_console_handlers(controller.notifier)

    startup(controller)
    account_menu(controller)
    log_info("Exiting program...")
