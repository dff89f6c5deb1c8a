# Managers module exports
from managers.file_manager import SessionStore
from managers.integration_manager import IntegrationRecord, IntegrationStore
from managers.credential_bridge import ClientCredentials, CredentialBridge
from managers.user_cache import SpotifyUserCache
from managers.notifications import MusicEvent, Notifier
from managers.migration_manager import LegacyMigrator
from managers.spotify_manager import SpotifyIntegrationController

__all__ = [
    # Local persistence
    "SessionStore",
    "IntegrationRecord",
    "IntegrationStore",
    # Playback credentials
    "ClientCredentials",
    "CredentialBridge",
    # Profile cache
    "SpotifyUserCache",
    # Notifications
    "MusicEvent",
    "Notifier",
    # Lifecycle
    "LegacyMigrator",
    "SpotifyIntegrationController",
]
