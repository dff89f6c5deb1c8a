VERSION = "1.0.0"

PLUGIN_ID = 13
PLUGIN_TYPE = "musictime"

SPOTIFY_PROVIDER = "spotify"
ACTIVE_STATUS = "active"
PREMIUM_PRODUCT = "premium"

# Session store keys
JWT_KEY = "jwt"
AUTH_CALLBACK_STATE_KEY = "auth_callback_state"
LEGACY_SPOTIFY_ACCESS_TOKEN_KEY = "spotify_access_token"
PLUGIN_UUID_KEY = "plugin_uuid"
INTEGRATIONS_KEY = "integrations"

# Backend routes
SPOTIFY_AUTH_PATH = "/auth/spotify"
SPOTIFY_CLIENT_INFO_PATH = "/auth/spotify/clientInfo"
SPOTIFY_DISCONNECT_PATH = "/auth/spotify/disconnect"
USER_PATH = "/users/me"
