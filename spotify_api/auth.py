import base64
import json
import logging
import urllib.parse
from typing import Any, Dict, Optional

import httpx

from constants import PLUGIN_ID, PLUGIN_TYPE, SPOTIFY_AUTH_PATH, VERSION
from spotify_api.http_client import DEFAULT_API_ENDPOINT

logger = logging.getLogger(__name__)

SPOTIFY_ACCOUNTS_BASE_URL = "https://accounts.spotify.com"


def build_spotify_connect_url(
    config: Dict[str, Any],
    *,
    plugin_uuid: str,
    auth_callback_state: str,
    jwt: Optional[str],
    mac: bool,
) -> str:
    """Return the backend URL that starts the browser OAuth handshake.

    The backend owns the redirect to Spotify and the token exchange; the
    auth_callback_state lets it correlate the eventual callback with this
    install.
    """
    config = config or {}
    api_endpoint = str(config.get("api_endpoint") or DEFAULT_API_ENDPOINT).rstrip("/")

    params: Dict[str, str] = {
        "plugin": str(config.get("plugin_type") or PLUGIN_TYPE),
        "plugin_uuid": plugin_uuid,
        "pluginVersion": VERSION,
        "plugin_id": str(config.get("plugin_id", PLUGIN_ID)),
        "mac": "true" if mac else "false",
        "auth_callback_state": auth_callback_state,
        "plugin_token": jwt or "",
    }

    return f"{api_endpoint}{SPOTIFY_AUTH_PATH}?{urllib.parse.urlencode(params)}"


def extract_connect_params(url: str) -> Dict[str, str]:
    """Parse a connect URL back into its query parameters (first value per key)."""
    parsed = urllib.parse.urlparse(str(url or "").strip())
    return {k: v[0] for k, v in urllib.parse.parse_qs(parsed.query, keep_blank_values=True).items()}


def refresh_access_token(
    *,
    client_id: str,
    client_secret: str,
    refresh_token: str,
    timeout: float = 30.0,
    transport: Optional[httpx.BaseTransport] = None,
) -> Dict[str, Any]:
    """Exchange a refresh token for a new access token.

    Returns the Spotify token response. Spotify may omit refresh_token on
    refresh, in which case the one passed in is carried over.
    """
    basic = base64.b64encode(f"{client_id}:{client_secret}".encode("utf-8")).decode("utf-8")

    try:
        with httpx.Client(timeout=timeout, follow_redirects=False, transport=transport) as client:
            resp = client.post(
                f"{SPOTIFY_ACCOUNTS_BASE_URL}/api/token",
                data={"grant_type": "refresh_token", "refresh_token": refresh_token},
                headers={
                    "Authorization": f"Basic {basic}",
                    "Content-Type": "application/x-www-form-urlencoded",
                },
            )
    except httpx.HTTPError as e:
        raise RuntimeError(f"Spotify token request failed: {e}") from e

    if resp.status_code >= 400:
        raise RuntimeError(f"Spotify token request failed (HTTP {resp.status_code}): {resp.text}")

    try:
        payload = resp.json()
    except json.JSONDecodeError as e:
        raise RuntimeError(f"Spotify token response was not JSON: {resp.text}") from e

    if not isinstance(payload, dict) or not payload.get("access_token"):
        raise RuntimeError(f"Spotify token refresh failed: {payload}")

    if not payload.get("refresh_token"):
        payload["refresh_token"] = refresh_token

    logger.debug("Spotify access token refreshed")
    return payload
