import json
import time
from typing import Any, Callable, Dict, Optional

import httpx

from spotify_api.auth import refresh_access_token


SPOTIFY_API_BASE_URL = "https://api.spotify.com/v1"


class SpotifyApiError(RuntimeError):
    """Raised when a Spotify Web API call fails after retries."""

    def __init__(self, message: str, *, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class SpotifyClient:
    """Thin Spotify Web API client for the playback layer.

    Retry behavior:
    - 401: one refresh attempt if a refresh token and client credentials exist
    - 429: honors Retry-After (Spotify rate limiting)
    - 5xx: exponential backoff retries (best effort)
    """

    def __init__(
        self,
        *,
        access_token: str,
        refresh_token: Optional[str] = None,
        client_id: Optional[str] = None,
        client_secret: Optional[str] = None,
        on_token_refreshed: Optional[Callable[[Dict[str, Any]], None]] = None,
        max_retries: int = 3,
        backoff_base: float = 1.0,
        timeout: float = 30.0,
        transport: Optional[httpx.BaseTransport] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.access_token = access_token
        self.refresh_token = refresh_token
        self.client_id = client_id
        self.client_secret = client_secret
        self.on_token_refreshed = on_token_refreshed
        self.max_retries = int(max_retries)
        self.backoff_base = float(backoff_base)
        self.timeout = float(timeout)
        self.transport = transport
        self._sleep = sleep

    def can_refresh(self) -> bool:
        return bool(self.refresh_token and self.client_id and self.client_secret)

    def refresh(self) -> None:
        payload = refresh_access_token(
            client_id=str(self.client_id),
            client_secret=str(self.client_secret),
            refresh_token=str(self.refresh_token),
            timeout=self.timeout,
            transport=self.transport,
        )
        self.access_token = str(payload["access_token"])
        self.refresh_token = payload.get("refresh_token") or self.refresh_token
        if self.on_token_refreshed:
            self.on_token_refreshed(payload)

    def request_json(self, method: str, path: str, *, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Make a Spotify Web API request and return parsed JSON."""

        retry_401_refresh = True
        attempt = 0
        while True:
            attempt += 1
            try:
                with httpx.Client(timeout=self.timeout, transport=self.transport) as client:
                    resp = client.request(
                        method.upper(),
                        f"{SPOTIFY_API_BASE_URL}{path}",
                        params={k: str(v) for k, v in (params or {}).items() if v is not None},
                        headers={
                            "Authorization": f"Bearer {self.access_token}",
                            "Accept": "application/json",
                        },
                    )
            except httpx.HTTPError as e:
                if attempt <= self.max_retries:
                    self._sleep(min(30.0, self.backoff_base * (2 ** (attempt - 1))))
                    continue
                raise SpotifyApiError(f"Spotify API request failed: {e}") from e

            status = resp.status_code

            # 401: token invalid/expired (server-side); try refresh once.
            if status == 401 and retry_401_refresh and self.can_refresh():
                retry_401_refresh = False
                try:
                    self.refresh()
                except RuntimeError as e:
                    raise SpotifyApiError(f"Spotify token refresh failed: {e}", status_code=status) from e
                continue

            if status == 429 and attempt <= self.max_retries:
                try:
                    delay = float(resp.headers.get("Retry-After", 1.0))
                except ValueError:
                    delay = 1.0
                self._sleep(max(1.0, delay))
                continue

            if status >= 500 and attempt <= self.max_retries:
                self._sleep(min(60.0, self.backoff_base * (2 ** (attempt - 1))))
                continue

            if status >= 400:
                raise SpotifyApiError(f"Spotify API error {status}: {resp.text}", status_code=status)

            if not resp.content:
                return {}

            try:
                return resp.json()
            except json.JSONDecodeError as e:
                raise SpotifyApiError(f"Spotify API response was not JSON (status {status}): {resp.text}") from e

    def me(self) -> Dict[str, Any]:
        profile = self.request_json("GET", "/me")
        if not isinstance(profile, dict):
            raise SpotifyApiError(f"Spotify profile response was not an object: {profile}")
        return profile
