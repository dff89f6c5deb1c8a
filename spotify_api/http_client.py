import json
import logging
from typing import Any, Dict, Optional

import httpx

from constants import SPOTIFY_CLIENT_INFO_PATH, SPOTIFY_DISCONNECT_PATH, USER_PATH

logger = logging.getLogger(__name__)

DEFAULT_API_ENDPOINT = "https://api.software.com"


class BackendError(RuntimeError):
    """Raised when a backend call fails. status_code is None for transport errors."""

    def __init__(self, message: str, *, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class BackendClient:
    """Minimal JSON client for the Music Time backend.

    The session token (jwt) is sent verbatim in the Authorization header.
    """

    def __init__(
        self,
        config: Optional[Dict[str, Any]] = None,
        *,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.config = config or {}
        self.transport = transport

    @property
    def api_endpoint(self) -> str:
        return str(self.config.get("api_endpoint") or DEFAULT_API_ENDPOINT).rstrip("/")

    def _client(self) -> httpx.Client:
        return httpx.Client(
            base_url=self.api_endpoint,
            timeout=float(self.config.get("request_timeout", 15)),
            follow_redirects=False,
            transport=self.transport,
        )

    def request_json(
        self,
        method: str,
        path: str,
        *,
        jwt: Optional[str] = None,
        payload: Optional[Dict[str, Any]] = None,
    ) -> Any:
        headers = {"Accept": "application/json", "Content-Type": "application/json"}
        if jwt:
            headers["Authorization"] = jwt

        try:
            with self._client() as client:
                resp = client.request(method.upper(), path, headers=headers, json=payload)
        except httpx.HTTPError as e:
            raise BackendError(f"{method.upper()} {path} failed: {e}") from e

        if resp.status_code >= 400:
            raise BackendError(
                f"{method.upper()} {path} failed (HTTP {resp.status_code}): {resp.text}",
                status_code=resp.status_code,
            )

        if not resp.content:
            return {}

        try:
            return resp.json()
        except json.JSONDecodeError as e:
            raise BackendError(
                f"{method.upper()} {path} returned non-JSON body: {resp.text}",
                status_code=resp.status_code,
            ) from e

    # -----------------
    # Endpoints
    # -----------------

    def fetch_spotify_client_info(self, jwt: Optional[str]) -> Dict[str, str]:
        """Return {"clientId": ..., "clientSecret": ...}."""
        data = self.request_json("GET", SPOTIFY_CLIENT_INFO_PATH, jwt=jwt)
        if not isinstance(data, dict) or not data.get("clientId"):
            raise BackendError(f"Unexpected client info payload: {data}")
        return {
            "clientId": str(data.get("clientId") or ""),
            "clientSecret": str(data.get("clientSecret") or ""),
        }

    def disconnect_spotify(self, jwt: Optional[str]) -> None:
        self.request_json("PUT", SPOTIFY_DISCONNECT_PATH, jwt=jwt, payload={})
        logger.debug("Backend acknowledged spotify disconnect")

    def get_user(self, jwt: Optional[str]) -> Optional[Dict[str, Any]]:
        """Fetch the backend user. Unwraps a {"data": {...}} envelope when present."""
        if not jwt:
            return None
        data = self.request_json("GET", USER_PATH, jwt=jwt)
        if isinstance(data, dict) and isinstance(data.get("data"), dict):
            data = data["data"]
        return data if isinstance(data, dict) and data else None
