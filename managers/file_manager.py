import json
import os
import secrets
import uuid
from typing import Any, Dict, List, Optional

from constants import AUTH_CALLBACK_STATE_KEY, INTEGRATIONS_KEY, PLUGIN_UUID_KEY
from utils.logger import log_error

DEFAULT_SESSION_PATH = os.path.join("data", "session.json")


class SessionStore:
    """Local key-value persistence backed by a single JSON file.

    Every read goes to disk so separate store instances over the same file
    stay consistent.
    """

    def __init__(self, *, path: str = DEFAULT_SESSION_PATH):
        self.path = path

    def ensure_dir(self) -> None:
        parent = os.path.dirname(self.path)
        if parent:
            os.makedirs(parent, exist_ok=True)

    def _read(self) -> Dict[str, Any]:
        if not os.path.exists(self.path):
            return {}

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, IOError) as e:
            log_error(f"Session file {self.path} is unreadable, starting empty: {e}")
            return {}

        return data if isinstance(data, dict) else {}

    def _write(self, data: Dict[str, Any]) -> None:
        self.ensure_dir()
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)

    def get_item(self, key: str, default: Any = None) -> Any:
        return self._read().get(key, default)

    def set_item(self, key: str, value: Any) -> None:
        """Persist value under key. A None value removes the key."""
        data = self._read()
        if value is None:
            data.pop(key, None)
        else:
            data[key] = value
        self._write(data)

    # -----------------
    # Identity / OAuth state
    # -----------------

    def get_plugin_uuid(self) -> str:
        plugin_uuid = self.get_item(PLUGIN_UUID_KEY)
        if not plugin_uuid:
            plugin_uuid = str(uuid.uuid4())
            self.set_item(PLUGIN_UUID_KEY, plugin_uuid)
        return plugin_uuid

    def get_auth_callback_state(self) -> Optional[str]:
        return self.get_item(AUTH_CALLBACK_STATE_KEY)

    def set_auth_callback_state(self, value: Optional[str]) -> None:
        self.set_item(AUTH_CALLBACK_STATE_KEY, value)

    def new_auth_callback_state(self) -> str:
        """Generate, persist and return a fresh callback state token."""
        state = secrets.token_urlsafe(16).rstrip("=")
        self.set_auth_callback_state(state)
        return state

    # -----------------
    # Integrations (raw records)
    # -----------------

    def get_integrations(self) -> List[Dict[str, Any]]:
        items = self.get_item(INTEGRATIONS_KEY) or []
        return [i for i in items if isinstance(i, dict)] if isinstance(items, list) else []

    def set_integrations(self, integrations: List[Dict[str, Any]]) -> None:
        self.set_item(INTEGRATIONS_KEY, list(integrations or []))
