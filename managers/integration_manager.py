from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from constants import ACTIVE_STATUS, SPOTIFY_PROVIDER
from managers.file_manager import SessionStore


@dataclass(frozen=True)
class IntegrationRecord:
    """A stored link to a third-party music provider.

    Records are serialized with the backend's field names ("name" for the
    provider) so remote payloads can be stored without translation.
    """

    provider: str
    status: str
    access_token: Optional[str] = None
    refresh_token: Optional[str] = None
    auth_id: Optional[str] = None
    value: Optional[str] = None

    @staticmethod
    def from_dict(payload: Dict[str, Any]) -> "IntegrationRecord":
        return IntegrationRecord(
            provider=str(payload.get("name") or payload.get("provider") or ""),
            status=str(payload.get("status") or ""),
            access_token=payload.get("access_token") or None,
            refresh_token=payload.get("refresh_token") or None,
            auth_id=payload.get("auth_id") or payload.get("authId") or None,
            value=payload.get("value") or None,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.provider,
            "status": self.status,
            "access_token": self.access_token,
            "refresh_token": self.refresh_token,
            "auth_id": self.auth_id,
            "value": self.value,
        }

    def is_provider(self, provider: str) -> bool:
        return self.provider.lower() == provider.lower()

    def is_active(self) -> bool:
        return self.status.lower() == ACTIVE_STATUS

    def has_credentials(self) -> bool:
        return bool(self.access_token)


class IntegrationStore:
    """Registry of linked accounts persisted in the session store.

    Insertion order is preserved and doubles as creation order. Uniqueness of
    active records is not enforced here.
    """

    def __init__(self, session: SessionStore):
        self.session = session

    def list_integrations(self) -> List[IntegrationRecord]:
        return [IntegrationRecord.from_dict(i) for i in self.session.get_integrations()]

    def get_active_spotify_integration(self) -> Optional[IntegrationRecord]:
        matches = [
            r for r in self.list_integrations()
            if r.is_provider(SPOTIFY_PROVIDER) and r.is_active()
        ]
        # Newest (last inserted) wins when duplicates exist.
        return matches[-1] if matches else None

    def clear_spotify_integrations(self) -> None:
        remaining = [
            r.to_dict() for r in self.list_integrations()
            if not r.is_provider(SPOTIFY_PROVIDER)
        ]
        self.session.set_integrations(remaining)

    def replace_integrations_from_remote(self, user: Optional[Dict[str, Any]]) -> List[IntegrationRecord]:
        """Rewrite the spotify records from a freshly fetched backend user.

        Only active remote spotify records carrying an access token are kept.
        Records of other providers are left in place. Returns the new spotify
        records in their stored order.
        """
        remote = (user or {}).get("integrations") or []
        spotify_records = []
        for item in remote:
            if not isinstance(item, dict):
                continue
            record = IntegrationRecord.from_dict(item)
            if record.is_provider(SPOTIFY_PROVIDER) and record.is_active() and record.has_credentials():
                spotify_records.append(record)

        others = [
            r.to_dict() for r in self.list_integrations()
            if not r.is_provider(SPOTIFY_PROVIDER)
        ]
        self.session.set_integrations(others + [r.to_dict() for r in spotify_records])
        return spotify_records
