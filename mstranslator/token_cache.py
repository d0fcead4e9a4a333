"""In-memory cache of OAuth access tokens, one entry per credential pair."""
import threading
from dataclasses import dataclass
from typing import Dict, Optional


@dataclass(frozen=True)
class CachedToken:
    token: str
    expiration: int  # milliseconds since epoch

    def is_expired(self, now_ms: int) -> bool:
        return now_ms >= self.expiration


def credential_key(client_id: str, client_secret: str) -> str:
    # No separator: distinct pairs may collide, kept as the service always did.
    return f"{client_id}{client_secret}"


class TokenCache:
    """Thread-safe map of credential key to :class:`CachedToken`.

    Entries are only ever overwritten, never evicted. The cache lives as long
    as the provider that owns it and is cleared when the provider is closed.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._entries: Dict[str, CachedToken] = {}

    def get(self, key: str) -> Optional[CachedToken]:
        with self._lock:
            return self._entries.get(key)

    def put(self, key: str, token: CachedToken) -> None:
        with self._lock:
            self._entries[key] = token

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._entries
