"""
In-memory SessionStore.

Keeps the two storage keys in a dict, serialized exactly like the file and
Redis stores so tests exercise the same round-trip. Data is lost on restart.
"""

from __future__ import annotations

from threading import Lock
from typing import Dict, Optional

from ...identity.session import Session
from .serialization import decode_session, dump_user

DEFAULT_USER_KEY = "pharma_user"
DEFAULT_TOKEN_KEY = "pharma_session_token"


class InMemorySessionStore:
    """SessionStore backed by a process-local dict."""

    def __init__(
        self,
        *,
        user_key: str = DEFAULT_USER_KEY,
        token_key: str = DEFAULT_TOKEN_KEY,
    ) -> None:
        self._lock = Lock()
        self._user_key = user_key
        self._token_key = token_key
        self._items: Dict[str, str] = {}

    def save(self, session: Session) -> None:
        with self._lock:
            self._items[self._user_key] = dump_user(session.user)
            self._items[self._token_key] = session.token

    def load(self) -> Optional[Session]:
        with self._lock:
            user_raw = self._items.get(self._user_key)
            token = self._items.get(self._token_key)
        return decode_session(user_raw, token)

    def clear(self) -> None:
        with self._lock:
            self._items.pop(self._user_key, None)
            self._items.pop(self._token_key, None)

    # R: raw access mirrors localStorage.getItem/setItem for tests.
    def get_item(self, key: str) -> Optional[str]:
        with self._lock:
            return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        with self._lock:
            self._items[key] = value

    def keys(self) -> list[str]:
        with self._lock:
            return sorted(self._items)
