"""
============================================================
CRC CARD: infrastructure/session_store/redis_store.py
============================================================
Class: RedisSessionStore

Responsibilities:
  - Persist the two session keys in Redis under a namespace prefix.
  - Write both keys in one pipeline (MULTI/EXEC) so readers never see a
    snapshot without its token.
  - Map redis-py failures to SessionStoreError on write/clear; reads degrade
    to "no session".

Collaborators:
  - redis-py (client injected, or built from a URL)
  - serialization.dump_user / decode_session
  - crosscutting.exceptions.SessionStoreError

Notes:
  - Redis is shared storage, but the Directory is still per-process: a
    second client observes the stored Session, not admin mutations made in
    another process.
============================================================
"""

from __future__ import annotations

from typing import Optional

from redis import Redis
from redis.exceptions import RedisError

from ...crosscutting.exceptions import SessionStoreError
from ...crosscutting.logger import logger
from ...identity.session import Session
from .in_memory import DEFAULT_TOKEN_KEY, DEFAULT_USER_KEY
from .serialization import decode_session, dump_user


class RedisSessionStore:
    """SessionStore backed by Redis."""

    KEY_PREFIX = "fieldforce:"

    def __init__(
        self,
        client: Redis,
        *,
        user_key: str = DEFAULT_USER_KEY,
        token_key: str = DEFAULT_TOKEN_KEY,
    ) -> None:
        self._client = client
        self._user_key = f"{self.KEY_PREFIX}{user_key}"
        self._token_key = f"{self.KEY_PREFIX}{token_key}"

    @classmethod
    def from_url(cls, redis_url: str, **kwargs) -> "RedisSessionStore":
        if not redis_url:
            raise ValueError("redis_url is required")
        return cls(Redis.from_url(redis_url, decode_responses=True), **kwargs)

    def save(self, session: Session) -> None:
        try:
            pipe = self._client.pipeline(transaction=True)
            pipe.set(self._user_key, dump_user(session.user))
            pipe.set(self._token_key, session.token)
            pipe.execute()
        except RedisError as exc:
            raise SessionStoreError(
                "Could not save session to Redis", original_error=exc
            ) from exc

    def load(self) -> Optional[Session]:
        try:
            user_raw, token = self._client.mget(self._user_key, self._token_key)
        except RedisError as exc:
            logger.warning(
                "Redis session read failed; treating as no session",
                extra={"error": str(exc)},
            )
            return None
        return decode_session(_as_text(user_raw), _as_text(token))

    def clear(self) -> None:
        try:
            self._client.delete(self._user_key, self._token_key)
        except RedisError as exc:
            raise SessionStoreError(
                "Could not clear session in Redis", original_error=exc
            ) from exc


def _as_text(value: object) -> str | None:
    if value is None:
        return None
    if isinstance(value, bytes):
        return value.decode("utf-8")
    return str(value)
