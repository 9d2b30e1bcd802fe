"""
Session stores (implementations of domain.repositories.SessionStore).

- InMemorySessionStore: tests
- JsonFileSessionStore: local-storage analogue, survives restarts
- RedisSessionStore: shared key-value backend
"""

from .file_store import JsonFileSessionStore
from .in_memory import DEFAULT_TOKEN_KEY, DEFAULT_USER_KEY, InMemorySessionStore
from .redis_store import RedisSessionStore

__all__ = [
    "DEFAULT_TOKEN_KEY",
    "DEFAULT_USER_KEY",
    "InMemorySessionStore",
    "JsonFileSessionStore",
    "RedisSessionStore",
]
