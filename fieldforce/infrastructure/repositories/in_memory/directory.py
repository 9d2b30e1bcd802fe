"""
============================================================
CRC CARD: infrastructure/repositories/in_memory/directory.py
============================================================
Class: InMemoryUserDirectory

Responsibilities:
  - Hold UserRecords in memory (id -> record) for the lifetime of the process.
  - Implement the UserDirectory port: lookups, insert, whole-record replace,
    last_active_at stamping.
  - Keep deterministic ordering for listings (name ASC, id ASC).

Collaborators:
  - identity.users.UserRecord, UserRole
  - domain.repositories.UserDirectory (contract implemented)

Constraints / Notes:
  - Thread-safe: every read/write happens under a Lock.
  - Records are frozen, so handing them out never exposes mutable state;
    the Session keeps its own snapshot and only sees changes after a re-fetch.
  - Each instance is independent (one per test, one per client).
============================================================
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from threading import Lock
from typing import Dict, Iterable, List, Optional

from ....domain.repositories import UserDirectory
from ....identity.users import UserRecord, UserRole


class InMemoryUserDirectory(UserDirectory):
    """
    In-memory, thread-safe user Directory.

    Mental model:
    - _users is the in-memory "table" (id -> UserRecord).
    - Mutations replace the entry; nothing is ever mutated in place.
    """

    def __init__(self, users: Iterable[UserRecord] | None = None) -> None:
        self._lock = Lock()
        self._users: Dict[str, UserRecord] = {}
        for user in users or []:
            self.add_user(user)

    @staticmethod
    def _sorted(items: Iterable[UserRecord]) -> List[UserRecord]:
        return sorted(items, key=lambda u: ((u.name or "").lower(), u.id))

    # =========================================================
    # Reads
    # =========================================================
    def get_user(self, user_id: str) -> Optional[UserRecord]:
        with self._lock:
            return self._users.get(user_id)

    def find_by_username_and_role(
        self, username: str, role: UserRole
    ) -> Optional[UserRecord]:
        with self._lock:
            for user in self._users.values():
                if user.username == username and user.role == role:
                    return user
        return None

    def list_users(
        self,
        *,
        role: UserRole | None = None,
        is_active: bool | None = None,
    ) -> List[UserRecord]:
        with self._lock:
            values = list(self._users.values())

        def predicate(u: UserRecord) -> bool:
            if role is not None and u.role != role:
                return False
            if is_active is not None and u.is_active != is_active:
                return False
            return True

        return self._sorted(u for u in values if predicate(u))

    def __len__(self) -> int:
        with self._lock:
            return len(self._users)

    # =========================================================
    # Writes
    # =========================================================
    def add_user(self, user: UserRecord) -> UserRecord:
        with self._lock:
            if user.id in self._users:
                raise ValueError(f"user id already exists: {user.id}")
            self._users[user.id] = user
        return user

    def replace_user(self, user: UserRecord) -> bool:
        with self._lock:
            if user.id not in self._users:
                return False
            self._users[user.id] = user
        return True

    def stamp_last_active(self, user_id: str, at: datetime) -> bool:
        with self._lock:
            current = self._users.get(user_id)
            if current is None:
                return False
            self._users[user_id] = replace(current, last_active_at=at)
        return True
