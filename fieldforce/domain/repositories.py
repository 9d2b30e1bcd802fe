"""
CRC: domain/repositories.py

Name
- Domain Repository Interfaces (Protocols)

Responsibilities
- Define the persistence contracts used by the application layer (ports).
- Keep use cases independent from the storage medium (memory, JSON file, Redis).
- Enable isolated per-test Directories and session stores.

Collaborators
- identity.users: UserRecord, UserRole
- identity.session: Session
- domain.audit: AuditEvent
- infrastructure.repositories / infrastructure.session_store: implementations

Constraints
- Pure interfaces only: no side effects, no infrastructure imports.
- Implementations MUST match method signatures exactly.

Notes
- We use typing.Protocol for structural subtyping ("duck typing").
- Directory methods return values (frozen records), never live references.
"""

from datetime import datetime
from typing import List, Optional, Protocol

from ..identity.session import Session
from ..identity.users import UserRecord, UserRole
from .audit import AuditEvent


class UserDirectory(Protocol):
    """
    R: Interface for the user Directory (id -> UserRecord).

    Implementations must provide:
      - Lookup by id and by (username, role)
      - Insert for the add-MR flow
      - Whole-record replacement for admin status changes
      - last_active_at stamping
    """

    def get_user(self, user_id: str) -> Optional[UserRecord]:
        """R: Fetch a record by id (None if absent)."""
        ...

    def find_by_username_and_role(
        self, username: str, role: UserRole
    ) -> Optional[UserRecord]:
        """R: Exact match on username and role."""
        ...

    def list_users(
        self,
        *,
        role: UserRole | None = None,
        is_active: bool | None = None,
    ) -> List[UserRecord]:
        """R: List records ordered by name, then id."""
        ...

    def add_user(self, user: UserRecord) -> UserRecord:
        """
        R: Insert a new record.

        Raises:
            ValueError: if the id is already taken
        """
        ...

    def replace_user(self, user: UserRecord) -> bool:
        """R: Replace an existing record. False if the id is unknown."""
        ...

    def stamp_last_active(self, user_id: str, at: datetime) -> bool:
        """R: Set last_active_at. False (no-op) if the id is unknown."""
        ...


class SessionStore(Protocol):
    """
    R: Interface for Session persistence (the local-storage analogue).

    Contract:
      - save() overwrites whatever was stored
      - load() returns None when nothing (or nothing usable) is stored
      - clear() is idempotent
    """

    def save(self, session: Session) -> None: ...

    def load(self) -> Optional[Session]: ...

    def clear(self) -> None: ...


class AuditEventRepository(Protocol):
    """R: Interface for audit event persistence."""

    def record_event(self, event: AuditEvent) -> None:
        """R: Persist an audit event."""
        ...

    def list_events(
        self,
        *,
        action: str | None = None,
        target_id: str | None = None,
        limit: int = 100,
    ) -> List[AuditEvent]:
        """R: List events, newest first."""
        ...
