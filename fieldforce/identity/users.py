"""
===============================================================================
CRC CARD: identity/users.py
===============================================================================

Module:
    User Records (Directory entries)

Responsibilities:
    - Define the user role enum (admin / manager / mr).
    - Define the UserRecord value held by the Directory and snapshotted
      into a Session.
    - Enforce the deactivation invariant at construction time:
        deactivation metadata is present  <=>  is_active is False

Collaborators:
    - domain/access_policy.py: builds new records on deactivate/reactivate.
    - infrastructure/repositories/in_memory/directory.py: stores records.
    - infrastructure/session_store/serialization.py: maps records <-> JSON.

Notes:
    - Records are frozen: every mutation replaces the Directory entry, so a
      Session snapshot can never observe a Directory change by aliasing.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class UserRole(str, Enum):
    """Roles accepted at login."""

    ADMIN = "admin"
    MANAGER = "manager"
    MR = "mr"


ADMIN_ROLES = frozenset({UserRole.ADMIN, UserRole.MANAGER})


def is_admin_role(role: UserRole | None) -> bool:
    """Admins and managers share the admin console."""
    return role in ADMIN_ROLES


@dataclass(frozen=True, slots=True)
class DeactivationInfo:
    """Who deactivated the account, when, and why."""

    deactivated_at: datetime
    deactivated_by: str | None = None
    reason: str | None = None


@dataclass(frozen=True, slots=True)
class UserRecord:
    """A Directory entry."""

    id: str
    username: str
    name: str
    role: UserRole
    is_active: bool = True
    headquarters: str = ""
    email: str = ""
    phone: str = ""
    company_id: str = ""
    created_at: datetime | None = None
    last_active_at: datetime | None = None
    deactivation: DeactivationInfo | None = None

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("UserRecord.id is required")
        if not self.username:
            raise ValueError("UserRecord.username is required")
        if not isinstance(self.role, UserRole):
            # R: accept raw strings from fixtures, reject unknown roles.
            object.__setattr__(self, "role", UserRole(self.role))
        if self.is_active and self.deactivation is not None:
            raise ValueError("active user cannot carry deactivation metadata")
        if not self.is_active and self.deactivation is None:
            raise ValueError("inactive user requires deactivation metadata")

    @property
    def is_admin(self) -> bool:
        return is_admin_role(self.role)

    @property
    def is_mr(self) -> bool:
        return self.role == UserRole.MR


@dataclass(frozen=True, slots=True)
class Company:
    """Tenant shown on the login screen and in the sidebar."""

    id: str
    name: str
    theme_color: str = ""
    address: str = ""
    phone: str = ""
    email: str = ""
