"""
===============================================================================
CRC CARD: domain/access_policy.py
===============================================================================

Module:
    Account access state machine (ACTIVE <-> INACTIVE)

Responsibilities:
    - Define the access states of a UserRecord.
    - Provide pure transition functions (no Directory, no clock of their own):
        ACTIVE   --deactivate(at, actor, reason)-->  INACTIVE
        INACTIVE --reactivate()-------------------->  ACTIVE
    - Build the login failure message for a deactivated account.

Collaborators:
    - identity.users.UserRecord / DeactivationInfo
    - application.usecases.users.update_user_status: applies transitions.
    - application.usecases.auth.session_holder: deactivation message.

Rules:
    - No terminal state; transitions are reversible indefinitely.
    - Transitions from the wrong state raise InvalidTransitionError.
===============================================================================
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from enum import Enum

from ..crosscutting.exceptions import InvalidTransitionError
from ..identity.users import DeactivationInfo, UserRecord

CONTACT_ADMIN_SUFFIX = "contact your administrator"


class AccessState(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


def access_state(user: UserRecord) -> AccessState:
    return AccessState.ACTIVE if user.is_active else AccessState.INACTIVE


def deactivate(
    user: UserRecord,
    *,
    at: datetime,
    actor_id: str | None = None,
    reason: str | None = None,
) -> UserRecord:
    """ACTIVE -> INACTIVE, recording when/who/why."""
    if not user.is_active:
        raise InvalidTransitionError(f"user {user.id} is already inactive")
    cleaned = (reason or "").strip() or None
    return replace(
        user,
        is_active=False,
        deactivation=DeactivationInfo(
            deactivated_at=at, deactivated_by=actor_id, reason=cleaned
        ),
    )


def reactivate(user: UserRecord) -> UserRecord:
    """INACTIVE -> ACTIVE, clearing the deactivation metadata."""
    if user.is_active:
        raise InvalidTransitionError(f"user {user.id} is already active")
    return replace(user, is_active=True, deactivation=None)


def deactivated_login_message(user: UserRecord, default_reason: str) -> str:
    """
    "account deactivated: <reason>. contact your administrator"

    Falls back to default_reason when no reason was recorded.
    """
    reason = None
    if user.deactivation is not None:
        reason = user.deactivation.reason
    reason = (reason or default_reason).strip().rstrip(".")
    return f"account deactivated: {reason}. {CONTACT_ADMIN_SUFFIX}"
