"""
===============================================================================
USE CASE: Update User Status (deactivate / reactivate an account)
===============================================================================

Name:
    Update User Status Use Case

Business Goal:
    Let an admin switch an account between ACTIVE and INACTIVE. Deactivation
    records when, who and why; reactivation clears that metadata.

Why:
    - Revocation is eventual: this command only mutates the Directory. An
      open Session for that user ends on its next validity tick, never here.
    - Idempotency: repeating the same command is a success with no change.

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Class:
    UpdateUserStatusUseCase

Responsibilities:
    - Load the Directory entry (NOT_FOUND if absent).
    - Apply the pure transition from domain.access_policy.
    - Replace the Directory entry.
    - Emit audit event + metric for real transitions.

Collaborators:
    - UserDirectory: get_user / replace_user
    - domain.access_policy: deactivate / reactivate
    - AuditEventRepository (optional, best-effort)
    - crosscutting.metrics

-------------------------------------------------------------------------------
FLOW
-------------------------------------------------------------------------------
1) Load user; missing -> NOT_FOUND.
2) Already in the requested state -> SUCCESS, unchanged.
3) Transition; replace entry; lost race (entry vanished) -> NOT_FOUND.
4) Audit + metric; return the new record.
===============================================================================
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable

from ....audit import (
    ACTION_USER_DEACTIVATED,
    ACTION_USER_REACTIVATED,
    emit_audit_event,
)
from ....crosscutting.logger import logger
from ....crosscutting.metrics import record_account_status_change
from ....domain.access_policy import deactivate, reactivate
from ....domain.repositories import AuditEventRepository, UserDirectory
from .user_results import UserError, UserErrorCode, UserResult


class UpdateUserStatusUseCase:
    """Command: activate or deactivate a Directory entry."""

    def __init__(
        self,
        directory: UserDirectory,
        *,
        audit_repository: AuditEventRepository | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._directory = directory
        self._audit = audit_repository
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def execute(
        self,
        user_id: str,
        is_active: bool,
        reason: str | None = None,
        *,
        actor_id: str | None = None,
    ) -> UserResult:
        current = self._directory.get_user(user_id)
        if current is None:
            return self._not_found(user_id)

        if current.is_active == is_active:
            return UserResult(user=current)

        if is_active:
            updated = reactivate(current)
            action = ACTION_USER_REACTIVATED
        else:
            updated = deactivate(
                current, at=self._clock(), actor_id=actor_id, reason=reason
            )
            action = ACTION_USER_DEACTIVATED

        if not self._directory.replace_user(updated):
            return self._not_found(user_id)

        metric_action = "reactivate" if is_active else "deactivate"
        record_account_status_change(metric_action)
        logger.info(
            "Account status changed",
            extra={"user_id": user_id, "action": metric_action, "actor_id": actor_id},
        )
        emit_audit_event(
            self._audit,
            action=action,
            actor_id=actor_id,
            target_id=user_id,
            metadata={"reason": updated.deactivation.reason}
            if updated.deactivation
            else {},
        )

        return UserResult(user=updated)

    @staticmethod
    def _not_found(user_id: str) -> UserResult:
        return UserResult(
            error=UserError(
                code=UserErrorCode.NOT_FOUND,
                message=f"User not found: {user_id}",
            )
        )
