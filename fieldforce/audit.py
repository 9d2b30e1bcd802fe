"""
===============================================================================
CRC CARD: fieldforce/audit.py (Audit emission)
===============================================================================

Responsibilities:
  - Build audit events with a consistent shape (actor/action/target/metadata).
  - Normalize the actor from a user id ("user:<id>", "system").
  - Persist through AuditEventRepository (domain port).
  - Best-effort: a persistence failure NEVER breaks the business flow.

Collaborators:
  - fieldforce.domain.audit.AuditEvent
  - fieldforce.domain.repositories.AuditEventRepository
  - fieldforce.crosscutting.logger.logger

Security decisions:
  - No passwords or tokens in metadata.
  - Metadata is sanitized to serializable values; anything else is str()'d.
===============================================================================
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any
from uuid import uuid4

from .crosscutting.logger import logger
from .domain.audit import AuditEvent
from .domain.repositories import AuditEventRepository

ACTION_LOGIN = "session.login"
ACTION_LOGOUT = "session.logout"
ACTION_SESSION_REVOKED = "session.revoked"
ACTION_USER_CREATED = "user.created"
ACTION_USER_DEACTIVATED = "user.deactivated"
ACTION_USER_REACTIVATED = "user.reactivated"


def actor_for(user_id: str | None) -> str:
    """
    Stable actor identifier.

    Format:
      - user:{id}
      - system
    """
    if not user_id:
        return "system"
    return f"user:{user_id}"


def _json_safe(metadata: dict[str, Any]) -> dict[str, Any]:
    """Round-trip through JSON; anything json can't encode becomes its str()."""
    return json.loads(json.dumps(metadata, default=str))


def emit_audit_event(
    repository: AuditEventRepository | None,
    *,
    action: str,
    actor_id: str | None = None,
    target_id: str | None = None,
    metadata: dict[str, Any] | None = None,
) -> None:
    """
    Emit an audit event.

    Key rule:
      - If repository is None or the write fails, NO exception is raised.
    """
    if repository is None:
        return

    event = AuditEvent(
        id=uuid4(),
        actor=actor_for(actor_id),
        action=action,
        target_id=target_id,
        metadata=_json_safe(metadata or {}),
        created_at=datetime.now(timezone.utc),
    )

    try:
        repository.record_event(event)
    except Exception as exc:
        # Best-effort: log and continue.
        logger.warning(
            "Audit event write failed",
            extra={"action": action, "error": str(exc)},
        )
