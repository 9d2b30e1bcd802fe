"""
===============================================================================
CRC CARD: domain/audit.py
===============================================================================

Module:
    Audit models (domain)

Responsibilities:
    - Define AuditEvent for admin actions and session lifecycle events.
    - Keep the audit contract independent of storage.

Collaborators:
    - domain.repositories.AuditEventRepository: persists and lists events.
    - fieldforce/audit.py: emits events.

Notes:
    - Audit is append-only.
    - metadata is a flexible dict.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any
from uuid import UUID


@dataclass(slots=True)
class AuditEvent:
    """System audit event."""

    id: UUID
    actor: str
    action: str
    target_id: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)
    created_at: datetime | None = None
