# =============================================================================
# FILE: infrastructure/repositories/in_memory/audit_repository.py
# =============================================================================
"""
In-Memory Audit Event Repository for testing and development.

NOT FOR PRODUCTION USE - data is lost on restart.
"""

from __future__ import annotations

from threading import Lock
from typing import List

from ....domain.audit import AuditEvent


class InMemoryAuditEventRepository:
    """
    In-memory implementation of AuditEventRepository.

    Useful for:
      - Unit testing
      - Local development (the Directory is in-memory too)
    """

    def __init__(self) -> None:
        self._lock = Lock()
        self._events: List[AuditEvent] = []

    def record_event(self, event: AuditEvent) -> None:
        """Append an audit event."""
        with self._lock:
            self._events.append(event)

    def list_events(
        self,
        *,
        action: str | None = None,
        target_id: str | None = None,
        limit: int = 100,
    ) -> List[AuditEvent]:
        """List events newest first, optionally filtered."""
        with self._lock:
            events = list(reversed(self._events))

        if action is not None:
            events = [e for e in events if e.action == action]
        if target_id is not None:
            events = [e for e in events if e.target_id == target_id]

        return events[: max(limit, 0)]

    def clear(self) -> None:
        """Clear all events (testing only)."""
        with self._lock:
            self._events.clear()
