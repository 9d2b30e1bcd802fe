"""
===============================================================================
CRC CARD: domain/__init__.py
===============================================================================

Module:
    Domain layer exports

Responsibilities:
    - Centralize exports for clean imports from the application layer.
    - Keep the domain surface area stable.

Rules:
    - Only re-export domain contracts and pure policies.
    - Never import infrastructure here.
===============================================================================
"""

from .access_policy import (
    AccessState,
    access_state,
    deactivate,
    deactivated_login_message,
    reactivate,
)
from .audit import AuditEvent
from .repositories import AuditEventRepository, SessionStore, UserDirectory

__all__ = [
    "AccessState",
    "AuditEvent",
    "AuditEventRepository",
    "SessionStore",
    "UserDirectory",
    "access_state",
    "deactivate",
    "deactivated_login_message",
    "reactivate",
]
