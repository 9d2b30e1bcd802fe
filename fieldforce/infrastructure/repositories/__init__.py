"""
============================================================
CRC CARD
============================================================
Module: fieldforce.infrastructure.repositories (package exports)

Responsibilities:
- Expose concrete repository implementations from a single import point.
- Keep a stable API for the application layer and the container.
============================================================
"""

from .in_memory import InMemoryAuditEventRepository, InMemoryUserDirectory

__all__ = [
    "InMemoryAuditEventRepository",
    "InMemoryUserDirectory",
]
