"""
In-Memory Repository Implementations.

The Directory is always in memory (seeded from fixtures);
the audit repository is for tests and local development.
Data is lost on process restart.
"""

from .audit_repository import InMemoryAuditEventRepository
from .directory import InMemoryUserDirectory

__all__ = [
    "InMemoryAuditEventRepository",
    "InMemoryUserDirectory",
]
