"""
Application layer: use cases, session watch timers, auth context and seeding.
"""

from .auth_context import AuthContext
from .seed import seed_directory
from .session_watch import (
    ActivityStamper,
    PeriodicTask,
    RevocationWatcher,
    ValidityPoller,
)

__all__ = [
    "ActivityStamper",
    "AuthContext",
    "PeriodicTask",
    "RevocationWatcher",
    "ValidityPoller",
    "seed_directory",
]
