"""
Identity package: user records, roles and the Session value.
"""

from .session import Session, generate_session_token
from .users import (
    ADMIN_ROLES,
    Company,
    DeactivationInfo,
    UserRecord,
    UserRole,
    is_admin_role,
)

__all__ = [
    "ADMIN_ROLES",
    "Company",
    "DeactivationInfo",
    "Session",
    "UserRecord",
    "UserRole",
    "generate_session_token",
    "is_admin_role",
]
