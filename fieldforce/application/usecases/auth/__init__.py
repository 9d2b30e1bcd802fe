"""
Auth use cases: the Session Holder and its result models.
"""

from .auth_results import (
    INVALID_CREDENTIALS_MESSAGE,
    AuthError,
    AuthErrorCode,
    LoginResult,
)
from .session_holder import DEFAULT_DEACTIVATION_MESSAGE, SessionHolder

__all__ = [
    "DEFAULT_DEACTIVATION_MESSAGE",
    "INVALID_CREDENTIALS_MESSAGE",
    "AuthError",
    "AuthErrorCode",
    "LoginResult",
    "SessionHolder",
]
