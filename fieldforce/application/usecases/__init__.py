"""
===============================================================================
USE CASES PACKAGE (Public API / Exports)
===============================================================================

Responsibilities:
    - Single import point for the auth and user administration use cases.
===============================================================================
"""

from .auth import AuthErrorCode, LoginResult, SessionHolder
from .users import (
    AddMRInput,
    AddMRResult,
    AddMRUseCase,
    ListUsersUseCase,
    UpdateUserStatusUseCase,
    UserErrorCode,
    UserListResult,
    UserResult,
)

__all__ = [
    "AddMRInput",
    "AddMRResult",
    "AddMRUseCase",
    "AuthErrorCode",
    "ListUsersUseCase",
    "LoginResult",
    "SessionHolder",
    "UpdateUserStatusUseCase",
    "UserErrorCode",
    "UserListResult",
    "UserResult",
]
