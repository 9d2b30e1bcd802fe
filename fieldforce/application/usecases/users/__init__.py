"""
===============================================================================
USER ADMINISTRATION USE CASES (Public API / Exports)
===============================================================================

Responsibilities:
    - Re-export the admin user use cases and their result models.
    - Define __all__ as the public contract of the package.
===============================================================================
"""

from .add_mr import (
    PASSWORD_ALPHABET,
    PASSWORD_LENGTH,
    AddMRInput,
    AddMRUseCase,
    generate_password,
    normalize_username,
)
from .list_users import ListUsersUseCase
from .update_user_status import UpdateUserStatusUseCase
from .user_results import (
    AddMRResult,
    UserError,
    UserErrorCode,
    UserListResult,
    UserResult,
)

__all__ = [
    "PASSWORD_ALPHABET",
    "PASSWORD_LENGTH",
    "AddMRInput",
    "AddMRResult",
    "AddMRUseCase",
    "ListUsersUseCase",
    "UpdateUserStatusUseCase",
    "UserError",
    "UserErrorCode",
    "UserListResult",
    "UserResult",
    "generate_password",
    "normalize_username",
]
