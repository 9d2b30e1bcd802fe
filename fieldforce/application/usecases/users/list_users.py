"""
USE CASE: List Users

Backs the admin MR listing: filter the Directory by role and/or status,
ordered by name then id.
"""

from __future__ import annotations

from ....domain.repositories import UserDirectory
from ....identity.users import UserRole
from .user_results import UserListResult


class ListUsersUseCase:
    def __init__(self, directory: UserDirectory) -> None:
        self._directory = directory

    def execute(
        self,
        *,
        role: UserRole | None = None,
        is_active: bool | None = None,
    ) -> UserListResult:
        return UserListResult(
            users=self._directory.list_users(role=role, is_active=is_active)
        )

    def list_mrs(self, *, is_active: bool | None = None) -> UserListResult:
        return self.execute(role=UserRole.MR, is_active=is_active)
