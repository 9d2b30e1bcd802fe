"""
===============================================================================
USE CASE: Add MR (create a Medical Representative account)
===============================================================================

Name:
    Add MR Use Case

Business Goal:
    Let an admin create a new MR account in the Directory so the MR can log
    in right away.

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Class:
    AddMRUseCase

Responsibilities:
    - Validate required fields (name, username).
    - Normalize the username (lower-case, whitespace -> "_").
    - Apply defaults (headquarters "HQ", email "<username>@company.com",
      the tenant company id the use case was built with).
    - Reject a username already used by another MR.
    - Generate the initial password shown once to the admin.
    - Insert the record and emit a "user.created" audit event.

Collaborators:
    - UserDirectory: find_by_username_and_role / add_user
    - AuditEventRepository (optional, best-effort)
    - user_results: AddMRResult / UserError / UserErrorCode

-------------------------------------------------------------------------------
BUSINESS RULES
-------------------------------------------------------------------------------
R1) Name and username are required.
R2) New accounts are role "mr" and start ACTIVE.
R3) (username, role) is unique in the Directory.
===============================================================================
"""

from __future__ import annotations

import re
import secrets
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable
from uuid import uuid4

from ....audit import ACTION_USER_CREATED, emit_audit_event
from ....crosscutting.logger import logger
from ....domain.repositories import AuditEventRepository, UserDirectory
from ....identity.users import UserRecord, UserRole
from .user_results import AddMRResult, UserError, UserErrorCode

# R: no 0/O, 1/l/I to keep dictated passwords unambiguous.
PASSWORD_ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnpqrstuvwxyz23456789"
PASSWORD_LENGTH = 10

DEFAULT_HEADQUARTERS = "HQ"
DEFAULT_EMAIL_DOMAIN = "company.com"

_WHITESPACE = re.compile(r"\s")


def generate_password(length: int = PASSWORD_LENGTH) -> str:
    return "".join(secrets.choice(PASSWORD_ALPHABET) for _ in range(length))


def normalize_username(username: str) -> str:
    return _WHITESPACE.sub("_", (username or "").strip().lower())


def _new_user_id() -> str:
    return f"user-{uuid4().hex[:12]}"


@dataclass(frozen=True)
class AddMRInput:
    name: str
    username: str
    headquarters: str = ""
    email: str = ""
    phone: str = ""
    company_id: str = ""
    actor_id: str | None = None


class AddMRUseCase:
    """Command: create an MR account."""

    def __init__(
        self,
        directory: UserDirectory,
        *,
        audit_repository: AuditEventRepository | None = None,
        password_generator: Callable[[], str] = generate_password,
        default_company_id: str = "",
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._directory = directory
        self._audit = audit_repository
        self._generate_password = password_generator
        self._default_company_id = default_company_id
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def execute(self, input_data: AddMRInput) -> AddMRResult:
        name = (input_data.name or "").strip()
        username = normalize_username(input_data.username)

        if not name or not username:
            return AddMRResult(
                error=UserError(
                    code=UserErrorCode.VALIDATION_ERROR,
                    message="Name and username are required",
                )
            )

        if self._directory.find_by_username_and_role(username, UserRole.MR):
            return AddMRResult(
                error=UserError(
                    code=UserErrorCode.CONFLICT,
                    message=f"Username already taken: {username}",
                )
            )

        user = UserRecord(
            id=_new_user_id(),
            username=username,
            name=name,
            role=UserRole.MR,
            is_active=True,
            headquarters=(input_data.headquarters or "").strip()
            or DEFAULT_HEADQUARTERS,
            email=(input_data.email or "").strip()
            or f"{username}@{DEFAULT_EMAIL_DOMAIN}",
            phone=(input_data.phone or "").strip(),
            company_id=(input_data.company_id or "").strip()
            or self._default_company_id,
            created_at=self._clock(),
        )
        self._directory.add_user(user)

        logger.info(
            "MR account created",
            extra={"user_id": user.id, "username": user.username},
        )
        emit_audit_event(
            self._audit,
            action=ACTION_USER_CREATED,
            actor_id=input_data.actor_id,
            target_id=user.id,
            metadata={"role": user.role.value, "headquarters": user.headquarters},
        )

        return AddMRResult(user=user, initial_password=self._generate_password())
