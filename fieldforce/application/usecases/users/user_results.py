"""
===============================================================================
USER ADMINISTRATION RESULTS (Shared Result / Error Models)
===============================================================================

Name:
    User Use Case Results

Business Goal:
    Shared result and error models for the admin user use cases (add MR,
    activate/deactivate, list), with an explicit and stable contract for:
      - validation errors
      - unknown users
      - uniqueness conflicts

Why:
    - Use cases return typed results instead of raising, which keeps admin
      screens and tests simple and consistent.

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Component:
    user_results models (module)

Responsibilities:
    - UserErrorCode: small closed set of error categories.
    - UserError (code + message).
    - UserResult (single record), UserListResult (records),
      AddMRResult (record + one-time initial password).

Collaborators:
    - identity.users.UserRecord
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List

from ....identity.users import UserRecord


class UserErrorCode(str, Enum):
    """
    Error codes for user administration use cases.

    Codes:
      - VALIDATION_ERROR: missing or malformed input.
      - NOT_FOUND: no Directory entry for the id.
      - CONFLICT: username already taken for that role.
    """

    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"


@dataclass(frozen=True)
class UserError:
    """Use case error: stable category + human message."""

    code: UserErrorCode
    message: str


@dataclass
class UserResult:
    """
    Result for use cases returning one UserRecord.

    Contract:
      - error is None => user is present
      - error is set  => user is None
    """

    user: UserRecord | None = None
    error: UserError | None = None


@dataclass
class UserListResult:
    """Result for listings; always a (possibly empty) list."""

    users: List[UserRecord]
    error: UserError | None = None


@dataclass
class AddMRResult:
    """
    Result of the add-MR command.

    initial_password is shown to the admin once so it can be handed to the
    MR; it is never stored.
    """

    user: UserRecord | None = None
    initial_password: str | None = None
    error: UserError | None = None
