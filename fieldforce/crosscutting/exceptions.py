# fieldforce/crosscutting/exceptions.py
"""
===============================================================================
MODULE: Typed internal exceptions
===============================================================================

Goal
----
Internal exceptions with:
- a stable error_code
- an error_id for correlation with logs
- a human message (no secrets)

Authentication outcomes are NOT exceptions: the Session Holder returns
LoginResult values. These types cover infrastructure and programming errors.

-------------------------------------------------------------------------------
CRC (Component Card)
-------------------------------------------------------------------------------
Component:
  FieldForceError + subclasses

Responsibilities:
  - Standardize internal errors
  - Generate error_id for tracing
  - Render themselves as log `extra=` fields

Collaborators:
  - infrastructure/session_store/* (SessionStoreError)
  - domain/access_policy.py (InvalidTransitionError)
  - application/usecases/auth/session_holder.py (logs store failures)
===============================================================================
"""

from __future__ import annotations

from uuid import uuid4


class FieldForceError(Exception):
    """Base for internal errors: error_code + error_id + message."""

    error_code: str = "FIELDFORCE_ERROR"

    def __init__(
        self,
        message: str,
        *,
        error_id: str | None = None,
        original_error: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_id = error_id or uuid4().hex
        self.original_error = original_error

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"

    def to_log_extra(self) -> dict[str, str]:
        extra = {
            "error_code": self.error_code,
            "error_id": self.error_id,
            "error": self.message,
        }
        if self.original_error is not None:
            extra["cause"] = f"{type(self.original_error).__name__}: {self.original_error}"
        return extra


class SessionStoreError(FieldForceError):
    """Session persistence failed (file I/O, Redis)."""

    error_code = "SESSION_STORE_ERROR"


class InvalidTransitionError(FieldForceError):
    """Account access state transition not allowed from the current state."""

    error_code = "INVALID_TRANSITION"
