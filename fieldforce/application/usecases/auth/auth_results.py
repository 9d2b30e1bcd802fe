"""
===============================================================================
AUTH RESULTS (Login outcome models)
===============================================================================

Name:
    Auth Results

Business Goal:
    Return every authentication outcome as a value. Nothing raises across the
    Session Holder boundary: the caller gets a success flag, an optional
    message and, on failure, a stable error code.

-------------------------------------------------------------------------------
CRC CARD
-------------------------------------------------------------------------------
Responsibilities:
    - AuthErrorCode: INVALID_CREDENTIALS, ACCOUNT_DEACTIVATED,
      SESSION_STORE_UNAVAILABLE.
    - AuthError (code + message).
    - LoginResult (success, message, session, error) with factories.

Collaborators:
    - identity.session.Session
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ....identity.session import Session

INVALID_CREDENTIALS_MESSAGE = "invalid credentials"
SESSION_STORE_UNAVAILABLE_MESSAGE = "could not save the session, please try again"


class AuthErrorCode(str, Enum):
    """
    Codes:
      - INVALID_CREDENTIALS: no Directory entry matches username + role.
      - ACCOUNT_DEACTIVATED: matched, but the account is inactive.
      - SESSION_STORE_UNAVAILABLE: credentials matched but the Session
        could not be persisted; nothing was changed.
    """

    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    ACCOUNT_DEACTIVATED = "ACCOUNT_DEACTIVATED"
    SESSION_STORE_UNAVAILABLE = "SESSION_STORE_UNAVAILABLE"


@dataclass(frozen=True)
class AuthError:
    code: AuthErrorCode
    message: str


@dataclass(frozen=True)
class LoginResult:
    """
    Contract:
      - success => session is set, error is None
      - failure => session is None, error and message are set
    """

    success: bool
    message: str | None = None
    session: Session | None = None
    error: AuthError | None = None

    @classmethod
    def ok(cls, session: Session) -> "LoginResult":
        return cls(success=True, session=session)

    @classmethod
    def failed(cls, code: AuthErrorCode, message: str) -> "LoginResult":
        return cls(
            success=False,
            message=message,
            error=AuthError(code=code, message=message),
        )

    def __bool__(self) -> bool:
        return self.success
