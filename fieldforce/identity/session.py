"""
===============================================================================
CRC CARD: identity/session.py
===============================================================================

Module:
    Session value + token generation

Responsibilities:
    - Define the Session held by the Session Holder: a UserRecord snapshot,
      an opaque token and its creation time.
    - Generate session tokens.

Collaborators:
    - application/usecases/auth/session_holder.py
    - domain/repositories.SessionStore implementations

Notes:
    - The token is an opaque random string. Nothing validates it server-side;
      it only identifies the persisted entry.
===============================================================================
"""

from __future__ import annotations

import secrets
from dataclasses import dataclass
from datetime import datetime

from .users import UserRecord


@dataclass(frozen=True, slots=True)
class Session:
    """The single logged-in identity of the running client."""

    user: UserRecord
    token: str
    created_at: datetime | None = None

    @property
    def user_id(self) -> str:
        return self.user.id


def generate_session_token(nbytes: int = 24) -> str:
    """URL-safe random token."""
    return secrets.token_urlsafe(nbytes)
