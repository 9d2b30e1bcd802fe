"""
===============================================================================
CRC CARD: fieldforce/context.py (Session-scoped context)
===============================================================================

Responsibilities:
  - Keep the "who is logged in" context in ContextVars (async-safe).
  - Let the logger correlate lines with the held session without threading
    parameters through every call.
  - Provide minimal helpers: set_session_context(), get_context_dict(),
    clear_context().

Collaborators:
  - application.usecases.auth.session_holder: sets/clears on login, restore,
    logout and forced logout.
  - crosscutting.logger: enriches log lines via get_context_dict().

Constraints:
  - Primitive values only (str) so JSON serialization is always safe.
  - Empty defaults ("") instead of None.
===============================================================================
"""

from __future__ import annotations

from contextvars import ContextVar
from typing import Final

session_user_id_var: ContextVar[str] = ContextVar("session_user_id", default="")
session_role_var: ContextVar[str] = ContextVar("session_role", default="")

_CTX_USER_ID: Final[str] = "session_user_id"
_CTX_ROLE: Final[str] = "session_role"


def set_session_context(*, user_id: str = "", role: str = "") -> None:
    """
    Set the session context.

    Rule:
      - Empty strings mean "not available".
    """
    session_user_id_var.set(user_id or "")
    session_role_var.set(role or "")


def get_context_dict() -> dict[str, str]:
    """Return the current context as a dict, omitting empty keys."""
    ctx: dict[str, str] = {}

    if val := session_user_id_var.get():
        ctx[_CTX_USER_ID] = val
    if val := session_role_var.get():
        ctx[_CTX_ROLE] = val

    return ctx


def clear_context() -> None:
    """Clear the context once the session ends."""
    session_user_id_var.set("")
    session_role_var.set("")
