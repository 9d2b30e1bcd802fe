"""
===============================================================================
SESSION HOLDER (login / logout / validity / admin status changes)
===============================================================================

Name:
    Session Holder

Business Goal:
    Authenticate a (username, password, role) triple against the Directory
    and manage the single active Session of the running client.

Why:
    - The Directory is injected, so every test (and every client) owns an
      isolated one.
    - Persistence goes through the SessionStore port (memory / file / Redis).
    - Revocation is eventual: an admin deactivation only lands in the
      Directory; the held Session ends when validate_session() next runs.

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Class:
    SessionHolder

Responsibilities:
    - login(): match username + role, reject inactive accounts, mint a
      token, persist, stamp last_active_at, hold the Session.
    - logout(): clear Session and store (idempotent).
    - validate_session(): re-read the Directory entry; force-logout when it
      is missing or inactive, then notify revocation listeners.
    - restore(): rehydrate at startup without re-checking credentials.
    - update_user_status(): delegate to UpdateUserStatusUseCase.
    - touch_last_active(): stamp the held user's Directory entry.

Collaborators:
    - UserDirectory, SessionStore, AuditEventRepository (ports)
    - UpdateUserStatusUseCase
    - domain.access_policy.deactivated_login_message
    - fieldforce.context (log correlation), crosscutting.metrics

-------------------------------------------------------------------------------
NOTES
-------------------------------------------------------------------------------
- The password is accepted unconditionally; credential verification is not
  part of this system.
- The Session keeps a snapshot taken at login; Directory changes are only
  seen through validate_session().
===============================================================================
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timezone
from typing import Callable

from ....audit import (
    ACTION_LOGIN,
    ACTION_LOGOUT,
    ACTION_SESSION_REVOKED,
    emit_audit_event,
)
from ....context import clear_context, set_session_context
from ....crosscutting.exceptions import SessionStoreError
from ....crosscutting.logger import logger
from ....crosscutting.metrics import (
    record_login,
    record_logout,
    record_session_validation,
)
from ....domain.access_policy import deactivated_login_message
from ....domain.repositories import AuditEventRepository, SessionStore, UserDirectory
from ....identity.session import Session, generate_session_token
from ....identity.users import UserRecord, UserRole, is_admin_role
from ..users.update_user_status import UpdateUserStatusUseCase
from ..users.user_results import UserResult
from .auth_results import (
    INVALID_CREDENTIALS_MESSAGE,
    SESSION_STORE_UNAVAILABLE_MESSAGE,
    AuthErrorCode,
    LoginResult,
)

DEFAULT_DEACTIVATION_MESSAGE = "Your account has been deactivated"


def _coerce_role(role: UserRole | str) -> UserRole | None:
    if isinstance(role, UserRole):
        return role
    try:
        return UserRole((role or "").strip().lower())
    except ValueError:
        return None


class SessionHolder:
    """Holds at most one Session for the running client."""

    def __init__(
        self,
        directory: UserDirectory,
        store: SessionStore,
        *,
        status_use_case: UpdateUserStatusUseCase | None = None,
        audit_repository: AuditEventRepository | None = None,
        clock: Callable[[], datetime] | None = None,
        token_factory: Callable[[], str] | None = None,
        default_deactivation_message: str = DEFAULT_DEACTIVATION_MESSAGE,
    ) -> None:
        self._directory = directory
        self._store = store
        self._audit = audit_repository
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self._new_token = token_factory or generate_session_token
        self._default_deactivation_message = default_deactivation_message
        self._status_use_case = status_use_case or UpdateUserStatusUseCase(
            directory, audit_repository=audit_repository, clock=self._clock
        )
        self._session: Session | None = None
        self._revocation_listeners: list[Callable[[str], None]] = []

    def add_revocation_listener(self, listener: Callable[[str], None]) -> None:
        """
        Call `listener(user_id)` whenever validate_session() force-logs-out,
        whoever triggered the check. Not called for explicit logout().
        """
        self._revocation_listeners.append(listener)

    # =========================================================================
    # State
    # =========================================================================

    @property
    def current_session(self) -> Session | None:
        return self._session

    @property
    def user(self) -> UserRecord | None:
        return self._session.user if self._session else None

    @property
    def is_authenticated(self) -> bool:
        return self._session is not None

    @property
    def is_admin(self) -> bool:
        return self._session is not None and is_admin_role(self._session.user.role)

    @property
    def is_mr(self) -> bool:
        return self._session is not None and self._session.user.role == UserRole.MR

    # =========================================================================
    # Commands
    # =========================================================================

    def login(self, username: str, password: str, role: UserRole | str) -> LoginResult:
        """
        Authenticate against the Directory.

        Failure leaves no trace beyond the returned result (and a log line).
        """
        wanted_role = _coerce_role(role)
        matched = None
        if wanted_role is not None and username:
            matched = self._directory.find_by_username_and_role(username, wanted_role)

        if matched is None:
            record_login("invalid_credentials")
            logger.info("Login rejected: no matching user", extra={"role": str(role)})
            return LoginResult.failed(
                AuthErrorCode.INVALID_CREDENTIALS, INVALID_CREDENTIALS_MESSAGE
            )

        if not matched.is_active:
            record_login("account_deactivated")
            logger.warning(
                "Login rejected: account deactivated", extra={"user_id": matched.id}
            )
            return LoginResult.failed(
                AuthErrorCode.ACCOUNT_DEACTIVATED,
                deactivated_login_message(matched, self._default_deactivation_message),
            )

        now = self._clock()
        snapshot = replace(matched, last_active_at=now)
        session = Session(user=snapshot, token=self._new_token(), created_at=now)

        # Persist first; the Directory is only stamped once the save succeeded.
        try:
            self._store.save(session)
        except SessionStoreError as exc:
            record_login("store_error")
            logger.error(
                "Login aborted: session could not be saved",
                extra={"user_id": matched.id, **exc.to_log_extra()},
            )
            return LoginResult.failed(
                AuthErrorCode.SESSION_STORE_UNAVAILABLE,
                SESSION_STORE_UNAVAILABLE_MESSAGE,
            )

        self._directory.stamp_last_active(matched.id, now)
        self._hold(session)

        record_login("success")
        logger.info("Login succeeded", extra={"user_id": snapshot.id})
        emit_audit_event(
            self._audit,
            action=ACTION_LOGIN,
            actor_id=snapshot.id,
            target_id=snapshot.id,
            metadata={"role": snapshot.role.value},
        )
        return LoginResult.ok(session)

    def logout(self) -> None:
        """Clear the Session and its stored entries. Safe to call repeatedly."""
        previous = self._session
        self._release()

        if previous is None:
            return

        record_logout("explicit")
        logger.info("Logged out", extra={"user_id": previous.user_id})
        emit_audit_event(
            self._audit,
            action=ACTION_LOGOUT,
            actor_id=previous.user_id,
            target_id=previous.user_id,
        )

    def validate_session(self) -> bool:
        """
        Re-check the held Session against the current Directory.

        Returns:
            True  - Session held and its user is present and active
            False - no Session, or the Session was just cleared
        """
        session = self._session
        if session is None:
            record_session_validation("no_session")
            return False

        current = self._directory.get_user(session.user_id)
        if current is not None and current.is_active:
            record_session_validation("valid")
            return True

        self._release()
        record_session_validation("revoked")
        record_logout("revoked")
        logger.warning(
            "Session revoked: account missing or deactivated",
            extra={"user_id": session.user_id, "missing": current is None},
        )
        emit_audit_event(
            self._audit,
            action=ACTION_SESSION_REVOKED,
            target_id=session.user_id,
            metadata={"missing": current is None},
        )
        self._notify_revoked(session.user_id)
        return False

    def restore(self) -> Session | None:
        """
        Rehydrate the Session persisted by a previous run.

        Only existence is checked here; freshness is left to the first
        validity tick. Leftovers that do not decode are cleared.
        """
        session = self._store.load()
        if session is None:
            self._clear_store()
            return None

        self._hold(session)
        logger.info("Session restored from store", extra={"user_id": session.user_id})
        return session

    def update_user_status(
        self,
        user_id: str,
        is_active: bool,
        reason: str | None = None,
        *,
        actor_id: str | None = None,
    ) -> UserResult:
        """
        Admin mutation on a Directory entry.

        Does NOT end an open Session for that user; the next
        validate_session() of that user's client does.
        """
        if actor_id is None and self._session is not None:
            actor_id = self._session.user_id
        return self._status_use_case.execute(
            user_id, is_active, reason, actor_id=actor_id
        )

    def touch_last_active(self) -> bool:
        """Stamp now() on the held user's Directory entry. False if nothing was stamped."""
        session = self._session
        if session is None:
            return False
        return self._directory.stamp_last_active(session.user_id, self._clock())

    # =========================================================================
    # Private helpers
    # =========================================================================

    def _hold(self, session: Session) -> None:
        self._session = session
        set_session_context(user_id=session.user_id, role=session.user.role.value)

    def _release(self) -> None:
        self._session = None
        clear_context()
        self._clear_store()

    def _notify_revoked(self, user_id: str) -> None:
        for listener in list(self._revocation_listeners):
            try:
                listener(user_id)
            except Exception:
                logger.exception(
                    "Revocation listener failed", extra={"user_id": user_id}
                )

    def _clear_store(self) -> None:
        try:
            self._store.clear()
        except SessionStoreError as exc:
            logger.error("Could not clear stored session", extra=exc.to_log_extra())
