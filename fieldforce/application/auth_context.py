"""
===============================================================================
AUTH CONTEXT (async facade for UI callers)
===============================================================================

Name:
    Auth Context

Business Goal:
    One object a screen can hold: login / logout with the simulated network
    delay, the signed-in user and company, and a callback when the held
    Session is revoked behind the user's back.

-------------------------------------------------------------------------------
CRC CARD
-------------------------------------------------------------------------------
Class:
    AuthContext

Responsibilities:
    - start(): rehydrate a stored Session and start the timers.
    - login(): sleep simulated latency, delegate, start timers on success.
    - logout(): stop timers, then clear the Session.
    - Revocation (from the poller or any direct validate_session() call):
      stop timers and call on_session_lost(user_id).
    - aclose() / async context manager: stop timers.

Collaborators:
    - SessionHolder
    - ValidityPoller (RevocationWatcher), ActivityStamper
    - identity.users.Company
===============================================================================
"""

from __future__ import annotations

import asyncio
import inspect
from typing import Any, Awaitable, Callable

from ..crosscutting.logger import logger
from ..identity.session import Session
from ..identity.users import Company, UserRecord, UserRole
from .session_watch import ActivityStamper, RevocationWatcher, _maybe_await
from .usecases.auth.auth_results import LoginResult
from .usecases.auth.session_holder import SessionHolder
from .usecases.users.user_results import UserResult

SessionLostCallback = Callable[[str], Awaitable[Any] | Any]


class AuthContext:
    def __init__(
        self,
        holder: SessionHolder,
        *,
        poller: RevocationWatcher,
        stamper: ActivityStamper,
        company: Company | None = None,
        simulated_latency_seconds: float = 0.0,
        on_session_lost: SessionLostCallback | None = None,
    ) -> None:
        if simulated_latency_seconds < 0:
            raise ValueError("simulated_latency_seconds must be >= 0")
        self._holder = holder
        self._poller = poller
        self._stamper = stamper
        self._company = company
        self._latency = simulated_latency_seconds
        self._on_session_lost = on_session_lost
        self._pending: set[asyncio.Task] = set()
        holder.add_revocation_listener(self._on_revoked)

    # =========================================================================
    # State
    # =========================================================================

    @property
    def holder(self) -> SessionHolder:
        return self._holder

    @property
    def session(self) -> Session | None:
        return self._holder.current_session

    @property
    def user(self) -> UserRecord | None:
        return self._holder.user

    @property
    def company(self) -> Company | None:
        return self._company

    @property
    def is_authenticated(self) -> bool:
        return self._holder.is_authenticated

    @property
    def is_admin(self) -> bool:
        return self._holder.is_admin

    @property
    def is_mr(self) -> bool:
        return self._holder.is_mr

    @property
    def timers_running(self) -> bool:
        return self._poller.running or self._stamper.running

    # =========================================================================
    # Lifecycle
    # =========================================================================

    async def start(self) -> Session | None:
        """Rehydrate a stored Session; the first validity tick checks it."""
        session = self._holder.restore()
        if session is not None:
            self._start_timers()
        return session

    async def aclose(self) -> None:
        await self._stop_timers()

    async def __aenter__(self) -> "AuthContext":
        await self.start()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    # =========================================================================
    # Commands
    # =========================================================================

    async def login(self, username: str, password: str, role: UserRole | str) -> LoginResult:
        if self._latency:
            await asyncio.sleep(self._latency)

        result = self._holder.login(username, password, role)
        if result.success:
            await self._stop_timers()
            self._start_timers()
        return result

    async def logout(self) -> None:
        await self._stop_timers()
        self._holder.logout()

    def update_user_status(
        self,
        user_id: str,
        is_active: bool,
        reason: str | None = None,
        *,
        actor_id: str | None = None,
    ) -> UserResult:
        return self._holder.update_user_status(
            user_id, is_active, reason, actor_id=actor_id
        )

    # =========================================================================
    # Private helpers
    # =========================================================================

    def _start_timers(self) -> None:
        self._poller.start()
        self._stamper.start()

    async def _stop_timers(self) -> None:
        await self._poller.stop()
        await self._stamper.stop()

    def _on_revoked(self, user_id: str) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # No event loop, so no timers are running.
            logger.info("Session lost", extra={"user_id": user_id})
            if self._on_session_lost is not None:
                outcome = self._on_session_lost(user_id)
                if inspect.isawaitable(outcome):
                    asyncio.run(_maybe_await(outcome))
            return

        task = loop.create_task(self._handle_revoked(user_id))
        self._pending.add(task)
        task.add_done_callback(self._revocation_done)

    def _revocation_done(self, task: asyncio.Task) -> None:
        self._pending.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("Session-lost handler failed", exc_info=exc)

    async def _handle_revoked(self, user_id: str) -> None:
        await self._stop_timers()
        logger.info("Session lost", extra={"user_id": user_id})
        if self._on_session_lost is not None:
            await _maybe_await(self._on_session_lost(user_id))
