"""
===============================================================================
SESSION WATCH (Validity Poller + Activity Stamper)
===============================================================================

Name:
    Session watch timers

Business Goal:
    Keep the held Session honest while it is open:
      - Validity Poller: periodically ask "is this identity still valid?" and
        force-logout when the account was deactivated or removed elsewhere.
      - Activity Stamper: periodically refresh last_active_at on the user's
        Directory entry.

Known limitation:
    Revocation is eventual. Detection latency is bounded by the poll
    interval; nothing pushes a deactivation to the client.

-------------------------------------------------------------------------------
CRC CARD
-------------------------------------------------------------------------------
Components:
    - PeriodicTask: asyncio loop running a callback every N seconds.
    - RevocationWatcher (Protocol): start(on_revoked) / stop() / running.
    - ValidityPoller: RevocationWatcher backed by a timer.
    - ActivityStamper: timer stamping last_active_at.

Collaborators:
    - application.usecases.auth.session_holder.SessionHolder
    - crosscutting.logger, crosscutting.metrics

Concurrency:
    - Single event loop; each timer is its own task. Directory mutations are
      synchronous, so a tick never observes a half-applied change.
    - No backoff, no jitter. "No Session" stops both timers.
===============================================================================
"""

from __future__ import annotations

import asyncio
import inspect
from typing import Any, Awaitable, Callable, Protocol

from ..crosscutting.logger import logger
from ..crosscutting.metrics import record_activity_stamp
from .usecases.auth.session_holder import SessionHolder

RevokedCallback = Callable[[str], Awaitable[Any] | Any]


async def _maybe_await(value: Any) -> None:
    if inspect.isawaitable(value):
        await value


def _current_task() -> asyncio.Task | None:
    try:
        return asyncio.current_task()
    except RuntimeError:
        # No running loop (sync caller).
        return None


class PeriodicTask:
    """
    Run `callback` every `interval_seconds` on the running event loop.

    - run_immediately=True fires the first tick right after start().
    - A failing tick is logged and the loop keeps going.
    - cancel() may be called from inside a tick; the loop exits after it.
    """

    def __init__(
        self,
        name: str,
        interval_seconds: float,
        callback: Callable[[], Awaitable[Any] | Any],
        *,
        run_immediately: bool = False,
    ) -> None:
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be > 0")
        self._name = name
        self._interval = float(interval_seconds)
        self._callback = callback
        self._run_immediately = run_immediately
        self._task: asyncio.Task | None = None
        self._stop_requested = False
        self._generation = 0

    @property
    def name(self) -> str:
        return self._name

    @property
    def interval_seconds(self) -> float:
        return self._interval

    @property
    def running(self) -> bool:
        return (
            self._task is not None
            and not self._task.done()
            and not self._stop_requested
        )

    def start(self) -> None:
        """Schedule the loop. Requires a running event loop."""
        if self.running:
            return
        self._stop_requested = False
        # A loop left over from a restart inside its own tick sees a stale
        # generation and exits.
        self._generation += 1
        self._task = asyncio.get_running_loop().create_task(
            self._run(self._generation), name=self._name
        )

    def cancel(self) -> None:
        """Request the loop to end; does not wait."""
        self._stop_requested = True
        task = self._task
        if task is None or task.done():
            return
        if task is _current_task():
            return
        task.cancel()

    async def stop(self) -> None:
        """Cancel and wait for the loop to finish."""
        self.cancel()
        task = self._task
        if task is None or task is _current_task():
            return
        try:
            await task
        except asyncio.CancelledError:
            pass
        finally:
            if self._task is task:
                self._task = None

    def _active(self, generation: int) -> bool:
        return generation == self._generation and not self._stop_requested

    async def _run(self, generation: int) -> None:
        if not self._run_immediately:
            await asyncio.sleep(self._interval)

        while self._active(generation):
            try:
                await _maybe_await(self._callback())
            except Exception:
                logger.exception("Periodic task tick failed", extra={"task": self._name})

            if not self._active(generation):
                break
            await asyncio.sleep(self._interval)


class RevocationWatcher(Protocol):
    """
    Something that periodically asks "is this identity still valid?" and
    calls back on a negative answer. A timer here; a push channel would
    satisfy the same contract.
    """

    @property
    def running(self) -> bool: ...

    def start(self, on_revoked: RevokedCallback | None = None) -> None: ...

    async def stop(self) -> None: ...


class ValidityPoller:
    """Timer-backed RevocationWatcher over SessionHolder.validate_session()."""

    def __init__(self, holder: SessionHolder, *, interval_seconds: float = 30.0) -> None:
        self._holder = holder
        self._on_revoked: RevokedCallback | None = None
        self._task = PeriodicTask(
            "validity-poller", interval_seconds, self.tick, run_immediately=True
        )

    @property
    def running(self) -> bool:
        return self._task.running

    @property
    def interval_seconds(self) -> float:
        return self._task.interval_seconds

    def start(self, on_revoked: RevokedCallback | None = None) -> None:
        self._on_revoked = on_revoked
        self._task.start()

    async def stop(self) -> None:
        await self._task.stop()

    async def tick(self) -> None:
        session = self._holder.current_session
        if session is None:
            self._task.cancel()
            return

        if self._holder.validate_session():
            return

        self._task.cancel()
        logger.info(
            "Validity poller detected revoked session",
            extra={"user_id": session.user_id},
        )
        if self._on_revoked is not None:
            await _maybe_await(self._on_revoked(session.user_id))


class ActivityStamper:
    """Timer stamping last_active_at for the held Session's user."""

    def __init__(self, holder: SessionHolder, *, interval_seconds: float = 60.0) -> None:
        self._holder = holder
        self._task = PeriodicTask("activity-stamper", interval_seconds, self.tick)

    @property
    def running(self) -> bool:
        return self._task.running

    @property
    def interval_seconds(self) -> float:
        return self._task.interval_seconds

    def start(self) -> None:
        self._task.start()

    async def stop(self) -> None:
        await self._task.stop()

    def tick(self) -> None:
        if self._holder.current_session is None:
            self._task.cancel()
            return
        if self._holder.touch_last_active():
            record_activity_stamp()
