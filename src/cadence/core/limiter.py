from __future__ import annotations

import asyncio
import inspect
import logging
from dataclasses import dataclass
from threading import Lock
from typing import Any, Awaitable, Callable, Optional

from .domain.enums import Outcome
from .ports.clock_port import ClockPort, SystemClock
from .ports.scheduler_port import SchedulerPort, ThreadingScheduler, TimerHandle
from ..shared.guards import Interval, require_positive_interval

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class PendingAction:
    """A deferred action together with the timer that will run it.

    The timer handle doubles as the cancellation token: every pending action
    owns its own handle, and the handle is cancelled before the slot is
    handed to a successor.
    """

    action: Callable[[], Any]
    on_cancel: Optional[Callable[[], None]] = None
    handle: Optional[TimerHandle] = None

    def cancel(self) -> None:
        if self.handle is not None:
            self.handle.cancel()
            self.handle = None
        if self.on_cancel is not None:
            self.on_cancel()


class LimiterBase:
    """Lock-guarded single pending-action slot shared by Debouncer and Throttler.

    States: idle (no pending action), pending, disposed. Disposal is terminal.
    """

    def __init__(
        self,
        interval: Interval,
        *,
        clock: ClockPort | None = None,
        scheduler: SchedulerPort | None = None,
        interval_name: str = "interval",
    ) -> None:
        self._interval = require_positive_interval(interval, interval_name)
        self._clock: ClockPort = clock or SystemClock()
        # a limiter built without a scheduler owns its timer threads and stops them on dispose
        self._owned_scheduler = ThreadingScheduler() if scheduler is None else None
        self._scheduler: SchedulerPort = scheduler or self._owned_scheduler
        self._lock = Lock()
        self._pending: PendingAction | None = None
        self._disposed = False

    def __repr__(self) -> str:
        state = "disposed" if self._disposed else ("pending" if self._pending else "idle")
        return f"{type(self).__name__}(interval={self._interval!r}, state={state})"

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.dispose()

    @property
    def has_pending(self) -> bool:
        with self._lock:
            return self._pending is not None

    @property
    def is_disposed(self) -> bool:
        with self._lock:
            return self._disposed

    def cancel(self) -> None:
        """Discard the pending action, if any, without running it."""
        with self._lock:
            self._replace_pending_locked(None)

    def dispose(self) -> None:
        """Cancel pending work and refuse all further scheduling. Idempotent."""
        with self._lock:
            if self._disposed:
                return
            self._disposed = True
            self._replace_pending_locked(None)
        if self._owned_scheduler is not None:
            self._owned_scheduler.shutdown()
        logger.debug(f"{type(self).__name__} disposed")

    # -- slot management (caller holds self._lock) --------------------------

    def _replace_pending_locked(self, pending: PendingAction | None, delay: float = 0.0) -> None:
        previous, self._pending = self._pending, None
        if previous is not None:
            previous.cancel()
            logger.debug(f"{type(self).__name__}: pending action cancelled")
        if pending is None:
            return
        pending.handle = self._scheduler.schedule_after(delay, lambda: self._fire(pending))
        self._pending = pending
        logger.debug(f"{type(self).__name__}: action scheduled in {delay:.3f}s")

    def _on_fire_locked(self) -> None:
        """Hook run under the lock right before a deferred action executes."""

    def _fire(self, pending: PendingAction) -> None:
        with self._lock:
            if self._pending is not pending:
                # superseded or cancelled after the timer was already due
                return
            self._pending = None
            pending.handle = None
            self._on_fire_locked()
        logger.debug(f"{type(self).__name__}: running deferred action")
        pending.action()

    def _discard(self, pending: PendingAction) -> None:
        with self._lock:
            if self._pending is pending:
                self._replace_pending_locked(None)

    # -- async support -------------------------------------------------------

    def _async_pending_locked(self) -> tuple[PendingAction, "asyncio.Future[Outcome]"]:
        """Build a pending action that wakes the awaiting coroutine instead of running the action.

        The deferred callback only settles a future on the caller's loop; the
        caller's own task then runs the action, so the action executes on the
        loop it was submitted from and its exceptions reach the awaiting caller.
        """
        loop = asyncio.get_running_loop()
        waiter: asyncio.Future[Outcome] = loop.create_future()

        def settle(outcome: Outcome) -> None:
            if not waiter.done():
                waiter.set_result(outcome)

        def signal(outcome: Outcome) -> None:
            if loop.is_closed():
                return
            loop.call_soon_threadsafe(settle, outcome)

        pending = PendingAction(
            action=lambda: signal(Outcome.EXECUTED),
            on_cancel=lambda: signal(Outcome.CANCELLED),
        )
        return pending, waiter

    async def _await_pending(
        self,
        pending: PendingAction,
        waiter: "asyncio.Future[Outcome]",
        action: Callable[[], Any],
    ) -> Outcome:
        try:
            outcome = await waiter
        except asyncio.CancelledError:
            self._discard(pending)
            raise
        if outcome is Outcome.EXECUTED:
            await invoke_async(action)
        return outcome


async def invoke_async(action: Callable[[], Any]) -> Any:
    """Call action and await its result when it returns an awaitable."""
    result = action()
    if inspect.isawaitable(result):
        return await result
    return result


AsyncAction = Callable[[], Awaitable[Any]]
