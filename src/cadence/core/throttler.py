from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from .domain.enums import Outcome
from .limiter import AsyncAction, LimiterBase, PendingAction, invoke_async
from .ports.clock_port import ClockPort
from .ports.scheduler_port import SchedulerPort
from ..shared.guards import Interval, require_callable, require_not_disposed

logger = logging.getLogger(__name__)

# seconds; float rounding below this never keeps a window closed
WINDOW_TOLERANCE = 1e-9


class Throttler(LimiterBase):
    """Execute an action at most once per ``interval`` seconds.

    The first call of a window runs immediately on the caller's thread. Later
    calls in the same window are either dropped or, with ``execute_trailing``,
    kept as the single trailing candidate that runs when the window closes.
    Only the most recent trailing candidate survives.

    Example:
        throttler = Throttler(1.0)
        throttler.throttle(refresh)                          # runs now -> True
        throttler.throttle(refresh)                          # runs at t=1.0 -> False
        throttler.throttle(log_scroll, execute_trailing=False)  # dropped -> False
    """

    def __init__(
        self,
        interval: Interval,
        *,
        clock: ClockPort | None = None,
        scheduler: SchedulerPort | None = None,
    ) -> None:
        super().__init__(interval, clock=clock, scheduler=scheduler)
        self._last_execution_time: Optional[float] = None

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def last_execution_time(self) -> Optional[float]:
        """Clock timestamp of the last execution, or None if nothing ran since creation/reset."""
        with self._lock:
            return self._last_execution_time

    @property
    def time_until_next_allowed(self) -> float:
        """Seconds until a call would execute immediately; 0.0 if it would now."""
        with self._lock:
            return max(0.0, self._remaining_locked(self._clock.now()))

    def throttle(self, action: Callable[[], Any], execute_trailing: bool = True) -> bool:
        """Throttle action. Returns True if it executed immediately.

        Raises:
            ValidationError: If action is None or not callable.
            DisposedError: If the throttler was disposed.
        """
        require_callable(action)
        with self._lock:
            require_not_disposed(self._disposed, self)
            now = self._clock.now()
            remaining = self._remaining_locked(now)
            if remaining > 0:
                if execute_trailing:
                    self._replace_pending_locked(PendingAction(action), remaining)
                return False
            self._open_window_locked(now)
        action()
        return True

    async def throttle_async(
        self,
        action: AsyncAction | Callable[[], Any],
        execute_trailing: bool = True,
    ) -> Outcome:
        """Async counterpart of throttle().

        Resolves Outcome.EXECUTED when the action ran (immediately or as the
        trailing call), Outcome.CANCELLED when a later call or reset/cancel/dispose
        superseded the trailing call, and Outcome.DROPPED when trailing execution
        was disabled and the window was closed.
        """
        require_callable(action)
        with self._lock:
            require_not_disposed(self._disposed, self)
            now = self._clock.now()
            remaining = self._remaining_locked(now)
            if remaining <= 0:
                self._open_window_locked(now)
                pending = None
            elif not execute_trailing:
                return Outcome.DROPPED
            else:
                pending, waiter = self._async_pending_locked()
                self._replace_pending_locked(pending, remaining)

        if pending is None:
            await invoke_async(action)
            return Outcome.EXECUTED
        return await self._await_pending(pending, waiter, action)

    def reset(self) -> None:
        """Forget the last execution and cancel any trailing call; the next call runs immediately."""
        with self._lock:
            require_not_disposed(self._disposed, self)
            self._last_execution_time = None
            self._replace_pending_locked(None)
        logger.debug("Throttler reset")

    # -- internals (caller holds self._lock) --------------------------------

    def _remaining_locked(self, now: float) -> float:
        if self._last_execution_time is None:
            return 0.0
        remaining = self._interval - (now - self._last_execution_time)
        # 0.3 - 0.2 is 0.09999999999999998: a call landing on the boundary opens the window
        if remaining <= WINDOW_TOLERANCE:
            return 0.0
        return remaining

    def _open_window_locked(self, now: float) -> None:
        # a stale trailing call from the previous window must not fire after this one
        self._replace_pending_locked(None)
        self._last_execution_time = now

    def _on_fire_locked(self) -> None:
        now = self._clock.now()
        if self._last_execution_time is None or now > self._last_execution_time:
            self._last_execution_time = now
