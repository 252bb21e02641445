from __future__ import annotations

from typing import Any, Callable

from .domain.enums import Outcome
from .limiter import AsyncAction, LimiterBase, PendingAction
from .ports.clock_port import ClockPort
from .ports.scheduler_port import SchedulerPort
from ..shared.guards import Interval, require_callable, require_not_disposed


class Debouncer(LimiterBase):
    """Run an action only after ``delay`` seconds pass without another call.

    Every call cancels the previously scheduled action and restarts the wait,
    so out of a burst of calls only the last one ever runs.

    Example:
        with Debouncer(0.3) as debouncer:
            for text in keystrokes:
                debouncer.debounce(lambda text=text: search(text))

        # Async variant: superseded calls resolve to Outcome.CANCELLED
        outcome = await debouncer.debounce_async(save_draft)
    """

    def __init__(
        self,
        delay: Interval,
        *,
        clock: ClockPort | None = None,
        scheduler: SchedulerPort | None = None,
    ) -> None:
        super().__init__(delay, clock=clock, scheduler=scheduler, interval_name="delay")

    @property
    def delay(self) -> float:
        return self._interval

    def debounce(self, action: Callable[[], Any]) -> None:
        """Schedule action to run after the quiet period, replacing any pending one.

        Raises:
            ValidationError: If action is None or not callable.
            DisposedError: If the debouncer was disposed.
        """
        require_callable(action)
        with self._lock:
            require_not_disposed(self._disposed, self)
            self._replace_pending_locked(PendingAction(action), self._interval)

    async def debounce_async(self, action: AsyncAction | Callable[[], Any]) -> Outcome:
        """Debounce an async action and wait for the result of this particular call.

        Returns Outcome.EXECUTED once the action ran, or Outcome.CANCELLED when a
        later call, cancel() or dispose() superseded it. Exceptions raised by the
        action propagate to the awaiting caller.
        """
        require_callable(action)
        with self._lock:
            require_not_disposed(self._disposed, self)
            pending, waiter = self._async_pending_locked()
            self._replace_pending_locked(pending, self._interval)
        return await self._await_pending(pending, waiter, action)
