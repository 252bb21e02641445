from __future__ import annotations

import asyncio

import pytest

from cadence.core.debouncer import Debouncer
from cadence.core.decorators import debounced, throttled
from cadence.core.domain.enums import Outcome
from cadence.core.errors import ValidationError
from cadence.core.throttler import Throttler
from cadence.infra.asyncio_scheduler import AsyncioScheduler


def test_debounced_runs_with_latest_arguments(clock, scheduler):
    seen = []

    @debounced(0.2, clock=clock, scheduler=scheduler)
    def search(text, *, page=1):
        """Search docs."""
        seen.append((text, page))

    assert search("c") is None
    search("ca")
    search("cat", page=2)
    scheduler.advance_to(1.0)

    assert seen == [("cat", 2)]
    assert search.__name__ == "search"
    assert search.__doc__ == "Search docs."
    assert isinstance(search.limiter, Debouncer)


def test_debounced_cancel_and_dispose(clock, scheduler):
    seen = []

    @debounced(0.2, clock=clock, scheduler=scheduler)
    def save(value):
        seen.append(value)

    save(1)
    save.cancel()
    scheduler.advance_to(1.0)
    assert seen == []
    save.dispose()
    assert save.limiter.is_disposed


def test_throttled_returns_whether_call_ran_and_trails_latest_arguments(clock, scheduler):
    seen = []

    @throttled(1.0, clock=clock, scheduler=scheduler)
    def redraw(frame):
        seen.append((frame, clock.now()))

    assert redraw(1) is True
    assert redraw(2) is False
    assert redraw(3) is False
    scheduler.advance_to(1.5)
    assert seen == [(1, 0.0), (3, 1.0)]
    assert isinstance(redraw.limiter, Throttler)


def test_throttled_without_trailing_and_reset(clock, scheduler):
    seen = []

    @throttled(1.0, execute_trailing=False, clock=clock, scheduler=scheduler)
    def ping(n):
        seen.append(n)

    assert ping(1) is True
    assert ping(2) is False
    ping.reset()
    assert ping(3) is True
    scheduler.run_all()
    assert seen == [1, 3]


def test_async_functions_get_async_wrappers():
    async def scenario():
        seen = []

        @debounced(0.01, scheduler=AsyncioScheduler())
        async def save(value):
            seen.append(("save", value))

        @throttled(10.0, execute_trailing=False, scheduler=AsyncioScheduler())
        async def refresh(value):
            seen.append(("refresh", value))

        debounce_outcome = await asyncio.wait_for(save(1), timeout=2.0)
        first = await refresh(1)
        second = await refresh(2)
        save.dispose()
        refresh.dispose()
        return seen, debounce_outcome, first, second

    seen, debounce_outcome, first, second = asyncio.run(scenario())
    assert debounce_outcome is Outcome.EXECUTED
    assert (first, second) == (Outcome.EXECUTED, Outcome.DROPPED)
    assert seen == [("save", 1), ("refresh", 1)]


def test_decorator_rejects_invalid_interval():
    with pytest.raises(ValidationError):
        debounced(0)(lambda: None)
