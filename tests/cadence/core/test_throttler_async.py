from __future__ import annotations

import asyncio

import pytest

from cadence.core.domain.enums import Outcome
from cadence.core.errors import DisposedError, ValidationError
from cadence.core.throttler import Throttler
from cadence.infra.asyncio_scheduler import AsyncioScheduler


def test_immediate_call_resolves_executed():
    async def scenario():
        ran = []

        async def act():
            ran.append("a")

        with Throttler(1.0, scheduler=AsyncioScheduler()) as t:
            outcome = await t.throttle_async(act)
        return outcome, ran

    outcome, ran = asyncio.run(scenario())
    assert outcome is Outcome.EXECUTED
    assert outcome.executed
    assert ran == ["a"]


def test_superseded_trailing_call_resolves_cancelled():
    async def scenario():
        ran = []

        def act(name):
            async def inner():
                ran.append(name)
            return inner

        with Throttler(0.05, scheduler=AsyncioScheduler()) as t:
            first = await t.throttle_async(act("a"))
            second = asyncio.ensure_future(t.throttle_async(act("b")))
            await asyncio.sleep(0)
            third = asyncio.ensure_future(t.throttle_async(act("c")))
            rest = await asyncio.wait_for(asyncio.gather(second, third), timeout=2.0)
        return [first, *rest], ran

    outcomes, ran = asyncio.run(scenario())
    assert outcomes == [Outcome.EXECUTED, Outcome.CANCELLED, Outcome.EXECUTED]
    assert ran == ["a", "c"]


def test_no_trailing_resolves_dropped():
    async def scenario():
        with Throttler(10.0, scheduler=AsyncioScheduler()) as t:
            first = await t.throttle_async(lambda: None)
            second = await t.throttle_async(lambda: None, execute_trailing=False)
            return first, second, t.has_pending

    first, second, has_pending = asyncio.run(scenario())
    assert (first, second) == (Outcome.EXECUTED, Outcome.DROPPED)
    assert has_pending is False


def test_trailing_runs_with_thread_scheduler():
    async def scenario():
        ran = []

        async def act(name):
            ran.append(name)

        with Throttler(0.05) as t:
            await t.throttle_async(lambda: act("a"))
            outcome = await asyncio.wait_for(t.throttle_async(lambda: act("b")), timeout=2.0)
        return outcome, ran

    outcome, ran = asyncio.run(scenario())
    assert outcome is Outcome.EXECUTED
    assert ran == ["a", "b"]


def test_trailing_action_exception_reaches_awaiting_caller():
    async def scenario():
        async def boom():
            raise RuntimeError("async boom")

        with Throttler(0.02, scheduler=AsyncioScheduler()) as t:
            await t.throttle_async(lambda: None)
            await asyncio.wait_for(t.throttle_async(boom), timeout=2.0)

    with pytest.raises(RuntimeError, match="async boom"):
        asyncio.run(scenario())


def test_reset_and_dispose_resolve_pending_call_as_cancelled():
    async def scenario():
        t = Throttler(10.0, scheduler=AsyncioScheduler())
        await t.throttle_async(lambda: None)
        waiting = asyncio.ensure_future(t.throttle_async(lambda: None))
        await asyncio.sleep(0)
        t.reset()
        after_reset = await asyncio.wait_for(waiting, timeout=1.0)

        await t.throttle_async(lambda: None)
        waiting = asyncio.ensure_future(t.throttle_async(lambda: None))
        await asyncio.sleep(0)
        t.dispose()
        after_dispose = await asyncio.wait_for(waiting, timeout=1.0)
        return after_reset, after_dispose

    assert asyncio.run(scenario()) == (Outcome.CANCELLED, Outcome.CANCELLED)


def test_cancelling_awaiting_task_discards_pending_call():
    async def scenario():
        with Throttler(10.0, scheduler=AsyncioScheduler()) as t:
            await t.throttle_async(lambda: None)
            waiting = asyncio.ensure_future(t.throttle_async(lambda: None))
            await asyncio.sleep(0)
            assert t.has_pending
            waiting.cancel()
            with pytest.raises(asyncio.CancelledError):
                await waiting
            return t.has_pending

    assert asyncio.run(scenario()) is False


def test_disposed_and_invalid_calls_raise():
    async def scenario():
        t = Throttler(1.0, scheduler=AsyncioScheduler())
        with pytest.raises(ValidationError):
            await t.throttle_async(None)
        t.dispose()
        with pytest.raises(DisposedError):
            await t.throttle_async(lambda: None)

    asyncio.run(scenario())


def test_call_exactly_one_interval_later_resolves_executed(clock, scheduler):
    async def scenario():
        t = Throttler(0.1, clock=clock, scheduler=scheduler)
        clock.set(0.2)
        first = await t.throttle_async(lambda: None, execute_trailing=False)
        clock.set(0.3)
        second = await t.throttle_async(lambda: None, execute_trailing=False)
        return first, second

    assert asyncio.run(scenario()) == (Outcome.EXECUTED, Outcome.EXECUTED)
