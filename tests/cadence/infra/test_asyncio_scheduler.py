from __future__ import annotations

import asyncio
import threading

import pytest

from cadence.core.errors import CadenceError, NoEventLoopError
from cadence.infra.asyncio_scheduler import AsyncioScheduler


def test_callbacks_run_on_the_loop_thread():
    async def scenario():
        loop_thread = threading.current_thread()
        fired = asyncio.Event()
        seen = []

        def callback():
            seen.append(threading.current_thread() is loop_thread)
            fired.set()

        AsyncioScheduler().schedule_after(0.01, callback)
        await asyncio.wait_for(fired.wait(), timeout=2.0)
        return seen

    assert asyncio.run(scenario()) == [True]


def test_cancel_prevents_callback():
    async def scenario():
        fired = []
        handle = AsyncioScheduler().schedule_after(0.02, lambda: fired.append(1))
        handle.cancel()
        await asyncio.sleep(0.06)
        return fired

    assert asyncio.run(scenario()) == []


def test_schedule_from_another_thread_with_explicit_loop():
    async def scenario():
        loop = asyncio.get_running_loop()
        scheduler = AsyncioScheduler(loop)
        fired = asyncio.Event()
        cancelled = []
        handles = {}

        def schedule():
            handles["kept"] = scheduler.schedule_after(0.01, fired.set)
            handles["dropped"] = scheduler.schedule_after(0.01, lambda: cancelled.append(1))
            handles["dropped"].cancel()

        worker = threading.Thread(target=schedule)
        worker.start()
        await loop.run_in_executor(None, worker.join)
        await asyncio.wait_for(fired.wait(), timeout=2.0)
        await asyncio.sleep(0.03)
        return cancelled

    assert asyncio.run(scenario()) == []


def test_without_loop_requires_running_loop():
    with pytest.raises(NoEventLoopError, match="running loop") as excinfo:
        AsyncioScheduler().schedule_after(0.01, lambda: None)
    assert isinstance(excinfo.value, RuntimeError)
    assert isinstance(excinfo.value, CadenceError)
