"""Function decorators built on Debouncer and Throttler.

Each decorated function owns one limiter, shared by every call site (and by
every instance when decorating a method). The deferred call carries the
arguments of the most recent call.

    @debounced(0.3)
    def search(text: str) -> None: ...

    @throttled(1.0, execute_trailing=False)
    async def refresh() -> None: ...
"""

from __future__ import annotations

import functools
import inspect
from typing import Any, Callable

from .debouncer import Debouncer
from .ports.clock_port import ClockPort
from .ports.scheduler_port import SchedulerPort
from .throttler import Throttler
from ..shared.guards import Interval, require_callable


def _attach(wrapper: Any, limiter: Debouncer | Throttler) -> Any:
    wrapper.limiter = limiter
    wrapper.cancel = limiter.cancel
    wrapper.dispose = limiter.dispose
    return wrapper


def debounced(
    delay: Interval,
    *,
    clock: ClockPort | None = None,
    scheduler: SchedulerPort | None = None,
) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Debounce a function. Sync functions return None; coroutine functions resolve to an Outcome."""

    def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        require_callable(func, "func")
        limiter = Debouncer(delay, clock=clock, scheduler=scheduler)

        if inspect.iscoroutinefunction(func):
            @functools.wraps(func)
            async def async_wrapper(*args: Any, **kwargs: Any):
                return await limiter.debounce_async(functools.partial(func, *args, **kwargs))

            return _attach(async_wrapper, limiter)

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> None:
            limiter.debounce(functools.partial(func, *args, **kwargs))

        return _attach(wrapper, limiter)

    return decorator


def throttled(
    interval: Interval,
    *,
    execute_trailing: bool = True,
    clock: ClockPort | None = None,
    scheduler: SchedulerPort | None = None,
) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Throttle a function. Sync wrappers return True when the call ran immediately."""

    def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        require_callable(func, "func")
        limiter = Throttler(interval, clock=clock, scheduler=scheduler)

        if inspect.iscoroutinefunction(func):
            @functools.wraps(func)
            async def async_wrapper(*args: Any, **kwargs: Any):
                return await limiter.throttle_async(functools.partial(func, *args, **kwargs), execute_trailing)

            async_wrapper.reset = limiter.reset
            return _attach(async_wrapper, limiter)

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> bool:
            return limiter.throttle(functools.partial(func, *args, **kwargs), execute_trailing)

        wrapper.reset = limiter.reset
        return _attach(wrapper, limiter)

    return decorator
