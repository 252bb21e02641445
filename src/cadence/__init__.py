"""cadence package: app/core/infra/shared.

Debounce and throttle helpers. Expose the limiters, decorators and the
library-friendly client at the package level.
"""

from .app.api import AppConfig, CadenceClient
from .core import (
    CadenceError,
    Debouncer,
    DisposedError,
    NoEventLoopError,
    Outcome,
    SchedulerShutdownError,
    Throttler,
    ValidationError,
    debounced,
    throttled,
)
from .core.ports.clock_port import SystemClock
from .core.ports.scheduler_port import ThreadingScheduler
from .infra.asyncio_scheduler import AsyncioScheduler
from .infra.virtual_time import ManualClock, ManualScheduler

import logging

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

__all__ = [
    "AppConfig",
    "AsyncioScheduler",
    "CadenceClient",
    "CadenceError",
    "Debouncer",
    "DisposedError",
    "ManualClock",
    "ManualScheduler",
    "NoEventLoopError",
    "Outcome",
    "SchedulerShutdownError",
    "SystemClock",
    "ThreadingScheduler",
    "Throttler",
    "ValidationError",
    "debounced",
    "throttled",
]
