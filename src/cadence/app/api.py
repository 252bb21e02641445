from __future__ import annotations

import logging
from datetime import timedelta
from threading import Lock
from typing import Literal

from .container import Container
from ..config.settings import AppConfig
from ..core.debouncer import Debouncer
from ..core.limiter import LimiterBase
from ..core.throttler import Throttler

logger = logging.getLogger(__name__)


class CadenceClient:
    """Factory for debouncers and throttlers that share one scheduler.

    The container and its scheduler are initialized once and reused for every
    limiter the client creates. Closing the client disposes those limiters and
    shuts the scheduler down, so no deferred action runs afterwards.

    Example:
        # Using default configuration (from environment variables)
        with CadenceClient() as client:
            search = client.debouncer()
            search.debounce(lambda: run_query(text))

        # Customize defaults
        with CadenceClient(throttle_interval_seconds=0.25) as client:
            scroll = client.throttler()
            scroll.throttle(redraw)

        # Per-limiter override
        with CadenceClient() as client:
            slow = client.throttler(interval=timedelta(seconds=5))
    """

    def __init__(
        self,
        *,
        debounce_delay_seconds: float | None = None,
        throttle_interval_seconds: float | None = None,
        throttle_execute_trailing: bool | None = None,
        scheduler: Literal["thread", "asyncio"] | None = None,
    ):
        """Initialize the client.

        Args:
            debounce_delay_seconds: Default debounce delay.
                                    If None, uses CADENCE_DEBOUNCE_DELAY_SECONDS or default (0.3).
            throttle_interval_seconds: Default throttle interval.
                                       If None, uses CADENCE_THROTTLE_INTERVAL_SECONDS or default (1.0).
            throttle_execute_trailing: Default for execute_trailing in throttle().
                                       If None, uses CADENCE_THROTTLE_EXECUTE_TRAILING or default (True).
            scheduler: "thread" or "asyncio". If None, uses CADENCE_SCHEDULER or default ("thread").
                       "asyncio" limiters arm their timers on the running loop, so
                       trailing or deferred calls made outside one raise NoEventLoopError.

        Raises:
            pydantic.ValidationError: If an override is out of range (e.g. a non-positive interval).
        """
        self._container = Container()

        # Build config dict with only provided values
        config_dict = {}
        if debounce_delay_seconds is not None:
            config_dict["debounce_delay_seconds"] = debounce_delay_seconds
        if throttle_interval_seconds is not None:
            config_dict["throttle_interval_seconds"] = throttle_interval_seconds
        if throttle_execute_trailing is not None:
            config_dict["throttle_execute_trailing"] = throttle_execute_trailing
        if scheduler is not None:
            config_dict["scheduler"] = scheduler

        # Environment values still apply to the fields not overridden here
        self._config = AppConfig(**config_dict)
        self._container.config.from_pydantic(self._config)

        self._container.init_resources()
        self._lock = Lock()
        self._limiters: list[LimiterBase] = []
        self._closed = False

    @property
    def config(self) -> AppConfig:
        return self._config

    def debouncer(self, delay: float | timedelta | None = None) -> Debouncer:
        """Create a Debouncer; delay defaults to the configured debounce delay."""
        kwargs = {} if delay is None else {"delay": delay}
        return self._create(self._container.debouncer, **kwargs)

    def throttler(self, interval: float | timedelta | None = None) -> Throttler:
        """Create a Throttler; interval defaults to the configured throttle interval."""
        kwargs = {} if interval is None else {"interval": interval}
        return self._create(self._container.throttler, **kwargs)

    def throttle(self, throttler: Throttler, action, execute_trailing: bool | None = None) -> bool:
        """Throttle action on throttler, applying the configured trailing default."""
        if execute_trailing is None:
            execute_trailing = self._config.throttle_execute_trailing
        return throttler.throttle(action, execute_trailing)

    def close(self) -> None:
        """Dispose every limiter created by this client and release the scheduler."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            limiters, self._limiters = self._limiters, []
        for limiter in limiters:
            limiter.dispose()
        logger.debug(f"Disposed {len(limiters)} limiter(s)")
        self._container.shutdown_resources()

    def __enter__(self) -> "CadenceClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def _create(self, provider, **kwargs):
        with self._lock:
            if self._closed:
                raise RuntimeError("CadenceClient is closed")
            limiter = provider(**kwargs)
            self._limiters.append(limiter)
        return limiter
