from __future__ import annotations

import logging

from dependency_injector import containers, providers

from ..config.settings import AppConfig
from ..core.debouncer import Debouncer
from ..core.ports.clock_port import SystemClock
from ..core.ports.scheduler_port import ThreadingScheduler
from ..core.throttler import Throttler
from ..infra.asyncio_scheduler import AsyncioScheduler

logger = logging.getLogger(__name__)


def scheduler_resource(backend):
	"""Create the shared scheduler; thread timers still outstanding at shutdown are cancelled."""
	logger.info(f"Initializing {backend} scheduler")
	if backend == "asyncio":
		yield AsyncioScheduler()
		logger.debug("Asyncio scheduler released")
		return

	scheduler = ThreadingScheduler()
	try:
		yield scheduler
	finally:
		logger.debug("Shutting down thread scheduler")
		scheduler.shutdown()


class Container(containers.DeclarativeContainer):
	config = providers.Configuration(pydantic_settings=[AppConfig()])

	clock = providers.Singleton(SystemClock)

	scheduler = providers.Resource(
		scheduler_resource,
		backend=config.scheduler,
	)

	debouncer = providers.Factory(
		Debouncer,
		delay=config.debounce_delay_seconds,
		clock=clock,
		scheduler=scheduler,
	)

	throttler = providers.Factory(
		Throttler,
		interval=config.throttle_interval_seconds,
		clock=clock,
		scheduler=scheduler,
	)
