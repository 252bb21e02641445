from __future__ import annotations

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppConfig(BaseSettings):
    """Default timings used by the container and CadenceClient.

    All settings can be overridden via environment variables with the CADENCE_ prefix.
    For example:
        - CADENCE_DEBOUNCE_DELAY_SECONDS=0.5
        - CADENCE_THROTTLE_INTERVAL_SECONDS=2
        - CADENCE_THROTTLE_EXECUTE_TRAILING=false
        - CADENCE_SCHEDULER=asyncio

    Alternatively, settings can be provided programmatically:
        client = CadenceClient(throttle_interval_seconds=0.25)
    """

    model_config = SettingsConfigDict(
        env_prefix="CADENCE_",
        case_sensitive=False,
        extra="forbid",
    )

    debounce_delay_seconds: float = Field(
        default=0.3,
        gt=0,
        description="Quiet period a Debouncer waits after the last call before running it",
    )

    throttle_interval_seconds: float = Field(
        default=1.0,
        gt=0,
        description="Minimum spacing between two Throttler executions",
    )

    throttle_execute_trailing: bool = Field(
        default=True,
        description="Whether calls inside a closed throttle window run once when the window ends",
    )

    scheduler: Literal["thread", "asyncio"] = Field(
        default="thread",
        description="Where deferred actions run: daemon timer threads, or the running asyncio loop",
    )
