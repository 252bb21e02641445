"""tests/conftest.py

Common fixtures for the entire test suite.
"""

import os

import pytest
from typer.testing import CliRunner

from cadence.infra.virtual_time import ManualClock, ManualScheduler


@pytest.fixture(scope="session")
def runner() -> CliRunner:
    """Provides a Typer CliRunner instance."""
    return CliRunner()


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep CADENCE_* variables from the developer's shell out of every test."""
    for key in list(os.environ):
        if key.upper().startswith("CADENCE_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def scheduler() -> ManualScheduler:
    """Virtual-time scheduler starting at t=0; advance() fires due callbacks."""
    return ManualScheduler(ManualClock())


@pytest.fixture
def clock(scheduler: ManualScheduler) -> ManualClock:
    return scheduler.clock


class LeakyScheduler:
    """Scheduler whose handles ignore cancel(), to exercise stale-callback handling."""

    def __init__(self) -> None:
        self.callbacks = []

    def schedule_after(self, delay, callback):
        self.callbacks.append((delay, callback))
        return self

    def cancel(self) -> None:
        pass


@pytest.fixture
def leaky_scheduler() -> LeakyScheduler:
    return LeakyScheduler()
