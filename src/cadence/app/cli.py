"""Command-line interface powered by Typer.

Usage examples
--------------
$ cadence throttle 0 300 500 --interval 1000       # which calls run, and when
$ cadence throttle 0 300 500 --no-trailing
$ cadence debounce 0 100 200 900 --delay 250
$ cadence settings                                 # effective configuration as JSON
"""

from __future__ import annotations

from enum import Enum
from typing import Optional, Sequence

import typer
from typing_extensions import Annotated

from .timeline import Execution, replay_debounce, replay_throttle
from ..config.settings import AppConfig
from ..core.errors import ValidationError
from ..shared.logging_setup import configure_package_logger, resolve_level


app = typer.Typer(add_completion=False, help="Cadence: replay call timelines through a debouncer or throttler")


class LogLevel(str, Enum):
    OFF = "OFF"  # logging stays unconfigured
    CRITICAL = "CRITICAL"
    ERROR = "ERROR"
    WARNING = "WARNING"
    INFO = "INFO"
    DEBUG = "DEBUG"
    NOTSET = "NOTSET"


@app.callback()
def main(
    log_level: Annotated[
        Optional[LogLevel],
        typer.Option(
            "--log-level",
            help="Set log level (OFF, CRITICAL, ERROR, WARNING, INFO, DEBUG, NOTSET). Default: OFF",
        ),
    ] = None,
) -> None:
    """Root command callback to configure logging if requested."""
    level = resolve_level(log_level.value if log_level is not None else None)
    if level is not None:
        configure_package_logger(level)


def _print_executions(executions: Sequence[Execution], total_calls: int) -> None:
    for e in executions:
        typer.echo(f"t={e.at_ms}ms run call#{e.call} (called at t={e.called_at_ms}ms)")
    typer.echo(f"{len(executions)} execution(s) for {total_calls} call(s)")


@app.command(help="Replay call times (ms) through a throttler on a virtual clock.")
def throttle(
    times: list[int] = typer.Argument(..., help="Call times in milliseconds, non-decreasing", metavar="MS"),
    interval: Optional[int] = typer.Option(None, "--interval", "-i", help="Throttle interval in ms (default: from settings)"),
    trailing: Optional[bool] = typer.Option(
        None, "--trailing/--no-trailing", help="Run the last suppressed call when the window ends (default: from settings)"
    ),
) -> None:
    config = AppConfig()
    interval_ms = interval if interval is not None else round(config.throttle_interval_seconds * 1000)
    execute_trailing = trailing if trailing is not None else config.throttle_execute_trailing
    try:
        executions = replay_throttle(times, interval_ms, execute_trailing=execute_trailing)
    except ValidationError as e:
        typer.echo(f"Invalid input: {e}", err=True)
        raise typer.Exit(code=1)
    _print_executions(executions, len(times))


@app.command(help="Replay call times (ms) through a debouncer on a virtual clock.")
def debounce(
    times: list[int] = typer.Argument(..., help="Call times in milliseconds, non-decreasing", metavar="MS"),
    delay: Optional[int] = typer.Option(None, "--delay", "-d", help="Debounce delay in ms (default: from settings)"),
) -> None:
    config = AppConfig()
    delay_ms = delay if delay is not None else round(config.debounce_delay_seconds * 1000)
    try:
        executions = replay_debounce(times, delay_ms)
    except ValidationError as e:
        typer.echo(f"Invalid input: {e}", err=True)
        raise typer.Exit(code=1)
    _print_executions(executions, len(times))


@app.command(help="Print the effective configuration (defaults + CADENCE_* environment) as JSON.")
def settings() -> None:
    typer.echo(AppConfig().model_dump_json(indent=2))


if __name__ == "__main__":
    app()
