"""Command-line interface for the work time tracker."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import NoReturn, Optional

import typer

from .config import TrackerSettings
from .engine import start_tracking, stop_tracking
from .errors import TrackerError
from .models import Timesheet
from .reporting import ReportingPeriod, format_duration, format_report, report
from .storage import load_timesheet, save_timesheet

logger = logging.getLogger(__name__)

app = typer.Typer(help="Track work time from the command line.")


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@app.callback(no_args_is_help=True)
def main(
    ctx: typer.Context,
    data_file: Optional[Path] = typer.Option(
        None,
        "--file",
        path_type=Path,
        help="Location of the timesheet JSON file (defaults to ~/.work_time_tracker.json).",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logs."),
    use_utc: bool = typer.Option(
        False,
        "--utc",
        help="Use UTC calendar days for reports instead of the local timezone.",
    ),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    try:
        ctx.obj = TrackerSettings.from_options(
            data_file=data_file, timezone=timezone.utc if use_utc else None
        )
    except TrackerError as exc:
        _fail(str(exc))


def _fail(message: str) -> NoReturn:
    typer.echo(f"Error: {message}", err=True)
    raise typer.Exit(code=1)


def _load(settings: TrackerSettings) -> Timesheet:
    try:
        return load_timesheet(settings.data_file)
    except TrackerError as exc:
        _fail(str(exc))


def _save(settings: TrackerSettings, timesheet: Timesheet) -> None:
    try:
        save_timesheet(settings.data_file, timesheet)
    except TrackerError as exc:
        _fail(str(exc))
    typer.echo("State saved.")


@app.command()
def start(ctx: typer.Context) -> None:
    """Start tracking a new time period."""
    settings: TrackerSettings = ctx.obj
    outcome = start_tracking(_load(settings), utc_now())
    typer.echo(outcome.message)
    if outcome.changed:
        _save(settings, outcome.timesheet)


@app.command()
def stop(ctx: typer.Context) -> None:
    """Stop the currently tracked time period."""
    settings: TrackerSettings = ctx.obj
    timesheet = _load(settings)
    outcome = stop_tracking(timesheet, utc_now())
    if not outcome.changed:
        typer.echo(outcome.message)
        return

    if outcome.duration is not None and outcome.duration <= timedelta(0):
        stopped_at = outcome.timesheet.periods[-1].end
        _fail(
            f"clock skew: the current time {stopped_at.isoformat()} is not after the "
            f"active period start {timesheet.active_period_start.isoformat()}. "
            "The session was not stopped and the timesheet was not changed; "
            "check the system clock and run stop again."
        )

    typer.echo(outcome.message)
    typer.echo(f"Duration of last session: {format_duration(outcome.duration)}")
    _save(settings, outcome.timesheet)


def _print_report(settings: TrackerSettings, period: ReportingPeriod) -> None:
    timesheet = _load(settings)
    total = report(timesheet, period, utc_now(), settings.timezone)
    logger.debug("Reported %s for %s.", total, period.value)
    typer.echo(format_report(period, total))


@app.command()
def today(ctx: typer.Context) -> None:
    """Show tracked time for today."""
    _print_report(ctx.obj, ReportingPeriod.TODAY)


@app.command()
def week(ctx: typer.Context) -> None:
    """Show tracked time for this week."""
    _print_report(ctx.obj, ReportingPeriod.WEEK)


@app.command()
def month(ctx: typer.Context) -> None:
    """Show tracked time for this month."""
    _print_report(ctx.obj, ReportingPeriod.MONTH)
