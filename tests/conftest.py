"""Shared pytest fixtures for work_time_tracker tests."""

from __future__ import annotations

import time
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterator

import pytest
from typer.testing import CliRunner

from work_time_tracker import cli as cli_module

NOW = datetime(2023, 10, 28, 12, 0, tzinfo=timezone.utc)


def utc(*args: int) -> datetime:
    """Build an aware UTC datetime from positional date/time parts."""
    return datetime(*args, tzinfo=timezone.utc)


@pytest.fixture
def cli_runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def data_file(tmp_path: Path) -> Path:
    """Timesheet location inside a temporary directory; not created."""
    return tmp_path / ".work_time_tracker.json"


@pytest.fixture
def clock(monkeypatch: pytest.MonkeyPatch) -> list[datetime]:
    """Pin the CLI clock; append to the list to advance it."""
    readings = [NOW]
    monkeypatch.setattr(cli_module, "utc_now", lambda: readings[-1])
    return readings


@pytest.fixture
def utc_local_time(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Make the system local timezone UTC for report boundaries."""
    if not hasattr(time, "tzset"):
        pytest.skip("time.tzset is not available on this platform")
    monkeypatch.setenv("TZ", "UTC")
    time.tzset()
    yield
    monkeypatch.undo()
    time.tzset()
