"""Helpers for locating the timesheet file."""

from __future__ import annotations

from pathlib import Path

from .errors import StorageError


DATA_FILE_NAME = ".work_time_tracker.json"


def get_home_dir() -> Path:
    """Return the user's home directory as resolved by the OS."""
    try:
        return Path.home()
    except (KeyError, RuntimeError) as exc:
        raise StorageError("Could not find home directory.") from exc


def get_data_file_path(home: Path | None = None) -> Path:
    return (home or get_home_dir()) / DATA_FILE_NAME
