"""Tests for settings and data-file resolution."""

from datetime import timezone
from pathlib import Path

import pytest

from work_time_tracker.config import TrackerSettings
from work_time_tracker.paths import DATA_FILE_NAME, get_data_file_path


def test_data_file_in_given_home(tmp_path: Path) -> None:
    assert get_data_file_path(tmp_path) == tmp_path / ".work_time_tracker.json"


def test_default_settings_use_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path))
    settings = TrackerSettings.from_options()
    assert settings.data_file == tmp_path / DATA_FILE_NAME
    assert settings.timezone is None


def test_explicit_file_and_timezone(tmp_path: Path) -> None:
    settings = TrackerSettings.from_options(data_file=tmp_path / "sheet.json", timezone=timezone.utc)
    assert settings.data_file == tmp_path / "sheet.json"
    assert settings.timezone is timezone.utc
