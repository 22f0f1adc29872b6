"""Configuration models and helpers for the work time tracker."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import tzinfo
from pathlib import Path
from typing import Optional

from .paths import get_data_file_path


@dataclass(slots=True)
class TrackerSettings:
    """Runtime configuration passed to storage and reporting calls."""

    data_file: Path = field(default_factory=get_data_file_path)
    # None means the system local timezone.
    timezone: Optional[tzinfo] = None

    @classmethod
    def from_options(
        cls,
        data_file: Path | None = None,
        timezone: tzinfo | None = None,
    ) -> "TrackerSettings":
        resolved = Path(data_file).expanduser() if data_file is not None else get_data_file_path()
        return cls(data_file=resolved, timezone=timezone)
