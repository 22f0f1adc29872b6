"""JSON file storage for the timesheet."""

from __future__ import annotations

import logging
import os
import re
import tempfile
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

from pydantic import (
    AwareDatetime,
    BaseModel,
    ConfigDict,
    ValidationError,
    field_serializer,
    field_validator,
    model_validator,
)

from .errors import CorruptDataError, StorageError
from .models import Active, Inactive, Period, Timesheet

logger = logging.getLogger(__name__)

_RFC3339_PATTERN = re.compile(
    r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(\.\d+)?(Z|[+-]\d{2}:\d{2})"
)
# RFC 3339 allows nanoseconds; datetime only keeps microseconds.
_EXCESS_FRACTION_PATTERN = re.compile(r"(\.\d{6})\d+")


def format_timestamp(value: datetime) -> str:
    return value.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


def _check_timestamp(value: Any) -> Any:
    if value is None:
        return value
    if not isinstance(value, str) or not _RFC3339_PATTERN.fullmatch(value):
        raise ValueError(f"expected an RFC 3339 timestamp string, got {value!r}")
    return _EXCESS_FRACTION_PATTERN.sub(r"\1", value, count=1)


class PeriodRecord(BaseModel):
    start: AwareDatetime
    end: AwareDatetime

    model_config = ConfigDict(extra="forbid")

    @field_validator("start", "end", mode="before")
    @classmethod
    def _check_timestamp_format(cls, value: Any) -> Any:
        return _check_timestamp(value)

    @model_validator(mode="after")
    def _check_order(self) -> "PeriodRecord":
        if self.end <= self.start:
            raise ValueError(
                f"period end {format_timestamp(self.end)} is not after "
                f"start {format_timestamp(self.start)}"
            )
        return self

    @field_serializer("start", "end")
    def _serialize_timestamp(self, value: datetime) -> str:
        return format_timestamp(value)


class TimesheetRecord(BaseModel):
    """On-disk shape of the timesheet."""

    periods: list[PeriodRecord] = []
    active_period_start: Optional[AwareDatetime] = None

    model_config = ConfigDict(extra="forbid")

    @field_validator("active_period_start", mode="before")
    @classmethod
    def _check_timestamp_format(cls, value: Any) -> Any:
        return _check_timestamp(value)

    @field_serializer("active_period_start")
    def _serialize_timestamp(self, value: Optional[datetime]) -> Optional[str]:
        return format_timestamp(value) if value is not None else None

    @classmethod
    def from_timesheet(cls, timesheet: Timesheet) -> "TimesheetRecord":
        return cls.model_construct(
            periods=[
                PeriodRecord.model_construct(start=period.start, end=period.end)
                for period in timesheet.periods
            ],
            active_period_start=timesheet.active_period_start,
        )

    def to_timesheet(self) -> Timesheet:
        periods = tuple(
            Period(
                start=record.start.astimezone(timezone.utc),
                end=record.end.astimezone(timezone.utc),
            )
            for record in self.periods
        )
        if self.active_period_start is None:
            return Timesheet(periods=periods, state=Inactive())
        return Timesheet(
            periods=periods,
            state=Active(self.active_period_start.astimezone(timezone.utc)),
        )


def load_timesheet(path: Path) -> Timesheet:
    """Read the timesheet, returning an empty one when the file is missing or blank."""
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        logger.debug("No timesheet at %s; starting empty.", path)
        return Timesheet()
    except UnicodeDecodeError as exc:
        raise CorruptDataError(f"{path}: file is not valid UTF-8 ({exc})") from exc
    except OSError as exc:
        raise StorageError(f"Could not read {path}: {exc}") from exc

    if not text.strip():
        logger.debug("Timesheet at %s is empty; starting empty.", path)
        return Timesheet()

    try:
        record = TimesheetRecord.model_validate_json(text)
    except ValidationError as exc:
        raise CorruptDataError(f"{path}: {_describe_errors(exc)}") from exc

    timesheet = record.to_timesheet()
    logger.debug(
        "Loaded %d periods from %s (tracking=%s).",
        len(timesheet.periods),
        path,
        timesheet.is_tracking,
    )
    return timesheet


def save_timesheet(path: Path, timesheet: Timesheet) -> None:
    """Overwrite the timesheet file atomically."""
    path = Path(path)
    payload = TimesheetRecord.from_timesheet(timesheet).model_dump_json(indent=2)
    tmp_name: Optional[str] = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            mode="w",
            encoding="utf-8",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
        ) as tmp:
            tmp_name = tmp.name
            tmp.write(payload)
            tmp.write("\n")
            tmp.flush()
            os.fsync(tmp.fileno())
        os.replace(tmp_name, path)
    except OSError as exc:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.remove(tmp_name)
        raise StorageError(f"Could not write {path}: {exc}") from exc
    logger.debug("Saved %d periods to %s.", len(timesheet.periods), path)


def _describe_errors(exc: ValidationError) -> str:
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"]) or "<root>"
        messages.append(f"{location}: {error['msg']}")
    return "; ".join(messages)
