"""Domain models for tracked work periods."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timedelta, timezone
from typing import Optional, Union


def as_utc(value: datetime) -> datetime:
    """Normalise an aware timestamp to UTC; naive values are rejected."""
    if value.tzinfo is None or value.utcoffset() is None:
        raise ValueError(f"Timestamp {value.isoformat()} has no timezone.")
    return value.astimezone(timezone.utc)


@dataclass(frozen=True, slots=True)
class Period:
    """A completed interval of tracked work."""

    start: datetime
    end: datetime

    @property
    def duration(self) -> timedelta:
        return self.end - self.start

    def overlap(self, other: Period) -> timedelta:
        """Return how much of this period falls inside ``other``."""
        overlap_start = max(self.start, other.start)
        overlap_end = min(self.end, other.end)
        if overlap_start < overlap_end:
            return overlap_end - overlap_start
        return timedelta(0)


@dataclass(frozen=True, slots=True)
class Active:
    started_at: datetime


@dataclass(frozen=True, slots=True)
class Inactive:
    pass


TrackingState = Union[Active, Inactive]


@dataclass(frozen=True, slots=True)
class Timesheet:
    """Completed periods plus the current tracking state."""

    periods: tuple[Period, ...] = ()
    state: TrackingState = field(default_factory=Inactive)

    @property
    def is_tracking(self) -> bool:
        return isinstance(self.state, Active)

    @property
    def active_period_start(self) -> Optional[datetime]:
        if isinstance(self.state, Active):
            return self.state.started_at
        return None

    def with_state(self, state: TrackingState) -> Timesheet:
        return replace(self, state=state)

    def close_active(self, end: datetime) -> Timesheet:
        """Append the active session as a period ending at ``end``."""
        if not isinstance(self.state, Active):
            raise ValueError("No active period to close.")
        period = Period(start=self.state.started_at, end=end)
        return Timesheet(periods=self.periods + (period,), state=Inactive())
