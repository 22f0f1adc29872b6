"""Start/stop state machine for tracked periods."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Iterator, Optional

from .models import Active, Timesheet, as_utc

logger = logging.getLogger(__name__)

MSG_STARTED = "Started tracking time."
MSG_ALREADY_TRACKING = "Already tracking time."
MSG_STOPPED = "Stopped tracking time."
MSG_NOT_TRACKING = "No active time tracking period to stop."


@dataclass(frozen=True, slots=True)
class TrackingOutcome:
    """Result of a start or stop request.

    ``changed`` is False for the idempotent no-op cases, in which case
    ``timesheet`` is the very object that was passed in.
    """

    timesheet: Timesheet
    message: str
    changed: bool
    duration: Optional[timedelta] = None

    def __iter__(self) -> Iterator[object]:
        yield self.timesheet
        yield self.message


def start_tracking(timesheet: Timesheet, now: datetime) -> TrackingOutcome:
    if timesheet.is_tracking:
        return TrackingOutcome(timesheet, MSG_ALREADY_TRACKING, changed=False)
    started = timesheet.with_state(Active(as_utc(now)))
    return TrackingOutcome(started, MSG_STARTED, changed=True)


def stop_tracking(timesheet: Timesheet, now: datetime) -> TrackingOutcome:
    """Close the active period at ``now``.

    A ``now`` at or before the active start is recorded unchanged; the
    resulting zero or negative duration is left for the caller to judge.
    """
    start = timesheet.active_period_start
    if start is None:
        return TrackingOutcome(timesheet, MSG_NOT_TRACKING, changed=False)

    end = as_utc(now)
    duration = end - start
    if duration <= timedelta(0):
        logger.warning(
            "Stop time %s is not after start time %s.", end.isoformat(), start.isoformat()
        )
    stopped = timesheet.close_active(end)
    return TrackingOutcome(stopped, MSG_STOPPED, changed=True, duration=duration)
