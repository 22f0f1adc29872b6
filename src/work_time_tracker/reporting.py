"""Aggregate tracked time over calendar windows."""

from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone, tzinfo
from enum import Enum
from typing import Callable, Optional

from .models import Period, Timesheet, as_utc


class ReportingPeriod(str, Enum):
    TODAY = "today"
    WEEK = "week"
    MONTH = "month"

    @property
    def phrase(self) -> str:
        return "today" if self is ReportingPeriod.TODAY else f"this {self.value}"


def _local_date(now: datetime, tz: Optional[tzinfo]) -> date:
    return as_utc(now).astimezone(tz).date()


def _local_midnight(day: date, tz: Optional[tzinfo]) -> datetime:
    naive = datetime.combine(day, time())
    if tz is None:
        # Naive datetimes are interpreted in the system local timezone.
        return naive.astimezone(timezone.utc)
    return naive.replace(tzinfo=tz).astimezone(timezone.utc)


def _window(first_day: date, next_first_day: date, tz: Optional[tzinfo]) -> Period:
    return Period(
        start=_local_midnight(first_day, tz),
        end=_local_midnight(next_first_day, tz),
    )


def day_window(now: datetime, tz: Optional[tzinfo] = None) -> Period:
    today = _local_date(now, tz)
    return _window(today, today + timedelta(days=1), tz)


def week_window(now: datetime, tz: Optional[tzinfo] = None) -> Period:
    """Monday 00:00 through the following Monday 00:00."""
    today = _local_date(now, tz)
    monday = today - timedelta(days=today.weekday())
    return _window(monday, monday + timedelta(weeks=1), tz)


def month_window(now: datetime, tz: Optional[tzinfo] = None) -> Period:
    first = _local_date(now, tz).replace(day=1)
    if first.month == 12:
        next_first = first.replace(year=first.year + 1, month=1)
    else:
        next_first = first.replace(month=first.month + 1)
    return _window(first, next_first, tz)


WINDOW_BUILDERS: dict[ReportingPeriod, Callable[[datetime, Optional[tzinfo]], Period]] = {
    ReportingPeriod.TODAY: day_window,
    ReportingPeriod.WEEK: week_window,
    ReportingPeriod.MONTH: month_window,
}


def tracked_time(timesheet: Timesheet, window: Period, now: datetime) -> timedelta:
    """Sum the parts of all periods, and the running session, inside ``window``."""
    total = sum(
        (period.overlap(window) for period in timesheet.periods), timedelta(0)
    )
    start = timesheet.active_period_start
    if start is not None:
        total += Period(start=start, end=as_utc(now)).overlap(window)
    return total


def report(
    timesheet: Timesheet,
    period: ReportingPeriod,
    now: datetime,
    tz: Optional[tzinfo] = None,
) -> timedelta:
    window = WINDOW_BUILDERS[period](now, tz)
    return tracked_time(timesheet, window, now)


def report_day(timesheet: Timesheet, now: datetime, tz: Optional[tzinfo] = None) -> timedelta:
    return report(timesheet, ReportingPeriod.TODAY, now, tz)


def report_week(timesheet: Timesheet, now: datetime, tz: Optional[tzinfo] = None) -> timedelta:
    return report(timesheet, ReportingPeriod.WEEK, now, tz)


def report_month(timesheet: Timesheet, now: datetime, tz: Optional[tzinfo] = None) -> timedelta:
    return report(timesheet, ReportingPeriod.MONTH, now, tz)


def format_duration(duration: timedelta) -> str:
    if duration < timedelta(0):
        return "00:00:00"
    hours, remainder = divmod(int(duration.total_seconds()), 3600)
    minutes, secs = divmod(remainder, 60)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"


def format_report(period: ReportingPeriod, total: timedelta) -> str:
    return f"Total time tracked {period.phrase}: {format_duration(total)}"
