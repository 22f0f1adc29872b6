"""Errors reported to the user by the work time tracker."""

from __future__ import annotations


class TrackerError(Exception):
    """Base class for errors reported to the user."""


class StorageError(TrackerError):
    """The timesheet file could not be read or written."""


class CorruptDataError(TrackerError):
    """The timesheet file exists but does not match the expected schema."""
