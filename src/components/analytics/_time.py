"""
Calendar helpers shared by the filter and the daily series.

All timestamps are normalized to UTC before comparison; calendar days are
taken in the display timezone.
"""

from __future__ import annotations

from datetime import UTC, date, datetime, timedelta, tzinfo


class InvalidWindowError(ValueError):
    """Raised when a caller passes a non-positive day window."""

    def __init__(self, window_days: object) -> None:
        self.window_days = window_days
        super().__init__(f"window_days must be a positive integer, got {window_days!r}")


def validate_window(window_days: int) -> int:
    """Return window_days unchanged, or raise InvalidWindowError."""
    if isinstance(window_days, bool) or not isinstance(window_days, int) or window_days <= 0:
        raise InvalidWindowError(window_days)
    return window_days


def ensure_utc(timestamp: datetime) -> datetime:
    """Naive datetimes are taken as UTC."""
    if timestamp.tzinfo is None:
        return timestamp.replace(tzinfo=UTC)
    return timestamp.astimezone(UTC)


def window_cutoff(now: datetime, window_days: int) -> datetime:
    """Earliest instant inside a window of window_days * 24h ending at now."""
    return ensure_utc(now) - timedelta(days=validate_window(window_days))


def local_date(timestamp: datetime, tz: tzinfo = UTC) -> date:
    """Calendar day of an instant in the display timezone."""
    return ensure_utc(timestamp).astimezone(tz).date()


def date_label(day: date) -> str:
    """Short chart label, e.g. 'Oct 18'."""
    return f"{day:%b} {day.day}"


def window_dates(now: datetime, window_days: int, tz: tzinfo = UTC) -> list[date]:
    """Calendar days of the window, oldest first, ending with today."""
    validate_window(window_days)
    today = local_date(now, tz)
    return [today - timedelta(days=i) for i in range(window_days - 1, -1, -1)]
