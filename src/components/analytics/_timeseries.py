"""
Gap-filled daily traffic series.

The series always has exactly window_days points, oldest first, ending
with today in the display timezone. Days with no traffic are zero points.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import UTC, date, datetime, tzinfo

from ._identity import MOBILE_MAX_WIDTH, is_mobile
from ._time import date_label, local_date, window_dates
from .models import DailyPoint, VisitRecord


def bucket_daily(
    records: Iterable[VisitRecord],
    window_days: int,
    now: datetime,
    tz: tzinfo = UTC,
    mobile_max_width: int = MOBILE_MAX_WIDTH,
) -> list[DailyPoint]:
    """
    Count visits per calendar day, split desktop/mobile.

    Records dated outside the window are dropped. Raises
    InvalidWindowError for a non-positive window.
    """
    days = window_dates(now, window_days, tz)
    desktop: dict[date, int] = dict.fromkeys(days, 0)
    mobile: dict[date, int] = dict.fromkeys(days, 0)

    for record in records:
        day = local_date(record.timestamp, tz)
        if day not in desktop:
            continue
        if is_mobile(record, mobile_max_width):
            mobile[day] += 1
        else:
            desktop[day] += 1

    return [
        DailyPoint(
            date=day,
            date_label=date_label(day),
            desktop_count=desktop[day],
            mobile_count=mobile[day],
            total_count=desktop[day] + mobile[day],
        )
        for day in days
    ]
