"""
Time-window and dimension filter.

Applied once per dashboard recomputation; every rollup runs off its result.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime

from ._time import ensure_utc, window_cutoff
from .models import FilterState, VisitRecord


def filter_visits(
    records: Iterable[VisitRecord],
    window_days: int,
    now: datetime,
    country: str | None = None,
) -> list[VisitRecord]:
    """
    Keep records inside the window and, if given, in the exact country.

    Country matching is case-sensitive equality. Raises InvalidWindowError
    for a non-positive window.
    """
    cutoff = window_cutoff(now, window_days)
    result = [r for r in records if ensure_utc(r.timestamp) >= cutoff]

    if country:
        result = [r for r in result if r.country == country]

    return result


def apply_filter(
    records: Iterable[VisitRecord],
    state: FilterState,
    now: datetime,
) -> list[VisitRecord]:
    """Apply a FilterState."""
    return filter_visits(records, state.window_days, now, country=state.country)


def country_options(records: Iterable[VisitRecord]) -> list[str]:
    """Sorted distinct country names, for the filter dropdown."""
    return sorted({r.country for r in records if r.country})
