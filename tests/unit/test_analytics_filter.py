"""
Tests for the time-window and country filter.
"""

from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from src.components.analytics import (
    FilterState,
    InvalidWindowError,
    VisitRecord,
    apply_filter,
    country_options,
    filter_visits,
    validate_window,
)


class TestWindow:
    """Window boundary and validation."""

    def test_keeps_records_inside_window(self, make_visit, now: datetime) -> None:
        records = [make_visit(days_ago=1), make_visit(days_ago=6.9), make_visit(days_ago=8)]
        assert len(filter_visits(records, 7, now)) == 2

    def test_boundary_is_inclusive(self, make_visit, now: datetime) -> None:
        records = [make_visit(days_ago=7)]
        assert filter_visits(records, 7, now) == records

    def test_naive_timestamps_are_utc(self, make_visit, now: datetime) -> None:
        naive = make_visit(days_ago=1).timestamp.replace(tzinfo=None)
        record = VisitRecord(timestamp=naive, path="/")
        assert filter_visits([record], 7, now) == [record]

    def test_engine_accepts_any_positive_window(self, make_visit, now: datetime) -> None:
        records = [make_visit(days_ago=2), make_visit(days_ago=4)]
        assert len(filter_visits(records, 3, now)) == 1

    @pytest.mark.parametrize("days", [0, -1, True, 1.5])
    def test_invalid_window_raises(self, now: datetime, days: object) -> None:
        with pytest.raises(InvalidWindowError):
            filter_visits([], days, now)  # type: ignore[arg-type]

    def test_invalid_window_is_value_error(self) -> None:
        with pytest.raises(ValueError, match="positive integer"):
            validate_window(0)

    def test_input_not_mutated(self, make_visit, now: datetime) -> None:
        records = [make_visit(days_ago=10), make_visit()]
        snapshot = list(records)
        result = filter_visits(records, 7, now)
        assert records == snapshot
        assert result is not records


class TestCountryFilter:
    """Exact, case-sensitive country match."""

    def test_exact_match(self, make_visit, now: datetime) -> None:
        records = [
            make_visit(country="France"),
            make_visit(country="france"),
            make_visit(country="Spain"),
            make_visit(),
        ]
        result = filter_visits(records, 7, now, country="France")
        assert [r.country for r in result] == ["France"]

    def test_filter_state(self, make_visit, now: datetime) -> None:
        records = [make_visit(country="Spain", days_ago=1), make_visit(country="Spain", days_ago=20)]
        result = apply_filter(records, FilterState(window_days=14, country="Spain"), now)
        assert len(result) == 1

    def test_country_options_sorted_distinct(self, make_visit) -> None:
        records = [
            make_visit(country="Spain"),
            make_visit(country="France"),
            make_visit(country="Spain"),
            make_visit(),
        ]
        assert country_options(records) == ["France", "Spain"]


def test_window_cutoff_uses_24h_days(make_visit, now: datetime) -> None:
    """A record 1 minute older than the window is out."""
    record = make_visit(days_ago=7)
    older = VisitRecord(timestamp=record.timestamp - timedelta(minutes=1), path="/")
    assert filter_visits([record, older], 7, now) == [record]
