"""
Headline metrics over a filtered visit collection.

Bounce semantics use the network address as the visitor proxy with no
session boundary: an address seen on several days in the window is one
visitor with several records. Known limitation, kept as is.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Sequence

from ._identity import identity_of
from .models import MetricsSummary, VisitRecord

EMPTY_SUMMARY = MetricsSummary(
    total_visits=0,
    unique_visitors=0,
    avg_records_per_visitor=0.0,
    bounce_rate_percent=0.0,
)


def summarize(records: Sequence[VisitRecord]) -> MetricsSummary:
    """
    Compute totals, unique visitors, records per visitor and bounce rate.

    Records without identity count toward total_visits only.
    """
    total_visits = len(records)
    per_identity = Counter(ident for ident in map(identity_of, records) if ident is not None)
    unique_visitors = len(per_identity)

    if unique_visitors == 0:
        return MetricsSummary(
            total_visits=total_visits,
            unique_visitors=0,
            avg_records_per_visitor=0.0,
            bounce_rate_percent=0.0,
        )

    single_page = sum(1 for count in per_identity.values() if count == 1)

    return MetricsSummary(
        total_visits=total_visits,
        unique_visitors=unique_visitors,
        avg_records_per_visitor=total_visits / unique_visitors,
        bounce_rate_percent=single_page / unique_visitors * 100,
    )


def round_summary(summary: MetricsSummary) -> MetricsSummary:
    """Display rounding: 2 decimals for the average, 1 for bounce rate."""
    return MetricsSummary(
        total_visits=summary.total_visits,
        unique_visitors=summary.unique_visitors,
        avg_records_per_visitor=round(summary.avg_records_per_visitor, 2),
        bounce_rate_percent=round(summary.bounce_rate_percent, 1),
    )
