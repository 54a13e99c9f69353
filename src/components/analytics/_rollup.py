"""
Dimension rollups: group, count, annotate percentage of total, rank.

Two counting modes share one algorithm:

- hit-based (country, page, contact status): count = records per key,
  denominator = number of INPUT records, so records without a key dilute
  the percentages.
- visitor-based (browser): count = distinct identities per key,
  denominator = sum of those distinct counts.

The asymmetry is deliberate. Country/page share and browser share are not
comparable numbers; do not unify the denominators.

Ranking is by count descending. Ties keep first-seen order (seeded keys
first), never key name order.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

from ._browser import classify_browser
from ._identity import identity_of
from .models import (
    BrowserFamily,
    BrowserShare,
    ContactRequest,
    CountryRollupEntry,
    PageRankEntry,
    StatusShare,
    VisitRecord,
)

T = TypeVar("T")

KeyFn = Callable[[T], str | None]

CONTACT_STATUS_LABELS: dict[str, str] = {
    "new": "Pending",
    "in-progress": "In Progress",
    "completed": "Completed",
}


@dataclass(frozen=True)
class RollupEntry(Generic[T]):
    """One ranked group."""

    key: str
    count: int
    percentage: float
    first: T
    extras: frozenset[str] = frozenset()


def percentage_of(count: int, total: int) -> float:
    """count / total * 100, or 0 when total is 0."""
    if total <= 0:
        return 0.0
    return count / total * 100


def rollup(
    records: Sequence[T],
    key_fn: KeyFn[T],
    *,
    extra_fn: Callable[[T], str | None] | None = None,
    distinct_fn: Callable[[T], str | None] | None = None,
    seed_keys: Iterable[str] = (),
) -> list[RollupEntry[T]]:
    """
    Group records by key_fn and rank the groups.

    Records whose key is empty are skipped. extra_fn folds an auxiliary
    distinct set per key (e.g. cities per country). With distinct_fn the
    count per key is the number of distinct non-empty distinct_fn values
    (visitor-based mode). seed_keys fix tie-break order for a known domain;
    groups that end with a zero count are dropped.
    """
    order: list[str] = list(dict.fromkeys(seed_keys))
    hits: dict[str, int] = dict.fromkeys(order, 0)
    members: dict[str, set[str]] = {key: set() for key in order}
    extras: dict[str, set[str]] = {key: set() for key in order}
    first: dict[str, T] = {}

    for record in records:
        key = key_fn(record)
        if not key:
            continue

        if distinct_fn is not None:
            member = distinct_fn(record)
            if not member:
                continue
        else:
            member = None

        if key not in hits:
            order.append(key)
            hits[key] = 0
            members[key] = set()
            extras[key] = set()

        first.setdefault(key, record)
        hits[key] += 1
        if member is not None:
            members[key].add(member)
        if extra_fn is not None:
            extra = extra_fn(record)
            if extra:
                extras[key].add(extra)

    if distinct_fn is not None:
        counts = {key: len(members[key]) for key in order}
        total = sum(counts.values())
    else:
        counts = hits
        total = len(records)

    entries = [
        RollupEntry(
            key=key,
            count=counts[key],
            percentage=percentage_of(counts[key], total),
            first=first[key],
            extras=frozenset(extras[key]),
        )
        for key in order
        if counts[key] > 0
    ]

    # sorted() is stable: equal counts keep first-seen order.
    return sorted(entries, key=lambda e: e.count, reverse=True)


# --- Concrete Rollups ---


def rollup_countries(
    records: Sequence[VisitRecord],
    limit: int | None = None,
) -> list[CountryRollupEntry]:
    """Hit-based visits per country with distinct city counts."""
    entries = rollup(records, lambda r: r.country, extra_fn=lambda r: r.city)
    result = [
        CountryRollupEntry(
            country=e.key,
            country_code=e.first.country_code or "",
            visits=e.count,
            percentage_of_total=e.percentage,
            distinct_city_count=len(e.extras),
        )
        for e in entries
    ]
    return result if limit is None else result[:limit]


def rollup_browsers(records: Sequence[VisitRecord]) -> list[BrowserShare]:
    """Visitor-based browser share: distinct identities per family."""
    entries = rollup(
        records,
        lambda r: classify_browser(r.user_agent).value,
        distinct_fn=identity_of,
        seed_keys=[family.value for family in BrowserFamily],
    )
    return [
        BrowserShare(
            family=BrowserFamily(e.key),
            visitor_count=e.count,
            percentage_of_total=e.percentage,
        )
        for e in entries
    ]


def rollup_pages(records: Sequence[VisitRecord], limit: int | None = 10) -> list[PageRankEntry]:
    """Hit count per path, most visited first."""
    entries = rollup(records, lambda r: r.path)
    result = [PageRankEntry(path=e.key, visit_count=e.count) for e in entries]
    return result if limit is None else result[:limit]


def rollup_contact_status(requests: Sequence[ContactRequest]) -> list[StatusShare]:
    """Contact requests per status over the fixed status domain."""
    entries = rollup(
        requests,
        lambda r: r.status if r.status in CONTACT_STATUS_LABELS else None,
        seed_keys=CONTACT_STATUS_LABELS,
    )
    return [
        StatusShare(
            status=e.key,
            label=CONTACT_STATUS_LABELS[e.key],
            count=e.count,
            percentage_of_total=e.percentage,
        )
        for e in entries
    ]
