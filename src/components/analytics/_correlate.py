"""
Joins between visits and the content/contact collections.

- Blog view ranking: visits whose path is /blog/{slug} or /blog/{slug}/.
- Activity timeline: contact requests and blog posts per calendar day.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Sequence
from datetime import UTC, date, datetime, tzinfo

from ._time import date_label, ensure_utc, local_date, window_cutoff, window_dates
from .models import ActivityPoint, BlogPost, BlogViewRank, ContactRequest, VisitRecord

ACTIVITY_WINDOW_DAYS = 30
TOP_BLOG_POSTS = 5


def blog_paths(slug: str) -> tuple[str, str]:
    """Paths that count as a view of the post."""
    return f"/blog/{slug}", f"/blog/{slug}/"


def rank_blog_views(
    posts: Iterable[BlogPost],
    records: Sequence[VisitRecord],
    limit: int = TOP_BLOG_POSTS,
) -> list[BlogViewRank]:
    """Posts with at least one view, most viewed first."""
    hits = Counter(r.path for r in records)

    ranked = []
    for post in posts:
        views = sum(hits[path] for path in blog_paths(post.slug))
        if views > 0:
            ranked.append(BlogViewRank(blog_id=post.id, title=post.title, view_count=views))

    ranked.sort(key=lambda b: b.view_count, reverse=True)
    return ranked[:limit]


def post_activity_time(post: BlogPost) -> datetime:
    """Publication time if published, else creation time."""
    return post.published_at or post.created_at


def activity_timeline(
    requests: Iterable[ContactRequest],
    posts: Iterable[BlogPost],
    now: datetime,
    tz: tzinfo = UTC,
    window_days: int = ACTIVITY_WINDOW_DAYS,
) -> list[ActivityPoint]:
    """Gap-filled daily contact and blog counts, oldest first."""
    days = window_dates(now, window_days, tz)
    cutoff = window_cutoff(now, window_days)

    contacts = _count_days((r.timestamp for r in requests), cutoff, tz)
    blogs = _count_days((post_activity_time(p) for p in posts), cutoff, tz)

    return [
        ActivityPoint(
            date=day,
            date_label=date_label(day),
            contact_count=contacts[day],
            blog_count=blogs[day],
        )
        for day in days
    ]


def _count_days(timestamps: Iterable[datetime], cutoff: datetime, tz: tzinfo) -> Counter[date]:
    return Counter(local_date(ts, tz) for ts in timestamps if ensure_utc(ts) >= cutoff)
