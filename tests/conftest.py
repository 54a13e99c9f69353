from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from pathlib import Path
from typing import Any

import pytest

from src.adapters.time_local import FrozenTimeAdapter
from src.components.analytics import BlogPost, ContactRequest, VisitRecord
from src.rules.loader import load_rules
from src.rules.models import Rules

PROJECT_ROOT = Path(__file__).parent.parent

# Fixed "now" for every deterministic test: midday UTC.
NOW = datetime(2026, 10, 18, 12, 0, 0, tzinfo=UTC)


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def time_port() -> FrozenTimeAdapter:
    """Frozen clock at NOW."""
    return FrozenTimeAdapter(NOW)


@pytest.fixture
def rules() -> Rules:
    """The project's real rules file."""
    return load_rules(PROJECT_ROOT / "rules.yaml")


@pytest.fixture
def make_visit() -> Callable[..., VisitRecord]:
    """Factory for visits, dated relative to NOW."""

    def _make(days_ago: float = 0, **kwargs: Any) -> VisitRecord:
        kwargs.setdefault("path", "/")
        return VisitRecord(timestamp=NOW - timedelta(days=days_ago), **kwargs)

    return _make


@pytest.fixture
def make_request() -> Callable[..., ContactRequest]:
    """Factory for contact requests, dated relative to NOW."""
    counter = iter(range(1, 10_000))

    def _make(status: str = "new", days_ago: float = 0) -> ContactRequest:
        return ContactRequest(
            id=f"req-{next(counter)}",
            status=status,
            timestamp=NOW - timedelta(days=days_ago),
        )

    return _make


@pytest.fixture
def make_post() -> Callable[..., BlogPost]:
    """Factory for blog posts, created relative to NOW."""

    def _make(
        slug: str,
        days_ago: float = 0,
        published_days_ago: float | None = None,
        title: str | None = None,
    ) -> BlogPost:
        published_at = None
        if published_days_ago is not None:
            published_at = NOW - timedelta(days=published_days_ago)
        return BlogPost(
            id=f"post-{slug}",
            title=title or slug.replace("-", " ").title(),
            slug=slug,
            created_at=NOW - timedelta(days=days_ago),
            published_at=published_at,
        )

    return _make
