"""
Analytics component port definitions.
"""

from __future__ import annotations

from datetime import datetime
from typing import Protocol

from .models import BlogPost, ContactRequest, VisitRecord


class VisitRepoPort(Protocol):
    """Read access to the visit log."""

    def list_all(self) -> list[VisitRecord]:
        """Return every stored visit."""
        ...


class ContactRequestRepoPort(Protocol):
    """Read access to contact requests."""

    def list_all(self) -> list[ContactRequest]:
        """Return every stored contact request."""
        ...


class BlogPostRepoPort(Protocol):
    """Read access to blog posts."""

    def list_all(self) -> list[BlogPost]:
        """Return every known blog post."""
        ...


class TimePort(Protocol):
    """Time provider interface."""

    def now_utc(self) -> datetime:
        """Get current UTC time."""
        ...


class RulesPort(Protocol):
    """Port for analytics rules configuration."""

    def get_allowed_windows(self) -> tuple[int, ...]:
        """Day windows offered to callers."""
        ...

    def get_default_window(self) -> int:
        """Window used when the caller gives none."""
        ...

    def get_mobile_max_width(self) -> int:
        """Screen widths strictly below this are mobile."""
        ...

    def get_ranking_limits(self) -> dict[str, int]:
        """Get list limits (top_countries, top_pages, top_blog_posts)."""
        ...

    def get_activity_window(self) -> int:
        """Day window of the activity timeline."""
        ...

    def get_merge_precision(self) -> int:
        """Decimal places used when merging map markers."""
        ...

    def get_timezone(self) -> str:
        """IANA name of the display timezone."""
        ...
