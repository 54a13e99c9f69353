"""
Snapshot storage adapters for the analytics component.

Stand-ins for the storage collaborator: they hand the dashboard a finite,
fully materialized collection of records. Implements VisitRepoPort,
ContactRequestRepoPort and BlogPostRepoPort.

Layout of a JSON snapshot directory:
    {data_dir}/visits.json            JSON array of visit rows
    {data_dir}/contact_requests.json  JSON array of contact request rows
    {data_dir}/blog_posts.json        JSON array of blog post rows

A missing file is an empty collection. Rows that fail to parse are skipped
and logged.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import Any, Generic, TypeVar

from src.components.analytics import (
    AnalyticsValidationError,
    BlogPost,
    ContactRequest,
    VisitRecord,
    parse_blog_post,
    parse_contact_request,
    parse_visit,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

RowParser = Callable[[dict[str, Any]], tuple[T | None, list[AnalyticsValidationError]]]

VISITS_FILE = "visits.json"
CONTACT_REQUESTS_FILE = "contact_requests.json"
BLOG_POSTS_FILE = "blog_posts.json"


class SnapshotError(Exception):
    """Raised when a snapshot file cannot be read as a JSON array."""


# --- In-Memory Repositories ---


class InMemoryRepo(Generic[T]):
    """In-memory record list for testing/dev."""

    def __init__(self, records: Iterable[T] = ()) -> None:
        self._records: list[T] = list(records)

    def add(self, record: T) -> None:
        """Append a record."""
        self._records.append(record)

    def list_all(self) -> list[T]:
        """Return a copy of every record."""
        return list(self._records)


class InMemoryVisitRepo(InMemoryRepo[VisitRecord]):
    """In-memory visit log."""


class InMemoryContactRequestRepo(InMemoryRepo[ContactRequest]):
    """In-memory contact requests."""


class InMemoryBlogPostRepo(InMemoryRepo[BlogPost]):
    """In-memory blog posts."""


# --- JSON Snapshot Repositories ---


def parse_rows(rows: Iterable[Any], parser: RowParser[T], source: str) -> list[T]:
    """Parse rows, skipping (and logging) the ones that fail."""
    records: list[T] = []
    skipped = 0

    for index, row in enumerate(rows):
        if not isinstance(row, dict):
            logger.warning("Skipping %s row %d: not an object", source, index)
            skipped += 1
            continue

        record, errors = parser(row)
        if record is None:
            logger.warning(
                "Skipping %s row %d: %s",
                source,
                index,
                "; ".join(e.message for e in errors),
            )
            skipped += 1
            continue
        records.append(record)

    if skipped:
        logger.info("Loaded %d rows from %s (%d skipped)", len(records), source, skipped)
    return records


class JsonFileRepo(Generic[T]):
    """Read-only repository over one JSON array file."""

    def __init__(self, path: Path, parser: RowParser[T]) -> None:
        self._path = path
        self._parser = parser

    def list_all(self) -> list[T]:
        """Read and parse the file. Missing file -> empty list."""
        if not self._path.exists():
            logger.debug("Snapshot file %s not found, treating as empty", self._path)
            return []

        try:
            rows = json.loads(self._path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise SnapshotError(f"Invalid JSON in {self._path}: {e}") from e

        if not isinstance(rows, list):
            raise SnapshotError(f"{self._path} must contain a JSON array")

        return parse_rows(rows, self._parser, self._path.name)


class JsonSnapshotStore:
    """The three snapshot collections of one data directory."""

    def __init__(self, data_dir: str | Path) -> None:
        self.data_dir = Path(data_dir)
        self.visits: JsonFileRepo[VisitRecord] = JsonFileRepo(
            self.data_dir / VISITS_FILE, parse_visit
        )
        self.contact_requests: JsonFileRepo[ContactRequest] = JsonFileRepo(
            self.data_dir / CONTACT_REQUESTS_FILE, parse_contact_request
        )
        self.blog_posts: JsonFileRepo[BlogPost] = JsonFileRepo(
            self.data_dir / BLOG_POSTS_FILE, parse_blog_post
        )
