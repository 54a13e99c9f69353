"""
Tests for the snapshot storage adapters.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from src.adapters.snapshot_store import (
    InMemoryVisitRepo,
    JsonSnapshotStore,
    SnapshotError,
)


def _dump(path: Path, rows: object) -> None:
    path.write_text(json.dumps(rows), encoding="utf-8")


class TestInMemoryRepo:
    """In-memory repos."""

    def test_add_and_list(self, make_visit) -> None:
        repo = InMemoryVisitRepo([make_visit(path="/a")])
        repo.add(make_visit(path="/b"))
        assert [r.path for r in repo.list_all()] == ["/a", "/b"]

        listed = repo.list_all()
        listed.clear()
        assert len(repo.list_all()) == 2


class TestJsonSnapshotStore:
    """JSON directory snapshot."""

    def test_missing_files_are_empty(self, tmp_path: Path) -> None:
        store = JsonSnapshotStore(tmp_path)
        assert store.visits.list_all() == []
        assert store.contact_requests.list_all() == []
        assert store.blog_posts.list_all() == []

    def test_reads_all_collections(self, tmp_path: Path) -> None:
        _dump(
            tmp_path / "visits.json",
            [{"timestamp": 1_760_000_000_000, "path": "/", "ip": "1.1.1.1", "country": "France"}],
        )
        _dump(
            tmp_path / "contact_requests.json",
            [{"id": "r1", "status": "new", "timestamp": "2026-10-01T00:00:00Z"}],
        )
        _dump(
            tmp_path / "blog_posts.json",
            [{"id": "b1", "title": "Hi", "slug": "hi", "createdAt": "2026-10-01T00:00:00Z"}],
        )

        store = JsonSnapshotStore(tmp_path)
        assert [v.country for v in store.visits.list_all()] == ["France"]
        assert [r.id for r in store.contact_requests.list_all()] == ["r1"]
        assert [p.slug for p in store.blog_posts.list_all()] == ["hi"]

    def test_bad_rows_skipped(self, tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
        _dump(
            tmp_path / "visits.json",
            [
                {"timestamp": 1_760_000_000_000, "path": "/ok"},
                {"timestamp": "not a date", "path": "/bad"},
                "garbage",
            ],
        )
        with caplog.at_level(logging.WARNING):
            visits = JsonSnapshotStore(tmp_path).visits.list_all()

        assert [v.path for v in visits] == ["/ok"]
        assert "Skipping visits.json row 1" in caplog.text
        assert "Skipping visits.json row 2" in caplog.text

    def test_invalid_json(self, tmp_path: Path) -> None:
        (tmp_path / "visits.json").write_text("{not json", encoding="utf-8")
        with pytest.raises(SnapshotError):
            JsonSnapshotStore(tmp_path).visits.list_all()

    def test_not_an_array(self, tmp_path: Path) -> None:
        _dump(tmp_path / "visits.json", {"timestamp": 1})
        with pytest.raises(SnapshotError, match="JSON array"):
            JsonSnapshotStore(tmp_path).visits.list_all()
