"""
Tests for the command-line interface.
"""

from __future__ import annotations

import json
from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest

from src.app_shell.cli import main

RULES = str(Path(__file__).parent.parent.parent / "rules.yaml")


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    now = datetime.now(UTC)
    visits = [
        {"timestamp": now.isoformat(), "path": "/", "ip": "1.1.1.1", "country": "France"},
        {"timestamp": now.isoformat(), "path": "/about", "ip": "1.1.1.1", "country": "France"},
        {
            "timestamp": (now - timedelta(days=1)).isoformat(),
            "path": "/",
            "ip": "2.2.2.2",
            "country": "Chile",
            "userAgent": "Mozilla/5.0 Firefox/121.0",
        },
    ]
    (tmp_path / "visits.json").write_text(json.dumps(visits), encoding="utf-8")
    return tmp_path


def _run(capsys: pytest.CaptureFixture[str], *argv: str) -> object:
    main(list(argv))
    return json.loads(capsys.readouterr().out)


class TestCli:
    """Subcommands print JSON to stdout."""

    def test_stats(self, data_dir: Path, capsys: pytest.CaptureFixture[str]) -> None:
        out = _run(capsys, "--data-dir", str(data_dir), "--rules", RULES, "stats")
        assert out == {
            "total_visits": 3,
            "unique_visitors": 2,
            "avg_records_per_visitor": 1.5,
            "bounce_rate_percent": 50.0,
        }

    def test_countries(self, data_dir: Path, capsys: pytest.CaptureFixture[str]) -> None:
        out = _run(capsys, "--data-dir", str(data_dir), "--rules", RULES, "countries")
        assert out == ["Chile", "France"]

    def test_dashboard(self, data_dir: Path, capsys: pytest.CaptureFixture[str]) -> None:
        out = _run(
            capsys, "--data-dir", str(data_dir), "--rules", RULES, "dashboard", "--days", "7"
        )
        assert out["success"] is True
        assert out["filter"] == {"window_days": 7, "country": None}
        assert len(out["daily"]) == 7
        assert [b["family"] for b in out["browsers"]] == ["Firefox", "Other"]

    def test_dashboard_country(self, data_dir: Path, capsys: pytest.CaptureFixture[str]) -> None:
        out = _run(
            capsys,
            "--data-dir",
            str(data_dir),
            "--rules",
            RULES,
            "dashboard",
            "--days",
            "7",
            "--country",
            "Chile",
        )
        assert out["summary"]["total_visits"] == 1

    def test_invalid_window_exits(self, data_dir: Path) -> None:
        with pytest.raises(SystemExit) as exc:
            main(["--data-dir", str(data_dir), "--rules", RULES, "dashboard", "--days", "0"])
        assert exc.value.code == 1

    def test_missing_rules_exits(self, data_dir: Path, tmp_path: Path) -> None:
        with pytest.raises(SystemExit) as exc:
            main(["--data-dir", str(data_dir), "--rules", str(tmp_path / "nope.yaml"), "stats"])
        assert exc.value.code == 1

    def test_corrupt_snapshot_exits(self, tmp_path: Path) -> None:
        (tmp_path / "visits.json").write_text("[", encoding="utf-8")
        with pytest.raises(SystemExit) as exc:
            main(["--data-dir", str(tmp_path), "--rules", RULES, "stats"])
        assert exc.value.code == 1
