import argparse
import json
import logging
import sys
from dataclasses import asdict
from datetime import date, datetime
from pathlib import Path
from typing import Any

from src.adapters.rules_port import RulesFileAdapter
from src.adapters.snapshot_store import JsonSnapshotStore, SnapshotError
from src.adapters.time_local import LocalTimeAdapter
from src.components.analytics import (
    DashboardInput,
    FilterState,
    StatsInput,
    country_options,
    run_dashboard,
    run_stats,
)
from src.rules.loader import load_rules
from src.rules.models import Rules

logger = logging.getLogger("cli")

DATA_DIR = "data"
RULES_PATH = "rules.yaml"


def _json_default(value: Any) -> Any:
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    raise TypeError(f"Not JSON serializable: {type(value).__name__}")


def emit(payload: Any) -> None:
    print(json.dumps(payload, default=_json_default, indent=2))


def get_rules(path: str) -> Rules:
    try:
        return load_rules(Path(path))
    except (FileNotFoundError, ValueError) as e:
        logger.error("%s", e)
        sys.exit(1)


def handle_dashboard(store: JsonSnapshotStore, rules: Rules, args: argparse.Namespace) -> None:
    days = args.days if args.days is not None else rules.analytics.windows.default_days
    out = run_dashboard(
        DashboardInput(
            visits=tuple(store.visits.list_all()),
            contact_requests=tuple(store.contact_requests.list_all()),
            blog_posts=tuple(store.blog_posts.list_all()),
            filter=FilterState(window_days=days, country=args.country),
        ),
        time_port=LocalTimeAdapter(),
        rules=RulesFileAdapter(rules),
    )
    if not out.success:
        for error in out.errors:
            logger.error("%s", error.message)
        sys.exit(1)
    emit(asdict(out))


def handle_stats(store: JsonSnapshotStore) -> None:
    emit(asdict(run_stats(StatsInput(visits=tuple(store.visits.list_all()))).summary))


def handle_countries(store: JsonSnapshotStore) -> None:
    emit(country_options(store.visits.list_all()))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Visitor Analytics CLI")
    parser.add_argument("--data-dir", default=DATA_DIR, help="Snapshot directory")
    parser.add_argument("--rules", default=RULES_PATH, help="Path to rules.yaml")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # dashboard
    dashboard_parser = subparsers.add_parser("dashboard", help="Compute the full dashboard")
    dashboard_parser.add_argument("--days", type=int, help="Time window in days")
    dashboard_parser.add_argument("--country", help="Exact country name filter")

    # stats
    subparsers.add_parser("stats", help="Whole-log visitor stats")

    # countries
    subparsers.add_parser("countries", help="List countries seen in the log")

    return parser


def main(argv: list[str] | None = None) -> None:
    logging.basicConfig(level=logging.INFO)
    args = build_parser().parse_args(argv)

    rules = get_rules(args.rules)
    store = JsonSnapshotStore(args.data_dir)

    try:
        if args.command == "dashboard":
            handle_dashboard(store, rules, args)
        elif args.command == "stats":
            handle_stats(store)
        elif args.command == "countries":
            handle_countries(store)
    except SnapshotError as e:
        logger.error("%s", e)
        sys.exit(1)


if __name__ == "__main__":
    main()
