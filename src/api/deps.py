import os
from functools import lru_cache
from pathlib import Path

from fastapi import Depends

from src.adapters.rules_port import RulesFileAdapter
from src.adapters.snapshot_store import JsonSnapshotStore
from src.adapters.time_local import LocalTimeAdapter
from src.components.analytics import (
    BlogPostRepoPort,
    ContactRequestRepoPort,
    RulesPort,
    TimePort,
    VisitRepoPort,
)
from src.rules.loader import load_rules
from src.rules.models import Rules


# --- Settings ---
class Settings:
    def __init__(self) -> None:
        self.base_dir = Path(os.getcwd())
        self.data_dir = Path(os.environ.get("LAB_DATA_DIR", "./data"))
        self.rules_path = Path(os.environ.get("LAB_RULES_PATH", str(self.base_dir / "rules.yaml")))


@lru_cache
def get_settings() -> Settings:
    return Settings()


# --- Rules ---
@lru_cache
def get_rules() -> Rules:
    return load_rules(get_settings().rules_path)


def get_rules_port(rules: Rules = Depends(get_rules)) -> RulesPort:
    return RulesFileAdapter(rules)


def get_time_port() -> TimePort:
    return LocalTimeAdapter()


# --- Repos ---
def get_snapshot_store(settings: Settings = Depends(get_settings)) -> JsonSnapshotStore:
    return JsonSnapshotStore(settings.data_dir)


def get_visit_repo(store: JsonSnapshotStore = Depends(get_snapshot_store)) -> VisitRepoPort:
    return store.visits


def get_contact_request_repo(
    store: JsonSnapshotStore = Depends(get_snapshot_store),
) -> ContactRequestRepoPort:
    return store.contact_requests


def get_blog_post_repo(store: JsonSnapshotStore = Depends(get_snapshot_store)) -> BlogPostRepoPort:
    return store.blog_posts
