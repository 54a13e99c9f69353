"""
Adapter exposing loaded rules through the analytics RulesPort.
"""

from __future__ import annotations

from src.rules.models import Rules


class RulesFileAdapter:
    """RulesPort backed by a validated rules.yaml model."""

    def __init__(self, rules: Rules) -> None:
        self._analytics = rules.analytics

    def get_allowed_windows(self) -> tuple[int, ...]:
        return tuple(self._analytics.windows.allowed_days)

    def get_default_window(self) -> int:
        return self._analytics.windows.default_days

    def get_mobile_max_width(self) -> int:
        return self._analytics.devices.mobile_max_width

    def get_ranking_limits(self) -> dict[str, int]:
        return self._analytics.rankings.model_dump()

    def get_activity_window(self) -> int:
        return self._analytics.activity.window_days

    def get_merge_precision(self) -> int:
        return self._analytics.geo.merge_precision

    def get_timezone(self) -> str:
        return self._analytics.display.timezone
