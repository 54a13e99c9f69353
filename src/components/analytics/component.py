"""
Analytics component - Visitor dashboard aggregation.

Turns the raw, unordered visit log plus contact requests and blog posts into
the metrics, rollups and series the admin dashboard renders.

Invariants:
- I1: Pure recomputation; no state is kept between calls
- I2: The filter is applied once; every rollup runs off the filtered visits
- I3: Percentages of a non-empty rollup sum to 100; empty denominators give 0
- I4: Daily series length equals the requested window
- I5: Sparse or empty input yields zero/empty results, never an error
- I6: A non-positive window is the only rejected input
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from zoneinfo import ZoneInfo

from ._correlate import ACTIVITY_WINDOW_DAYS, TOP_BLOG_POSTS, activity_timeline, rank_blog_views
from ._filter import apply_filter, country_options
from ._geo import MERGE_PRECISION, build_map_markers, cluster_visits, merge_nearby
from ._identity import MOBILE_MAX_WIDTH
from ._metrics import EMPTY_SUMMARY, round_summary, summarize
from ._rollup import rollup_browsers, rollup_contact_status, rollup_countries, rollup_pages
from ._time import InvalidWindowError, validate_window
from ._timeseries import bucket_daily
from .models import (
    AnalyticsValidationError,
    DashboardInput,
    DashboardOutput,
    StatsInput,
    StatsOutput,
)
from .ports import RulesPort, TimePort

logger = logging.getLogger(__name__)


# --- Configuration ---


@dataclass(frozen=True)
class AnalyticsConfig:
    """Dashboard configuration."""

    allowed_windows: tuple[int, ...] = (7, 14, 30, 60, 90)
    default_window: int = 30
    mobile_max_width: int = MOBILE_MAX_WIDTH
    top_countries: int = 10
    top_pages: int = 10
    top_blog_posts: int = TOP_BLOG_POSTS
    activity_window: int = ACTIVITY_WINDOW_DAYS
    merge_precision: int = MERGE_PRECISION
    timezone: str = "UTC"


DEFAULT_CONFIG = AnalyticsConfig()


def build_config(rules: RulesPort | None) -> AnalyticsConfig:
    """Build dashboard config from rules port."""
    if rules is None:
        return DEFAULT_CONFIG

    limits = rules.get_ranking_limits()

    return AnalyticsConfig(
        allowed_windows=tuple(rules.get_allowed_windows()),
        default_window=rules.get_default_window(),
        mobile_max_width=rules.get_mobile_max_width(),
        top_countries=limits.get("top_countries", DEFAULT_CONFIG.top_countries),
        top_pages=limits.get("top_pages", DEFAULT_CONFIG.top_pages),
        top_blog_posts=limits.get("top_blog_posts", DEFAULT_CONFIG.top_blog_posts),
        activity_window=rules.get_activity_window(),
        merge_precision=rules.get_merge_precision(),
        timezone=rules.get_timezone(),
    )


def _now(time_port: TimePort | None) -> datetime:
    """Get current time via injected port."""
    if time_port is not None:
        return time_port.now_utc()
    return datetime.now(UTC)


# --- Component Entry Points ---


def run_dashboard(
    inp: DashboardInput,
    *,
    time_port: TimePort | None = None,
    rules: RulesPort | None = None,
) -> DashboardOutput:
    """
    Compute every dashboard structure for one filter selection.

    Args:
        inp: Raw collections plus the caller's filter.
        time_port: Optional time port ("now" for windows and series).
        rules: Optional rules port for configuration.

    Returns:
        DashboardOutput. An invalid window yields success=False and empty
        structures rather than an exception.
    """
    config = build_config(rules)
    state = inp.filter

    try:
        validate_window(state.window_days)
    except InvalidWindowError as e:
        logger.warning("Rejected dashboard filter: %s", e)
        return DashboardOutput(
            filter=state,
            summary=EMPTY_SUMMARY,
            errors=[
                AnalyticsValidationError(
                    code="invalid_window",
                    message=str(e),
                    field_name="window_days",
                )
            ],
            success=False,
        )

    now = _now(time_port)
    tz = ZoneInfo(config.timezone)
    visits = apply_filter(inp.visits, state, now)
    clusters = merge_nearby(cluster_visits(visits), config.merge_precision)

    return DashboardOutput(
        filter=state,
        summary=summarize(visits),
        countries=tuple(rollup_countries(visits, limit=config.top_countries)),
        daily=tuple(
            bucket_daily(
                visits,
                state.window_days,
                now,
                tz=tz,
                mobile_max_width=config.mobile_max_width,
            )
        ),
        browsers=tuple(rollup_browsers(visits)),
        top_pages=tuple(rollup_pages(visits, limit=config.top_pages)),
        map_markers=tuple(build_map_markers(clusters, len(visits))),
        top_blog_posts=tuple(
            rank_blog_views(inp.blog_posts, visits, limit=config.top_blog_posts)
        ),
        contact_status=tuple(rollup_contact_status(inp.contact_requests)),
        activity=tuple(
            activity_timeline(
                inp.contact_requests,
                inp.blog_posts,
                now,
                tz=tz,
                window_days=config.activity_window,
            )
        ),
        country_options=tuple(country_options(inp.visits)),
    )


def run_stats(inp: StatsInput) -> StatsOutput:
    """
    Summarize the whole visit log with display rounding.

    Args:
        inp: Input containing every stored visit.

    Returns:
        StatsOutput with rounded summary.
    """
    return StatsOutput(summary=round_summary(summarize(inp.visits)))


def run(
    inp: DashboardInput | StatsInput,
    *,
    time_port: TimePort | None = None,
    rules: RulesPort | None = None,
) -> DashboardOutput | StatsOutput:
    """
    Main entry point for the analytics component.

    Dispatches to appropriate handler based on input type.
    """
    if isinstance(inp, DashboardInput):
        return run_dashboard(inp, time_port=time_port, rules=rules)
    elif isinstance(inp, StatsInput):
        return run_stats(inp)
    else:
        raise ValueError(f"Unknown input type: {type(inp)}")
