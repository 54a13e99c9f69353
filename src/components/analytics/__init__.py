"""
Analytics component - Visitor dashboard aggregation.
"""

from ._browser import classify_browser
from ._correlate import activity_timeline, blog_paths, post_activity_time, rank_blog_views
from ._filter import apply_filter, country_options, filter_visits
from ._geo import build_map_markers, cluster_visits, density_tier, merge_nearby
from ._identity import MOBILE_MAX_WIDTH, device_class, identity_of, is_mobile
from ._metrics import EMPTY_SUMMARY, round_summary, summarize
from ._parse import parse_blog_post, parse_contact_request, parse_timestamp, parse_visit
from ._rollup import (
    CONTACT_STATUS_LABELS,
    RollupEntry,
    percentage_of,
    rollup,
    rollup_browsers,
    rollup_contact_status,
    rollup_countries,
    rollup_pages,
)
from ._time import InvalidWindowError, date_label, local_date, validate_window, window_dates
from ._timeseries import bucket_daily
from .component import (
    DEFAULT_CONFIG,
    AnalyticsConfig,
    build_config,
    run,
    run_dashboard,
    run_stats,
)
from .models import (
    ActivityPoint,
    AnalyticsValidationError,
    BlogPost,
    BlogViewRank,
    BrowserFamily,
    BrowserShare,
    ContactRequest,
    CountryRollupEntry,
    DailyPoint,
    DashboardInput,
    DashboardOutput,
    DensityTier,
    DeviceClass,
    FilterState,
    GeoCluster,
    MapMarker,
    MetricsSummary,
    PageRankEntry,
    StatsInput,
    StatsOutput,
    StatusShare,
    VisitRecord,
)
from .ports import (
    BlogPostRepoPort,
    ContactRequestRepoPort,
    RulesPort,
    TimePort,
    VisitRepoPort,
)

__all__ = [
    # Entry points
    "run",
    "run_dashboard",
    "run_stats",
    # Configuration
    "AnalyticsConfig",
    "DEFAULT_CONFIG",
    "build_config",
    # Input models
    "BlogPost",
    "ContactRequest",
    "DashboardInput",
    "FilterState",
    "StatsInput",
    "VisitRecord",
    # Output models
    "ActivityPoint",
    "AnalyticsValidationError",
    "BlogViewRank",
    "BrowserFamily",
    "BrowserShare",
    "CountryRollupEntry",
    "DailyPoint",
    "DashboardOutput",
    "DensityTier",
    "DeviceClass",
    "GeoCluster",
    "MapMarker",
    "MetricsSummary",
    "PageRankEntry",
    "StatsOutput",
    "StatusShare",
    # Ports
    "BlogPostRepoPort",
    "ContactRequestRepoPort",
    "RulesPort",
    "TimePort",
    "VisitRepoPort",
    # Engine functions
    "CONTACT_STATUS_LABELS",
    "EMPTY_SUMMARY",
    "InvalidWindowError",
    "MOBILE_MAX_WIDTH",
    "RollupEntry",
    "activity_timeline",
    "apply_filter",
    "blog_paths",
    "bucket_daily",
    "build_map_markers",
    "classify_browser",
    "cluster_visits",
    "country_options",
    "date_label",
    "density_tier",
    "device_class",
    "filter_visits",
    "identity_of",
    "is_mobile",
    "local_date",
    "merge_nearby",
    "percentage_of",
    "post_activity_time",
    "rank_blog_views",
    "round_summary",
    "rollup",
    "rollup_browsers",
    "rollup_contact_status",
    "rollup_countries",
    "rollup_pages",
    "summarize",
    "validate_window",
    "window_dates",
    # Parsing
    "parse_blog_post",
    "parse_contact_request",
    "parse_timestamp",
    "parse_visit",
]
