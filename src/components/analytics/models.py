"""
Analytics component input/output models.

Raw collections (visits, contact requests, blog posts) are owned by the
storage collaborator and only read here. Every derived structure is
recomputed on demand and never persisted.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Literal

# --- Validation Error ---


@dataclass(frozen=True)
class AnalyticsValidationError:
    """Analytics validation error."""

    code: str
    message: str
    field_name: str | None = None


# --- Enums ---


ContactStatus = Literal["new", "in-progress", "completed"]


class BrowserFamily(str, Enum):
    """Browser families reported on the dashboard."""

    CHROME = "Chrome"
    SAFARI = "Safari"
    FIREFOX = "Firefox"
    EDGE = "Edge"
    OTHER = "Other"


class DeviceClass(str, Enum):
    """Device class derived from screen width."""

    DESKTOP = "desktop"
    MOBILE = "mobile"


class DensityTier(str, Enum):
    """Marker size class for a geo cluster."""

    XL = "xl"
    L = "l"
    M = "m"
    S = "s"
    XS = "xs"

    @property
    def marker_radius(self) -> int:
        return _MARKER_RADIUS[self]


_MARKER_RADIUS = {
    DensityTier.XL: 12,
    DensityTier.L: 10,
    DensityTier.M: 8,
    DensityTier.S: 6,
    DensityTier.XS: 4,
}


# --- Raw Records ---


@dataclass(frozen=True)
class VisitRecord:
    """One logged page view."""

    timestamp: datetime
    path: str
    user_agent: str = ""
    referrer: str | None = None
    screen_width: int | None = None
    ip: str = ""
    country: str | None = None
    country_code: str | None = None
    city: str | None = None
    region: str | None = None
    latitude: float | None = None
    longitude: float | None = None


@dataclass(frozen=True)
class ContactRequest:
    """Inbound contact inquiry."""

    id: str
    status: str
    timestamp: datetime
    name: str | None = None
    email: str | None = None
    service: str | None = None


@dataclass(frozen=True)
class BlogPost:
    """Blog post as known to the content collaborator."""

    id: str
    title: str
    slug: str
    created_at: datetime
    published_at: datetime | None = None


@dataclass(frozen=True)
class FilterState:
    """Caller-held dashboard filter: time window and optional country."""

    window_days: int
    country: str | None = None


# --- Derived Structures ---


@dataclass(frozen=True)
class MetricsSummary:
    """Headline visitor metrics."""

    total_visits: int
    unique_visitors: int
    avg_records_per_visitor: float
    bounce_rate_percent: float


@dataclass(frozen=True)
class CountryRollupEntry:
    """Visits per country."""

    country: str
    country_code: str
    visits: int
    percentage_of_total: float
    distinct_city_count: int


@dataclass(frozen=True)
class DailyPoint:
    """One day of the traffic series."""

    date: date
    date_label: str
    desktop_count: int = 0
    mobile_count: int = 0
    total_count: int = 0


@dataclass(frozen=True)
class BrowserShare:
    """Distinct visitors per browser family."""

    family: BrowserFamily
    visitor_count: int
    percentage_of_total: float


@dataclass(frozen=True)
class PageRankEntry:
    """Hit count for a path."""

    path: str
    visit_count: int


@dataclass(frozen=True)
class GeoCluster:
    """Visits merged by city and country, plotted at the first-seen position."""

    country: str
    country_code: str
    city: str
    lat: float
    lon: float
    visit_count: int


@dataclass(frozen=True)
class MapMarker:
    """Geo cluster with its share of visits and size class."""

    cluster: GeoCluster
    share_percent: float
    tier: DensityTier


@dataclass(frozen=True)
class ActivityPoint:
    """One day of the contact/blog activity series."""

    date: date
    date_label: str
    contact_count: int = 0
    blog_count: int = 0


@dataclass(frozen=True)
class BlogViewRank:
    """Views attributed to a blog post by path."""

    blog_id: str
    title: str
    view_count: int


@dataclass(frozen=True)
class StatusShare:
    """Contact requests per status."""

    status: str
    label: str
    count: int
    percentage_of_total: float


# --- Input Models ---


@dataclass(frozen=True)
class DashboardInput:
    """Input for computing the full dashboard."""

    visits: tuple[VisitRecord, ...]
    filter: FilterState
    contact_requests: tuple[ContactRequest, ...] = ()
    blog_posts: tuple[BlogPost, ...] = ()


@dataclass(frozen=True)
class StatsInput:
    """Input for the whole-log stats summary."""

    visits: tuple[VisitRecord, ...]


# --- Output Models ---


@dataclass(frozen=True)
class DashboardOutput:
    """Everything the dashboard renders for one filter selection."""

    filter: FilterState
    summary: MetricsSummary
    countries: tuple[CountryRollupEntry, ...] = ()
    daily: tuple[DailyPoint, ...] = ()
    browsers: tuple[BrowserShare, ...] = ()
    top_pages: tuple[PageRankEntry, ...] = ()
    map_markers: tuple[MapMarker, ...] = ()
    top_blog_posts: tuple[BlogViewRank, ...] = ()
    contact_status: tuple[StatusShare, ...] = ()
    activity: tuple[ActivityPoint, ...] = ()
    country_options: tuple[str, ...] = ()
    errors: list[AnalyticsValidationError] = field(default_factory=list)
    success: bool = True


@dataclass(frozen=True)
class StatsOutput:
    """Whole-log summary with display rounding applied."""

    summary: MetricsSummary
    errors: list[AnalyticsValidationError] = field(default_factory=list)
    success: bool = True
