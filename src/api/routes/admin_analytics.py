"""
Admin Analytics API.

Read-only endpoints feeding the visitor dashboard. Every request loads the
current snapshot and recomputes; nothing is cached between requests.

Note: browser share is visitor-based (distinct addresses per family) while
country and page shares are hit-based. The two are not comparable.
"""

import logging
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel, ConfigDict, Field

from src.adapters.snapshot_store import SnapshotError
from src.api.deps import (
    get_blog_post_repo,
    get_contact_request_repo,
    get_rules_port,
    get_time_port,
    get_visit_repo,
)
from src.components.analytics import (
    BlogPostRepoPort,
    ContactRequestRepoPort,
    DashboardInput,
    DashboardOutput,
    FilterState,
    RulesPort,
    StatsInput,
    TimePort,
    VisitRepoPort,
    country_options,
    run_dashboard,
    run_stats,
)

logger = logging.getLogger(__name__)

router = APIRouter()


# --- Request/Response Models ---


class SummaryResponse(BaseModel):
    """Headline metrics."""

    total_visits: int
    unique_visitors: int
    avg_records_per_visitor: float
    bounce_rate_percent: float


class CountryItem(BaseModel):
    """Visits per country."""

    country: str
    country_code: str
    visits: int
    percentage: float
    cities: int


class DailyItem(BaseModel):
    """One day of traffic."""

    date: date
    label: str
    desktop: int
    mobile: int
    total: int


class BrowserItem(BaseModel):
    """Distinct visitors per browser family."""

    name: str
    visitors: int
    percentage: float


class PageItem(BaseModel):
    """Hits per path."""

    path: str
    count: int


class MapLocationItem(BaseModel):
    """Map marker."""

    country: str
    country_code: str
    city: str
    lat: float
    lon: float
    count: int
    share_percent: float
    tier: str
    radius: int


class BlogViewItem(BaseModel):
    """Views per blog post."""

    id: str
    title: str
    views: int


class StatusItem(BaseModel):
    """Contact requests per status."""

    status: str
    label: str
    count: int
    percentage: float


class ActivityItem(BaseModel):
    """One day of contact/blog activity."""

    date: date
    label: str
    contacts: int
    blogs: int


class DashboardResponse(BaseModel):
    """Dashboard payload."""

    days: int
    country: str | None
    summary: SummaryResponse
    countries: list[CountryItem]
    daily: list[DailyItem]
    browsers: list[BrowserItem]
    top_pages: list[PageItem]
    map_locations: list[MapLocationItem]
    top_blog_posts: list[BlogViewItem]
    contact_status: list[StatusItem]
    activity: list[ActivityItem]
    country_options: list[str]


class StatsResponse(BaseModel):
    """Whole-log stats, in the shape the site's public stats consumer expects."""

    model_config = ConfigDict(populate_by_name=True)

    total_visits: int = Field(alias="totalVisits")
    unique_visitors: int = Field(alias="uniqueVisitors")
    avg_pages_per_visitor: float = Field(alias="avgPagesPerVisitor")
    bounce_rate: float = Field(alias="bounceRate")


class CountriesResponse(BaseModel):
    """Country filter options."""

    countries: list[str]


# --- Helper Functions ---


def to_dashboard_response(out: DashboardOutput) -> DashboardResponse:
    """Render a DashboardOutput as the API payload."""
    s = out.summary
    return DashboardResponse(
        days=out.filter.window_days,
        country=out.filter.country,
        summary=SummaryResponse(
            total_visits=s.total_visits,
            unique_visitors=s.unique_visitors,
            avg_records_per_visitor=s.avg_records_per_visitor,
            bounce_rate_percent=s.bounce_rate_percent,
        ),
        countries=[
            CountryItem(
                country=c.country,
                country_code=c.country_code,
                visits=c.visits,
                percentage=c.percentage_of_total,
                cities=c.distinct_city_count,
            )
            for c in out.countries
        ],
        daily=[
            DailyItem(
                date=p.date,
                label=p.date_label,
                desktop=p.desktop_count,
                mobile=p.mobile_count,
                total=p.total_count,
            )
            for p in out.daily
        ],
        browsers=[
            BrowserItem(name=b.family.value, visitors=b.visitor_count, percentage=b.percentage_of_total)
            for b in out.browsers
        ],
        top_pages=[PageItem(path=p.path, count=p.visit_count) for p in out.top_pages],
        map_locations=[
            MapLocationItem(
                country=m.cluster.country,
                country_code=m.cluster.country_code,
                city=m.cluster.city,
                lat=m.cluster.lat,
                lon=m.cluster.lon,
                count=m.cluster.visit_count,
                share_percent=m.share_percent,
                tier=m.tier.value,
                radius=m.tier.marker_radius,
            )
            for m in out.map_markers
        ],
        top_blog_posts=[
            BlogViewItem(id=b.blog_id, title=b.title, views=b.view_count) for b in out.top_blog_posts
        ],
        contact_status=[
            StatusItem(
                status=st.status,
                label=st.label,
                count=st.count,
                percentage=st.percentage_of_total,
            )
            for st in out.contact_status
        ],
        activity=[
            ActivityItem(date=a.date, label=a.date_label, contacts=a.contact_count, blogs=a.blog_count)
            for a in out.activity
        ],
        country_options=list(out.country_options),
    )


def _load(repo: VisitRepoPort | ContactRequestRepoPort | BlogPostRepoPort) -> list:
    try:
        return repo.list_all()
    except SnapshotError as e:
        logger.error("Snapshot unreadable: %s", e)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Analytics data is unavailable",
        ) from e


# --- Routes ---


@router.get("/dashboard", response_model=DashboardResponse)
def get_dashboard(
    days: int | None = Query(None, description="Time window in days"),
    country: str | None = Query(None, description="Exact country name filter"),
    visit_repo: VisitRepoPort = Depends(get_visit_repo),
    contact_repo: ContactRequestRepoPort = Depends(get_contact_request_repo),
    blog_repo: BlogPostRepoPort = Depends(get_blog_post_repo),
    rules: RulesPort = Depends(get_rules_port),
    time_port: TimePort = Depends(get_time_port),
) -> DashboardResponse:
    """
    Get every dashboard structure for a window and optional country.

    The window must be one of the configured choices.
    """
    window = days if days is not None else rules.get_default_window()
    allowed = rules.get_allowed_windows()
    if window not in allowed:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid days: {window}. Must be one of: {', '.join(map(str, allowed))}",
        )

    out = run_dashboard(
        DashboardInput(
            visits=tuple(_load(visit_repo)),
            contact_requests=tuple(_load(contact_repo)),
            blog_posts=tuple(_load(blog_repo)),
            filter=FilterState(window_days=window, country=country or None),
        ),
        time_port=time_port,
        rules=rules,
    )

    if not out.success:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="; ".join(e.message for e in out.errors),
        )

    return to_dashboard_response(out)


@router.get("/stats", response_model=StatsResponse, response_model_by_alias=True)
def get_stats(visit_repo: VisitRepoPort = Depends(get_visit_repo)) -> StatsResponse:
    """Whole-log totals, unique visitors, pages per visitor and bounce rate."""
    summary = run_stats(StatsInput(visits=tuple(_load(visit_repo)))).summary
    return StatsResponse(
        total_visits=summary.total_visits,
        unique_visitors=summary.unique_visitors,
        avg_pages_per_visitor=summary.avg_records_per_visitor,
        bounce_rate=summary.bounce_rate_percent,
    )


@router.get("/countries", response_model=CountriesResponse)
def get_countries(visit_repo: VisitRepoPort = Depends(get_visit_repo)) -> CountriesResponse:
    """Distinct countries across the whole log."""
    return CountriesResponse(countries=country_options(_load(visit_repo)))
