"""
Geo clustering for the visitor map.

Records are grouped by (city, country); each cluster keeps the first-seen
coordinates. merge_nearby() then folds clusters that land on the same
rounded coordinate. Density tiers size the markers by share of visits.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from ._rollup import percentage_of
from .models import DensityTier, GeoCluster, MapMarker, VisitRecord

UNKNOWN_PLACE = "Unknown"
UNKNOWN_COUNTRY_CODE = "XX"

# (share strictly above, tier), checked top-down.
DENSITY_THRESHOLDS: tuple[tuple[float, DensityTier], ...] = (
    (20.0, DensityTier.XL),
    (10.0, DensityTier.L),
    (5.0, DensityTier.M),
    (2.0, DensityTier.S),
)

MERGE_PRECISION = 2


def cluster_visits(records: Iterable[VisitRecord]) -> list[GeoCluster]:
    """Group located visits by city and country, in first-seen order."""
    clusters: dict[tuple[str | None, str | None], GeoCluster] = {}

    for record in records:
        if record.latitude is None or record.longitude is None:
            continue

        key = (record.city, record.country)
        existing = clusters.get(key)
        if existing is not None:
            clusters[key] = _with_count(existing, existing.visit_count + 1)
            continue

        clusters[key] = GeoCluster(
            country=record.country or UNKNOWN_PLACE,
            country_code=record.country_code or UNKNOWN_COUNTRY_CODE,
            city=record.city or UNKNOWN_PLACE,
            lat=record.latitude,
            lon=record.longitude,
            visit_count=1,
        )

    return list(clusters.values())


def merge_nearby(
    clusters: Iterable[GeoCluster],
    precision: int = MERGE_PRECISION,
) -> list[GeoCluster]:
    """Merge clusters whose coordinates match after rounding."""
    merged: dict[tuple[float, float], GeoCluster] = {}

    for cluster in clusters:
        key = (round(cluster.lat, precision), round(cluster.lon, precision))
        existing = merged.get(key)
        if existing is None:
            merged[key] = cluster
        else:
            merged[key] = _with_count(existing, existing.visit_count + cluster.visit_count)

    return list(merged.values())


def density_tier(visit_count: int, total_visits: int) -> DensityTier:
    """Size class from the cluster's share of all filtered visits."""
    share = percentage_of(visit_count, total_visits)
    for threshold, tier in DENSITY_THRESHOLDS:
        if share > threshold:
            return tier
    return DensityTier.XS


def build_map_markers(clusters: Sequence[GeoCluster], total_visits: int) -> list[MapMarker]:
    """Pair clusters with share and density tier."""
    return [
        MapMarker(
            cluster=cluster,
            share_percent=percentage_of(cluster.visit_count, total_visits),
            tier=density_tier(cluster.visit_count, total_visits),
        )
        for cluster in clusters
    ]


def _with_count(cluster: GeoCluster, visit_count: int) -> GeoCluster:
    return GeoCluster(
        country=cluster.country,
        country_code=cluster.country_code,
        city=cluster.city,
        lat=cluster.lat,
        lon=cluster.lon,
        visit_count=visit_count,
    )
