"""
Tests for geo clustering and density tiers.
"""

from __future__ import annotations

import pytest

from src.components.analytics import (
    DensityTier,
    GeoCluster,
    build_map_markers,
    cluster_visits,
    density_tier,
    merge_nearby,
)


class TestClusterVisits:
    """Grouping by city and country."""

    def test_same_city_merges_keeping_first_position(self, make_visit) -> None:
        records = [
            make_visit(city="Paris", country="France", country_code="FR", latitude=48.85, longitude=2.35),
            make_visit(city="Paris", country="France", country_code="FR", latitude=48.90, longitude=2.40),
        ]
        (cluster,) = cluster_visits(records)
        assert cluster.visit_count == 2
        assert (cluster.lat, cluster.lon) == (48.85, 2.35)
        assert cluster.country_code == "FR"

    def test_same_city_name_other_country_is_separate(self, make_visit) -> None:
        records = [
            make_visit(city="Paris", country="France", latitude=48.85, longitude=2.35),
            make_visit(city="Paris", country="United States", latitude=33.66, longitude=-95.55),
        ]
        assert len(cluster_visits(records)) == 2

    def test_records_without_coordinates_skipped(self, make_visit) -> None:
        records = [make_visit(city="Paris", country="France"), make_visit()]
        assert cluster_visits(records) == []

    def test_missing_labels_default(self, make_visit) -> None:
        (cluster,) = cluster_visits([make_visit(latitude=0.5, longitude=0.5)])
        assert (cluster.city, cluster.country, cluster.country_code) == ("Unknown", "Unknown", "XX")

    def test_zero_coordinates_are_located(self, make_visit) -> None:
        assert len(cluster_visits([make_visit(latitude=0.0, longitude=0.0)])) == 1


class TestMergeNearby:
    """Rounded-coordinate merge."""

    def test_merges_within_precision(self) -> None:
        clusters = [
            GeoCluster("France", "FR", "Paris", 48.8566, 2.3522, 3),
            GeoCluster("France", "FR", "Paris 2e", 48.8581, 2.3491, 2),
            GeoCluster("France", "FR", "Lyon", 45.76, 4.84, 1),
        ]
        merged = merge_nearby(clusters)
        assert [(c.city, c.visit_count) for c in merged] == [("Paris", 5), ("Lyon", 1)]

    def test_precision_zero_is_coarser(self) -> None:
        clusters = [
            GeoCluster("France", "FR", "Paris", 48.85, 2.35, 1),
            GeoCluster("France", "FR", "Versailles", 48.80, 2.13, 1),
        ]
        assert len(merge_nearby(clusters, precision=2)) == 2
        assert len(merge_nearby(clusters, precision=0)) == 1


class TestDensityTier:
    """Thresholds are strict: >20, >10, >5, >2."""

    @pytest.mark.parametrize(
        ("count", "tier"),
        [
            (21, DensityTier.XL),
            (20, DensityTier.L),
            (11, DensityTier.L),
            (10, DensityTier.M),
            (6, DensityTier.M),
            (5, DensityTier.S),
            (3, DensityTier.S),
            (2, DensityTier.XS),
            (0, DensityTier.XS),
        ],
    )
    def test_tiers(self, count: int, tier: DensityTier) -> None:
        assert density_tier(count, 100) == tier

    def test_zero_total(self) -> None:
        assert density_tier(5, 0) == DensityTier.XS

    def test_marker_radius(self) -> None:
        assert DensityTier.XL.marker_radius == 12
        assert DensityTier.XS.marker_radius == 4

    def test_markers(self) -> None:
        cluster = GeoCluster("Spain", "ES", "Madrid", 40.4, -3.7, 1)
        (marker,) = build_map_markers([cluster], 4)
        assert marker.share_percent == 25.0
        assert marker.tier == DensityTier.XL
