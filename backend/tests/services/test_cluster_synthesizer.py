"""Tests for cluster synthesis.

Tests cover:
- Authority score range at input extremes
- Traffic potential and competition bucket boundaries
- Cluster naming and keys
- Content gap score stand-in
"""

import pytest

from clusterplan.models.content_cluster import ClusterStatus, Level
from clusterplan.schemas.content_cluster import NotYetImplemented
from clusterplan.schemas.research import BlogResearchResults, KeywordCluster
from clusterplan.services.cluster_synthesizer import (
    assess_competition_level,
    calculate_authority_score,
    estimate_traffic_potential,
    generate_cluster_name,
    make_cluster_key,
    synthesize_cluster,
)


def group(**kwargs) -> KeywordCluster:
    defaults = {
        "name": "Email Marketing",
        "primary_keyword": "email marketing",
        "keywords": ["email marketing", "email tips"],
        "avg_competition": 0.5,
        "cluster_score": 0.5,
    }
    defaults.update(kwargs)
    return KeywordCluster(**defaults)


class TestAuthorityScore:
    """Tests for calculate_authority_score."""

    @pytest.mark.parametrize(
        ("cluster_score", "avg_competition", "keyword_count"),
        [
            (0.0, 1.0, 0),
            (1.0, 0.0, 100),
            (5.0, -3.0, 500),
            (-5.0, 7.0, 1),
            (float("nan"), float("nan"), 3),
        ],
    )
    def test_always_in_range(
        self, cluster_score: float, avg_competition: float, keyword_count: int
    ) -> None:
        cluster = group(
            cluster_score=cluster_score,
            avg_competition=avg_competition,
            keywords=[f"kw {i}" for i in range(keyword_count)],
        )
        score = calculate_authority_score(cluster)
        assert isinstance(score, int)
        assert 0 <= score <= 10

    def test_best_case_is_ten(self) -> None:
        cluster = group(
            cluster_score=1.0,
            avg_competition=0.0,
            keywords=[f"kw {i}" for i in range(20)],
        )
        assert calculate_authority_score(cluster) == 10

    def test_worst_case_is_zero(self) -> None:
        cluster = group(cluster_score=0.0, avg_competition=1.0, keywords=[])
        assert calculate_authority_score(cluster) == 0

    def test_midpoint(self) -> None:
        # 10 * (0.4 * 0.5 + 0.4 * 0.5 + 0.2 * 0.5) = 5
        cluster = group(
            cluster_score=0.5,
            avg_competition=0.5,
            keywords=[f"kw {i}" for i in range(10)],
        )
        assert calculate_authority_score(cluster) == 5


class TestBuckets:
    """Tests for traffic potential and competition buckets."""

    @pytest.mark.parametrize(
        ("cluster_score", "expected"),
        [
            (0.71, Level.HIGH),
            (0.7, Level.MEDIUM),
            (0.41, Level.MEDIUM),
            (0.4, Level.LOW),
            (0.0, Level.LOW),
        ],
    )
    def test_traffic_potential(self, cluster_score: float, expected: Level) -> None:
        assert estimate_traffic_potential(cluster_score) == expected

    @pytest.mark.parametrize(
        ("avg_competition", "expected"),
        [
            (0.0, Level.LOW),
            (0.29, Level.LOW),
            (0.3, Level.MEDIUM),
            (0.69, Level.MEDIUM),
            (0.7, Level.HIGH),
            (1.0, Level.HIGH),
        ],
    )
    def test_competition_level(self, avg_competition: float, expected: Level) -> None:
        assert assess_competition_level(avg_competition) == expected


class TestSynthesizeCluster:
    """Tests for synthesize_cluster."""

    def test_cluster_name_with_industry(self) -> None:
        assert generate_cluster_name("Email", "SaaS") == "Email Content Hub (SaaS)"
        assert generate_cluster_name("Email") == "Email Content Hub"

    def test_key_combines_index_and_slug(self) -> None:
        assert make_cluster_key(2, group(name="Email & SMS Marketing")) == (
            "2-email-sms-marketing"
        )

    def test_synthesized_fields(self, research: BlogResearchResults) -> None:
        source = research.keyword_analysis.cluster_groups[0]
        cluster = synthesize_cluster(
            source,
            research,
            ["email marketing", "email campaigns"],
            0,
            target_audience="Founders",
            industry="SaaS",
        )

        assert cluster.key == "0-email-marketing"
        assert cluster.cluster_name == "Email Marketing Content Hub (SaaS)"
        assert cluster.pillar_keyword == "email marketing"
        assert cluster.cluster_status == ClusterStatus.PLANNING
        assert cluster.total_keywords == 2
        assert cluster.content_count == 0
        assert cluster.estimated_traffic_potential == Level.HIGH
        assert cluster.competition_level == Level.MEDIUM
        assert cluster.keyword_clusters == [source]
        assert "Founders" in (cluster.content_strategy or "")

    def test_content_gap_score_is_not_a_number(self, research: BlogResearchResults) -> None:
        source = research.keyword_analysis.cluster_groups[0]
        cluster = synthesize_cluster(source, research, [], 0)

        assert isinstance(cluster.content_gap_score, NotYetImplemented)
        dumped = cluster.model_dump(mode="json")["content_gap_score"]
        assert dumped["kind"] == "not_implemented"
        assert dumped["feature"] == "competitor_gap_analysis"

    def test_content_strategy_override(self, research: BlogResearchResults) -> None:
        source = research.keyword_analysis.cluster_groups[0]
        cluster = synthesize_cluster(
            source, research, [], 0, content_strategy="Custom plan"
        )
        assert cluster.content_strategy == "Custom plan"
