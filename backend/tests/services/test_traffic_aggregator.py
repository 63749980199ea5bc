"""Tests for traffic estimates, strategy summary and recommendations."""

from clusterplan.models.content_cluster import Level
from clusterplan.schemas.content_cluster import EnhancedContentCluster, not_implemented
from clusterplan.schemas.research import BlogResearchResults
from clusterplan.services.traffic_aggregator import (
    BASE_RECOMMENDATIONS,
    calculate_traffic_estimates,
    generate_recommendations,
    generate_strategy_summary,
)


def cluster(
    research: BlogResearchResults, key: str, level: Level, content_count: int
) -> EnhancedContentCluster:
    return EnhancedContentCluster(
        key=key,
        cluster_name=f"Cluster {key}",
        pillar_keyword="email marketing",
        authority_score=5,
        total_keywords=content_count,
        content_count=content_count,
        research_data=research,
        estimated_traffic_potential=level,
        content_gap_score=not_implemented("competitor_gap_analysis"),
        competition_level=Level.MEDIUM,
    )


class TestTrafficEstimates:
    """Tests for calculate_traffic_estimates."""

    def test_multipliers_per_level(self, research: BlogResearchResults) -> None:
        clusters = [
            cluster(research, "a", Level.LOW, 4),
            cluster(research, "b", Level.MEDIUM, 3),
            cluster(research, "c", Level.HIGH, 2),
            cluster(research, "d", Level.HIGH, 1),
        ]
        estimates = calculate_traffic_estimates(clusters)

        assert estimates.low == 400
        assert estimates.medium == 600
        assert estimates.high == 900

    def test_empty(self) -> None:
        estimates = calculate_traffic_estimates([])
        assert (estimates.low, estimates.medium, estimates.high) == (0, 0, 0)


class TestSummaryAndRecommendations:
    """Tests for generate_strategy_summary and generate_recommendations."""

    def test_summary_counts(self, research: BlogResearchResults) -> None:
        clusters = [
            cluster(research, "a", Level.HIGH, 5),
            cluster(research, "b", Level.LOW, 2),
        ]
        summary = generate_strategy_summary(clusters)

        assert "2 clusters with 7 total articles" in summary
        assert "1 high-potential clusters" in summary

    def test_recommendations_include_research_approach(
        self, research: BlogResearchResults
    ) -> None:
        recommendations = generate_recommendations(research)

        assert recommendations[: len(BASE_RECOMMENDATIONS)] == list(BASE_RECOMMENDATIONS)
        assert recommendations[-1] == "Lead with practical how-to content"

    def test_blank_approach_is_skipped(self, research: BlogResearchResults) -> None:
        research.content_strategy.recommended_approach = "   "
        assert generate_recommendations(research) == list(BASE_RECOMMENDATIONS)
