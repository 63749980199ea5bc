"""Traffic estimates, strategy summary and recommendations for a cluster plan."""

from collections.abc import Sequence

from clusterplan.models.content_cluster import Level
from clusterplan.schemas.content_cluster import EnhancedContentCluster, TrafficEstimates
from clusterplan.schemas.research import BlogResearchResults

BASE_TRAFFIC_PER_ARTICLE = 100
TRAFFIC_MULTIPLIERS = {Level.LOW: 1, Level.MEDIUM: 2, Level.HIGH: 3}

BASE_RECOMMENDATIONS = (
    "Start with pillar content to establish topical authority",
    "Create supporting content to capture long-tail traffic",
    "Focus on user intent and search behavior",
    "Build internal linking between related articles",
    "Monitor performance and optimize based on data",
)


def calculate_traffic_estimates(
    clusters: Sequence[EnhancedContentCluster],
) -> TrafficEstimates:
    """Sum content_count * 100 per cluster, scaled x1/x2/x3 by traffic potential."""
    totals = {level: 0 for level in Level}
    for cluster in clusters:
        level = Level(cluster.estimated_traffic_potential)
        totals[level] += (
            cluster.content_count * BASE_TRAFFIC_PER_ARTICLE * TRAFFIC_MULTIPLIERS[level]
        )
    return TrafficEstimates(
        low=totals[Level.LOW],
        medium=totals[Level.MEDIUM],
        high=totals[Level.HIGH],
    )


def generate_strategy_summary(clusters: Sequence[EnhancedContentCluster]) -> str:
    total_articles = sum(cluster.content_count for cluster in clusters)
    high_potential = sum(
        1 for cluster in clusters if cluster.estimated_traffic_potential == Level.HIGH
    )
    return (
        f"Content strategy includes {len(clusters)} clusters with {total_articles} "
        f"total articles. {high_potential} high-potential clusters identified for "
        "priority development. Focus on establishing topical authority through "
        "comprehensive coverage of each cluster's keyword spectrum."
    )


def generate_recommendations(research: BlogResearchResults) -> list[str]:
    """Fixed recommendations plus the research's recommended approach, if any."""
    recommendations = list(BASE_RECOMMENDATIONS)
    approach = research.content_strategy.recommended_approach.strip()
    if approach:
        recommendations.append(approach)
    return recommendations
