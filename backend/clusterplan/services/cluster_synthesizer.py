"""Cluster synthesis: turn a keyword cluster group into an EnhancedContentCluster.

Bucket boundaries (exact threshold values fall on the lower side for traffic
and on the upper side for competition):

    traffic potential   cluster_score > 0.7 high, > 0.4 medium, else low
    competition level   avg_competition < 0.3 low, < 0.7 medium, else high

The content gap score needs competitor analysis that does not exist yet, so
it is emitted as a NotYetImplemented marker instead of a number.
"""

import math

from clusterplan.models.content_cluster import ClusterStatus, Level
from clusterplan.schemas.content_cluster import (
    EnhancedContentCluster,
    not_implemented,
)
from clusterplan.schemas.research import BlogResearchResults, KeywordCluster
from clusterplan.utils.text import slugify

HIGH_TRAFFIC_THRESHOLD = 0.7
MEDIUM_TRAFFIC_THRESHOLD = 0.4
LOW_COMPETITION_THRESHOLD = 0.3
MEDIUM_COMPETITION_THRESHOLD = 0.7

# Keyword count at which the saturation term of the authority score maxes out
AUTHORITY_SATURATION_KEYWORDS = 20

CONTENT_GAP_FEATURE = "competitor_gap_analysis"


def _unit(value: float) -> float:
    if math.isnan(value):
        return 0.0
    return max(0.0, min(1.0, value))


def generate_cluster_name(group_name: str, industry: str | None = None) -> str:
    """Build the display name of a cluster hub."""
    industry_context = f" ({industry})" if industry else ""
    return f"{group_name} Content Hub{industry_context}"


def generate_cluster_description(
    cluster: KeywordCluster,
    industry: str | None = None,
    target_audience: str | None = None,
) -> str:
    industry_context = f" in the {industry} industry" if industry else ""
    audience_context = f" for {target_audience}" if target_audience else ""
    return (
        f"Comprehensive content cluster focused on {cluster.primary_keyword}"
        f"{industry_context}{audience_context}. Includes pillar content, "
        "supporting articles, and long-tail content to establish authority and "
        "capture traffic across the entire topic spectrum."
    )


def generate_content_strategy(
    cluster: KeywordCluster, target_audience: str | None = None
) -> str:
    audience_context = f" for {target_audience}" if target_audience else ""
    return (
        f"Develop comprehensive content around {cluster.primary_keyword}"
        f"{audience_context} using a hub-and-spoke model. Create 1-3 pillar "
        "pieces, 3-6 supporting articles, long-tail pieces and tutorials to "
        "capture traffic across all search intents and establish topical authority."
    )


def calculate_authority_score(cluster: KeywordCluster) -> int:
    """Estimate topical-authority potential on a 0-10 integer scale.

    10 * (0.4 * cluster_score + 0.4 * (1 - avg_competition)
          + 0.2 * min(keyword_count / 20, 1)), rounded half up.
    Inputs are clamped to [0, 1] so extreme values stay in range.
    """
    score = _unit(cluster.cluster_score)
    competition = _unit(cluster.avg_competition)
    saturation = min(len(cluster.keywords) / AUTHORITY_SATURATION_KEYWORDS, 1.0)

    raw = 10 * (0.4 * score + 0.4 * (1 - competition) + 0.2 * saturation)
    return max(0, min(10, math.floor(raw + 0.5)))


def estimate_traffic_potential(cluster_score: float) -> Level:
    """Bucket a cluster score. Exactly 0.7 is medium, exactly 0.4 is low."""
    if cluster_score > HIGH_TRAFFIC_THRESHOLD:
        return Level.HIGH
    if cluster_score > MEDIUM_TRAFFIC_THRESHOLD:
        return Level.MEDIUM
    return Level.LOW


def assess_competition_level(avg_competition: float) -> Level:
    """Bucket average competition. Exactly 0.3 is medium, exactly 0.7 is high."""
    if avg_competition < LOW_COMPETITION_THRESHOLD:
        return Level.LOW
    if avg_competition < MEDIUM_COMPETITION_THRESHOLD:
        return Level.MEDIUM
    return Level.HIGH


def make_cluster_key(index: int, group: KeywordCluster) -> str:
    """Client-side key linking articles to a cluster before it has an id."""
    return f"{index}-{slugify(group.name)}"


def synthesize_cluster(
    group: KeywordCluster,
    research: BlogResearchResults,
    selected_keywords: list[str],
    index: int,
    target_audience: str | None = None,
    industry: str | None = None,
    content_strategy: str | None = None,
) -> EnhancedContentCluster:
    """Build an EnhancedContentCluster for one keyword cluster group.

    Content counts start at zero; the orchestrator fills them in from the
    planned articles.
    """
    return EnhancedContentCluster(
        key=make_cluster_key(index, group),
        cluster_name=generate_cluster_name(group.name, industry),
        pillar_keyword=group.primary_keyword,
        cluster_description=generate_cluster_description(
            group, industry, target_audience
        ),
        cluster_status=ClusterStatus.PLANNING,
        authority_score=calculate_authority_score(group),
        total_keywords=len(selected_keywords),
        research_data=research,
        keyword_clusters=[group],
        selected_keywords=selected_keywords,
        estimated_traffic_potential=estimate_traffic_potential(group.cluster_score),
        content_gap_score=not_implemented(
            CONTENT_GAP_FEATURE,
            "Content gap scoring requires competitor content analysis",
        ),
        competition_level=assess_competition_level(group.avg_competition),
        target_audience=target_audience,
        content_strategy=content_strategy
        or generate_content_strategy(group, target_audience),
    )
