"""ContentClusterService: generate an enhanced content plan from keyword research.

Pipeline per keyword cluster group:
1. Select the top keywords (weighted ranking, capped per cluster)
2. Synthesize an EnhancedContentCluster (name, authority, buckets)
3. Plan pillar / supporting / long-tail / tutorial article ideas
4. Fill in the cluster's content counts from the planned articles

Then aggregate traffic estimates, a strategy summary and recommendations
over all clusters.

Generation is pure computation: nothing is persisted here. See
services/cluster_persistence.py for the persistence gateway.

ERROR LOGGING REQUIREMENTS:
- Log method entry/exit at DEBUG level with parameters (sanitized)
- Log all exceptions with full stack trace and context
- Log cluster groups that produce no articles at WARNING level
- Add timing logs for operations >1 second
"""

import random
import time

from pydantic import ValidationError

from clusterplan.core.config import get_settings
from clusterplan.core.logging import get_logger, planning_logger
from clusterplan.models.content_cluster import ContentType
from clusterplan.schemas.content_cluster import (
    ClusterGenerationRequest,
    ClusterGenerationResponse,
    EnhancedContentCluster,
    HumanReadableArticle,
)
from clusterplan.services.article_planner import ArticlePlanner
from clusterplan.services.cluster_synthesizer import synthesize_cluster
from clusterplan.services.keyword_selector import select_top_keywords
from clusterplan.services.traffic_aggregator import (
    calculate_traffic_estimates,
    generate_recommendations,
    generate_strategy_summary,
)

logger = get_logger(__name__)

# Threshold for logging slow operations (in milliseconds)
SLOW_OPERATION_THRESHOLD_MS = 1000


class ContentClusterServiceError(Exception):
    """Base exception for content cluster service errors."""

    pass


class ContentClusterGenerationError(ContentClusterServiceError):
    """Raised when a research payload cannot be turned into a content plan."""

    def __init__(self, message: str, cluster_name: str | None = None):
        self.cluster_name = cluster_name
        super().__init__(message)


def with_content_counts(
    cluster: EnhancedContentCluster, articles: list[HumanReadableArticle]
) -> EnhancedContentCluster:
    """Return a copy of the cluster whose counts match its articles."""
    own = [a for a in articles if a.cluster_key == cluster.key]
    return cluster.model_copy(
        update={
            "content_count": len(own),
            "pillar_content_count": sum(
                1 for a in own if a.content_type == ContentType.PILLAR
            ),
            "supporting_content_count": sum(
                1 for a in own if a.content_type == ContentType.SUPPORTING
            ),
            "long_tail_content_count": sum(
                1 for a in own if a.content_type == ContentType.LONG_TAIL
            ),
        }
    )


class ContentClusterService:
    """Turns keyword research results into enhanced content clusters."""

    def __init__(
        self,
        planner: ArticlePlanner | None = None,
        default_max_keywords: int | None = None,
    ) -> None:
        self._planner = planner or ArticlePlanner()
        self._default_max_keywords = default_max_keywords

        logger.debug(
            "ContentClusterService initialized",
            extra={"default_max_keywords": default_max_keywords},
        )

    def _resolve_max_keywords(self, request: ClusterGenerationRequest) -> int:
        if request.max_keywords_per_cluster is not None:
            return request.max_keywords_per_cluster
        if self._default_max_keywords is not None:
            return self._default_max_keywords
        return get_settings().default_max_keywords_per_cluster

    def generate_clusters_from_research(
        self, request: ClusterGenerationRequest
    ) -> ClusterGenerationResponse:
        """Generate clusters and planned articles for every cluster group.

        Args:
            request: Research results plus optional audience, industry,
                strategy override and keyword cap

        Returns:
            ClusterGenerationResponse with clusters, articles, totals,
            traffic estimates and recommendations

        Raises:
            ContentClusterGenerationError: If a planned entity fails validation
        """
        start_time = time.monotonic()
        research = request.research_results
        groups = research.keyword_analysis.cluster_groups
        keyword_analysis = research.keyword_analysis.keyword_analysis
        max_keywords = self._resolve_max_keywords(request)

        planning_logger.generation_start(
            cluster_group_count=len(groups),
            max_keywords_per_cluster=max_keywords,
            industry=request.industry,
        )

        clusters: list[EnhancedContentCluster] = []
        articles: list[HumanReadableArticle] = []

        for index, group in enumerate(groups):
            try:
                selected = select_top_keywords(
                    group.keywords, max_keywords, keyword_analysis
                )
                cluster = synthesize_cluster(
                    group,
                    research,
                    selected,
                    index,
                    target_audience=request.target_audience,
                    industry=request.industry,
                    content_strategy=request.content_strategy,
                )
                cluster_articles = self._planner.plan_cluster_articles(
                    cluster, research, request.target_audience
                )
            except ValidationError as e:
                logger.error(
                    "Failed to build content plan for cluster group",
                    extra={
                        "cluster_name": group.name,
                        "error_type": type(e).__name__,
                        "error_message": str(e),
                    },
                    exc_info=True,
                )
                raise ContentClusterGenerationError(
                    f"Invalid content plan for cluster '{group.name}': {e}",
                    cluster_name=group.name,
                ) from e

            if not cluster_articles:
                planning_logger.empty_cluster_group(group.name)

            clusters.append(with_content_counts(cluster, cluster_articles))
            articles.extend(cluster_articles)

        traffic_estimates = calculate_traffic_estimates(clusters)
        response = ClusterGenerationResponse(
            clusters=clusters,
            articles=articles,
            total_articles_generated=len(articles),
            content_strategy_summary=generate_strategy_summary(clusters),
            traffic_estimates=traffic_estimates,
            recommendations=generate_recommendations(research),
        )

        duration_ms = (time.monotonic() - start_time) * 1000
        planning_logger.generation_complete(
            cluster_count=len(clusters),
            article_count=len(articles),
            traffic_estimates=traffic_estimates.model_dump(),
            duration_ms=duration_ms,
        )
        if duration_ms > SLOW_OPERATION_THRESHOLD_MS:
            logger.warning(
                "Slow cluster generation",
                extra={
                    "duration_ms": round(duration_ms, 2),
                    "cluster_count": len(clusters),
                },
            )

        return response


# Global ContentClusterService instance
_content_cluster_service: ContentClusterService | None = None


def get_content_cluster_service() -> ContentClusterService:
    """Get the global ContentClusterService instance.

    Usage:
        from clusterplan.services.content_clusters import get_content_cluster_service
        service = get_content_cluster_service()
        response = service.generate_clusters_from_research(request)
    """
    global _content_cluster_service
    if _content_cluster_service is None:
        _content_cluster_service = ContentClusterService()
        logger.info("ContentClusterService singleton created")
    return _content_cluster_service


def generate_clusters_from_research(
    request: ClusterGenerationRequest,
    rng: random.Random | None = None,
) -> ClusterGenerationResponse:
    """Convenience function for cluster generation.

    Args:
        request: Cluster generation request
        rng: Optional seeded random source for title phrasing

    Returns:
        ClusterGenerationResponse
    """
    if rng is not None:
        service = ContentClusterService(planner=ArticlePlanner(rng=rng))
    else:
        service = get_content_cluster_service()
    return service.generate_clusters_from_research(request)
