"""Services layer - Business logic and orchestration.

Services contain the core planning logic and coordinate
between repositories, schemas, and the persistence gateway.
"""

from clusterplan.services.article_planner import (
    ArticlePlanner,
    assign_waves,
    convert_difficulty_to_score,
    estimate_traffic_bucket,
    generate_meta_description,
    generate_title,
    identify_seo_opportunities,
)
from clusterplan.services.cluster_persistence import (
    ClusterPersistenceGateway,
    PersistenceError,
    PersistenceErrorCode,
    SaveResult,
)
from clusterplan.services.cluster_synthesizer import (
    assess_competition_level,
    calculate_authority_score,
    estimate_traffic_potential,
    synthesize_cluster,
)
from clusterplan.services.content_clusters import (
    ContentClusterGenerationError,
    ContentClusterService,
    ContentClusterServiceError,
    generate_clusters_from_research,
    get_content_cluster_service,
)
from clusterplan.services.keyword_selector import select_top_keywords
from clusterplan.services.traffic_aggregator import (
    calculate_traffic_estimates,
    generate_recommendations,
    generate_strategy_summary,
)

__all__ = [
    "ArticlePlanner",
    "ClusterPersistenceGateway",
    "ContentClusterGenerationError",
    "ContentClusterService",
    "ContentClusterServiceError",
    "PersistenceError",
    "PersistenceErrorCode",
    "SaveResult",
    "assess_competition_level",
    "assign_waves",
    "calculate_authority_score",
    "calculate_traffic_estimates",
    "convert_difficulty_to_score",
    "estimate_traffic_bucket",
    "estimate_traffic_potential",
    "generate_clusters_from_research",
    "generate_meta_description",
    "generate_recommendations",
    "generate_strategy_summary",
    "generate_title",
    "get_content_cluster_service",
    "identify_seo_opportunities",
    "select_top_keywords",
    "synthesize_cluster",
]
