"""Schemas layer - Pydantic models for API validation.

Schemas define the shape of data for API requests and responses.
They handle validation, serialization, and documentation.
"""

from clusterplan.schemas.content_cluster import (
    ArticleOutline,
    ArticleSection,
    CalloutBox,
    ClusterGenerationRequest,
    ClusterGenerationResponse,
    ContentClusterResponse,
    ContentGap,
    ContentIdeaResponse,
    EnhancedContentCluster,
    ExternalResource,
    FAQItem,
    HumanReadableArticle,
    InternalLink,
    Measured,
    NotYetImplemented,
    SaveClustersRequest,
    SaveClustersResponse,
    SEOInsights,
    TrafficEstimates,
)
from clusterplan.schemas.research import (
    BlogResearchResults,
    KeywordAnalysis,
    KeywordCluster,
    KeywordData,
    TitleSuggestion,
)

__all__ = [
    "ArticleOutline",
    "ArticleSection",
    "BlogResearchResults",
    "CalloutBox",
    "ClusterGenerationRequest",
    "ClusterGenerationResponse",
    "ContentClusterResponse",
    "ContentGap",
    "ContentIdeaResponse",
    "EnhancedContentCluster",
    "ExternalResource",
    "FAQItem",
    "HumanReadableArticle",
    "InternalLink",
    "KeywordAnalysis",
    "KeywordCluster",
    "KeywordData",
    "Measured",
    "NotYetImplemented",
    "SEOInsights",
    "SaveClustersRequest",
    "SaveClustersResponse",
    "TitleSuggestion",
    "TrafficEstimates",
]
