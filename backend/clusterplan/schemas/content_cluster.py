"""Pydantic v2 schemas for enhanced content clusters and planned articles.

Planning structures:
- ArticleOutline / ArticleSection / CalloutBox / FAQItem: Structured outlines
- SEOInsights, ContentGap, InternalLink, ExternalResource: Per-article metadata
- Measured / NotYetImplemented: Tagged values separating real scores from
  stand-ins for analyses that do not exist yet
- EnhancedContentCluster: A planned topic hub
- HumanReadableArticle: A planned article (content idea)

API schemas:
- ClusterGenerationRequest / ClusterGenerationResponse: Plan generation
- SaveClustersRequest / SaveClustersResponse: Generate and persist
- ContentClusterResponse / ContentIdeaResponse: Persisted rows
"""

from datetime import datetime
from typing import Annotated, Any, Generic, Literal, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from clusterplan.models.content_cluster import (
    ClusterStatus,
    ContentIdeaStatus,
    ContentType,
    Level,
)
from clusterplan.schemas.research import BlogResearchResults, KeywordCluster

T = TypeVar("T")

# =============================================================================
# PLACEHOLDER VALUES
# =============================================================================


class Measured(BaseModel, Generic[T]):
    """A value produced by a real computation."""

    kind: Literal["measured"] = "measured"
    value: T


class NotYetImplemented(BaseModel):
    """Stand-in for a value whose analysis does not exist yet."""

    kind: Literal["not_implemented"] = "not_implemented"
    feature: str = Field(..., description="Name of the missing analysis")
    reason: str = Field(..., description="Why no value is available")


def not_implemented(feature: str, reason: str | None = None) -> NotYetImplemented:
    """Build a NotYetImplemented marker for a missing analysis."""
    return NotYetImplemented(
        feature=feature,
        reason=reason or f"{feature} is not available yet",
    )


def measured_or_none(value: "Measured[Any] | NotYetImplemented") -> Any:
    """Return the measured value as JSON-ready data, or None for a stand-in.

    Used when writing to the database: stand-ins are stored as NULL.
    """
    if isinstance(value, Measured):
        return value.model_dump(mode="json")["value"]
    return None


# =============================================================================
# OUTLINE
# =============================================================================


class CalloutBox(BaseModel):
    """Highlighted box inside an article section."""

    type: Literal["tip", "warning", "example", "quote", "statistic"]
    title: str
    content: str
    icon: str | None = None


class FAQItem(BaseModel):
    """Question and answer pair for an article FAQ block."""

    question: str
    answer: str
    keywords: list[str] = Field(default_factory=list)


class ArticleSection(BaseModel):
    """One heading of an article outline."""

    heading: str
    level: Literal["h2", "h3", "h4"] = "h2"
    description: str
    key_points: list[str] = Field(default_factory=list)
    keywords: list[str] = Field(default_factory=list)
    estimated_word_count: int = Field(..., ge=0)
    subsections: list["ArticleSection"] = Field(default_factory=list)
    callout_boxes: list[CalloutBox] = Field(default_factory=list)


class OutlineIntroduction(BaseModel):
    """Opening of an article outline."""

    hook: str
    problem_statement: str
    value_proposition: str
    preview: list[str] = Field(default_factory=list)


class OutlineConclusion(BaseModel):
    """Closing of an article outline."""

    summary: str
    key_takeaways: list[str] = Field(default_factory=list)
    call_to_action: str


class ArticleOutline(BaseModel):
    """Full article outline. Only pillar articles carry an FAQ section."""

    introduction: OutlineIntroduction
    sections: list[ArticleSection]
    conclusion: OutlineConclusion
    faq_section: list[FAQItem] | None = None


# =============================================================================
# ARTICLE METADATA
# =============================================================================


class SEOInsights(BaseModel):
    """SEO summary for a planned article."""

    primary_keyword: str
    secondary_keywords: list[str] = Field(default_factory=list)
    semantic_keywords: list[str] = Field(default_factory=list)
    keyword_difficulty: int = Field(..., ge=0, le=10)
    search_volume: int = Field(0, ge=0)
    competition_level: Level
    title_optimization_score: float = Field(..., ge=0, le=10)
    meta_description_score: float = Field(..., ge=0, le=10)
    readability_score: float = Field(..., ge=0, le=10)
    featured_snippet_opportunity: bool
    related_searches: list[str] = Field(default_factory=list)
    people_also_ask: list[str] = Field(default_factory=list)
    opportunities: list[str] = Field(default_factory=list)


class ContentGap(BaseModel):
    """A gap found in competitor coverage of a keyword."""

    competitor_url: str
    competitor_title: str
    gap_description: str
    opportunity_score: float
    suggested_approach: str


class InternalLink(BaseModel):
    """Suggested link to another article of the same site."""

    target_content_id: str | None = None
    anchor_text: str
    target_url: str | None = None
    context: str
    link_value: Level
    suggested_position: Literal["introduction", "body", "conclusion"]


class ExternalResource(BaseModel):
    """Suggested external citation."""

    url: str
    title: str
    type: Literal["study", "tool", "guide", "news", "statistic"]
    credibility_score: float
    relevance_score: float
    suggested_context: str


ContentGapScore = Annotated[
    Measured[int] | NotYetImplemented, Field(discriminator="kind")
]
ContentGapList = Annotated[
    Measured[list[ContentGap]] | NotYetImplemented, Field(discriminator="kind")
]
ExternalResourceList = Annotated[
    Measured[list[ExternalResource]] | NotYetImplemented,
    Field(discriminator="kind"),
]


# =============================================================================
# PLANNING ENTITIES
# =============================================================================


class EnhancedContentCluster(BaseModel):
    """A planned topic hub built from one keyword cluster group.

    The `key` links planned articles to their cluster before the database
    assigns an id.
    """

    key: str = Field(..., min_length=1, description="Client-side cluster key")
    cluster_name: str = Field(..., min_length=1, description="Display name")
    pillar_keyword: str = Field(..., description="Head keyword of the hub")
    cluster_description: str | None = Field(None, description="Description")
    cluster_status: ClusterStatus = Field(
        ClusterStatus.PLANNING, description="Workflow status"
    )
    authority_score: int = Field(..., ge=0, le=10, description="Authority (0-10)")
    total_keywords: int = Field(..., ge=0, description="Selected keyword count")
    content_count: int = Field(0, ge=0, description="Planned article count")
    pillar_content_count: int = Field(0, ge=0)
    supporting_content_count: int = Field(0, ge=0)
    long_tail_content_count: int = Field(0, ge=0)
    research_data: BlogResearchResults = Field(
        ..., description="Research payload the cluster was built from"
    )
    keyword_clusters: list[KeywordCluster] = Field(
        default_factory=list, description="Originating keyword cluster groups"
    )
    selected_keywords: list[str] = Field(
        default_factory=list, description="Ranked keywords chosen for the hub"
    )
    estimated_traffic_potential: Level
    content_gap_score: ContentGapScore
    competition_level: Level
    target_audience: str | None = None
    content_strategy: str | None = None


class HumanReadableArticle(BaseModel):
    """A planned article belonging to exactly one cluster."""

    cluster_key: str = Field(..., description="Key of the owning cluster")
    content_type: ContentType
    target_keyword: str
    title: str
    subtitle: str | None = None
    meta_description: str = Field(..., max_length=160)
    url_slug: str
    status: ContentIdeaStatus = ContentIdeaStatus.IDEA
    priority: int = Field(..., ge=0, le=10)
    estimated_word_count: int = Field(..., ge=0)
    estimated_reading_time: int = Field(..., ge=0)
    target_audience: str = "general"
    tone: str
    content_outline: ArticleOutline
    seo_insights: SEOInsights
    content_gaps: ContentGapList
    internal_linking_opportunities: list[InternalLink] = Field(default_factory=list)
    external_resources: ExternalResourceList
    estimated_traffic: int = Field(..., ge=0)
    difficulty_score: int = Field(..., ge=0, le=10)
    freshness_score: int = Field(..., ge=0, le=10)


# =============================================================================
# API SCHEMAS
# =============================================================================


class ClusterGenerationRequest(BaseModel):
    """Request schema for generating clusters from research results."""

    research_results: BlogResearchResults = Field(
        ..., description="Keyword research bundle"
    )
    target_audience: str | None = Field(None, description="Intended readership")
    industry: str | None = Field(None, description="Industry label for cluster names")
    content_strategy: str | None = Field(
        None, description="Overrides the generated content strategy text"
    )
    max_keywords_per_cluster: int | None = Field(
        None,
        ge=1,
        le=500,
        description="Keyword cap per cluster (server default when omitted)",
    )


class TrafficEstimates(BaseModel):
    """Estimated monthly traffic grouped by cluster traffic potential."""

    low: int = 0
    medium: int = 0
    high: int = 0


class ClusterGenerationResponse(BaseModel):
    """Response schema for cluster generation."""

    clusters: list[EnhancedContentCluster]
    articles: list[HumanReadableArticle]
    total_articles_generated: int
    content_strategy_summary: str
    traffic_estimates: TrafficEstimates
    recommendations: list[str]


class SaveClustersRequest(BaseModel):
    """Request schema for generating and persisting clusters."""

    request: ClusterGenerationRequest


class SaveClustersResponse(BaseModel):
    """Response schema after clusters and ideas were persisted."""

    cluster_ids: list[str]
    total_articles_generated: int
    content_strategy_summary: str
    traffic_estimates: TrafficEstimates
    recommendations: list[str]


class ContentClusterResponse(BaseModel):
    """A persisted content cluster."""

    model_config = ConfigDict(from_attributes=True)

    id: str = Field(..., description="ContentCluster UUID")
    user_id: str
    org_id: str
    cluster_name: str
    pillar_keyword: str
    cluster_description: str | None = None
    cluster_status: str
    authority_score: int
    total_keywords: int
    content_count: int
    pillar_content_count: int
    supporting_content_count: int
    long_tail_content_count: int
    estimated_traffic_potential: str | None = None
    content_gap_score: int | None = None
    competition_level: str | None = None
    target_audience: str | None = None
    content_strategy: str | None = None
    created_at: datetime
    updated_at: datetime


class ContentIdeaResponse(BaseModel):
    """A persisted content idea."""

    model_config = ConfigDict(from_attributes=True)

    id: str = Field(..., description="ClusterContentIdea UUID")
    cluster_id: str
    content_type: str
    target_keyword: str
    keyword_sequence: int
    title: str
    subtitle: str | None = None
    meta_description: str | None = None
    url_slug: str | None = None
    status: str
    priority: int
    word_count_target: int
    estimated_reading_time: int | None = None
    tone: str | None = None
    outline: dict[str, Any] | None = None
    seo_insights: dict[str, Any] | None = None
    internal_links_planned: list[dict[str, Any]] | None = None
    search_volume: int | None = None
    keyword_difficulty: int | None = None
    estimated_traffic: int | None = None
    created_at: datetime
