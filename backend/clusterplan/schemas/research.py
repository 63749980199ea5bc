"""Pydantic v2 schemas for keyword research results.

These mirror the payload produced by the external keyword research service.
They are read-only inputs to cluster planning; unknown fields are ignored so
newer research payloads keep validating.

- KeywordData: Per-keyword metrics (volume, difficulty, trend, competition, CPC)
- KeywordCluster: A named group of keywords sharing a primary keyword
- KeywordAnalysis: Keyword map plus cluster groups
- TitleSuggestion: A suggested article title with scores
- BlogResearchResults: The full research bundle
"""

from pydantic import BaseModel, ConfigDict, Field


class KeywordData(BaseModel):
    """Metrics for a single researched keyword."""

    model_config = ConfigDict(extra="ignore")

    keyword: str = Field(..., description="The keyword phrase")
    search_volume: int | None = Field(
        None, ge=0, description="Estimated monthly search volume"
    )
    difficulty: str = Field(
        "medium", description="Ranking difficulty (easy, medium or hard)"
    )
    competition: float = Field(0.0, description="Competition score (0-1)")
    cpc: float | None = Field(None, ge=0, description="Cost per click")
    trend_score: float | None = Field(
        None, description="Trend score (0-1, or a 0-100 percentage)"
    )
    recommended: bool = Field(
        False, description="Whether the research service recommends this keyword"
    )
    reason: str = Field("", description="Why the keyword was recommended or not")
    related_keywords: list[str] = Field(
        default_factory=list, description="Related keyword phrases"
    )
    long_tail_keywords: list[str] = Field(
        default_factory=list, description="Long-tail variants of the keyword"
    )


class KeywordCluster(BaseModel):
    """A named group of keywords around one primary keyword."""

    model_config = ConfigDict(extra="ignore")

    id: str = Field("", description="Research-side cluster identifier")
    name: str = Field(..., description="Cluster display name")
    keywords: list[str] = Field(
        default_factory=list, description="Member keywords in research order"
    )
    primary_keyword: str = Field(..., description="Head keyword of the cluster")
    avg_difficulty: str = Field("medium", description="Average difficulty label")
    avg_competition: float = Field(0.0, description="Average competition (0-1)")
    cluster_score: float = Field(0.0, description="Aggregate cluster quality (0-1)")


class KeywordAnalysis(BaseModel):
    """Keyword metrics keyed by keyword plus the derived cluster groups."""

    model_config = ConfigDict(extra="ignore")

    keyword_analysis: dict[str, KeywordData] = Field(
        default_factory=dict, description="Per-keyword metrics"
    )
    overall_score: float = Field(0.0, description="Overall research score")
    recommendations: list[str] = Field(
        default_factory=list, description="Research-level recommendations"
    )
    cluster_groups: list[KeywordCluster] = Field(
        default_factory=list, description="Keyword cluster groups"
    )


class TitleSuggestion(BaseModel):
    """A title suggested by the research service."""

    model_config = ConfigDict(extra="ignore")

    title: str = Field(..., description="Suggested title")
    type: str = Field("guide", description="Title style (question, how_to, list, ...)")
    seo_score: float = Field(0.0, description="SEO score")
    readability_score: float = Field(0.0, description="Readability score")
    keyword_density: float = Field(0.0, description="Keyword density")
    estimated_traffic: int = Field(0, description="Estimated traffic")
    reasoning: str = Field("", description="Why this title was suggested")


class ContentStrategyHints(BaseModel):
    """Strategy hints attached to a research result."""

    model_config = ConfigDict(extra="ignore")

    recommended_approach: str = ""
    target_audience: str = ""
    content_angle: str = ""
    competitor_analysis: str = ""


class ResearchSEOInsights(BaseModel):
    """SEO hints attached to a research result."""

    model_config = ConfigDict(extra="ignore")

    primary_keyword: str = ""
    secondary_keywords: list[str] = Field(default_factory=list)
    content_length_recommendation: int = 0
    internal_linking_opportunities: list[str] = Field(default_factory=list)


class BlogResearchResults(BaseModel):
    """Full research bundle handed to cluster generation."""

    model_config = ConfigDict(extra="ignore")

    keyword_analysis: KeywordAnalysis = Field(
        ..., description="Keyword metrics and cluster groups"
    )
    title_suggestions: list[TitleSuggestion] = Field(
        default_factory=list, description="Suggested titles"
    )
    content_strategy: ContentStrategyHints = Field(
        default_factory=ContentStrategyHints, description="Strategy hints"
    )
    seo_insights: ResearchSEOInsights = Field(
        default_factory=ResearchSEOInsights, description="SEO hints"
    )
