"""Article planning: expand a cluster into pillar, supporting, long-tail and
tutorial article ideas.

Keywords are the cluster's selected keywords in cluster order. Each keyword
lands in at most one wave; the first matching rule wins:

    pillar      primary keyword + up to 2 close head-term variants   (cap 3)
    tutorial    contains a tutorial trigger phrase, first 5 candidates (cap 3)
    long_tail   longer than the primary keyword by more than 10 chars (cap 10)
    supporting  remaining keywords among the first 5 after the primary (cap 6)

Articles are emitted in pillar, supporting, long_tail, tutorial order.

Title phrasing is chosen per keyword and type from a fixed template set,
either by hashing "keyword|type" or by an injected random.Random.
"""

import hashlib
import random
from dataclasses import dataclass, field

from clusterplan.core.logging import get_logger
from clusterplan.models.content_cluster import ContentType, Level
from clusterplan.schemas.content_cluster import (
    EnhancedContentCluster,
    HumanReadableArticle,
    InternalLink,
    SEOInsights,
    not_implemented,
)
from clusterplan.schemas.research import BlogResearchResults, KeywordData
from clusterplan.services.article_outlines import build_outline
from clusterplan.services.keyword_selector import normalize_trend
from clusterplan.utils.text import slugify, title_case_words, truncate_text

logger = get_logger(__name__)

PILLAR_CAP = 3
TUTORIAL_CANDIDATE_CAP = 5
TUTORIAL_CAP = 3
LONG_TAIL_CAP = 10
SUPPORTING_WINDOW = 5
SUPPORTING_CAP = 6

LONG_TAIL_EXTRA_CHARS = 10
TUTORIAL_TRIGGERS = ("how to", "tutorial", "guide", "step by step", "learn")

META_DESCRIPTION_MAX_LENGTH = 160

DIFFICULTY_SCORES = {"easy": 3, "medium": 6, "hard": 9}
DEFAULT_DIFFICULTY_SCORE = 6

DIFFICULTY_COMPETITION = {
    "easy": Level.LOW,
    "medium": Level.MEDIUM,
    "hard": Level.HIGH,
}

# Tutorial traffic is estimated from the volume bucket, not the raw volume
TUTORIAL_TRAFFIC = {Level.LOW: 50, Level.MEDIUM: 200, Level.HIGH: 500}
HIGH_VOLUME_THRESHOLD = 10000
MEDIUM_VOLUME_THRESHOLD = 1000


@dataclass(frozen=True)
class ContentTypeProfile:
    """Fixed planning parameters of one content type."""

    content_type: ContentType
    word_count: int
    priority: int
    tone: str
    reading_time: int
    freshness: int
    fallback_traffic: int
    default_difficulty: str
    readability: float
    subtitle: str


PROFILES: dict[ContentType, ContentTypeProfile] = {
    ContentType.PILLAR: ContentTypeProfile(
        content_type=ContentType.PILLAR,
        word_count=3000,
        priority=10,
        tone="authoritative",
        reading_time=12,
        freshness=8,
        fallback_traffic=1000,
        default_difficulty="medium",
        readability=8,
        subtitle="A comprehensive guide covering everything you need to know",
    ),
    ContentType.SUPPORTING: ContentTypeProfile(
        content_type=ContentType.SUPPORTING,
        word_count=1500,
        priority=7,
        tone="informative",
        reading_time=6,
        freshness=6,
        fallback_traffic=500,
        default_difficulty="medium",
        readability=7,
        subtitle="Practical tips and actionable strategies",
    ),
    ContentType.LONG_TAIL: ContentTypeProfile(
        content_type=ContentType.LONG_TAIL,
        word_count=1000,
        priority=5,
        tone="conversational",
        reading_time=4,
        freshness=7,
        fallback_traffic=200,
        default_difficulty="easy",
        readability=9,
        subtitle="Quick answers and practical insights",
    ),
    ContentType.TUTORIAL: ContentTypeProfile(
        content_type=ContentType.TUTORIAL,
        word_count=2000,
        priority=3,
        tone="educational",
        reading_time=8,
        freshness=8,
        fallback_traffic=TUTORIAL_TRAFFIC[Level.LOW],
        default_difficulty="medium",
        readability=7,
        subtitle="Step-by-step instructions and practical examples",
    ),
}

# (with audience, without audience) phrasing pairs
TITLE_TEMPLATES: dict[ContentType, tuple[tuple[str, str], ...]] = {
    ContentType.PILLAR: (
        (
            "The Complete Guide to {keyword} for {audience}",
            "The Complete Guide to {keyword}",
        ),
        (
            "Everything You Need to Know About {keyword} ({audience} Edition)",
            "Everything You Need to Know About {keyword}",
        ),
        (
            "{keyword}: The Ultimate Guide for {audience}",
            "{keyword}: The Ultimate Guide",
        ),
        (
            "Master {keyword}: A {audience} Guide",
            "Master {keyword}: A Comprehensive Guide",
        ),
    ),
    ContentType.SUPPORTING: (
        ("How to Approach {keyword} for {audience}", "How to Approach {keyword}"),
        ("{keyword}: A Practical Guide", "{keyword}: A Practical Guide"),
        ("Understanding {keyword} ({audience})", "Understanding {keyword}"),
        (
            "{keyword} Explained: Tips and Best Practices",
            "{keyword} Explained: Tips and Best Practices",
        ),
    ),
    ContentType.TUTORIAL: (
        (
            "Step-by-Step Tutorial: {keyword} for {audience}",
            "Step-by-Step Tutorial: {keyword}",
        ),
        (
            "{keyword}: A Beginner's Guide ({audience})",
            "{keyword}: A Beginner's Guide",
        ),
        (
            "{keyword} Tutorial: From Beginner to Expert ({audience} Edition)",
            "{keyword} Tutorial: From Beginner to Expert",
        ),
        (
            "Learn {keyword} for {audience}: Complete Tutorial",
            "Learn {keyword}: Complete Tutorial",
        ),
    ),
}

META_TEMPLATES: dict[ContentType, str] = {
    ContentType.PILLAR: (
        "Discover everything you need to know about {keyword}{audience}. This "
        "comprehensive guide covers best practices, strategies, and expert tips."
    ),
    ContentType.SUPPORTING: (
        "Learn {keyword}{audience} with this practical guide. Get actionable "
        "tips, step-by-step instructions, and expert insights."
    ),
    ContentType.LONG_TAIL: (
        "Find out {keyword}{audience}. Quick answers, practical tips, and expert "
        "recommendations to help you succeed."
    ),
    ContentType.TUTORIAL: (
        "Master {keyword}{audience} with this step-by-step tutorial. Learn from "
        "basics to advanced techniques with practical examples."
    ),
}


@dataclass
class KeywordWaves:
    """Keywords assigned to each article wave of one cluster."""

    pillar: list[str] = field(default_factory=list)
    supporting: list[str] = field(default_factory=list)
    long_tail: list[str] = field(default_factory=list)
    tutorial: list[str] = field(default_factory=list)

    def in_emission_order(self) -> list[tuple[ContentType, str]]:
        return (
            [(ContentType.PILLAR, k) for k in self.pillar]
            + [(ContentType.SUPPORTING, k) for k in self.supporting]
            + [(ContentType.LONG_TAIL, k) for k in self.long_tail]
            + [(ContentType.TUTORIAL, k) for k in self.tutorial]
        )


# =============================================================================
# PURE HELPERS
# =============================================================================


def _normalize(keyword: str) -> str:
    return " ".join(keyword.lower().split())


def is_tutorial_keyword(keyword: str) -> bool:
    lowered = _normalize(keyword)
    return any(trigger in lowered for trigger in TUTORIAL_TRIGGERS)


def is_long_tail_keyword(keyword: str, primary_keyword: str) -> bool:
    return len(keyword) > len(primary_keyword) + LONG_TAIL_EXTRA_CHARS


def _contains_words(words: list[str], run: list[str]) -> bool:
    size = len(run)
    return any(words[i : i + size] == run for i in range(len(words) - size + 1))


def is_pillar_eligible(keyword: str, primary_keyword: str) -> bool:
    """A head term that extends the primary keyword by at most one word."""
    kw_words = _normalize(keyword).split()
    primary_words = _normalize(primary_keyword).split()
    if not primary_words or kw_words == primary_words:
        return False
    if len(kw_words) > len(primary_words) + 1:
        return False
    if not _contains_words(kw_words, primary_words):
        return False
    return not (
        is_tutorial_keyword(keyword) or is_long_tail_keyword(keyword, primary_keyword)
    )


def convert_difficulty_to_score(difficulty: str | None) -> int:
    """Map easy/medium/hard to 3/6/9. Unknown labels map to 6."""
    if not difficulty:
        return DEFAULT_DIFFICULTY_SCORE
    return DIFFICULTY_SCORES.get(difficulty.strip().lower(), DEFAULT_DIFFICULTY_SCORE)


def estimate_traffic_bucket(search_volume: int | None) -> Level:
    """Bucket a search volume: >= 10000 high, >= 1000 medium, else low."""
    volume = search_volume or 0
    if volume >= HIGH_VOLUME_THRESHOLD:
        return Level.HIGH
    if volume >= MEDIUM_VOLUME_THRESHOLD:
        return Level.MEDIUM
    return Level.LOW


def pick_template_index(
    keyword: str,
    content_type: ContentType,
    template_count: int,
    rng: random.Random | None = None,
) -> int:
    """Choose a template index, by hash of "keyword|type" unless rng is given."""
    if rng is not None:
        return rng.randrange(template_count)
    digest = hashlib.sha256(f"{keyword}|{content_type.value}".encode()).digest()
    return int.from_bytes(digest[:8], "big") % template_count


def generate_title(
    keyword: str,
    content_type: ContentType,
    target_audience: str | None = None,
    rng: random.Random | None = None,
) -> str:
    """Build an article title for a keyword.

    Long-tail titles are the keyword with each word capitalized. Types
    without their own templates use the supporting phrasings.
    """
    if content_type == ContentType.LONG_TAIL:
        return title_case_words(keyword)

    templates = TITLE_TEMPLATES.get(content_type, TITLE_TEMPLATES[ContentType.SUPPORTING])
    index = pick_template_index(keyword, content_type, len(templates), rng)
    with_audience, without_audience = templates[index]
    if target_audience:
        return with_audience.format(keyword=keyword, audience=target_audience)
    return without_audience.format(keyword=keyword)


def generate_subtitle(content_type: ContentType) -> str:
    profile = PROFILES.get(content_type)
    if profile is None:
        return "Expert insights and practical guidance"
    return profile.subtitle


def generate_meta_description(
    keyword: str,
    content_type: ContentType,
    target_audience: str | None = None,
) -> str:
    """Build a meta description of at most 160 characters.

    Longer text is cut to 157 characters plus "...".
    """
    audience = f" for {target_audience}" if target_audience else ""
    template = META_TEMPLATES.get(content_type, META_TEMPLATES[ContentType.SUPPORTING])
    description = template.format(keyword=keyword, audience=audience)
    return truncate_text(description, META_DESCRIPTION_MAX_LENGTH)


def identify_seo_opportunities(
    keyword: str, analysis: KeywordData | None = None
) -> list[str]:
    """List quick SEO observations for a keyword."""
    if analysis is None:
        return ["Add keyword analysis data"]

    opportunities: list[str] = []
    if analysis.search_volume and analysis.search_volume > 1000:
        opportunities.append("High search volume keyword - prioritize content")
    if analysis.difficulty.strip().lower() in ("easy", "medium"):
        opportunities.append("Manageable competition - good ranking opportunity")
    if normalize_trend(analysis.trend_score) > 0.7:
        opportunities.append("Trending keyword - create timely content")
    if len(keyword) > 20:
        opportunities.append("Long-tail keyword - specific audience targeting")

    return opportunities or ["Standard SEO optimization"]


def _title_optimization_score(keyword: str, title: str, content_type: ContentType) -> float:
    # Full length score when the title carries the keyword, half otherwise
    optimal_length = 60 if content_type == ContentType.PILLAR else 55
    length_score = max(0.0, 10 - abs(len(title) - optimal_length) / 5)
    if keyword.lower() not in title.lower():
        length_score /= 2
    return round(length_score, 1)


def _meta_description_score(meta_description: str) -> float:
    return round(max(0.0, 10 - abs(len(meta_description) - 155) / 10), 1)


def generate_seo_insights(
    keyword: str,
    analysis: KeywordData | None,
    content_type: ContentType,
    title: str,
    meta_description: str,
) -> SEOInsights:
    profile = PROFILES[content_type]
    difficulty = analysis.difficulty if analysis else profile.default_difficulty
    related = list(analysis.related_keywords) if analysis else []

    return SEOInsights(
        primary_keyword=keyword,
        secondary_keywords=related,
        semantic_keywords=[
            f"{keyword} guide",
            f"{keyword} tips",
            f"{keyword} best practices",
        ],
        keyword_difficulty=convert_difficulty_to_score(difficulty),
        search_volume=(analysis.search_volume or 0) if analysis else 0,
        competition_level=DIFFICULTY_COMPETITION.get(
            difficulty.strip().lower(), Level.MEDIUM
        ),
        title_optimization_score=_title_optimization_score(keyword, title, content_type),
        meta_description_score=_meta_description_score(meta_description),
        readability_score=profile.readability,
        featured_snippet_opportunity=content_type == ContentType.LONG_TAIL,
        related_searches=related[:5],
        people_also_ask=[
            f"What is {keyword}?",
            f"How does {keyword} work?",
            f"Why is {keyword} important?",
            f"What are the benefits of {keyword}?",
        ],
        opportunities=identify_seo_opportunities(keyword, analysis),
    )


def estimate_article_traffic(
    content_type: ContentType, analysis: KeywordData | None
) -> int:
    """Monthly traffic estimate for one article."""
    volume = analysis.search_volume if analysis else None
    if content_type == ContentType.TUTORIAL:
        return TUTORIAL_TRAFFIC[estimate_traffic_bucket(volume)]
    return volume or PROFILES[content_type].fallback_traffic


# =============================================================================
# WAVE ASSIGNMENT
# =============================================================================


def assign_waves(
    primary_keyword: str,
    cluster_keywords: list[str],
    selected_keywords: list[str],
) -> KeywordWaves:
    """Split the selected keywords of a cluster into non-overlapping waves."""
    selected = set(selected_keywords)
    ordered = [k for k in dict.fromkeys(cluster_keywords) if k in selected]
    primary_normalized = _normalize(primary_keyword)
    others = [k for k in ordered if _normalize(k) != primary_normalized]

    waves = KeywordWaves()
    assigned: set[str] = set()

    if primary_normalized:
        waves.pillar.append(primary_keyword)
    for keyword in others:
        if len(waves.pillar) >= PILLAR_CAP:
            break
        if is_pillar_eligible(keyword, primary_keyword):
            waves.pillar.append(keyword)
            assigned.add(keyword)

    candidates = [
        k for k in others if k not in assigned and is_tutorial_keyword(k)
    ][:TUTORIAL_CANDIDATE_CAP]
    waves.tutorial = candidates[:TUTORIAL_CAP]
    assigned.update(waves.tutorial)

    waves.long_tail = [
        k
        for k in others
        if k not in assigned and is_long_tail_keyword(k, primary_keyword)
    ][:LONG_TAIL_CAP]
    assigned.update(waves.long_tail)

    waves.supporting = [
        k for k in others[:SUPPORTING_WINDOW] if k not in assigned
    ][:SUPPORTING_CAP]

    return waves


# =============================================================================
# ARTICLE PLANNER
# =============================================================================


class ArticlePlanner:
    """Builds HumanReadableArticle ideas for enhanced content clusters.

    Pass a seeded random.Random to vary title phrasing reproducibly; by
    default phrasing is derived from a hash of keyword and type.
    """

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng

    def build_article(
        self,
        keyword: str,
        content_type: ContentType,
        cluster: EnhancedContentCluster,
        research: BlogResearchResults,
        target_audience: str | None = None,
    ) -> HumanReadableArticle:
        """Build one planned article for a keyword."""
        profile = PROFILES[content_type]
        analysis = research.keyword_analysis.keyword_analysis.get(keyword)

        title = generate_title(keyword, content_type, target_audience, self._rng)
        meta_description = generate_meta_description(
            keyword, content_type, target_audience
        )
        difficulty = analysis.difficulty if analysis else profile.default_difficulty

        return HumanReadableArticle(
            cluster_key=cluster.key,
            content_type=content_type,
            target_keyword=keyword,
            title=title,
            subtitle=generate_subtitle(content_type),
            meta_description=meta_description,
            url_slug=slugify(keyword),
            priority=profile.priority,
            estimated_word_count=profile.word_count,
            estimated_reading_time=profile.reading_time,
            target_audience=target_audience or "general",
            tone=profile.tone,
            content_outline=build_outline(content_type, keyword, target_audience),
            seo_insights=generate_seo_insights(
                keyword, analysis, content_type, title, meta_description
            ),
            content_gaps=not_implemented(
                "competitor_content_gaps",
                "Competitor content analysis is not available",
            ),
            internal_linking_opportunities=[
                InternalLink(
                    anchor_text=cluster.pillar_keyword,
                    context=f"Learn more about {cluster.pillar_keyword}",
                    link_value=Level.HIGH,
                    suggested_position="body",
                )
            ],
            external_resources=not_implemented(
                "external_resource_discovery",
                "External resource search is not available",
            ),
            estimated_traffic=estimate_article_traffic(content_type, analysis),
            difficulty_score=convert_difficulty_to_score(difficulty),
            freshness_score=profile.freshness,
        )

    def plan_cluster_articles(
        self,
        cluster: EnhancedContentCluster,
        research: BlogResearchResults,
        target_audience: str | None = None,
    ) -> list[HumanReadableArticle]:
        """Plan every article wave for one cluster."""
        if not cluster.keyword_clusters:
            logger.warning(
                "No keyword cluster group attached to cluster",
                extra={"cluster_name": cluster.cluster_name},
            )
            return []

        group = cluster.keyword_clusters[0]
        waves = assign_waves(
            group.primary_keyword, group.keywords, cluster.selected_keywords
        )

        articles = [
            self.build_article(keyword, content_type, cluster, research, target_audience)
            for content_type, keyword in waves.in_emission_order()
        ]

        logger.debug(
            "Planned cluster articles",
            extra={
                "cluster_name": cluster.cluster_name,
                "pillar_count": len(waves.pillar),
                "supporting_count": len(waves.supporting),
                "long_tail_count": len(waves.long_tail),
                "tutorial_count": len(waves.tutorial),
            },
        )
        return articles
