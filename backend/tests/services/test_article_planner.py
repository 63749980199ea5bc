"""Tests for article planning.

Tests cover:
- Wave assignment (pillar, tutorial, long-tail, supporting) and caps
- Email marketing end-to-end planning
- Title, subtitle and meta description generation
- Deterministic and injected-random title phrasing
- SEO insights and traffic estimates
- Outline section counts per content type
"""

import random

import pytest

from clusterplan.models.content_cluster import ContentType, Level
from clusterplan.schemas.content_cluster import NotYetImplemented
from clusterplan.schemas.research import BlogResearchResults, KeywordData
from clusterplan.services.article_outlines import build_outline
from clusterplan.services.article_planner import (
    LONG_TAIL_CAP,
    PILLAR_CAP,
    TUTORIAL_CAP,
    ArticlePlanner,
    assign_waves,
    convert_difficulty_to_score,
    estimate_article_traffic,
    estimate_traffic_bucket,
    generate_meta_description,
    generate_seo_insights,
    generate_title,
    identify_seo_opportunities,
    is_pillar_eligible,
)
from clusterplan.services.cluster_synthesizer import synthesize_cluster
from tests.conftest import EMAIL_MARKETING_KEYWORDS

LONG_SOFTWARE_PHRASE = "best email marketing software for small business"


def plan(
    research: BlogResearchResults,
    planner: ArticlePlanner | None = None,
    target_audience: str | None = None,
):
    group = research.keyword_analysis.cluster_groups[0]
    cluster = synthesize_cluster(group, research, list(group.keywords), 0)
    return (planner or ArticlePlanner()).plan_cluster_articles(
        cluster, research, target_audience
    )


class TestAssignWaves:
    """Tests for assign_waves."""

    def test_email_marketing_waves(self) -> None:
        waves = assign_waves(
            "email marketing", EMAIL_MARKETING_KEYWORDS, EMAIL_MARKETING_KEYWORDS
        )

        assert waves.pillar == [
            "email marketing",
            "email marketing tips",
            "email marketing strategy",
        ]
        assert waves.tutorial == [
            "email marketing tutorial",
            "how to write a marketing email that converts",
        ]
        assert waves.long_tail == [LONG_SOFTWARE_PHRASE]
        assert waves.supporting == ["email campaigns", "newsletter design"]

    def test_no_keyword_in_two_waves(self) -> None:
        waves = assign_waves(
            "email marketing", EMAIL_MARKETING_KEYWORDS, EMAIL_MARKETING_KEYWORDS
        )
        keywords = [keyword for _, keyword in waves.in_emission_order()]
        assert len(keywords) == len(set(keywords))

    def test_emission_order(self) -> None:
        waves = assign_waves(
            "email marketing", EMAIL_MARKETING_KEYWORDS, EMAIL_MARKETING_KEYWORDS
        )
        types = [content_type for content_type, _ in waves.in_emission_order()]
        order = [
            ContentType.PILLAR,
            ContentType.SUPPORTING,
            ContentType.LONG_TAIL,
            ContentType.TUTORIAL,
        ]
        assert types == sorted(types, key=order.index)

    def test_primary_is_pillar_even_when_not_selected(self) -> None:
        waves = assign_waves("crm", ["crm", "crm tools"], ["crm tools"])
        assert waves.pillar[0] == "crm"

    def test_blank_primary_gives_no_pillar(self) -> None:
        waves = assign_waves("  ", ["alpha", "beta"], ["alpha", "beta"])
        assert waves.pillar == []
        assert waves.supporting == ["alpha", "beta"]

    def test_only_selected_keywords_are_planned(self) -> None:
        waves = assign_waves(
            "crm", ["crm", "crm tools", "crm pricing"], ["crm", "crm pricing"]
        )
        planned = {keyword for _, keyword in waves.in_emission_order()}
        assert "crm tools" not in planned

    def test_caps(self) -> None:
        keywords = (
            ["seo"]
            + [f"seo {word}" for word in ("audit", "tools", "agency", "basics")]
            + [f"learn seo lesson {i}" for i in range(8)]
            + [f"seo checklist for ecommerce store number {i}" for i in range(15)]
        )
        waves = assign_waves("seo", keywords, keywords)

        assert len(waves.pillar) == PILLAR_CAP
        assert len(waves.tutorial) == TUTORIAL_CAP
        assert len(waves.long_tail) == LONG_TAIL_CAP

    @pytest.mark.parametrize(
        ("keyword", "expected"),
        [
            ("email marketing tips", True),
            ("email marketing", False),
            ("email marketing tips and tricks", False),
            ("email marketing tutorial", False),
            ("sms marketing", False),
            ("email marketingpro", False),
        ],
    )
    def test_pillar_eligibility(self, keyword: str, expected: bool) -> None:
        assert is_pillar_eligible(keyword, "email marketing") is expected

    def test_pillar_requires_whole_words(self) -> None:
        assert is_pillar_eligible("seoul", "seo") is False
        assert is_pillar_eligible("local seo", "seo") is True


class TestPlanClusterArticles:
    """End-to-end article planning for one cluster."""

    def test_email_marketing_plan(self, research: BlogResearchResults) -> None:
        articles = plan(research)
        by_type: dict[ContentType, list] = {}
        for article in articles:
            by_type.setdefault(article.content_type, []).append(article)

        pillars = by_type[ContentType.PILLAR]
        assert any("email marketing" in a.title.lower() for a in pillars)

        tutorials = by_type[ContentType.TUTORIAL]
        assert "email marketing tutorial" in [a.target_keyword for a in tutorials]

        long_tail = by_type[ContentType.LONG_TAIL]
        assert [a.target_keyword for a in long_tail] == [LONG_SOFTWARE_PHRASE]
        assert long_tail[0].title == "Best Email Marketing Software For Small Business"

        assert len(articles) == 8

    def test_articles_reference_their_cluster(self, research: BlogResearchResults) -> None:
        for article in plan(research):
            assert article.cluster_key == "0-email-marketing"
            assert article.internal_linking_opportunities[0].anchor_text == (
                "email marketing"
            )

    def test_article_fields(self, research: BlogResearchResults) -> None:
        articles = plan(research, target_audience="Founders")
        pillar = articles[0]

        assert pillar.content_type == ContentType.PILLAR
        assert pillar.priority == 10
        assert pillar.estimated_word_count == 3000
        assert pillar.url_slug == "email-marketing"
        assert pillar.target_audience == "Founders"
        assert pillar.content_outline.faq_section
        assert isinstance(pillar.content_gaps, NotYetImplemented)
        assert isinstance(pillar.external_resources, NotYetImplemented)

        for article in articles:
            assert len(article.meta_description) <= 160
            if article.content_type != ContentType.PILLAR:
                assert article.content_outline.faq_section is None

    def test_missing_group_returns_no_articles(
        self, research: BlogResearchResults
    ) -> None:
        group = research.keyword_analysis.cluster_groups[0]
        cluster = synthesize_cluster(group, research, list(group.keywords), 0)
        cluster = cluster.model_copy(update={"keyword_clusters": []})

        assert ArticlePlanner().plan_cluster_articles(cluster, research) == []

    def test_default_titles_are_deterministic(
        self, research: BlogResearchResults
    ) -> None:
        first = [a.title for a in plan(research)]
        second = [a.title for a in plan(research)]
        assert first == second

    def test_seeded_rng_is_reproducible(self, research: BlogResearchResults) -> None:
        first = [a.title for a in plan(research, ArticlePlanner(random.Random(7)))]
        second = [a.title for a in plan(research, ArticlePlanner(random.Random(7)))]
        assert first == second


class TestTitlesAndMeta:
    """Tests for title and meta description generation."""

    @pytest.mark.parametrize(
        "content_type",
        [ContentType.PILLAR, ContentType.SUPPORTING, ContentType.TUTORIAL],
    )
    def test_title_contains_keyword(self, content_type: ContentType) -> None:
        title = generate_title("email marketing", content_type)
        assert "email marketing" in title

    def test_title_mentions_audience(self) -> None:
        title = generate_title("email marketing", ContentType.PILLAR, "Founders")
        assert "Founders" in title

    def test_title_same_for_same_input(self) -> None:
        titles = {generate_title("crm software", ContentType.SUPPORTING) for _ in range(5)}
        assert len(titles) == 1

    def test_unknown_type_uses_supporting_templates(self) -> None:
        title = generate_title("crm software", ContentType.COMPARISON)
        assert "crm software" in title

    @pytest.mark.parametrize("content_type", list(ContentType))
    def test_meta_description_never_exceeds_limit(
        self, content_type: ContentType
    ) -> None:
        keyword = "very long keyword " * 20
        meta = generate_meta_description(keyword, content_type, "Enterprise Teams")
        assert len(meta) == 160
        assert meta.endswith("...")

    def test_short_meta_description_untouched(self) -> None:
        meta = generate_meta_description("crm", ContentType.LONG_TAIL)
        assert meta.startswith("Find out crm.")
        assert not meta.endswith("...")


class TestSeoAndTraffic:
    """Tests for SEO insights and traffic estimates."""

    @pytest.mark.parametrize(
        ("label", "expected"),
        [("easy", 3), ("medium", 6), ("hard", 9), ("unknown", 6), (None, 6)],
    )
    def test_convert_difficulty_to_score(self, label: str | None, expected: int) -> None:
        assert convert_difficulty_to_score(label) == expected

    @pytest.mark.parametrize(
        ("volume", "expected"),
        [
            (None, Level.LOW),
            (999, Level.LOW),
            (1000, Level.MEDIUM),
            (9999, Level.MEDIUM),
            (10000, Level.HIGH),
        ],
    )
    def test_estimate_traffic_bucket(self, volume: int | None, expected: Level) -> None:
        assert estimate_traffic_bucket(volume) == expected

    def test_article_traffic(self) -> None:
        analysis = KeywordData(keyword="crm", search_volume=2500)

        assert estimate_article_traffic(ContentType.PILLAR, analysis) == 2500
        assert estimate_article_traffic(ContentType.TUTORIAL, analysis) == 200
        assert estimate_article_traffic(ContentType.PILLAR, None) == 1000
        assert estimate_article_traffic(ContentType.LONG_TAIL, None) == 200
        assert estimate_article_traffic(ContentType.TUTORIAL, None) == 50

    def test_opportunities(self) -> None:
        analysis = KeywordData(
            keyword="best crm for real estate agents",
            search_volume=5000,
            difficulty="easy",
            trend_score=0.9,
        )
        opportunities = identify_seo_opportunities(analysis.keyword, analysis)

        assert len(opportunities) == 4
        assert identify_seo_opportunities("crm", None) == ["Add keyword analysis data"]
        assert identify_seo_opportunities(
            "crm", KeywordData(keyword="crm", difficulty="hard")
        ) == ["Standard SEO optimization"]

    @pytest.mark.parametrize(
        ("trend_score", "trending"),
        [(0.9, True), (0.5, False), (50, False), (85, True)],
    )
    def test_trend_opportunity_reads_percentages(
        self, trend_score: float, trending: bool
    ) -> None:
        analysis = KeywordData(keyword="crm", difficulty="hard", trend_score=trend_score)
        opportunities = identify_seo_opportunities("crm", analysis)

        assert ("Trending keyword - create timely content" in opportunities) is trending

    def test_seo_insights_scores_in_range(self) -> None:
        insights = generate_seo_insights(
            "crm",
            None,
            ContentType.LONG_TAIL,
            "Crm",
            "x" * 400,
        )

        assert 0 <= insights.title_optimization_score <= 10
        assert 0 <= insights.meta_description_score <= 10
        assert insights.featured_snippet_opportunity is True
        assert insights.keyword_difficulty == 3
        assert insights.competition_level == Level.LOW


class TestOutlines:
    """Outline shape per content type."""

    @pytest.mark.parametrize(
        "content_type",
        [
            ContentType.PILLAR,
            ContentType.SUPPORTING,
            ContentType.LONG_TAIL,
            ContentType.TUTORIAL,
        ],
    )
    def test_section_count(self, content_type: ContentType) -> None:
        outline = build_outline(content_type, "email marketing", "SaaS founders")

        assert 3 <= len(outline.sections) <= 6
        for section in outline.sections:
            assert section.heading
            assert section.key_points
            assert section.estimated_word_count > 0
