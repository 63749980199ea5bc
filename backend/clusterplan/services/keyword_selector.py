"""Keyword ranking and truncation for content clusters.

Ranks the candidate keywords of a cluster group by a weighted score and keeps
the best N. Every signal is normalized to [0, 1] before weighting:

    score = 0.25 * volume          (search_volume / max volume in the set)
          + 0.15 * (1 - difficulty) (easy=0.3, medium=0.6, hard=0.9)
          + 0.20 * trend           (trend_score, percentages divided by 100)
          + 0.25 * recommended     (1 or 0)
          + 0.10 * (1 - competition)
          + 0.05 * cpc             (cpc / max cpc in the set)

Keywords missing from the analysis map score 0 and always rank after
analysed keywords. The sort is stable, so ties keep input order.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from clusterplan.core.logging import get_logger
from clusterplan.schemas.research import KeywordData

logger = get_logger(__name__)

VOLUME_WEIGHT = 0.25
DIFFICULTY_WEIGHT = 0.15
TREND_WEIGHT = 0.20
RECOMMENDED_WEIGHT = 0.25
COMPETITION_WEIGHT = 0.10
CPC_WEIGHT = 0.05

DIFFICULTY_LEVELS: dict[str, float] = {
    "easy": 0.3,
    "medium": 0.6,
    "hard": 0.9,
}
DEFAULT_DIFFICULTY_LEVEL = DIFFICULTY_LEVELS["medium"]

DEFAULT_MAX_KEYWORDS = 25


@dataclass(frozen=True)
class ScoredKeyword:
    """A keyword with its computed selection score."""

    keyword: str
    score: float
    analysed: bool


def _clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    if value != value:  # NaN
        return low
    return max(low, min(high, value))


def normalize_difficulty(difficulty: str | None) -> float:
    """Map a difficulty label to [0, 1]. Unknown labels count as medium."""
    if not difficulty:
        return DEFAULT_DIFFICULTY_LEVEL
    return DIFFICULTY_LEVELS.get(difficulty.strip().lower(), DEFAULT_DIFFICULTY_LEVEL)


def normalize_trend(trend_score: float | None) -> float:
    """Map a trend score to [0, 1]. Values above 1 are read as percentages."""
    if trend_score is None:
        return 0.0
    if trend_score > 1:
        trend_score = trend_score / 100
    return _clamp(trend_score)


def score_keyword(
    keyword: str,
    analysis: KeywordData | None,
    max_volume: float,
    max_cpc: float,
) -> ScoredKeyword:
    """Compute the weighted selection score for one keyword."""
    if analysis is None:
        return ScoredKeyword(keyword=keyword, score=0.0, analysed=False)

    volume = (analysis.search_volume or 0) / max_volume if max_volume > 0 else 0.0
    cpc = (analysis.cpc or 0) / max_cpc if max_cpc > 0 else 0.0

    score = (
        VOLUME_WEIGHT * _clamp(volume)
        + DIFFICULTY_WEIGHT * (1 - normalize_difficulty(analysis.difficulty))
        + TREND_WEIGHT * normalize_trend(analysis.trend_score)
        + RECOMMENDED_WEIGHT * (1.0 if analysis.recommended else 0.0)
        + COMPETITION_WEIGHT * (1 - _clamp(analysis.competition))
        + CPC_WEIGHT * _clamp(cpc)
    )
    return ScoredKeyword(keyword=keyword, score=score, analysed=True)


def rank_keywords(
    keywords: Iterable[str],
    keyword_analysis: Mapping[str, KeywordData] | None = None,
) -> list[ScoredKeyword]:
    """Score and rank keywords, best first.

    Duplicates are collapsed to their first occurrence. Volume and CPC are
    normalized against the maxima of the analysed candidates.
    """
    analysis_map = keyword_analysis or {}
    unique = list(dict.fromkeys(keywords))

    analysed = [analysis_map[k] for k in unique if k in analysis_map]
    max_volume = max((a.search_volume or 0 for a in analysed), default=0)
    max_cpc = max((a.cpc or 0 for a in analysed), default=0)

    scored = [
        score_keyword(k, analysis_map.get(k), max_volume, max_cpc) for k in unique
    ]
    # sorted() is stable: equal keys keep input order
    return sorted(scored, key=lambda s: (not s.analysed, -s.score))


def select_top_keywords(
    keywords: Iterable[str],
    max_keywords: int = DEFAULT_MAX_KEYWORDS,
    keyword_analysis: Mapping[str, KeywordData] | None = None,
) -> list[str]:
    """Return at most max_keywords keywords from the input, best first.

    Never raises on well-typed input. A cap of zero or less returns [].

    Example:
        >>> select_top_keywords(["a", "b"], 1, {"b": KeywordData(keyword="b")})
        ['b']
    """
    if max_keywords <= 0:
        return []

    ranked = rank_keywords(keywords, keyword_analysis)
    selected = [s.keyword for s in ranked[:max_keywords]]

    logger.debug(
        "Selected top keywords",
        extra={
            "candidate_count": len(ranked),
            "selected_count": len(selected),
            "max_keywords": max_keywords,
        },
    )
    return selected
