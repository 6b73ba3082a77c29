"""
Quality scoring and ranking for fetched articles.

The score is a fixed heuristic, not a learned model. Filtering thresholds
downstream were tuned against these exact weights:

    +30 thumbnail present
    +40 extract > 400 chars, else +25 if > 200, else +10 if > 100
    +15 non-empty description
    +15 title > 30 chars, else +10 if > 15

The maximum possible score is 100.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable

if TYPE_CHECKING:
    from .types import ArticleSummary

MIN_EXTRACT_LENGTH = 100
MIN_QUALITY_SCORE = 30.0


def quality_score(article: ArticleSummary) -> float:
    score = 0.0

    if article.thumbnail_url:
        score += 30

    extract_len = len(article.extract)
    if extract_len > 400:
        score += 40
    elif extract_len > 200:
        score += 25
    elif extract_len > 100:
        score += 10

    if article.description:
        score += 15

    title_len = len(article.title)
    if title_len > 30:
        score += 15
    elif title_len > 15:
        score += 10

    return score


def passes_quality_filter(
    article: ArticleSummary,
    min_extract_length: int = MIN_EXTRACT_LENGTH,
    min_score: float = MIN_QUALITY_SCORE,
) -> bool:
    """Both bounds are strict: an extract of exactly 100 chars is dropped."""
    return len(article.extract) > min_extract_length and quality_score(article) > min_score


def filter_and_rank(
    articles: Iterable[ArticleSummary],
    limit: int,
    min_extract_length: int = MIN_EXTRACT_LENGTH,
    min_score: float = MIN_QUALITY_SCORE,
) -> list[ArticleSummary]:
    """Drop low-quality articles and return the best ``limit`` of the rest.

    Sorting is stable, so articles with equal scores keep their arrival
    order. When fewer than ``limit`` articles survive the filter, all of them
    are returned.

    Args:
        articles: Candidates in arrival order
        limit: Maximum number of articles to return
        min_extract_length: Extracts must be strictly longer than this
        min_score: Scores must be strictly greater than this

    Returns:
        Ranked list, best first
    """
    kept = [
        article
        for article in articles
        if passes_quality_filter(article, min_extract_length, min_score)
    ]
    kept.sort(key=quality_score, reverse=True)
    return kept[: max(limit, 0)]
