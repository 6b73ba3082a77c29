"""
Article acquisition and ranking.

One call to ``fetch_articles(n)`` runs a batch:
1. Start ``n * over_fetch_factor`` request chains concurrently
2. Each chain picks a random curated query, searches, picks a random
   result and fetches its summary
3. Wait for every chain; if any chain fails, the whole batch fails
4. Filter by extract length and quality score, rank, keep the top ``n``
"""

from __future__ import annotations

import asyncio
import logging
import random
from typing import Protocol, Sequence, TypeVar

from ..config import RankingConfig
from ..core.errors import BatchFetchError, FetchError, NoResultsError
from ..core.scoring import filter_and_rank
from ..core.types import ArticleSummary
from ..utils.logging import log_event
from .queries import INTERESTING_QUERIES
from .wikipedia import WikipediaClient

T = TypeVar("T")


class RandomSource(Protocol):
    """Anything with ``choice``; ``random.Random`` and the ``random`` module both fit."""

    def choice(self, seq: Sequence[T]) -> T:
        ...


class ArticleFetcher:
    """Produces ranked feeds of article summaries.

    Stateless between calls; the only shared resource is the Wikipedia
    client, which is safe to use from concurrent chains.
    """

    def __init__(
        self,
        client: WikipediaClient,
        ranking: RankingConfig | None = None,
        rng: RandomSource | None = None,
        queries: Sequence[str] = INTERESTING_QUERIES,
        logger: logging.Logger | None = None,
    ):
        if not queries:
            raise ValueError("At least one search query is required")
        self.client = client
        self.ranking = ranking or RankingConfig()
        self.rng = rng or random
        self.queries = tuple(queries)
        self.logger = logger or logging.getLogger("lume_feed.fetch")

    async def fetch_articles(self, requested_count: int | None = None) -> list[ArticleSummary]:
        """Fetch, filter and rank a batch of articles.

        Args:
            requested_count: Maximum number of articles to return; defaults
                to ``RankingConfig.default_count``

        Returns:
            Up to ``requested_count`` articles, best first. Fewer are returned
            when not enough candidates pass the quality filter.

        The first failing chain fails the batch immediately. Sibling chains
        are not cancelled; they keep running until they finish or the client
        is closed, and their results are discarded.

        Raises:
            BatchFetchError: If any request chain in the batch failed
            ValueError: If requested_count is negative
        """
        if requested_count is None:
            requested_count = self.ranking.default_count
        if requested_count < 0:
            raise ValueError(f"requested_count must be >= 0, got {requested_count}")
        if requested_count == 0:
            return []

        batch_size = requested_count * self.ranking.over_fetch_factor
        log_event(
            self.logger,
            "Batch start",
            event="batch_start",
            requested=requested_count,
            batch_size=batch_size,
        )

        try:
            candidates = await asyncio.gather(
                *(self._fetch_random_article() for _ in range(batch_size))
            )
        except FetchError as exc:
            self.logger.warning(
                "Article batch failed: %s",
                exc,
                extra={"event": "batch_failed", "batch_size": batch_size},
            )
            raise BatchFetchError(batch_size) from exc

        ranked = filter_and_rank(
            candidates,
            requested_count,
            min_extract_length=self.ranking.min_extract_length,
            min_score=self.ranking.min_quality_score,
        )
        log_event(
            self.logger,
            "Batch complete",
            event="batch_complete",
            candidates=len(candidates),
            returned=len(ranked),
        )
        return ranked

    async def _fetch_random_article(self) -> ArticleSummary:
        query = self.rng.choice(self.queries)
        try:
            titles = await self.client.search_titles(query)
            if not titles:
                raise NoResultsError(query)
            title = self.rng.choice(titles)
            return await self.client.fetch_summary(title)
        except FetchError as exc:
            self.logger.debug(
                "Request chain failed for query %r: %s",
                query,
                exc,
                extra={"event": "chain_failed", "query": query},
            )
            raise
