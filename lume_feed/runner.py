"""
Feed loading orchestration for the CLI.

This module wires configuration into the fetch pipeline:
1. Build the Wikipedia client and article fetcher
2. Run one feed load through FeedController
3. Optionally pin top articles to favorites

Console output (spinner, cards) is kept here so the library modules stay
free of presentation concerns.
"""

from __future__ import annotations

import asyncio
import logging
import random

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from .config import AppConfig, get_favorites_path
from .core.favorites import FavoritesManager
from .core.store import JsonFileBlobStore
from .core.types import ArticleSummary, FavoriteArticle
from .feed import FeedController, FeedFailure, FeedState
from .fetch.service import ArticleFetcher, RandomSource
from .fetch.wikipedia import WikipediaClient
from .utils.logging import log_event, truncate_text


def open_favorites(cfg: AppConfig, logger: logging.Logger | None = None) -> FavoritesManager:
    store = JsonFileBlobStore(get_favorites_path(cfg.favorites))
    return FavoritesManager(store, key=cfg.favorites.key, logger=logger)


def run_feed(
    cfg: AppConfig,
    count: int | None = None,
    rng: RandomSource | None = None,
    console: Console | None = None,
    logger: logging.Logger | None = None,
) -> FeedState:
    """Load one feed and return its terminal state.

    Args:
        cfg: Application configuration
        count: Number of articles wanted; defaults to the ranking config
        rng: Random source for query/page selection
        console: Rich console for the loading spinner
        logger: Logger for pipeline events

    Returns:
        FeedSuccess or FeedFailure
    """
    logger = logger or logging.getLogger("lume_feed")
    console = console or Console()
    return asyncio.run(_run_feed_async(cfg, count, rng or random, console, logger))


async def _run_feed_async(
    cfg: AppConfig,
    count: int | None,
    rng: RandomSource,
    console: Console,
    logger: logging.Logger,
) -> FeedState:
    async with WikipediaClient(cfg.fetch, search_limit=cfg.ranking.search_limit) as client:
        fetcher = ArticleFetcher(client, ranking=cfg.ranking, rng=rng, logger=logger)
        controller = FeedController(fetcher, logger=logger)
        with console.status("Loading articles..."):
            state = await controller.load(count)

    if isinstance(state, FeedFailure):
        log_event(logger, "Feed unavailable", event="feed_unavailable", reason=state.reason)
    return state


def save_top(
    favorites: FavoritesManager, articles: list[ArticleSummary], limit: int
) -> list[ArticleSummary]:
    """Add the first ``limit`` articles to favorites; returns the ones newly added."""
    added = []
    for article in articles[: max(limit, 0)]:
        if favorites.add(article):
            added.append(article)
    return added


def print_articles(console: Console, articles: list[ArticleSummary]) -> None:
    for index, article in enumerate(articles, start=1):
        subtitle = f"score {article.quality_score:.0f} · {article.share_url}"
        heading = f"[bold]{index}. {escape(article.title)}[/bold]"
        if article.description:
            heading += f"\n[italic]{escape(article.description)}[/italic]"
        console.print(
            Panel(
                f"{heading}\n\n{escape(article.extract)}",
                subtitle=escape(subtitle),
                expand=True,
            )
        )


def print_favorites(console: Console, favorites: list[FavoriteArticle]) -> None:
    table = Table(title=f"Favorites ({len(favorites)})")
    table.add_column("ID", style="dim", no_wrap=True)
    table.add_column("Title", style="bold")
    table.add_column("Extract")
    for favorite in favorites:
        table.add_row(favorite.id, escape(favorite.title), escape(truncate_text(favorite.extract, 80)))
    console.print(table)
