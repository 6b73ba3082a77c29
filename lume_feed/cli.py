"""
Command-line interface for Lume Feed.

Uses Typer to provide a `feed` command that loads a ranked batch of
Wikipedia articles, and a `favorites` command group for the saved list.
Supports loading .env files for path overrides.
"""

from __future__ import annotations

from pathlib import Path
import random

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape

from .config import AppConfig, load_config
from .core.errors import FavoritesDecodeError
from .feed import FeedFailure
from .renderer import render_favorites_markdown, render_feed_markdown
from .runner import open_favorites, print_articles, print_favorites, run_feed, save_top
from .utils.logging import setup_logging

app = typer.Typer(add_completion=False)
favorites_app = typer.Typer(add_completion=False, help="Manage saved articles.")
app.add_typer(favorites_app, name="favorites")
console = Console()


def _load(config: Path | None, log_level: str | None = None) -> AppConfig:
    # Load environment variables from .env if available
    load_dotenv()
    cfg = load_config(str(config) if config else None)
    if log_level:
        cfg.logging.level = log_level
    return cfg


def _open_favorites(cfg: AppConfig, logger):
    try:
        return open_favorites(cfg, logger)
    except FavoritesDecodeError as exc:
        console.print(f"[red]{escape(str(exc))}[/red]")
        raise typer.Exit(code=1) from exc


@app.command()
def feed(
    count: int | None = typer.Option(None, "--count", "-n", min=0, help="Articles to show."),
    config: Path | None = typer.Option(None, "--config", "-c", exists=True),
    output: Path | None = typer.Option(
        None, "--output", "-o", help="Also write the feed to a markdown file."
    ),
    seed: int | None = typer.Option(
        None, "--seed", help="Seed query and page selection for a repeatable batch."
    ),
    save_top_count: int = typer.Option(
        0, "--save-top", min=0, help="Add the top K articles to favorites."
    ),
    log_level: str | None = typer.Option(None, "--log-level", help="Logging level."),
):
    """Load a ranked feed of interesting Wikipedia articles.

    Args:
        count: Number of articles to return (defaults to ranking.default_count)
        config: Optional path to YAML config file
        output: Optional markdown file to write the feed to
        seed: Optional random seed for repeatable selection
        save_top_count: Number of top articles to pin to favorites
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
    """
    cfg = _load(config, log_level)
    logger = setup_logging(cfg.logging)
    rng = random.Random(seed) if seed is not None else None

    state = run_feed(cfg, count=count, rng=rng, console=console, logger=logger)
    if isinstance(state, FeedFailure):
        console.print(f"[red]{state.message}[/red]")
        raise typer.Exit(code=1)

    print_articles(console, state.articles)
    if not state.articles:
        console.print("No articles passed the quality filter this time.")

    if output is not None:
        render_feed_markdown(state.articles, output, "Lume Feed")
        console.print(f"Feed written: {output}")

    if save_top_count:
        favorites = _open_favorites(cfg, logger)
        added = save_top(favorites, state.articles, save_top_count)
        console.print(f"Saved {len(added)} new favorite(s).")


@favorites_app.command("list")
def favorites_list(
    config: Path | None = typer.Option(None, "--config", "-c", exists=True),
):
    """Show saved favorites."""
    cfg = _load(config)
    logger = setup_logging(cfg.logging)
    favorites = _open_favorites(cfg, logger)
    print_favorites(console, favorites.favorites)


@favorites_app.command("remove")
def favorites_remove(
    favorite_id: str = typer.Argument(..., help="ID shown by `favorites list`."),
    config: Path | None = typer.Option(None, "--config", "-c", exists=True),
):
    """Remove a saved favorite by ID."""
    cfg = _load(config)
    logger = setup_logging(cfg.logging)
    favorites = _open_favorites(cfg, logger)
    if not favorites.remove(favorite_id):
        console.print(f"No favorite with ID {favorite_id}")
        raise typer.Exit(code=1)
    console.print(f"Removed {favorite_id}")


@favorites_app.command("export")
def favorites_export(
    output: Path = typer.Argument(..., help="Markdown file to write."),
    config: Path | None = typer.Option(None, "--config", "-c", exists=True),
):
    """Write saved favorites to a markdown file."""
    cfg = _load(config)
    logger = setup_logging(cfg.logging)
    favorites = _open_favorites(cfg, logger)
    render_favorites_markdown(favorites.favorites, output)
    console.print(f"Favorites written: {output}")


if __name__ == "__main__":
    app()
