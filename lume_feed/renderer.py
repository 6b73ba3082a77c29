"""
Markdown export for feeds and saved favorites.
"""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

from .core.types import ArticleSummary, FavoriteArticle


def render_feed_markdown(articles: list[ArticleSummary], output_path: Path, title: str) -> None:
    """Write a ranked feed as a markdown document.

    Articles keep the order they were given in, which for a feed is best
    first.

    Args:
        articles: Ranked articles to render
        output_path: Destination markdown file
        title: Document heading
    """
    lines = [
        f"# {title}",
        "",
        f"Generated: {_now()}",
        f"Total: {len(articles)}",
        "",
    ]
    for index, article in enumerate(articles, start=1):
        lines.append(f"## {index}. {article.title}")
        if article.description:
            lines.append(f"*{article.description}*")
        lines.append("")
        if article.thumbnail_url:
            lines.append(f"![{article.title}]({article.thumbnail_url})")
            lines.append("")
        if article.extract:
            lines.append(article.extract)
            lines.append("")
        lines.append(f"- Score: {article.quality_score:.0f}")
        lines.append(f"- Link: {article.share_url}")
        lines.append("")

    output_path.write_text("\n".join(lines), encoding="utf-8")


def render_favorites_markdown(
    favorites: list[FavoriteArticle], output_path: Path, title: str = "Favorites"
) -> None:
    lines = [f"# {title}", "", f"Total: {len(favorites)}", ""]
    for favorite in favorites:
        lines.append(f"## {favorite.title}")
        lines.append(f"- ID: {favorite.id}")
        if favorite.thumbnail_url:
            lines.append(f"- Thumbnail: {favorite.thumbnail_url}")
        lines.append("")
        if favorite.extract:
            lines.append(favorite.extract)
            lines.append("")

    output_path.write_text("\n".join(lines), encoding="utf-8")


def _now() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M UTC")
