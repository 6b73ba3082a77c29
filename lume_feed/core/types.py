"""
Core data types for Lume Feed.

This module defines the records passed between the fetch pipeline, the
favorites store and the CLI:
- ArticleSummary: One fetched Wikipedia page summary
- FavoriteArticle: A user-pinned subset of an ArticleSummary
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any
from urllib.parse import quote
import uuid

from . import scoring
from .errors import DecodeError

WIKI_PAGE_BASE = "https://en.wikipedia.org/wiki/"


@dataclass(frozen=True)
class ArticleSummary:
    """Represents one Wikipedia page summary.

    Attributes:
        title: The page title, never empty
        extract: Plain-text intro summary, possibly empty
        description: Short Wikidata description, if any
        thumbnail_url: URL of the page thumbnail image, if any
        page_url: Canonical desktop URL when the API provides one
    """
    title: str
    extract: str = ""
    description: str | None = None
    thumbnail_url: str | None = None
    page_url: str | None = None

    def __post_init__(self) -> None:
        if not self.title:
            raise ValueError("ArticleSummary.title must be non-empty")

    @property
    def quality_score(self) -> float:
        return scoring.quality_score(self)

    @property
    def share_url(self) -> str:
        """Desktop URL to share, built from the title when the API gave none."""
        if self.page_url:
            return self.page_url
        return WIKI_PAGE_BASE + quote(self.title.replace(" ", "_"))

    def as_favorite(self) -> FavoriteArticle:
        return FavoriteArticle(
            title=self.title,
            extract=self.extract,
            thumbnail_url=self.thumbnail_url,
        )

    @classmethod
    def from_summary_payload(cls, data: Any) -> ArticleSummary:
        """Decode a REST ``page/summary`` response body.

        Args:
            data: Parsed JSON body

        Returns:
            ArticleSummary built from the payload

        Raises:
            DecodeError: If the body does not have the expected shape
        """
        if not isinstance(data, dict):
            raise DecodeError("summary payload is not an object")
        title = data.get("title")
        if not isinstance(title, str) or not title:
            raise DecodeError("summary payload has no title")
        extract = data.get("extract") or ""
        if not isinstance(extract, str):
            raise DecodeError(f"summary extract for {title!r} is not a string")

        description = data.get("description")
        if not isinstance(description, str):
            description = None

        thumbnail_url = None
        thumbnail = data.get("thumbnail")
        if isinstance(thumbnail, dict) and isinstance(thumbnail.get("source"), str):
            thumbnail_url = thumbnail["source"]

        page_url = None
        content_urls = data.get("content_urls")
        if isinstance(content_urls, dict):
            desktop = content_urls.get("desktop")
            if isinstance(desktop, dict) and isinstance(desktop.get("page"), str):
                page_url = desktop["page"]

        return cls(
            title=title,
            extract=extract,
            description=description,
            thumbnail_url=thumbnail_url,
            page_url=page_url,
        )


@dataclass
class FavoriteArticle:
    """A saved article as persisted in the favorites blob.

    Attributes:
        title: Page title, unique within a favorites list
        extract: Plain-text summary at the time it was saved
        thumbnail_url: Thumbnail image URL, if any
        id: Stable identifier assigned when the favorite is created
    """
    title: str
    extract: str
    thumbnail_url: str | None = None
    id: str = field(default_factory=lambda: uuid.uuid4().hex)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "extract": self.extract,
            "thumbnail_url": self.thumbnail_url,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> FavoriteArticle:
        return cls(
            id=str(data["id"]),
            title=str(data["title"]),
            extract=str(data.get("extract") or ""),
            thumbnail_url=data.get("thumbnail_url"),
        )
