"""
Lume Feed - a ranked feed of interesting Wikipedia articles.

This package fans out random curated searches against the Wikipedia API,
scores the resulting page summaries by a fixed quality heuristic and keeps
a locally persisted list of favorites.

Main entry point is the CLI via `lume feed` command.

Example:
    $ lume feed --count 5
"""

__all__ = [
    "__version__",
    "ArticleFetcher",
    "ArticleSummary",
    "FavoriteArticle",
    "FavoritesManager",
    "WikipediaClient",
    "quality_score",
]
__version__ = "0.1.0"

from .core.favorites import FavoritesManager
from .core.scoring import quality_score
from .core.types import ArticleSummary, FavoriteArticle
from .fetch.service import ArticleFetcher
from .fetch.wikipedia import WikipediaClient
