"""
Core domain models and business logic.

This package contains data types, scoring and favorites storage that are
independent of how articles are fetched.
"""

from .errors import (
    BatchFetchError,
    DecodeError,
    FavoritesDecodeError,
    FetchError,
    NetworkError,
    NoResultsError,
)
from .types import ArticleSummary, FavoriteArticle
from .scoring import filter_and_rank, passes_quality_filter, quality_score
from .store import BlobStore, JsonFileBlobStore, MemoryBlobStore
from .favorites import FAVORITES_KEY, FavoritesManager

__all__ = [
    "ArticleSummary",
    "FavoriteArticle",
    "FetchError",
    "NetworkError",
    "DecodeError",
    "NoResultsError",
    "BatchFetchError",
    "FavoritesDecodeError",
    "quality_score",
    "passes_quality_filter",
    "filter_and_rank",
    "BlobStore",
    "JsonFileBlobStore",
    "MemoryBlobStore",
    "FavoritesManager",
    "FAVORITES_KEY",
]
