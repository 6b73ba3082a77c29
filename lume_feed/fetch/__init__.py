"""
Article fetching and ranking.

This package handles Wikipedia HTTP access and the batch pipeline that
turns random searches into a ranked feed.
"""

from .queries import INTERESTING_QUERIES
from .service import ArticleFetcher, RandomSource
from .wikipedia import WikipediaClient

__all__ = [
    "INTERESTING_QUERIES",
    "ArticleFetcher",
    "RandomSource",
    "WikipediaClient",
]
