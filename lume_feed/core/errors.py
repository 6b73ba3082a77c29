"""Exception types raised by the fetch pipeline and the favorites store."""

from __future__ import annotations


class FetchError(Exception):
    """Base class for article fetch failures."""


class NetworkError(FetchError):
    """Transport failure or non-success HTTP status."""

    def __init__(self, message: str, url: str | None = None, status_code: int | None = None):
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class DecodeError(FetchError):
    """Response body did not have the expected shape."""


class NoResultsError(FetchError):
    """A search query returned zero candidate pages."""

    def __init__(self, query: str):
        super().__init__(f"No search results for query {query!r}")
        self.query = query


class BatchFetchError(FetchError):
    """One or more request chains in a batch failed.

    The batch is all-or-nothing, so callers only ever see this single error.
    The first underlying failure is available as ``__cause__``.
    """

    def __init__(self, batch_size: int):
        super().__init__(f"Article batch of {batch_size} requests failed")
        self.batch_size = batch_size


class FavoritesDecodeError(Exception):
    """Stored favorites blob could not be decoded."""
