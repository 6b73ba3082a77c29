"""Feed load state, published to a listener instead of observable flags."""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Callable, Union

from .core.errors import FetchError
from .core.types import ArticleSummary
from .fetch.service import ArticleFetcher
from .utils.logging import log_event

LOAD_FAILED_MESSAGE = (
    "Failed to load articles. Please check your internet connection and try again."
)


@dataclass(frozen=True)
class FeedLoading:
    pass


@dataclass(frozen=True)
class FeedSuccess:
    articles: list[ArticleSummary] = field(default_factory=list)


@dataclass(frozen=True)
class FeedFailure:
    """Terminal state of a failed load.

    Attributes:
        reason: Technical description of the underlying error
        message: Generic text suitable for showing to the user
    """
    reason: str
    message: str = LOAD_FAILED_MESSAGE


FeedState = Union[FeedLoading, FeedSuccess, FeedFailure]
FeedListener = Callable[[FeedState], None]


class FeedController:
    """Drives feed loads and keeps the last good article list.

    A failed load leaves ``articles`` untouched so whatever was on screen
    stays there.
    """

    def __init__(
        self,
        fetcher: ArticleFetcher,
        listener: FeedListener | None = None,
        logger: logging.Logger | None = None,
    ):
        self.fetcher = fetcher
        self.listener = listener
        self.logger = logger or logging.getLogger("lume_feed.feed")
        self.articles: list[ArticleSummary] = []
        self.state: FeedState = FeedSuccess([])

    async def load(self, count: int | None = None) -> FeedState:
        self._publish(FeedLoading())
        try:
            articles = await self.fetcher.fetch_articles(count)
        except FetchError as exc:
            reason = str(exc.__cause__ or exc)
            log_event(self.logger, "Feed load failed", event="feed_failed", reason=reason)
            state: FeedState = FeedFailure(reason=reason)
        else:
            self.articles = articles
            state = FeedSuccess(list(articles))
        self._publish(state)
        return state

    @property
    def is_loading(self) -> bool:
        return isinstance(self.state, FeedLoading)

    def _publish(self, state: FeedState) -> None:
        self.state = state
        if self.listener is not None:
            self.listener(state)
