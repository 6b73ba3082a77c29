"""Tests for batch fetching, all-or-nothing joins and ranking."""

from __future__ import annotations

import asyncio
import random

import httpx
import pytest

from lume_feed.config import FetchConfig, RankingConfig
from lume_feed.core.errors import BatchFetchError, DecodeError, NetworkError, NoResultsError
from lume_feed.core.types import ArticleSummary
from lume_feed.fetch.queries import INTERESTING_QUERIES
from lume_feed.fetch.service import ArticleFetcher
from lume_feed.fetch.wikipedia import WikipediaClient


class _FirstChoice:
    """Deterministic random source that always picks the first element."""

    def choice(self, seq):
        return seq[0]


class _FakeClient:
    """In-memory stand-in for WikipediaClient."""

    def __init__(self, summaries, search_results=None, fail_on_call=None):
        self._summaries = list(summaries)
        self._search_results = search_results
        self._fail_on_call = fail_on_call
        self.search_calls: list[str] = []
        self.summary_calls: list[str] = []

    async def search_titles(self, query):
        self.search_calls.append(query)
        if self._search_results is not None:
            return list(self._search_results)
        index = len(self.search_calls) - 1
        return [self._summaries[index].title]

    async def fetch_summary(self, title):
        self.summary_calls.append(title)
        if self._fail_on_call is not None and len(self.summary_calls) == self._fail_on_call:
            raise NetworkError("connection reset", url=f"summary/{title}")
        for summary in self._summaries:
            if summary.title == title:
                return summary
        raise AssertionError(f"unexpected title {title}")


def _article(title: str, extract_len: int = 500, thumbnail: bool = True) -> ArticleSummary:
    return ArticleSummary(
        title=title,
        extract="x" * extract_len,
        description="desc",
        thumbnail_url="https://upload.wikimedia.org/t.jpg" if thumbnail else None,
    )


def test_over_fetches_three_times_requested_count():
    summaries = [_article(f"Article {i:02d}") for i in range(30)]
    client = _FakeClient(summaries)
    fetcher = ArticleFetcher(client, rng=_FirstChoice())

    result = asyncio.run(fetcher.fetch_articles(10))

    assert len(client.search_calls) == 30
    assert len(client.summary_calls) == 30
    assert len(result) == 10


def test_tied_scores_keep_arrival_order():
    summaries = [_article(f"Article {i:02d}") for i in range(30)]
    client = _FakeClient(summaries)
    fetcher = ArticleFetcher(client, rng=_FirstChoice())

    result = asyncio.run(fetcher.fetch_articles(10))

    assert all(a.quality_score == 85 for a in result)
    assert [a.title for a in result] == [f"Article {i:02d}" for i in range(10)]


def test_low_quality_candidates_are_filtered_without_backfill():
    summaries = [
        _article("good one"),
        _article("too short", extract_len=50),
        _article("low score", extract_len=150, thumbnail=False),
    ]
    client = _FakeClient(summaries)
    fetcher = ArticleFetcher(client, rng=_FirstChoice())

    result = asyncio.run(fetcher.fetch_articles(1))

    assert [a.title for a in result] == ["good one"]
    assert len(client.search_calls) == 3


def test_returns_fewer_when_filter_leaves_too_few():
    summaries = [_article("only good")] + [
        _article(f"short {i}", extract_len=10) for i in range(5)
    ]
    client = _FakeClient(summaries)
    fetcher = ArticleFetcher(client, rng=_FirstChoice())

    result = asyncio.run(fetcher.fetch_articles(2))

    assert [a.title for a in result] == ["only good"]


def test_single_chain_failure_fails_whole_batch():
    summaries = [_article(f"Article {i}") for i in range(9)]
    client = _FakeClient(summaries, fail_on_call=5)
    fetcher = ArticleFetcher(client, rng=_FirstChoice())

    with pytest.raises(BatchFetchError) as excinfo:
        asyncio.run(fetcher.fetch_articles(3))

    assert excinfo.value.batch_size == 9
    assert isinstance(excinfo.value.__cause__, NetworkError)


def test_empty_search_result_fails_batch_with_no_results_cause():
    client = _FakeClient([], search_results=[])
    fetcher = ArticleFetcher(client, rng=_FirstChoice())

    with pytest.raises(BatchFetchError) as excinfo:
        asyncio.run(fetcher.fetch_articles(1))

    cause = excinfo.value.__cause__
    assert isinstance(cause, NoResultsError)
    assert cause.query == INTERESTING_QUERIES[0]


def test_random_source_picks_query_and_page():
    summaries = [_article("Second")]
    client = _FakeClient(summaries, search_results=["First", "Second", "Third"])

    class _Scripted:
        def __init__(self):
            self.calls = []

        def choice(self, seq):
            self.calls.append(tuple(seq))
            return seq[1]

    rng = _Scripted()
    fetcher = ArticleFetcher(client, rng=rng, queries=["alpha", "beta"])

    result = asyncio.run(fetcher.fetch_articles(1))

    assert client.search_calls == ["beta", "beta", "beta"]
    assert client.summary_calls == ["Second", "Second", "Second"]
    assert rng.calls[0] == ("alpha", "beta")
    assert [a.title for a in result] == ["Second"]


def test_zero_count_makes_no_requests():
    client = _FakeClient([])
    fetcher = ArticleFetcher(client, rng=_FirstChoice())

    assert asyncio.run(fetcher.fetch_articles(0)) == []
    assert client.search_calls == []


def test_negative_count_is_rejected():
    fetcher = ArticleFetcher(_FakeClient([]), rng=_FirstChoice())
    with pytest.raises(ValueError):
        asyncio.run(fetcher.fetch_articles(-1))


def test_default_count_comes_from_ranking_config():
    summaries = [_article(f"Article {i}") for i in range(8)]
    client = _FakeClient(summaries)
    ranking = RankingConfig(default_count=4, over_fetch_factor=2)
    fetcher = ArticleFetcher(client, ranking=ranking, rng=_FirstChoice())

    result = asyncio.run(fetcher.fetch_articles())

    assert len(client.search_calls) == 8
    assert len(result) == 4


def test_empty_query_list_is_rejected():
    with pytest.raises(ValueError):
        ArticleFetcher(_FakeClient([]), queries=[])


def test_curated_query_list_size():
    assert 50 <= len(INTERESTING_QUERIES) <= 70
    assert len(set(INTERESTING_QUERIES)) == len(INTERESTING_QUERIES)


def test_end_to_end_over_mock_transport():
    """Full pipeline against a mocked Wikipedia with a seeded random source."""

    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/w/api.php":
            query = request.url.params["gsrsearch"]
            return httpx.Response(
                200,
                json={"query": {"pages": {"1": {"title": f"{query} page"}}}},
            )
        title = request.url.path.rsplit("/", 1)[-1]
        return httpx.Response(
            200,
            json={
                "title": title,
                "extract": "y" * 450,
                "description": "About " + title,
                "thumbnail": {"source": "https://upload.wikimedia.org/img.jpg"},
                "content_urls": {"desktop": {"page": "https://en.wikipedia.org/wiki/x"}},
            },
        )

    async def _inner():
        transport = httpx.MockTransport(handler)
        async with httpx.AsyncClient(transport=transport) as http:
            client = WikipediaClient(FetchConfig(), client=http)
            fetcher = ArticleFetcher(client, rng=random.Random(7))
            return await fetcher.fetch_articles(4)

    result = asyncio.run(_inner())

    assert len(result) == 4
    assert all(a.quality_score >= 85 for a in result)
    scores = [a.quality_score for a in result]
    assert scores == sorted(scores, reverse=True)


def test_end_to_end_server_error_fails_batch():
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/w/api.php":
            return httpx.Response(
                200, json={"query": {"pages": {"1": {"title": "Anything"}}}}
            )
        return httpx.Response(500)

    async def _inner():
        transport = httpx.MockTransport(handler)
        async with httpx.AsyncClient(transport=transport) as http:
            client = WikipediaClient(FetchConfig(), client=http)
            fetcher = ArticleFetcher(client, rng=random.Random(1))
            return await fetcher.fetch_articles(2)

    with pytest.raises(BatchFetchError):
        asyncio.run(_inner())


def test_end_to_end_malformed_search_body_fails_batch():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"query": "oops"})

    async def _inner():
        transport = httpx.MockTransport(handler)
        async with httpx.AsyncClient(transport=transport) as http:
            client = WikipediaClient(FetchConfig(), client=http)
            fetcher = ArticleFetcher(client, rng=random.Random(3))
            return await fetcher.fetch_articles(1)

    with pytest.raises(BatchFetchError) as excinfo:
        asyncio.run(_inner())
    assert isinstance(excinfo.value.__cause__, DecodeError)


def test_failed_batch_leaves_sibling_chains_running():
    class _StallingClient:
        def __init__(self):
            self.release = asyncio.Event()
            self.searches = 0
            self.finished = 0

        async def search_titles(self, query):
            self.searches += 1
            if self.searches == 1:
                raise NetworkError("connection reset")
            await self.release.wait()
            return ["Late"]

        async def fetch_summary(self, title):
            self.finished += 1
            return _article(title)

    async def _inner():
        client = _StallingClient()
        fetcher = ArticleFetcher(client, rng=_FirstChoice())
        with pytest.raises(BatchFetchError):
            await fetcher.fetch_articles(1)
        pending = client.finished
        client.release.set()
        for _ in range(10):
            await asyncio.sleep(0)
        return pending, client.finished

    pending, finished = asyncio.run(_inner())
    assert pending == 0
    assert finished == 2
