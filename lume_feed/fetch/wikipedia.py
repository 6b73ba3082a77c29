"""
Wikipedia API access over httpx.

Two calls are used per feed candidate:
1. Action API generator search, returning up to ``search_limit`` pages
2. REST ``page/summary`` for one chosen title

No retries are attempted; any transport failure, non-2xx status or
malformed body raises a FetchError subclass.
"""

from __future__ import annotations

from typing import Any
from urllib.parse import quote

import httpx

from ..config import FetchConfig
from ..core.errors import DecodeError, NetworkError
from ..core.types import ArticleSummary


class WikipediaClient:
    """Async client for the Wikipedia search and summary endpoints.

    The underlying httpx.AsyncClient is shared by all concurrent calls.
    It is created here unless one is passed in, in which case the caller
    owns its lifecycle.
    """

    def __init__(
        self,
        cfg: FetchConfig,
        search_limit: int = 5,
        client: httpx.AsyncClient | None = None,
    ):
        self.cfg = cfg
        self.search_limit = search_limit
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=cfg.timeout_seconds,
            headers={"User-Agent": cfg.user_agent},
            follow_redirects=True,
            trust_env=cfg.trust_env,
        )

    async def __aenter__(self) -> WikipediaClient:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    def search_params(self, query: str) -> dict[str, str]:
        return {
            "action": "query",
            "format": "json",
            "generator": "search",
            "gsrsearch": query,
            "gsrlimit": str(self.search_limit),
            "prop": "pageimages|extracts",
            "exintro": "1",
            "explaintext": "1",
            "exsentences": "3",
            "piprop": "thumbnail",
            "pithumbsize": "500",
        }

    async def search_titles(self, query: str) -> list[str]:
        """Return the titles of pages matching a search query.

        An empty list means the search found nothing; the API omits the
        ``query`` key entirely in that case.

        Raises:
            NetworkError: On transport failure or non-2xx status
            DecodeError: If the body is not JSON or pages lack titles
        """
        data = await self._get_json(self.cfg.api_url, params=self.search_params(query))
        if not isinstance(data, dict):
            raise DecodeError("search response is not an object")
        query_obj = data.get("query") or {}
        if not isinstance(query_obj, dict):
            raise DecodeError("search response query is not an object")
        pages = query_obj.get("pages") or {}
        if not isinstance(pages, dict):
            raise DecodeError("search response pages is not an object")

        titles = []
        for page in pages.values():
            title = page.get("title") if isinstance(page, dict) else None
            if not isinstance(title, str) or not title:
                raise DecodeError("search result page has no title")
            titles.append(title)
        return titles

    async def fetch_summary(self, title: str) -> ArticleSummary:
        url = f"{self.cfg.rest_url.rstrip('/')}/page/summary/{quote(title, safe='')}"
        data = await self._get_json(url)
        return ArticleSummary.from_summary_payload(data)

    async def _get_json(self, url: str, params: dict[str, str] | None = None) -> Any:
        try:
            resp = await self._client.get(url, params=params)
        except httpx.HTTPError as exc:
            raise NetworkError(f"{type(exc).__name__}: {exc}", url=url) from exc

        if resp.status_code < 200 or resp.status_code >= 300:
            raise NetworkError(
                f"HTTP {resp.status_code} from {resp.url}",
                url=str(resp.url),
                status_code=resp.status_code,
            )
        try:
            return resp.json()
        except ValueError as exc:
            raise DecodeError(f"Invalid JSON from {resp.url}: {exc}") from exc
