# ABOUTME: Cached, retrying HTTP fetcher for MediaWiki raw pages and JSON templates
# ABOUTME: Read-through/write-through over the content cache with response shape checks

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

import httpx

from arcwiki_extremes.extraction.base import MalformedResponse
from arcwiki_extremes.persistence import CacheWriteError, ContentCache, FetchKey, compute_fetch_key
from arcwiki_extremes.utils.logging import get_logger, log_api_call
from arcwiki_extremes.utils.retry import DEFAULT_MAX_RETRIES, attempt

DEFAULT_BASE_URL = "https://arcwiki.mcd.blue/"
DEFAULT_USER_AGENT = "arcwiki-extremes/0.1"


class WikiFetcher:
    """Fetch-or-retrieve-from-cache for wiki resources.

    A request is identified by its target URL and query parameters. On a
    cache hit the stored bytes are returned without touching the network;
    on a miss the request is retried as a unit, the response shape is
    checked, and the payload is written through to the cache exactly once.
    """

    def __init__(
        self,
        cache: ContentCache,
        client: httpx.AsyncClient | None = None,
        base_url: str = DEFAULT_BASE_URL,
        max_retries: int = DEFAULT_MAX_RETRIES,
        timeout: float = 30.0,
        user_agent: str = DEFAULT_USER_AGENT,
    ):
        self.cache = cache
        self.base_url = base_url.rstrip("/") + "/"
        self.max_retries = max_retries
        self._owns_client = client is None
        self.http_client = client or httpx.AsyncClient(  # Allow for dependency injection
            headers={"User-Agent": user_agent},
            timeout=timeout,
            follow_redirects=True,
        )
        self.logger = get_logger(__name__)

    @property
    def index_url(self) -> str:
        return f"{self.base_url}index.php"

    @property
    def api_url(self) -> str:
        return f"{self.base_url}api.php"

    @staticmethod
    def raw_params(title: str) -> dict[str, str]:
        """Query parameters for the unrendered source of a page."""
        return {"title": title, "action": "raw"}

    async def fetch_json(self, target: str, params: Mapping[str, Any]) -> dict[str, Any]:
        """Fetch a JSON document that must decode to an object.

        Raises:
            FetchExhausted: If the network request failed on every attempt
            MalformedResponse: If the body is not a JSON object
        """
        key = compute_fetch_key(target, params)
        cached = await self.cache.get(key)
        if cached is not None:
            return json.loads(cached)

        title = params.get("title")
        body = await self._fetch_uncached(key, target, params)

        try:
            data = json.loads(body)
        except json.JSONDecodeError as e:
            raise MalformedResponse(title, f"body is not JSON ({e})") from e
        if not isinstance(data, dict):
            raise MalformedResponse(title, f"expected a JSON object, got {type(data).__name__}")

        await self._store(key, json.dumps(data, ensure_ascii=False, separators=(",", ":")).encode("utf-8"), title)
        return data

    async def fetch_text(self, target: str, params: Mapping[str, Any]) -> str:
        """Fetch a text resource that must have a non-empty body.

        An empty page counts as malformed and is never cached.

        Raises:
            FetchExhausted: If the network request failed on every attempt
            MalformedResponse: If the body is empty
        """
        key = compute_fetch_key(target, params)
        cached = await self.cache.get(key)
        if cached is not None:
            return cached.decode("utf-8")

        title = params.get("title")
        body = await self._fetch_uncached(key, target, params)

        if not body:
            raise MalformedResponse(title, "expected a non-empty text body")

        await self._store(key, body.encode("utf-8"), title)
        return body

    async def fetch_page_json(self, title: str) -> dict[str, Any]:
        """Raw source of a JSON template page, e.g. ``Template:Songlist.json``."""
        return await self.fetch_json(self.index_url, self.raw_params(title))

    async def fetch_page_source(self, title: str) -> str:
        """Raw wikitext of a page."""
        return await self.fetch_text(self.index_url, self.raw_params(title))

    async def _fetch_uncached(self, key: FetchKey, target: str, params: Mapping[str, Any]) -> str:
        self.logger.info("Cache miss, fetching", title=params.get("title"), cache_key=key)
        return await attempt(lambda: self._get(target, params), self.max_retries)

    @log_api_call("mediawiki")
    async def _get(self, target: str, params: Mapping[str, Any]) -> str:
        response = await self.http_client.get(target, params=dict(params))
        response.raise_for_status()
        return response.text

    async def _store(self, key: FetchKey, payload: bytes, title: str | None) -> None:
        try:
            await self.cache.put(key, payload)
        except CacheWriteError as e:
            # The fetched payload is still returned to the caller
            self.logger.warning("Failed to cache response", title=title, cache_key=key, error=str(e))

    async def close(self) -> None:
        """Close the HTTP client if this fetcher created it."""
        if self._owns_client:
            await self.http_client.aclose()

    async def __aenter__(self) -> WikiFetcher:
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()
