"""
HTTP fetcher backed by httpx.

Plays the part of the host's fetcher when the pack runs on its own: it
injects the OAuth2 bearer token, caches GET responses for a short time and
turns every non-2xx response into a user-visible TodoistAPIError.
"""

from __future__ import annotations

import json
import logging
import time
from types import TracebackType
from typing import Any, TypeVar

import httpx

from todoist_pack.exceptions import TodoistConfigurationError, error_for_status
from todoist_pack.sdk import FetchRequest, FetchResponse
from todoist_pack.settings import Settings, get_settings

logger = logging.getLogger(__name__)

T = TypeVar("T", bound="HttpxFetcher")


class HttpxFetcher:
    """
    Authenticated fetcher for the Todoist APIs.

    Usage:
        async with HttpxFetcher(access_token="...") as fetcher:
            context = ExecutionContext(fetcher=fetcher)
            rows = await pack.execute_sync_table("Projects", [], context)
    """

    def __init__(
        self,
        access_token: str,
        *,
        timeout: float = 30.0,
        cache_ttl_secs: int = 60,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._client = httpx.AsyncClient(
            headers={
                "Authorization": f"Bearer {access_token}",
                "Accept": "application/json",
            },
            timeout=timeout,
            transport=transport,
        )
        self._default_ttl = cache_ttl_secs
        self._cache: dict[str, tuple[float, FetchResponse]] = {}

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> HttpxFetcher:
        settings = settings or get_settings()
        if not settings.access_token:
            raise TodoistConfigurationError(
                "No Todoist access token configured. Set TODOIST_ACCESS_TOKEN."
            )
        return cls(
            settings.access_token,
            timeout=settings.timeout,
            cache_ttl_secs=settings.cache_ttl_secs,
        )

    async def close(self) -> None:
        await self._client.aclose()

    async def __aenter__(self: T) -> T:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.close()

    def clear_cache(self) -> None:
        self._cache.clear()

    async def fetch(self, request: FetchRequest) -> FetchResponse:
        method = request.method.upper()
        ttl = self._default_ttl if request.cache_ttl_secs is None else request.cache_ttl_secs
        cache_key = self._cache_key(request) if method == "GET" else None

        if cache_key is not None and ttl > 0:
            cached = self._cache.get(cache_key)
            if cached and cached[0] > time.monotonic():
                logger.debug("Cache hit for %s", request.url)
                return cached[1]
            self._cache.pop(cache_key, None)

        logger.debug("%s %s", method, request.url)
        response = await self._client.request(
            method,
            request.url,
            params=request.params,
            headers=request.headers,
            json=request.json,
        )

        body = self._decode(response)
        if not response.is_success:
            logger.warning("%s %s failed with %d", method, request.url, response.status_code)
            raise error_for_status(response.status_code, str(response.url), body)

        result = FetchResponse(
            status_code=response.status_code,
            body=body,
            headers=dict(response.headers),
        )
        # A bypassed read still refreshes the cache for later readers.
        store_ttl = ttl or self._default_ttl
        if cache_key is not None and store_ttl > 0:
            now = time.monotonic()
            self._prune(now)
            self._cache[cache_key] = (now + store_ttl, result)
        return result

    def _prune(self, now: float) -> None:
        """Drop every expired cache entry."""
        expired = [key for key, (expires_at, _) in self._cache.items() if expires_at <= now]
        for key in expired:
            del self._cache[key]
        if expired:
            logger.debug("Pruned %d expired cache entries", len(expired))

    @staticmethod
    def _cache_key(request: FetchRequest) -> str:
        params = json.dumps(request.params or {}, sort_keys=True, default=str)
        return f"{request.url}?{params}"

    @staticmethod
    def _decode(response: httpx.Response) -> Any:
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return response.text
