"""
SearXNG news search client.

Keyword search used to attach recent news snippets to top picks.
"""

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from fpl_edge.data.models import Snippet

from .endpoints import get_search_url

logger = logging.getLogger(__name__)


class SearchError(Exception):
    """Raised when the search backend fails or returns garbage."""

    pass


class SearchClient:
    """Async SearXNG client returning JSON results from the last day, in English."""

    DEFAULT_TIMEOUT = 10.0

    def __init__(
        self,
        base_url: str = "http://localhost:8080",
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url
        self.timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "SearchClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout),
                transport=self._transport,
                headers={"Accept": "application/json"},
            )
        return self._client

    async def search(self, query: str) -> list[Snippet]:
        """
        Search for recent news.

        Raises:
            SearchError: On request failure, non-200 status, invalid JSON
                or results that do not map to snippets
        """
        params = {
            "q": query,
            "format": "json",
            "time_range": "day",
            "language": "en",
        }
        url = get_search_url(self.base_url)
        logger.debug(f"Search: {query!r}")

        try:
            response = await self._get_client().get(url, params=params)
        except httpx.RequestError as e:
            raise SearchError(f"Search request failed: {e}") from e

        if response.status_code != 200:
            raise SearchError(f"SearXNG error: {response.status_code}")

        try:
            data = response.json()
        except ValueError as e:
            raise SearchError(f"Invalid search response: {e}") from e

        if not isinstance(data, dict):
            raise SearchError("Invalid search response: expected object")

        try:
            return [_to_snippet(r) for r in data.get("results") or [] if isinstance(r, dict)]
        except (TypeError, ValidationError) as e:
            raise SearchError(f"Malformed search results: {e}") from e


def _to_snippet(result: dict[str, Any]) -> Snippet:
    return Snippet(
        title=result.get("title") or "",
        url=result.get("url") or "",
        snippet=result.get("content") or result.get("snippet") or "",
    )
