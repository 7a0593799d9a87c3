"""
FPL API Client.

Async HTTP client for the two public Fantasy Premier League snapshots
used by the dashboard. Requests are made once; any failure is raised.
"""

import logging
from typing import Any

import httpx

from .endpoints import FPL_BASE_URL, get_bootstrap_static_url, get_fixtures_url

logger = logging.getLogger(__name__)


class FPLAPIError(Exception):
    """Base exception for FPL API errors."""

    def __init__(self, message: str, status_code: int | None = None):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class FPLNotFoundError(FPLAPIError):
    """Raised when resource not found."""

    pass


class FPLClient:
    """
    Async client for the FPL API.

    Use as an async context manager, or call close() when done.
    """

    DEFAULT_TIMEOUT = 30.0

    def __init__(
        self,
        base_url: str = FPL_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize the FPL client.

        Args:
            base_url: FPL API base URL
            timeout: Request timeout in seconds
            transport: Optional httpx transport (tests use MockTransport)
        """
        self.base_url = base_url
        self.timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "FPLClient":
        """Async context manager entry."""
        await self._ensure_client()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        await self.close()

    async def _ensure_client(self) -> None:
        """Ensure HTTP client is initialized."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout),
                follow_redirects=True,
                transport=self._transport,
                headers={
                    "User-Agent": "FPL-Edge/1.0",
                    "Accept": "application/json",
                },
            )

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def get(self, url: str, **kwargs: Any) -> dict[str, Any] | list[Any]:
        """
        Make a GET request.

        Raises:
            FPLAPIError: On non-200 status, transport error or invalid JSON
        """
        await self._ensure_client()
        assert self._client is not None

        logger.debug(f"GET {url}")
        try:
            response = await self._client.get(url, **kwargs)
        except httpx.RequestError as e:
            raise FPLAPIError(f"Request to {url} failed: {e}") from e

        if response.status_code == 404:
            raise FPLNotFoundError(f"Resource not found: {url}", status_code=404)
        if response.status_code != 200:
            raise FPLAPIError(
                f"Unexpected status code: {response.status_code}",
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as e:
            raise FPLAPIError(f"Invalid JSON from {url}: {e}") from e

    # =========================================================================
    # Public API Methods
    # =========================================================================

    async def get_bootstrap_static(self) -> dict[str, Any]:
        """
        Get bootstrap-static data.

        Returns all players, teams, positions and gameweek info.
        """
        data = await self.get(get_bootstrap_static_url(self.base_url))
        self._validate_bootstrap(data)
        return data  # type: ignore

    async def get_fixtures(self) -> list[dict[str, Any]]:
        """Get all fixtures for the season."""
        data = await self.get(get_fixtures_url(self.base_url))
        if not isinstance(data, list):
            raise FPLAPIError("Invalid fixtures response: expected list")
        return data

    # =========================================================================
    # Validation
    # =========================================================================

    def _validate_bootstrap(self, data: Any) -> None:
        """Validate bootstrap-static response structure."""
        if not isinstance(data, dict):
            raise FPLAPIError("Invalid bootstrap response: expected dict")

        required_fields = ["elements", "teams", "element_types"]
        missing = [f for f in required_fields if f not in data]

        if missing:
            raise FPLAPIError(
                f"Invalid bootstrap response: missing fields {missing}. "
                "The FPL API structure may have changed."
            )
