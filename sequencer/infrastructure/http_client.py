"""Shared async HTTP client for the Google read APIs.

This module provides a managed httpx.AsyncClient reused by the import
adapters, plus the helper that turns a failed Google API response into
an ExternalAPIError carrying the status code.
"""

from typing import Any

import httpx

from sequencer.core.exceptions import ExternalAPIError
from sequencer.core.logging import get_logger

logger = get_logger(__name__)

DEFAULT_USER_AGENT = "Sequencer/0.1"


def raise_for_api_status(response: httpx.Response, service: str, endpoint: str) -> None:
    """Raise ExternalAPIError for a non-2xx Google API response.

    Google APIs report failures as {"error": {"message": ...}}; the message
    is used when present.

    Args:
        response: Upstream response
        service: Service name for the error (e.g., "YouTube")
        endpoint: Endpoint that was called

    Raises:
        ExternalAPIError: If the status code is 400 or above
    """
    if response.status_code < 400:
        return

    message = "Unknown error"
    try:
        body: Any = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, dict) and error.get("message"):
            message = error["message"]

    raise ExternalAPIError(
        service=service,
        message=message,
        status_code=response.status_code,
        endpoint=endpoint,
    )


class HTTPClient:
    """Managed HTTP client with connection reuse.

    Created once by the container, injected into the API clients and
    closed at application shutdown.

    Example:
        >>> http_client = HTTPClient(timeout=10.0)
        >>> response = await http_client.get(f"{YOUTUBE_API_BASE}/videos", params=params)
        >>> await http_client.close()
    """

    def __init__(
        self,
        timeout: float = 30.0,
        max_connections: int = 20,
        max_keepalive_connections: int = 10,
        user_agent: str = DEFAULT_USER_AGENT,
    ) -> None:
        """Initialize HTTP client.

        Args:
            timeout: Request timeout in seconds
            max_connections: Maximum number of connections
            max_keepalive_connections: Maximum keepalive connections
            user_agent: User-Agent header sent with every request
        """
        self._client = httpx.AsyncClient(
            timeout=httpx.Timeout(timeout),
            limits=httpx.Limits(
                max_connections=max_connections,
                max_keepalive_connections=max_keepalive_connections,
            ),
            headers={"User-Agent": user_agent, "Accept": "application/json"},
            follow_redirects=True,
        )
        logger.info(
            "HTTP client initialized",
            timeout=timeout,
            max_connections=max_connections,
        )

    async def get(self, url: str, **kwargs: Any) -> httpx.Response:
        """Send GET request."""
        return await self._client.get(url, **kwargs)

    async def post(self, url: str, **kwargs: Any) -> httpx.Response:
        """Send POST request."""
        return await self._client.post(url, **kwargs)

    async def close(self) -> None:
        """Close the HTTP client and release resources."""
        await self._client.aclose()
        logger.info("HTTP client closed")

    async def __aenter__(self) -> "HTTPClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()


__all__ = ["HTTPClient", "raise_for_api_status"]
