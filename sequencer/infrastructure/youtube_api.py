"""YouTube Data API v3 read client.

This module provides a thin async client over the public, key-authenticated
YouTube Data API endpoints used by the import adapters: playlist items
(with pagination) and batch video lookups.
"""

import re
from typing import Any

import httpx

from sequencer.core.exceptions import ExternalAPIError
from sequencer.core.logging import get_logger
from sequencer.infrastructure.http_client import HTTPClient, raise_for_api_status

logger = get_logger(__name__)

# YouTube Data API v3 endpoint
YOUTUBE_API_BASE = "https://www.googleapis.com/youtube/v3"

# API page size limit
MAX_PAGE_SIZE = 50

ISO_DURATION_PATTERN = re.compile(r"PT(?:(\d+)H)?(?:(\d+)M)?(?:(\d+)S)?")


def parse_iso_duration(iso_duration: str | None) -> int:
    """Parse an ISO 8601 video duration into seconds.

    Args:
        iso_duration: Duration such as "PT7M32S" or "PT1H"

    Returns:
        hours * 3600 + minutes * 60 + seconds, or 0 if unparsable

    Example:
        >>> parse_iso_duration("PT7M32S")
        452
    """
    if not iso_duration:
        return 0
    match = ISO_DURATION_PATTERN.search(iso_duration)
    if not match:
        return 0
    hours, minutes, seconds = (int(group) if group else 0 for group in match.groups())
    return hours * 3600 + minutes * 60 + seconds


class YouTubeDataClient:
    """Key-authenticated YouTube Data API client.

    Errors are raised as ExternalAPIError carrying the HTTP status code so
    callers can tell quota/private (403) and missing (404) apart from
    generic failures.

    Example:
        >>> client = YouTubeDataClient(http_client, api_key="...")
        >>> items = await client.list_playlist_items("PLxxxx")
    """

    service_name = "YouTube"

    def __init__(self, http_client: HTTPClient, api_key: str) -> None:
        """Initialize YouTube Data client.

        Args:
            http_client: Shared HTTP client
            api_key: YouTube Data API key
        """
        self._http_client = http_client
        self.api_key = api_key

    @property
    def is_configured(self) -> bool:
        """Whether an API key is available."""
        return bool(self.api_key)

    async def _get(self, endpoint: str, params: dict[str, Any]) -> dict[str, Any]:
        """Call an API endpoint and return the decoded JSON body.

        Args:
            endpoint: Endpoint name (e.g., "playlistItems")
            params: Query parameters (the key is added here)

        Returns:
            Decoded response body

        Raises:
            ExternalAPIError: On transport failure, non-2xx status or an
                undecodable body
        """
        url = f"{YOUTUBE_API_BASE}/{endpoint}"
        try:
            response = await self._http_client.get(url, params={**params, "key": self.api_key})
        except httpx.HTTPError as e:
            raise ExternalAPIError(
                service=self.service_name,
                message=f"Request failed: {e}",
                endpoint=endpoint,
            ) from e

        raise_for_api_status(response, self.service_name, endpoint)
        try:
            return response.json()
        except ValueError as e:
            raise ExternalAPIError(
                service=self.service_name,
                message="Invalid JSON response",
                status_code=response.status_code,
                endpoint=endpoint,
            ) from e

    async def list_playlist_items(
        self,
        playlist_id: str,
        part: str = "snippet",
        limit: int = MAX_PAGE_SIZE,
    ) -> list[dict[str, Any]]:
        """Fetch playlist items, following pagination up to a limit.

        Args:
            playlist_id: Playlist ID (PL..., UU..., etc.)
            part: Resource parts to request
            limit: Maximum items to return

        Returns:
            Raw playlistItem resources in playlist order

        Raises:
            ExternalAPIError: If any page request fails
        """
        items: list[dict[str, Any]] = []
        page_token: str | None = None

        while len(items) < limit:
            params: dict[str, Any] = {
                "part": part,
                "playlistId": playlist_id,
                "maxResults": min(limit - len(items), MAX_PAGE_SIZE),
            }
            if page_token:
                params["pageToken"] = page_token

            data = await self._get("playlistItems", params)
            items.extend(data.get("items", []))

            page_token = data.get("nextPageToken")
            if not page_token:
                break

        logger.debug("Playlist items fetched", playlist_id=playlist_id, count=len(items))
        return items[:limit]

    async def list_videos(
        self,
        video_ids: list[str],
        part: str = "snippet,contentDetails",
    ) -> list[dict[str, Any]]:
        """Batch lookup of video resources.

        Args:
            video_ids: Up to 50 video IDs
            part: Resource parts to request

        Returns:
            Raw video resources (order follows the API response)

        Raises:
            ExternalAPIError: If the request fails
        """
        if not video_ids:
            return []
        data = await self._get(
            "videos",
            {"part": part, "id": ",".join(video_ids[:MAX_PAGE_SIZE])},
        )
        return data.get("items", [])


__all__ = [
    "YouTubeDataClient",
    "parse_iso_duration",
    "YOUTUBE_API_BASE",
]
