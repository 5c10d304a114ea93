"""YouTube Kids channel importer.

A channel's uploads live in a playlist whose id is the channel id with the
"UC" prefix replaced by "UU".
"""

import re
from typing import Any

from sequencer.infrastructure.youtube_api import YouTubeDataClient
from sequencer.services.importers.base import BaseImporter, ImportResult, RawCandidate
from sequencer.services.media.classifier import youtube_watch_url

YOUTUBE_KIDS_CHANNEL_PATTERN = re.compile(r"youtubekids\.com/channel/([A-Za-z0-9_-]+)")
BARE_CHANNEL_ID_PATTERN = re.compile(r"^UC[A-Za-z0-9_-]+$")


def extract_channel_id(url: str) -> str | None:
    """Extract a channel id from a youtubekids.com channel URL or bare UC... id."""
    match = YOUTUBE_KIDS_CHANNEL_PATTERN.search(url)
    if match:
        return match.group(1)
    if BARE_CHANNEL_ID_PATTERN.match(url):
        return url
    return None


def uploads_playlist_id(channel_id: str) -> str:
    """Uploads playlist id for a channel (UC... -> UU...)."""
    if channel_id.startswith("UC"):
        return "UU" + channel_id[2:]
    return channel_id


class YouTubeKidsChannelImporter(BaseImporter):
    """Import the uploads of a YouTube Kids channel."""

    source_name = "youtube_kids"
    invalid_input_message = (
        "Invalid YouTube Kids channel URL. Please use a link like: "
        "https://www.youtubekids.com/channel/UC..."
    )
    not_configured_message = "YouTube API key not configured."
    quota_message = "Access denied. The channel may be private or the API quota may be exceeded."
    not_found_message = (
        "Channel not found or has no videos. Make sure the channel URL is correct."
    )
    empty_message = "No videos found in this channel."
    unavailable_message = "Failed to extract channel videos. Please try again."

    def __init__(self, client: YouTubeDataClient, limit: int = 50) -> None:
        """Initialize channel importer.

        Args:
            client: YouTube Data API client
            limit: Maximum number of uploads to import
        """
        self._client = client
        self.limit = limit

    @property
    def is_configured(self) -> bool:
        return self._client.is_configured

    def parse_reference(self, reference: str) -> str | None:
        return extract_channel_id(reference)

    async def fetch(self, source_id: str) -> ImportResult:
        entries = await self._client.list_playlist_items(
            uploads_playlist_id(source_id),
            part="snippet,contentDetails",
            limit=self.limit,
        )
        items = [c for c in (self._to_candidate(entry) for entry in entries) if c]
        return ImportResult(source=self.source_name, items=items, count=len(items))

    def _to_candidate(self, entry: dict[str, Any]) -> RawCandidate | None:
        snippet = entry.get("snippet") or {}
        video_id = (entry.get("contentDetails") or {}).get("videoId")
        if not video_id:
            return None
        thumbnails = snippet.get("thumbnails") or {}
        return RawCandidate(
            url=youtube_watch_url(video_id),
            video_id=video_id,
            title=snippet.get("title"),
            thumbnail=(thumbnails.get("default") or {}).get("url") or "",
        )


__all__ = ["YouTubeKidsChannelImporter", "extract_channel_id", "uploads_playlist_id"]
