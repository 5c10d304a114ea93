"""YouTube playlist importer.

Fetches up to 50 playlist entries, then enriches them with a single batch
video lookup (channel name, medium thumbnail, duration). When the lookup
fails the basic entries are returned instead.
"""

import re
from typing import Any

from sequencer.core.exceptions import ExternalAPIError
from sequencer.core.logging import get_logger
from sequencer.infrastructure.youtube_api import YouTubeDataClient, parse_iso_duration
from sequencer.services.importers.base import BaseImporter, ImportResult, RawCandidate
from sequencer.services.media.classifier import youtube_watch_url

logger = get_logger(__name__)

PLAYLIST_ID_PATTERNS = [
    re.compile(r"[?&]list=([^&#]+)"),
    re.compile(r"/playlist\?list=([^&#]+)"),
]
BARE_PLAYLIST_ID_PATTERN = re.compile(r"^PL[A-Za-z0-9_-]+$")

DEFAULT_PLAYLIST_TITLE = "YouTube Playlist"


def extract_playlist_id(url: str) -> str | None:
    """Extract a playlist id from a playlist URL or bare PL... id.

    Args:
        url: Playlist URL (any page carrying ?list= / &list=) or id

    Returns:
        Playlist id, or None if not recognized
    """
    for pattern in PLAYLIST_ID_PATTERNS:
        match = pattern.search(url)
        if match:
            return match.group(1)
    if BARE_PLAYLIST_ID_PATTERN.match(url):
        return url
    return None


def _thumbnail(snippet: dict[str, Any], *sizes: str) -> str | None:
    thumbnails = snippet.get("thumbnails") or {}
    for size in sizes:
        url = (thumbnails.get(size) or {}).get("url")
        if url:
            return url
    return None


class YouTubePlaylistImporter(BaseImporter):
    """Import the videos of a public YouTube playlist.

    Example:
        >>> importer = YouTubePlaylistImporter(youtube_client)
        >>> result = await importer.import_from("https://youtube.com/playlist?list=PL123")
        >>> result.title
        'Some Channel'
    """

    source_name = "youtube_playlist"
    invalid_input_message = "Invalid YouTube playlist URL. Please check the URL and try again."
    not_configured_message = "YouTube API not configured. Please contact support."
    quota_message = "API quota exceeded or playlist is private. Please try again later."
    not_found_message = "Playlist is empty or not found."
    empty_message = "Playlist is empty or not found."
    unavailable_message = (
        "Failed to fetch playlist from YouTube. Please check if the playlist is public."
    )

    def __init__(self, client: YouTubeDataClient, limit: int = 50) -> None:
        """Initialize playlist importer.

        Args:
            client: YouTube Data API client
            limit: Maximum number of playlist entries to import
        """
        self._client = client
        self.limit = limit

    @property
    def is_configured(self) -> bool:
        return self._client.is_configured

    def parse_reference(self, reference: str) -> str | None:
        return extract_playlist_id(reference)

    async def fetch(self, source_id: str) -> ImportResult:
        """Fetch and enrich playlist entries.

        Args:
            source_id: Playlist id

        Returns:
            Import result titled with the first entry's channel title
        """
        entries = await self._client.list_playlist_items(
            source_id, part="snippet", limit=self.limit
        )

        basic: list[RawCandidate] = []
        for entry in entries:
            candidate = self._to_basic_candidate(entry)
            if candidate:
                basic.append(candidate)

        if not basic:
            return ImportResult(source=self.source_name, items=[], count=0)

        playlist_title = (entries[0].get("snippet") or {}).get("channelTitle") or (
            DEFAULT_PLAYLIST_TITLE
        )

        items = await self._enrich(basic)
        return ImportResult(
            source=self.source_name,
            items=items,
            count=len(items),
            title=playlist_title,
        )

    async def _enrich(self, basic: list[RawCandidate]) -> list[RawCandidate]:
        """Add channel name, medium thumbnail and duration to basic entries.

        Args:
            basic: Candidates built from playlist entries

        Returns:
            Enriched candidates in playlist order, or the basic list if the
            lookup fails
        """
        video_ids = [candidate.video_id for candidate in basic if candidate.video_id]
        try:
            videos = await self._client.list_videos(video_ids, part="snippet,contentDetails")
        except ExternalAPIError as e:
            logger.warning(
                "Video enrichment failed, using basic playlist data",
                error=e,
                count=len(basic),
            )
            return basic

        by_id = {video.get("id"): video for video in videos}
        enriched = []
        for candidate in basic:
            video = by_id.get(candidate.video_id)
            enriched.append(self._enrich_candidate(candidate, video) if video else candidate)
        return enriched

    def _to_basic_candidate(self, entry: dict[str, Any]) -> RawCandidate | None:
        """Convert a playlistItem resource to a basic candidate.

        Args:
            entry: playlistItem resource with a snippet part

        Returns:
            Candidate, or None if the entry has no video id
        """
        snippet = entry.get("snippet") or {}
        video_id = (snippet.get("resourceId") or {}).get("videoId")
        if not video_id:
            return None
        return RawCandidate(
            url=youtube_watch_url(video_id),
            video_id=video_id,
            title=snippet.get("title"),
            thumbnail=_thumbnail(snippet, "default") or "",
        )

    def _enrich_candidate(self, candidate: RawCandidate, video: dict[str, Any]) -> RawCandidate:
        snippet = video.get("snippet") or {}
        content_details = video.get("contentDetails") or {}
        return candidate.model_copy(
            update={
                "title": snippet.get("title") or candidate.title,
                "creator": snippet.get("channelTitle"),
                "thumbnail": _thumbnail(snippet, "medium", "default") or "",
                "duration_seconds": parse_iso_duration(content_details.get("duration")),
            }
        )


__all__ = ["YouTubePlaylistImporter", "extract_playlist_id"]
