"""Source URL classification and normalization.

This module turns a raw pasted string into a typed, canonical reference:
1. Manual type prefixes ("video:" / "image:") are stripped and force the type
2. YouTube / YouTube Kids URLs and bare 11-char ids resolve to a video id
3. Google Drive share links resolve to a file id (direct-view URL for images)
4. Everything else is an image URL kept verbatim

Classification is a fixed point: classifying a canonical URL returns the
same canonical URL.
"""

import re
from enum import Enum

from pydantic import BaseModel


class ItemType(str, Enum):
    """Kind of media a sequence item holds."""

    IMAGE = "image"
    VIDEO = "video"


class Provider(str, Enum):
    """Where a media item is hosted."""

    YOUTUBE = "youtube"
    YOUTUBE_KIDS = "youtube_kids"
    DRIVE = "drive"
    GENERIC = "generic"


class Classification(BaseModel):
    """Result of classifying one raw input.

    Attributes:
        type: Image or video
        provider: Hosting provider
        source_url: Input with any type prefix removed (kept for export)
        canonical_url: Storage-ready URL
        media_id: YouTube video id or Drive file id (None for generic media)
    """

    type: ItemType
    provider: Provider
    source_url: str
    canonical_url: str
    media_id: str | None = None

    @property
    def is_video(self) -> bool:
        """Whether the input classified as a video."""
        return self.type == ItemType.VIDEO


TYPE_PREFIX_PATTERN = re.compile(r"^(video|image):\s*(.+)$", re.IGNORECASE | re.DOTALL)

YOUTUBE_ID = r"([A-Za-z0-9_-]{11})"
YOUTUBE_PATTERNS = [
    re.compile(r"youtube\.com/watch\?(?:[^#]*&)?v=" + YOUTUBE_ID),
    re.compile(r"youtubekids\.com/watch\?(?:[^#]*&)?v=" + YOUTUBE_ID),
    re.compile(r"youtu\.be/" + YOUTUBE_ID),
    re.compile(r"youtube\.com/embed/" + YOUTUBE_ID),
    re.compile(r"youtube\.com/shorts/" + YOUTUBE_ID),
]
BARE_YOUTUBE_ID_PATTERN = re.compile(r"^" + YOUTUBE_ID + r"$")
YOUTUBE_HOSTS = ("youtube.com", "youtu.be", "youtubekids.com")

DRIVE_PATTERNS = [
    re.compile(r"drive\.google\.com/file/d/([^/?&#]+)"),
    re.compile(r"drive\.google\.com/open\?(?:[^#]*&)?id=([^&#]+)"),
    re.compile(r"drive\.google\.com/uc\?(?:[^#]*&)?id=([^&#]+)"),
]

YOUTUBE_WATCH_URL = "https://youtube.com/watch?v={video_id}"
DRIVE_VIEW_URL = "https://drive.google.com/uc?export=view&id={file_id}"
DRIVE_FILE_URL = "https://drive.google.com/file/d/{file_id}/view"


def extract_youtube_id(url: str) -> str | None:
    """Extract the 11-character video id from a YouTube URL or bare id.

    Args:
        url: YouTube URL (watch, youtu.be, embed, shorts, youtubekids) or id

    Returns:
        Video id, or None if the input is not a YouTube reference
    """
    text = url.strip()
    for pattern in YOUTUBE_PATTERNS:
        match = pattern.search(text)
        if match:
            return match.group(1)
    match = BARE_YOUTUBE_ID_PATTERN.match(text)
    return match.group(1) if match else None


def extract_drive_id(url: str) -> str | None:
    """Extract the file id from a Google Drive share or view link.

    Args:
        url: Drive URL (file/d/{id}, open?id={id} or uc?...id={id})

    Returns:
        Drive file id, or None if the input is not a Drive file link
    """
    for pattern in DRIVE_PATTERNS:
        match = pattern.search(url)
        if match:
            return match.group(1)
    return None


def drive_view_url(file_id: str) -> str:
    """Direct-view URL used to render a Drive image."""
    return DRIVE_VIEW_URL.format(file_id=file_id)


def drive_file_url(file_id: str) -> str:
    """Share-page URL of a Drive file."""
    return DRIVE_FILE_URL.format(file_id=file_id)


def youtube_watch_url(video_id: str) -> str:
    """Watch URL for a YouTube video id."""
    return YOUTUBE_WATCH_URL.format(video_id=video_id)


def is_youtube_url(url: str) -> bool:
    """Whether the string points at a YouTube host."""
    return any(host in url for host in YOUTUBE_HOSTS)


def is_drive_url(url: str) -> bool:
    """Whether the string points at Google Drive."""
    return "drive.google.com" in url


def _classify_video(text: str) -> Classification:
    video_id = extract_youtube_id(text)
    if video_id:
        provider = Provider.YOUTUBE_KIDS if "youtubekids.com" in text else Provider.YOUTUBE
        return Classification(
            type=ItemType.VIDEO,
            provider=provider,
            source_url=text,
            canonical_url=youtube_watch_url(video_id),
            media_id=video_id,
        )

    file_id = extract_drive_id(text) if is_drive_url(text) else None
    if file_id:
        # Drive videos are embedded by id, the URL is not rewritten for fetching
        return Classification(
            type=ItemType.VIDEO,
            provider=Provider.DRIVE,
            source_url=text,
            canonical_url=drive_file_url(file_id),
            media_id=file_id,
        )

    return Classification(
        type=ItemType.VIDEO,
        provider=Provider.GENERIC,
        source_url=text,
        canonical_url=text,
    )


def _classify_image(text: str) -> Classification:
    file_id = extract_drive_id(text) if is_drive_url(text) else None
    if file_id:
        return Classification(
            type=ItemType.IMAGE,
            provider=Provider.DRIVE,
            source_url=text,
            canonical_url=drive_view_url(file_id),
            media_id=file_id,
        )
    return Classification(
        type=ItemType.IMAGE,
        provider=Provider.GENERIC,
        source_url=text,
        canonical_url=text,
    )


def classify(raw: str) -> Classification:
    """Classify a raw pasted string into a typed canonical reference.

    Prefix rules are checked before provider sniffing. Without a prefix,
    YouTube hosts and bare 11-char ids are videos, Drive links are images,
    and anything else is an image kept verbatim.

    Args:
        raw: Pasted URL, optionally prefixed with "video:" or "image:"

    Returns:
        Classification with type, provider and canonical form

    Example:
        >>> classify("https://youtu.be/dQw4w9WgXcQ").media_id
        'dQw4w9WgXcQ'
    """
    text = raw.strip()

    prefix_match = TYPE_PREFIX_PATTERN.match(text)
    if prefix_match:
        forced = ItemType(prefix_match.group(1).lower())
        remainder = prefix_match.group(2).strip()
        if forced == ItemType.VIDEO:
            return _classify_video(remainder)
        return _classify_image(remainder)

    if is_youtube_url(text) or BARE_YOUTUBE_ID_PATTERN.match(text):
        return _classify_video(text)

    return _classify_image(text)


__all__ = [
    "Classification",
    "ItemType",
    "Provider",
    "classify",
    "drive_file_url",
    "drive_view_url",
    "extract_drive_id",
    "extract_youtube_id",
    "is_drive_url",
    "is_youtube_url",
    "youtube_watch_url",
]
