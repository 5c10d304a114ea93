"""Media reference handling: URL classification and the image proxy codec."""

from sequencer.services.media.classifier import (
    Classification,
    ItemType,
    Provider,
    classify,
    drive_file_url,
    drive_view_url,
    extract_drive_id,
    extract_youtube_id,
    youtube_watch_url,
)
from sequencer.services.media.proxy import clean_legacy_items, is_wrapped, unwrap, wrap

__all__ = [
    "Classification",
    "ItemType",
    "Provider",
    "classify",
    "clean_legacy_items",
    "drive_file_url",
    "drive_view_url",
    "extract_drive_id",
    "extract_youtube_id",
    "is_wrapped",
    "unwrap",
    "wrap",
    "youtube_watch_url",
]
