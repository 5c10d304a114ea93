"""Sequence document model, editing session and draft autosave."""

from sequencer.services.sequence.drafts import (
    DraftManager,
    DraftSnapshot,
    FileKeyValueStore,
    KeyValueStore,
    MemoryKeyValueStore,
)
from sequencer.services.sequence.editor import SequenceEditor, split_links
from sequencer.services.sequence.items import (
    ImageItem,
    SequenceDocument,
    SequenceItem,
    VideoItem,
)

__all__ = [
    "DraftManager",
    "DraftSnapshot",
    "FileKeyValueStore",
    "ImageItem",
    "KeyValueStore",
    "MemoryKeyValueStore",
    "SequenceDocument",
    "SequenceEditor",
    "SequenceItem",
    "VideoItem",
    "split_links",
]
