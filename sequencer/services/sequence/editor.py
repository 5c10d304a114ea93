"""In-memory sequence editing.

SequenceEditor owns one SequenceDocument and applies every mutation to it:
bulk link import, adapter imports, reordering, deletion, inline edits,
hashtags and export. Positions are renumbered to 1..N after every change,
and a rejected operation leaves the document untouched.
"""

import re
from collections.abc import Callable
from typing import Any

from sequencer.core.config import get_config
from sequencer.core.exceptions import SequenceValidationError
from sequencer.core.logging import get_logger
from sequencer.services.importers.base import ImportResult, RawCandidate
from sequencer.services.media.classifier import (
    Classification,
    ItemType,
    Provider,
    classify,
    drive_file_url,
    youtube_watch_url,
)
from sequencer.services.media.proxy import unwrap
from sequencer.services.sequence.items import (
    ImageItem,
    SequenceDocument,
    VideoItem,
    renumber,
)

logger = get_logger(__name__)

LINK_SEPARATOR_PATTERN = re.compile(r"[\n,]+")

ChangeListener = Callable[["SequenceEditor"], None]


def split_links(text: str) -> list[str]:
    """Split pasted text on newlines or commas, dropping blank lines."""
    return [line.strip() for line in LINK_SEPARATOR_PATTERN.split(text) if line.strip()]


class SequenceEditor:
    """Mutable editing session for a single sequence document.

    Listeners registered with ``subscribe`` are called after every
    successful mutation (used for draft autosave).

    Example:
        >>> editor = SequenceEditor()
        >>> editor.import_links("https://youtu.be/dQw4w9WgXcQ, https://example.com/a.png")
        2
        >>> [item.position for item in editor.items]
        [1, 2]
    """

    def __init__(
        self,
        document: SequenceDocument | None = None,
        max_items: int | None = None,
        max_hashtags: int | None = None,
    ) -> None:
        """Initialize editor.

        Args:
            document: Document to edit (a new empty one when omitted)
            max_items: Item cap (defaults to config)
            max_hashtags: Hashtag cap (defaults to config)
        """
        config = get_config()
        self.document = document or SequenceDocument()
        self.max_items = max_items if max_items is not None else config.max_items
        self.max_hashtags = max_hashtags if max_hashtags is not None else config.max_hashtags
        self._known_videos: dict[str, RawCandidate] = {}
        self._listeners: list[ChangeListener] = []
        renumber(self.document.items)

    @property
    def items(self) -> list[ImageItem | VideoItem]:
        return self.document.items

    def subscribe(self, listener: ChangeListener) -> None:
        """Register a callback invoked after each mutation."""
        self._listeners.append(listener)

    def _changed(self) -> None:
        renumber(self.document.items)
        for listener in self._listeners:
            listener(self)

    # ============================================
    # Metadata
    # ============================================

    def update_metadata(self, **fields: Any) -> None:
        """Set document metadata (title, description, attribution).

        Raises:
            SequenceValidationError: If a field is not editable metadata
        """
        editable = {"title", "description", "creator_name", "creator_link", "thumbnail_url"}
        unknown = set(fields) - editable
        if unknown:
            raise SequenceValidationError(
                f"Cannot update fields: {', '.join(sorted(unknown))}",
                context={"fields": sorted(unknown)},
            )
        for name, value in fields.items():
            setattr(self.document, name, value)
        self._changed()

    def add_hashtag(self, tag: str) -> bool:
        """Add a lower-cased hashtag.

        Returns:
            True if added, False for a blank or duplicate tag

        Raises:
            SequenceValidationError: If the hashtag limit is reached
        """
        tag = tag.strip().lower()
        if not tag or tag in self.document.hashtags:
            return False
        if len(self.document.hashtags) >= self.max_hashtags:
            raise SequenceValidationError(
                f"Maximum {self.max_hashtags} hashtags allowed.",
                field="hashtags",
            )
        self.document.hashtags.append(tag)
        self._changed()
        return True

    def remove_hashtag(self, index: int) -> str:
        """Remove a hashtag by index and return it."""
        if not 0 <= index < len(self.document.hashtags):
            raise SequenceValidationError(
                f"No hashtag at index {index}.",
                field="hashtags",
            )
        tag = self.document.hashtags.pop(index)
        self._changed()
        return tag

    # ============================================
    # Imports
    # ============================================

    def _check_capacity(self, incoming: int, unit: str) -> None:
        existing = len(self.items)
        total = existing + incoming
        if total > self.max_items:
            raise SequenceValidationError(
                f"Maximum {self.max_items} items allowed. You have {existing} existing "
                f"items and {incoming} new {unit} = {total} total.",
                field="items",
                context={"existing": existing, "incoming": incoming},
            )

    def _build_item(
        self,
        classification: Classification,
        candidate: RawCandidate | None = None,
    ) -> ImageItem | VideoItem | None:
        """Turn a classified reference into an item.

        Args:
            classification: Classifier output
            candidate: Adapter metadata, if the reference came from an import

        Returns:
            New item, or None for a video from an unknown provider
        """
        if classification.type == ItemType.IMAGE:
            return ImageItem(
                image_url=classification.canonical_url,
                alt_text=candidate.title if candidate and candidate.title else "",
                narration="",
            )

        if classification.provider in (Provider.YOUTUBE, Provider.YOUTUBE_KIDS):
            video_id = classification.media_id or ""
            metadata = candidate or self._known_videos.get(video_id)
            return VideoItem(
                video_id=video_id,
                url=classification.source_url,
                title=(metadata.title if metadata else None) or "",
                creator=(metadata.creator if metadata else None) or "",
                thumbnail=(metadata.thumbnail if metadata else None) or "",
                duration_seconds=(metadata.duration_seconds if metadata else None) or 0,
            )

        if classification.provider == Provider.DRIVE:
            return VideoItem(
                video_id=classification.media_id or "",
                url=classification.source_url,
                title=candidate.title if candidate and candidate.title else "",
            )

        logger.warning("Unknown video URL format, skipping", url=classification.source_url)
        return None

    def import_links(self, text: str) -> int:
        """Append items from pasted links.

        Args:
            text: Links separated by newlines or commas; "video:" / "image:"
                prefixes force the type

        Returns:
            Number of items added

        Raises:
            SequenceValidationError: If the import would exceed the item cap
                (nothing is added)
        """
        lines = split_links(text)
        if not lines:
            return 0
        self._check_capacity(len(lines), "URLs")

        new_items = []
        for line in lines:
            item = self._build_item(classify(line))
            if item is not None:
                new_items.append(item)

        self.items.extend(new_items)
        self._changed()
        logger.info("Links imported", lines=len(lines), added=len(new_items))
        return len(new_items)

    def apply_import(self, result: ImportResult) -> int:
        """Append the candidates of an adapter import.

        YouTube metadata is remembered so a later pasted link to the same
        video reuses it.

        Args:
            result: Adapter output

        Returns:
            Number of items added

        Raises:
            SequenceValidationError: If the import would exceed the item cap
                (nothing is added)
        """
        self._check_capacity(len(result.items), "items")

        new_items = []
        for candidate in result.items:
            classification = classify(candidate.url)
            if candidate.video_id and classification.provider in (
                Provider.YOUTUBE,
                Provider.YOUTUBE_KIDS,
            ):
                self._known_videos[candidate.video_id] = candidate
            item = self._build_item(classification, candidate)
            if item is not None:
                new_items.append(item)

        self.items.extend(new_items)
        self._changed()
        logger.info("Import applied", source=result.source, added=len(new_items))
        return len(new_items)

    # ============================================
    # Reordering and deletion
    # ============================================

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self.items):
            raise SequenceValidationError(
                f"No item at index {index}.",
                field="position",
                context={"index": index, "count": len(self.items)},
            )

    def move(self, old_index: int, new_index: int) -> None:
        """Move an item from one index to another (drag-and-drop move).

        Raises:
            SequenceValidationError: If either index is out of range
        """
        self._check_index(old_index)
        self._check_index(new_index)
        item = self.items.pop(old_index)
        self.items.insert(new_index, item)
        self._changed()

    def move_to_position(self, index: int, position: int) -> None:
        """Move an item to a 1-based position.

        Raises:
            SequenceValidationError: If the index or position is out of range
        """
        self._check_index(index)
        if not 1 <= position <= len(self.items):
            raise SequenceValidationError(
                f"Position must be between 1 and {len(self.items)}.",
                field="position",
                context={"position": position},
            )
        self.move(index, position - 1)

    def move_to_start(self, index: int) -> None:
        self.move_to_position(index, 1)

    def move_to_end(self, index: int) -> None:
        self.move_to_position(index, len(self.items))

    def delete_item(self, index: int) -> ImageItem | VideoItem:
        """Remove an item by index and return it."""
        self._check_index(index)
        item = self.items.pop(index)
        self._changed()
        return item

    # ============================================
    # Inline edits
    # ============================================

    def edit_item_title(self, index: int, text: str) -> None:
        """Set a video's title or an image's alt text."""
        self._check_index(index)
        item = self.items[index]
        if isinstance(item, VideoItem):
            item.title = text
        else:
            item.alt_text = text
        self._changed()

    def update_item(self, index: int, **fields: Any) -> ImageItem | VideoItem:
        """Replace fields of an item (e.g. narration, thumbnail).

        Raises:
            SequenceValidationError: If the index is out of range or the
                fields include type or position
        """
        self._check_index(index)
        if {"type", "position"} & set(fields):
            raise SequenceValidationError(
                "Item type and position cannot be edited directly.",
                field="items",
            )
        item = self.items[index]
        updated = type(item).model_validate({**item.model_dump(), **fields})
        self.items[index] = updated
        self._changed()
        return updated

    # ============================================
    # Export and validation
    # ============================================

    def export_links(self) -> list[str]:
        """Reconstruct one link per item for copy/paste.

        Videos use the stored source URL, else a URL synthesized from the id.
        Drive videos carry a "video: " prefix so a re-import keeps them as
        videos. Images export the unwrapped image URL, with an "image: "
        prefix when the URL would otherwise read as a video.

        Returns:
            Non-empty links in item order
        """
        links = []
        for item in self.items:
            if isinstance(item, VideoItem):
                if item.url:
                    link = item.url
                elif item.is_youtube:
                    link = youtube_watch_url(item.video_id)
                elif item.video_id:
                    link = drive_file_url(item.video_id)
                else:
                    link = ""
                if link and not classify(link).is_video:
                    link = f"video: {link}"
            else:
                link = unwrap(item.image_url) if item.image_url else ""
                if link and classify(link).is_video:
                    link = f"image: {link}"
            if link:
                links.append(link)
        return links

    def validate_for_save(self) -> list[ImageItem | VideoItem]:
        """Check the document can be saved.

        Returns:
            Valid items

        Raises:
            SequenceValidationError: Blank title or no valid items
        """
        if not self.document.title.strip():
            raise SequenceValidationError("Title is required", field="title")
        valid = self.document.valid_items()
        if not valid:
            raise SequenceValidationError(
                "At least one item with content is required",
                field="items",
            )
        return valid


__all__ = ["SequenceEditor", "split_links"]
