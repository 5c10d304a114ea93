"""Draft autosave for unsaved sequences.

A single draft blob is kept in a local key-value store while a new document
is being composed. Autosave is fire-and-forget: storage failures are logged
and never reach the caller. A draft is never written for a document that
already has a server identity, and it is cleared after a successful save.
"""

import json
import os
import tempfile
from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from pathlib import Path
from typing import Protocol

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from sequencer.core.config import get_config
from sequencer.core.exceptions import PersistenceWarning
from sequencer.core.logging import get_logger
from sequencer.services.sequence.editor import SequenceEditor
from sequencer.services.sequence.items import SequenceDocument, SequenceItem, renumber

logger = get_logger(__name__)


class DraftSnapshot(BaseModel):
    """Locally persisted copy of an unsaved document.

    Serialized with camelCase keys so existing browser drafts stay readable.
    """

    model_config = ConfigDict(populate_by_name=True)

    title: str = ""
    description: str = ""
    items: list[SequenceItem] = Field(default_factory=list)
    creator_name: str = Field(default="", alias="creatorName")
    creator_link: str = Field(default="", alias="creatorLink")
    thumbnail_url: str = Field(default="", alias="thumbnailUrl")
    hashtags: list[str] = Field(default_factory=list)
    saved_at: datetime = Field(default_factory=lambda: datetime.now(UTC), alias="savedAt")

    @classmethod
    def from_document(cls, document: SequenceDocument) -> "DraftSnapshot":
        return cls(
            title=document.title,
            description=document.description,
            items=[item.model_copy() for item in document.items],
            creator_name=document.creator_name or "",
            creator_link=document.creator_link or "",
            thumbnail_url=document.thumbnail_url or "",
            hashtags=list(document.hashtags),
        )

    @property
    def has_content(self) -> bool:
        return bool(self.title or self.description or self.items)

    def is_stale(self, max_age: timedelta, now: datetime | None = None) -> bool:
        """Whether the snapshot is older than max_age."""
        saved_at = self.saved_at
        if saved_at.tzinfo is None:
            saved_at = saved_at.replace(tzinfo=UTC)
        return (now or datetime.now(UTC)) - saved_at > max_age


# ============================================
# Storage backends
# ============================================


class KeyValueStore(Protocol):
    """String key-value storage holding the draft blob.

    Implementations raise PersistenceWarning on read or write failures.
    """

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...


class MemoryKeyValueStore:
    """Process-local store, used in tests and ephemeral sessions."""

    def __init__(self) -> None:
        self._data: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)


class FileKeyValueStore:
    """JSON-file store; writes go to a temp file and replace the original.

    Example:
        >>> store = FileKeyValueStore("./.sequencer/drafts.json")
        >>> store.set("sequence-draft", "{}")
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def _read_all(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            raise PersistenceWarning(f"Failed to read draft store: {e}") from e
        if not isinstance(data, dict):
            raise PersistenceWarning("Draft store is not a JSON object")
        return data

    def _write_all(self, data: dict[str, str]) -> None:
        tmp_path = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=self.path.parent, suffix=".tmp")
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f)
            os.replace(tmp_path, self.path)
        except OSError as e:
            if tmp_path is not None:
                Path(tmp_path).unlink(missing_ok=True)
            raise PersistenceWarning(f"Failed to write draft store: {e}") from e

    def get(self, key: str) -> str | None:
        return self._read_all().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._read_all()
        data[key] = value
        self._write_all(data)

    def remove(self, key: str) -> None:
        data = self._read_all()
        if data.pop(key, None) is not None:
            self._write_all(data)


# ============================================
# Draft manager
# ============================================


class DraftManager:
    """Autosave, restore and clear the single draft blob.

    Example:
        >>> drafts = DraftManager(MemoryKeyValueStore())
        >>> editor = SequenceEditor()
        >>> drafts.attach(editor)
        >>> editor.update_metadata(title="Morning routine")  # autosaved
    """

    def __init__(
        self,
        store: KeyValueStore,
        key: str | None = None,
        max_age_days: int | None = None,
    ) -> None:
        """Initialize draft manager.

        Args:
            store: Key-value backend
            key: Draft key (defaults to config)
            max_age_days: Staleness window (defaults to config)
        """
        config = get_config()
        self.store = store
        self.key = key or config.draft_key
        self.max_age = timedelta(
            days=max_age_days if max_age_days is not None else config.draft_max_age_days
        )

    def attach(
        self,
        editor: SequenceEditor,
        is_busy: Callable[[], bool] | None = None,
    ) -> None:
        """Autosave after every editor mutation.

        Args:
            editor: Editor to watch
            is_busy: Returns True while a save or load is in flight
        """
        editor.subscribe(lambda e: self.autosave(e, busy=is_busy() if is_busy else False))

    def autosave(self, editor: SequenceEditor, busy: bool = False) -> bool:
        """Write the draft if the document is new and has content.

        Never raises for storage failures.

        Args:
            editor: Editor whose document is snapshotted
            busy: True while a save or load is in flight

        Returns:
            True if a draft was written
        """
        if busy or not editor.document.is_new:
            return False
        snapshot = DraftSnapshot.from_document(editor.document)
        if not snapshot.has_content:
            return False
        try:
            self.store.set(self.key, snapshot.model_dump_json(by_alias=True))
        except PersistenceWarning as e:
            logger.warning("Draft autosave failed", key=self.key, error=e)
            return False
        return True

    def load(self) -> DraftSnapshot | None:
        """Read the stored draft.

        Unreadable and stale drafts are discarded.

        Returns:
            Snapshot, or None if there is no usable draft
        """
        try:
            raw = self.store.get(self.key)
        except PersistenceWarning as e:
            logger.warning("Draft read failed", key=self.key, error=e)
            return None
        if not raw:
            return None

        try:
            snapshot = DraftSnapshot.model_validate_json(raw)
        except ValidationError as e:
            logger.warning("Discarding unreadable draft", key=self.key, error=e)
            self.clear()
            return None

        if snapshot.is_stale(self.max_age):
            logger.info("Discarding stale draft", key=self.key, saved_at=snapshot.saved_at)
            self.clear()
            return None
        return snapshot

    def restore(self, editor: SequenceEditor) -> bool:
        """Apply the stored draft to a new document.

        A document with a server identity always wins over the draft, and
        only non-empty draft fields are applied.

        Returns:
            True if a draft was applied
        """
        if not editor.document.is_new:
            return False
        snapshot = self.load()
        if snapshot is None:
            return False

        document = editor.document
        if snapshot.title:
            document.title = snapshot.title
        if snapshot.description:
            document.description = snapshot.description
        if snapshot.items:
            document.items = list(snapshot.items)
            renumber(document.items)
        if snapshot.creator_name:
            document.creator_name = snapshot.creator_name
        if snapshot.creator_link:
            document.creator_link = snapshot.creator_link
        if snapshot.thumbnail_url:
            document.thumbnail_url = snapshot.thumbnail_url
        if snapshot.hashtags:
            document.hashtags = list(snapshot.hashtags)

        logger.info("Draft restored", key=self.key, items=len(document.items))
        return True

    def clear(self) -> None:
        """Remove the draft; failures are logged only."""
        try:
            self.store.remove(self.key)
        except PersistenceWarning as e:
            logger.warning("Draft clear failed", key=self.key, error=e)


__all__ = [
    "DraftManager",
    "DraftSnapshot",
    "FileKeyValueStore",
    "KeyValueStore",
    "MemoryKeyValueStore",
]
