"""Document and submission store interfaces.

The reconciler talks to two independent stores with no cross-store
transactions. This module defines the records it exchanges with them, the
protocols both backends implement, and in-memory implementations.
"""

import re
import uuid
from datetime import UTC, datetime
from typing import Any, Protocol

from pydantic import BaseModel, Field, field_validator

from sequencer.core.exceptions import RecordNotFoundError

VIEW_URL_PATTERN = re.compile(r"/view/([a-f0-9-]+)", re.IGNORECASE)


def extract_document_id(url: str) -> str | None:
    """Document id embedded in a view URL ({public_base}/view/{id})."""
    match = VIEW_URL_PATTERN.search(url or "")
    return match.group(1) if match else None


def parse_hashtags(value: Any) -> list[str]:
    """Normalize hashtags stored as a list or a comma-separated string."""
    if not value:
        return []
    if isinstance(value, str):
        return [tag.strip() for tag in value.split(",") if tag.strip()]
    return [str(tag).strip() for tag in value if str(tag).strip()]


class StoredDocument(BaseModel):
    """A document row as held by the document store.

    Attributes:
        id: Server identity (None before insert)
        user_id: Owner id
        document_type: Document kind
        tool_slug: Producing tool
        story_slug: Time-stamped slug
        is_public: Column copy of the publish flag
        reported: Moderation flag; reported documents cannot be published
        document_data: Stored JSON content
        created_at: Insert time
    """

    id: str | None = None
    user_id: str
    document_type: str = "creative_work"
    tool_slug: str = "sequence"
    story_slug: str | None = None
    is_public: bool = False
    reported: bool = False
    document_data: dict[str, Any] = Field(default_factory=dict)
    created_at: datetime | None = None

    @property
    def is_published(self) -> bool:
        return self.document_data.get("is_published") in ("true", True)


class ChannelSubmission(BaseModel):
    """One channel's listing of a document.

    Display fields are a denormalized copy taken at submission time.
    """

    id: str | None = None
    channel_id: str
    url: str
    active: bool = True
    name: str | None = None
    description: str | None = None
    submitted_by: str | None = None
    creator_link: str | None = None
    thumbnail: str | None = None
    hashtags: list[str] = Field(default_factory=list)

    @field_validator("hashtags", mode="before")
    @classmethod
    def normalize_hashtags(cls, v: Any) -> list[str]:
        """Accept a list or a comma-separated string."""
        return parse_hashtags(v)

    @property
    def document_id(self) -> str | None:
        return extract_document_id(self.url)

    def display_data(self) -> dict[str, Any]:
        """Display fields as stored in the submission's JSON column."""
        return {
            "name": self.name,
            "description": self.description,
            "submitted_by": self.submitted_by,
            "creator_link": self.creator_link,
            "thumbnail": self.thumbnail,
            "hashtags": list(self.hashtags),
        }

    def merge_display_data(self, stored: dict[str, Any]) -> dict[str, Any]:
        """Overlay the display fields onto a stored JSON column.

        Keys this model does not know about are kept. Hashtags go back under
        ``category`` when the row uses that key, in the same list or
        comma-separated form.
        """
        merged = {**stored, **self.display_data()}
        if "category" in stored:
            tags = merged.pop("hashtags")
            if "hashtags" in stored:
                merged["hashtags"] = stored["hashtags"]
            merged["category"] = ",".join(tags) if isinstance(stored["category"], str) else tags
        return merged

    @classmethod
    def from_display_data(
        cls,
        data: dict[str, Any],
        **fields: Any,
    ) -> "ChannelSubmission":
        """Build from a stored JSON column; ``category`` is read as hashtags."""
        return cls(
            name=data.get("name"),
            description=data.get("description"),
            submitted_by=data.get("submitted_by"),
            creator_link=data.get("creator_link"),
            thumbnail=data.get("thumbnail"),
            hashtags=data.get("category") or data.get("hashtags"),
            **fields,
        )


# ============================================
# Protocols
# ============================================


class DocumentStore(Protocol):
    """Document persistence used by the reconciler."""

    async def get(self, document_id: str) -> StoredDocument | None: ...

    async def insert(self, document: StoredDocument) -> StoredDocument: ...

    async def update(
        self,
        document_id: str,
        *,
        document_data: dict[str, Any] | None = None,
        is_public: bool | None = None,
        owner_id: str | None = None,
    ) -> StoredDocument: ...

    async def delete(self, document_id: str, owner_id: str | None = None) -> None: ...

    async def list_by_owner(
        self, owner_id: str, tool_slug: str = "sequence"
    ) -> list[StoredDocument]: ...


class SubmissionStore(Protocol):
    """Channel submission persistence used by the reconciler."""

    async def get(self, submission_id: str) -> ChannelSubmission | None: ...

    async def insert(self, submission: ChannelSubmission) -> ChannelSubmission: ...

    async def update(self, submission: ChannelSubmission) -> ChannelSubmission: ...

    async def set_active(self, submission_id: str, active: bool) -> ChannelSubmission: ...

    async def find_by_url_fragment(self, fragment: str) -> list[ChannelSubmission]: ...

    async def list_active(self) -> list[ChannelSubmission]: ...


# ============================================
# In-memory implementations
# ============================================


class InMemoryDocumentStore:
    """Dict-backed document store."""

    def __init__(self) -> None:
        self._documents: dict[str, StoredDocument] = {}

    async def get(self, document_id: str) -> StoredDocument | None:
        document = self._documents.get(document_id)
        return document.model_copy(deep=True) if document else None

    async def insert(self, document: StoredDocument) -> StoredDocument:
        stored = document.model_copy(
            deep=True,
            update={
                "id": document.id or str(uuid.uuid4()),
                "created_at": document.created_at or datetime.now(UTC),
            },
        )
        self._documents[stored.id] = stored
        return stored.model_copy(deep=True)

    def _owned(self, document_id: str, owner_id: str | None) -> StoredDocument:
        document = self._documents.get(document_id)
        if document is None or (owner_id is not None and document.user_id != owner_id):
            raise RecordNotFoundError("UserDocument", document_id)
        return document

    async def update(
        self,
        document_id: str,
        *,
        document_data: dict[str, Any] | None = None,
        is_public: bool | None = None,
        owner_id: str | None = None,
    ) -> StoredDocument:
        document = self._owned(document_id, owner_id)
        if document_data is not None:
            document.document_data = dict(document_data)
        if is_public is not None:
            document.is_public = is_public
        return document.model_copy(deep=True)

    async def delete(self, document_id: str, owner_id: str | None = None) -> None:
        self._owned(document_id, owner_id)
        del self._documents[document_id]

    async def list_by_owner(
        self, owner_id: str, tool_slug: str = "sequence"
    ) -> list[StoredDocument]:
        # Newest first; later inserts win ties
        documents = [
            d
            for d in reversed(list(self._documents.values()))
            if d.user_id == owner_id and d.tool_slug == tool_slug
        ]
        oldest = datetime.min.replace(tzinfo=UTC)
        documents.sort(key=lambda d: d.created_at or oldest, reverse=True)
        return [d.model_copy(deep=True) for d in documents]


class InMemorySubmissionStore:
    """Dict-backed submission store."""

    def __init__(self) -> None:
        self._submissions: dict[str, ChannelSubmission] = {}

    async def get(self, submission_id: str) -> ChannelSubmission | None:
        submission = self._submissions.get(submission_id)
        return submission.model_copy(deep=True) if submission else None

    async def insert(self, submission: ChannelSubmission) -> ChannelSubmission:
        stored = submission.model_copy(
            deep=True, update={"id": submission.id or str(uuid.uuid4())}
        )
        self._submissions[stored.id] = stored
        return stored.model_copy(deep=True)

    async def update(self, submission: ChannelSubmission) -> ChannelSubmission:
        if submission.id is None or submission.id not in self._submissions:
            raise RecordNotFoundError("ChannelSubmission", str(submission.id))
        self._submissions[submission.id] = submission.model_copy(deep=True)
        return submission

    async def set_active(self, submission_id: str, active: bool) -> ChannelSubmission:
        submission = self._submissions.get(submission_id)
        if submission is None:
            raise RecordNotFoundError("ChannelSubmission", submission_id)
        submission.active = active
        return submission.model_copy(deep=True)

    async def find_by_url_fragment(self, fragment: str) -> list[ChannelSubmission]:
        needle = fragment.lower()
        return [
            s.model_copy(deep=True)
            for s in self._submissions.values()
            if needle in s.url.lower()
        ]

    async def list_active(self) -> list[ChannelSubmission]:
        return [s.model_copy(deep=True) for s in self._submissions.values() if s.active]


__all__ = [
    "ChannelSubmission",
    "DocumentStore",
    "InMemoryDocumentStore",
    "InMemorySubmissionStore",
    "StoredDocument",
    "SubmissionStore",
    "extract_document_id",
    "parse_hashtags",
]
