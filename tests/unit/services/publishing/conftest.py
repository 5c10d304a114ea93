"""Shared fixtures for publishing tests."""

import pytest

from sequencer.core.exceptions import DatabaseError
from sequencer.services.publishing.reconciler import VisibilityReconciler
from sequencer.services.publishing.stores import (
    ChannelSubmission,
    InMemoryDocumentStore,
    InMemorySubmissionStore,
    StoredDocument,
)
from sequencer.services.sequence.drafts import DraftManager, MemoryKeyValueStore

PUBLIC_BASE = "https://recursive.eco"
PROXY_BASE = "/api/proxy-image"
OWNER = "user-1"


class FlakySubmissionStore(InMemorySubmissionStore):
    """Submission store whose updates fail for selected ids."""

    def __init__(self) -> None:
        super().__init__()
        self.failing_ids: set[str] = set()

    async def set_active(self, submission_id: str, active: bool) -> ChannelSubmission:
        if submission_id in self.failing_ids:
            raise DatabaseError("connection reset", operation="set_active")
        return await super().set_active(submission_id, active)


@pytest.fixture
def documents() -> InMemoryDocumentStore:
    return InMemoryDocumentStore()


@pytest.fixture
def submissions() -> FlakySubmissionStore:
    return FlakySubmissionStore()


@pytest.fixture
def draft_store() -> MemoryKeyValueStore:
    return MemoryKeyValueStore()


@pytest.fixture
def reconciler(documents, submissions, draft_store) -> VisibilityReconciler:
    """Reconciler over in-memory stores."""
    return VisibilityReconciler(
        documents,
        submissions,
        drafts=DraftManager(draft_store, key="sequence-draft", max_age_days=30),
        public_base_url=PUBLIC_BASE,
        proxy_base=PROXY_BASE,
    )


def document_data(title: str = "Bedtime", published: bool = False) -> dict:
    """Stored JSON content with one image and one video."""
    return {
        "title": title,
        "description": "Calm stories",
        "reviewed": "false",
        "creator_id": OWNER,
        "is_published": "true" if published else "false",
        "published_at": "2025-01-02T00:00:00+00:00" if published else None,
        "items": [
            {
                "type": "image",
                "position": 1,
                "image_url": f"{PROXY_BASE}?url=https%3A%2F%2Fa.com%2Fx.png",
            },
            {"type": "video", "position": 2, "video_id": "dQw4w9WgXcQ"},
        ],
        "creator_name": "Doc Author",
    }


async def insert_document(
    documents: InMemoryDocumentStore,
    published: bool = False,
    reported: bool = False,
    owner: str = OWNER,
) -> StoredDocument:
    """Insert a stored document."""
    return await documents.insert(
        StoredDocument(
            user_id=owner,
            story_slug="bedtime-1",
            is_public=published,
            reported=reported,
            document_data=document_data(published=published),
        )
    )


async def insert_submission(
    submissions: InMemorySubmissionStore,
    document_id: str,
    channel_id: str = "kids-stories",
    active: bool = True,
    **display,
) -> ChannelSubmission:
    """Insert a submission referencing the document's view URL."""
    return await submissions.insert(
        ChannelSubmission(
            channel_id=channel_id,
            url=f"{PUBLIC_BASE}/view/{document_id}",
            active=active,
            **display,
        )
    )
