"""Publish/visibility reconciler.

A document is visible through two independent stores: the document's own
publish flag (viewer visibility) and zero or more channel submissions that
reference it by URL (channel visibility). There is no transaction across
the stores, so writes are ordered to fail toward "less exposed":

1. unsubmit_all deactivates submissions without touching the document
2. delete deactivates every submission first and keeps the document if
   any deactivation failed
3. duplicate always produces an unpublished copy with no submissions

``unpublish`` does not deactivate submissions. This leaves active listings
pointing at an unpublished document; callers that want channel exposure
removed call ``unsubmit_all`` as well.
"""

import re
import time
from dataclasses import dataclass
from datetime import UTC, datetime

from pydantic import BaseModel, Field

from sequencer.core.config import get_config
from sequencer.core.exceptions import (
    ReconciliationError,
    RecordNotFoundError,
    SequenceValidationError,
)
from sequencer.core.logging import get_logger
from sequencer.core.state_machine import (
    create_document_state_machine,
    create_submission_state_machine,
)
from sequencer.models.document import DocumentVisibility
from sequencer.models.submission import SubmissionStatus
from sequencer.services.publishing.stores import (
    DocumentStore,
    StoredDocument,
    SubmissionStore,
)
from sequencer.services.sequence.drafts import DraftManager
from sequencer.services.sequence.editor import SequenceEditor
from sequencer.services.sequence.items import SequenceDocument

logger = get_logger(__name__)

REPORTED_MESSAGE = (
    "This content has been reported by a viewer and cannot be published "
    "until reviewed by an administrator."
)


def slugify(text: str) -> str:
    """Lower-case slug with runs of other characters collapsed to "-"."""
    return re.sub(r"[^a-z0-9]+", "-", text.lower()).strip("-")


def _epoch_ms() -> int:
    return int(time.time() * 1000)


def _visibility(document: StoredDocument) -> DocumentVisibility:
    if document.is_published:
        return DocumentVisibility.PUBLISHED
    return DocumentVisibility.UNPUBLISHED


class UnsubmitResult(BaseModel):
    """Outcome of deactivating a document's channel submissions.

    Attributes:
        document_id: Document whose submissions were processed
        deactivated: Submissions switched to inactive by this call
        failed: Submissions whose update failed (still active)
        skipped: Submissions that were already inactive
        deactivated_ids: IDs switched to inactive
        failed_ids: IDs left active
    """

    document_id: str
    deactivated: int = 0
    failed: int = 0
    skipped: int = 0
    deactivated_ids: list[str] = Field(default_factory=list)
    failed_ids: list[str] = Field(default_factory=list)

    @property
    def found(self) -> int:
        return self.deactivated + self.failed + self.skipped

    @property
    def ok(self) -> bool:
        return self.failed == 0


class SaveResult(BaseModel):
    """Outcome of saving an editor's document.

    Attributes:
        document_id: Server identity of the saved document
        slug: Stored slug
        share_url: Public view URL when published, else None
        newly_published: True if this save published a previously
            unpublished document
    """

    document_id: str
    slug: str | None = None
    share_url: str | None = None
    newly_published: bool = False


@dataclass
class LoadedSequence:
    """A stored document opened for editing."""

    editor: SequenceEditor
    share_url: str | None = None
    reported: bool = False


class VisibilityReconciler:
    """Coordinates the document store and the submission store.

    Example:
        >>> reconciler = VisibilityReconciler(documents, submissions)
        >>> result = await reconciler.save(editor, owner_id="user-1", publish=True)
        >>> result.share_url
        'https://recursive.eco/view/...'
    """

    def __init__(
        self,
        documents: DocumentStore,
        submissions: SubmissionStore,
        drafts: DraftManager | None = None,
        public_base_url: str | None = None,
        proxy_base: str | None = None,
    ) -> None:
        """Initialize reconciler.

        Args:
            documents: Document store
            submissions: Submission store
            drafts: Draft manager cleared after successful saves
            public_base_url: Viewer base URL (defaults to config)
            proxy_base: Image relay path (defaults to config)
        """
        config = get_config()
        self.documents = documents
        self.submissions = submissions
        self.drafts = drafts
        self.public_base_url = (public_base_url or config.public_base_url).rstrip("/")
        self.proxy_base = proxy_base if proxy_base is not None else config.proxy_base

    def share_url(self, document_id: str) -> str:
        """Public view URL of a document."""
        return f"{self.public_base_url}/view/{document_id}"

    async def _get_owned(self, document_id: str, owner_id: str | None) -> StoredDocument:
        document = await self.documents.get(document_id)
        if document is None or (owner_id is not None and document.user_id != owner_id):
            raise RecordNotFoundError("UserDocument", document_id)
        return document

    # ============================================
    # Visibility transitions
    # ============================================

    async def publish(self, document_id: str, owner_id: str | None = None) -> StoredDocument:
        """Make a document resolvable at its share URL.

        Idempotent: an already published document is returned unchanged.
        Submissions are not touched.

        Raises:
            RecordNotFoundError: Unknown document or different owner
            SequenceValidationError: The document has been reported
        """
        document = await self._get_owned(document_id, owner_id)
        if document.reported:
            raise SequenceValidationError(REPORTED_MESSAGE, field="reported")

        machine = create_document_state_machine(_visibility(document))
        changed = machine.ensure(DocumentVisibility.PUBLISHED)
        if not changed and document.is_public:
            logger.debug("Document already published", document_id=document_id)
            return document

        data = {
            **document.document_data,
            "is_published": "true",
            "published_at": document.document_data.get("published_at")
            or datetime.now(UTC).isoformat(),
        }
        updated = await self.documents.update(
            document_id, document_data=data, is_public=True, owner_id=owner_id
        )
        logger.info("Document published", document_id=document_id)
        return updated

    async def unpublish(self, document_id: str, owner_id: str | None = None) -> StoredDocument:
        """Hide a document from its share URL.

        Channel submissions are left as they are; see the module docstring.
        """
        document = await self._get_owned(document_id, owner_id)
        machine = create_document_state_machine(_visibility(document))
        changed = machine.ensure(DocumentVisibility.UNPUBLISHED)
        if not changed and not document.is_public:
            return document

        data = {**document.document_data, "is_published": "false", "published_at": None}
        updated = await self.documents.update(
            document_id, document_data=data, is_public=False, owner_id=owner_id
        )
        logger.info("Document unpublished", document_id=document_id)
        return updated

    async def unsubmit_all(self, document_id: str) -> UnsubmitResult:
        """Deactivate every submission whose URL references the document.

        Individual update failures are recorded and processing continues.
        The document itself is not modified.

        Args:
            document_id: Document ID

        Returns:
            Counts and IDs of deactivated, failed and skipped submissions
        """
        result = UnsubmitResult(document_id=document_id)
        submissions = await self.submissions.find_by_url_fragment(document_id)

        for submission in submissions:
            if not submission.active:
                result.skipped += 1
                continue

            machine = create_submission_state_machine(SubmissionStatus.ACTIVE)
            machine.transition(SubmissionStatus.INACTIVE)
            try:
                await self.submissions.set_active(str(submission.id), False)
            except Exception as e:
                logger.warning(
                    "Failed to deactivate submission",
                    document_id=document_id,
                    submission_id=submission.id,
                    error=e,
                )
                result.failed += 1
                result.failed_ids.append(str(submission.id))
                continue

            result.deactivated += 1
            result.deactivated_ids.append(str(submission.id))

        logger.info(
            "Submissions deactivated",
            document_id=document_id,
            deactivated=result.deactivated,
            failed=result.failed,
            skipped=result.skipped,
        )
        return result

    async def delete(self, document_id: str, owner_id: str | None = None) -> UnsubmitResult:
        """Deactivate all submissions, then delete the document.

        Raises:
            RecordNotFoundError: Unknown document or different owner
            ReconciliationError: Some submissions are still active; the
                document was not deleted
        """
        await self._get_owned(document_id, owner_id)

        result = await self.unsubmit_all(document_id)
        if not result.ok:
            logger.error(
                "Delete halted, submissions still active",
                document_id=document_id,
                failed_ids=result.failed_ids,
            )
            raise ReconciliationError(
                document_id=document_id,
                deactivated=result.deactivated,
                failed=result.failed,
                failed_ids=result.failed_ids,
            )

        await self.documents.delete(document_id, owner_id=owner_id)
        logger.info("Document deleted", document_id=document_id, unsubmitted=result.deactivated)
        return result

    async def duplicate(self, document_id: str, owner_id: str | None = None) -> StoredDocument:
        """Copy a document as a new unpublished document.

        Submissions are never copied.
        """
        original = await self._get_owned(document_id, owner_id)
        title = original.document_data.get("title") or ""

        copy = StoredDocument(
            user_id=original.user_id,
            document_type=original.document_type,
            tool_slug=original.tool_slug,
            story_slug=f"{slugify(title or 'untitled')}-copy-{_epoch_ms()}",
            is_public=False,
            document_data={
                **original.document_data,
                "title": f"{title or 'Untitled'} (Copy)",
                "is_published": "false",
                "published_at": None,
            },
        )
        stored = await self.documents.insert(copy)
        logger.info("Document duplicated", source_id=document_id, document_id=stored.id)
        return stored

    # ============================================
    # Editor save / load
    # ============================================

    async def save(
        self,
        editor: SequenceEditor,
        owner_id: str,
        publish: bool | None = None,
    ) -> SaveResult:
        """Persist the editor's document (create or owner-scoped update).

        Args:
            editor: Editing session
            owner_id: Saving user
            publish: Target publish state (None keeps the current one)

        Returns:
            Save outcome with the share URL when published

        Raises:
            SequenceValidationError: Blank title, no valid items, or
                publishing reported content
            RecordNotFoundError: Updating a document the user does not own
        """
        editor.validate_for_save()
        document = editor.document
        should_publish = document.is_published if publish is None else publish
        was_published = document.is_published and not document.is_new

        reported = False
        if not document.is_new:
            reported = (await self._get_owned(document.id, owner_id)).reported
        if should_publish and reported:
            raise SequenceValidationError(REPORTED_MESSAGE, field="reported")

        if should_publish:
            published_at = document.published_at if was_published else None
            published_at = published_at or datetime.now(UTC)
        else:
            published_at = None

        data = document.model_copy(
            update={"is_published": should_publish, "published_at": published_at}
        ).to_document_data(creator_id=owner_id, proxy_base=self.proxy_base)

        if document.is_new:
            stored = await self.documents.insert(
                StoredDocument(
                    user_id=owner_id,
                    story_slug=f"{slugify(document.title) or 'untitled'}-{_epoch_ms()}",
                    is_public=should_publish,
                    document_data=data,
                )
            )
        else:
            stored = await self.documents.update(
                document.id,
                document_data=data,
                is_public=should_publish,
                owner_id=owner_id,
            )

        document.id = stored.id
        document.owner_id = owner_id
        document.slug = stored.story_slug
        document.is_published = should_publish
        document.published_at = published_at

        if self.drafts:
            self.drafts.clear()

        newly_published = should_publish and not was_published
        logger.info(
            "Document saved",
            document_id=stored.id,
            published=should_publish,
            newly_published=newly_published,
        )
        return SaveResult(
            document_id=stored.id,
            slug=stored.story_slug,
            share_url=self.share_url(stored.id) if should_publish else None,
            newly_published=newly_published,
        )

    async def save_as_new(self, editor: SequenceEditor, owner_id: str) -> SaveResult:
        """Store the editor's content as a new unpublished document.

        The editor switches to the new document.
        """
        editor.validate_for_save()
        document = editor.document
        data = document.model_copy(
            update={"is_published": False, "published_at": None}
        ).to_document_data(creator_id=owner_id, proxy_base=self.proxy_base)

        stored = await self.documents.insert(
            StoredDocument(
                user_id=owner_id,
                story_slug=f"{slugify(document.title) or 'untitled'}-{_epoch_ms()}",
                is_public=False,
                document_data=data,
            )
        )

        document.id = stored.id
        document.owner_id = owner_id
        document.slug = stored.story_slug
        document.is_published = False
        document.published_at = None

        if self.drafts:
            self.drafts.clear()

        logger.info("Document saved as new", document_id=stored.id)
        return SaveResult(document_id=stored.id, slug=stored.story_slug)

    async def load(self, document_id: str, owner_id: str) -> LoadedSequence:
        """Open a stored document for editing.

        Image URLs are unwrapped. Attribution (creator name, creator link,
        thumbnail, hashtags) comes from the first active submission when
        present, with the document's own values as fallback.

        Raises:
            RecordNotFoundError: Unknown document or different owner
        """
        stored = await self._get_owned(document_id, owner_id)
        document = SequenceDocument.from_document_data(
            stored.document_data,
            document_id=stored.id,
            owner_id=stored.user_id,
            slug=stored.story_slug,
            proxy_base=self.proxy_base,
        )

        submissions = await self.submissions.find_by_url_fragment(document_id)
        active = next((s for s in submissions if s.active), None)
        if active:
            document.creator_name = active.submitted_by or document.creator_name
            document.creator_link = active.creator_link or document.creator_link
            document.thumbnail_url = active.thumbnail or document.thumbnail_url
            document.hashtags = list(active.hashtags) or document.hashtags

        logger.debug("Document loaded", document_id=document_id, items=len(document.items))
        return LoadedSequence(
            editor=SequenceEditor(document),
            share_url=self.share_url(stored.id) if document.is_published else None,
            reported=stored.reported,
        )


__all__ = [
    "LoadedSequence",
    "SaveResult",
    "UnsubmitResult",
    "VisibilityReconciler",
    "slugify",
]
