"""SQLAlchemy-backed document and submission stores.

Each operation runs in its own session and commits before returning, so the
two stores stay independent: there is no transaction spanning a document
write and a submission write.
"""

import uuid

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from sequencer.core.exceptions import DatabaseError, RecordNotFoundError
from sequencer.core.logging import get_logger
from sequencer.core.types import JSONDict, SessionFactory
from sequencer.models.document import UserDocument
from sequencer.models.submission import ChannelSubmissionRecord
from sequencer.services.publishing.stores import ChannelSubmission, StoredDocument

logger = get_logger(__name__)


def _parse_uuid(value: str | None) -> uuid.UUID | None:
    if not value:
        return None
    try:
        return uuid.UUID(str(value))
    except ValueError:
        return None


def _to_stored_document(record: UserDocument) -> StoredDocument:
    return StoredDocument(
        id=str(record.id),
        user_id=record.user_id,
        document_type=record.document_type,
        tool_slug=record.tool_slug,
        story_slug=record.story_slug,
        is_public=record.is_public,
        reported=record.reported,
        document_data=dict(record.document_data or {}),
        created_at=record.created_at,
    )


def _to_submission(record: ChannelSubmissionRecord) -> ChannelSubmission:
    return ChannelSubmission.from_display_data(
        record.tool_data or {},
        id=str(record.id),
        channel_id=record.channel_id,
        url=record.url,
        active=record.is_active,
    )


class SQLDocumentStore:
    """Document store over the ``user_documents`` table.

    Example:
        >>> store = SQLDocumentStore(session_factory)
        >>> document = await store.get("5f0c...")
    """

    def __init__(self, session_factory: SessionFactory) -> None:
        """Initialize store.

        Args:
            session_factory: Async session factory
        """
        self.session_factory = session_factory

    async def get(self, document_id: str) -> StoredDocument | None:
        record_id = _parse_uuid(document_id)
        if record_id is None:
            return None
        try:
            async with self.session_factory() as session:
                record = await session.get(UserDocument, record_id)
                return _to_stored_document(record) if record else None
        except SQLAlchemyError as e:
            raise DatabaseError(
                f"Failed to load document: {e}",
                context={"document_id": document_id},
                operation="get",
            ) from e

    async def insert(self, document: StoredDocument) -> StoredDocument:
        record = UserDocument(
            user_id=document.user_id,
            document_type=document.document_type,
            tool_slug=document.tool_slug,
            story_slug=document.story_slug,
            is_public=document.is_public,
            reported=document.reported,
            document_data=dict(document.document_data),
        )
        if _parse_uuid(document.id):
            record.id = _parse_uuid(document.id)
        try:
            async with self.session_factory() as session:
                session.add(record)
                await session.commit()
                await session.refresh(record)
                logger.debug("Document inserted", document_id=str(record.id))
                return _to_stored_document(record)
        except SQLAlchemyError as e:
            raise DatabaseError(f"Failed to insert document: {e}", operation="insert") from e

    async def _load_owned(
        self, session: AsyncSession, document_id: str, owner_id: str | None
    ) -> UserDocument:
        record_id = _parse_uuid(document_id)
        record = await session.get(UserDocument, record_id) if record_id else None
        if record is None or (owner_id is not None and record.user_id != owner_id):
            raise RecordNotFoundError("UserDocument", document_id)
        return record

    async def update(
        self,
        document_id: str,
        *,
        document_data: JSONDict | None = None,
        is_public: bool | None = None,
        owner_id: str | None = None,
    ) -> StoredDocument:
        try:
            async with self.session_factory() as session:
                record = await self._load_owned(session, document_id, owner_id)
                if document_data is not None:
                    record.document_data = dict(document_data)
                if is_public is not None:
                    record.is_public = is_public
                await session.commit()
                await session.refresh(record)
                return _to_stored_document(record)
        except SQLAlchemyError as e:
            raise DatabaseError(
                f"Failed to update document: {e}",
                context={"document_id": document_id},
                operation="update",
            ) from e

    async def delete(self, document_id: str, owner_id: str | None = None) -> None:
        try:
            async with self.session_factory() as session:
                record = await self._load_owned(session, document_id, owner_id)
                await session.delete(record)
                await session.commit()
                logger.debug("Document deleted", document_id=document_id)
        except SQLAlchemyError as e:
            raise DatabaseError(
                f"Failed to delete document: {e}",
                context={"document_id": document_id},
                operation="delete",
            ) from e

    async def list_by_owner(
        self, owner_id: str, tool_slug: str = "sequence"
    ) -> list[StoredDocument]:
        try:
            async with self.session_factory() as session:
                result = await session.execute(
                    select(UserDocument)
                    .where(
                        UserDocument.user_id == owner_id,
                        UserDocument.tool_slug == tool_slug,
                        UserDocument.document_type == "creative_work",
                    )
                    .order_by(UserDocument.created_at.desc())
                )
                return [_to_stored_document(r) for r in result.scalars().all()]
        except SQLAlchemyError as e:
            raise DatabaseError(
                f"Failed to list documents: {e}",
                context={"owner_id": owner_id},
                operation="list_by_owner",
            ) from e


class SQLSubmissionStore:
    """Submission store over the ``channel_submissions`` table."""

    def __init__(self, session_factory: SessionFactory) -> None:
        """Initialize store.

        Args:
            session_factory: Async session factory
        """
        self.session_factory = session_factory

    async def get(self, submission_id: str) -> ChannelSubmission | None:
        record_id = _parse_uuid(submission_id)
        if record_id is None:
            return None
        try:
            async with self.session_factory() as session:
                record = await session.get(ChannelSubmissionRecord, record_id)
                return _to_submission(record) if record else None
        except SQLAlchemyError as e:
            raise DatabaseError(f"Failed to load submission: {e}", operation="get") from e

    async def insert(self, submission: ChannelSubmission) -> ChannelSubmission:
        record = ChannelSubmissionRecord(
            channel_id=submission.channel_id,
            url=submission.url,
            is_active=submission.active,
            tool_data=submission.display_data(),
        )
        if _parse_uuid(submission.id):
            record.id = _parse_uuid(submission.id)
        try:
            async with self.session_factory() as session:
                session.add(record)
                await session.commit()
                await session.refresh(record)
                return _to_submission(record)
        except SQLAlchemyError as e:
            raise DatabaseError(f"Failed to insert submission: {e}", operation="insert") from e

    async def update(self, submission: ChannelSubmission) -> ChannelSubmission:
        record_id = _parse_uuid(submission.id)
        try:
            async with self.session_factory() as session:
                record = (
                    await session.get(ChannelSubmissionRecord, record_id) if record_id else None
                )
                if record is None:
                    raise RecordNotFoundError("ChannelSubmission", str(submission.id))
                record.channel_id = submission.channel_id
                record.url = submission.url
                record.is_active = submission.active
                record.tool_data = submission.merge_display_data(record.tool_data or {})
                await session.commit()
                await session.refresh(record)
                return _to_submission(record)
        except SQLAlchemyError as e:
            raise DatabaseError(
                f"Failed to update submission: {e}",
                context={"submission_id": submission.id},
                operation="update",
            ) from e

    async def set_active(self, submission_id: str, active: bool) -> ChannelSubmission:
        """Flip the active flag only; ``tool_data`` is left as stored."""
        record_id = _parse_uuid(submission_id)
        try:
            async with self.session_factory() as session:
                record = (
                    await session.get(ChannelSubmissionRecord, record_id) if record_id else None
                )
                if record is None:
                    raise RecordNotFoundError("ChannelSubmission", submission_id)
                record.is_active = active
                await session.commit()
                await session.refresh(record)
                return _to_submission(record)
        except SQLAlchemyError as e:
            raise DatabaseError(
                f"Failed to update submission status: {e}",
                context={"submission_id": submission_id},
                operation="set_active",
            ) from e

    async def find_by_url_fragment(self, fragment: str) -> list[ChannelSubmission]:
        """Case-insensitive substring match on the stored URL."""
        try:
            async with self.session_factory() as session:
                result = await session.execute(
                    select(ChannelSubmissionRecord).where(
                        ChannelSubmissionRecord.url.icontains(fragment, autoescape=True)
                    )
                )
                return [_to_submission(r) for r in result.scalars().all()]
        except SQLAlchemyError as e:
            raise DatabaseError(
                f"Failed to search submissions: {e}",
                context={"fragment": fragment},
                operation="find_by_url_fragment",
            ) from e

    async def list_active(self) -> list[ChannelSubmission]:
        try:
            async with self.session_factory() as session:
                result = await session.execute(
                    select(ChannelSubmissionRecord).where(
                        ChannelSubmissionRecord.is_active.is_(True)
                    )
                )
                return [_to_submission(r) for r in result.scalars().all()]
        except SQLAlchemyError as e:
            raise DatabaseError(
                f"Failed to list active submissions: {e}",
                operation="list_active",
            ) from e


__all__ = ["SQLDocumentStore", "SQLSubmissionStore"]
