"""Unit tests for the SQLAlchemy stores (in-memory SQLite)."""

import uuid

import pytest

from sequencer.core.exceptions import RecordNotFoundError
from sequencer.models.submission import ChannelSubmissionRecord
from sequencer.services.publishing.reconciler import VisibilityReconciler
from sequencer.services.publishing.sql_stores import SQLDocumentStore, SQLSubmissionStore
from sequencer.services.publishing.stores import ChannelSubmission, StoredDocument

from .conftest import OWNER, PROXY_BASE, PUBLIC_BASE, document_data


@pytest.fixture
def document_store(session_factory) -> SQLDocumentStore:
    return SQLDocumentStore(session_factory)


@pytest.fixture
def submission_store(session_factory) -> SQLSubmissionStore:
    return SQLSubmissionStore(session_factory)


async def insert(store: SQLDocumentStore, owner: str = OWNER, **fields) -> StoredDocument:
    return await store.insert(
        StoredDocument(user_id=owner, story_slug="bedtime-1", document_data=document_data(), **fields)
    )


class TestSQLDocumentStore:
    """Tests for SQLDocumentStore."""

    @pytest.mark.asyncio
    async def test_insert_and_get(self, document_store):
        """Test a document round-trips through the table."""
        stored = await insert(document_store)

        loaded = await document_store.get(stored.id)

        assert loaded is not None
        assert uuid.UUID(loaded.id)
        assert loaded.user_id == OWNER
        assert loaded.document_data["title"] == "Bedtime"
        assert loaded.document_data["items"][1]["video_id"] == "dQw4w9WgXcQ"
        assert loaded.created_at is not None

    @pytest.mark.asyncio
    async def test_get_unknown_or_malformed_id(self, document_store):
        """Test unknown and non-UUID ids return None."""
        assert await document_store.get(str(uuid.uuid4())) is None
        assert await document_store.get("not-a-uuid") is None

    @pytest.mark.asyncio
    async def test_update(self, document_store):
        """Test content and visibility updates."""
        stored = await insert(document_store)
        data = {**stored.document_data, "is_published": "true"}

        updated = await document_store.update(
            stored.id, document_data=data, is_public=True, owner_id=OWNER
        )

        assert updated.is_public is True
        assert updated.is_published is True
        assert (await document_store.get(stored.id)).is_public is True

    @pytest.mark.asyncio
    async def test_update_other_owner(self, document_store):
        """Test owner-scoped updates reject other users."""
        stored = await insert(document_store)

        with pytest.raises(RecordNotFoundError):
            await document_store.update(stored.id, is_public=True, owner_id="someone-else")

    @pytest.mark.asyncio
    async def test_delete(self, document_store):
        """Test delete removes the row."""
        stored = await insert(document_store)

        await document_store.delete(stored.id, owner_id=OWNER)

        assert await document_store.get(stored.id) is None

    @pytest.mark.asyncio
    async def test_list_by_owner(self, document_store):
        """Test listing filters by owner and tool."""
        await insert(document_store)
        await insert(document_store)
        await insert(document_store, owner="someone-else")
        await insert(document_store, tool_slug="other-tool")

        listed = await document_store.list_by_owner(OWNER)

        assert len(listed) == 2
        assert all(d.user_id == OWNER for d in listed)


class TestSQLSubmissionStore:
    """Tests for SQLSubmissionStore."""

    @pytest.mark.asyncio
    async def test_insert_and_find(self, submission_store):
        """Test URL fragment search is case-insensitive."""
        document_id = str(uuid.uuid4())
        await submission_store.insert(
            ChannelSubmission(
                channel_id="kids-stories",
                url=f"{PUBLIC_BASE}/view/{document_id.upper()}",
                submitted_by="Ana",
                hashtags=["sleep"],
            )
        )
        await submission_store.insert(
            ChannelSubmission(channel_id="wellness", url=f"{PUBLIC_BASE}/view/{uuid.uuid4()}")
        )

        found = await submission_store.find_by_url_fragment(document_id)

        assert len(found) == 1
        assert found[0].submitted_by == "Ana"
        assert found[0].hashtags == ["sleep"]
        assert found[0].document_id == document_id.upper()

    @pytest.mark.asyncio
    async def test_update_and_list_active(self, submission_store):
        """Test deactivation removes a submission from the active list."""
        submission = await submission_store.insert(
            ChannelSubmission(channel_id="kids-stories", url=f"{PUBLIC_BASE}/view/abc")
        )

        await submission_store.update(submission.model_copy(update={"active": False}))

        assert await submission_store.list_active() == []
        assert (await submission_store.get(submission.id)).active is False

    @pytest.mark.asyncio
    async def test_update_unknown(self, submission_store):
        """Test updating a missing submission raises."""
        with pytest.raises(RecordNotFoundError):
            await submission_store.update(
                ChannelSubmission(id=str(uuid.uuid4()), channel_id="x", url="/view/abc")
            )


class TestReconcilerOverSQL:
    """The reconciler against the SQL stores."""

    @pytest.mark.asyncio
    async def test_delete_flow(self, document_store, submission_store):
        """Test delete deactivates listings and removes the row."""
        reconciler = VisibilityReconciler(
            document_store,
            submission_store,
            public_base_url=PUBLIC_BASE,
            proxy_base=PROXY_BASE,
        )
        stored = await insert(document_store)
        await reconciler.publish(stored.id, owner_id=OWNER)
        submission = await submission_store.insert(
            ChannelSubmission(channel_id="kids-stories", url=reconciler.share_url(stored.id))
        )

        result = await reconciler.delete(stored.id, owner_id=OWNER)

        assert result.deactivated == 1
        assert await document_store.get(stored.id) is None
        assert (await submission_store.get(submission.id)).active is False


async def seed_submission(session_factory, url: str, tool_data: dict) -> str:
    """Insert a submission row the way the channels site writes it."""
    async with session_factory() as session:
        record = ChannelSubmissionRecord(
            channel_id="kids-stories", url=url, is_active=True, tool_data=tool_data
        )
        session.add(record)
        await session.commit()
        return str(record.id)


async def stored_tool_data(session_factory, submission_id: str) -> dict:
    async with session_factory() as session:
        record = await session.get(ChannelSubmissionRecord, uuid.UUID(submission_id))
        return dict(record.tool_data)


class TestSubmissionToolDataPreserved:
    """Extra keys written by the channels site survive our writes."""

    TOOL_DATA = {
        "name": "Bedtime",
        "category": "sleep,calm",
        "approved_by": "admin",
        "submitted_at": "2026-01-02T03:04:05Z",
    }

    @pytest.mark.asyncio
    async def test_unsubmit_all_only_flips_active(self, session_factory, submission_store):
        """Test deactivation leaves the stored JSON untouched."""
        document_id = str(uuid.uuid4())
        submission_id = await seed_submission(
            session_factory, f"{PUBLIC_BASE}/view/{document_id}", dict(self.TOOL_DATA)
        )
        reconciler = VisibilityReconciler(
            SQLDocumentStore(session_factory),
            submission_store,
            public_base_url=PUBLIC_BASE,
            proxy_base=PROXY_BASE,
        )

        result = await reconciler.unsubmit_all(document_id)

        assert result.deactivated == 1
        assert await stored_tool_data(session_factory, submission_id) == self.TOOL_DATA
        assert (await submission_store.get(submission_id)).active is False

    @pytest.mark.asyncio
    async def test_update_merges_into_stored_json(self, session_factory, submission_store):
        """Test update keeps unknown keys and writes hashtags back as category."""
        submission_id = await seed_submission(
            session_factory, f"{PUBLIC_BASE}/view/abc", dict(self.TOOL_DATA)
        )
        submission = await submission_store.get(submission_id)
        assert submission.hashtags == ["sleep", "calm"]

        await submission_store.update(
            submission.model_copy(update={"name": "Renamed", "hashtags": ["night"]})
        )

        tool_data = await stored_tool_data(session_factory, submission_id)
        assert tool_data["name"] == "Renamed"
        assert tool_data["approved_by"] == "admin"
        assert tool_data["submitted_at"] == "2026-01-02T03:04:05Z"
        assert tool_data["category"] == "night"
        assert "hashtags" not in tool_data

    @pytest.mark.asyncio
    async def test_set_active_unknown(self, submission_store):
        """Test flipping a missing submission raises."""
        with pytest.raises(RecordNotFoundError):
            await submission_store.set_active(str(uuid.uuid4()), False)
