"""Channel listings: dashboard summaries and submission links.

The dashboard shows each of an owner's sequences with the display data of
its active channel submissions layered over the document's own fields.
Submission links hand a published document to the channels site, which
creates the submission record on its side.
"""

from datetime import datetime
from typing import Any
from urllib.parse import urlencode

from pydantic import BaseModel, Field

from sequencer.core.config import get_config
from sequencer.core.exceptions import SequenceValidationError
from sequencer.core.logging import get_logger
from sequencer.services.publishing.stores import (
    ChannelSubmission,
    DocumentStore,
    SubmissionStore,
    parse_hashtags,
)
from sequencer.services.sequence.items import SequenceDocument

logger = get_logger(__name__)


class Channel(BaseModel):
    """A community channel documents can be submitted to."""

    id: str
    name: str
    description: str


AVAILABLE_CHANNELS = [
    Channel(
        id="kids-stories",
        name="Community Kids Stories",
        description="Parent-Created Stories for Children",
    ),
    Channel(
        id="wellness",
        name="Wellness",
        description="Interactive Tools for a better life",
    ),
    Channel(
        id="resources",
        name="Resources for Parents",
        description="Curated Content for Parenting, Growth, and Family Wellbeing",
    ),
]


class DocumentSummary(BaseModel):
    """Dashboard row for one sequence.

    Display fields prefer the active submission's copy over the document's.
    """

    id: str
    slug: str | None = None
    title: str = ""
    description: str = ""
    creator_name: str = ""
    creator_link: str = ""
    thumbnail_url: str = ""
    hashtags: list[str] = Field(default_factory=list)
    is_published: bool = False
    item_count: int = 0
    created_at: datetime | None = None
    submitted_channels: list[str] = Field(default_factory=list)


def _index_submissions(
    submissions: list[ChannelSubmission],
) -> dict[str, tuple[list[str], ChannelSubmission]]:
    """Group active submissions by referenced document id.

    Returns:
        document_id -> (distinct channel ids, first submission seen)
    """
    index: dict[str, tuple[list[str], ChannelSubmission]] = {}
    for submission in submissions:
        document_id = submission.document_id
        if not document_id:
            continue
        channels = index.setdefault(document_id.lower(), ([], submission))[0]
        if submission.channel_id and submission.channel_id not in channels:
            channels.append(submission.channel_id)
    return index


def _summarize(
    document_id: str,
    slug: str | None,
    data: dict[str, Any],
    created_at: datetime | None,
    listing: tuple[list[str], ChannelSubmission] | None,
) -> DocumentSummary:
    summary = DocumentSummary(
        id=document_id,
        slug=slug,
        title=data.get("title") or "",
        description=data.get("description") or "",
        creator_name=data.get("creator_name") or data.get("author") or "",
        creator_link=data.get("creator_link") or "",
        thumbnail_url=data.get("thumbnail_url") or "",
        hashtags=parse_hashtags(data.get("hashtags")),
        is_published=data.get("is_published") in ("true", True),
        item_count=len(data.get("items") or []),
        created_at=created_at,
    )
    if listing is None:
        return summary

    channels, submission = listing
    summary.submitted_channels = list(channels)
    summary.title = submission.name or summary.title
    summary.description = submission.description or summary.description
    summary.creator_name = submission.submitted_by or summary.creator_name
    summary.creator_link = submission.creator_link or summary.creator_link
    summary.thumbnail_url = submission.thumbnail or summary.thumbnail_url
    summary.hashtags = list(submission.hashtags) or summary.hashtags
    return summary


async def summarize_documents(
    documents: DocumentStore,
    submissions: SubmissionStore,
    owner_id: str,
) -> list[DocumentSummary]:
    """List an owner's sequences, newest first, merged with listing data.

    Args:
        documents: Document store
        submissions: Submission store
        owner_id: Owner whose documents are listed

    Returns:
        One summary per document
    """
    stored = await documents.list_by_owner(owner_id)
    index = _index_submissions(await submissions.list_active())

    summaries = [
        _summarize(
            str(document.id),
            document.story_slug,
            document.document_data,
            document.created_at,
            index.get(str(document.id).lower()),
        )
        for document in stored
    ]
    logger.debug("Documents summarized", owner_id=owner_id, count=len(summaries))
    return summaries


def get_channel(channel_id: str) -> Channel:
    """Look up an available channel.

    Raises:
        SequenceValidationError: Unknown channel id
    """
    for channel in AVAILABLE_CHANNELS:
        if channel.id == channel_id:
            return channel
    raise SequenceValidationError(f"Unknown channel: {channel_id}", field="channel")


def build_submission_link(
    channel_id: str,
    document_id: str,
    document: SequenceDocument,
    channels_base_url: str | None = None,
) -> str:
    """Link that opens the channel's submission form prefilled.

    Args:
        channel_id: Target channel
        document_id: Published document id
        document: Document supplying title and attribution
        channels_base_url: Channels site base (defaults to config)

    Returns:
        "{channels_base}/channels/{channel_id}?doc_id=...&channel=...&title=..."
    """
    channel = get_channel(channel_id)
    base = (channels_base_url or get_config().channels_base_url).rstrip("/")

    params = {"doc_id": document_id, "channel": channel.id, "title": document.title}
    if document.description:
        params["description"] = document.description
    if document.creator_name:
        params["creator_name"] = document.creator_name
    if document.creator_link:
        params["creator_link"] = document.creator_link
    if document.thumbnail_url:
        params["thumbnail_url"] = document.thumbnail_url
    if document.hashtags:
        params["hashtags"] = ",".join(document.hashtags)

    return f"{base}/channels/{channel.id}?{urlencode(params)}"


__all__ = [
    "AVAILABLE_CHANNELS",
    "Channel",
    "DocumentSummary",
    "build_submission_link",
    "get_channel",
    "summarize_documents",
]
