"""SQLAlchemy ORM models.

- UserDocument: stored sequence documents
- ChannelSubmissionRecord: per-channel listings that reference documents by URL
"""

from sequencer.models.base import Base, TimestampMixin, UUIDMixin
from sequencer.models.document import DocumentVisibility, UserDocument
from sequencer.models.submission import ChannelSubmissionRecord, SubmissionStatus

__all__ = [
    "Base",
    "UUIDMixin",
    "TimestampMixin",
    "UserDocument",
    "DocumentVisibility",
    "ChannelSubmissionRecord",
    "SubmissionStatus",
]
