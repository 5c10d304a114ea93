"""Channel submission ORM model.

A submission is one channel's listing of a document. It references the
document only through the view URL it stores, never by foreign key.
"""

import enum
from typing import Any

from sqlalchemy import Index, String
from sqlalchemy.orm import Mapped, mapped_column

from sequencer.models.base import Base, TimestampMixin, UUIDMixin
from sequencer.models.document import DocumentData


class SubmissionStatus(str, enum.Enum):
    """Listing status of a channel submission."""

    ACTIVE = "active"  # Listed in the channel
    INACTIVE = "inactive"  # Hidden from the channel, row kept


class ChannelSubmissionRecord(Base, UUIDMixin, TimestampMixin):
    """Channel listing of a document.

    Attributes:
        channel_id: Channel slug (kids-stories, wellness, resources)
        url: View URL of the listed document ({public_base}/view/{document_id})
        is_active: Whether the listing is visible in the channel
        tool_data: Denormalized display copy (name, description, submitted_by,
            creator_link, thumbnail, hashtags/category)
    """

    __tablename__ = "channel_submissions"

    channel_id: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    url: Mapped[str] = mapped_column(String(500), nullable=False)
    is_active: Mapped[bool] = mapped_column(nullable=False, default=True)
    tool_data: Mapped[dict[str, Any]] = mapped_column(DocumentData, nullable=False, default=dict)

    __table_args__ = (
        Index("idx_channel_submissions_url", "url"),
        Index("idx_channel_submissions_active", "is_active"),
    )

    def __repr__(self) -> str:
        """String representation."""
        return (
            f"<ChannelSubmissionRecord(id={self.id}, channel_id={self.channel_id}, "
            f"is_active={self.is_active})>"
        )


__all__ = [
    "ChannelSubmissionRecord",
    "SubmissionStatus",
]
