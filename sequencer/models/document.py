"""Document ORM model.

This module defines the stored sequence document. Content (title, items,
attribution, publish flag) lives in a single JSON column so the record
mirrors the nested structure the viewer reads.
"""

import enum
from typing import Any

from sqlalchemy import JSON, Index, String
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from sequencer.models.base import Base, TimestampMixin, UUIDMixin

DocumentData = JSON().with_variant(JSONB(), "postgresql")


class DocumentVisibility(str, enum.Enum):
    """Viewer visibility of a document."""

    UNPUBLISHED = "unpublished"  # Only the owner can open it
    PUBLISHED = "published"  # Resolvable at {public_base}/view/{id}


class UserDocument(Base, UUIDMixin, TimestampMixin):
    """A creator's stored document.

    Attributes:
        user_id: Owner identifier from the auth provider
        document_type: Document kind ("creative_work" for sequences)
        tool_slug: Tool that produced the document ("sequence")
        story_slug: Time-stamped slug assigned on creation
        is_public: Column copy of the publish flag
        reported: Set by moderation; reported documents stay unpublished
        document_data: Title, description, items and attribution fields
    """

    __tablename__ = "user_documents"

    user_id: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    document_type: Mapped[str] = mapped_column(
        String(30), nullable=False, default="creative_work"
    )
    tool_slug: Mapped[str] = mapped_column(String(50), nullable=False, default="sequence")
    story_slug: Mapped[str | None] = mapped_column(String(200))
    is_public: Mapped[bool] = mapped_column(nullable=False, default=False)
    reported: Mapped[bool] = mapped_column(nullable=False, default=False)
    document_data: Mapped[dict[str, Any]] = mapped_column(DocumentData, nullable=False)

    __table_args__ = (Index("idx_user_documents_owner_tool", "user_id", "tool_slug"),)

    def __repr__(self) -> str:
        """String representation."""
        return (
            f"<UserDocument(id={self.id}, user_id={self.user_id}, "
            f"tool_slug={self.tool_slug}, is_public={self.is_public})>"
        )


__all__ = [
    "UserDocument",
    "DocumentVisibility",
    "DocumentData",
]
