"""Create user_documents and channel_submissions tables.

Revision ID: sequencer_0001
Revises:
Create Date: 2026-10-18 09:00:00.000000

"""

from collections.abc import Sequence

import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "sequencer_0001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

JSON_TYPE = sa.JSON().with_variant(postgresql.JSONB(), "postgresql")


def upgrade() -> None:
    """Create the document and channel submission tables."""
    op.create_table(
        "user_documents",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("user_id", sa.String(100), nullable=False),
        sa.Column("document_type", sa.String(30), nullable=False),
        sa.Column("tool_slug", sa.String(50), nullable=False),
        sa.Column("story_slug", sa.String(200), nullable=True),
        sa.Column("is_public", sa.Boolean(), nullable=False),
        sa.Column("reported", sa.Boolean(), nullable=False),
        sa.Column("document_data", JSON_TYPE, nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id", name="pk_user_documents"),
    )
    op.create_index("ix_user_documents_id", "user_documents", ["id"])
    op.create_index("ix_user_documents_user_id", "user_documents", ["user_id"])
    op.create_index("idx_user_documents_owner_tool", "user_documents", ["user_id", "tool_slug"])

    op.create_table(
        "channel_submissions",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("channel_id", sa.String(100), nullable=False),
        sa.Column("url", sa.String(500), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("tool_data", JSON_TYPE, nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id", name="pk_channel_submissions"),
    )
    op.create_index("ix_channel_submissions_id", "channel_submissions", ["id"])
    op.create_index("ix_channel_submissions_channel_id", "channel_submissions", ["channel_id"])
    op.create_index("idx_channel_submissions_url", "channel_submissions", ["url"])
    op.create_index("idx_channel_submissions_active", "channel_submissions", ["is_active"])


def downgrade() -> None:
    """Drop the document and channel submission tables."""
    op.drop_index("idx_channel_submissions_active", table_name="channel_submissions")
    op.drop_index("idx_channel_submissions_url", table_name="channel_submissions")
    op.drop_index("ix_channel_submissions_channel_id", table_name="channel_submissions")
    op.drop_index("ix_channel_submissions_id", table_name="channel_submissions")
    op.drop_table("channel_submissions")

    op.drop_index("idx_user_documents_owner_tool", table_name="user_documents")
    op.drop_index("ix_user_documents_user_id", table_name="user_documents")
    op.drop_index("ix_user_documents_id", table_name="user_documents")
    op.drop_table("user_documents")
