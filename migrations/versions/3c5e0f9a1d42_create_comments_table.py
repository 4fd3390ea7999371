"""create_comments_table

Threaded comments with soft deletion:
- comments (self-referencing parent_id, status active|deleted)
- btree indexes for tree walks and ordering
- GIN index for full-text search over the comment text

Revision ID: 3c5e0f9a1d42
Revises:
Create Date: 2026-10-19 10:12:04.518233

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3c5e0f9a1d42"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "comments",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("text", sa.Text(), nullable=False),
        sa.Column(
            "created_at",
            postgresql.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
        sa.Column(
            "parent_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("comments.id"),
            nullable=True,
        ),
        sa.Column(
            "status", sa.Text(), nullable=False, server_default=sa.text("'active'")
        ),
        sa.CheckConstraint(
            "status IN ('active', 'deleted')", name="comments_status_check"
        ),
    )

    op.create_index("idx_comments_parent_id", "comments", ["parent_id"])
    op.create_index("idx_comments_created_at", "comments", ["created_at"])
    op.execute(
        "CREATE INDEX idx_comments_text_fts ON comments "
        "USING GIN (to_tsvector('simple', text))"
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.execute("DROP INDEX IF EXISTS idx_comments_text_fts")
    op.drop_index("idx_comments_created_at", table_name="comments")
    op.drop_index("idx_comments_parent_id", table_name="comments")
    op.drop_table("comments")
