"""SQLAlchemy table definitions for the comment tree.

These table definitions match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    CheckConstraint,
    Column,
    ForeignKey,
    Index,
    MetaData,
    Table,
    Text,
    func,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# Text search configuration shared by the index and the search query
TEXT_SEARCH_CONFIG = "simple"

# ============================================================================
# COMMENTS TABLE
# ============================================================================
comments_table = Table(
    "comments",
    metadata,
    Column("id", UUID(as_uuid=True), primary_key=True),
    Column("text", Text, nullable=False),
    Column("created_at", TIMESTAMP(timezone=True), nullable=False),
    Column("parent_id", UUID(as_uuid=True), ForeignKey("comments.id"), nullable=True),
    Column("status", Text, nullable=False, server_default="active"),
    CheckConstraint("status IN ('active', 'deleted')", name="comments_status_check"),
)

Index("idx_comments_parent_id", comments_table.c.parent_id)
Index("idx_comments_created_at", comments_table.c.created_at)
Index(
    "idx_comments_text_fts",
    func.to_tsvector(TEXT_SEARCH_CONFIG, comments_table.c.text),
    postgresql_using="gin",
)
