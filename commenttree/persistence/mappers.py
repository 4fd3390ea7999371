"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict, Mapping
from uuid import UUID

from commenttree.domain.model import Comment
from commenttree.domain.value import CommentId, CommentStatus


def _to_uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def row_to_comment(row: Mapping[str, Any]) -> Comment:
    """Convert database row to Comment domain model.

    Args:
        row: Database row mapping

    Returns:
        Comment domain model
    """
    return Comment(
        id=CommentId(_to_uuid(row["id"])),
        text=row["text"],
        created_at=row["created_at"],
        parent_id=CommentId(_to_uuid(row["parent_id"])) if row.get("parent_id") else None,
        status=CommentStatus(row["status"]),
    )


def comment_to_dict(comment: Comment) -> Dict[str, Any]:
    """Convert Comment domain model to database dict.

    Args:
        comment: Comment domain model

    Returns:
        Dict suitable for database insertion
    """
    values = comment.model_dump()
    values["status"] = comment.status.value
    return values
