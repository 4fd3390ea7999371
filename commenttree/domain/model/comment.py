"""Comment entity.

Comments form a forest through ``parent_id``. They are never physically
removed: deletion flips ``status`` to DELETED for a comment and its whole
subtree.
"""

from datetime import datetime, timezone
from typing import Optional
from uuid import uuid4

from pydantic import Field

from commenttree.domain.error import ValidationError
from commenttree.domain.model.common import DomainModel
from commenttree.domain.value import CommentId, CommentStatus


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def validate_text(text: str) -> None:
    """Reject comment bodies the store cannot hold.

    Raises:
        ValidationError: If text is empty or contains a NUL character
    """
    if not text:
        raise ValidationError("text is empty")
    # PostgreSQL text columns cannot store NUL
    if "\x00" in text:
        raise ValidationError("text contains a NUL character")


class Comment(DomainModel):
    """Comment entity.

    Represents a root comment or a reply to another comment.

    Ordering is by ``created_at`` with ``id`` as the tie breaker.
    """

    id: CommentId
    text: str = Field(min_length=1)
    created_at: datetime = Field(default_factory=utcnow)
    parent_id: Optional[CommentId] = None
    status: CommentStatus = CommentStatus.ACTIVE

    @classmethod
    def new(cls, text: str, parent_id: Optional[CommentId] = None) -> "Comment":
        """Create a fresh active comment.

        Args:
            text: Comment body, must not be empty
            parent_id: Parent comment for replies (None for roots)

        Returns:
            Comment with a new id and the current UTC timestamp

        Raises:
            ValidationError: If text is empty or contains NUL
        """
        validate_text(text)
        return cls(
            id=CommentId(uuid4()),
            text=text,
            created_at=utcnow(),
            parent_id=parent_id,
            status=CommentStatus.ACTIVE,
        )

    @property
    def is_active(self) -> bool:
        return self.status == CommentStatus.ACTIVE

    def mark_deleted(self) -> "Comment":
        """Return a copy of this comment with status DELETED."""
        return self.model_copy(update={"status": CommentStatus.DELETED})
