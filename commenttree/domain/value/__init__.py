"""Domain value objects for the comment tree."""

from commenttree.domain.value.identifiers import CommentId, parse_comment_id
from commenttree.domain.value.types import (
    DEFAULT_PAGE_SIZE,
    CommentStatus,
    Page,
    SortOrder,
)

__all__ = [
    # Identifiers
    "CommentId",
    "parse_comment_id",
    # Types
    "CommentStatus",
    "DEFAULT_PAGE_SIZE",
    "Page",
    "SortOrder",
]
