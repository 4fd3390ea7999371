"""Domain model entities for the comment tree."""

from commenttree.domain.model.comment import Comment

__all__ = [
    "Comment",
]
