"""Repository interfaces for the comment tree domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from commenttree.domain.repository.comment import CommentRepository

__all__ = [
    "CommentRepository",
]
