"""PostgreSQL repository implementations."""

from commenttree.persistence.repository.comment import PostgresCommentRepository

__all__ = [
    "PostgresCommentRepository",
]
