"""In-memory repository implementations for testing."""

from commenttree.persistence.repository.inmemory.comment import InMemoryCommentRepository

__all__ = [
    "InMemoryCommentRepository",
]
