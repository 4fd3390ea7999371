"""Comment repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from commenttree.domain.model.comment import Comment
from commenttree.domain.value import CommentId, Page, SortOrder


class CommentRepository(ABC):
    """Repository for Comment entity.

    Defines the contract for comment persistence operations.
    Implementations live in the persistence layer and are expected to
    retry transient store failures themselves, raising StoreError once
    retries are exhausted.
    """

    @abstractmethod
    async def insert(self, text: str, parent_id: Optional[CommentId] = None) -> Comment:
        """Insert a new active comment.

        The parent is not looked up; referential integrity is left to the
        store.

        Args:
            text: Comment body, must not be empty
            parent_id: Parent comment ID for replies (None for roots)

        Returns:
            The stored comment

        Raises:
            ValidationError: If text is empty
            StoreError: If the write fails after retries
        """
        pass

    @abstractmethod
    async def fetch(
        self,
        parent_id: Optional[CommentId],
        order: SortOrder,
        page: Page,
    ) -> List[Comment]:
        """Fetch a page of active comments.

        Without a parent, returns all active comments. With a parent,
        returns the parent row, whatever its status, together with its
        active descendants (the walk below the parent follows active rows
        only). Descendants are paginated; the parent row
        is included on every page.

        Args:
            parent_id: Subtree root, or None for every comment
            order: Direction of the created_at ordering
            page: Page window

        Returns:
            Flat list of comments ordered by (created_at, id)
        """
        pass

    @abstractmethod
    async def search(self, query: str, order: SortOrder, page: Page) -> List[Comment]:
        """Full-text search over active comment bodies.

        Args:
            query: Plain text query; every word must match
            order: Direction of the created_at ordering
            page: Page window

        Returns:
            Flat list of matching comments, without their ancestors
        """
        pass

    @abstractmethod
    async def subtree_delete(self, root_id: CommentId) -> None:
        """Soft-delete a comment and every transitive descendant.

        The walk follows parent links regardless of the current status of
        intermediate comments. Running it twice leaves the same state.

        Args:
            root_id: Root of the subtree to delete
        """
        pass
