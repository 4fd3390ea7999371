"""Comment domain service."""

import logfire

from commenttree.domain.error import ValidationError
from commenttree.domain.model.comment import Comment, validate_text
from commenttree.domain.repository import CommentRepository
from commenttree.domain.tree import CommentNode, build_forest, filter_forest
from commenttree.domain.value import CommentId, Page, SortOrder, parse_comment_id

from .base import Service


class CommentService(Service):
    """Domain service for comment operations.

    Identifiers arrive as strings straight from the client; an empty string
    means "no parent". They are validated here, before any store access.
    """

    def __init__(self, comment_repository: CommentRepository) -> None:
        """Initialize comment service.

        Args:
            comment_repository: Comment repository
        """
        self.comment_repository = comment_repository

    def _parse_id(self, value: str, field: str, operation: str) -> CommentId:
        try:
            return parse_comment_id(value, field)
        except ValidationError as e:
            logfire.error("Invalid comment id", operation=operation, error=str(e))
            raise

    async def create_comment(self, text: str, parent_id: str = "") -> Comment:
        """Create a root comment or a reply.

        Args:
            text: Comment text
            parent_id: Parent comment ID for replies, empty for a root comment

        Returns:
            Created comment

        Raises:
            ValidationError: If text is empty or contains NUL, or parent_id
                is malformed
            StoreError: If the store rejects the write
        """
        operation = "comment_service.create_comment"
        with logfire.span(operation, parent_id=parent_id or None):
            try:
                validate_text(text)
            except ValidationError as e:
                logfire.error("Invalid comment text", operation=operation, error=str(e))
                raise

            parent = self._parse_id(parent_id, "parent_id", operation) if parent_id else None
            comment = await self.comment_repository.insert(text, parent)
            logfire.info(
                "Comment created",
                comment_id=str(comment.id),
                parent_id=str(parent) if parent else None,
            )
            return comment

    async def get_comments(
        self,
        parent_id: str,
        order: SortOrder | str | None = SortOrder.ASC,
        page: int = 1,
        page_size: int = 0,
    ) -> list[CommentNode]:
        """Get a page of comments shaped as a forest.

        Without a parent, returns the forest of root comments found in the
        page. With a parent, returns a single tree rooted at that comment, or
        an empty list when the comment is missing. A deleted parent still
        roots the tree; only its active replies are attached.

        Args:
            parent_id: Subtree root ID, empty for all comments
            order: "asc" or "desc" by creation time
            page: 1-based page number
            page_size: Page size (defaults when not positive)

        Returns:
            Forest of comment nodes

        Raises:
            ValidationError: If parent_id is malformed
            StoreError: If the read fails
        """
        operation = "comment_service.get_comments"
        sort = SortOrder.parse(order)
        window = Page.of(page, page_size)
        with logfire.span(
            operation,
            parent_id=parent_id or None,
            order=sort.value,
            page=window.number,
            page_size=window.size,
        ):
            if not parent_id:
                comments = await self.comment_repository.fetch(None, sort, window)
                forest = build_forest(comments, None)
                logfire.info(
                    "Comments retrieved", count=len(comments), roots=len(forest)
                )
                return forest

            root_id = self._parse_id(parent_id, "parent", operation)
            comments = await self.comment_repository.fetch(root_id, sort, window)
            root = next((c for c in comments if c.id == root_id), None)
            if root is None:
                logfire.warn("Subtree root not found", parent_id=parent_id)
                return []

            logfire.info("Subtree retrieved", parent_id=parent_id, count=len(comments))
            return [CommentNode(root, build_forest(comments, root_id))]

    async def search_comments(
        self,
        query: str,
        parent_id: str,
        order: SortOrder | str | None = SortOrder.ASC,
        page: int = 1,
        page_size: int = 0,
    ) -> list[CommentNode]:
        """Search comments by text.

        Without a parent, runs a full-text search in the store and shapes the
        flat matches as a forest hanging off the first match's parent;
        ancestors are not reconstructed. With a parent, loads that subtree
        and keeps the nodes whose text contains the query (case-insensitive)
        along with their ancestors.

        Args:
            query: Search text
            parent_id: Subtree root ID, empty to search all comments
            order: "asc" or "desc" by creation time
            page: 1-based page number
            page_size: Page size (defaults when not positive)

        Returns:
            Forest of matching comment nodes

        Raises:
            ValidationError: If parent_id is malformed
            StoreError: If the read fails
        """
        operation = "comment_service.search_comments"
        with logfire.span(operation, query=query, parent_id=parent_id or None):
            if not parent_id:
                matches = await self.comment_repository.search(
                    query, SortOrder.parse(order), Page.of(page, page_size)
                )
                logfire.info("Search matches", query=query, count=len(matches))
                if not matches:
                    return []
                return build_forest(matches, matches[0].parent_id)

            tree = await self.get_comments(parent_id, order, page, page_size)
            return filter_forest(tree, query)

    async def delete_comments(self, comment_id: str) -> None:
        """Soft-delete a comment and all of its descendants.

        Deleting an unknown or already deleted comment is not an error.

        Args:
            comment_id: Comment ID

        Raises:
            ValidationError: If comment_id is malformed
            StoreError: If the write fails
        """
        operation = "comment_service.delete_comments"
        with logfire.span(operation, comment_id=comment_id):
            root_id = self._parse_id(comment_id, "id", operation)
            await self.comment_repository.subtree_delete(root_id)
            logfire.info("Comment subtree deleted", comment_id=comment_id)
