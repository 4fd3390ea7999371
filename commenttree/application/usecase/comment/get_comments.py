"""Get comments use case."""

from typing import Any

from pydantic import BaseModel

from commenttree.application.usecase.base import BaseUseCase
from commenttree.domain.service import CommentService

from .responses import serialize_forest


class GetCommentsRequest(BaseModel):
    """Get comments request.

    Mirrors the query string of GET /api/comments.
    """

    parent: str = ""  # Subtree root, empty for all comments
    search: str = ""  # Search text, empty for a plain listing
    page: int = 1
    page_size: int = 0  # Not positive: default page size
    sort: str = "asc"


class GetCommentsUseCase(BaseUseCase):
    """Use case for listing or searching comments as a forest."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize get comments use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: GetCommentsRequest) -> list[dict[str, Any]]:
        """Execute get comments flow.

        A non-empty ``search`` switches from a plain listing to a search.

        Args:
            request: Get comments request

        Returns:
            Forest of comments as nested dicts in CommentNodeResponse shape

        Raises:
            ValidationError: If parent is malformed
            StoreError: If the read fails
        """
        if request.search:
            nodes = await self.comment_service.search_comments(
                query=request.search,
                parent_id=request.parent,
                order=request.sort,
                page=request.page,
                page_size=request.page_size,
            )
        else:
            nodes = await self.comment_service.get_comments(
                parent_id=request.parent,
                order=request.sort,
                page=request.page,
                page_size=request.page_size,
            )
        return serialize_forest(nodes)
