"""Create comment use case."""

from pydantic import BaseModel

from commenttree.application.usecase.base import BaseUseCase
from commenttree.domain.service import CommentService

from .responses import CommentResponse


class CreateCommentRequest(BaseModel):
    """Create comment request."""

    text: str
    parent_id: str = ""  # Parent comment ID for replies, empty for a root


class CreateCommentUseCase(BaseUseCase):
    """Use case for creating a root comment or replying to another comment."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize create comment use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: CreateCommentRequest) -> CommentResponse:
        """Execute create comment flow.

        Args:
            request: Create comment request

        Returns:
            The created comment

        Raises:
            ValidationError: If text is empty or parent_id is malformed
            StoreError: If the store rejects the write
        """
        comment = await self.comment_service.create_comment(
            text=request.text,
            parent_id=request.parent_id,
        )
        return CommentResponse.from_domain(comment)
