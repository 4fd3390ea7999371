"""Delete comments use case."""

from pydantic import BaseModel

from commenttree.application.usecase.base import BaseUseCase
from commenttree.domain.service import CommentService


class DeleteCommentsRequest(BaseModel):
    """Delete comments request."""

    comment_id: str


class DeleteCommentsUseCase(BaseUseCase):
    """Use case for soft-deleting a comment together with its replies."""

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def execute(self, request: DeleteCommentsRequest) -> None:
        """Execute delete flow.

        Raises:
            ValidationError: If comment_id is malformed
            StoreError: If the write fails
        """
        await self.comment_service.delete_comments(request.comment_id)
