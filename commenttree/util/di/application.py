"""Application layer DI providers."""

from dishka import Scope, provide

from commenttree.application.usecase.comment import (
    CreateCommentUseCase,
    DeleteCommentsUseCase,
    GetCommentsUseCase,
)
from commenttree.domain.service import CommentService
from commenttree.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    @provide(scope=Scope.REQUEST)
    def get_create_comment_use_case(
        self, comment_service: CommentService
    ) -> CreateCommentUseCase:
        """Provide create comment use case."""
        return CreateCommentUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_get_comments_use_case(
        self, comment_service: CommentService
    ) -> GetCommentsUseCase:
        """Provide get comments use case."""
        return GetCommentsUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_delete_comments_use_case(
        self, comment_service: CommentService
    ) -> DeleteCommentsUseCase:
        """Provide delete comments use case."""
        return DeleteCommentsUseCase(comment_service=comment_service)
