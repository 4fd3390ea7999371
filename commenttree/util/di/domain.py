"""Domain layer DI providers."""

from dishka import Scope, provide

from commenttree.domain.repository import CommentRepository
from commenttree.domain.service import CommentService
from commenttree.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped; each HTTP request gets fresh
    service instances.
    """

    scope = Scope.REQUEST

    @provide
    def get_comment_service(
        self, comment_repository: CommentRepository
    ) -> CommentService:
        """Provide comment domain service."""
        return CommentService(comment_repository=comment_repository)
