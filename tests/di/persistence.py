"""Mock persistence providers for testing."""

from dishka import Scope, provide

from commenttree.domain.repository import CommentRepository
from commenttree.persistence.repository.inmemory import InMemoryCommentRepository
from commenttree.util.di.infrastructure.persistence import PersistenceProvider


class MockPersistenceProvider(PersistenceProvider):
    """Mock persistence provider using in-memory repositories.

    Uses APP scope so state survives across the requests of one container;
    each test builds its own container, which keeps tests isolated.
    """

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_comment_repository(self) -> CommentRepository:
        """Provide in-memory comment repository."""
        return InMemoryCommentRepository()
