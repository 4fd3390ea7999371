"""Persistence infrastructure providers."""

from collections.abc import AsyncIterator

from dishka import Scope, provide

from commenttree.config import RetrySettings, Settings
from commenttree.domain.repository import CommentRepository
from commenttree.persistence.database import Database
from commenttree.persistence.repository import PostgresCommentRepository
from commenttree.util.di.base import ProviderBase
from commenttree.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Persistence component base."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """Production persistence provider using PostgreSQL."""

    __is_mock__ = False

    scope = Scope.APP

    @provide(scope=Scope.APP)
    async def get_database(self, settings: Settings) -> AsyncIterator[Database]:
        """Provide the process-wide connection pools.

        The pools are disposed when the container closes.
        """
        database = Database.from_settings(settings)
        for engine in database.engines:
            instrument_sqlalchemy(engine)
        yield database
        await database.dispose()

    @provide(scope=Scope.REQUEST)
    def get_comment_repository(
        self, database: Database, retry_strategy: RetrySettings
    ) -> CommentRepository:
        """Provide Comment repository."""
        return PostgresCommentRepository(database, retry_strategy)
