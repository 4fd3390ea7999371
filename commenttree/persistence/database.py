"""Database connection and session management.

Provides the async engines and session factories for the PostgreSQL primary
and its read replicas.
"""

from itertools import cycle
from typing import Iterator, Sequence

import logfire
from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from commenttree.config import DatabaseSettings, PostgresSettings, Settings


def create_engine(
    node: PostgresSettings, database: DatabaseSettings, echo: bool = False
) -> AsyncEngine:
    """Create async database engine for one PostgreSQL node.

    Args:
        node: Connection parameters of the node
        database: Pool bounds shared by every node
        echo: Log SQL queries

    Returns:
        Configured async engine
    """
    return create_async_engine(
        node.url,
        echo=echo,
        pool_pre_ping=True,  # Verify connections before using
        pool_size=database.max_idle_conns,
        max_overflow=max(database.max_open_conns - database.max_idle_conns, 0),
        pool_recycle=int(database.conn_max_lifetime.total_seconds()),
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create async session factory.

    Args:
        engine: Database engine

    Returns:
        Session factory for creating database sessions
    """
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,  # Don't expire objects after commit
        autoflush=False,  # Manual flushing for better control
    )


class Database:
    """Process-wide connection pools.

    Writes go through ``writer``; ``reader()`` rotates over the replicas and
    falls back to the primary when there are none.
    """

    def __init__(self, primary: AsyncEngine, replicas: Sequence[AsyncEngine] = ()) -> None:
        self.primary = primary
        self.replicas = list(replicas)
        self.writer = create_session_factory(primary)
        self._readers: Iterator[async_sessionmaker[AsyncSession]] | None = (
            cycle([create_session_factory(engine) for engine in self.replicas])
            if self.replicas
            else None
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        """Build engines for the primary and every configured replica."""
        db = settings.db
        return cls(
            primary=create_engine(db.postgres, db, echo=settings.debug),
            replicas=[create_engine(node, db, echo=settings.debug) for node in db.replicas],
        )

    @property
    def engines(self) -> list[AsyncEngine]:
        return [self.primary, *self.replicas]

    def reader(self) -> async_sessionmaker[AsyncSession]:
        """Session factory for read-only queries."""
        if self._readers is None:
            return self.writer
        return next(self._readers)

    async def ping(self) -> None:
        """Run a trivial query on the primary to verify connectivity."""
        async with self.primary.connect() as connection:
            await connection.execute(text("SELECT 1"))

    async def dispose(self) -> None:
        """Close every pooled connection."""
        for engine in self.engines:
            await engine.dispose()
        logfire.info("Database pools disposed", engines=len(self.engines))
