"""PostgreSQL implementation of Comment repository."""

from typing import Awaitable, Callable, List, Optional, TypeVar

import logfire
from sqlalchemy import Select, func, select, union_all, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from commenttree.config import RetrySettings
from commenttree.domain.error import StoreError
from commenttree.domain.model import Comment
from commenttree.domain.repository import CommentRepository
from commenttree.domain.value import CommentId, CommentStatus, Page, SortOrder
from commenttree.persistence.database import Database
from commenttree.persistence.mappers import comment_to_dict, row_to_comment
from commenttree.persistence.retry import retrying
from commenttree.persistence.tables import TEXT_SEARCH_CONFIG, comments_table

T = TypeVar("T")

ACTIVE = CommentStatus.ACTIVE.value
DELETED = CommentStatus.DELETED.value


def _ordered(stmt: Select, columns, order: SortOrder) -> Select:
    """Order by created_at, then id, in the requested direction."""
    if order == SortOrder.DESC:
        return stmt.order_by(columns.created_at.desc(), columns.id.desc())
    return stmt.order_by(columns.created_at.asc(), columns.id.asc())


def _paged(stmt: Select, page: Page) -> Select:
    return stmt.limit(page.size).offset(page.offset)


class PostgresCommentRepository(CommentRepository):
    """PostgreSQL implementation of CommentRepository.

    Every operation runs in its own transaction, retried as a whole on
    transient failures. Reads may be served by a replica.
    """

    def __init__(self, database: Database, retry_strategy: RetrySettings) -> None:
        """Initialize repository.

        Args:
            database: Connection pools for the primary and replicas
            retry_strategy: Retry policy for transient store errors
        """
        self.database = database
        self.retry_strategy = retry_strategy

    async def _run(
        self,
        operation: str,
        work: Callable[[AsyncSession], Awaitable[T]],
        read_only: bool = False,
    ) -> T:
        """Run ``work`` in a fresh transaction, retrying transient errors.

        Read-only work picks a reader on every attempt, so a retry may land
        on another replica.
        """

        async def attempt() -> T:
            session_factory = (
                self.database.reader() if read_only else self.database.writer
            )
            async with session_factory.begin() as session:
                return await work(session)

        try:
            return await retrying(self.retry_strategy, operation)(attempt)
        except (SQLAlchemyError, OSError) as e:
            logfire.error(
                "Store operation failed",
                operation=operation,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise StoreError(operation, str(e)) from e

    async def _select(self, operation: str, stmt: Select) -> List[Comment]:
        async def work(session: AsyncSession) -> List[Comment]:
            result = await session.execute(stmt)
            return [row_to_comment(row) for row in result.mappings().all()]

        return await self._run(operation, work, read_only=True)

    async def insert(self, text: str, parent_id: Optional[CommentId] = None) -> Comment:
        """Insert a new active comment."""
        comment = Comment.new(text, parent_id)
        stmt = comments_table.insert().values(**comment_to_dict(comment))

        async def work(session: AsyncSession) -> None:
            await session.execute(stmt)

        await self._run("comment_repository.insert", work)
        return comment

    async def fetch(
        self,
        parent_id: Optional[CommentId],
        order: SortOrder,
        page: Page,
    ) -> List[Comment]:
        """Fetch a page of active comments, optionally limited to a subtree."""
        if parent_id is None:
            stmt = select(comments_table).where(comments_table.c.status == ACTIVE)
            stmt = _paged(_ordered(stmt, comments_table.c, order), page)
            return await self._select("comment_repository.fetch", stmt)

        # The root is returned whatever its status; below it the walk follows
        # active rows only, so a deleted reply hides its own replies
        tree = (
            select(comments_table)
            .where(comments_table.c.id == parent_id)
            .cte("tree", recursive=True)
        )
        reply = comments_table.alias("reply")
        tree = tree.union(
            select(reply)
            .join(tree, reply.c.parent_id == tree.c.id)
            .where(reply.c.status == ACTIVE)
        )

        # The root comes back with every page; only its descendants are paged
        descendants = _paged(
            _ordered(select(tree).where(tree.c.id != parent_id), tree.c, order), page
        ).subquery("descendants")
        page_rows = union_all(
            select(tree).where(tree.c.id == parent_id),
            select(descendants),
        ).subquery("page_rows")
        stmt = _ordered(select(page_rows), page_rows.c, order)
        return await self._select("comment_repository.fetch", stmt)

    async def search(self, query: str, order: SortOrder, page: Page) -> List[Comment]:
        """Full-text search over active comment bodies."""
        document = func.to_tsvector(TEXT_SEARCH_CONFIG, comments_table.c.text)
        stmt = (
            select(comments_table)
            .where(comments_table.c.status == ACTIVE)
            .where(document.bool_op("@@")(func.plainto_tsquery(TEXT_SEARCH_CONFIG, query)))
        )
        stmt = _paged(_ordered(stmt, comments_table.c, order), page)
        return await self._select("comment_repository.search", stmt)

    async def subtree_delete(self, root_id: CommentId) -> None:
        """Soft-delete a comment and its whole subtree in one statement."""
        # Status is ignored while walking so deleted intermediates do not
        # shield their replies
        tree = (
            select(comments_table.c.id)
            .where(comments_table.c.id == root_id)
            .cte("tree", recursive=True)
        )
        reply = comments_table.alias("reply")
        tree = tree.union(
            select(reply.c.id).join(tree, reply.c.parent_id == tree.c.id)
        )
        stmt = (
            update(comments_table)
            .where(comments_table.c.id.in_(select(tree.c.id)))
            .values(status=DELETED)
        )

        async def work(session: AsyncSession) -> None:
            await session.execute(stmt)

        await self._run("comment_repository.subtree_delete", work)
