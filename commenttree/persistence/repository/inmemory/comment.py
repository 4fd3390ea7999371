"""In-memory comment repository for testing."""

import re
from typing import Iterable, Optional

from commenttree.domain.model.comment import Comment
from commenttree.domain.repository.comment import CommentRepository
from commenttree.domain.value import CommentId, Page, SortOrder

_WORD = re.compile(r"\w+")


def _words(text: str) -> set[str]:
    return {word.lower() for word in _WORD.findall(text)}


def _sorted(comments: Iterable[Comment], order: SortOrder) -> list[Comment]:
    return sorted(
        comments,
        key=lambda c: (c.created_at, c.id),
        reverse=order == SortOrder.DESC,
    )


def _page(comments: list[Comment], page: Page) -> list[Comment]:
    return comments[page.offset : page.offset + page.size]


class InMemoryCommentRepository(CommentRepository):
    """In-memory implementation of CommentRepository for testing.

    Mirrors the PostgreSQL semantics: subtree reads return the root whatever
    its status and walk active comments below it, subtree deletes walk every
    comment, and search requires every query word to appear in the text.
    """

    def __init__(self) -> None:
        self._comments: dict[CommentId, Comment] = {}

    def _replies(self, parent_id: CommentId) -> list[Comment]:
        return [c for c in self._comments.values() if c.parent_id == parent_id]

    async def save(self, comment: Comment) -> Comment:
        """Store a comment as-is (test setup helper)."""
        self._comments[comment.id] = comment
        return comment

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID, whatever its status."""
        return self._comments.get(comment_id)

    async def insert(self, text: str, parent_id: Optional[CommentId] = None) -> Comment:
        """Insert a new active comment."""
        comment = Comment.new(text, parent_id)
        self._comments[comment.id] = comment
        return comment

    async def fetch(
        self,
        parent_id: Optional[CommentId],
        order: SortOrder,
        page: Page,
    ) -> list[Comment]:
        """Fetch a page of active comments, optionally limited to a subtree."""
        if parent_id is None:
            active = (c for c in self._comments.values() if c.is_active)
            return _page(_sorted(active, order), page)

        # The root is returned whatever its status
        root = self._comments.get(parent_id)
        if root is None:
            return []

        descendants: list[Comment] = []
        stack = [root.id]
        while stack:
            for reply in self._replies(stack.pop()):
                if reply.is_active:
                    descendants.append(reply)
                    stack.append(reply.id)

        return _sorted([root, *_page(_sorted(descendants, order), page)], order)

    async def search(self, query: str, order: SortOrder, page: Page) -> list[Comment]:
        """Match active comments containing every word of the query."""
        wanted = _words(query)
        if not wanted:
            return []
        matches = (
            c for c in self._comments.values() if c.is_active and wanted <= _words(c.text)
        )
        return _page(_sorted(matches, order), page)

    async def subtree_delete(self, root_id: CommentId) -> None:
        """Soft-delete a comment and every transitive descendant."""
        if root_id not in self._comments:
            return
        seen: set[CommentId] = set()
        stack = [root_id]
        while stack:
            comment_id = stack.pop()
            if comment_id in seen:
                continue
            seen.add(comment_id)
            self._comments[comment_id] = self._comments[comment_id].mark_deleted()
            stack.extend(reply.id for reply in self._replies(comment_id))
