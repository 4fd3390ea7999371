"""Unit tests for InMemoryCommentRepository.

The in-memory repository backs every unit and e2e test, so it has to
follow the same read and delete rules as the PostgreSQL one.
"""

import pytest

from commenttree.domain.value import CommentStatus, Page, SortOrder
from commenttree.persistence.repository.inmemory import InMemoryCommentRepository
from tests.conftest import make_comment

FIRST_PAGE = Page.of(1, 10)


@pytest.fixture
def repo():
    return InMemoryCommentRepository()


class TestFetch:
    @pytest.mark.asyncio
    async def test_root_less_fetch_is_ordered_and_paged(self, repo):
        for minute in range(5):
            await repo.save(make_comment(f"c{minute}", minute=minute))

        asc = await repo.fetch(None, SortOrder.ASC, Page.of(2, 2))
        desc = await repo.fetch(None, SortOrder.DESC, Page.of(1, 2))

        assert [c.text for c in asc] == ["c2", "c3"]
        assert [c.text for c in desc] == ["c4", "c3"]

    @pytest.mark.asyncio
    async def test_root_less_fetch_skips_deleted(self, repo):
        await repo.save(make_comment("kept"))
        await repo.save(make_comment("gone", status=CommentStatus.DELETED))

        result = await repo.fetch(None, SortOrder.ASC, FIRST_PAGE)

        assert [c.text for c in result] == ["kept"]

    @pytest.mark.asyncio
    async def test_subtree_fetch_includes_root_and_descendants(self, repo):
        root = await repo.save(make_comment("root", minute=0))
        child = await repo.save(make_comment("child", root, minute=1))
        await repo.save(make_comment("grandchild", child, minute=2))
        await repo.save(make_comment("elsewhere", minute=3))

        result = await repo.fetch(root.id, SortOrder.ASC, FIRST_PAGE)

        assert [c.text for c in result] == ["root", "child", "grandchild"]

    @pytest.mark.asyncio
    async def test_subtree_fetch_rooted_at_deleted_comment(self, repo):
        """A deleted root is still returned with its active replies."""
        root = await repo.save(
            make_comment("root", minute=0, status=CommentStatus.DELETED)
        )
        reply = await repo.save(make_comment("reply", root, minute=1))
        await repo.save(
            make_comment("gone", root, minute=2, status=CommentStatus.DELETED)
        )

        result = await repo.fetch(root.id, SortOrder.ASC, FIRST_PAGE)

        assert [c.id for c in result] == [root.id, reply.id]
        assert result[0].status == CommentStatus.DELETED

    @pytest.mark.asyncio
    async def test_subtree_fetch_of_unknown_root(self, repo):
        stranger = make_comment("stranger")

        assert await repo.fetch(stranger.id, SortOrder.ASC, FIRST_PAGE) == []


class TestSearch:
    @pytest.mark.asyncio
    async def test_every_word_must_match(self, repo):
        await repo.save(make_comment("quick brown fox", minute=0))
        await repo.save(make_comment("quick red fox", minute=1))
        await repo.save(make_comment("Brown bear", minute=2))

        result = await repo.search("brown QUICK", SortOrder.ASC, FIRST_PAGE)

        assert [c.text for c in result] == ["quick brown fox"]

    @pytest.mark.asyncio
    async def test_deleted_comments_are_not_found(self, repo):
        await repo.save(make_comment("needle", status=CommentStatus.DELETED))

        assert await repo.search("needle", SortOrder.ASC, FIRST_PAGE) == []

    @pytest.mark.asyncio
    async def test_blank_query_matches_nothing(self, repo):
        await repo.save(make_comment("anything"))

        assert await repo.search("  ", SortOrder.ASC, FIRST_PAGE) == []


class TestSubtreeDelete:
    @pytest.mark.asyncio
    async def test_walks_through_deleted_intermediates(self, repo):
        """Replies under an already deleted comment are deleted too."""
        root = await repo.save(make_comment("root", minute=0))
        middle = await repo.save(
            make_comment("middle", root, minute=1, status=CommentStatus.DELETED)
        )
        leaf = await repo.save(make_comment("leaf", middle, minute=2))

        await repo.subtree_delete(root.id)

        for comment in (root, middle, leaf):
            saved = await repo.find_by_id(comment.id)
            assert saved.status == CommentStatus.DELETED

    @pytest.mark.asyncio
    async def test_siblings_untouched(self, repo):
        root = await repo.save(make_comment("root", minute=0))
        doomed = await repo.save(make_comment("doomed", root, minute=1))
        sibling = await repo.save(make_comment("sibling", root, minute=2))

        await repo.subtree_delete(doomed.id)

        assert (await repo.find_by_id(root.id)).is_active
        assert (await repo.find_by_id(sibling.id)).is_active

    @pytest.mark.asyncio
    async def test_unknown_root_is_a_no_op(self, repo):
        stranger = make_comment("stranger")

        await repo.subtree_delete(stranger.id)

        assert await repo.find_by_id(stranger.id) is None
