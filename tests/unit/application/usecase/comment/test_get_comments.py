"""Unit tests for GetCommentsUseCase and DeleteCommentsUseCase."""

import pytest

from commenttree.application.usecase.comment import (
    CreateCommentRequest,
    CreateCommentUseCase,
    DeleteCommentsRequest,
    DeleteCommentsUseCase,
    GetCommentsRequest,
    GetCommentsUseCase,
)
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


@pytest.fixture
def thread(unit_env):
    """Create "hello" with a "reply" below it; returns both responses."""

    async def create():
        create_comment = await unit_env.get(CreateCommentUseCase)
        root = await create_comment.execute(CreateCommentRequest(text="hello"))
        reply = await create_comment.execute(
            CreateCommentRequest(text="reply", parent_id=root.id)
        )
        return root, reply

    return create


class TestGetCommentsUseCase:
    @pytest.mark.asyncio
    async def test_listing_returns_nested_nodes(self, unit_env, thread):
        root, reply = await thread()
        get_comments = await unit_env.get(GetCommentsUseCase)

        forest = await get_comments.execute(GetCommentsRequest())

        assert [node["id"] for node in forest] == [root.id]
        assert [child["id"] for child in forest[0]["children"]] == [reply.id]
        assert forest[0]["children"][0]["children"] == []

    @pytest.mark.asyncio
    async def test_search_switches_to_search_flow(self, unit_env, thread):
        """A non-empty search returns the flat matches."""
        _, reply = await thread()
        get_comments = await unit_env.get(GetCommentsUseCase)

        forest = await get_comments.execute(GetCommentsRequest(search="reply"))

        assert [node["id"] for node in forest] == [reply.id]

    @pytest.mark.asyncio
    async def test_search_within_parent(self, unit_env, thread):
        root, reply = await thread()
        get_comments = await unit_env.get(GetCommentsUseCase)

        forest = await get_comments.execute(
            GetCommentsRequest(parent=root.id, search="REPLY")
        )

        assert [node["id"] for node in forest] == [root.id]
        assert [child["id"] for child in forest[0]["children"]] == [reply.id]


class TestDeleteCommentsUseCase:
    @pytest.mark.asyncio
    async def test_delete_hides_thread(self, unit_env, thread):
        root, _ = await thread()
        delete_comments = await unit_env.get(DeleteCommentsUseCase)
        get_comments = await unit_env.get(GetCommentsUseCase)

        await delete_comments.execute(DeleteCommentsRequest(comment_id=root.id))

        assert await get_comments.execute(GetCommentsRequest()) == []
