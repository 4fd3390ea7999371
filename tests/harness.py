"""Test harness for unit and integration tests.

Integration tests assume a PostgreSQL server is already running and
reachable with the configured settings (CONFIG_PATH, .env or environment
variables).
"""

import pytest_asyncio

from commenttree.util.di import Component
from tests.di import build_test_container


def create_env_fixture(unmock: set[Component] | None = None):
    """Factory for creating test environment fixtures.

    Creates a pytest fixture that:
    - Builds a test container with specified unmocking
    - Yields request-scoped container for service access
    - Closes the container afterwards

    Args:
        unmock: Components to use real implementations for

    Returns:
        Pytest fixture function that yields AsyncContainer

    Usage:
        # Unit tests - everything mocked
        unit_env = create_env_fixture()

        # Integration tests - real persistence
        integration_env = create_env_fixture(unmock={"persistence"})

        @pytest.mark.asyncio
        async def test_insert(integration_env):
            repo = await integration_env.get(CommentRepository)
            comment = await repo.insert("hello")
            assert comment.id is not None
    """

    @pytest_asyncio.fixture
    async def _test_environment():
        container = build_test_container(unmock=unmock or set())
        try:
            async with container() as request_container:
                yield request_container
        finally:
            await container.close()

    return _test_environment
