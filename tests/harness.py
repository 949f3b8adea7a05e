"""Test harness for unit and integration tests.

Integration tests assume postgres is already running and migrated, with
``DATABASE__URL`` pointing at it.
"""

import pytest_asyncio

from blog.config import Settings
from blog.util.di import Component
from tests.di import build_test_container


def create_env_fixture(
    unmock: set[Component] | None = None, settings: Settings | None = None
):
    """Factory for creating test environment fixtures.

    Creates a pytest fixture that:
    - Builds a test container with specified unmocking
    - Yields request-scoped container for service access
    - Closes the container, and with it any engine, afterwards

    Args:
        unmock: Components to use real implementations for
        settings: Settings to inject instead of the test defaults

    Returns:
        Pytest fixture function that yields AsyncContainer

    Usage:
        # Unit tests - everything mocked, no docker needed
        unit_env = create_env_fixture()

        # Integration tests - real persistence, assumes postgres running
        integration_env = create_env_fixture(unmock={"persistence"})

        @pytest.mark.asyncio
        async def test_create_post(unit_env):
            post_service = await unit_env.get(PostService)
            post = await post_service.create_post(identity, "Title", "Body")
            assert post.id is not None
    """

    @pytest_asyncio.fixture
    async def _test_environment():
        container = build_test_container(unmock=unmock or set(), settings=settings)

        # Open request-scoped context
        async with container() as request_container:
            yield request_container

        await container.close()

    return _test_environment
