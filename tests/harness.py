"""Test harness for unit, integration and E2E tests.

Integration tests assume docker-compose services are already running.
Settings are loaded from environment variables unless given explicitly.
"""

import pytest_asyncio

from intranet.config import Settings
from intranet.util.di import Component
from tests.di import build_test_container


def create_env_fixture(
    unmock: set[Component] | None = None, settings: Settings | None = None
):
    """Factory for creating test environment fixtures.

    Creates a pytest fixture that:
    - Builds a test container with specified unmocking
    - Yields request-scoped container for service access
    - Closes the container afterwards

    Args:
        unmock: Components to use real implementations for
        settings: Settings to use instead of the environment

    Returns:
        Pytest fixture function that yields AsyncContainer

    Usage:
        # Unit tests - everything mocked, no docker needed
        unit_env = create_env_fixture()

        # Integration tests - real persistence, assumes postgres running
        integration_env = create_env_fixture(unmock={"persistence"})

        @pytest.mark.asyncio
        async def test_sign_in(unit_env):
            reconciler = await unit_env.get(IdentityReconciler)
            result = await reconciler.reconcile("ada@acme.com", "Ada")
            assert result.account is not None
    """

    @pytest_asyncio.fixture
    async def _test_environment():
        container = build_test_container(unmock=unmock or set(), settings=settings)

        async with container() as request_container:
            yield request_container

        await container.close()

    return _test_environment


def create_app_container_fixture(
    unmock: set[Component] | None = None, settings: Settings | None = None
):
    """Factory for fixtures yielding the APP-scoped container itself.

    For tests that need several independent request scopes sharing one
    store and one lock registry, as concurrent HTTP requests do.

    Usage:
        app_container = create_app_container_fixture()

        async def test_two_requests(app_container):
            async with app_container() as first, app_container() as second:
                ...
    """

    @pytest_asyncio.fixture
    async def _app_container():
        container = build_test_container(unmock=unmock or set(), settings=settings)
        yield container
        await container.close()

    return _app_container
