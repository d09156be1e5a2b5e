"""Unit tests for ListUsersUseCase."""

import pytest

from intranet.application.usecase.user import ListUsersUseCase
from intranet.application.usecase.user.list_users import ListUsersRequest
from intranet.domain.repository import AccountRepository
from intranet.domain.value import Role
from intranet.util.clock import Clock
from tests.conftest import make_account, make_settings
from tests.harness import create_env_fixture

unit_env = create_env_fixture(settings=make_settings())


class TestListUsersUseCase:
    """Tests for ListUsersUseCase."""

    @pytest.mark.asyncio
    async def test_pagination(self, unit_env):
        """Pages are computed from page and page_size."""
        # Arrange
        use_case = await unit_env.get(ListUsersUseCase)
        account_repo = await unit_env.get(AccountRepository)
        clock = await unit_env.get(Clock)
        for i in range(5):
            await account_repo.insert(make_account(f"u{i}@acme.com", now=clock.now()))

        # Act
        response = await use_case.execute(ListUsersRequest(page=2, page_size=2))

        # Assert
        assert [u.email for u in response.users] == ["u2@acme.com", "u3@acme.com"]
        assert response.total == 5
        assert response.total_pages == 3

    @pytest.mark.asyncio
    async def test_role_filter(self, unit_env):
        """Only accounts with the requested role are listed."""
        # Arrange
        use_case = await unit_env.get(ListUsersUseCase)
        account_repo = await unit_env.get(AccountRepository)
        clock = await unit_env.get(Clock)
        await account_repo.insert(make_account("a@acme.com", Role.ADMIN, now=clock.now()))
        await account_repo.insert(make_account("e@acme.com", now=clock.now()))

        # Act
        response = await use_case.execute(ListUsersRequest(role=Role.ADMIN))

        # Assert
        assert [u.email for u in response.users] == ["a@acme.com"]
        assert response.total == 1

    @pytest.mark.asyncio
    async def test_empty(self, unit_env):
        """No accounts means no pages."""
        # Arrange
        use_case = await unit_env.get(ListUsersUseCase)

        # Act
        response = await use_case.execute(ListUsersRequest())

        # Assert
        assert response.users == []
        assert response.total_pages == 0
