"""Unit tests for GetCurrentUserUseCase."""

import pytest

from intranet.application.usecase.auth import GetCurrentUserUseCase
from intranet.application.usecase.auth.get_current_user import GetCurrentUserRequest
from intranet.domain.error import AccountInactiveError, NotFoundError
from intranet.domain.repository import AccountRepository
from intranet.domain.service import AccountService, SessionService
from intranet.domain.value import Role
from intranet.util.clock import Clock
from intranet.util.jwt import JWTError
from tests.conftest import make_account, make_settings
from tests.harness import create_env_fixture

unit_env = create_env_fixture(settings=make_settings())


class TestGetCurrentUserUseCase:
    """Tests for GetCurrentUserUseCase."""

    @pytest.mark.asyncio
    async def test_returns_stored_account(self, unit_env):
        """The session resolves to the stored account."""
        # Arrange
        use_case = await unit_env.get(GetCurrentUserUseCase)
        session_service = await unit_env.get(SessionService)
        account_repo = await unit_env.get(AccountRepository)
        clock = await unit_env.get(Clock)
        account = await account_repo.insert(
            make_account("ada@acme.com", Role.MANAGER, now=clock.now())
        )
        token = session_service.issue(account)

        # Act
        response = await use_case.execute(GetCurrentUserRequest(token=token))

        # Assert
        assert response.user_id == str(account.id)
        assert response.email == "ada@acme.com"
        assert response.role == Role.MANAGER
        principal = response.principal()
        assert principal.user_id == account.id
        assert principal.is_admin is False

    @pytest.mark.asyncio
    async def test_role_change_applies_to_existing_session(self, unit_env):
        """A role changed after sign-in is seen on the next request."""
        # Arrange
        use_case = await unit_env.get(GetCurrentUserUseCase)
        session_service = await unit_env.get(SessionService)
        account_service = await unit_env.get(AccountService)
        account_repo = await unit_env.get(AccountRepository)
        clock = await unit_env.get(Clock)
        admin = await account_repo.insert(
            make_account("admin@acme.com", Role.ADMIN, now=clock.now())
        )
        account = await account_repo.insert(
            make_account("ada@acme.com", Role.EMPLOYEE, now=clock.now())
        )
        token = session_service.issue(account)

        # Act
        await account_service.update_role(admin.id, account.id, Role.MANAGER)
        response = await use_case.execute(GetCurrentUserRequest(token=token))

        # Assert
        assert response.role == Role.MANAGER

    @pytest.mark.asyncio
    async def test_inactive_account_raises(self, unit_env):
        """Deactivated accounts lose access even with a valid token."""
        # Arrange
        use_case = await unit_env.get(GetCurrentUserUseCase)
        session_service = await unit_env.get(SessionService)
        account_repo = await unit_env.get(AccountRepository)
        clock = await unit_env.get(Clock)
        account = await account_repo.insert(
            make_account("gone@acme.com", is_active=False, now=clock.now())
        )

        # Act & Assert
        with pytest.raises(AccountInactiveError):
            await use_case.execute(
                GetCurrentUserRequest(token=session_service.issue(account))
            )

    @pytest.mark.asyncio
    async def test_orphaned_token_raises(self, unit_env):
        """A token for an account that no longer exists fails."""
        # Arrange
        use_case = await unit_env.get(GetCurrentUserUseCase)
        session_service = await unit_env.get(SessionService)
        clock = await unit_env.get(Clock)
        never_stored = make_account("ghost@acme.com", now=clock.now())

        # Act & Assert
        with pytest.raises(NotFoundError):
            await use_case.execute(
                GetCurrentUserRequest(token=session_service.issue(never_stored))
            )

    @pytest.mark.asyncio
    async def test_invalid_token_raises(self, unit_env):
        """Garbage tokens fail verification."""
        # Arrange
        use_case = await unit_env.get(GetCurrentUserUseCase)

        # Act & Assert
        with pytest.raises(JWTError):
            await use_case.execute(GetCurrentUserRequest(token="garbage"))
