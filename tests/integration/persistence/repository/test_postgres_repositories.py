"""Integration tests for the PostgreSQL repositories.

Assumes a migrated database reachable through DATABASE__URL.
"""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest

from intranet.domain.error import StorageConflictError
from intranet.domain.repository import (
    AccountRepository,
    InvitationRepository,
    UnitOfWork,
)
from intranet.domain.value import Email, Role
from tests.conftest import make_account, make_invitation
from tests.harness import create_env_fixture

pytestmark = pytest.mark.integration

# Integration test fixture - real persistence
integration_env = create_env_fixture(unmock={"persistence"})


def _unique_email(prefix: str = "user") -> str:
    return f"{prefix}-{uuid4().hex[:12]}@acme.com"


class TestPostgresAccountRepository:
    """Account storage against PostgreSQL."""

    @pytest.mark.asyncio
    async def test_insert_and_find_by_email_ignores_case(self, integration_env):
        """Lookups by email are case-insensitive."""
        # Arrange
        account_repo = await integration_env.get(AccountRepository)
        now = datetime.now(timezone.utc)
        email = _unique_email()
        account = await account_repo.insert(make_account(email, Role.MANAGER, now=now))

        # Act
        found = await account_repo.find_by_email(Email(email.upper()))

        # Assert
        assert found is not None
        assert found.id == account.id
        assert found.role == Role.MANAGER

    @pytest.mark.asyncio
    async def test_duplicate_email_conflicts(self, integration_env):
        """The unique lower(email) index rejects a second account."""
        # Arrange
        account_repo = await integration_env.get(AccountRepository)
        unit_of_work = await integration_env.get(UnitOfWork)
        now = datetime.now(timezone.utc)
        email = _unique_email()
        async with unit_of_work.transaction():
            await account_repo.insert(make_account(email, now=now))

        # Act & Assert
        with pytest.raises(StorageConflictError):
            async with unit_of_work.transaction():
                await account_repo.insert(make_account(email, now=now))

        # The first insert survived the failed attempt
        assert await account_repo.find_by_email(Email(email)) is not None


class TestPostgresInvitationRepository:
    """Invitation storage against PostgreSQL."""

    @pytest.mark.asyncio
    async def test_mark_used_is_conditional(self, integration_env):
        """Only one conditional update consumes an invitation."""
        # Arrange
        account_repo = await integration_env.get(AccountRepository)
        invitation_repo = await integration_env.get(InvitationRepository)
        now = datetime.now(timezone.utc)
        admin = await account_repo.insert(
            make_account(_unique_email("admin"), Role.ADMIN, now=now)
        )
        invitation = await invitation_repo.insert(
            make_invitation(_unique_email("new"), Role.MANAGER, admin.id, invited_at=now)
        )

        # Act
        first = await invitation_repo.mark_used(invitation.id, now)
        second = await invitation_repo.mark_used(invitation.id, now)

        # Assert
        assert first is True
        assert second is False
        stored = await invitation_repo.find_by_id(invitation.id)
        assert stored.is_used is True

    @pytest.mark.asyncio
    async def test_find_active_for_email_newest_first(self, integration_env):
        """Active invitations come back newest first; expired ones never."""
        # Arrange
        account_repo = await integration_env.get(AccountRepository)
        invitation_repo = await integration_env.get(InvitationRepository)
        now = datetime.now(timezone.utc)
        admin = await account_repo.insert(
            make_account(_unique_email("admin"), Role.ADMIN, now=now)
        )
        email = _unique_email("dup")
        older = await invitation_repo.insert(
            make_invitation(
                email, Role.EMPLOYEE, admin.id, invited_at=now - timedelta(days=2)
            )
        )
        newer = await invitation_repo.insert(
            make_invitation(
                email, Role.MANAGER, admin.id, invited_at=now - timedelta(days=1)
            )
        )
        await invitation_repo.insert(
            make_invitation(
                email,
                Role.ADMIN,
                admin.id,
                invited_at=now - timedelta(days=10),
                expires_in=timedelta(days=1),
            )
        )

        # Act
        active = await invitation_repo.find_active_for_email(Email(email), now)

        # Assert
        assert [i.id for i in active] == [newer.id, older.id]
