"""Reconciliation against PostgreSQL."""

import asyncio
from datetime import timedelta
from uuid import uuid4

import pytest

from intranet.domain.repository import AccountRepository, InvitationRepository
from intranet.domain.service import IdentityReconciler
from intranet.domain.value import Email, ReconcileOutcome, Role
from intranet.util.clock import Clock
from tests.conftest import make_account, make_invitation
from tests.harness import create_app_container_fixture

pytestmark = pytest.mark.integration

app_container = create_app_container_fixture(unmock={"persistence"})


class TestReconcilePostgres:
    """Sign-ins over real transactions."""

    @pytest.mark.asyncio
    async def test_racing_sign_ins_consume_invitation_once(self, app_container):
        """Two sessions racing on one email end with one account and one use."""
        # Arrange
        email = f"race-{uuid4().hex[:12]}@acme.com"
        async with app_container() as setup:
            account_repo = await setup.get(AccountRepository)
            invitation_repo = await setup.get(InvitationRepository)
            clock = await setup.get(Clock)
            admin = await account_repo.insert(
                make_account(
                    f"admin-{uuid4().hex[:12]}@acme.com", Role.ADMIN, now=clock.now()
                )
            )
            invitation = await invitation_repo.insert(
                make_invitation(
                    email,
                    Role.MANAGER,
                    admin.id,
                    invited_at=clock.now() - timedelta(minutes=1),
                )
            )

        async def sign_in():
            async with app_container() as request:
                reconciler = await request.get(IdentityReconciler)
                return await reconciler.reconcile(email, "Race Condition")

        # Act
        results = await asyncio.gather(sign_in(), sign_in())

        # Assert
        assert sorted(r.outcome.value for r in results) == [
            ReconcileOutcome.CREATED.value,
            ReconcileOutcome.REAUTHENTICATED.value,
        ]
        assert all(r.account.role == Role.MANAGER for r in results)

        async with app_container() as check:
            account_repo = await check.get(AccountRepository)
            invitation_repo = await check.get(InvitationRepository)
            account = await account_repo.find_by_email(Email(email))
            assert account.role == Role.MANAGER
            assert (await invitation_repo.find_by_id(invitation.id)).is_used is True
