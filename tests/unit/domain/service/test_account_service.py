"""Unit tests for AccountService."""

from uuid import uuid4

import pytest

from intranet.domain.error import (
    AlreadyExistsError,
    DomainNotAllowedError,
    InvalidIdentityError,
    NotAuthorizedError,
    NotFoundError,
    SelfRoleChangeError,
)
from intranet.domain.repository import AccountRepository
from intranet.domain.service import AccountService, IdentityReconciler
from intranet.domain.value import ReconcileOutcome, Role, UserId
from intranet.util.clock import Clock
from tests.conftest import make_account, make_settings
from tests.harness import create_env_fixture

unit_env = create_env_fixture(settings=make_settings(allowed_domain="acme.com"))


class TestProvisionAccount:
    """Tests for provision_account method."""

    @pytest.mark.asyncio
    async def test_provision_creates_flagged_account(self, unit_env):
        """A provisioned account waits for its owner's first sign-in."""
        # Arrange
        account_service = await unit_env.get(AccountService)

        # Act
        account = await account_service.provision_account(
            "Grace@Acme.com", " Grace ", "Hopper", Role.MANAGER, "Engineering"
        )

        # Assert
        assert account.email.root == "grace@acme.com"
        assert account.first_name == "Grace"
        assert account.role == Role.MANAGER
        assert account.is_provisioned is True
        assert account.activated_at is None
        assert account.department == "Engineering"

    @pytest.mark.asyncio
    async def test_provisioned_role_survives_first_sign_in(self, unit_env):
        """The owner's first sign-in activates the account with the set role."""
        # Arrange
        account_service = await unit_env.get(AccountService)
        reconciler = await unit_env.get(IdentityReconciler)
        provisioned = await account_service.provision_account(
            "grace@acme.com", "Grace", "Hopper", Role.MANAGER
        )

        # Act
        result = await reconciler.reconcile("grace@acme.com", "Grace B. Hopper")

        # Assert
        assert result.outcome == ReconcileOutcome.ACTIVATED
        assert result.account.id == provisioned.id
        assert result.account.role == Role.MANAGER

    @pytest.mark.asyncio
    async def test_provision_duplicate_raises(self, unit_env):
        """Provisioning an email that already has an account fails."""
        # Arrange
        account_service = await unit_env.get(AccountService)
        await account_service.provision_account("dup@acme.com", "A", "B", Role.EMPLOYEE)

        # Act & Assert
        with pytest.raises(AlreadyExistsError):
            await account_service.provision_account(
                "DUP@acme.com", "A", "B", Role.EMPLOYEE
            )

    @pytest.mark.asyncio
    async def test_provision_outside_domain_raises(self, unit_env):
        """Accounts can only be provisioned on the allowed domain."""
        # Arrange
        account_service = await unit_env.get(AccountService)

        # Act & Assert
        with pytest.raises(DomainNotAllowedError):
            await account_service.provision_account(
                "x@blocked.com", "X", "Y", Role.EMPLOYEE
            )

    @pytest.mark.asyncio
    async def test_provision_malformed_email_raises(self, unit_env):
        """Malformed emails are rejected before anything else."""
        # Arrange
        account_service = await unit_env.get(AccountService)

        # Act & Assert
        with pytest.raises(InvalidIdentityError):
            await account_service.provision_account("nope", "X", "Y", Role.EMPLOYEE)


class TestUpdateRole:
    """Tests for update_role method."""

    @pytest.mark.asyncio
    async def test_admin_changes_role(self, unit_env):
        """An admin can change another account's role."""
        # Arrange
        account_service = await unit_env.get(AccountService)
        account_repo = await unit_env.get(AccountRepository)
        clock = await unit_env.get(Clock)
        admin = await account_repo.insert(
            make_account("admin@acme.com", Role.ADMIN, now=clock.now())
        )
        target = await account_repo.insert(
            make_account("emp@acme.com", Role.EMPLOYEE, now=clock.now())
        )
        clock.advance(minutes=1)

        # Act
        updated = await account_service.update_role(admin.id, target.id, Role.MANAGER)

        # Assert
        assert updated.role == Role.MANAGER
        assert updated.updated_at == clock.now()
        assert (await account_repo.find_by_id(target.id)).role == Role.MANAGER

    @pytest.mark.asyncio
    async def test_non_admin_cannot_change_roles(self, unit_env):
        """Managers and employees may not change roles."""
        # Arrange
        account_service = await unit_env.get(AccountService)
        account_repo = await unit_env.get(AccountRepository)
        clock = await unit_env.get(Clock)
        manager = await account_repo.insert(
            make_account("mgr@acme.com", Role.MANAGER, now=clock.now())
        )
        target = await account_repo.insert(
            make_account("emp@acme.com", Role.EMPLOYEE, now=clock.now())
        )

        # Act & Assert
        with pytest.raises(NotAuthorizedError):
            await account_service.update_role(manager.id, target.id, Role.ADMIN)

    @pytest.mark.asyncio
    async def test_admin_cannot_demote_self(self, unit_env):
        """Admins cannot drop their own admin role."""
        # Arrange
        account_service = await unit_env.get(AccountService)
        account_repo = await unit_env.get(AccountRepository)
        clock = await unit_env.get(Clock)
        admin = await account_repo.insert(
            make_account("admin@acme.com", Role.ADMIN, now=clock.now())
        )

        # Act & Assert
        with pytest.raises(SelfRoleChangeError):
            await account_service.update_role(admin.id, admin.id, Role.EMPLOYEE)
        assert (await account_repo.find_by_id(admin.id)).role == Role.ADMIN

    @pytest.mark.asyncio
    async def test_unknown_target_raises(self, unit_env):
        """Changing the role of a missing account fails."""
        # Arrange
        account_service = await unit_env.get(AccountService)
        account_repo = await unit_env.get(AccountRepository)
        clock = await unit_env.get(Clock)
        admin = await account_repo.insert(
            make_account("admin@acme.com", Role.ADMIN, now=clock.now())
        )

        # Act & Assert
        with pytest.raises(NotFoundError):
            await account_service.update_role(admin.id, UserId(uuid4()), Role.MANAGER)


class TestUpdateProfile:
    """Tests for update_profile method."""

    @pytest.mark.asyncio
    async def test_only_given_fields_change(self, unit_env):
        """Omitted fields keep their values; role is untouched."""
        # Arrange
        account_service = await unit_env.get(AccountService)
        account_repo = await unit_env.get(AccountRepository)
        clock = await unit_env.get(Clock)
        account = await account_repo.insert(
            make_account(
                "kim@acme.com",
                Role.MANAGER,
                first_name="Kim",
                last_name="Lee",
                now=clock.now(),
            )
        )

        # Act
        updated = await account_service.update_profile(
            account.id, department="Research", job_title="Lead"
        )

        # Assert
        assert updated.first_name == "Kim"
        assert updated.last_name == "Lee"
        assert updated.department == "Research"
        assert updated.job_title == "Lead"
        assert updated.role == Role.MANAGER

    @pytest.mark.asyncio
    async def test_missing_account_raises(self, unit_env):
        """Updating a missing account fails."""
        # Arrange
        account_service = await unit_env.get(AccountService)

        # Act & Assert
        with pytest.raises(NotFoundError):
            await account_service.update_profile(UserId(uuid4()), first_name="X")


class TestListAccounts:
    """Tests for list_accounts method."""

    @pytest.mark.asyncio
    async def test_list_returns_page_and_total(self, unit_env):
        """Listing returns the page and the unpaged total."""
        # Arrange
        account_service = await unit_env.get(AccountService)
        account_repo = await unit_env.get(AccountRepository)
        clock = await unit_env.get(Clock)
        for i in range(3):
            await account_repo.insert(
                make_account(f"user{i}@acme.com", Role.EMPLOYEE, now=clock.now())
            )
        await account_repo.insert(
            make_account("boss@acme.com", Role.ADMIN, now=clock.now())
        )

        # Act
        page, total = await account_service.list_accounts(Role.EMPLOYEE, limit=2)

        # Assert
        assert [a.email.root for a in page] == ["user0@acme.com", "user1@acme.com"]
        assert total == 3
