"""Account domain service."""

from uuid import uuid4

import logfire

from intranet.domain.error import (
    AlreadyExistsError,
    DomainNotAllowedError,
    NotAuthorizedError,
    NotFoundError,
    SelfRoleChangeError,
)
from intranet.domain.model import Account
from intranet.domain.repository import AccountRepository
from intranet.domain.value import Email, Role, UserId
from intranet.util.clock import Clock

from .base import Service
from .domain_policy import DomainPolicy
from .executor import PerEmailExecutor


class AccountService(Service):
    """Domain service for explicit, admin-driven account operations.

    Writes go through the same per-email executor as sign-in so an admin
    command and a concurrent sign-in for the same email never interleave.
    """

    def __init__(
        self,
        account_repository: AccountRepository,
        executor: PerEmailExecutor,
        domain_policy: DomainPolicy,
        clock: Clock,
    ) -> None:
        """Initialize account service.

        Args:
            account_repository: Account repository
            executor: Per-email serialized executor
            domain_policy: Email domain allow-list
            clock: Time source
        """
        self.account_repository = account_repository
        self.executor = executor
        self.domain_policy = domain_policy
        self.clock = clock

    async def get_by_id(self, user_id: UserId) -> Account:
        """Get account by ID.

        Args:
            user_id: Account ID

        Returns:
            Account

        Raises:
            NotFoundError: If account doesn't exist
        """
        with logfire.span("account_service.get_by_id", user_id=str(user_id)):
            account = await self.account_repository.find_by_id(user_id)
            if not account:
                logfire.warn("Account not found", user_id=str(user_id))
                raise NotFoundError("Account", str(user_id))
            return account

    async def list_accounts(
        self, role: Role | None = None, limit: int = 50, offset: int = 0
    ) -> tuple[list[Account], int]:
        """List accounts ordered by email.

        Args:
            role: Optional role filter
            limit: Maximum number of results
            offset: Number of results to skip

        Returns:
            Page of accounts and the total number matching the filter
        """
        with logfire.span(
            "account_service.list_accounts",
            role=role.value if role else None,
            limit=limit,
            offset=offset,
        ):
            accounts = await self.account_repository.list(role, limit, offset)
            total = await self.account_repository.count(role)
            logfire.info("Accounts listed", count=len(accounts), total=total)
            return accounts, total

    async def provision_account(
        self,
        email: str,
        first_name: str,
        last_name: str,
        role: Role,
        department: str | None = None,
        job_title: str | None = None,
    ) -> Account:
        """Pre-provision an account before its owner ever signs in.

        The account starts with ``is_provisioned=True``; the owner's first
        sign-in activates it and keeps the role assigned here.

        Raises:
            InvalidIdentityError: If email is malformed
            DomainNotAllowedError: If email is outside the allowed domain
            AlreadyExistsError: If an account with this email exists
        """
        with logfire.span(
            "account_service.provision_account", email=email, role=role.value
        ):
            normalized = Email.parse(email)
            if not self.domain_policy.is_allowed(normalized):
                logfire.warn(
                    "Provisioning rejected by domain policy", email=normalized.root
                )
                raise DomainNotAllowedError(
                    normalized.root, self.domain_policy.allowed_domain
                )

            async def attempt() -> Account:
                if await self.account_repository.find_by_email(normalized):
                    raise AlreadyExistsError("Account", normalized.root)
                now = self.clock.now()
                return await self.account_repository.insert(
                    Account(
                        id=UserId(uuid4()),
                        email=normalized,
                        first_name=first_name.strip(),
                        last_name=last_name.strip(),
                        role=role,
                        is_active=True,
                        is_provisioned=True,
                        department=department,
                        job_title=job_title,
                        created_at=now,
                        updated_at=now,
                    )
                )

            account = await self.executor.run(
                normalized, attempt, name="provision_account"
            )
            logfire.info(
                "Account provisioned",
                user_id=str(account.id),
                email=normalized.root,
                role=role.value,
            )
            return account

    async def update_role(
        self, updater_id: UserId, user_id: UserId, role: Role
    ) -> Account:
        """Change an account's role by explicit admin action.

        Args:
            updater_id: Admin performing the change
            user_id: Account to change
            role: New role

        Returns:
            Updated account

        Raises:
            NotFoundError: If either account doesn't exist
            NotAuthorizedError: If the updater is not an Admin
            SelfRoleChangeError: If an Admin tries to change their own role
        """
        with logfire.span(
            "account_service.update_role",
            updater_id=str(updater_id),
            user_id=str(user_id),
            role=role.value,
        ):
            updater = await self.get_by_id(updater_id)
            if updater.role != Role.ADMIN:
                raise NotAuthorizedError(str(updater_id), "change roles")

            target = await self.get_by_id(user_id)

            async def attempt() -> Account:
                current = await self.account_repository.find_by_id(user_id)
                if current is None:
                    raise NotFoundError("Account", str(user_id))
                if (
                    user_id == updater_id
                    and current.role == Role.ADMIN
                    and role != Role.ADMIN
                ):
                    raise SelfRoleChangeError(str(user_id))
                if current.role == role:
                    return current
                return await self.account_repository.update(
                    current.model_copy(
                        update={
                            "role": role,
                            "updated_at": max(current.updated_at, self.clock.now()),
                        }
                    )
                )

            previous_role = target.role
            updated = await self.executor.run(target.email, attempt, name="update_role")
            logfire.info(
                "Account role updated",
                user_id=str(user_id),
                old_role=previous_role.value,
                new_role=updated.role.value,
            )
            return updated

    async def update_profile(
        self,
        user_id: UserId,
        first_name: str | None = None,
        last_name: str | None = None,
        department: str | None = None,
        job_title: str | None = None,
    ) -> Account:
        """Update display and directory fields.

        Only the given (non-None) fields change. Role, email and status flags
        are never touched here.

        Raises:
            NotFoundError: If account doesn't exist
        """
        with logfire.span("account_service.update_profile", user_id=str(user_id)):
            target = await self.get_by_id(user_id)

            changes: dict = {}
            if first_name is not None:
                changes["first_name"] = first_name.strip()
            if last_name is not None:
                changes["last_name"] = last_name.strip()
            if department is not None:
                changes["department"] = department
            if job_title is not None:
                changes["job_title"] = job_title

            async def attempt() -> Account:
                current = await self.account_repository.find_by_id(user_id)
                if current is None:
                    raise NotFoundError("Account", str(user_id))
                if not changes:
                    return current
                return await self.account_repository.update(
                    current.model_copy(
                        update={
                            **changes,
                            "updated_at": max(current.updated_at, self.clock.now()),
                        }
                    )
                )

            updated = await self.executor.run(
                target.email, attempt, name="update_profile"
            )
            logfire.info(
                "Account profile updated",
                user_id=str(user_id),
                fields=sorted(changes),
            )
            return updated
