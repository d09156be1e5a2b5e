"""Identity reconciliation domain service.

Maps a verified external identity (email + display name) onto the internal
account, honoring the domain allow-list, pending invitations and
pre-provisioned accounts.
"""

from datetime import datetime
from typing import Optional
from uuid import uuid4

import logfire

from intranet.domain.error import StorageConflictError
from intranet.domain.model import Account, Invitation
from intranet.domain.repository import AccountRepository, InvitationRepository
from intranet.domain.value import (
    PLACEHOLDER_FIRST_NAME,
    Email,
    InvitationId,
    PersonName,
    ReconcileOutcome,
    Role,
    UserId,
)
from intranet.domain.value.common import ValueObject
from intranet.util.clock import Clock

from .base import Service
from .domain_policy import DomainPolicy
from .executor import PerEmailExecutor


class ReconcileResult(ValueObject):
    """Outcome of one reconciliation.

    ``account`` is None only when the outcome is ``DOMAIN_REJECTED``.
    """

    account: Optional[Account] = None
    outcome: ReconcileOutcome
    consumed_invitation_id: Optional[InvitationId] = None

    @property
    def accepted(self) -> bool:
        return self.outcome != ReconcileOutcome.DOMAIN_REJECTED


def _later(previous: datetime | None, now: datetime) -> datetime:
    """Never move a timestamp backwards."""
    if previous is None or previous < now:
        return now
    return previous


class IdentityReconciler(Service):
    """The single place where sign-ins and bootstrap mutate accounts.

    Every mutation runs through ``PerEmailExecutor``: serialized per email,
    one transaction per attempt, re-run from the lookup on transient
    storage errors.
    """

    def __init__(
        self,
        account_repository: AccountRepository,
        invitation_repository: InvitationRepository,
        executor: PerEmailExecutor,
        domain_policy: DomainPolicy,
        clock: Clock,
        default_role: Role = Role.EMPLOYEE,
    ) -> None:
        """Initialize identity reconciler.

        Args:
            account_repository: Account repository
            invitation_repository: Invitation repository
            executor: Per-email serialized executor
            domain_policy: Email domain allow-list
            clock: Time source
            default_role: Role for new accounts without an invitation
        """
        self.account_repository = account_repository
        self.invitation_repository = invitation_repository
        self.executor = executor
        self.domain_policy = domain_policy
        self.clock = clock
        self.default_role = default_role

    async def reconcile(self, email: str, display_name: str | None) -> ReconcileResult:
        """Turn a verified external identity into the authoritative account.

        Args:
            email: Email verified by the identity provider
            display_name: Display name from the identity provider

        Returns:
            The persisted account and what happened to it. A domain
            rejection is returned, not raised, and leaves no trace in storage.

        Raises:
            InvalidIdentityError: If email is empty or malformed
            TransientStorageError: If storage kept failing across all attempts
        """
        with logfire.span("identity_reconciler.reconcile", email=email):
            normalized = Email.parse(email)

            if not self.domain_policy.is_allowed(normalized):
                logfire.warn(
                    "Sign-in rejected by domain policy",
                    email=normalized.root,
                    allowed_domain=self.domain_policy.allowed_domain,
                )
                return ReconcileResult(outcome=ReconcileOutcome.DOMAIN_REJECTED)

            async def attempt() -> ReconcileResult:
                return await self._reconcile_once(normalized, display_name)

            result = await self.executor.run(normalized, attempt, name="reconcile")

            logfire.info(
                "Identity reconciled",
                email=normalized.root,
                user_id=str(result.account.id),
                outcome=result.outcome.value,
                role=result.account.role.value,
                consumed_invitation_id=(
                    str(result.consumed_invitation_id)
                    if result.consumed_invitation_id
                    else None
                ),
            )
            return result

    async def ensure_admin(self, email: str) -> Account:
        """Make sure ``email`` has an Admin account.

        Creates a pre-provisioned Admin account with a placeholder name when
        none exists (the first sign-in fills in the real name), or promotes an
        existing account. Idempotent. The domain policy is not applied.

        Args:
            email: Admin email from configuration

        Returns:
            The Admin account

        Raises:
            InvalidIdentityError: If email is empty or malformed
        """
        with logfire.span("identity_reconciler.ensure_admin", email=email):
            normalized = Email.parse(email)

            async def attempt() -> Account:
                return await self._ensure_admin_once(normalized)

            return await self.executor.run(normalized, attempt, name="ensure_admin")

    async def _reconcile_once(
        self, email: Email, display_name: str | None
    ) -> ReconcileResult:
        now = self.clock.now()
        account = await self.account_repository.find_by_email(email)

        if account is None:
            return await self._create(
                email, PersonName.from_display_name(display_name), now
            )
        if account.is_provisioned:
            return await self._activate(account, display_name, now)
        return await self._reauthenticate(account, now)

    async def _create(
        self, email: Email, name: PersonName, now: datetime
    ) -> ReconcileResult:
        invitation = await self._find_invitation(email, now)
        role = invitation.intended_role if invitation else self.default_role

        account = Account(
            id=UserId(uuid4()),
            email=email,
            first_name=name.first_name,
            last_name=name.last_name,
            role=role,
            is_active=True,
            is_provisioned=False,
            invited_by=invitation.invited_by if invitation else None,
            invited_at=invitation.invited_at if invitation else None,
            activated_at=now,
            last_login_at=now,
            created_at=now,
            updated_at=now,
        )
        saved = await self.account_repository.insert(account)

        if invitation:
            await self._consume(invitation, now)

        return ReconcileResult(
            account=saved,
            outcome=ReconcileOutcome.CREATED,
            consumed_invitation_id=invitation.id if invitation else None,
        )

    async def _activate(
        self, account: Account, display_name: str | None, now: datetime
    ) -> ReconcileResult:
        # Admin-assigned role is authoritative; invitations are not consulted
        changes: dict = {
            "is_provisioned": False,
            "activated_at": _later(account.activated_at, now),
            "last_login_at": _later(account.last_login_at, now),
            "updated_at": _later(account.updated_at, now),
        }
        if account.first_name == PLACEHOLDER_FIRST_NAME and display_name:
            name = PersonName.from_display_name(display_name)
            changes["first_name"] = name.first_name
            changes["last_name"] = name.last_name

        saved = await self.account_repository.update(account.model_copy(update=changes))
        return ReconcileResult(account=saved, outcome=ReconcileOutcome.ACTIVATED)

    async def _reauthenticate(self, account: Account, now: datetime) -> ReconcileResult:
        changes: dict = {
            "last_login_at": _later(account.last_login_at, now),
            "updated_at": _later(account.updated_at, now),
        }

        invitation = await self._find_invitation(account.email, now)
        if invitation and account.role != Role.ADMIN:
            changes["role"] = invitation.intended_role
            changes["invited_by"] = invitation.invited_by
            changes["invited_at"] = invitation.invited_at
        elif invitation:
            logfire.info(
                "Invitation consumed without changing admin role",
                user_id=str(account.id),
                invitation_id=str(invitation.id),
                intended_role=invitation.intended_role.value,
            )

        saved = await self.account_repository.update(account.model_copy(update=changes))

        if invitation:
            await self._consume(invitation, now)

        return ReconcileResult(
            account=saved,
            outcome=ReconcileOutcome.REAUTHENTICATED,
            consumed_invitation_id=invitation.id if invitation else None,
        )

    async def _ensure_admin_once(self, email: Email) -> Account:
        now = self.clock.now()
        account = await self.account_repository.find_by_email(email)

        if account is None:
            created = await self.account_repository.insert(
                Account(
                    id=UserId(uuid4()),
                    email=email,
                    first_name=PLACEHOLDER_FIRST_NAME,
                    last_name="",
                    role=Role.ADMIN,
                    is_active=True,
                    is_provisioned=True,
                    created_at=now,
                    updated_at=now,
                )
            )
            logfire.info(
                "Admin account provisioned", email=email.root, user_id=str(created.id)
            )
            return created

        if account.role == Role.ADMIN:
            logfire.info(
                "Admin account already present",
                email=email.root,
                user_id=str(account.id),
            )
            return account

        promoted = await self.account_repository.update(
            account.model_copy(
                update={"role": Role.ADMIN, "updated_at": _later(account.updated_at, now)}
            )
        )
        logfire.info(
            "Account promoted to admin",
            email=email.root,
            user_id=str(promoted.id),
            previous_role=account.role.value,
        )
        return promoted

    async def _find_invitation(self, email: Email, now: datetime) -> Invitation | None:
        invitations = await self.invitation_repository.find_active_for_email(email, now)
        if not invitations:
            return None

        chosen = max(invitations, key=lambda inv: (inv.invited_at, str(inv.id)))
        if len(invitations) > 1:
            logfire.warn(
                "Multiple active invitations for email",
                email=email.root,
                count=len(invitations),
                chosen_invitation_id=str(chosen.id),
            )
        return chosen

    async def _consume(self, invitation: Invitation, now: datetime) -> None:
        consumed = await self.invitation_repository.mark_used(invitation.id, now)
        if not consumed:
            # Another sign-in got there first; rerun the whole attempt without it
            raise StorageConflictError(
                f"Invitation {invitation.id} was consumed concurrently"
            )
