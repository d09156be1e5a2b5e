"""Invitation domain service."""

from datetime import timedelta
from uuid import uuid4

import logfire

from intranet.domain.error import (
    AlreadyExistsError,
    BusinessRuleViolationError,
    DomainNotAllowedError,
    NotAuthorizedError,
    NotFoundError,
)
from intranet.domain.model import Invitation
from intranet.domain.repository import AccountRepository, InvitationRepository
from intranet.domain.value import Email, InvitationId, Role, UserId
from intranet.util.clock import Clock

from .base import Service
from .domain_policy import DomainPolicy
from .executor import PerEmailExecutor


class InvitationService(Service):
    """Domain service for creating and listing invitations.

    Creation is where the one-active-invitation-per-email rule is enforced;
    consumption happens in IdentityReconciler.
    """

    def __init__(
        self,
        invitation_repository: InvitationRepository,
        account_repository: AccountRepository,
        executor: PerEmailExecutor,
        domain_policy: DomainPolicy,
        clock: Clock,
        max_expiration_days: int = 90,
    ) -> None:
        """Initialize invitation service.

        Args:
            invitation_repository: Invitation repository
            account_repository: Account repository
            executor: Per-email serialized executor
            domain_policy: Email domain allow-list
            clock: Time source
            max_expiration_days: Upper bound for an invitation's lifetime
        """
        self.invitation_repository = invitation_repository
        self.account_repository = account_repository
        self.executor = executor
        self.domain_policy = domain_policy
        self.clock = clock
        self.max_expiration_days = max_expiration_days

    async def create_invitation(
        self,
        inviter_id: UserId,
        email: str,
        intended_role: Role,
        expiration_days: int,
    ) -> Invitation:
        """Invite an email to sign in with a given role.

        Args:
            inviter_id: Admin creating the invitation
            email: Invitee email
            intended_role: Role granted on consumption
            expiration_days: Lifetime in days

        Returns:
            Created invitation

        Raises:
            InvalidIdentityError: If email is malformed
            BusinessRuleViolationError: If expiration_days is out of range
            DomainNotAllowedError: If email is outside the allowed domain
            NotFoundError: If the inviter doesn't exist
            NotAuthorizedError: If the inviter is not an Admin
            AlreadyExistsError: If an account or an active invitation exists
        """
        with logfire.span(
            "invitation_service.create_invitation",
            inviter_id=str(inviter_id),
            email=email,
            intended_role=intended_role.value,
            expiration_days=expiration_days,
        ):
            normalized = Email.parse(email)

            if not 1 <= expiration_days <= self.max_expiration_days:
                raise BusinessRuleViolationError(
                    f"Expiration must be between 1 and {self.max_expiration_days} days"
                )
            if not self.domain_policy.is_allowed(normalized):
                logfire.warn(
                    "Invitation rejected by domain policy", email=normalized.root
                )
                raise DomainNotAllowedError(
                    normalized.root, self.domain_policy.allowed_domain
                )

            inviter = await self.account_repository.find_by_id(inviter_id)
            if inviter is None:
                raise NotFoundError("Account", str(inviter_id))
            if inviter.role != Role.ADMIN:
                raise NotAuthorizedError(str(inviter_id), "create invitations")

            async def attempt() -> Invitation:
                now = self.clock.now()
                if await self.account_repository.find_by_email(normalized):
                    raise AlreadyExistsError("Account", normalized.root)
                if await self.invitation_repository.find_active_for_email(
                    normalized, now
                ):
                    raise AlreadyExistsError("Invitation", normalized.root)
                return await self.invitation_repository.insert(
                    Invitation(
                        id=InvitationId(uuid4()),
                        email=normalized,
                        intended_role=intended_role,
                        invited_by=inviter_id,
                        invited_at=now,
                        expires_at=now + timedelta(days=expiration_days),
                    )
                )

            invitation = await self.executor.run(
                normalized, attempt, name="create_invitation"
            )
            logfire.info(
                "Invitation created",
                invitation_id=str(invitation.id),
                inviter_id=str(inviter_id),
                email=normalized.root,
                expires_at=invitation.expires_at.isoformat(),
            )
            return invitation

    async def list_pending(
        self, include_expired: bool = False, limit: int = 20, offset: int = 0
    ) -> tuple[list[Invitation], int]:
        """List unused invitations, newest first.

        Args:
            include_expired: Whether to include expired, unused invitations
            limit: Maximum number of results
            offset: Number of results to skip

        Returns:
            Page of invitations and the total number matching the filter
        """
        with logfire.span(
            "invitation_service.list_pending",
            include_expired=include_expired,
            limit=limit,
            offset=offset,
        ):
            now = self.clock.now()
            invitations = await self.invitation_repository.list_pending(
                now, include_expired, limit, offset
            )
            total = await self.invitation_repository.count_pending(
                now, include_expired
            )
            logfire.info("Pending invitations listed", count=len(invitations), total=total)
            return invitations, total
