"""Create invitation use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from intranet.application.usecase.base import BaseUseCase
from intranet.config import InvitationSettings
from intranet.domain.model import Invitation
from intranet.domain.service import InvitationService
from intranet.domain.value import Role, UserId


class InvitationItem(BaseModel):
    """Invitation as exposed to API clients."""

    invitation_id: str
    email: str
    intended_role: Role
    invited_by: str
    invited_at: datetime
    expires_at: datetime
    is_used: bool
    used_at: datetime | None = None

    @classmethod
    def from_invitation(cls, invitation: Invitation) -> "InvitationItem":
        return cls(
            invitation_id=str(invitation.id),
            email=invitation.email.root,
            intended_role=invitation.intended_role,
            invited_by=str(invitation.invited_by),
            invited_at=invitation.invited_at,
            expires_at=invitation.expires_at,
            is_used=invitation.is_used,
            used_at=invitation.used_at,
        )


class CreateInvitationRequest(BaseModel):
    """Create invitation request."""

    inviter_id: str  # From authenticated admin
    email: str = Field(min_length=3, max_length=255)
    intended_role: Role = Role.EMPLOYEE
    expiration_days: int | None = None  # Defaults from settings


class CreateInvitationUseCase(BaseUseCase[CreateInvitationRequest, InvitationItem]):
    """Use case for inviting someone to sign in with a given role."""

    def __init__(
        self,
        invitation_service: InvitationService,
        invitation_settings: InvitationSettings,
    ) -> None:
        """Initialize create invitation use case.

        Args:
            invitation_service: Invitation domain service
            invitation_settings: Invitation settings
        """
        self.invitation_service = invitation_service
        self.invitation_settings = invitation_settings

    async def execute(self, request: CreateInvitationRequest) -> InvitationItem:
        """Execute create invitation flow.

        Raises:
            InvalidIdentityError: If email is malformed
            BusinessRuleViolationError: If expiration is out of range
            DomainNotAllowedError: If email is outside the allowed domain
            NotFoundError: If the inviter doesn't exist
            NotAuthorizedError: If the inviter is not an Admin
            AlreadyExistsError: If an account or active invitation exists
        """
        expiration_days = (
            request.expiration_days
            if request.expiration_days is not None
            else self.invitation_settings.default_expiration_days
        )
        invitation = await self.invitation_service.create_invitation(
            inviter_id=UserId(UUID(request.inviter_id)),
            email=request.email,
            intended_role=request.intended_role,
            expiration_days=expiration_days,
        )
        return InvitationItem.from_invitation(invitation)
