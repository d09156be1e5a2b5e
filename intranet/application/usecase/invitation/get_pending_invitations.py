"""Get pending invitations use case."""

import math

from pydantic import BaseModel, Field

from intranet.domain.service import InvitationService

from .create_invitation import InvitationItem


class GetPendingInvitationsRequest(BaseModel):
    """Get pending invitations request."""

    include_expired: bool = False
    page: int = Field(default=1, ge=1)
    page_size: int = Field(default=20, ge=1, le=100)


class GetPendingInvitationsResponse(BaseModel):
    """Get pending invitations response."""

    invitations: list[InvitationItem]
    total: int
    page: int
    page_size: int
    total_pages: int


class GetPendingInvitationsUseCase:
    """Use case for listing invitations nobody has used yet."""

    def __init__(self, invitation_service: InvitationService) -> None:
        """Initialize get pending invitations use case.

        Args:
            invitation_service: Invitation domain service
        """
        self.invitation_service = invitation_service

    async def execute(
        self, request: GetPendingInvitationsRequest
    ) -> GetPendingInvitationsResponse:
        """Execute get pending invitations flow.

        Args:
            request: Paging and expiry filter

        Returns:
            One page of unused invitations, newest first
        """
        invitations, total = await self.invitation_service.list_pending(
            include_expired=request.include_expired,
            limit=request.page_size,
            offset=(request.page - 1) * request.page_size,
        )
        return GetPendingInvitationsResponse(
            invitations=[InvitationItem.from_invitation(inv) for inv in invitations],
            total=total,
            page=request.page,
            page_size=request.page_size,
            total_pages=math.ceil(total / request.page_size),
        )
