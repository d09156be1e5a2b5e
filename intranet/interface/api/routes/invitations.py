"""Invitation routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Query, status
from pydantic import BaseModel, Field

from intranet.application.usecase.auth import GetCurrentUserUseCase
from intranet.application.usecase.invitation import (
    CreateInvitationUseCase,
    GetPendingInvitationsUseCase,
)
from intranet.application.usecase.invitation.create_invitation import (
    CreateInvitationRequest,
    InvitationItem,
)
from intranet.application.usecase.invitation.get_pending_invitations import (
    GetPendingInvitationsRequest,
    GetPendingInvitationsResponse,
)
from intranet.domain.value import Role
from intranet.interface.api.dependencies import authenticate, require_admin

router = APIRouter(prefix="/users", tags=["invitations"], route_class=DishkaRoute)


class CreateInvitationAPIRequest(BaseModel):
    """API request for inviting someone."""

    email: str = Field(min_length=3, max_length=255)
    role: Role = Role.EMPLOYEE
    expiration_days: int | None = Field(default=None, ge=1)


@router.post(
    "/invite", response_model=InvitationItem, status_code=status.HTTP_201_CREATED
)
async def create_invitation(
    request: CreateInvitationAPIRequest,
    create_invitation_use_case: FromDishka[CreateInvitationUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    auth_token: str | None = Cookie(default=None),
) -> InvitationItem:
    """Invite an email to sign in with a role (Admin only).

    Example:
        POST /users/invite
        {"email": "new@acme.com", "role": "Manager", "expiration_days": 7}
    """
    principal = require_admin(await authenticate(auth_token, get_current_user_use_case))
    return await create_invitation_use_case.execute(
        CreateInvitationRequest(
            inviter_id=str(principal.user_id),
            email=request.email,
            intended_role=request.role,
            expiration_days=request.expiration_days,
        )
    )


@router.get("/invitations", response_model=GetPendingInvitationsResponse)
async def get_pending_invitations(
    get_pending_invitations_use_case: FromDishka[GetPendingInvitationsUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    auth_token: str | None = Cookie(default=None),
    include_expired: bool = Query(default=False),
    page: int = Query(default=1, ge=1),
    page_size: int = Query(default=20, ge=1, le=100),
) -> GetPendingInvitationsResponse:
    """List unused invitations, newest first (Admin only)."""
    require_admin(await authenticate(auth_token, get_current_user_use_case))
    return await get_pending_invitations_use_case.execute(
        GetPendingInvitationsRequest(
            include_expired=include_expired, page=page, page_size=page_size
        )
    )
