"""User administration routes."""

import logging
from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, HTTPException, Query, status
from pydantic import BaseModel, Field

from intranet.application.usecase.auth import GetCurrentUserUseCase
from intranet.application.usecase.user import (
    CreateUserUseCase,
    GetUserUseCase,
    ListUsersUseCase,
    UpdateUserProfileUseCase,
    UpdateUserRoleUseCase,
)
from intranet.application.usecase.user.create_user import CreateUserRequest
from intranet.application.usecase.user.get_user import AccountItem, GetUserRequest
from intranet.application.usecase.user.list_users import (
    ListUsersRequest,
    ListUsersResponse,
)
from intranet.application.usecase.user.update_user_profile import (
    UpdateUserProfileRequest,
)
from intranet.application.usecase.user.update_user_role import UpdateUserRoleRequest
from intranet.domain.value import Role
from intranet.interface.api.dependencies import authenticate, require_admin

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["users"], route_class=DishkaRoute)


class UpdateRoleAPIRequest(BaseModel):
    """API request for changing a user's role."""

    role: Role


class UpdateProfileAPIRequest(BaseModel):
    """API request for updating profile fields."""

    first_name: str | None = Field(default=None, min_length=1, max_length=100)
    last_name: str | None = Field(default=None, max_length=100)
    department: str | None = Field(default=None, max_length=100)
    job_title: str | None = Field(default=None, max_length=100)


@router.get("", response_model=ListUsersResponse)
async def list_users(
    list_users_use_case: FromDishka[ListUsersUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    auth_token: str | None = Cookie(default=None),
    role: Role | None = Query(default=None),
    page: int = Query(default=1, ge=1),
    page_size: int = Query(default=20, ge=1, le=100),
) -> ListUsersResponse:
    """List users (Admin only).

    Args:
        list_users_use_case: List users use case from DI
        get_current_user_use_case: Session resolution use case from DI
        auth_token: Session token from cookie
        role: Optional role filter
        page: Page number, starting at 1
        page_size: Results per page (1-100)

    Returns:
        One page of users ordered by email
    """
    require_admin(await authenticate(auth_token, get_current_user_use_case))
    return await list_users_use_case.execute(
        ListUsersRequest(role=role, page=page, page_size=page_size)
    )


@router.post("", response_model=AccountItem, status_code=status.HTTP_201_CREATED)
async def create_user(
    request: CreateUserRequest,
    create_user_use_case: FromDishka[CreateUserUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    auth_token: str | None = Cookie(default=None),
) -> AccountItem:
    """Pre-provision a user before they first sign in (Admin only).

    Example:
        POST /users
        {"email": "grace@acme.com", "first_name": "Grace", "last_name": "Hopper",
         "role": "Manager"}
    """
    principal = require_admin(await authenticate(auth_token, get_current_user_use_case))
    logger.info(f"Admin {principal.user_id} provisioning {request.email}")
    return await create_user_use_case.execute(request)


@router.get("/{user_id}", response_model=AccountItem)
async def get_user(
    user_id: UUID,
    get_user_use_case: FromDishka[GetUserUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    auth_token: str | None = Cookie(default=None),
) -> AccountItem:
    """Get a user by ID (any signed-in user)."""
    await authenticate(auth_token, get_current_user_use_case)
    return await get_user_use_case.execute(GetUserRequest(user_id=str(user_id)))


@router.put("/{user_id}", response_model=AccountItem)
async def update_user_profile(
    user_id: UUID,
    request: UpdateProfileAPIRequest,
    update_user_profile_use_case: FromDishka[UpdateUserProfileUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    auth_token: str | None = Cookie(default=None),
) -> AccountItem:
    """Update profile fields (Admin, or the user themselves)."""
    principal = await authenticate(auth_token, get_current_user_use_case)
    if principal.user_id != user_id and not principal.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You can only update your own profile",
        )

    return await update_user_profile_use_case.execute(
        UpdateUserProfileRequest(
            user_id=str(user_id),
            first_name=request.first_name,
            last_name=request.last_name,
            department=request.department,
            job_title=request.job_title,
        )
    )


@router.put("/{user_id}/role", response_model=AccountItem)
async def update_user_role(
    user_id: UUID,
    request: UpdateRoleAPIRequest,
    update_user_role_use_case: FromDishka[UpdateUserRoleUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    auth_token: str | None = Cookie(default=None),
) -> AccountItem:
    """Change a user's role (Admin only).

    Admins cannot change their own role; that returns 400.
    """
    principal = require_admin(await authenticate(auth_token, get_current_user_use_case))
    return await update_user_role_use_case.execute(
        UpdateUserRoleRequest(
            updater_id=str(principal.user_id),
            user_id=str(user_id),
            role=request.role,
        )
    )
