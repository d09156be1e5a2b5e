"""Update user role use case."""

from uuid import UUID

from pydantic import BaseModel

from intranet.domain.service import AccountService
from intranet.domain.value import Role, UserId

from .get_user import AccountItem


class UpdateUserRoleRequest(BaseModel):
    """Update user role request."""

    updater_id: str  # From authenticated admin
    user_id: str
    role: Role


class UpdateUserRoleUseCase:
    """Use case for an explicit role change by an admin."""

    def __init__(self, account_service: AccountService) -> None:
        """Initialize update user role use case.

        Args:
            account_service: Account domain service
        """
        self.account_service = account_service

    async def execute(self, request: UpdateUserRoleRequest) -> AccountItem:
        """Execute update user role flow.

        Raises:
            NotFoundError: If either account doesn't exist
            NotAuthorizedError: If the updater is not an Admin
            SelfRoleChangeError: If an Admin tries to drop their own role
        """
        account = await self.account_service.update_role(
            updater_id=UserId(UUID(request.updater_id)),
            user_id=UserId(UUID(request.user_id)),
            role=request.role,
        )
        return AccountItem.from_account(account)
