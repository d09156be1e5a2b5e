"""Update user profile use case."""

from uuid import UUID

from pydantic import BaseModel, Field

from intranet.domain.service import AccountService
from intranet.domain.value import UserId

from .get_user import AccountItem


class UpdateUserProfileRequest(BaseModel):
    """Update user profile request."""

    user_id: str
    first_name: str | None = Field(default=None, min_length=1, max_length=100)
    last_name: str | None = Field(default=None, max_length=100)
    department: str | None = Field(default=None, max_length=100)
    job_title: str | None = Field(default=None, max_length=100)


class UpdateUserProfileUseCase:
    """Use case for updating a user's profile.

    Names, department and job title can change. Role, email and status
    flags cannot be changed through this use case.
    """

    def __init__(self, account_service: AccountService) -> None:
        """Initialize update user profile use case.

        Args:
            account_service: Account domain service
        """
        self.account_service = account_service

    async def execute(self, request: UpdateUserProfileRequest) -> AccountItem:
        """Execute update user profile flow.

        Raises:
            NotFoundError: If the account doesn't exist
        """
        account = await self.account_service.update_profile(
            user_id=UserId(UUID(request.user_id)),
            first_name=request.first_name,
            last_name=request.last_name,
            department=request.department,
            job_title=request.job_title,
        )
        return AccountItem.from_account(account)
