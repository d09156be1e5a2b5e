"""Get user use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from intranet.domain.model import Account
from intranet.domain.service import AccountService
from intranet.domain.value import Role, UserId


class AccountItem(BaseModel):
    """Account as exposed to API clients."""

    user_id: str
    email: str
    first_name: str
    last_name: str
    role: Role
    is_active: bool
    is_provisioned: bool
    department: str | None = None
    job_title: str | None = None
    invited_by: str | None = None
    invited_at: datetime | None = None
    activated_at: datetime | None = None
    last_login_at: datetime | None = None
    created_at: datetime

    @classmethod
    def from_account(cls, account: Account) -> "AccountItem":
        return cls(
            user_id=str(account.id),
            email=account.email.root,
            first_name=account.first_name,
            last_name=account.last_name,
            role=account.role,
            is_active=account.is_active,
            is_provisioned=account.is_provisioned,
            department=account.department,
            job_title=account.job_title,
            invited_by=str(account.invited_by) if account.invited_by else None,
            invited_at=account.invited_at,
            activated_at=account.activated_at,
            last_login_at=account.last_login_at,
            created_at=account.created_at,
        )


class GetUserRequest(BaseModel):
    """Get user request."""

    user_id: str


class GetUserUseCase:
    """Use case for reading one account."""

    def __init__(self, account_service: AccountService) -> None:
        self.account_service = account_service

    async def execute(self, request: GetUserRequest) -> AccountItem:
        """Load an account.

        Raises:
            NotFoundError: If the account doesn't exist
        """
        account = await self.account_service.get_by_id(UserId(UUID(request.user_id)))
        return AccountItem.from_account(account)
