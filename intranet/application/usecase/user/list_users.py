"""List users use case."""

import math

from pydantic import BaseModel, Field

from intranet.domain.service import AccountService
from intranet.domain.value import Role

from .get_user import AccountItem


class ListUsersRequest(BaseModel):
    """List users request."""

    role: Role | None = None
    page: int = Field(default=1, ge=1)
    page_size: int = Field(default=20, ge=1, le=100)


class ListUsersResponse(BaseModel):
    """List users response."""

    users: list[AccountItem]
    total: int
    page: int
    page_size: int
    total_pages: int


class ListUsersUseCase:
    """Use case for the admin user directory."""

    def __init__(self, account_service: AccountService) -> None:
        """Initialize list users use case.

        Args:
            account_service: Account domain service
        """
        self.account_service = account_service

    async def execute(self, request: ListUsersRequest) -> ListUsersResponse:
        """Execute list users flow.

        Args:
            request: Paging and optional role filter

        Returns:
            One page of accounts ordered by email
        """
        accounts, total = await self.account_service.list_accounts(
            role=request.role,
            limit=request.page_size,
            offset=(request.page - 1) * request.page_size,
        )
        return ListUsersResponse(
            users=[AccountItem.from_account(account) for account in accounts],
            total=total,
            page=request.page,
            page_size=request.page_size,
            total_pages=math.ceil(total / request.page_size),
        )
