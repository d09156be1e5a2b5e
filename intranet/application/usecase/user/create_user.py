"""Create (pre-provision) user use case."""

from pydantic import BaseModel, Field

from intranet.domain.service import AccountService
from intranet.domain.value import Role

from .get_user import AccountItem


class CreateUserRequest(BaseModel):
    """Create user request."""

    email: str = Field(min_length=3, max_length=255)
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(default="", max_length=100)
    role: Role = Role.EMPLOYEE
    department: str | None = Field(default=None, max_length=100)
    job_title: str | None = Field(default=None, max_length=100)


class CreateUserUseCase:
    """Use case for pre-provisioning an account.

    The account keeps the role given here when its owner first signs in.
    """

    def __init__(self, account_service: AccountService) -> None:
        """Initialize create user use case.

        Args:
            account_service: Account domain service
        """
        self.account_service = account_service

    async def execute(self, request: CreateUserRequest) -> AccountItem:
        """Execute create user flow.

        Args:
            request: New account details

        Returns:
            The pre-provisioned account

        Raises:
            InvalidIdentityError: If email is malformed
            DomainNotAllowedError: If email is outside the allowed domain
            AlreadyExistsError: If an account with this email exists
        """
        account = await self.account_service.provision_account(
            email=request.email,
            first_name=request.first_name,
            last_name=request.last_name,
            role=request.role,
            department=request.department,
            job_title=request.job_title,
        )
        return AccountItem.from_account(account)
