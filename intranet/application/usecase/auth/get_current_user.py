"""Get current user use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from intranet.domain.error import AccountInactiveError
from intranet.domain.service import AccountService, SessionService
from intranet.domain.value import Email, RequestPrincipal, Role, UserId


class GetCurrentUserRequest(BaseModel):
    """Get current user request."""

    token: str  # Session token from cookie


class GetCurrentUserResponse(BaseModel):
    """Get current user response.

    Reflects the account as stored right now, including its current role.
    """

    user_id: str
    email: str
    first_name: str
    last_name: str
    role: Role
    is_active: bool
    department: str | None
    job_title: str | None
    activated_at: datetime | None
    last_login_at: datetime | None

    def principal(self) -> RequestPrincipal:
        """Immutable principal for authorizing the current request."""
        return RequestPrincipal(
            user_id=UserId(UUID(self.user_id)),
            email=Email(self.email),
            role=self.role,
        )


class GetCurrentUserUseCase:
    """Use case for resolving the session holder."""

    def __init__(
        self,
        session_service: SessionService,
        account_service: AccountService,
    ) -> None:
        """Initialize get current user use case.

        Args:
            session_service: Session token domain service
            account_service: Account domain service
        """
        self.session_service = session_service
        self.account_service = account_service

    async def execute(self, request: GetCurrentUserRequest) -> GetCurrentUserResponse:
        """Execute get current user flow.

        Steps:
        1. Verify session token
        2. Load the account fresh from the store
        3. Refuse inactive accounts

        Args:
            request: Request with session token

        Returns:
            Current account state

        Raises:
            JWTError: If token is invalid or expired
            NotFoundError: If the account no longer exists
            AccountInactiveError: If the account was deactivated
        """
        payload = self.session_service.verify(request.token)

        account = await self.account_service.get_by_id(UserId(UUID(payload.user_id)))
        if not account.is_active:
            raise AccountInactiveError(str(account.id))

        return GetCurrentUserResponse(
            user_id=str(account.id),
            email=account.email.root,
            first_name=account.first_name,
            last_name=account.last_name,
            role=account.role,
            is_active=account.is_active,
            department=account.department,
            job_title=account.job_title,
            activated_at=account.activated_at,
            last_login_at=account.last_login_at,
        )
