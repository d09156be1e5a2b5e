"""Request authentication helpers shared by the routes."""

from fastapi import HTTPException, status

from intranet.application.usecase.auth import GetCurrentUserUseCase
from intranet.application.usecase.auth.get_current_user import GetCurrentUserRequest
from intranet.domain.error import NotFoundError
from intranet.domain.value import RequestPrincipal
from intranet.util.jwt import JWTError


async def authenticate(
    auth_token: str | None, get_current_user_use_case: GetCurrentUserUseCase
) -> RequestPrincipal:
    """Resolve the session cookie into a principal read fresh from the store.

    Raises:
        HTTPException: 401 if the cookie is missing, invalid or orphaned
        AccountInactiveError: If the account was deactivated
    """
    if not auth_token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )

    try:
        user = await get_current_user_use_case.execute(
            GetCurrentUserRequest(token=auth_token)
        )
    except (JWTError, NotFoundError) as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
        )

    return user.principal()


def require_admin(principal: RequestPrincipal) -> RequestPrincipal:
    """Allow only Admins through.

    Raises:
        HTTPException: 403 for any other role
    """
    if not principal.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Required role: Admin",
        )
    return principal
