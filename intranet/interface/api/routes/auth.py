"""Session routes.

This service does not run the Google or Microsoft OAuth exchange. The
adapter that completes it (the sign-in callback handler in front of this
API) resolves ``SignInUseCase`` from the container and calls it with
``SignInRequest(provider, email, display_name)``. When the response is
``accepted`` it sets the session cookie::

    response.set_cookie(
        key=SESSION_COOKIE,
        value=result.token,
        max_age=result.max_age_seconds,
        path="/",
        httponly=True,
        secure=settings.is_production,
    )

Otherwise it ends the sign-in without a session. The routes below only
inspect and clear that cookie.
"""

import logging

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Response
from pydantic import BaseModel

from intranet.application.usecase.auth import GetCurrentUserUseCase
from intranet.application.usecase.auth.get_current_user import (
    GetCurrentUserRequest,
    GetCurrentUserResponse,
)
from intranet.config import Settings
from intranet.domain.error import AccountInactiveError, NotFoundError
from intranet.domain.service import DomainPolicy
from intranet.domain.value import IdentityProvider
from intranet.util.jwt import JWTError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["authentication"], route_class=DishkaRoute)

SESSION_COOKIE = "auth_token"


class SessionStatusResponse(BaseModel):
    """Who holds the session cookie, if anyone."""

    authenticated: bool
    user: GetCurrentUserResponse | None = None


class SignInConfigResponse(BaseModel):
    """What the login page needs to render its buttons."""

    providers: list[IdentityProvider]
    allowed_domain: str | None
    session_expiry_hours: int


class LogoutResponse(BaseModel):
    success: bool


@router.get("/config", response_model=SignInConfigResponse)
async def get_sign_in_config(
    settings: FromDishka[Settings], domain_policy: FromDishka[DomainPolicy]
) -> SignInConfigResponse:
    return SignInConfigResponse(
        providers=list(IdentityProvider),
        allowed_domain=domain_policy.allowed_domain or None,
        session_expiry_hours=settings.auth.session_expiry_hours,
    )


@router.post("/logout", response_model=LogoutResponse)
async def logout(response: Response, settings: FromDishka[Settings]) -> LogoutResponse:
    """Clear the session cookie. Safe to call without one."""
    response.delete_cookie(
        key=SESSION_COOKIE,
        path="/",
        secure=settings.is_production,
        httponly=True,
    )
    return LogoutResponse(success=True)


@router.get("/me", response_model=SessionStatusResponse)
async def get_session_status(
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    auth_token: str | None = Cookie(default=None),
) -> SessionStatusResponse:
    """Resolve the session holder without ever failing.

    Missing, expired or forged tokens, deleted accounts and deactivated
    accounts all answer ``authenticated=false``. The role returned is the
    one stored now, not the one at sign-in.
    """
    if not auth_token:
        return SessionStatusResponse(authenticated=False)

    try:
        user = await get_current_user_use_case.execute(
            GetCurrentUserRequest(token=auth_token)
        )
    except (JWTError, NotFoundError):
        return SessionStatusResponse(authenticated=False)
    except AccountInactiveError:
        logger.info("Session presented for an inactive account")
        return SessionStatusResponse(authenticated=False)

    return SessionStatusResponse(authenticated=True, user=user)
