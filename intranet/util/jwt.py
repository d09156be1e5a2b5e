"""Session token encoding with PyJWT.

Tokens carry identity only (``sub`` and ``email``). The role is never
encoded; it is read from the account store whenever a token is presented.
"""

from datetime import datetime, timedelta

import jwt
from pydantic import BaseModel, ConfigDict, Field

from intranet.config import AuthSettings

REQUIRED_CLAIMS = ["sub", "email", "exp"]


class TokenPayload(BaseModel):
    """Decoded session claims."""

    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(alias="sub")
    email: str
    exp: datetime


class JWTError(Exception):
    """Token missing, malformed, forged or expired."""


def create_token(
    user_id: str, email: str, settings: AuthSettings, now: datetime
) -> str:
    """Sign a session token valid for ``session_expiry_hours`` from ``now``."""
    claims = {
        "sub": user_id,
        "email": email,
        "exp": now + timedelta(hours=settings.session_expiry_hours),
    }
    return jwt.encode(claims, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_token(token: str, settings: AuthSettings) -> TokenPayload:
    """Decode a session token, checking signature, required claims and expiry.

    Raises:
        JWTError: If the token is invalid or expired
    """
    try:
        claims = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": REQUIRED_CLAIMS},
        )
    except jwt.ExpiredSignatureError as e:
        raise JWTError("Token has expired") from e
    except jwt.InvalidTokenError as e:
        raise JWTError("Invalid token") from e
    return TokenPayload.model_validate(claims)
