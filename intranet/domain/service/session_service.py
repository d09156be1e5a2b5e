"""Session token domain service."""

import logfire

from intranet.config import AuthSettings
from intranet.domain.model import Account
from intranet.util.clock import Clock
from intranet.util.jwt import TokenPayload, create_token, verify_token

from .base import Service


class SessionService(Service):
    """Issues and verifies session tokens for reconciled accounts.

    Tokens carry identity only; authorization always re-reads the role.
    """

    def __init__(self, auth_settings: AuthSettings, clock: Clock) -> None:
        """Initialize session service.

        Args:
            auth_settings: Authentication settings
            clock: Time source
        """
        self.auth_settings = auth_settings
        self.clock = clock

    def issue(self, account: Account) -> str:
        """Issue a session token for an account.

        Args:
            account: Reconciled account

        Returns:
            JWT token string
        """
        with logfire.span("session_service.issue", user_id=str(account.id)):
            token = create_token(
                str(account.id), account.email.root, self.auth_settings, self.clock.now()
            )
            logfire.info("Session issued", user_id=str(account.id))
            return token

    def verify(self, token: str) -> TokenPayload:
        """Verify a session token and extract its payload.

        Args:
            token: JWT token string

        Returns:
            Token payload

        Raises:
            JWTError: If token is invalid or expired
        """
        with logfire.span("session_service.verify"):
            try:
                return verify_token(token, self.auth_settings)
            except Exception as e:
                logfire.warn("Session verification failed", error=str(e))
                raise

    @property
    def max_age_seconds(self) -> int:
        return self.auth_settings.session_expiry_hours * 60 * 60
