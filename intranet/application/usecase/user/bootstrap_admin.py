"""Bootstrap admin use case."""

import logfire
from pydantic import BaseModel

from intranet.config import IdentitySettings
from intranet.domain.error import InvalidIdentityError
from intranet.domain.service import IdentityReconciler
from intranet.util.error import ConfigurationError


class BootstrapAdminResponse(BaseModel):
    """Bootstrap admin response."""

    configured: bool
    user_id: str | None = None
    email: str | None = None


class BootstrapAdminUseCase:
    """Use case run once at startup to guarantee the configured admin.

    Goes through the same serialized account-mutation path as sign-in.
    """

    def __init__(
        self,
        identity_reconciler: IdentityReconciler,
        identity_settings: IdentitySettings,
    ) -> None:
        """Initialize bootstrap admin use case.

        Args:
            identity_reconciler: Identity reconciliation domain service
            identity_settings: Identity settings (admin_email)
        """
        self.identity_reconciler = identity_reconciler
        self.identity_settings = identity_settings

    async def execute(self) -> BootstrapAdminResponse:
        """Ensure the configured admin account exists with the Admin role.

        Returns:
            Whether an admin email is configured, and the admin account

        Raises:
            ConfigurationError: If the configured admin email is malformed
        """
        admin_email = (self.identity_settings.admin_email or "").strip()
        if not admin_email:
            logfire.info("No admin email configured, skipping bootstrap")
            return BootstrapAdminResponse(configured=False)

        try:
            account = await self.identity_reconciler.ensure_admin(admin_email)
        except InvalidIdentityError as e:
            raise ConfigurationError("identity.admin_email", str(e)) from e

        return BootstrapAdminResponse(
            configured=True, user_id=str(account.id), email=account.email.root
        )
