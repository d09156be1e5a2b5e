"""Core DI providers (non-mockable)."""

from dishka import Scope, provide

from intranet.config import AuthSettings, IdentitySettings, InvitationSettings, Settings
from intranet.util.clock import Clock
from intranet.util.di.base import ProviderBase
from intranet.util.locking import KeyedLock


class ProdConfigProvider(ProviderBase):
    """Production config provider - concrete, no mocks needed.

    Settings are loaded from environment variables and .env file automatically.
    """

    @provide(scope=Scope.APP)
    def provide_settings(self) -> Settings:
        """Provide application settings from environment."""
        return Settings()

    @provide(scope=Scope.APP)
    def provide_auth_settings(self, settings: Settings) -> AuthSettings:
        """Provide auth settings."""
        return settings.auth

    @provide(scope=Scope.APP)
    def provide_identity_settings(self, settings: Settings) -> IdentitySettings:
        """Provide identity settings."""
        return settings.identity

    @provide(scope=Scope.APP)
    def provide_invitation_settings(self, settings: Settings) -> InvitationSettings:
        """Provide invitation settings."""
        return settings.invitations

    @provide(scope=Scope.APP)
    def provide_clock(self) -> Clock:
        """Provide UTC time source."""
        return Clock()

    @provide(scope=Scope.APP)
    def provide_keyed_lock(self) -> KeyedLock:
        """Provide the process-wide per-email lock registry."""
        return KeyedLock()
