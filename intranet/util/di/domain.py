"""Domain layer DI providers."""

from dishka import Scope, provide

from intranet.config import AuthSettings, IdentitySettings, InvitationSettings
from intranet.domain.repository import (
    AccountRepository,
    InvitationRepository,
    UnitOfWork,
)
from intranet.domain.service import (
    AccountService,
    DomainPolicy,
    IdentityReconciler,
    InvitationService,
    PerEmailExecutor,
    SessionService,
)
from intranet.domain.value import Role
from intranet.util.clock import Clock
from intranet.util.di.base import ProviderBase
from intranet.util.locking import KeyedLock


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide(scope=Scope.APP)
    def get_domain_policy(self, identity_settings: IdentitySettings) -> DomainPolicy:
        """Provide email domain allow-list."""
        return DomainPolicy(allowed_domain=identity_settings.allowed_domain)

    @provide
    def get_executor(
        self,
        keyed_lock: KeyedLock,
        unit_of_work: UnitOfWork,
        identity_settings: IdentitySettings,
    ) -> PerEmailExecutor:
        """Provide per-email serialized executor."""
        return PerEmailExecutor(
            keyed_lock=keyed_lock,
            unit_of_work=unit_of_work,
            max_attempts=identity_settings.max_attempts,
        )

    @provide
    def get_identity_reconciler(
        self,
        account_repository: AccountRepository,
        invitation_repository: InvitationRepository,
        executor: PerEmailExecutor,
        domain_policy: DomainPolicy,
        clock: Clock,
        identity_settings: IdentitySettings,
    ) -> IdentityReconciler:
        """Provide identity reconciliation domain service."""
        return IdentityReconciler(
            account_repository=account_repository,
            invitation_repository=invitation_repository,
            executor=executor,
            domain_policy=domain_policy,
            clock=clock,
            default_role=Role(identity_settings.default_role),
        )

    @provide
    def get_account_service(
        self,
        account_repository: AccountRepository,
        executor: PerEmailExecutor,
        domain_policy: DomainPolicy,
        clock: Clock,
    ) -> AccountService:
        """Provide account domain service."""
        return AccountService(
            account_repository=account_repository,
            executor=executor,
            domain_policy=domain_policy,
            clock=clock,
        )

    @provide
    def get_invitation_service(
        self,
        invitation_repository: InvitationRepository,
        account_repository: AccountRepository,
        executor: PerEmailExecutor,
        domain_policy: DomainPolicy,
        clock: Clock,
        invitation_settings: InvitationSettings,
    ) -> InvitationService:
        """Provide invitation domain service."""
        return InvitationService(
            invitation_repository=invitation_repository,
            account_repository=account_repository,
            executor=executor,
            domain_policy=domain_policy,
            clock=clock,
            max_expiration_days=invitation_settings.max_expiration_days,
        )

    @provide
    def get_session_service(
        self, auth_settings: AuthSettings, clock: Clock
    ) -> SessionService:
        """Provide session token domain service."""
        return SessionService(auth_settings=auth_settings, clock=clock)
