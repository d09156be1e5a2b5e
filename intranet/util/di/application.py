"""Application layer DI providers."""

from dishka import Scope, provide

from intranet.application.usecase.auth import GetCurrentUserUseCase, SignInUseCase
from intranet.application.usecase.invitation import (
    CreateInvitationUseCase,
    GetPendingInvitationsUseCase,
)
from intranet.application.usecase.user import (
    BootstrapAdminUseCase,
    CreateUserUseCase,
    GetUserUseCase,
    ListUsersUseCase,
    UpdateUserProfileUseCase,
    UpdateUserRoleUseCase,
)
from intranet.config import IdentitySettings, InvitationSettings
from intranet.domain.service import (
    AccountService,
    IdentityReconciler,
    InvitationService,
    SessionService,
)
from intranet.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Auth use cases
    @provide(scope=Scope.REQUEST)
    def get_sign_in_use_case(
        self,
        identity_reconciler: IdentityReconciler,
        session_service: SessionService,
    ) -> SignInUseCase:
        """Provide sign-in use case."""
        return SignInUseCase(
            identity_reconciler=identity_reconciler,
            session_service=session_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_current_user_use_case(
        self,
        session_service: SessionService,
        account_service: AccountService,
    ) -> GetCurrentUserUseCase:
        """Provide get current user use case."""
        return GetCurrentUserUseCase(
            session_service=session_service,
            account_service=account_service,
        )

    # User use cases
    @provide(scope=Scope.REQUEST)
    def get_user_use_case(self, account_service: AccountService) -> GetUserUseCase:
        """Provide get user use case."""
        return GetUserUseCase(account_service=account_service)

    @provide(scope=Scope.REQUEST)
    def get_list_users_use_case(
        self, account_service: AccountService
    ) -> ListUsersUseCase:
        """Provide list users use case."""
        return ListUsersUseCase(account_service=account_service)

    @provide(scope=Scope.REQUEST)
    def get_create_user_use_case(
        self, account_service: AccountService
    ) -> CreateUserUseCase:
        """Provide create user use case."""
        return CreateUserUseCase(account_service=account_service)

    @provide(scope=Scope.REQUEST)
    def get_update_user_role_use_case(
        self, account_service: AccountService
    ) -> UpdateUserRoleUseCase:
        """Provide update user role use case."""
        return UpdateUserRoleUseCase(account_service=account_service)

    @provide(scope=Scope.REQUEST)
    def get_update_user_profile_use_case(
        self, account_service: AccountService
    ) -> UpdateUserProfileUseCase:
        """Provide update user profile use case."""
        return UpdateUserProfileUseCase(account_service=account_service)

    @provide(scope=Scope.REQUEST)
    def get_bootstrap_admin_use_case(
        self,
        identity_reconciler: IdentityReconciler,
        identity_settings: IdentitySettings,
    ) -> BootstrapAdminUseCase:
        """Provide bootstrap admin use case."""
        return BootstrapAdminUseCase(
            identity_reconciler=identity_reconciler,
            identity_settings=identity_settings,
        )

    # Invitation use cases
    @provide(scope=Scope.REQUEST)
    def get_create_invitation_use_case(
        self,
        invitation_service: InvitationService,
        invitation_settings: InvitationSettings,
    ) -> CreateInvitationUseCase:
        """Provide create invitation use case."""
        return CreateInvitationUseCase(
            invitation_service=invitation_service,
            invitation_settings=invitation_settings,
        )

    @provide(scope=Scope.REQUEST)
    def get_pending_invitations_use_case(
        self, invitation_service: InvitationService
    ) -> GetPendingInvitationsUseCase:
        """Provide get pending invitations use case."""
        return GetPendingInvitationsUseCase(invitation_service=invitation_service)
