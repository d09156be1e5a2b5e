"""Sign-in use case."""

import logfire
from pydantic import BaseModel

from intranet.domain.service import IdentityReconciler, SessionService
from intranet.domain.value import IdentityProvider, ReconcileOutcome, Role

from intranet.application.usecase.base import BaseUseCase


class SignInRequest(BaseModel):
    """Verified identity handed over by an identity provider."""

    provider: IdentityProvider
    email: str
    display_name: str = ""


class SignInResponse(BaseModel):
    """Sign-in response.

    ``accepted`` is False when the email's domain is not allowed; no token
    is issued in that case and the upstream session must be ended.
    """

    accepted: bool
    outcome: ReconcileOutcome
    token: str | None = None
    user_id: str | None = None
    email: str | None = None
    role: Role | None = None
    max_age_seconds: int | None = None


class SignInUseCase(BaseUseCase[SignInRequest, SignInResponse]):
    """Use case for completing a sign-in from any identity provider.

    Every provider goes through the same reconciliation; the provider is
    only recorded for telemetry.
    """

    def __init__(
        self,
        identity_reconciler: IdentityReconciler,
        session_service: SessionService,
    ) -> None:
        """Initialize sign-in use case.

        Args:
            identity_reconciler: Identity reconciliation domain service
            session_service: Session token domain service
        """
        self.identity_reconciler = identity_reconciler
        self.session_service = session_service

    async def execute(self, request: SignInRequest) -> SignInResponse:
        """Execute sign-in flow.

        Steps:
        1. Reconcile the verified identity with the stored account
        2. If rejected by domain policy, stop without a session
        3. Otherwise issue a session token for the account

        Args:
            request: Verified identity

        Returns:
            Sign-in result with a session token when accepted

        Raises:
            InvalidIdentityError: If the email is empty or malformed
            TransientStorageError: If storage kept failing
        """
        with logfire.span(
            "sign_in.execute", provider=request.provider.value, email=request.email
        ):
            result = await self.identity_reconciler.reconcile(
                request.email, request.display_name
            )

            if not result.accepted:
                logfire.warn(
                    "Sign-in refused",
                    provider=request.provider.value,
                    outcome=result.outcome.value,
                )
                return SignInResponse(accepted=False, outcome=result.outcome)

            account = result.account
            token = self.session_service.issue(account)
            logfire.info(
                "Sign-in completed",
                provider=request.provider.value,
                user_id=str(account.id),
                outcome=result.outcome.value,
            )
            return SignInResponse(
                accepted=True,
                outcome=result.outcome,
                token=token,
                user_id=str(account.id),
                email=account.email.root,
                role=account.role,
                max_age_seconds=self.session_service.max_age_seconds,
            )
