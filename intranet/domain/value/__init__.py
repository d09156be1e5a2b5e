"""Domain value objects for the intranet."""

from intranet.domain.value.identifiers import InvitationId, UserId
from intranet.domain.value.types import (
    PLACEHOLDER_FIRST_NAME,
    Email,
    IdentityProvider,
    PersonName,
    ReconcileOutcome,
    RequestPrincipal,
    Role,
)

__all__ = [
    # Identifiers
    "UserId",
    "InvitationId",
    # Types
    "Email",
    "IdentityProvider",
    "PersonName",
    "PLACEHOLDER_FIRST_NAME",
    "ReconcileOutcome",
    "RequestPrincipal",
    "Role",
]
