"""PostgreSQL repository implementations."""

from intranet.persistence.repository.account import PostgresAccountRepository
from intranet.persistence.repository.invitation import PostgresInvitationRepository

__all__ = [
    "PostgresAccountRepository",
    "PostgresInvitationRepository",
]
