"""In-memory repository implementations for testing."""

from .account import InMemoryAccountRepository
from .database import InMemoryDatabase
from .invitation import InMemoryInvitationRepository
from .unit_of_work import InMemoryUnitOfWork

__all__ = [
    "InMemoryAccountRepository",
    "InMemoryDatabase",
    "InMemoryInvitationRepository",
    "InMemoryUnitOfWork",
]
