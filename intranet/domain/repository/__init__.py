"""Repository interfaces for the intranet domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from intranet.domain.repository.account import AccountRepository
from intranet.domain.repository.invitation import InvitationRepository
from intranet.domain.repository.unit_of_work import UnitOfWork

__all__ = [
    "AccountRepository",
    "InvitationRepository",
    "UnitOfWork",
]
