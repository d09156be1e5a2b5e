"""Domain model entities for the intranet."""

from intranet.domain.model.account import Account
from intranet.domain.model.invitation import Invitation

__all__ = [
    "Account",
    "Invitation",
]
