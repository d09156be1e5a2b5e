"""Domain services."""

from .account_service import AccountService
from .base import Service
from .domain_policy import DomainPolicy
from .executor import PerEmailExecutor
from .identity_reconciler import IdentityReconciler, ReconcileResult
from .invitation_service import InvitationService
from .session_service import SessionService

__all__ = [
    "AccountService",
    "DomainPolicy",
    "IdentityReconciler",
    "InvitationService",
    "PerEmailExecutor",
    "ReconcileResult",
    "Service",
    "SessionService",
]
