"""Invitation use cases."""

from .create_invitation import CreateInvitationUseCase
from .get_pending_invitations import GetPendingInvitationsUseCase

__all__ = ["CreateInvitationUseCase", "GetPendingInvitationsUseCase"]
