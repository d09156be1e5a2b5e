"""Invitation repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime

from intranet.domain.model.invitation import Invitation
from intranet.domain.value import Email, InvitationId


class InvitationRepository(ABC):
    """Repository for Invitation entity (the invitation store).

    Defines the contract for invitation persistence operations.
    Implementations live in the persistence layer.
    """

    @abstractmethod
    async def find_by_id(self, invitation_id: InvitationId) -> Invitation | None:
        """Find an invitation by ID.

        Args:
            invitation_id: The invitation's unique identifier

        Returns:
            The invitation if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_active_for_email(
        self, email: Email, now: datetime
    ) -> list[Invitation]:
        """Find unused invitations for an email that expire after ``now``.

        Normally zero or one. More than one indicates that invitation
        creation let a duplicate through; callers resolve it.

        Args:
            email: Normalized email address
            now: Reference instant for expiry

        Returns:
            Active invitations, newest ``invited_at`` first
        """
        pass

    @abstractmethod
    async def insert(self, invitation: Invitation) -> Invitation:
        """Insert a new invitation.

        Args:
            invitation: The invitation to insert

        Returns:
            The inserted invitation
        """
        pass

    @abstractmethod
    async def mark_used(self, invitation_id: InvitationId, now: datetime) -> bool:
        """Consume an invitation if it is still active.

        Conditional update: only succeeds while the invitation is unused and
        ``expires_at > now``.

        Args:
            invitation_id: The invitation to consume
            now: Consumption instant (stored as ``used_at``)

        Returns:
            True if this call consumed it, False if it was already used,
            expired or missing
        """
        pass

    @abstractmethod
    async def list_pending(
        self,
        now: datetime,
        include_expired: bool = False,
        limit: int = 20,
        offset: int = 0,
    ) -> list[Invitation]:
        """List unused invitations, newest ``invited_at`` first.

        Args:
            now: Reference instant for expiry
            include_expired: Whether to include expired, unused invitations
            limit: Maximum number of results
            offset: Number of results to skip

        Returns:
            List of invitations
        """
        pass

    @abstractmethod
    async def count_pending(self, now: datetime, include_expired: bool = False) -> int:
        """Count unused invitations with the same filter as ``list_pending``."""
        pass
