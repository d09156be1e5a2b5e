"""In-memory invitation repository for testing."""

import asyncio
from datetime import datetime
from typing import Optional

from intranet.domain.model import Invitation
from intranet.domain.repository import InvitationRepository
from intranet.domain.value import Email, InvitationId

from .database import InMemoryDatabase


class InMemoryInvitationRepository(InvitationRepository):
    """In-memory implementation of InvitationRepository for testing."""

    def __init__(self, database: InMemoryDatabase) -> None:
        self.database = database

    async def find_by_id(self, invitation_id: InvitationId) -> Optional[Invitation]:
        await asyncio.sleep(0)
        return self.database.invitations.get(invitation_id)

    async def find_active_for_email(
        self, email: Email, now: datetime
    ) -> list[Invitation]:
        await asyncio.sleep(0)
        matches = [
            invitation
            for invitation in self.database.invitations.values()
            if invitation.email == email and invitation.is_active(now)
        ]
        matches.sort(key=lambda inv: inv.invited_at, reverse=True)
        return matches

    async def insert(self, invitation: Invitation) -> Invitation:
        await asyncio.sleep(0)
        invitations = self.database.invitations
        invitations[invitation.id] = invitation
        self.database.record_undo(lambda: invitations.pop(invitation.id, None))
        return invitation

    async def mark_used(self, invitation_id: InvitationId, now: datetime) -> bool:
        """Conditionally consume an invitation.

        The check and the write happen without yielding, matching a single
        conditional UPDATE.
        """
        await asyncio.sleep(0)
        invitations = self.database.invitations
        previous = invitations.get(invitation_id)
        if previous is None or not previous.is_active(now):
            return False

        invitations[invitation_id] = previous.model_copy(
            update={"is_used": True, "used_at": now}
        )
        self.database.record_undo(
            lambda: invitations.__setitem__(invitation_id, previous)
        )
        return True

    def _pending(self, now: datetime, include_expired: bool) -> list[Invitation]:
        return [
            invitation
            for invitation in self.database.invitations.values()
            if not invitation.is_used
            and (include_expired or invitation.expires_at > now)
        ]

    async def list_pending(
        self,
        now: datetime,
        include_expired: bool = False,
        limit: int = 20,
        offset: int = 0,
    ) -> list[Invitation]:
        await asyncio.sleep(0)
        matches = self._pending(now, include_expired)
        matches.sort(key=lambda inv: inv.invited_at, reverse=True)
        return matches[offset : offset + limit]

    async def count_pending(self, now: datetime, include_expired: bool = False) -> int:
        await asyncio.sleep(0)
        return len(self._pending(now, include_expired))
