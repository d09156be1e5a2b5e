"""PostgreSQL implementation of Invitation repository."""

from datetime import datetime
from typing import Optional

from sqlalchemy import and_, func, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from intranet.domain.model import Invitation
from intranet.domain.repository import InvitationRepository
from intranet.domain.value import Email, InvitationId
from intranet.persistence.mappers import invitation_to_dict, row_to_invitation
from intranet.persistence.tables import invitations_table


class PostgresInvitationRepository(InvitationRepository):
    """PostgreSQL implementation of InvitationRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, invitation_id: InvitationId) -> Optional[Invitation]:
        stmt = select(invitations_table).where(invitations_table.c.id == invitation_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_invitation(dict(row)) if row else None

    async def find_active_for_email(
        self, email: Email, now: datetime
    ) -> list[Invitation]:
        """Find unused, unexpired invitations for an email.

        Critical path for sign-in - served by idx_invitations_unused_email.
        """
        stmt = (
            select(invitations_table)
            .where(
                and_(
                    invitations_table.c.email == email.root,
                    invitations_table.c.is_used.is_(False),
                    invitations_table.c.expires_at > now,
                )
            )
            .order_by(invitations_table.c.invited_at.desc())
        )
        result = await self.session.execute(stmt)
        return [row_to_invitation(dict(row)) for row in result.mappings().all()]

    async def insert(self, invitation: Invitation) -> Invitation:
        stmt = insert(invitations_table).values(**invitation_to_dict(invitation))
        await self.session.execute(stmt)
        return invitation

    async def mark_used(self, invitation_id: InvitationId, now: datetime) -> bool:
        """Consume an invitation with a single conditional UPDATE.

        A concurrent transaction holding the row makes this wait, then
        re-check the predicate; zero affected rows means it lost.
        """
        stmt = (
            update(invitations_table)
            .where(
                and_(
                    invitations_table.c.id == invitation_id,
                    invitations_table.c.is_used.is_(False),
                    invitations_table.c.expires_at > now,
                )
            )
            .values(is_used=True, used_at=now)
        )
        result = await self.session.execute(stmt)
        return result.rowcount == 1

    def _pending_filter(self, now: datetime, include_expired: bool):
        condition = invitations_table.c.is_used.is_(False)
        if not include_expired:
            condition = and_(condition, invitations_table.c.expires_at > now)
        return condition

    async def list_pending(
        self,
        now: datetime,
        include_expired: bool = False,
        limit: int = 20,
        offset: int = 0,
    ) -> list[Invitation]:
        stmt = (
            select(invitations_table)
            .where(self._pending_filter(now, include_expired))
            .order_by(invitations_table.c.invited_at.desc())
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(stmt)
        return [row_to_invitation(dict(row)) for row in result.mappings().all()]

    async def count_pending(self, now: datetime, include_expired: bool = False) -> int:
        stmt = (
            select(func.count())
            .select_from(invitations_table)
            .where(self._pending_filter(now, include_expired))
        )
        result = await self.session.execute(stmt)
        return result.scalar_one()
