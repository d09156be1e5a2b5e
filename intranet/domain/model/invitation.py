"""Invitation entity.

An invitation is a time-boxed, single-use grant of a role to an email.
"""

from datetime import datetime
from typing import Optional

from intranet.domain.model.common import DomainModel
from intranet.domain.value import Email, InvitationId, Role, UserId


class Invitation(DomainModel):
    """Invitation entity.

    Business rules:
    - At most one active (unused, unexpired) invitation per email
    - Consumed at most once; is_used/used_at are set together
    - Expired invitations stay in the store but can no longer be consumed
    """

    id: InvitationId
    email: Email
    intended_role: Role
    invited_by: UserId
    invited_at: datetime
    expires_at: datetime
    is_used: bool = False
    used_at: Optional[datetime] = None

    def is_active(self, now: datetime) -> bool:
        """Whether the invitation can still be consumed at ``now``."""
        return not self.is_used and self.expires_at > now
