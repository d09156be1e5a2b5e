"""Account aggregate root.

Accounts are keyed by email. They come into existence either through a
first external sign-in or through an administrator pre-provisioning them.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import Field

from intranet.domain.model.common import DomainModel
from intranet.domain.value import Email, Role, UserId


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Account(DomainModel):
    """Internal user account.

    Business rules:
    - One account per email (case-insensitive); email never changes
    - is_provisioned is True only until the first real sign-in
    - Reconciliation never flips is_active
    - activated_at / last_login_at never move backwards
    """

    id: UserId
    email: Email
    first_name: str
    last_name: str = ""
    role: Role = Role.EMPLOYEE
    is_active: bool = True
    is_provisioned: bool = False
    invited_by: Optional[UserId] = None
    invited_at: Optional[datetime] = None
    activated_at: Optional[datetime] = None
    last_login_at: Optional[datetime] = None
    department: Optional[str] = None
    job_title: Optional[str] = None
    created_at: datetime = Field(default_factory=_utc_now)
    updated_at: datetime = Field(default_factory=_utc_now)
