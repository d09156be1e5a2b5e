"""Test configuration and helpers."""

from datetime import datetime, timedelta
from uuid import uuid4

from intranet.config import Settings
from intranet.domain.model import Account, Invitation
from intranet.domain.value import Email, InvitationId, Role, UserId

TEST_JWT_SECRET = "test-secret-key-that-is-at-least-32-bytes-long"


def make_settings(**identity) -> Settings:
    """Test settings with a fixed JWT secret and the given identity options.

    Example:
        make_settings(allowed_domain="acme.com", admin_email="root@acme.com")
    """
    return Settings(
        environment="test",
        auth={"jwt_secret": TEST_JWT_SECRET},
        identity=identity,
    )


def make_account(
    email: str,
    role: Role = Role.EMPLOYEE,
    *,
    first_name: str = "Test",
    last_name: str = "User",
    is_active: bool = True,
    is_provisioned: bool = False,
    now: datetime,
) -> Account:
    """Build an account as it would be stored after a past sign-in."""
    return Account(
        id=UserId(uuid4()),
        email=Email(email),
        first_name=first_name,
        last_name=last_name,
        role=role,
        is_active=is_active,
        is_provisioned=is_provisioned,
        activated_at=None if is_provisioned else now,
        last_login_at=None if is_provisioned else now,
        created_at=now,
        updated_at=now,
    )


def make_invitation(
    email: str,
    intended_role: Role,
    invited_by: UserId,
    *,
    invited_at: datetime,
    expires_in: timedelta = timedelta(days=30),
) -> Invitation:
    """Build an unused invitation."""
    return Invitation(
        id=InvitationId(uuid4()),
        email=Email(email),
        intended_role=intended_role,
        invited_by=invited_by,
        invited_at=invited_at,
        expires_at=invited_at + expires_in,
    )
