"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict
from uuid import UUID

from intranet.domain.model import Account, Invitation
from intranet.domain.value import Email, InvitationId, Role, UserId


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def row_to_account(row: Dict[str, Any]) -> Account:
    """Convert database row to Account domain model.

    Args:
        row: Database row as dict

    Returns:
        Account domain model
    """
    return Account(
        id=UserId(_uuid(row["id"])),
        email=Email(row["email"]),
        first_name=row["first_name"],
        last_name=row["last_name"] or "",
        role=Role(row["role"]),
        is_active=row["is_active"],
        is_provisioned=row["is_provisioned"],
        invited_by=UserId(_uuid(row["invited_by"])) if row.get("invited_by") else None,
        invited_at=row.get("invited_at"),
        activated_at=row.get("activated_at"),
        last_login_at=row.get("last_login_at"),
        department=row.get("department"),
        job_title=row.get("job_title"),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def account_to_dict(account: Account) -> Dict[str, Any]:
    """Convert Account domain model to database dict.

    Args:
        account: Account domain model

    Returns:
        Dict suitable for database insertion/update
    """
    data = account.model_dump()
    data["email"] = account.email.root
    data["role"] = account.role.value
    return data


def row_to_invitation(row: Dict[str, Any]) -> Invitation:
    """Convert database row to Invitation domain model."""
    return Invitation(
        id=InvitationId(_uuid(row["id"])),
        email=Email(row["email"]),
        intended_role=Role(row["intended_role"]),
        invited_by=UserId(_uuid(row["invited_by"])),
        invited_at=row["invited_at"],
        expires_at=row["expires_at"],
        is_used=row["is_used"],
        used_at=row.get("used_at"),
    )


def invitation_to_dict(invitation: Invitation) -> Dict[str, Any]:
    """Convert Invitation domain model to database dict."""
    data = invitation.model_dump()
    data["email"] = invitation.email.root
    data["intended_role"] = invitation.intended_role.value
    return data
