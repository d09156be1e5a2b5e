"""SQLAlchemy table definitions for the intranet.

They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    ForeignKey,
    Index,
    MetaData,
    String,
    Table,
    func,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

ROLE_CHECK = "role IN ('Admin', 'Manager', 'Employee')"

# ============================================================================
# USERS TABLE
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", UUID, primary_key=True, server_default=func.gen_random_uuid()),
    Column("email", String(255), nullable=False),  # Stored normalized (lowercase)
    Column("first_name", String(100), nullable=False),
    Column("last_name", String(100), nullable=False, server_default=""),
    Column("role", String(20), nullable=False, server_default="Employee"),
    Column("is_active", Boolean, nullable=False, server_default="true"),
    Column("is_provisioned", Boolean, nullable=False, server_default="false"),
    Column("invited_by", UUID, ForeignKey("users.id", ondelete="SET NULL")),
    Column("invited_at", TIMESTAMP(timezone=True), nullable=True),
    Column("activated_at", TIMESTAMP(timezone=True), nullable=True),
    Column("last_login_at", TIMESTAMP(timezone=True), nullable=True),
    Column("department", String(100), nullable=True),
    Column("job_title", String(100), nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint(ROLE_CHECK, name="ck_users_role"),
)

# One account per email, whatever the case
Index("uq_users_email_lower", func.lower(users_table.c.email), unique=True)
Index("idx_users_role", users_table.c.role)

# ============================================================================
# INVITATIONS TABLE
# ============================================================================
invitations_table = Table(
    "invitations",
    metadata,
    Column("id", UUID, primary_key=True, server_default=func.gen_random_uuid()),
    Column("email", String(255), nullable=False),
    Column("intended_role", String(20), nullable=False),
    Column(
        "invited_by", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    ),
    Column("invited_at", TIMESTAMP(timezone=True), nullable=False),
    Column("expires_at", TIMESTAMP(timezone=True), nullable=False),
    Column("is_used", Boolean, nullable=False, server_default="false"),
    Column("used_at", TIMESTAMP(timezone=True), nullable=True),
    CheckConstraint(
        "intended_role IN ('Admin', 'Manager', 'Employee')",
        name="ck_invitations_intended_role",
    ),
    CheckConstraint(
        "(is_used AND used_at IS NOT NULL) OR (NOT is_used AND used_at IS NULL)",
        name="ck_invitations_used_at",
    ),
)

# Critical path for sign-in: unused invitations by email
Index(
    "idx_invitations_unused_email",
    invitations_table.c.email,
    postgresql_where=invitations_table.c.is_used.is_(False),
)
Index("idx_invitations_invited_at", invitations_table.c.invited_at.desc())
