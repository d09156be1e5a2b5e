"""PostgreSQL implementation of Account repository."""

from typing import Optional

from sqlalchemy import func, insert, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from intranet.domain.error import StorageConflictError
from intranet.domain.model import Account
from intranet.domain.repository import AccountRepository
from intranet.domain.value import Email, Role, UserId
from intranet.persistence.mappers import account_to_dict, row_to_account
from intranet.persistence.tables import users_table


class PostgresAccountRepository(AccountRepository):
    """PostgreSQL implementation of AccountRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, user_id: UserId) -> Optional[Account]:
        stmt = select(users_table).where(users_table.c.id == user_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_account(dict(row)) if row else None

    async def find_by_email(self, email: Email) -> Optional[Account]:
        """Find an account by email.

        Compares on lower(email) so the unique index is used.
        """
        stmt = select(users_table).where(
            func.lower(users_table.c.email) == email.root.lower()
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_account(dict(row)) if row else None

    async def insert(self, account: Account) -> Account:
        stmt = insert(users_table).values(**account_to_dict(account))
        try:
            await self.session.execute(stmt)
        except IntegrityError as e:
            raise StorageConflictError(
                f"Account already exists: {account.email.root}"
            ) from e
        return account

    async def update(self, account: Account) -> Account:
        values = account_to_dict(account)
        # Identity and creation time never change
        for column in ("id", "email", "created_at"):
            values.pop(column)

        stmt = (
            update(users_table).where(users_table.c.id == account.id).values(**values)
        )
        result = await self.session.execute(stmt)
        if result.rowcount != 1:
            raise StorageConflictError(f"Account {account.id} disappeared")
        return account

    async def list(
        self, role: Optional[Role] = None, limit: int = 50, offset: int = 0
    ) -> list[Account]:
        stmt = select(users_table)
        if role is not None:
            stmt = stmt.where(users_table.c.role == role.value)
        stmt = stmt.order_by(users_table.c.email).limit(limit).offset(offset)

        result = await self.session.execute(stmt)
        return [row_to_account(dict(row)) for row in result.mappings().all()]

    async def count(self, role: Optional[Role] = None) -> int:
        stmt = select(func.count()).select_from(users_table)
        if role is not None:
            stmt = stmt.where(users_table.c.role == role.value)
        result = await self.session.execute(stmt)
        return result.scalar_one()
