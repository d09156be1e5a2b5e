"""In-memory account repository for testing."""

import asyncio
from typing import Optional

from intranet.domain.error import StorageConflictError
from intranet.domain.model import Account
from intranet.domain.repository import AccountRepository
from intranet.domain.value import Email, Role, UserId

from .database import InMemoryDatabase


class InMemoryAccountRepository(AccountRepository):
    """In-memory implementation of AccountRepository for testing.

    Yields to the event loop on every call so concurrent tasks interleave
    the way they would against a real database.
    """

    def __init__(self, database: InMemoryDatabase) -> None:
        self.database = database

    async def find_by_id(self, user_id: UserId) -> Optional[Account]:
        await asyncio.sleep(0)
        return self.database.accounts.get(user_id)

    async def find_by_email(self, email: Email) -> Optional[Account]:
        await asyncio.sleep(0)
        for account in self.database.accounts.values():
            if account.email.root.lower() == email.root.lower():
                return account
        return None

    async def insert(self, account: Account) -> Account:
        """Insert a new account.

        Raises:
            StorageConflictError: If the email is taken
        """
        await asyncio.sleep(0)
        for existing in self.database.accounts.values():
            if existing.email.root.lower() == account.email.root.lower():
                raise StorageConflictError(
                    f"Account already exists: {account.email.root}"
                )

        accounts = self.database.accounts
        accounts[account.id] = account
        self.database.record_undo(lambda: accounts.pop(account.id, None))
        return account

    async def update(self, account: Account) -> Account:
        await asyncio.sleep(0)
        accounts = self.database.accounts
        previous = accounts.get(account.id)
        if previous is None:
            raise StorageConflictError(f"Account {account.id} disappeared")

        accounts[account.id] = account.model_copy(
            update={"email": previous.email, "created_at": previous.created_at}
        )
        self.database.record_undo(lambda: accounts.__setitem__(previous.id, previous))
        return accounts[account.id]

    async def list(
        self, role: Optional[Role] = None, limit: int = 50, offset: int = 0
    ) -> list[Account]:
        await asyncio.sleep(0)
        matches = [
            account
            for account in self.database.accounts.values()
            if role is None or account.role == role
        ]
        matches.sort(key=lambda account: account.email.root)
        return matches[offset : offset + limit]

    async def count(self, role: Optional[Role] = None) -> int:
        await asyncio.sleep(0)
        return sum(
            1
            for account in self.database.accounts.values()
            if role is None or account.role == role
        )
