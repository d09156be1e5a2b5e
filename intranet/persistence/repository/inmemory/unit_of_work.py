"""In-memory unit of work for testing."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from intranet.domain.repository import UnitOfWork

from .database import InMemoryDatabase


class InMemoryUnitOfWork(UnitOfWork):
    """Rolls back an attempt by replaying its undo log in reverse."""

    def __init__(self, database: InMemoryDatabase) -> None:
        self.database = database
        self.commits = 0

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[None]:
        token = self.database.begin()
        try:
            yield
        except BaseException:
            self.database.rollback()
            raise
        finally:
            self.database.end(token)

    async def commit(self) -> None:
        self.commits += 1
