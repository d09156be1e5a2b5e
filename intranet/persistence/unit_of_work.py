"""SQLAlchemy unit of work."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import logfire
from sqlalchemy.exc import DBAPIError, IntegrityError, OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from intranet.domain.error import StorageConflictError, TransientStorageError
from intranet.domain.repository import UnitOfWork


class SqlAlchemyUnitOfWork(UnitOfWork):
    """Unit of work over the request's AsyncSession.

    Each attempt runs inside a SAVEPOINT so a failed attempt can be
    discarded without losing the rest of the request's transaction.
    Driver errors are translated into the domain's storage errors.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize unit of work with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[None]:
        try:
            async with self.session.begin_nested():
                yield
        except IntegrityError as e:
            raise StorageConflictError(str(e.orig)) from e
        except (OperationalError, TimeoutError) as e:
            await self._reset()
            raise TransientStorageError(str(e)) from e
        except DBAPIError as e:
            if not e.connection_invalidated:
                raise
            await self._reset()
            raise TransientStorageError(str(e)) from e

    async def commit(self) -> None:
        try:
            await self.session.commit()
        except IntegrityError as e:
            await self._reset()
            raise StorageConflictError(str(e.orig)) from e
        except (OperationalError, TimeoutError) as e:
            await self._reset()
            raise TransientStorageError(str(e)) from e

    async def _reset(self) -> None:
        # The connection may be gone; the next attempt starts a fresh transaction
        try:
            await self.session.rollback()
        except DBAPIError as e:
            logfire.warn("Rollback after storage failure failed", error=str(e))
