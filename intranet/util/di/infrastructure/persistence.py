"""Persistence providers."""

from collections.abc import AsyncIterator

from dishka import Scope, provide
import logfire
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from intranet.config import Settings
from intranet.domain.repository import (
    AccountRepository,
    InvitationRepository,
    UnitOfWork,
)
from intranet.persistence.database import create_engine, create_session_factory
from intranet.persistence.repository import (
    PostgresAccountRepository,
    PostgresInvitationRepository,
)
from intranet.persistence.unit_of_work import SqlAlchemyUnitOfWork
from intranet.util.di.base import ProviderBase
from intranet.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Storage component; tests swap in the in-memory store."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """PostgreSQL storage."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    async def get_engine(self, settings: Settings) -> AsyncIterator[AsyncEngine]:
        engine = create_engine(settings)
        instrument_sqlalchemy(engine)
        yield engine
        await engine.dispose()

    @provide(scope=Scope.APP)
    def get_session_factory(
        self, engine: AsyncEngine
    ) -> async_sessionmaker[AsyncSession]:
        return create_session_factory(engine)

    @provide(scope=Scope.REQUEST)
    async def get_session(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> AsyncIterator[AsyncSession]:
        """One session per request.

        Account and invitation writes are committed by the unit of work
        inside their per-email critical section. Whatever remains is
        committed when the request ends cleanly and rolled back otherwise.
        """
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception as e:
                logfire.warn(
                    "Request session rolled back",
                    error=str(e),
                    error_type=type(e).__name__,
                )
                await session.rollback()
                raise

    @provide(scope=Scope.REQUEST)
    def get_unit_of_work(self, session: AsyncSession) -> UnitOfWork:
        return SqlAlchemyUnitOfWork(session)

    @provide(scope=Scope.REQUEST)
    def get_account_repository(self, session: AsyncSession) -> AccountRepository:
        return PostgresAccountRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_invitation_repository(
        self, session: AsyncSession
    ) -> InvitationRepository:
        return PostgresInvitationRepository(session)
