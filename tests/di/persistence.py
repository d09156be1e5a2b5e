"""Mock persistence providers for testing."""

from dishka import Scope, provide

from intranet.domain.repository import (
    AccountRepository,
    InvitationRepository,
    UnitOfWork,
)
from intranet.persistence.repository.inmemory import (
    InMemoryAccountRepository,
    InMemoryDatabase,
    InMemoryInvitationRepository,
    InMemoryUnitOfWork,
)
from intranet.util.di.infrastructure.persistence import PersistenceProvider


class MockPersistenceProvider(PersistenceProvider):
    """Mock persistence provider using in-memory repositories.

    The database is APP-scoped so every request scope of one container sees
    the same data, like requests against one Postgres. Each test builds its
    own container, so tests stay isolated.
    """

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_database(self) -> InMemoryDatabase:
        """Provide shared in-memory tables."""
        return InMemoryDatabase()

    @provide(scope=Scope.REQUEST)
    def get_unit_of_work(self, database: InMemoryDatabase) -> UnitOfWork:
        """Provide in-memory unit of work."""
        return InMemoryUnitOfWork(database)

    @provide(scope=Scope.REQUEST)
    def get_account_repository(self, database: InMemoryDatabase) -> AccountRepository:
        """Provide in-memory account repository."""
        return InMemoryAccountRepository(database)

    @provide(scope=Scope.REQUEST)
    def get_invitation_repository(
        self, database: InMemoryDatabase
    ) -> InvitationRepository:
        """Provide in-memory invitation repository."""
        return InMemoryInvitationRepository(database)
