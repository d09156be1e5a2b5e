"""Async engine and session factory for PostgreSQL."""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from intranet.config import Settings


def create_engine(settings: Settings) -> AsyncEngine:
    """Engine tagged with the service name so its sessions show in pg_stat_activity."""
    return create_async_engine(
        settings.database.url,
        echo=settings.debug,
        pool_pre_ping=True,
        pool_size=settings.database.pool_size,
        max_overflow=settings.database.max_overflow,
        connect_args={"server_settings": {"application_name": "intranet-api"}},
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    # Sessions outlive their transaction in UnitOfWork, keep loaded state
    return async_sessionmaker(engine, expire_on_commit=False, autoflush=False)
