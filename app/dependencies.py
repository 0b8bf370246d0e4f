"""Dependency injection for FastAPI."""

import logging
from collections.abc import AsyncGenerator
from dataclasses import dataclass
from typing import Annotated, Any

from fastapi import Depends, Request
from sqlalchemy import event, text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import QueuePool

from app.auth.token_revocation import TokenRevocationStore
from app.config import Settings, get_settings

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Engine and session factory, created in the lifespan and by scripts
# ---------------------------------------------------------------------------


def _register_pool_events(engine: AsyncEngine) -> None:
    """Log pool pressure; connection churn is only interesting at debug level."""
    pool = engine.pool
    if not isinstance(pool, QueuePool):
        return

    @event.listens_for(pool, "checkout")
    def _on_checkout(_dbapi_conn, _conn_record, _conn_proxy):
        logger.debug("Pool checkout size=%s checked_out=%s", pool.size(), pool.checkedout())

    @event.listens_for(pool, "overflow")
    def _on_overflow(_dbapi_conn):
        logger.warning("Pool overflow size=%s overflow=%s", pool.size(), pool.overflow())


def create_engine(settings: Settings) -> AsyncEngine:
    """Create the async database engine."""
    url = str(settings.database_url)
    options: dict[str, Any] = {"echo": settings.debug}
    if not url.startswith("sqlite"):
        options.update(
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=True,
        )
    engine = create_async_engine(url, **options)
    _register_pool_events(engine)
    return engine


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create session factory bound to *engine*."""
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


# ---------------------------------------------------------------------------
# Request-scoped dependencies backed by app.state
# ---------------------------------------------------------------------------


async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Dependency that provides a database session from app.state.

    Owns the unit-of-work lifecycle: commits on success, rolls back on
    exception.  Repositories should call ``session.flush()`` (not
    ``session.commit()``) so that all writes within a single request
    are committed atomically.
    """
    session_factory: async_sessionmaker[AsyncSession] = request.app.state.session_factory
    async with session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


DBSession = Annotated[AsyncSession, Depends(get_db_session)]


def get_revocation_store(db: DBSession) -> TokenRevocationStore:
    return TokenRevocationStore(db)


RevocationStoreDep = Annotated[TokenRevocationStore, Depends(get_revocation_store)]
AppSettings = Annotated[Settings, Depends(get_settings)]


# ---------------------------------------------------------------------------
# Standalone infrastructure for scripts (no FastAPI app)
# ---------------------------------------------------------------------------


@dataclass
class InfrastructureContainer:
    """Engine and session factory for entry-points that run outside the app."""

    engine: AsyncEngine
    session_factory: async_sessionmaker[AsyncSession]

    @classmethod
    def from_settings(cls, settings: Settings) -> "InfrastructureContainer":
        engine = create_engine(settings)
        return cls(engine=engine, session_factory=create_session_factory(engine))

    async def verify(self) -> None:
        """Verify DB connectivity. Call before doing any work."""
        async with self.session_factory() as session:
            await session.execute(text("SELECT 1"))
        logger.info("Database connectivity verified")

    async def close(self) -> None:
        await self.engine.dispose()
