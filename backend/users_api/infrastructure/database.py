"""Database Session Manager: async connection pool, schema bootstrap and health checks.

Invariants:
    - Every session auto-rolls-back on exception (no partial commits leak)
    - Connection pool uses pool_pre_ping for stale connection detection
    - All SQLAlchemy exceptions mapped to DatabaseError (core/errors.py);
      logging them is left to whoever handles the DatabaseError
    - health_check() never raises: any failure reports the store as down
    - create_schema() is idempotent (CREATE TABLE only when absent)

Design Decisions:
    - Singleton db_manager initialized on startup: FastAPI lifespan manages lifecycle
    - expire_on_commit=False: returned rows stay readable after the session closes
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.exc import (
    IntegrityError, OperationalError, DBAPIError, SQLAlchemyError,
)
from sqlalchemy import text

from users_api.core.domain_types import StoreOperation
from users_api.core.errors import DatabaseError
from users_api.db.base import Base
import users_api.models  # noqa: F401

logger = logging.getLogger(__name__)


def map_store_error(
    exc: SQLAlchemyError | OSError, operation: StoreOperation,
) -> DatabaseError:
    """Translate a store exception into a DatabaseError."""
    if isinstance(exc, IntegrityError):
        detail = "Integrity constraint violated"
    elif isinstance(exc, (OperationalError, OSError)):
        detail = "Connection or operational error"
    elif isinstance(exc, DBAPIError):
        detail = "Database driver error"
    else:
        detail = "Database operation failed"
    return DatabaseError(detail, operation)


class DatabaseSessionManager:
    """Manages async database sessions with pooling, rollback, and health checks."""

    def __init__(
        self, database_url: str, pool_size: int = 20, max_overflow: int = 10,
    ):
        self.engine = create_async_engine(
            database_url,
            pool_size=pool_size,
            max_overflow=max_overflow,
            pool_pre_ping=True,
            pool_recycle=3600,
        )
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(
        self, operation: StoreOperation,
    ) -> AsyncGenerator[AsyncSession, None]:
        """Provide session with auto-rollback on exception."""
        session = self._session_factory()
        try:
            yield session
        except (SQLAlchemyError, OSError) as e:
            await session.rollback()
            raise map_store_error(e, operation) from e
        finally:
            await session.close()

    async def create_schema(self) -> None:
        """Create every table on Base.metadata that does not exist yet."""
        try:
            async with self.engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        # asyncpg surfaces refused connections as raw OSError
        except (SQLAlchemyError, OSError) as e:
            raise map_store_error(e, StoreOperation.SCHEMA) from e

    async def health_check(self) -> bool:
        """Run a trivial liveness query against the store."""
        try:
            async with self.session(StoreOperation.HEALTH) as db:
                await db.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"DB health check failed: {e}")
            return False

    async def dispose(self) -> None:
        await self.engine.dispose()


# Singleton (initialized on startup)
db_manager: DatabaseSessionManager | None = None


def init_db(database_url: str, **kwargs) -> DatabaseSessionManager:
    global db_manager
    db_manager = DatabaseSessionManager(database_url, **kwargs)
    return db_manager


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency for database sessions."""
    if not db_manager:
        raise RuntimeError("Database not initialized")
    async with db_manager._session_factory() as session:
        yield session
