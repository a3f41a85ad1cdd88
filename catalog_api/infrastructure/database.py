"""Database — engine and session lifetime for the product store.

Invariants:
    - One engine per process, created in the app lifespan and disposed on shutdown
    - A request session is closed when the request ends; uncommitted work is rolled back
    - A SQLAlchemy failure escaping a request session surfaces as StoreError
    - get_db before init_db is a programming error (RuntimeError), not a StoreError

Design Decisions:
    - Store methods commit themselves; the session wrapper only cleans up
    - Pool sizing only for server databases: SQLite's pool rejects pool_size
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.exc import OperationalError, SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine,
)

from catalog_api.core.errors import StoreError

logger = logging.getLogger(__name__)


def _engine_options(database_url: str, pool_size: int, max_overflow: int) -> dict:
    if database_url.startswith("sqlite"):
        return {}
    return {
        "pool_pre_ping": True,
        "pool_size": pool_size,
        "max_overflow": max_overflow,
        "pool_recycle": 3600,
    }


class DatabaseSessionManager:
    """Owns the engine and hands out request-scoped sessions."""

    def __init__(
        self, database_url: str, pool_size: int = 20, max_overflow: int = 10,
    ):
        self.engine: AsyncEngine = create_async_engine(
            database_url, **_engine_options(database_url, pool_size, max_overflow),
        )
        self._session_factory = async_sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        async with self._session_factory() as session:
            try:
                yield session
            except OperationalError as e:
                await session.rollback()
                logger.error(f"Database unreachable: {e}")
                raise StoreError("connection lost", "execute")
            except SQLAlchemyError as e:
                await session.rollback()
                logger.error(f"Unmapped SQLAlchemy error: {e}")
                raise StoreError("unexpected database error", "execute")

    async def health_check(self) -> bool:
        """SELECT 1 through a fresh session; False on any failure."""
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
        except (StoreError, SQLAlchemyError, OSError) as e:
            logger.error(f"Readiness check failed: {e}")
            return False
        return True

    async def dispose(self) -> None:
        await self.engine.dispose()


db_manager: DatabaseSessionManager | None = None


def init_db(database_url: str, **kwargs) -> DatabaseSessionManager:
    global db_manager
    db_manager = DatabaseSessionManager(database_url, **kwargs)
    logger.info(f"Database engine created for {db_manager.engine.url.get_backend_name()}")
    return db_manager


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency: one session per request."""
    if db_manager is None:
        raise RuntimeError("Database not initialized")
    async with db_manager.session() as session:
        yield session
