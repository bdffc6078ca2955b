"""Database Session Manager — async engine, request sessions, readiness probe.

Invariants:
    - A session that raises is rolled back before the error leaves the context
    - SQLAlchemy failures surface as DatabaseError (503), never as raw driver errors
    - Planner services commit their own unit of work; the manager only rolls back

Design Decisions:
    - Module-level db_manager set by the lifespan hook (ADR: no import side effects)
    - expire_on_commit=False: rows returned by services stay readable after commit
    - Error mapping is an ordered table, most specific exception first
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.exc import (
    DBAPIError, IntegrityError, OperationalError, SQLAlchemyError,
)
from sqlalchemy.ext.asyncio import (
    AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine,
)

from aurora.core.errors import DatabaseError

logger = logging.getLogger(__name__)

# (exception type, client-facing message, operation recorded in the error context)
_ERROR_MAP: tuple[tuple[type[SQLAlchemyError], str, str], ...] = (
    (IntegrityError, "constraint violated", "commit"),
    (OperationalError, "connection or operational error", "execute"),
    (DBAPIError, "driver error", "query"),
    (SQLAlchemyError, "unexpected SQLAlchemy error", "unknown"),
)


def _build_engine(database_url: str, pool_size: int, max_overflow: int) -> AsyncEngine:
    # aiosqlite has no connection pool to size
    if database_url.startswith("sqlite"):
        return create_async_engine(database_url)
    return create_async_engine(
        database_url,
        pool_size=pool_size,
        max_overflow=max_overflow,
        pool_pre_ping=True,
        pool_recycle=1800,
    )


def _to_database_error(exc: SQLAlchemyError) -> DatabaseError:
    for exc_type, message, operation in _ERROR_MAP:
        if isinstance(exc, exc_type):
            logger.error(f"{exc_type.__name__} during {operation}: {exc}")
            return DatabaseError(message, operation)
    return DatabaseError("unexpected error", "unknown")


class DatabaseSessionManager:
    """Owns the planner's engine and hands out AsyncSessions."""

    def __init__(
        self, database_url: str, pool_size: int = 20, max_overflow: int = 10,
    ):
        self.engine = _build_engine(database_url, pool_size, max_overflow)
        self._session_factory = async_sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        session = self._session_factory()
        try:
            yield session
        except SQLAlchemyError as e:
            await session.rollback()
            raise _to_database_error(e) from e
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()

    async def health_check(self) -> bool:
        """True when a trivial query round-trips."""
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
        except DatabaseError as e:
            logger.error(f"Database readiness failed: {e.message}")
            return False
        return True

    async def dispose(self) -> None:
        await self.engine.dispose()


db_manager: DatabaseSessionManager | None = None


def init_db(database_url: str, **kwargs) -> DatabaseSessionManager:
    global db_manager
    db_manager = DatabaseSessionManager(database_url, **kwargs)
    return db_manager


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency: one session per request."""
    if db_manager is None:
        raise DatabaseError("engine not initialized", "connect")
    async with db_manager.session() as session:
        yield session
