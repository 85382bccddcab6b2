"""
Acaia Club Backend — Database Session Management
=================================================

What:  Async SQLAlchemy engine, session factory, and FastAPI dependency.
Why:   Centralizes all database connection logic in one place.
How:   A `Database` object owns the engine and session factory. The application
       factory constructs exactly one and stores it on `app.state`; the
       `get_db_session` dependency pulls it from there for each request.
Who:   Route handlers (via Depends), the health check, Alembic, and tests.
When:  Constructed once per application; sessions are created per request.

Connection Pooling Strategy (PostgreSQL):
    pool_size=20:      Persistent connections for normal load
    max_overflow=10:   Temporary connections for traffic spikes (total max = 30)
    pool_pre_ping:     Validates connections before use (catches stale connections)
    pool_recycle=3600: Recycles connections every hour

SQLite (tests and local tinkering) gets a single shared connection instead,
so an in-memory database survives across sessions, and foreign keys are
switched on explicitly because SQLite ignores them by default.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy import event, text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool

from acaiaclub.config import Settings


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    All models inherit from this class so they share one metadata object,
    which Alembic reads for migrations and the test suite uses to create
    tables in SQLite.
    """
    pass


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """
    Owns the async engine and session factory for one application instance.

    Why a class (not module globals):
        The engine is created by the application factory from the settings it
        is handed, so tests can build an app against SQLite while production
        builds one against PostgreSQL, and nothing connects at import time.
    """

    def __init__(self, settings: Settings):
        url = settings.database_url
        echo = settings.log_level == "DEBUG"

        if url.startswith("sqlite"):
            self.engine: AsyncEngine = create_async_engine(
                url,
                echo=echo,
                poolclass=StaticPool,
                connect_args={"check_same_thread": False},
            )
            event.listen(self.engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
        else:
            self.engine = create_async_engine(
                url,
                echo=echo,
                pool_size=settings.db_pool_size,
                max_overflow=settings.db_max_overflow,
                pool_pre_ping=settings.db_pool_pre_ping,
                pool_recycle=3600,
            )

        # expire_on_commit=False: attributes stay readable after commit, which
        # matters because response serialization happens after the handler
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Provide a transactional session: commit on success, roll back on error.

        Used directly by scripts and tests; wrapped by `get_db_session` for
        request handlers.
        """
        async with self.session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    async def ping(self) -> bool:
        """Run SELECT 1 against the database (health check)."""
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        return True

    async def create_all(self) -> None:
        """Create every table known to Base.metadata (SQLite/test bootstrap only)."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def dispose(self) -> None:
        """Gracefully closes all connections in the pool (application shutdown)."""
        await self.engine.dispose()


# ── Request Dependencies ──────────────────────────────────────────────────
def get_database(request: Request) -> Database:
    """Return the Database the application factory attached to app.state."""
    return request.app.state.database


async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Creates a new session from the application's factory
        2. Yields it to the route handler (the handler performs queries)
        3. On success: commits the transaction
        4. On error: rolls back the transaction and re-raises so the
           error mapper can respond
        5. Always: closes the session (returns connection to pool)

    Services flush inside the handler, so constraint violations surface
    there (and map to 404/409) rather than at commit time.
    """
    async with get_database(request).session() as session:
        yield session
