"""
DualPost Backend — Database Session Management
===============================================

What:  Async SQLAlchemy engine factory, session factory, and session scope helper.
Why:   Centralizes all PostgreSQL connection logic in one place.
How:   Builds an async engine with connection pooling and a session factory.
       Nothing here is created at import time: the application lifespan calls
       these helpers once and hands the result to PostgresPostStore.
Who:   Used by main.lifespan (construction) and PostgresPostStore (per operation).

Architecture Decision:
    The engine and session factory are explicit objects passed to the store
    rather than module globals. Tests build an in-memory SQLite engine with the
    same helpers and inject it the same way the lifespan does.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from dualpost.config import Settings


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Shares a single metadata object so create_tables() sees every model.
    """
    pass


# ── Engine Configuration ──────────────────────────────────────────────────
def create_engine(settings: Settings) -> AsyncEngine:
    """
    Create the pooled async engine for PostgreSQL.

    Pool sizing comes straight from settings; the pool is the only thing that
    bounds concurrent queries. Requests beyond pool_size + max_overflow wait.
    """
    return create_async_engine(
        settings.database_url,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_pre_ping=settings.db_pool_pre_ping,
        pool_recycle=3600,
        # SQL logging is noisy; only useful during development
        echo=settings.log_level == "DEBUG",
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """
    Create the session factory bound to `engine`.

    expire_on_commit=False keeps attributes readable after commit, so a store
    can build its response from the ORM object once the session is closed.
    """
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


# ── Session Scope ─────────────────────────────────────────────────────────
@asynccontextmanager
async def session_scope(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """
    Provide one session for one storage operation.

    How it works:
        1. Creates a new session from the factory
        2. Yields it to the caller (the store issues its statement)
        3. On success: commits the transaction
        4. On error: rolls back and re-raises
        5. Always: closes the session (returns connection to pool)

    Example usage in a store:
        async with session_scope(self._session_factory) as session:
            result = await session.execute(select(Post))
    """
    async with session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
async def create_tables(engine: AsyncEngine) -> None:
    """
    Create any missing tables registered on Base.metadata.

    Only creates; never alters or drops. Existing tables are left untouched.
    """
    # Import registers the model on Base.metadata
    from dualpost.models import post  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def ping(engine: AsyncEngine) -> None:
    """Run SELECT 1 against the pool. Raises if the database is unreachable."""
    async with engine.connect() as conn:
        await conn.execute(text("SELECT 1"))


async def dispose_engine(engine: AsyncEngine) -> None:
    """Gracefully closes all connections in the pool at shutdown."""
    await engine.dispose()
