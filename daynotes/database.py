"""
DayNotes Backend — Database Handle & Session Management
=========================================================

What:  Async SQLAlchemy engine, session factory and the FastAPI dependency.
How:   `Database` owns one engine (and therefore one connection pool).
       The application factory builds exactly one instance and stores it on
       `app.state.database`; handlers receive sessions from it through
       `get_db_session`. Nothing in the package reaches the engine through a
       module-level global.
When:  The handle lives as long as the process; sessions live for one request.

Upserts:
    `upsert()` returns the dialect-specific INSERT construct
    (PostgreSQL in production, SQLite in the test suite) so services can
    issue a single INSERT ... ON CONFLICT DO UPDATE statement.
"""

from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Shares one metadata object between the models, Alembic's autogenerate
    and the test suite's `create_schema()`.
    """
    pass


class Database:
    """
    Process-wide store handle: engine, pool and session factory.

    Example:
        database = Database("postgresql+asyncpg://...", pool_size=10)
        async with database.session() as session:
            await session.execute(...)
        await database.dispose()
    """

    def __init__(self, url: str, **engine_options: Any) -> None:
        self.url = url
        self.engine = create_async_engine(url, **engine_options)
        # expire_on_commit=False: rows returned by a service stay readable
        # after the commit that persisted them
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @classmethod
    def from_settings(cls, settings) -> "Database":
        return cls(settings.database_url, **settings.engine_options())

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Provide a session that commits on success and rolls back on error.

        The session is closed (connection returned to the pool) on every
        exit path.
        """
        async with self.session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise
            finally:
                await session.close()

    async def ping(self) -> bool:
        """Run SELECT 1; used by startup and the health endpoint."""
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        return True

    async def create_schema(self) -> None:
        """Create all tables from model metadata (tests and local SQLite runs)."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def dispose(self) -> None:
        """Close every pooled connection. Called from the lifespan shutdown."""
        await self.engine.dispose()


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    The handle is taken from `request.app.state.database`, which
    `create_app()` populated.

    Example usage in a route:
        @router.get("/notes")
        async def list_notes(db: AsyncSession = Depends(get_db_session)):
            ...
    """
    database: Database = request.app.state.database
    async with database.session() as session:
        yield session


def upsert(session: AsyncSession, model):
    """Return an INSERT construct with ON CONFLICT support for the session's dialect."""
    if session.bind.dialect.name == "sqlite":
        return sqlite_insert(model)
    return pg_insert(model)
