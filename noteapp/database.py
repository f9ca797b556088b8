"""
Notes Backend — Database Handle & Session Management
=====================================================

What:  Async SQLAlchemy engine, session factory, and FastAPI dependency.
How:   `Database` owns one pooled async engine. The application factory
       constructs it and stores it on `app.state.database`; request handlers
       receive a per-request session through `get_db_session`.
Who:   Created by `noteapp.main.create_app`; tests build their own against a
       throwaway SQLite file.
When:  Constructed once per app; `connect()` runs at startup, `dispose()` at
       shutdown, `session()` once per request.

Connection Pooling:
    pool_size / max_overflow / pool_pre_ping come from settings and only apply
    to server databases. SQLite URLs use SQLAlchemy's default pool for the
    dialect.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, AsyncIterator, Optional

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from noteapp.exceptions import ConnectivityError

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    All models inherit from this class to share one metadata object, which
    `Database.sync_schema()` and Alembic both read.
    """
    pass


class Database:
    """
    Handle to the relational store shared by all in-flight requests.

    Example:
        db = Database("postgresql+asyncpg://...")
        await db.connect()          # raises ConnectivityError when unreachable
        await db.sync_schema()      # CREATE TABLE IF NOT EXISTS for all models
    """

    def __init__(
        self,
        url: str,
        *,
        pool_size: int = 10,
        max_overflow: int = 10,
        pool_pre_ping: bool = True,
        echo: bool = False,
    ):
        self.url = url
        engine_kwargs = {"echo": echo}
        if not url.startswith("sqlite"):
            engine_kwargs.update(
                pool_size=pool_size,
                max_overflow=max_overflow,
                pool_pre_ping=pool_pre_ping,
                pool_recycle=3600,
            )
        self.engine: AsyncEngine = create_async_engine(url, **engine_kwargs)

        # expire_on_commit=False: attributes stay readable after commit
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    async def connect(self) -> None:
        """
        Verify the store is reachable with a single `SELECT 1`.

        Raises:
            ConnectivityError: on any failure (bad URL, refused connection,
            authentication). No retry is attempted.
        """
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except Exception as e:
            raise ConnectivityError(
                message=f"Could not connect to the database: {type(e).__name__}",
                context={"error": str(e)},
            ) from e
        logger.info("Connected to database (%s)", self.engine.url.get_backend_name())

    async def ping(self) -> bool:
        """Health-check variant of connect() that reports instead of raising."""
        try:
            await self.connect()
        except ConnectivityError as e:
            logger.warning("Database unreachable: %s", e.context.get("error"))
            return False
        return True

    async def sync_schema(self) -> None:
        """
        Reconcile the stored schema with the models: creates missing tables.

        Additive only. Existing tables are never altered or dropped; schema
        changes on live data go through the Alembic migrations.
        """
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Schema synchronized: %s", ", ".join(sorted(Base.metadata.tables)))

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """
        Provide a session for one unit of work.

        How it works:
            1. Creates a new session from the factory
            2. Yields it to the caller
            3. On success: commits the transaction
            4. On error: rolls back and re-raises for the error handlers
            5. Always: closes the session (returns connection to pool)
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

    async def dispose(self) -> None:
        """Close all pooled connections. Called during application shutdown."""
        await self.engine.dispose()


def get_database(request: Request) -> Database:
    return request.app.state.database


async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    Example usage in a route:
        @router.get("/notes")
        async def list_notes(db: AsyncSession = Depends(get_db_session)):
            ...
    """
    database: Optional[Database] = getattr(request.app.state, "database", None)
    if database is None:
        raise RuntimeError("Application has no database configured")
    async with database.session() as session:
        yield session
