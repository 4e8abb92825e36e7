"""
Portfolio API — Database Engine and Session Management
========================================================

What:  Async SQLAlchemy engine wrapper, declarative base, and the FastAPI
       session dependency.
How:   A Database object owns one engine (connection pool) and one session
       factory. It is built once at startup, checked with SELECT 1, stored on
       app.state, and disposed at shutdown. Handlers receive a session per
       request through get_db_session(), which reads the Database from the
       application state rather than from a module-level global.

Connection Pooling:
    pool_size / max_overflow:  from settings (PostgreSQL only)
    pool_pre_ping:             validates connections before use
    pool_recycle=3600:         recycles connections every hour
    SQLite URLs (tests) use SQLAlchemy's default pool for the dialect.
"""

from typing import Any, AsyncGenerator, Dict

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from portfolio_api.config import Settings


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Shares one metadata object, which Alembic reads for migrations and the
    seed command uses for --create-tables.
    """
    pass


class Database:
    """
    Process-wide handle on the document store.

    Attributes:
        engine:           AsyncEngine managing the connection pool
        session_factory:  async_sessionmaker producing one AsyncSession per request
    """

    def __init__(self, engine: AsyncEngine):
        self.engine = engine
        self.session_factory = async_sessionmaker(
            engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        """Build the engine with pool options appropriate to the URL's dialect."""
        options: Dict[str, Any] = {
            "pool_pre_ping": settings.db_pool_pre_ping,
            "echo": settings.log_level == "DEBUG",
        }
        if not settings.is_sqlite:
            options.update(
                pool_size=settings.db_pool_size,
                max_overflow=settings.db_max_overflow,
                pool_recycle=3600,
            )
        return cls(create_async_engine(settings.database_url, **options))

    async def ping(self) -> None:
        """
        Open a connection and run SELECT 1.

        Raises whatever the driver raises; callers decide whether that is fatal
        (startup) or a degraded status (health check).
        """
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

    async def create_all(self) -> None:
        """Create any missing tables. Development and test helper; production uses Alembic."""
        # Registers the models on Base.metadata
        from portfolio_api.models import document  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def dispose(self) -> None:
        """Close every pooled connection."""
        await self.engine.dispose()


def get_database(request: Request) -> Database:
    """FastAPI dependency returning the Database attached at startup."""
    return request.app.state.database


async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Creates a new session from the application's session factory
        2. Yields it to the route handler
        3. On success: commits (persists contact inserts)
        4. On error: rolls back and re-raises for the global handlers
        5. Always: closes the session, returning the connection to the pool

    Example usage in a route:
        @router.get("/articles")
        async def list_articles(db: AsyncSession = Depends(get_db_session)):
            ...
    """
    database = get_database(request)
    async with database.session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()
