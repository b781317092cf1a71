"""
Database Session Management
============================

Handles the async engine, its connection pool and the transaction scope
every relational store operation runs in.
"""

import logging
import os
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from sqlalchemy import event
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from todolabels.config import settings
from todolabels.models.base import Base

logger = logging.getLogger(__name__)

_engine: Optional[AsyncEngine] = None
_session_factory: Optional[async_sessionmaker] = None


def create_db_engine(
    database_url: Optional[str] = None,
    echo: Optional[bool] = None,
    pool_size: Optional[int] = None,
) -> AsyncEngine:
    """
    Create and configure an async database engine.

    Args:
        database_url: Async SQLAlchemy URL. Default from settings.
        echo: Log every statement. Default from settings.app_debug.
        pool_size: Pooled connections for server databases. Default from settings.
    """
    database_url = database_url or settings.database_url
    echo = settings.app_debug if echo is None else echo
    pool_size = pool_size or settings.db_pool_size
    url = make_url(database_url)

    # SQLite-specific configuration
    if url.get_backend_name() == "sqlite":
        db_path = url.database
        in_memory = not db_path or db_path == ":memory:"

        # Ensure data directory exists
        if not in_memory:
            db_dir = os.path.dirname(db_path)
            if db_dir and not os.path.exists(db_dir):
                os.makedirs(db_dir, exist_ok=True)

        if in_memory:
            # One shared connection, otherwise every checkout sees an empty database
            engine = create_async_engine(
                database_url,
                connect_args={"check_same_thread": False},
                poolclass=StaticPool,
                echo=echo
            )
        else:
            engine = create_async_engine(database_url, echo=echo)

        # Enable foreign keys and WAL mode for SQLite
        @event.listens_for(engine.sync_engine, "connect")
        def set_sqlite_pragma(dbapi_conn, connection_record):
            cursor = dbapi_conn.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.execute("PRAGMA journal_mode=WAL")
            cursor.close()

    else:
        engine = create_async_engine(
            database_url,
            echo=echo,
            pool_size=pool_size,
            pool_pre_ping=True
        )

    logger.debug(f"Created engine for {url.render_as_string(hide_password=True)}")
    return engine


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker:
    """Session factory bound to ``engine``; sessions keep loaded state after commit."""
    return async_sessionmaker(engine, autoflush=False, expire_on_commit=False)


def get_engine() -> AsyncEngine:
    """Process-wide engine, created on first use."""
    global _engine
    if _engine is None:
        _engine = create_db_engine()
    return _engine


def get_session_factory() -> async_sessionmaker:
    """Process-wide session factory, bound to get_engine()."""
    global _session_factory
    if _session_factory is None:
        _session_factory = create_session_factory(get_engine())
    return _session_factory


@asynccontextmanager
async def transaction(session_factory: Optional[async_sessionmaker] = None) -> AsyncIterator[AsyncSession]:
    """
    Transaction scope for one unit of work.

    Commits when the block exits normally, rolls back when it raises, and
    always returns the connection to the pool.

    Usage:
        async with transaction(session_factory) as session:
            await session.execute(...)
    """
    session = (session_factory or get_session_factory())()
    try:
        yield session
        await session.commit()
    except Exception:
        await session.rollback()
        raise
    finally:
        await session.close()


async def create_all_tables(engine_instance: Optional[AsyncEngine] = None) -> None:
    """Create all tables in the database."""
    engine_instance = engine_instance or get_engine()
    async with engine_instance.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def drop_all_tables(engine_instance: Optional[AsyncEngine] = None) -> None:
    """Drop all tables in the database."""
    engine_instance = engine_instance or get_engine()
    async with engine_instance.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

