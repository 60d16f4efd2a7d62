"""
Database connection management.

Provides the async SQLAlchemy engine, session factory and schema creation.

Dependencies: sqlalchemy, orchestrator.configs
System role: Database connection lifecycle management
"""

from pathlib import Path

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine

from orchestrator.boundary.db.base import Base
from orchestrator.configs.database import DatabaseSettings


def get_async_engine(db_config: DatabaseSettings) -> AsyncEngine:
    """
    Create async SQLAlchemy engine.

    Server databases get a sized connection pool with pre-ping; SQLite
    files get their parent directory created.

    Args:
        db_config: Database settings

    Returns:
        AsyncEngine: Configured async engine

    Raises:
        ArgumentError: If database URL is invalid
    """
    url = db_config.async_database_url
    if db_config.is_sqlite:
        database = make_url(url).database
        if database and database != ":memory:":
            Path(database).parent.mkdir(parents=True, exist_ok=True)
        return create_async_engine(url, echo=db_config.echo_sql)

    return create_async_engine(
        url,
        echo=db_config.echo_sql,
        pool_size=db_config.pool_size,
        max_overflow=db_config.max_overflow,
        pool_timeout=db_config.pool_timeout,
        pool_pre_ping=True,
    )


def get_async_session_factory(engine: AsyncEngine) -> async_sessionmaker:
    """
    Create async session factory bound to the engine.

    autoflush is off and objects stay usable after commit so callers can
    convert rows to domain models outside the transaction.

    Args:
        engine: Async engine

    Returns:
        async_sessionmaker: Session factory

    Usage:
        SessionFactory = get_async_session_factory(engine)
        async with SessionFactory() as session, session.begin():
            session.add(obj)
    """
    return async_sessionmaker(
        bind=engine,
        autoflush=False,
        expire_on_commit=False,
    )


async def create_tables(engine: AsyncEngine) -> None:
    """Create all registered tables if they do not exist."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
