"""
Database Session Management Module

Provides asynchronous database engine and session factories, supporting SQLite and PostgreSQL.
Everything is built from an explicit KVStoreConfig.
"""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from clansite.config import KVStoreConfig


def create_engine(config: KVStoreConfig) -> AsyncEngine:
    """
    Create asynchronous database engine

    Args:
        config: KV store configuration

    Returns:
        AsyncEngine: Engine bound to config.database_url
    """
    connect_args = {}
    if config.database_type == "sqlite":
        connect_args = {
            "check_same_thread": False,
            "timeout": config.timeout_seconds,
        }
    else:
        connect_args = {"timeout": config.timeout_seconds}

    return create_async_engine(
        config.database_url,
        # echo=True prints SQL statements in DEBUG mode
        echo=config.echo,
        pool_pre_ping=True,
        connect_args=connect_args,
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create asynchronous session factory"""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,  # Do not expire objects after commit, avoids extra queries
        autocommit=False,
        autoflush=False,
    )


async def init_db(engine: AsyncEngine) -> None:
    """
    Initialize Database

    Creates all defined table structures. Called on application startup.
    """
    from clansite.db.models import Base

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
