"""
Test Configuration Module
"""

import pytest
import pytest_asyncio
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker

from clansite.db.models import Base
from clansite.repositories.memory import InMemoryKVStoreRepository
from clansite.repositories.sqlalchemy import SQLAlchemyKVStoreRepository


# Use in-memory database for testing
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture
async def async_engine():
    """Create async database engine for testing"""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
    )

    # Create all tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    # Clean up
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(async_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create database session for testing"""
    async_session = async_sessionmaker(
        async_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session() as session:
        yield session


@pytest_asyncio.fixture
async def sql_repo(db_session) -> SQLAlchemyKVStoreRepository:
    return SQLAlchemyKVStoreRepository(db_session)


@pytest.fixture
def memory_repo() -> InMemoryKVStoreRepository:
    return InMemoryKVStoreRepository()


@pytest_asyncio.fixture(params=["sqlalchemy", "memory"])
async def kv_repo(request, db_session):
    """Run a test against every locally available backend"""
    if request.param == "sqlalchemy":
        return SQLAlchemyKVStoreRepository(db_session)
    return InMemoryKVStoreRepository()
