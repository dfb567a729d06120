"""
KV Store Factory Module

Owns the backend connection for the configured KV store type and hands out
repository instances.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from redis.asyncio import Redis
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from clansite.config import KVStoreConfig
from clansite.db.redis import close_redis, create_redis
from clansite.db.session import create_engine, create_session_factory, init_db
from clansite.repositories.kv_store_repo import KVStoreRepository
from clansite.repositories.memory import InMemoryKVStoreRepository
from clansite.repositories.redis import RedisKVStoreRepository
from clansite.repositories.sqlalchemy import SQLAlchemyKVStoreRepository

logger = logging.getLogger(__name__)


class KVStoreManager:
    """
    KV Store Backend Lifecycle

    start() opens the connection (database engine, Redis client or memory dict),
    repository() yields a repository bound to it, close() releases it.
    """

    def __init__(self, config: KVStoreConfig):
        self.config = config
        self._engine: Optional[AsyncEngine] = None
        self._session_factory: Optional[async_sessionmaker[AsyncSession]] = None
        self._redis: Optional[Redis] = None
        self._memory: Optional[InMemoryKVStoreRepository] = None

    @property
    def started(self) -> bool:
        return any(
            backend is not None for backend in (self._engine, self._redis, self._memory)
        )

    async def start(self) -> None:
        """Open the backend connection for config.backend"""
        if self.started:
            logger.warning("KV store already started")
            return

        backend = self.config.backend
        if backend == "database":
            self._engine = create_engine(self.config)
            self._session_factory = create_session_factory(self._engine)
            await init_db(self._engine)
        elif backend == "redis":
            self._redis = await create_redis(self.config)
        elif backend == "memory":
            self._memory = InMemoryKVStoreRepository()
        else:
            raise ValueError(f"Unsupported KV store type: {backend}")

        logger.info(f"KV store started (backend: {backend})")

    async def close(self) -> None:
        """Release the backend connection"""
        if self._engine is not None:
            await self._engine.dispose()
            self._engine = None
            self._session_factory = None
        if self._redis is not None:
            await close_redis(self._redis)
            self._redis = None
        self._memory = None

    @asynccontextmanager
    async def repository(self) -> AsyncIterator[KVStoreRepository]:
        """
        Yield a repository for one unit of work

        For the database backend each call gets its own session.

        Raises:
            RuntimeError: If start() has not been called
        """
        if self._session_factory is not None:
            async with self._session_factory() as session:
                try:
                    yield SQLAlchemyKVStoreRepository(session, self.config.timeout_seconds)
                except Exception:
                    await session.rollback()
                    raise
        elif self._redis is not None:
            yield RedisKVStoreRepository(self._redis, self.config.timeout_seconds)
        elif self._memory is not None:
            yield self._memory
        else:
            raise RuntimeError("KV store not started. Ensure start() has been called.")
