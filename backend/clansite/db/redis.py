"""
Redis Connection Management Module

Provides Redis client lifecycle management for the KV store backend.
Only used when KV_STORE_TYPE is set to "redis".
"""

import logging
import warnings
from urllib.parse import urlparse

from redis.asyncio import Redis

from clansite.config import KVStoreConfig

logger = logging.getLogger(__name__)


def _check_redis_security(redis_url: str) -> None:
    """
    Check Redis connection security.

    Warns if Redis URL has no password and is not a localhost connection.
    """
    parsed = urlparse(redis_url)

    has_password = bool(parsed.password)
    is_localhost = parsed.hostname in ("localhost", "127.0.0.1", "::1")

    if not has_password and not is_localhost:
        warnings.warn(
            "SECURITY WARNING: Redis connection has no password and is not connecting to localhost. "
            "Please set a password in REDIS_URL using the format: redis://:password@host:port/db",
            UserWarning,
            stacklevel=3,
        )
        logger.warning(
            "Redis connection without password to non-localhost host detected. "
            "Consider adding password authentication for production."
        )


async def create_redis(config: KVStoreConfig) -> Redis:
    """
    Create Redis Connection

    Creates an async Redis client from config.redis_url and verifies connectivity.
    Socket operations are bounded by config.timeout_seconds.

    Returns:
        Redis: Connected async client
    """
    _check_redis_security(config.redis_url)

    client = Redis.from_url(
        config.redis_url,
        decode_responses=True,
        socket_timeout=config.timeout_seconds,
        socket_connect_timeout=config.timeout_seconds,
    )

    await client.ping()
    parsed = urlparse(config.redis_url)
    logger.info(f"Redis connection established: {parsed.hostname}:{parsed.port or 6379}")
    return client


async def close_redis(client: Redis) -> None:
    """
    Close Redis Connection

    Gracefully closes the Redis client connection.
    """
    await client.aclose()
    logger.info("Redis connection closed")
