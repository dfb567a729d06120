"""
Redis Repository Implementation Module Initialization
"""

from clansite.repositories.redis.kv_store_repo import RedisKVStoreRepository

__all__ = [
    "RedisKVStoreRepository",
]
