"""
In-Memory Repository Implementation Module Initialization
"""

from clansite.repositories.memory.kv_store_repo import InMemoryKVStoreRepository

__all__ = [
    "InMemoryKVStoreRepository",
]
