"""
Data Access Layer Module Initialization
"""

from clansite.repositories.kv_store_repo import KVStoreRepository
from clansite.repositories.factory import KVStoreManager

__all__ = [
    "KVStoreRepository",
    "KVStoreManager",
]
