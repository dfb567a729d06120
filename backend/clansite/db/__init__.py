"""
Database Module Initialization
"""

from clansite.db.session import create_engine, create_session_factory, init_db
from clansite.db.models import Base, KeyValueStore

__all__ = [
    "create_engine",
    "create_session_factory",
    "init_db",
    "Base",
    "KeyValueStore",
]
