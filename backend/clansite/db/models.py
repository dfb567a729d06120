"""
SQLAlchemy ORM Model Definitions

Defines the database table backing the KV store:
- kv_store: Key-Value Records Table
"""

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, DateTime, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from clansite.common.time import utc_now_naive


class Base(DeclarativeBase):
    """SQLAlchemy ORM Base Class"""
    pass


class KeyValueStore(Base):
    """
    Key-Value Records Table

    One row per key; the value column holds an arbitrary JSON document.
    """
    __tablename__ = "kv_store"

    # Record key, e.g. "wipe:<id>"
    key: Mapped[str] = mapped_column(String(512), primary_key=True)
    # JSON document
    value: Mapped[Any] = mapped_column(JSON, nullable=True)
    # Creation Time
    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=utc_now_naive, nullable=False
    )
    # Update Time
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=utc_now_naive, onupdate=utc_now_naive, nullable=False
    )
