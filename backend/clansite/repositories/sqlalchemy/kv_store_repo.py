"""
Key-Value Store Repository SQLAlchemy Implementation

Provides concrete database operation implementation for KV Store.
"""

from typing import Any, Optional

from sqlalchemy import delete, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from clansite.common.time import ensure_utc, utc_now_naive
from clansite.db.models import KeyValueStore as KeyValueStoreORM
from clansite.domain.kv_store import KeyValueModel
from clansite.repositories.kv_store_repo import DEFAULT_TIMEOUT_SECONDS, KVStoreRepository


class SQLAlchemyKVStoreRepository(KVStoreRepository):
    """
    Key-Value Store Repository SQLAlchemy Implementation

    Uses SQLAlchemy ORM to implement database operations for KV Store.
    Writes are a single INSERT ... ON CONFLICT DO UPDATE statement, so
    concurrent writers to one key never observe a partial row.
    """

    storage_errors = (SQLAlchemyError, OSError)

    def __init__(self, session: AsyncSession, timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS):
        """
        Initialize Repository

        Args:
            session: Async database session
            timeout_seconds: Upper bound for each operation
        """
        self.session = session
        self.timeout_seconds = timeout_seconds

    def _to_domain(self, entity: KeyValueStoreORM) -> KeyValueModel:
        """Convert ORM entity to domain model"""
        return KeyValueModel(
            key=entity.key,
            value=entity.value,
            created_at=ensure_utc(entity.created_at),
            updated_at=ensure_utc(entity.updated_at),
        )

    def _insert(self):
        dialect = self.session.get_bind().dialect.name
        if dialect == "postgresql":
            return pg_insert(KeyValueStoreORM)
        return sqlite_insert(KeyValueStoreORM)

    async def get(self, key: str) -> Optional[KeyValueModel]:
        """Get value by key, returns None if not found"""
        result = await self._guard(
            "get",
            self.session.execute(
                select(KeyValueStoreORM).where(KeyValueStoreORM.key == key)
            ),
        )
        entity = result.scalar_one_or_none()
        if not entity:
            return None
        return self._to_domain(entity)

    async def set(self, key: str, value: Any) -> KeyValueModel:
        """Upsert a key-value pair, keeping the original created_at"""
        now = utc_now_naive()
        stmt = self._insert().values(
            key=key,
            value=value,
            created_at=now,
            updated_at=now,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[KeyValueStoreORM.key],
            set_={"value": stmt.excluded["value"], "updated_at": stmt.excluded["updated_at"]},
        ).returning(KeyValueStoreORM)

        async def _write() -> KeyValueStoreORM:
            try:
                result = await self.session.execute(
                    stmt, execution_options={"populate_existing": True}
                )
                entity = result.scalar_one()
                await self.session.commit()
            except SQLAlchemyError:
                await self.session.rollback()
                raise
            return entity

        entity = await self._guard("set", _write())
        return self._to_domain(entity)

    async def delete(self, key: str) -> bool:
        """Delete a key"""

        async def _delete() -> int:
            try:
                result = await self.session.execute(
                    delete(KeyValueStoreORM).where(KeyValueStoreORM.key == key)
                )
                await self.session.commit()
            except SQLAlchemyError:
                await self.session.rollback()
                raise
            return result.rowcount

        deleted_count = await self._guard("delete", _delete())
        return deleted_count > 0

    async def scan_by_prefix(self, prefix: str) -> list[KeyValueModel]:
        """Get all records whose key starts with prefix, ordered by key"""
        result = await self._guard(
            "scan_by_prefix",
            self.session.execute(
                select(KeyValueStoreORM)
                .where(KeyValueStoreORM.key.startswith(prefix, autoescape=True))
                .order_by(KeyValueStoreORM.key)
            ),
        )
        return [self._to_domain(entity) for entity in result.scalars().all()]
