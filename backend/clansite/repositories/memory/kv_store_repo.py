"""
Key-Value Store Repository In-Memory Implementation

Keeps records in a process-local dict. Suitable for tests and
single-process demo deployments; data is lost on restart.
"""

import copy
from typing import Any, Optional

from clansite.common.time import utc_now
from clansite.domain.kv_store import KeyValueModel
from clansite.repositories.kv_store_repo import KVStoreRepository


class InMemoryKVStoreRepository(KVStoreRepository):
    """
    Key-Value Store Repository In-Memory Implementation

    Values are deep-copied on the way in and out so callers never share
    mutable state with the store.
    """

    def __init__(self):
        self._records: dict[str, KeyValueModel] = {}

    def _copy(self, record: KeyValueModel) -> KeyValueModel:
        return record.model_copy(update={"value": copy.deepcopy(record.value)})

    async def get(self, key: str) -> Optional[KeyValueModel]:
        record = self._records.get(key)
        if record is None:
            return None
        return self._copy(record)

    async def set(self, key: str, value: Any) -> KeyValueModel:
        now = utc_now()
        existing = self._records.get(key)
        record = KeyValueModel(
            key=key,
            value=copy.deepcopy(value),
            created_at=existing.created_at if existing else now,
            updated_at=now,
        )
        self._records[key] = record
        return self._copy(record)

    async def delete(self, key: str) -> bool:
        return self._records.pop(key, None) is not None

    async def scan_by_prefix(self, prefix: str) -> list[KeyValueModel]:
        return [
            self._copy(self._records[key])
            for key in sorted(self._records)
            if key.startswith(prefix)
        ]
