"""
Key-Value Store Repository Redis Implementation

Provides concrete Redis operation implementation for KV Store.
"""

import json
import re
from typing import Any, Optional

from redis.asyncio import Redis
from redis.exceptions import RedisError

from clansite.common.time import utc_now
from clansite.domain.kv_store import KeyValueModel
from clansite.repositories.kv_store_repo import DEFAULT_TIMEOUT_SECONDS, KVStoreRepository

# Characters with special meaning in a Redis glob pattern
_GLOB_SPECIAL = re.compile(r"([*?\[\]\\])")


def escape_glob(prefix: str) -> str:
    """Escape a literal prefix for use in SCAN MATCH"""
    return _GLOB_SPECIAL.sub(r"\\\1", prefix)


class RedisKVStoreRepository(KVStoreRepository):
    """
    Key-Value Store Repository Redis Implementation

    Each key holds one JSON string with the value and its timestamps,
    written with a single SET so readers never see a partial record.
    """

    storage_errors = (RedisError, OSError, ValueError)

    def __init__(
        self,
        client: Redis,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        scan_count: int = 500,
    ):
        """
        Initialize Repository

        Args:
            client: Async Redis client instance (decode_responses=True)
            timeout_seconds: Upper bound for each operation
            scan_count: COUNT hint for SCAN iterations
        """
        self.client = client
        self.timeout_seconds = timeout_seconds
        self.scan_count = scan_count

    def _serialize(self, value: Any, created_at: str, updated_at: str) -> str:
        """Serialize value with metadata to JSON string"""
        return json.dumps(
            {
                "value": value,
                "created_at": created_at,
                "updated_at": updated_at,
            },
            ensure_ascii=False,
        )

    def _deserialize(self, key: str, raw: str) -> KeyValueModel:
        """Deserialize JSON string to domain model"""
        data = json.loads(raw)
        return KeyValueModel(
            key=key,
            value=data["value"],
            created_at=data["created_at"],
            updated_at=data["updated_at"],
        )

    async def get(self, key: str) -> Optional[KeyValueModel]:
        """Get value by key, returns None if not found"""

        async def _get() -> Optional[KeyValueModel]:
            raw = await self.client.get(key)
            if raw is None:
                return None
            return self._deserialize(key, raw)

        return await self._guard("get", _get())

    async def set(self, key: str, value: Any) -> KeyValueModel:
        """Set a key-value pair"""
        now_iso = utc_now().isoformat()

        async def _set() -> KeyValueModel:
            # Preserve original created_at if key already exists
            existing = await self.client.get(key)
            if existing is not None:
                created_at = json.loads(existing)["created_at"]
            else:
                created_at = now_iso

            await self.client.set(key, self._serialize(value, created_at, now_iso))
            return KeyValueModel(
                key=key,
                value=value,
                created_at=created_at,
                updated_at=now_iso,
            )

        return await self._guard("set", _set())

    async def delete(self, key: str) -> bool:
        """Delete a key"""
        deleted_count = await self._guard("delete", self.client.delete(key))
        return deleted_count > 0

    async def scan_by_prefix(self, prefix: str) -> list[KeyValueModel]:
        """
        Get all records whose key starts with prefix

        Keys are collected with SCAN and read with one MGET; keys deleted in
        between are skipped.
        """

        async def _scan() -> list[KeyValueModel]:
            keys = set()
            async for key in self.client.scan_iter(
                match=f"{escape_glob(prefix)}*", count=self.scan_count
            ):
                keys.add(key)
            if not keys:
                return []

            ordered = sorted(keys)
            raws = await self.client.mget(ordered)
            return [
                self._deserialize(key, raw)
                for key, raw in zip(ordered, raws)
                if raw is not None
            ]

        return await self._guard("scan_by_prefix", _scan())
