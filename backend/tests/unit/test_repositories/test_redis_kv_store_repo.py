"""
Test Key-Value Store Repository Redis Implementation
"""

import json
import re
from unittest.mock import AsyncMock, MagicMock

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from clansite.common.errors import StorageUnavailableError
from clansite.repositories.redis.kv_store_repo import RedisKVStoreRepository, escape_glob


class DictRedis:
    """Dict-backed stand-in for the handful of async Redis calls the repository makes"""

    def __init__(self):
        self.data: dict[str, str] = {}
        self.scan_patterns: list[str] = []
        self.vanish_on_mget: set[str] = set()

    async def get(self, key):
        return self.data.get(key)

    async def set(self, key, value):
        self.data[key] = value
        return True

    async def delete(self, key):
        return 1 if self.data.pop(key, None) is not None else 0

    async def mget(self, keys):
        for key in self.vanish_on_mget:
            self.data.pop(key, None)
        return [self.data.get(key) for key in keys]

    async def scan_iter(self, match=None, count=None):
        self.scan_patterns.append(match)
        assert match.endswith("*")
        literal = re.sub(r"\\(.)", r"\1", match[:-1])
        # Redis may return a key more than once during SCAN
        for key in list(self.data) + list(self.data)[:1]:
            if key.startswith(literal):
                yield key


@pytest.fixture
def redis_client():
    return DictRedis()


@pytest.fixture
def redis_repo(redis_client):
    return RedisKVStoreRepository(redis_client)


def test_escape_glob():
    assert escape_glob("wipe:") == "wipe:"
    assert escape_glob("a*b?c[d]e\\") == "a\\*b\\?c\\[d\\]e\\\\"


@pytest.mark.asyncio
async def test_set_and_get(redis_repo, redis_client):
    value = {"id": "1", "title": "Raid night", "views": 3}

    result = await redis_repo.set("video:1", value)

    assert result.value == value
    stored = json.loads(redis_client.data["video:1"])
    assert stored["value"] == value
    assert "created_at" in stored and "updated_at" in stored

    retrieved = await redis_repo.get("video:1")
    assert retrieved is not None
    assert retrieved.value == value


@pytest.mark.asyncio
async def test_get_missing(redis_repo):
    assert await redis_repo.get("video:missing") is None


@pytest.mark.asyncio
async def test_overwrite_keeps_created_at(redis_repo):
    first = await redis_repo.set("clan:info", {"discord": "a"})
    second = await redis_repo.set("clan:info", {"discord": "b"})

    assert second.created_at == first.created_at
    assert (await redis_repo.get("clan:info")).value == {"discord": "b"}


@pytest.mark.asyncio
async def test_delete(redis_repo):
    await redis_repo.set("team:1", {"name": "Ada"})

    assert await redis_repo.delete("team:1") is True
    assert await redis_repo.delete("team:1") is False
    assert await redis_repo.get("team:1") is None


@pytest.mark.asyncio
async def test_scan_by_prefix(redis_repo, redis_client):
    await redis_repo.set("wipe:2", {"id": "2"})
    await redis_repo.set("team:1", {"id": "t"})
    await redis_repo.set("wipe:1", {"id": "1"})

    records = await redis_repo.scan_by_prefix("wipe:")

    assert [r.key for r in records] == ["wipe:1", "wipe:2"]
    assert redis_client.scan_patterns == ["wipe:*"]


@pytest.mark.asyncio
async def test_scan_by_prefix_escapes_glob(redis_repo, redis_client):
    await redis_repo.set("a*b:1", {"n": 1})
    await redis_repo.set("axb:1", {"n": 2})

    records = await redis_repo.scan_by_prefix("a*b:")

    assert [r.key for r in records] == ["a*b:1"]
    assert redis_client.scan_patterns == ["a\\*b:*"]


@pytest.mark.asyncio
async def test_scan_skips_keys_deleted_mid_scan(redis_repo, redis_client):
    await redis_repo.set("wipe:1", {"id": "1"})
    await redis_repo.set("wipe:2", {"id": "2"})
    redis_client.vanish_on_mget = {"wipe:1"}

    records = await redis_repo.scan_by_prefix("wipe:")

    assert [r.key for r in records] == ["wipe:2"]


@pytest.mark.asyncio
async def test_scan_empty(redis_repo):
    assert await redis_repo.scan_by_prefix("wipe:") == []


@pytest.mark.asyncio
async def test_connection_error_becomes_storage_unavailable():
    client = MagicMock()
    client.get = AsyncMock(side_effect=RedisConnectionError("Connection refused"))
    repo = RedisKVStoreRepository(client)

    with pytest.raises(StorageUnavailableError) as excinfo:
        await repo.get("wipe:1")

    assert excinfo.value.details["reason"] == "ConnectionError"


@pytest.mark.asyncio
async def test_corrupt_record_becomes_storage_unavailable(redis_repo, redis_client):
    redis_client.data["wipe:1"] = "not json"

    with pytest.raises(StorageUnavailableError):
        await redis_repo.get("wipe:1")
