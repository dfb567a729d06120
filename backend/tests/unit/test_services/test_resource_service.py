"""
Resource Service Unit Tests
"""

import uuid

import pytest

from clansite.services.resource_service import (
    CLAN_INFO_DEFAULT,
    clan_info_service,
    team_members_service,
    videos_service,
    wipes_service,
)


@pytest.mark.asyncio
async def test_create_without_id_assigns_uuid(kv_repo):
    service = wipes_service(kv_repo)

    id = await service.create({"server": "EU Main", "date": "2024-06-06"})

    assert uuid.UUID(id)
    record = await kv_repo.get(f"wipe:{id}")
    assert record.value == {"server": "EU Main", "date": "2024-06-06", "id": id}


@pytest.mark.asyncio
async def test_create_with_id_then_update_preserves_id(kv_repo):
    service = team_members_service(kv_repo)

    id = await service.create({"id": "ada", "name": "Ada", "role": "Leader"})
    await service.update("ada", {"id": "someone-else", "name": "Ada L."})

    assert id == "ada"
    members = await service.get_all()
    assert members == [{"id": "ada", "name": "Ada L."}]
    assert await kv_repo.get("team:someone-else") is None


@pytest.mark.asyncio
async def test_delete_removes_from_list(kv_repo):
    service = wipes_service(kv_repo)
    keep = await service.create({"server": "US"})
    drop = await service.create({"server": "EU"})

    await service.delete(drop)
    await service.delete(drop)

    assert [w["id"] for w in await service.get_all()] == [keep]


@pytest.mark.asyncio
async def test_resources_do_not_leak_across_prefixes(kv_repo):
    await wipes_service(kv_repo).create({"id": "1", "server": "EU"})
    await team_members_service(kv_repo).create({"id": "1", "name": "Ada"})
    await clan_info_service(kv_repo).replace({"description": "hello"})

    assert await wipes_service(kv_repo).get_all() == [{"id": "1", "server": "EU"}]
    assert await team_members_service(kv_repo).get_all() == [{"id": "1", "name": "Ada"}]
    assert await videos_service(kv_repo).get_all() == []


@pytest.mark.asyncio
async def test_video_create_stamps_uploaded_at(memory_repo):
    service = videos_service(memory_repo)

    id = await service.create({"title": "Raid", "url": "https://youtu.be/x", "uploadedAt": "1999"})

    video = (await memory_repo.get(f"video:{id}")).value
    assert video["uploadedAt"] != "1999"
    assert video["uploadedAt"].endswith("Z")


@pytest.mark.asyncio
async def test_video_update_keeps_uploaded_at(memory_repo):
    service = videos_service(memory_repo)
    id = await service.create({"title": "Raid"})
    uploaded_at = (await memory_repo.get(f"video:{id}")).value["uploadedAt"]

    await service.update(id, {"title": "Raid (edited)", "uploadedAt": "2000-01-01T00:00:00Z"})

    video = (await memory_repo.get(f"video:{id}")).value
    assert video == {"title": "Raid (edited)", "id": id, "uploadedAt": uploaded_at}


@pytest.mark.asyncio
async def test_video_update_of_missing_record_stamps_now(memory_repo):
    service = videos_service(memory_repo)

    await service.update("new", {"title": "Fresh"})

    video = (await memory_repo.get("video:new")).value
    assert video["id"] == "new"
    assert video["uploadedAt"]


@pytest.mark.asyncio
async def test_clan_info_default_when_absent(kv_repo):
    service = clan_info_service(kv_repo)

    info = await service.get()

    assert info == CLAN_INFO_DEFAULT
    info["description"] = "mutated"
    assert (await service.get())["description"] == ""


@pytest.mark.asyncio
async def test_clan_info_replace(kv_repo):
    service = clan_info_service(kv_repo)
    await service.replace({"description": "a", "discord": "d", "website": "w"})

    await service.replace({"description": "b"})

    assert await service.get() == {"description": "b"}
