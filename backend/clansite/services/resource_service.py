"""
Resource Service Module

CRUD over the KV store for the site's resources. Each list-style resource
lives under a fixed key prefix (``wipe:``, ``team:``, ``video:``); clan info
is a single record.
"""

import logging
import uuid
from typing import Any, Optional

from clansite.common.time import utc_now_iso
from clansite.repositories.kv_store_repo import KVStoreRepository

logger = logging.getLogger(__name__)

WIPES_PREFIX = "wipe:"
TEAM_MEMBERS_PREFIX = "team:"
VIDEOS_PREFIX = "video:"
CLAN_INFO_KEY = "clan:info"

CLAN_INFO_DEFAULT = {"description": "", "discord": "", "website": ""}


class ResourceService:
    """
    Prefix-bound Resource Service

    Stateless: every call goes straight to the repository.
    """

    def __init__(self, repo: KVStoreRepository, prefix: str, name: str):
        """
        Initialize Service

        Args:
            repo: KV store repository
            prefix: Key prefix, e.g. "wipe:"
            name: Human-readable resource name for logs
        """
        self.repo = repo
        self.prefix = prefix
        self.name = name

    def key_for(self, id: str) -> str:
        return f"{self.prefix}{id}"

    async def get_all(self) -> list[Any]:
        """Return every stored document of this resource"""
        records = await self.repo.scan_by_prefix(self.prefix)
        return [record.value for record in records]

    async def _prepare_create(self, id: str, document: dict[str, Any]) -> dict[str, Any]:
        return {**document, "id": id}

    async def _prepare_update(self, id: str, document: dict[str, Any]) -> dict[str, Any]:
        return {**document, "id": id}

    async def create(self, document: dict[str, Any]) -> str:
        """
        Store a new document

        Args:
            document: Document body; a truthy "id" is kept, otherwise a UUID is assigned

        Returns:
            str: The document id
        """
        id = document.get("id") or str(uuid.uuid4())
        id = str(id)
        await self.repo.set(self.key_for(id), await self._prepare_create(id, document))
        logger.info(f"Created {self.name} {id}")
        return id

    async def update(self, id: str, document: dict[str, Any]) -> None:
        """
        Replace the document stored under id

        The id from the path wins over any id in the body.
        """
        await self.repo.set(self.key_for(id), await self._prepare_update(id, document))
        logger.info(f"Updated {self.name} {id}")

    async def delete(self, id: str) -> None:
        """Delete the document; deleting a missing id is not an error"""
        deleted = await self.repo.delete(self.key_for(id))
        logger.info(f"Deleted {self.name} {id} (existed: {deleted})")


class VideoService(ResourceService):
    """
    Video Resource Service

    Stamps ``uploadedAt`` on create and keeps it across updates.
    """

    def __init__(self, repo: KVStoreRepository):
        super().__init__(repo, VIDEOS_PREFIX, "video")

    async def _prepare_create(self, id: str, document: dict[str, Any]) -> dict[str, Any]:
        return {**document, "id": id, "uploadedAt": utc_now_iso()}

    async def _prepare_update(self, id: str, document: dict[str, Any]) -> dict[str, Any]:
        existing = await self.repo.get(self.key_for(id))
        uploaded_at: Optional[str] = None
        if existing is not None and isinstance(existing.value, dict):
            uploaded_at = existing.value.get("uploadedAt")
        return {**document, "id": id, "uploadedAt": uploaded_at or utc_now_iso()}


class SingletonResourceService:
    """
    Single-record Resource Service (clan info)
    """

    def __init__(
        self,
        repo: KVStoreRepository,
        key: str = CLAN_INFO_KEY,
        default: Optional[dict[str, Any]] = None,
    ):
        self.repo = repo
        self.key = key
        self.default = dict(CLAN_INFO_DEFAULT if default is None else default)

    async def get(self) -> Any:
        """Return the stored document, or a copy of the default when absent"""
        record = await self.repo.get(self.key)
        if record is None:
            return dict(self.default)
        return record.value

    async def replace(self, document: dict[str, Any]) -> None:
        await self.repo.set(self.key, document)
        logger.info(f"Replaced {self.key}")


def wipes_service(repo: KVStoreRepository) -> ResourceService:
    return ResourceService(repo, WIPES_PREFIX, "wipe")


def team_members_service(repo: KVStoreRepository) -> ResourceService:
    return ResourceService(repo, TEAM_MEMBERS_PREFIX, "team member")


def videos_service(repo: KVStoreRepository) -> VideoService:
    return VideoService(repo)


def clan_info_service(repo: KVStoreRepository) -> SingletonResourceService:
    return SingletonResourceService(repo)
