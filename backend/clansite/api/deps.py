"""
API Dependency Injection Module

Provides the dependencies required by FastAPI routes.
"""

from typing import Annotated, AsyncIterator

from fastapi import Depends, Header, Request

from clansite.common.errors import UnauthorizedError
from clansite.config import get_settings
from clansite.repositories import KVStoreManager, KVStoreRepository
from clansite.services import (
    AuthService,
    ResourceService,
    SingletonResourceService,
    clan_info_service,
    team_members_service,
    videos_service,
    wipes_service,
)


def get_kv_manager(request: Request) -> KVStoreManager:
    """Get the KV store manager created in the application lifespan"""
    return request.app.state.kv_store


async def get_kv_repo(
    manager: Annotated[KVStoreManager, Depends(get_kv_manager)],
) -> AsyncIterator[KVStoreRepository]:
    """
    Get KV store repository dependency

    Yields:
        KVStoreRepository: Repository bound to the configured backend
    """
    async with manager.repository() as repo:
        yield repo


# KV repository dependency type
KVRepo = Annotated[KVStoreRepository, Depends(get_kv_repo)]


# ============ Service Dependencies ============

def get_auth_service(repo: KVRepo) -> AuthService:
    """Get authentication service"""
    settings = get_settings()
    return AuthService(
        repo,
        default_username=settings.DEFAULT_ADMIN_USERNAME,
        default_password=settings.DEFAULT_ADMIN_PASSWORD,
    )


def get_wipes_service(repo: KVRepo) -> ResourceService:
    return wipes_service(repo)


def get_team_members_service(repo: KVRepo) -> ResourceService:
    return team_members_service(repo)


def get_videos_service(repo: KVRepo) -> ResourceService:
    return videos_service(repo)


def get_clan_info_service(repo: KVRepo) -> SingletonResourceService:
    return clan_info_service(repo)


AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
ClanInfoServiceDep = Annotated[SingletonResourceService, Depends(get_clan_info_service)]


# ============ Auth Dependencies ============

def extract_bearer_token(authorization: str | None) -> str | None:
    """Token from an "Authorization: Bearer <token>" header; any other scheme yields None"""
    if not authorization or not authorization.lower().startswith("bearer "):
        return None
    return authorization[7:].strip() or None


async def require_session(
    auth_service: AuthServiceDep,
    authorization: str = Header(None, description="Bearer session token"),
) -> str:
    """
    Session gate for mutating routes

    Accepts any structurally valid session token.

    Returns:
        str: The token

    Raises:
        UnauthorizedError: Token missing or not decodable
    """
    token = extract_bearer_token(authorization)
    if not token or not auth_service.authorize(token):
        raise UnauthorizedError()
    return token

