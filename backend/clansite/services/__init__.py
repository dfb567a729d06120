"""
Service Layer Module Initialization
"""

from clansite.services.auth_service import AuthService, hash_password
from clansite.services.resource_service import (
    ResourceService,
    SingletonResourceService,
    VideoService,
    clan_info_service,
    team_members_service,
    videos_service,
    wipes_service,
)

__all__ = [
    "AuthService",
    "hash_password",
    "ResourceService",
    "SingletonResourceService",
    "VideoService",
    "clan_info_service",
    "team_members_service",
    "videos_service",
    "wipes_service",
]
