"""
API Router Module Initialization
"""

from clansite.api.auth import router as auth_router
from clansite.api.deps import get_kv_repo, require_session
from clansite.api.resources import (
    clan_info_router,
    team_members_router,
    videos_router,
    wipes_router,
)

__all__ = [
    "auth_router",
    "clan_info_router",
    "team_members_router",
    "videos_router",
    "wipes_router",
    "get_kv_repo",
    "require_session",
]
