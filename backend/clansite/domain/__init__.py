"""
Domain Model Module Initialization
"""

from clansite.domain.kv_store import KeyValueModel
from clansite.domain.auth import (
    AdminCredentials,
    CredentialRotationRequest,
    LoginRequest,
    LoginResponse,
    LoginResult,
    VerifyTokenRequest,
    VerifyTokenResponse,
)
from clansite.domain.resources import (
    ClanInfo,
    CreateResponse,
    ResourceDocument,
    SuccessResponse,
    TeamMember,
    Video,
    Wipe,
)

__all__ = [
    # KV Store
    "KeyValueModel",
    # Auth
    "AdminCredentials",
    "CredentialRotationRequest",
    "LoginRequest",
    "LoginResponse",
    "LoginResult",
    "VerifyTokenRequest",
    "VerifyTokenResponse",
    # Resources
    "ClanInfo",
    "CreateResponse",
    "ResourceDocument",
    "SuccessResponse",
    "TeamMember",
    "Video",
    "Wipe",
]
