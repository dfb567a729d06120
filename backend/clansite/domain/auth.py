"""
Authentication Domain Model

Request/response bodies for login, token verification and credential rotation,
plus the stored credential record.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class AdminCredentials(BaseModel):
    """Credential record stored at ``admin:credentials``"""

    username: str
    password_hash: str = Field(..., alias="passwordHash")

    model_config = ConfigDict(populate_by_name=True)


class LoginRequest(BaseModel):
    username: str = ""
    password: str = ""


class LoginResponse(BaseModel):
    success: bool = True
    token: str
    username: str


class LoginResult(BaseModel):
    """Outcome of a successful login"""

    token: str
    username: str


class VerifyTokenRequest(BaseModel):
    token: Optional[str] = None


class VerifyTokenResponse(BaseModel):
    valid: bool


class CredentialRotationRequest(BaseModel):
    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=1)
    new_username: Optional[str] = Field(None, min_length=1)
