"""
Login Authentication API

- POST /login: exchange username and password for a session token
- POST /verify-token: check that a session token is structurally valid
- POST /logout: stateless, the client discards its token
- PUT /admin/credentials: rotate the administrator credentials
"""

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from clansite.api.deps import AuthServiceDep, require_session
from clansite.domain.auth import (
    CredentialRotationRequest,
    LoginRequest,
    LoginResponse,
    VerifyTokenRequest,
    VerifyTokenResponse,
)
from clansite.domain.resources import SuccessResponse

router = APIRouter(tags=["Auth"])


@router.post("/login", response_model=LoginResponse)
async def login(data: LoginRequest, service: AuthServiceDep):
    """
    Log in as administrator

    Wrong username or password both answer 401 with the same message.
    """
    result = await service.login(data.username, data.password)
    return LoginResponse(token=result.token, username=result.username)


@router.post("/verify-token", response_model=VerifyTokenResponse)
async def verify_token(data: VerifyTokenRequest, service: AuthServiceDep):
    if not service.authorize(data.token):
        return JSONResponse(
            content=VerifyTokenResponse(valid=False).model_dump(),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )
    return VerifyTokenResponse(valid=True)


@router.post("/logout", response_model=SuccessResponse)
async def logout():
    return SuccessResponse()


@router.put(
    "/admin/credentials",
    response_model=SuccessResponse,
    dependencies=[Depends(require_session)],
)
async def rotate_credentials(data: CredentialRotationRequest, service: AuthServiceDep):
    """
    Change the administrator password (and optionally username)

    Requires the current password in addition to a session token.
    """
    await service.rotate_credentials(
        current_password=data.current_password,
        new_password=data.new_password,
        new_username=data.new_username,
    )
    return SuccessResponse()
