"""
Clan Site Application Entry Point

FastAPI application main entry, including router registration and application configuration.
"""

import logging
import traceback
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.routing import APIRouter

from clansite import __version__
from clansite.api import (
    auth_router,
    clan_info_router,
    team_members_router,
    videos_router,
    wipes_router,
)
from clansite.common.errors import AppError, ValidationError
from clansite.config import get_settings
from clansite.logging_config import setup_logging
from clansite.repositories import KVStoreManager
from clansite.services import AuthService

logger = logging.getLogger(__name__)

# Initialize logging configuration
setup_logging()


# Application Lifecycle Management
@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application Lifecycle Management

    Opens the KV store and bootstraps the admin credentials on startup,
    closes the store on shutdown.
    """
    settings = get_settings()
    manager = KVStoreManager(settings.kv_store_config())
    await manager.start()
    app.state.kv_store = manager

    try:
        async with manager.repository() as repo:
            await AuthService(
                repo,
                default_username=settings.DEFAULT_ADMIN_USERNAME,
                default_password=settings.DEFAULT_ADMIN_PASSWORD,
            ).initialize()

        yield
    finally:
        await manager.close()


# Create FastAPI application
settings = get_settings()

app = FastAPI(
    title=settings.APP_NAME,
    description="Clan website backend: wipes, team roster, videos and clan info",
    version=__version__,
    lifespan=lifespan,
)

# Configure CORS
# Parse ALLOWED_ORIGINS from comma-separated string to list
allowed_origins = [
    origin.strip() for origin in settings.ALLOWED_ORIGINS.split(",") if origin.strip()
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials="*" not in allowed_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Global Exception Handler
@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    """
    Handle application custom exceptions

    In production mode, error details are hidden to prevent information leakage.
    """
    if exc.status_code >= 500:
        logger.error(f"{exc.error_type} on {request.method} {request.url.path}: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict(include_details=get_settings().DEBUG),
    )


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    """Malformed request payloads use the same error envelope as AppError"""
    error = ValidationError(
        message="Malformed request payload",
        details={"errors": jsonable_encoder(exc.errors())},
    )
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """
    Handle uncaught exceptions

    In production mode, stack traces and error details are logged but not returned to clients.
    """
    logger.error(
        "Uncaught exception: %s\nPath: %s\nTraceback:\n%s",
        str(exc),
        request.url.path,
        traceback.format_exc(),
    )

    if get_settings().DEBUG:
        return JSONResponse(
            status_code=500,
            content={
                "error": {
                    "message": str(exc),
                    "type": type(exc).__name__,
                    "code": "internal_error",
                    "traceback": traceback.format_exc().split("\n"),
                }
            },
        )

    return JSONResponse(
        status_code=500,
        content={
            "error": {
                "message": "Internal server error",
                "type": "internal_error",
                "code": "internal_error",
            }
        },
    )


# Health Check Endpoint
@app.get("/health", tags=["Health"])
async def health_check():
    """
    Health Check

    Used for service liveness probe.
    """
    return {"status": "healthy"}


def create_api_router(prefix: str = "") -> APIRouter:
    """All site routes mounted under prefix, e.g. "/api" (trailing slash ignored)"""
    router = APIRouter(prefix=prefix.rstrip("/"))
    router.include_router(auth_router)
    router.include_router(wipes_router)
    router.include_router(team_members_router)
    router.include_router(videos_router)
    router.include_router(clan_info_router)
    return router


app.include_router(create_api_router(settings.API_PREFIX))


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "clansite.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
    )
