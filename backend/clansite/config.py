"""
Configuration Management Module

Configures application parameters via environment variables or .env file.
Supports a SQL database (SQLite by default, PostgreSQL), Redis, or a
process-local memory store as the KV backend.
"""

from dataclasses import dataclass
from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


KVStoreType = Literal["database", "redis", "memory"]


@dataclass(frozen=True)
class KVStoreConfig:
    """
    KV Store Connection Parameters

    Passed explicitly to the store constructors so that the storage layer
    never reads process environment on its own.
    """

    backend: KVStoreType = "database"
    database_url: str = "sqlite+aiosqlite:///./clansite.db"
    database_type: Literal["sqlite", "postgresql"] = "sqlite"
    redis_url: str = "redis://localhost:6379/0"
    # Upper bound for a single storage operation (seconds)
    timeout_seconds: float = 5.0
    echo: bool = False


class Settings(BaseSettings):
    """
    Application Configuration Class

    All configuration items can be overridden by environment variables, with names matching fields (uppercase).
    """

    # Application Config
    APP_NAME: str = "Clan Site"
    DEBUG: bool = False
    # Optional path prefix for every route, e.g. "/api"
    API_PREFIX: str = ""

    # KV Store Config
    # "database" uses the SQL database, "redis" uses Redis, "memory" keeps data in-process
    KV_STORE_TYPE: KVStoreType = "database"

    # Database Config
    # Supports "sqlite" or "postgresql"
    DATABASE_TYPE: Literal["sqlite", "postgresql"] = "sqlite"
    # SQLite default database path, PostgreSQL requires full connection string
    DATABASE_URL: str = "sqlite+aiosqlite:///./clansite.db"

    # Redis connection URL (only used when KV_STORE_TYPE is "redis")
    REDIS_URL: str = "redis://localhost:6379/0"

    # Storage I/O timeout (seconds)
    STORAGE_TIMEOUT_SECONDS: float = 5.0

    # Admin Bootstrap
    # Written to the credential record on first start when none exists yet
    DEFAULT_ADMIN_USERNAME: str = "admin"
    DEFAULT_ADMIN_PASSWORD: str = "admin123"

    # CORS Config
    # Comma-separated list of allowed origins, "*" allows any origin
    ALLOWED_ORIGINS: str = "*"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
    )

    def kv_store_config(self) -> KVStoreConfig:
        """Build the explicit KV store configuration"""
        return KVStoreConfig(
            backend=self.KV_STORE_TYPE,
            database_url=self.DATABASE_URL,
            database_type=self.DATABASE_TYPE,
            redis_url=self.REDIS_URL,
            timeout_seconds=self.STORAGE_TIMEOUT_SECONDS,
            echo=self.DEBUG,
        )


@lru_cache()
def get_settings() -> Settings:
    """
    Get application configuration (Singleton)

    Uses lru_cache to ensure configuration is loaded only once.

    Returns:
        Settings: Application configuration instance
    """
    return Settings()
