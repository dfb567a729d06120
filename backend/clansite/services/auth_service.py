"""
Authentication Service Module

Bootstraps the administrator credential record, checks logins and issues
session tokens.

Session tokens are ``base64("<username>:<epoch-ms>")``. There is no session
table: a token is accepted as long as it is canonical base64. The embedded
username and timestamp are never checked, so any decodable string passes
``authorize``. Tests pin this behaviour down.
"""

import base64
import binascii
import hashlib
import hmac
import logging
import time
from typing import Optional

from pydantic import ValidationError as PydanticValidationError

from clansite.common.errors import AuthFailedError, ServiceError
from clansite.domain.auth import AdminCredentials, LoginResult
from clansite.repositories.kv_store_repo import KVStoreRepository

logger = logging.getLogger(__name__)

CREDENTIALS_KEY = "admin:credentials"

DEFAULT_ADMIN_USERNAME = "admin"
DEFAULT_ADMIN_PASSWORD = "admin123"


def hash_password(password: str) -> str:
    """Return the lowercase hex SHA-256 digest of the UTF-8 password"""
    return hashlib.sha256(password.encode("utf-8")).hexdigest()


def create_session_token(username: str, now_ms: Optional[int] = None) -> str:
    issued_at = int(time.time() * 1000) if now_ms is None else int(now_ms)
    return base64.b64encode(f"{username}:{issued_at}".encode("utf-8")).decode("ascii")


def is_token_decodable(token: Optional[str]) -> bool:
    """
    Check that token is canonical standard base64

    The token must decode with a strict alphabet and encode back to itself.
    """
    if not token:
        return False
    try:
        decoded = base64.b64decode(token, validate=True)
    except (binascii.Error, ValueError):
        return False
    return base64.b64encode(decoded).decode("ascii") == token


class AuthService:
    """
    Authentication Service

    Owns only the credential record at ``admin:credentials``.
    """

    def __init__(
        self,
        repo: KVStoreRepository,
        default_username: str = DEFAULT_ADMIN_USERNAME,
        default_password: str = DEFAULT_ADMIN_PASSWORD,
    ):
        """
        Initialize Service

        Args:
            repo: KV store repository
            default_username: Username written on first bootstrap
            default_password: Password written on first bootstrap
        """
        self.repo = repo
        self.default_username = default_username
        self.default_password = default_password

    async def initialize(self) -> bool:
        """
        Create the credential record if it does not exist

        Safe to call repeatedly; only the first call on an empty store writes.

        Returns:
            bool: True if the record was created
        """
        existing = await self.repo.get(CREDENTIALS_KEY)
        if existing is not None:
            logger.info("Admin credentials already present")
            return False

        credentials = AdminCredentials(
            username=self.default_username,
            password_hash=hash_password(self.default_password),
        )
        await self.repo.set(CREDENTIALS_KEY, credentials.model_dump(by_alias=True))
        logger.info(f"Admin credentials initialized for '{self.default_username}'")
        return True

    async def _load_credentials(self) -> AdminCredentials:
        record = await self.repo.get(CREDENTIALS_KEY)
        if record is None:
            raise ServiceError(message="Admin not configured", code="admin_not_configured")
        try:
            return AdminCredentials.model_validate(record.value)
        except PydanticValidationError as e:
            raise ServiceError(
                message="Admin credentials are malformed",
                code="admin_credentials_invalid",
            ) from e

    def _matches(self, credentials: AdminCredentials, username: str, password: str) -> bool:
        # Evaluate both comparisons so timing does not reveal which one failed
        username_ok = hmac.compare_digest(
            credentials.username.encode("utf-8"), username.encode("utf-8")
        )
        password_ok = hmac.compare_digest(
            credentials.password_hash.encode("utf-8"),
            hash_password(password).encode("utf-8"),
        )
        return username_ok and password_ok

    async def login(self, username: str, password: str) -> LoginResult:
        """
        Authenticate against the credential record

        Args:
            username: Supplied username (exact match, case-sensitive)
            password: Supplied plaintext password

        Returns:
            LoginResult: Fresh session token and the username

        Raises:
            AuthFailedError: Username or password mismatch
            ServiceError: Credential record missing
        """
        credentials = await self._load_credentials()
        if not self._matches(credentials, username, password):
            logger.info("Rejected login attempt")
            raise AuthFailedError()

        return LoginResult(token=create_session_token(username), username=username)

    def authorize(self, token: Optional[str]) -> bool:
        """
        Check a session token

        Only the structure is checked, see the module docstring.
        """
        return is_token_decodable(token)

    async def rotate_credentials(
        self,
        current_password: str,
        new_password: str,
        new_username: Optional[str] = None,
    ) -> AdminCredentials:
        """
        Replace the credential record

        Args:
            current_password: Must match the stored hash
            new_password: New plaintext password
            new_username: New username, keeps the current one when omitted

        Returns:
            AdminCredentials: The stored record

        Raises:
            AuthFailedError: current_password does not match
        """
        credentials = await self._load_credentials()
        if not self._matches(credentials, credentials.username, current_password):
            raise AuthFailedError()

        rotated = AdminCredentials(
            username=new_username or credentials.username,
            password_hash=hash_password(new_password),
        )
        await self.repo.set(CREDENTIALS_KEY, rotated.model_dump(by_alias=True))
        logger.info(f"Admin credentials rotated for '{rotated.username}'")
        return rotated
