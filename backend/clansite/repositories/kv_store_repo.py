"""
Key-Value Store Repository Interface

Defines the data access interface for KV Store.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Any, Awaitable, Optional, TypeVar

from clansite.common.errors import StorageUnavailableError
from clansite.domain.kv_store import KeyValueModel

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_TIMEOUT_SECONDS = 5.0


class KVStoreRepository(ABC):
    """
    Key-Value Store Repository Interface

    Values are arbitrary JSON-compatible documents. A missing key is reported
    as None, never as an error; backend failures raise StorageUnavailableError.
    """

    # Backend specific exceptions translated into StorageUnavailableError
    storage_errors: tuple[type[BaseException], ...] = (OSError,)

    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS

    async def _guard(self, operation: str, awaitable: Awaitable[T]) -> T:
        """
        Run a backend call within the I/O timeout

        Args:
            operation: Operation name used in logs and error details
            awaitable: The backend call

        Raises:
            StorageUnavailableError: Backend failed or timed out
        """
        try:
            return await asyncio.wait_for(awaitable, timeout=self.timeout_seconds)
        except asyncio.TimeoutError as e:
            logger.error(f"KV store {operation} timed out after {self.timeout_seconds}s")
            raise StorageUnavailableError(
                message=f"Storage did not respond within {self.timeout_seconds}s",
                code="storage_timeout",
                details={"operation": operation},
            ) from e
        except self.storage_errors as e:
            logger.error(f"KV store {operation} failed: {e}")
            raise StorageUnavailableError(
                details={"operation": operation, "reason": type(e).__name__},
            ) from e

    @abstractmethod
    async def get(self, key: str) -> Optional[KeyValueModel]:
        """
        Get value by key

        Args:
            key: The key to look up

        Returns:
            KeyValueModel if found, None otherwise
        """
        pass

    @abstractmethod
    async def set(self, key: str, value: Any) -> KeyValueModel:
        """
        Set a key-value pair

        If the key already exists, its value is replaced as a whole.

        Args:
            key: The key to set
            value: JSON-compatible value to store

        Returns:
            KeyValueModel: The created/updated KV model
        """
        pass

    @abstractmethod
    async def delete(self, key: str) -> bool:
        """
        Delete a key

        Args:
            key: The key to delete

        Returns:
            True if deleted, False if key didn't exist
        """
        pass

    @abstractmethod
    async def scan_by_prefix(self, prefix: str) -> list[KeyValueModel]:
        """
        Get every record whose key starts with prefix

        The prefix is matched literally. Results are sorted by key.

        Args:
            prefix: Key prefix, e.g. "wipe:"

        Returns:
            list[KeyValueModel]: Matching records
        """
        pass
