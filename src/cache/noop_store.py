"""No-operation key-value store."""

from typing import Optional

from cache.kv_store import KeyValueStore
from log import get_logger

logger = get_logger("cache.noop_store")


class NoopStore(KeyValueStore):
    """Store that never keeps anything.

    With this backend every answer-cache lookup is a miss and every session
    starts with an empty history.
    """

    async def connect(self) -> None:
        """Initialize connection to the backend."""
        logger.info("Connecting to storage")

    async def connected(self) -> bool:
        """Report the store as not connected, it never holds any data."""
        return False

    async def get(self, key: str) -> Optional[str]:
        """Return None for any key."""
        return None

    async def set(self, key: str, value: str, ttl_seconds: int) -> None:
        """Drop the value."""

    async def delete(self, key: str) -> bool:
        """Return False, nothing is ever stored."""
        return False

    async def ttl(self, key: str) -> Optional[int]:
        """Return None for any key."""
        return None

    async def keys(self, prefix: str) -> list[str]:
        """Return an empty list."""
        return []

    async def close(self) -> None:
        """Nothing to close."""
