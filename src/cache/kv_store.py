"""Abstract class that is parent for all key-value store implementations."""

from abc import ABC, abstractmethod
from typing import Optional


class KeyValueStore(ABC):
    """Abstract key-value store with per-key expiry.

    Every operation is a single round trip to the backend. Values are written
    atomically as a whole; there are no partial updates, no locking and no
    versioning, so concurrent writes to the same key are last-write-wins.

    Backend faults are reported as `CacheError`.
    """

    @abstractmethod
    async def connect(self) -> None:
        """Initialize connection to the backend."""

    @abstractmethod
    async def connected(self) -> bool:
        """Check if connection to the backend is alive.

        Returns:
            True when the backend answers, False otherwise. Never raises.
        """

    @abstractmethod
    async def get(self, key: str) -> Optional[str]:
        """Get the value associated with the given key.

        Args:
            key: Key to look up.

        Returns:
            The stored value or None for unknown or expired keys.
        """

    @abstractmethod
    async def set(self, key: str, value: str, ttl_seconds: int) -> None:
        """Store the value under the given key, replacing any previous value.

        Args:
            key: Key to write.
            value: Value to store.
            ttl_seconds: Lifetime of the value, counted from now.
        """

    @abstractmethod
    async def delete(self, key: str) -> bool:
        """Delete the given key.

        Returns:
            True if the key existed.
        """

    @abstractmethod
    async def ttl(self, key: str) -> Optional[int]:
        """Return remaining lifetime of the key in seconds or None if unknown."""

    @abstractmethod
    async def keys(self, prefix: str) -> list[str]:
        """Return all live keys starting with the given prefix."""

    @abstractmethod
    async def close(self) -> None:
        """Release the connection to the backend."""
