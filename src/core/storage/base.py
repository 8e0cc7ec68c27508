"""
Backend contracts for the shared adapter cache.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional


class StorageError(Exception):
    """Base exception for shared cache failures."""
    pass


class ConnectionError(StorageError):
    """The cache backend is unreachable or was never connected."""
    pass


class DataError(StorageError):
    """A read or write against a connected backend failed."""
    pass


class StorageBase(ABC):
    """
    Connection lifecycle of a cache backend.

    Backends can be used as async context managers, which connect on entry
    and disconnect on exit.
    """

    def __init__(self, config: Dict[str, Any]):
        self.config = config
        self.is_connected = False

    @abstractmethod
    async def connect(self) -> None:
        pass

    @abstractmethod
    async def disconnect(self) -> None:
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Return True when the backend answers."""
        pass

    async def __aenter__(self):
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.disconnect()


class CacheInterface(ABC):
    """Key-value operations DexCache relies on."""

    @abstractmethod
    async def set(self, key: str, value: Any, ttl: Optional[int] = None) -> bool:
        """Store value under key, expiring after ttl seconds when given."""
        pass

    @abstractmethod
    async def get(self, key: str) -> Optional[Any]:
        """Return the value under key, or None when absent or expired."""
        pass
