"""
Namespaced cache shared by dex adapters.

Keys are scoped by network and dex key so several adapters (and several
processes running the same adapter) can share one Redis instance. Values
fetched with get_and_cache_locally are additionally mirrored in process
memory for a caller-chosen lifetime.
"""

import logging
import time
from typing import Any, Dict, Optional, Tuple

from .base import CacheInterface

logger = logging.getLogger(__name__)


class DexCache:
    """Two-tier (remote + local mirror) cache keyed by dex and network."""

    def __init__(self, storage: CacheInterface, clock=time.monotonic):
        self.storage = storage
        self._clock = clock
        self._local: Dict[str, Tuple[float, Any]] = {}

    @staticmethod
    def build_key(dex_key: str, network: str, key: str) -> str:
        return f"{network}_{dex_key}_{key}".lower()

    async def get(self, dex_key: str, network: str, key: str) -> Optional[Any]:
        """Read a value from the shared cache only."""
        return await self.storage.get(self.build_key(dex_key, network, key))

    async def setex(
        self, dex_key: str, network: str, key: str, ttl: int, value: Any
    ) -> bool:
        """Write a value to the shared cache with a TTL in seconds."""
        return await self.storage.set(self.build_key(dex_key, network, key), value, ttl)

    async def get_and_cache_locally(
        self, dex_key: str, network: str, key: str, local_ttl: int
    ) -> Optional[Any]:
        """
        Read a value, preferring the in-process mirror.

        On a local miss the shared cache is consulted and a hit is kept
        locally for local_ttl seconds. Misses are not mirrored.
        """
        full_key = self.build_key(dex_key, network, key)
        now = self._clock()

        entry = self._local.get(full_key)
        if entry is not None:
            expires_at, value = entry
            if expires_at > now:
                logger.debug(f"Local cache hit for {full_key}")
                return value
            del self._local[full_key]

        value = await self.storage.get(full_key)
        if value is not None:
            self._local[full_key] = (now + local_ttl, value)
        return value

    def clear_local(self) -> None:
        self._local.clear()
