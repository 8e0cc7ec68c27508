"""
Storage layer for the stata pricing adapter.

- Redis for the cache shared across adapter processes
- DexCache for dex/network key scoping and the in-process mirror

Usage:
    from src.core.storage import DexCache, RedisStorage

    storage = RedisStorage(config.cache.get_redis_connection_kwargs())
    await storage.connect()

    cache = DexCache(storage)
    rate = await cache.get("AaveV3Stata", "ethereum", "state_0x...")
"""

from .base import CacheInterface, ConnectionError, DataError, StorageBase, StorageError
from .dex_cache import DexCache
from .redis import RedisStorage

__all__ = [
    "StorageBase",
    "CacheInterface",
    "StorageError",
    "ConnectionError",
    "DataError",
    "DexCache",
    "RedisStorage",
]
