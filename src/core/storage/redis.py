"""
Redis backend for the cache shared by adapter processes.

Rate records and the stata token list are stored as JSON strings so that
processes written against the same key layout can read each other's entries.
"""

import json
import logging
from typing import Any, Dict, Optional

import redis.asyncio as redis
from redis.asyncio import Redis

from .base import CacheInterface, ConnectionError, DataError, StorageBase

logger = logging.getLogger(__name__)


class RedisStorage(StorageBase, CacheInterface):
    """
    Shared cache on a single Redis database.

    Config keys follow CacheConfig.get_redis_connection_kwargs(): host, port,
    db, password (optional), decode_responses, socket_timeout and
    connection_pool_kwargs.
    """

    def __init__(self, config: Dict[str, Any]):
        super().__init__(config)
        self.client: Optional[Redis] = None

    def _pool_kwargs(self) -> Dict[str, Any]:
        kwargs = {
            'host': self.config.get('host', 'localhost'),
            'port': self.config.get('port', 6379),
            'db': self.config.get('db', 0),
            'decode_responses': self.config.get('decode_responses', True),
            'socket_timeout': self.config.get('socket_timeout', 5),
            **self.config.get('connection_pool_kwargs', {})
        }
        if self.config.get('password') is not None:
            kwargs['password'] = self.config['password']
        return kwargs

    async def connect(self) -> None:
        """Open a connection pool and verify it with PING."""
        pool_kwargs = self._pool_kwargs()
        try:
            pool = redis.ConnectionPool(**pool_kwargs)
            self.client = redis.Redis(connection_pool=pool)
            await self.client.ping()
        except Exception as e:
            logger.error(f"Redis at {pool_kwargs['host']}:{pool_kwargs['port']} unreachable: {e}")
            raise ConnectionError(f"Redis connection failed: {e}")

        self.is_connected = True
        logger.info(f"Connected to Redis at {pool_kwargs['host']}:{pool_kwargs['port']}")

    async def disconnect(self) -> None:
        if self.client:
            await self.client.aclose()
            self.client = None
        self.is_connected = False
        logger.info("Redis connection closed")

    async def health_check(self) -> bool:
        if not self.client:
            return False
        try:
            return await self.client.ping() is True
        except Exception as e:
            logger.warning(f"Redis health check failed: {e}")
            return False

    def _require_client(self) -> Redis:
        if not self.client:
            raise ConnectionError("Not connected to Redis")
        return self.client

    @staticmethod
    def _dumps(value: Any) -> str:
        if isinstance(value, str):
            return value
        return json.dumps(value, default=str)

    @staticmethod
    def _loads(raw: str) -> Any:
        try:
            return json.loads(raw)
        except (json.JSONDecodeError, TypeError):
            return raw

    async def set(self, key: str, value: Any, ttl: Optional[int] = None) -> bool:
        """
        Store a value, JSON-encoding anything that is not already a string.

        Raises:
            ConnectionError: connect() has not been called
            DataError: Redis rejected the write
        """
        client = self._require_client()
        payload = self._dumps(value)
        try:
            if ttl:
                result = await client.setex(key, ttl, payload)
            else:
                result = await client.set(key, payload)
        except Exception as e:
            logger.error(f"Failed to write {key}: {e}")
            raise DataError(f"Cache set failed: {e}")
        return result is True

    async def get(self, key: str) -> Optional[Any]:
        """Read a value, decoding JSON where possible."""
        client = self._require_client()
        try:
            raw = await client.get(key)
        except Exception as e:
            logger.error(f"Failed to read {key}: {e}")
            raise DataError(f"Cache get failed: {e}")
        return None if raw is None else self._loads(raw)
