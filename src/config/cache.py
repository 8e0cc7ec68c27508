"""
Shared cache (Redis) settings.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from .base import BaseConfig


@dataclass
class CacheConfig(BaseConfig):
    """Where adapter processes share rate records and the stata token list."""

    REDIS_HOST: str = BaseConfig.get_env("REDIS_HOST", "localhost")
    REDIS_PORT: int = BaseConfig.get_env_int("REDIS_PORT", 6379)
    REDIS_PASSWORD: Optional[str] = BaseConfig.get_env("REDIS_PASSWORD") or None
    REDIS_DB: int = BaseConfig.get_env_int("REDIS_DB", 0)

    # seconds, applied to both connect and socket operations
    CONNECTION_TIMEOUT: int = BaseConfig.get_env_int("CONNECTION_TIMEOUT", 5)

    def get_redis_connection_kwargs(self) -> Dict[str, Any]:
        """Build the config dict RedisStorage expects."""
        kwargs = {
            "host": self.REDIS_HOST,
            "port": self.REDIS_PORT,
            "db": self.REDIS_DB,
            "decode_responses": True,
            "socket_timeout": self.CONNECTION_TIMEOUT,
            "connection_pool_kwargs": {"socket_connect_timeout": self.CONNECTION_TIMEOUT},
        }
        password = (self.REDIS_PASSWORD or "").strip()
        if password:
            kwargs["password"] = password
        return kwargs
