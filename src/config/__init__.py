"""
Configuration management for the stata pricing adapter.

Use get_config() to access all configuration settings.

Example:
    from src.config import get_config

    config = get_config()

    # Access shared cache settings
    redis_kwargs = config.cache.get_redis_connection_kwargs()

    # Access chain settings
    ethereum_rpc = config.chains.get_chain_config("ethereum")["rpc_url"]

    # Access adapter settings
    rate_ttl = config.stata.RATE_CACHE_TTL
"""

from .base import BaseConfig, ConfigError
from .chains import ChainConfig
from .cache import CacheConfig
from .manager import ConfigManager, get_config, reload_config
from .stata import StataConfig

__all__ = [
    "BaseConfig",
    "ConfigError",
    "ChainConfig",
    "CacheConfig",
    "StataConfig",
    "ConfigManager",
    "get_config",
    "reload_config",
]
