"""
Single entry point to every configuration section.

Sections are built once per ConfigManager. Most callers use the process-wide
instance returned by get_config().
"""

import logging
from typing import Any, Dict, Optional

from .base import BaseConfig, ConfigError
from .cache import CacheConfig
from .chains import ChainConfig
from .stata import StataConfig

logger = logging.getLogger(__name__)


class ConfigManager:
    """Bundles the base, cache, chain and stata sections."""

    def __init__(self, environment: Optional[str] = None):
        """
        Args:
            environment: Overrides ENVIRONMENT (local, test, dev, staging, production)

        Raises:
            ConfigError: A section failed to load or validate
        """
        try:
            self._base = BaseConfig()
            if environment:
                self._base.ENVIRONMENT = environment
                self._base._validate_config()

            self._cache = CacheConfig()
            self._chains = ChainConfig()
            self._stata = StataConfig()
        except Exception as e:
            logger.error(f"Failed to load configuration: {e}")
            raise ConfigError(f"Configuration initialization failed: {e}")

        logger.info(f"Configuration loaded for environment: {self.environment}")

    @property
    def environment(self) -> str:
        return self._base.ENVIRONMENT

    @property
    def base(self) -> BaseConfig:
        return self._base

    @property
    def cache(self) -> CacheConfig:
        return self._cache

    @property
    def chains(self) -> ChainConfig:
        return self._chains

    @property
    def stata(self) -> StataConfig:
        return self._stata

    def get_stata_chain_config(self, chain_name: str) -> Dict[str, Any]:
        """
        Everything needed to stand up an adapter on one chain.

        Merges the chain's id and RPC URL, the Redis connection kwargs and
        the stata settings into one flat dict.
        """
        chain = self.chains.get_chain_config(chain_name)
        return {
            "chain_name": chain_name,
            "chain_id": chain["chain_id"],
            "rpc_url": chain["rpc_url"],
            "redis_config": self.cache.get_redis_connection_kwargs(),
            **self.stata.get_stata_config(chain_name),
        }

    def validate_configuration(self) -> bool:
        """
        Check that every enabled chain has an RPC configuration.

        Raises:
            ConfigError: No chain is enabled, or one is unknown
        """
        enabled = self.stata.ENABLED_CHAINS
        if not enabled:
            raise ConfigError("No chains enabled for the stata adapter")

        unknown = [chain for chain in enabled if chain not in self.chains.supported_chains]
        if unknown:
            raise ConfigError(f"Enabled chains have no chain configuration: {', '.join(unknown)}")

        logger.debug(f"Stata adapter enabled on: {', '.join(enabled)}")
        return True

    def to_dict(self) -> Dict[str, Any]:
        return {
            "environment": self.environment,
            "base": self.base.to_dict(),
            "cache": self.cache.to_dict(),
            "chains": self.chains.to_dict(),
            "stata": self.stata.to_dict(),
        }

    def __repr__(self) -> str:
        return f"ConfigManager(environment={self.environment})"


_config_manager: Optional[ConfigManager] = None


def get_config(environment: Optional[str] = None, force_reload: bool = False) -> ConfigManager:
    """Return the process-wide ConfigManager, building and validating it on first use."""
    global _config_manager

    if _config_manager is None or force_reload:
        _config_manager = ConfigManager(environment=environment)
        _config_manager.validate_configuration()

    return _config_manager


def reload_config(environment: Optional[str] = None) -> ConfigManager:
    return get_config(environment=environment, force_reload=True)
