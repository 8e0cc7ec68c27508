"""
Protocol configuration for the Aave V3 static aToken (stata) adapter.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List

from .base import BaseConfig, ConfigError


DEFAULT_STATA_CHAINS = [
    "ethereum",
    "polygon",
    "avalanche",
    "arbitrum",
    "optimism",
    "base",
    "gnosis",
]


@dataclass
class StataConfig(BaseConfig):
    """Pricing and caching settings for stata tokens."""

    DEX_KEY: str = BaseConfig.get_env("STATA_DEX_KEY", "AaveV3Stata")

    ENABLED_CHAINS: List[str] = field(
        default_factory=lambda: BaseConfig.get_env_list(
            "STATA_ENABLED_CHAINS", DEFAULT_STATA_CHAINS
        )
    )

    # Multicall3 shares one address on every supported chain
    MULTICALL_ADDRESS: str = BaseConfig.get_env(
        "MULTICALL_ADDRESS", "0xcA11bde05977b3631167028862bE2a173976CA11"
    )
    MULTICALL_MAX_RETRIES: int = BaseConfig.get_env_int("MULTICALL_MAX_RETRIES", 1)

    # Shared cache lifetimes (seconds)
    RATE_CACHE_TTL: int = BaseConfig.get_env_int("STATA_RATE_CACHE_TTL", 60)
    TOKEN_LIST_CACHE_KEY: str = "stata-token-list"
    TOKEN_LIST_TTL: int = BaseConfig.get_env_int("STATA_TOKEN_LIST_TTL", 24 * 60 * 60)
    TOKEN_LIST_LOCAL_TTL: int = BaseConfig.get_env_int(
        "STATA_TOKEN_LIST_LOCAL_TTL", 3 * 60 * 60
    )

    # Flat gas estimates per quote
    GAS_COST_UNDERLYING: int = BaseConfig.get_env_int("STATA_GAS_COST_UNDERLYING", 400_000)
    GAS_COST_A_TOKEN: int = BaseConfig.get_env_int("STATA_GAS_COST_A_TOKEN", 150_000)
    CALLDATA_GAS_COST: int = 200  # DEX_NO_PAYLOAD

    def __post_init__(self):
        super().__post_init__()
        if self.RATE_CACHE_TTL <= 0:
            raise ConfigError(f"STATA_RATE_CACHE_TTL must be positive, got: {self.RATE_CACHE_TTL}")
        if self.TOKEN_LIST_LOCAL_TTL > self.TOKEN_LIST_TTL:
            raise ConfigError("STATA_TOKEN_LIST_LOCAL_TTL cannot exceed STATA_TOKEN_LIST_TTL")

    def is_enabled(self, chain: str) -> bool:
        """Check whether the adapter prices on a chain."""
        return chain in self.ENABLED_CHAINS

    def get_stata_config(self, chain: str) -> Dict[str, Any]:
        """Get the adapter settings for a specific chain."""
        if not self.is_enabled(chain):
            raise ConfigError(f"Unsupported chain for {self.DEX_KEY}: {chain}")
        return {
            "dex_key": self.DEX_KEY,
            "multicall_address": self.MULTICALL_ADDRESS,
            "multicall_max_retries": self.MULTICALL_MAX_RETRIES,
            "rate_cache_ttl": self.RATE_CACHE_TTL,
            "token_list_cache_key": self.TOKEN_LIST_CACHE_KEY,
            "token_list_local_ttl": self.TOKEN_LIST_LOCAL_TTL,
            "gas_cost_underlying": self.GAS_COST_UNDERLYING,
            "gas_cost_a_token": self.GAS_COST_A_TOKEN,
            "calldata_gas_cost": self.CALLDATA_GAS_COST,
        }
