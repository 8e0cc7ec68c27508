"""
Networks with Aave V3 stata deployments, and how to reach them.
"""

from dataclasses import dataclass
from typing import Any, Dict

from .base import BaseConfig, ConfigError

# chain name -> (chain id, native token)
CHAINS = {
    "ethereum": (1, "ETH"),
    "optimism": (10, "ETH"),
    "gnosis": (100, "XDAI"),
    "polygon": (137, "POL"),
    "base": (8453, "ETH"),
    "arbitrum": (42161, "ETH"),
    "avalanche": (43114, "AVAX"),
}


@dataclass
class ChainConfig(BaseConfig):
    """RPC endpoints per chain, overridable with <CHAIN>_RPC_URL."""

    DEFAULT_CHAIN: str = BaseConfig.get_env("DEFAULT_CHAIN", "ethereum")

    ETHEREUM_RPC_URL: str = BaseConfig.get_env("ETHEREUM_RPC_URL", "http://localhost:8545")
    OPTIMISM_RPC_URL: str = BaseConfig.get_env("OPTIMISM_RPC_URL", "https://mainnet.optimism.io")
    GNOSIS_RPC_URL: str = BaseConfig.get_env("GNOSIS_RPC_URL", "https://rpc.gnosischain.com")
    POLYGON_RPC_URL: str = BaseConfig.get_env("POLYGON_RPC_URL", "https://polygon-rpc.com")
    BASE_RPC_URL: str = BaseConfig.get_env("BASE_RPC_URL", "https://mainnet.base.org")
    ARBITRUM_RPC_URL: str = BaseConfig.get_env("ARBITRUM_RPC_URL", "https://arb1.arbitrum.io/rpc")
    AVALANCHE_RPC_URL: str = BaseConfig.get_env(
        "AVALANCHE_RPC_URL", "https://api.avax.network/ext/bc/C/rpc"
    )

    @property
    def supported_chains(self) -> Dict[str, Dict[str, Any]]:
        return {
            name: {
                "chain_id": chain_id,
                "rpc_url": getattr(self, f"{name.upper()}_RPC_URL"),
                "native_token": native_token,
            }
            for name, (chain_id, native_token) in CHAINS.items()
        }

    def get_chain_config(self, chain_name: str) -> Dict[str, Any]:
        """
        Get chain id, RPC URL and native token for a chain.

        Raises:
            ConfigError: The chain is not one stata tokens are priced on
        """
        chains = self.supported_chains
        if chain_name not in chains:
            raise ConfigError(f"Unsupported chain: {chain_name}")
        return chains[chain_name]
