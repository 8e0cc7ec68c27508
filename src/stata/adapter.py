"""
Aave V3 static aToken (stata) adapter.

Exposes the surface a swap router consumes: candidate pools for a token
pair, prices for a list of amounts at a block, and the execution payload for
a priced conversion. Only stata <-> underlying and stata <-> aToken
conversions are supported, always against the stata token contract itself.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional, Union

from web3 import Web3

from ..batchers import BatchConfig, MulticallBatcher
from ..config import ConfigManager, StataConfig, get_config
from ..core.storage import DexCache, RedisStorage
from .encoder import CalldataEncoder
from .pricing import PriceEngine
from .rate_store import RateStore
from .tokens import TokenRegistry
from .types import DexExchangeParam, QuoteResult, StataData, StataToken, SwapSide, Token, TokenRole

logger = logging.getLogger(__name__)


class AaveV3Stata:
    """Prices and encodes stata conversions on one network."""

    has_constant_price_large_amounts = True
    is_fee_on_transfer_supported = False

    def __init__(
        self,
        network: str,
        cache: DexCache,
        multicall: MulticallBatcher,
        config: Optional[StataConfig] = None,
        registry: Optional[TokenRegistry] = None,
        storage: Optional[RedisStorage] = None,
    ):
        """
        Initialize the adapter.

        Args:
            network: Chain name (ethereum, polygon, ...)
            cache: Shared cache for rates and the token list
            multicall: Read-only batch executor for rate() calls
            config: Adapter settings (defaults to the global configuration)
            registry: Token role registry, shared with the token-list job if given
            storage: Redis connection owned by this adapter, closed on release
        """
        self.config = config or get_config().stata
        self.config.get_stata_config(network)

        self.network = network
        self.dex_key = self.config.DEX_KEY
        self.cache = cache
        self.registry = registry or TokenRegistry()
        self._storage = storage
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

        self.rate_store = RateStore(
            dex_key=self.dex_key,
            network=network,
            cache=cache,
            multicall=multicall,
            rate_cache_ttl=self.config.RATE_CACHE_TTL,
        )
        self.price_engine = PriceEngine(
            dex_key=self.dex_key,
            rate_store=self.rate_store,
            gas_cost_underlying=self.config.GAS_COST_UNDERLYING,
            gas_cost_a_token=self.config.GAS_COST_A_TOKEN,
        )
        self.encoder = CalldataEncoder()

    @classmethod
    def from_config(
        cls, network: str, config_manager: Optional[ConfigManager] = None
    ) -> "AaveV3Stata":
        """Build an adapter with its own RPC and Redis connections."""
        config_manager = config_manager or get_config()
        chain_config = config_manager.get_stata_chain_config(network)

        web3 = Web3(Web3.HTTPProvider(chain_config["rpc_url"]))
        multicall = MulticallBatcher(
            web3,
            chain_config["multicall_address"],
            BatchConfig(max_retries=chain_config["multicall_max_retries"]),
        )
        storage = RedisStorage(chain_config["redis_config"])

        return cls(
            network,
            cache=DexCache(storage),
            multicall=multicall,
            config=config_manager.stata,
            storage=storage,
        )

    # Lifecycle

    async def initialize_pricing(self, block_number: int) -> None:
        """
        Load the stata token list published by the token-list job.

        The list is read from the shared cache and mirrored locally. If no
        list has been published yet the adapter starts with no pools.
        """
        if self._storage is not None and not self._storage.is_connected:
            await self._storage.connect()

        cached = await self.cache.get_and_cache_locally(
            self.dex_key,
            self.network,
            self.config.TOKEN_LIST_CACHE_KEY,
            self.config.TOKEN_LIST_LOCAL_TTL,
        )
        if cached is None:
            self.logger.warning(
                f"No stata token list cached for {self.network} at block {block_number}"
            )
            return

        self.register_tokens(StataToken.from_dict(item) for item in cached)

    def register_tokens(self, tokens: Iterable[StataToken]) -> None:
        """Register stata tokens and seed an empty rate record for each."""
        tokens = list(tokens)
        self.registry.set_tokens_on_network(self.network, tokens)
        for token in tokens:
            self.rate_store.ensure(token.address)

    async def update_pool_state(self) -> None:
        # rates are refreshed lazily per quote
        return None

    async def release_resources(self) -> None:
        if self._storage is not None and self._storage.is_connected:
            await self._storage.disconnect()

    # Pricing

    def get_adapters(self, side: SwapSide) -> Optional[List[Dict[str, Any]]]:
        # execution goes through get_dex_param only
        return None

    def _pool_identifier(self, src_token: Token, dest_token: Token) -> str:
        addresses = sorted([src_token.address.lower(), dest_token.address.lower()])
        return f"{self.dex_key}_{'_'.join(addresses)}".lower()

    def list_candidate_pools(self, src_token: Token, dest_token: Token) -> List[str]:
        """Return the single pool identifier for an unordered token pair."""
        return [self._pool_identifier(src_token, dest_token)]

    def _is_pair(self, stata_address: str, other_address: str) -> bool:
        stata = self.registry.get_stata_token(self.network, stata_address)
        if stata is None:
            return False
        return other_address.lower() in (stata.underlying.lower(), stata.a_token.lower())

    async def quote(
        self,
        src_token: Token,
        dest_token: Token,
        amounts: List[int],
        side: SwapSide,
        block_number: int,
        limit_pools: Optional[List[str]] = None,
    ) -> Optional[QuoteResult]:
        """
        Price amounts for a conversion between src_token and dest_token.

        Returns None when this adapter cannot price the pair or side.
        Failures refreshing the rate (RPC, cache) propagate.
        """
        if limit_pools is not None and self._pool_identifier(src_token, dest_token) not in limit_pools:
            return None

        src_role = self.registry.resolve_role(self.network, src_token.address)
        dest_role = self.registry.resolve_role(self.network, dest_token.address)

        if src_role == TokenRole.WRAPPED and not self._is_pair(src_token.address, dest_token.address):
            return None
        if dest_role == TokenRole.WRAPPED and not self._is_pair(dest_token.address, src_token.address):
            return None

        return await self.price_engine.quote(
            src_token, dest_token, src_role, dest_role, amounts, side, block_number
        )

    def get_calldata_gas_cost(self, quote: QuoteResult) -> int:
        return self.config.CALLDATA_GAS_COST

    async def get_top_pools_for_token(self, token_address: str, limit: int) -> List[Dict[str, Any]]:
        # stata conversions have no liquidity depth to rank
        return []

    # Execution

    def get_adapter_param(self) -> Dict[str, str]:
        return {"targetExchange": "0x", "payload": "0x", "networkFee": "0"}

    def encode_execution(
        self,
        data: StataData,
        src_amount: Union[int, str],
        dest_amount: Union[int, str],
        recipient: str,
        owner: str,
        side: SwapSide,
    ) -> DexExchangeParam:
        """
        Build the call the execution layer submits for a priced conversion.

        Args:
            data: Metadata from the QuoteResult being executed
            src_amount: Exact input on SELL
            dest_amount: Exact output on BUY
            recipient: Receiver of the output tokens
            owner: Holder of the stata shares burned on redeem/withdraw
            side: Side the quote was priced on
        """
        return self.encoder.encode(data, side, src_amount, dest_amount, recipient, owner)
