"""
Test suite for the AaveV3Stata adapter surface.

Exercises token-list loading, pool identifiers, quoting and execution
encoding with the shared cache and multicall mocked out.
"""

from unittest.mock import AsyncMock, Mock

import pytest

from src.config import ConfigError
from src.stata.abi import StataFunctions
from src.stata.adapter import AaveV3Stata
from src.stata.types import RAY, SwapSide, TokenRole

from src.stata.tests.addresses import (
    A_USDC,
    EXECUTOR,
    RECIPIENT,
    STATA_DAI,
    STATA_USDC,
    USDC,
)

TOKEN_LIST_KEY = "ethereum_aavev3stata_stata-token-list"


@pytest.fixture
def adapter(dex_cache, multicall, stata_config, stata_tokens):
    adapter = AaveV3Stata("ethereum", dex_cache, multicall, config=stata_config)
    adapter.register_tokens(stata_tokens)
    return adapter


class TestInitialization:
    """Test token-list loading and lifecycle hooks."""

    def test_unsupported_chain_is_rejected(self, dex_cache, multicall, stata_config):
        with pytest.raises(ConfigError):
            AaveV3Stata("solana", dex_cache, multicall, config=stata_config)

    @pytest.mark.asyncio
    async def test_initialize_pricing_loads_cached_token_list(
        self, dex_cache, multicall, stata_config, stata_tokens, storage
    ):
        storage.get.return_value = [token.to_dict() for token in stata_tokens]
        adapter = AaveV3Stata("ethereum", dex_cache, multicall, config=stata_config)

        await adapter.initialize_pricing(18_000_000)

        storage.get.assert_awaited_once_with(TOKEN_LIST_KEY)
        assert adapter.registry.resolve_role("ethereum", STATA_USDC) == TokenRole.WRAPPED
        assert adapter.registry.resolve_role("ethereum", USDC) == TokenRole.UNDERLYING
        assert adapter.registry.resolve_role("ethereum", A_USDC) == TokenRole.INTERMEDIATE
        assert adapter.rate_store.peek(STATA_DAI).rate == 0

    @pytest.mark.asyncio
    async def test_token_list_is_mirrored_locally(
        self, dex_cache, multicall, stata_config, stata_tokens, storage
    ):
        storage.get.return_value = [token.to_dict() for token in stata_tokens]
        adapter = AaveV3Stata("ethereum", dex_cache, multicall, config=stata_config)

        await adapter.initialize_pricing(1)
        await adapter.initialize_pricing(2)

        assert storage.get.await_count == 1

    @pytest.mark.asyncio
    async def test_missing_token_list_leaves_registry_empty(
        self, dex_cache, multicall, stata_config
    ):
        adapter = AaveV3Stata("ethereum", dex_cache, multicall, config=stata_config)

        await adapter.initialize_pricing(18_000_000)

        assert adapter.registry.get_stata_tokens("ethereum") == []

    @pytest.mark.asyncio
    async def test_owned_storage_is_connected_and_released(
        self, dex_cache, multicall, stata_config
    ):
        owned = Mock()
        owned.is_connected = False
        owned.connect = AsyncMock()
        owned.disconnect = AsyncMock()
        adapter = AaveV3Stata("ethereum", dex_cache, multicall, config=stata_config, storage=owned)

        await adapter.initialize_pricing(1)
        owned.connect.assert_awaited_once()

        owned.is_connected = True
        await adapter.release_resources()
        owned.disconnect.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_no_liquidity_ranking(self, adapter):
        assert await adapter.get_top_pools_for_token(USDC, 10) == []
        assert adapter.get_adapters(SwapSide.SELL) is None


class TestPoolIdentifiers:
    """Test pool identifiers for token pairs."""

    def test_identifier_is_order_independent(self, adapter, tokens):
        forward = adapter.list_candidate_pools(tokens["USDC"], tokens["stataUSDC"])
        backward = adapter.list_candidate_pools(tokens["stataUSDC"], tokens["USDC"])

        assert forward == backward
        assert forward == [f"aavev3stata_{STATA_USDC}_{USDC}"]


class TestQuote:
    """Test quoting through the adapter."""

    @pytest.mark.asyncio
    async def test_sell_underlying_for_stata(self, adapter, tokens, multicall):
        result = await adapter.quote(
            tokens["USDC"], tokens["stataUSDC"], [1_100_000], SwapSide.SELL, 100
        )

        assert result.prices == [1_000_000]
        assert result.data.src_type == TokenRole.UNDERLYING
        assert result.data.dest_type == TokenRole.WRAPPED
        assert result.data.exchange == STATA_USDC
        multicall.try_aggregate.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_cached_rate_is_reused_across_quotes(self, adapter, tokens, multicall):
        await adapter.quote(tokens["USDC"], tokens["stataUSDC"], [1], SwapSide.SELL, 100)
        await adapter.quote(tokens["stataUSDC"], tokens["aUSDC"], [1], SwapSide.SELL, 100)

        assert multicall.try_aggregate.await_count == 1

    @pytest.mark.asyncio
    async def test_buy_from_a_token_has_no_price(self, adapter, tokens, multicall):
        result = await adapter.quote(
            tokens["aUSDC"], tokens["stataUSDC"], [1_000_000], SwapSide.BUY, 100
        )

        assert result is None
        multicall.try_aggregate.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_stata_to_stata_has_no_price(self, adapter, tokens):
        assert await adapter.quote(
            tokens["stataUSDC"], tokens["stataDAI"], [1], SwapSide.SELL, 100
        ) is None

    @pytest.mark.asyncio
    async def test_mismatched_underlying_has_no_price(self, adapter, tokens):
        assert await adapter.quote(
            tokens["DAI"], tokens["stataUSDC"], [1], SwapSide.SELL, 100
        ) is None

    @pytest.mark.asyncio
    async def test_unregistered_token_has_no_price(self, adapter, tokens):
        tokens["USDC"].address = "0x" + "ab" * 20
        assert await adapter.quote(
            tokens["USDC"], tokens["stataUSDC"], [1], SwapSide.SELL, 100
        ) is None

    @pytest.mark.asyncio
    async def test_limit_pools_excludes_other_pairs(self, adapter, tokens):
        assert await adapter.quote(
            tokens["USDC"], tokens["stataUSDC"], [1], SwapSide.SELL, 100,
            limit_pools=["aavev3stata_0xother"],
        ) is None

    def test_calldata_gas_cost(self, adapter):
        assert adapter.get_calldata_gas_cost(Mock()) == 200


class TestEncodeExecution:
    """Test execution payloads built from quotes."""

    @pytest.mark.asyncio
    async def test_buy_stata_with_underlying_mints(self, adapter, tokens):
        result = await adapter.quote(
            tokens["USDC"], tokens["stataUSDC"], [1_000_000], SwapSide.BUY, 100
        )
        assert result.prices == [1_100_000]

        param = adapter.encode_execution(
            result.data, str(result.prices[0]), "1000000", RECIPIENT, EXECUTOR, SwapSide.BUY
        )

        assert param.target_exchange == STATA_USDC
        assert param.exchange_data.startswith("0x" + StataFunctions.mint.selector.hex())

    @pytest.mark.asyncio
    async def test_sell_stata_for_a_token_redeems(self, adapter, tokens, multicall):
        multicall.try_aggregate.return_value[0].return_data = RAY

        result = await adapter.quote(
            tokens["stataUSDC"], tokens["aUSDC"], [500], SwapSide.SELL, 100
        )
        param = adapter.encode_execution(
            result.data, 500, result.prices[0], RECIPIENT, EXECUTOR, SwapSide.SELL
        )

        assert result.prices == [500]
        assert param.exchange_data.startswith("0x" + StataFunctions.redeem.selector.hex())
        # withdrawFromAave is the last 32-byte word
        assert param.exchange_data.endswith("0" * 64)
