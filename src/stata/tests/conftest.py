"""Shared fixtures for stata adapter tests."""

from unittest.mock import AsyncMock, Mock

import pytest

from src.batchers import MulticallResult
from src.config import StataConfig
from src.core.storage import DexCache
from src.stata.types import RAY, StataToken, Token

from src.stata.tests.addresses import A_DAI, A_USDC, DAI, STATA_DAI, STATA_USDC, USDC


@pytest.fixture
def stata_tokens():
    return [
        StataToken(address=STATA_USDC, underlying=USDC, a_token=A_USDC),
        StataToken(address=STATA_DAI, underlying=DAI, a_token=A_DAI),
    ]


@pytest.fixture
def tokens():
    """Routing-layer tokens keyed by symbol."""
    return {
        "stataUSDC": Token(address=STATA_USDC, decimals=6),
        "USDC": Token(address=USDC, decimals=6),
        "aUSDC": Token(address=A_USDC, decimals=6),
        "stataDAI": Token(address=STATA_DAI, decimals=18),
        "DAI": Token(address=DAI, decimals=18),
    }


@pytest.fixture
def storage():
    """Shared cache backend that starts empty."""
    backend = AsyncMock()
    backend.get.return_value = None
    backend.set.return_value = True
    return backend


@pytest.fixture
def dex_cache(storage):
    return DexCache(storage)


@pytest.fixture
def multicall():
    """Multicall executor returning a rate of 1.1 RAY."""
    batcher = Mock()
    batcher.try_aggregate = AsyncMock(
        return_value=[MulticallResult(success=True, return_data=11 * RAY // 10)]
    )
    return batcher


@pytest.fixture
def stata_config():
    return StataConfig(ENVIRONMENT="test")
