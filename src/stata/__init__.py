"""Aave V3 static aToken (stata) pricing and calldata encoding."""

from src.stata.adapter import AaveV3Stata
from src.stata.encoder import CalldataEncoder
from src.stata.pricing import PriceEngine, compute_prices, validate_roles
from src.stata.rate_store import RateStore
from src.stata.tokens import TokenRegistry
from src.stata.types import (
    RAY,
    DexExchangeParam,
    QuoteResult,
    RateRecord,
    StataData,
    StataToken,
    SwapSide,
    Token,
    TokenRole,
)

__all__ = [
    "AaveV3Stata",
    "CalldataEncoder",
    "PriceEngine",
    "RateStore",
    "TokenRegistry",
    "compute_prices",
    "validate_roles",
    "RAY",
    "DexExchangeParam",
    "QuoteResult",
    "RateRecord",
    "StataData",
    "StataToken",
    "SwapSide",
    "Token",
    "TokenRole",
]
