"""
Core types for stata token pricing and execution.

Domain models shared by the rate store, price engine, calldata encoder and
the adapter facade.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

# Fixed-point scale of StaticATokenLM.rate()
RAY = 10**27


class TokenRole(str, Enum):
    """Role a token plays relative to a stata pool."""

    UNDERLYING = "underlying"
    INTERMEDIATE = "aToken"
    WRAPPED = "stataToken"


class SwapSide(str, Enum):
    """SELL fixes the input amount, BUY fixes the output amount."""

    SELL = "SELL"
    BUY = "BUY"


@dataclass
class Token:
    """Token as supplied by the routing layer."""

    address: str
    decimals: int


@dataclass
class StataToken:
    """
    Token-list entry describing one stata pool.

    Attributes:
        address: StaticATokenLM contract address (the pool identity)
        underlying: Address of the asset the aToken wraps
        a_token: Address of the Aave V3 aToken
    """

    address: str
    underlying: str
    a_token: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StataToken":
        return cls(
            address=data["address"],
            underlying=data["underlying"],
            a_token=data.get("a_token") or data["aToken"],
        )

    def to_dict(self) -> Dict[str, str]:
        return {
            "address": self.address,
            "underlying": self.underlying,
            "aToken": self.a_token,
        }


@dataclass
class RateRecord:
    """
    Conversion rate of a stata token, valid as of block_number.

    rate is scaled by RAY: one wrapped unit is worth rate / RAY underlying
    units. A record with rate 0 means the rate is unknown.
    """

    block_number: int = 0
    rate: int = 0

    def to_dict(self) -> Dict[str, Any]:
        # rate can exceed 2**53, keep it as a string for non-python readers
        return {"blockNumber": self.block_number, "rate": str(self.rate)}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RateRecord":
        return cls(block_number=int(data["blockNumber"]), rate=int(data["rate"]))


@dataclass(frozen=True)
class StataData:
    """Metadata carried from a quote to calldata encoding."""

    src_type: TokenRole
    dest_type: TokenRole
    exchange: str


@dataclass(frozen=True)
class QuoteResult:
    """
    Prices for one pool, one output per requested amount.

    Attributes:
        prices: Output amounts, same order as the input amounts
        unit: 10**decimals of the priced token, used by the router to scale
        gas_cost: Flat gas estimate for executing the conversion
        exchange: Dex key of the adapter that produced the quote
        data: Roles and pool address needed to encode the execution
        pool_addresses: Pools touched by the conversion
    """

    prices: List[int]
    unit: int
    gas_cost: int
    exchange: str
    data: StataData
    pool_addresses: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class DexExchangeParam:
    """Everything the execution layer needs to submit one conversion."""

    need_wrap_native: bool
    dex_func_has_recipient: bool
    exchange_data: str
    target_exchange: str
    return_amount_pos: Optional[int] = None
