"""
Price computation for stata conversions.
"""

import logging
from typing import List, Optional

from .rate_store import RateStore
from .types import RAY, QuoteResult, StataData, SwapSide, Token, TokenRole

logger = logging.getLogger(__name__)


def validate_roles(src_role: Optional[TokenRole], dest_role: Optional[TokenRole], side: SwapSide) -> bool:
    """
    Check whether a conversion between two roles can be priced.

    Exactly one side must be the stata token. The buy side (mint, withdraw)
    only supports the underlying, never the aToken.
    """
    if src_role is None or dest_role is None:
        return False
    if (src_role == TokenRole.WRAPPED) == (dest_role == TokenRole.WRAPPED):
        return False

    other = dest_role if src_role == TokenRole.WRAPPED else src_role
    if side == SwapSide.BUY and other != TokenRole.UNDERLYING:
        return False
    return True


def compute_prices(
    amounts: List[int],
    src_role: TokenRole,
    rate: int,
    side: SwapSide = SwapSide.SELL,
) -> Optional[List[int]]:
    """
    Convert amounts at rate. Returns None when the rate is unknown (0).

    One stata share is worth rate / RAY underlying. Amounts are denominated
    in the source token on SELL and in the destination token on BUY; share
    amounts are scaled up by the rate, underlying/aToken amounts down.
    Division truncates, so a round trip never returns more than it started with.
    """
    if rate == 0:
        return None

    amounts_in_shares = (src_role == TokenRole.WRAPPED) == (side == SwapSide.SELL)
    if amounts_in_shares:
        return [amount * rate // RAY for amount in amounts]
    return [amount * RAY // rate for amount in amounts]


class PriceEngine:
    """Validates conversions and prices them from the rate store."""

    def __init__(
        self,
        dex_key: str,
        rate_store: RateStore,
        gas_cost_underlying: int = 400_000,
        gas_cost_a_token: int = 150_000,
    ):
        self.dex_key = dex_key
        self.rate_store = rate_store
        self.gas_cost_underlying = gas_cost_underlying
        self.gas_cost_a_token = gas_cost_a_token

    def gas_cost(self, src_role: TokenRole, dest_role: TokenRole) -> int:
        # going through the underlying adds a supply/withdraw on the Aave pool
        if TokenRole.UNDERLYING in (src_role, dest_role):
            return self.gas_cost_underlying
        return self.gas_cost_a_token

    async def quote(
        self,
        src_token: Token,
        dest_token: Token,
        src_role: Optional[TokenRole],
        dest_role: Optional[TokenRole],
        amounts: List[int],
        side: SwapSide,
        block_number: int,
    ) -> Optional[QuoteResult]:
        """
        Price amounts for a conversion, or return None if it cannot be priced.

        Infra failures while refreshing the rate propagate.
        """
        if not validate_roles(src_role, dest_role, side):
            logger.debug(
                f"Unsupported conversion {src_role} -> {dest_role} on {side.value}"
            )
            return None

        stata = src_token if src_role == TokenRole.WRAPPED else dest_token
        pool_address = stata.address.lower()

        record = await self.rate_store.get_rate(pool_address, block_number)
        prices = compute_prices(amounts, src_role, record.rate, side)
        if prices is None:
            logger.warning(f"No rate available for {pool_address} at block {block_number}")
            return None

        unit_token = dest_token if side == SwapSide.SELL else src_token
        return QuoteResult(
            prices=prices,
            unit=10**unit_token.decimals,
            gas_cost=self.gas_cost(src_role, dest_role),
            exchange=self.dex_key,
            data=StataData(
                src_type=src_role,
                dest_type=dest_role,
                exchange=pool_address,
            ),
            pool_addresses=[pool_address],
        )
