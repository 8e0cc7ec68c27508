"""
Calldata encoding for stata conversions.

A conversion is one of four StaticATokenLM calls, chosen by the swap side and
by whether the stata token is being spent or received:

    SELL, stata in  -> redeem(shares, receiver, owner, withdrawFromAave)
    SELL, stata out -> deposit(assets, receiver, referralCode, depositToAave)
    BUY,  stata in  -> withdraw(assets, receiver, owner)
    BUY,  stata out -> mint(shares, receiver)

The bool flags are set when the other token is the underlying rather than the
aToken.
"""

import logging
from dataclasses import dataclass
from typing import Union

from web3 import Web3

from .abi import StataFunctions, encode_function_data
from .errors import EncodingError
from .types import DexExchangeParam, StataData, SwapSide, TokenRole

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Redeem:
    shares: int
    receiver: str
    owner: str
    withdraw_from_aave: bool


@dataclass(frozen=True)
class Deposit:
    assets: int
    receiver: str
    referral_code: int
    deposit_to_aave: bool


@dataclass(frozen=True)
class Withdraw:
    assets: int
    receiver: str
    owner: str


@dataclass(frozen=True)
class Mint:
    shares: int
    receiver: str


StataOperation = Union[Redeem, Deposit, Withdraw, Mint]


def build_operation(
    side: SwapSide,
    data: StataData,
    src_amount: Union[int, str],
    dest_amount: Union[int, str],
    recipient: str,
    owner: str,
) -> StataOperation:
    """Select the contract call for a quote and fill in its arguments."""
    src_type, dest_type = data.src_type, data.dest_type
    if (src_type == TokenRole.WRAPPED) == (dest_type == TokenRole.WRAPPED):
        raise EncodingError(f"Exactly one token must be the stata token, got {src_type} -> {dest_type}")

    try:
        recipient = Web3.to_checksum_address(recipient)
        owner = Web3.to_checksum_address(owner)
    except ValueError as e:
        raise EncodingError(f"Invalid recipient or owner address: {e}") from e

    if side == SwapSide.SELL:
        if src_type == TokenRole.WRAPPED:
            # e.g. sell 100 stataUSDC for USDC
            return Redeem(
                shares=int(src_amount),
                receiver=recipient,
                owner=owner,
                withdraw_from_aave=dest_type == TokenRole.UNDERLYING,
            )
        # e.g. sell 100 USDC for stataUSDC
        return Deposit(
            assets=int(src_amount),
            receiver=recipient,
            referral_code=0,
            deposit_to_aave=src_type == TokenRole.UNDERLYING,
        )

    if side == SwapSide.BUY:
        if src_type == TokenRole.WRAPPED:
            # e.g. buy 100 USDC with stataUSDC
            return Withdraw(assets=int(dest_amount), receiver=recipient, owner=owner)
        # e.g. buy 100 stataUSDC with USDC
        return Mint(shares=int(dest_amount), receiver=recipient)

    raise EncodingError(f"Unknown swap side: {side}")


def encode_operation(operation: StataOperation) -> str:
    """ABI-encode an operation as a 0x-prefixed hex payload."""
    if isinstance(operation, Redeem):
        return encode_function_data(
            StataFunctions.redeem,
            [operation.shares, operation.receiver, operation.owner, operation.withdraw_from_aave],
        )
    if isinstance(operation, Deposit):
        return encode_function_data(
            StataFunctions.deposit,
            [operation.assets, operation.receiver, operation.referral_code, operation.deposit_to_aave],
        )
    if isinstance(operation, Withdraw):
        return encode_function_data(
            StataFunctions.withdraw,
            [operation.assets, operation.receiver, operation.owner],
        )
    if isinstance(operation, Mint):
        return encode_function_data(
            StataFunctions.mint,
            [operation.shares, operation.receiver],
        )
    raise EncodingError(f"Unknown stata operation: {operation!r}")


class CalldataEncoder:
    """Builds execution parameters for a priced stata conversion."""

    def encode(
        self,
        data: StataData,
        side: SwapSide,
        src_amount: Union[int, str],
        dest_amount: Union[int, str],
        recipient: str,
        owner: str,
    ) -> DexExchangeParam:
        """
        Build the payload for the stata contract at data.exchange.

        recipient receives the output; owner is the holder whose stata shares
        are burned on redeem/withdraw (normally the executor contract).
        """
        operation = build_operation(side, data, src_amount, dest_amount, recipient, owner)
        logger.debug(f"Encoding {type(operation).__name__} on {data.exchange}")

        return DexExchangeParam(
            need_wrap_native=False,
            dex_func_has_recipient=True,
            exchange_data=encode_operation(operation),
            target_exchange=data.exchange,
            return_amount_pos=None,
        )
