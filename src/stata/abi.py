"""
Function signatures of the StaticATokenLM contract used by the adapter.
"""

from enum import Enum
from typing import Any, List

from eth_abi import encode
from web3 import Web3


class StataFunctions(str, Enum):
    """Contract functions with their canonical ABI signatures."""

    rate = "rate()"
    redeem = "redeem(uint256,address,address,bool)"
    deposit = "deposit(uint256,address,uint16,bool)"
    withdraw = "withdraw(uint256,address,address)"
    mint = "mint(uint256,address)"

    @property
    def selector(self) -> bytes:
        return bytes(Web3.keccak(text=self.value)[:4])

    @property
    def arg_types(self) -> List[str]:
        args = self.value[self.value.index("(") + 1 : -1]
        return args.split(",") if args else []


def encode_function_data(function: StataFunctions, args: List[Any]) -> str:
    """ABI-encode a call to function with args, returned as 0x-prefixed hex."""
    return "0x" + (function.selector + encode(function.arg_types, args)).hex()
