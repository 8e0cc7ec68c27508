"""
Blockchain batch calling utilities.

This package provides read-only batched eth_call execution, reducing RPC
overhead when several contract views are needed at the same block.
"""

from .base import BaseBatcher, BatchConfig
from .errors import (
    BatchError,
    ContractError,
    DecodeError,
    NetworkError,
    RateLimitError,
    ValidationError,
)
from .multicall import MulticallBatcher, MulticallCall, MulticallResult, uint256_to_int

__all__ = [
    'BaseBatcher',
    'BatchConfig',
    'BatchError',
    'ContractError',
    'DecodeError',
    'NetworkError',
    'RateLimitError',
    'ValidationError',
    'MulticallBatcher',
    'MulticallCall',
    'MulticallResult',
    'uint256_to_int',
]
