"""
Multicall3 read-only batch executor.

Packs several (target, calldata) pairs into one tryAggregate eth_call against
the canonical Multicall3 deployment and decodes each return value with a
per-call decoder.
"""

import asyncio
import functools
from dataclasses import dataclass
from typing import Callable, Generic, List, Optional, TypeVar, Union

from eth_abi import decode, encode
from eth_abi.exceptions import DecodingError
from web3 import Web3
from web3.exceptions import ContractLogicError

from .base import BaseBatcher, BatchConfig
from .errors import BatchError, ContractError, DecodeError, NetworkError, RateLimitError

T = TypeVar("T")

TRY_AGGREGATE_SELECTOR = bytes(Web3.keccak(text="tryAggregate(bool,(address,bytes)[])")[:4])


def uint256_to_int(data: bytes) -> int:
    """Decode a single uint256 return value."""
    return decode(["uint256"], data)[0]


@dataclass
class MulticallCall(Generic[T]):
    """One read-only call inside a multicall batch."""

    target: str
    call_data: Union[bytes, str]
    decoder: Callable[[bytes], T]


@dataclass
class MulticallResult(Generic[T]):
    """Decoded outcome of one call. return_data is None when the call failed."""

    success: bool
    return_data: Optional[T] = None


def _retry_after(response) -> Optional[float]:
    """Seconds from a Retry-After header, or None when absent or not numeric."""
    try:
        return float(response.headers["Retry-After"])
    except (AttributeError, KeyError, TypeError, ValueError):
        return None


def _to_bytes(call_data: Union[bytes, str]) -> bytes:
    if isinstance(call_data, str):
        return bytes.fromhex(call_data[2:] if call_data.startswith("0x") else call_data)
    return bytes(call_data)


class MulticallBatcher(BaseBatcher):
    """
    Batch executor backed by Multicall3.tryAggregate.

    With strict=True the contract is asked to revert on any failed call and
    a failed decode fails the batch, so callers either get every result or
    an exception.
    """

    def __init__(
        self,
        web3: Web3,
        multicall_address: str,
        config: Optional[BatchConfig] = None
    ):
        super().__init__(web3, config)
        self.multicall_address = self._validate_address(multicall_address)

    async def try_aggregate(
        self,
        strict: bool,
        calls: List[MulticallCall],
        block_identifier: Union[int, str] = "latest",
    ) -> List[MulticallResult]:
        """
        Execute calls through Multicall3 at the given block.

        Args:
            strict: Fail the whole batch if any single call fails
            calls: Calls to execute, in order
            block_identifier: Block to call at

        Returns:
            One MulticallResult per call, in the same order

        Raises:
            ContractError: A call reverted (strict) or the aggregate call reverted
            DecodeError: Return data could not be decoded (strict)
            NetworkError: The RPC endpoint could not be reached
        """
        if not calls:
            return []

        encoded = [
            (self._validate_address(call.target), _to_bytes(call.call_data))
            for call in calls
        ]

        results: List[MulticallResult] = []
        offset = 0
        for chunk in self._chunk(encoded):
            raw_results = await self._retry_operation(
                self._aggregate_chunk, strict, chunk, block_identifier
            )
            for i, (success, data) in enumerate(raw_results):
                results.append(self._decode_result(strict, calls[offset + i], success, data))
            offset += len(chunk)

        self.logger.debug(
            f"Executed {len(calls)} calls at block {block_identifier} (strict={strict})"
        )
        return results

    async def _aggregate_chunk(
        self,
        strict: bool,
        chunk: List[tuple],
        block_identifier: Union[int, str],
    ) -> List[tuple]:
        call_data = TRY_AGGREGATE_SELECTOR + encode(
            ["bool", "(address,bytes)[]"], [strict, chunk]
        )

        # web3.eth.call is blocking; keep it off the event loop
        loop = asyncio.get_event_loop()
        try:
            raw_response = await loop.run_in_executor(
                None,
                functools.partial(
                    self.web3.eth.call,
                    {"to": self.multicall_address, "data": "0x" + call_data.hex()},
                    block_identifier=block_identifier,
                ),
            )
        except ContractLogicError as e:
            self.logger.error(f"Multicall reverted at block {block_identifier}: {e}")
            raise ContractError(f"Multicall reverted: {e}") from e
        except OSError as e:
            response = getattr(e, "response", None)
            if getattr(response, "status_code", None) == 429:
                retry_after = _retry_after(response)
                self.logger.warning(f"Multicall rate limited (retry after {retry_after}s)")
                raise RateLimitError(f"Multicall rate limited: {e}", retry_after) from e
            self.logger.error(f"Multicall transport failure: {e}")
            raise NetworkError(f"Multicall transport failure: {e}") from e
        except Exception as e:
            self.logger.error(f"Multicall failed: {e}")
            raise BatchError(f"Multicall failed: {e}") from e

        try:
            (raw_results,) = decode(["(bool,bytes)[]"], bytes(raw_response))
        except DecodingError as e:
            raise DecodeError(f"Failed to decode multicall response: {e}") from e

        if len(raw_results) != len(chunk):
            raise DecodeError(
                f"Multicall returned {len(raw_results)} results for {len(chunk)} calls"
            )
        return list(raw_results)

    def _decode_result(
        self,
        strict: bool,
        call: MulticallCall,
        success: bool,
        data: bytes,
    ) -> MulticallResult:
        if not success:
            if strict:
                raise ContractError(f"Call to {call.target} failed")
            return MulticallResult(success=False)

        try:
            return MulticallResult(success=True, return_data=call.decoder(data))
        except Exception as e:
            if strict:
                raise DecodeError(f"Failed to decode result from {call.target}: {e}") from e
            self.logger.warning(f"Dropping undecodable result from {call.target}: {e}")
            return MulticallResult(success=False)
