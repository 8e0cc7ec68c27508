"""
Shared plumbing for read-only batched eth_call execution.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, List, Optional, Union

from web3 import Web3

from .errors import BatchError, ErrorHandler, ValidationError

logger = logging.getLogger(__name__)


@dataclass
class BatchConfig:
    """
    batch_size: calls per eth_call
    max_retries: total attempts per chunk, 1 disables retrying
    retry_delay: multiplier applied to ErrorHandler's backoff
    """

    batch_size: int = 100
    max_retries: int = 1
    retry_delay: float = 1.0


class BaseBatcher(ABC):
    """Chunks calls, retries transient failures and validates targets."""

    def __init__(self, web3: Web3, config: Optional[BatchConfig] = None):
        self.web3 = web3
        self.config = config or BatchConfig()
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.error_handler = ErrorHandler(self.logger)

    @abstractmethod
    async def try_aggregate(
        self,
        strict: bool,
        calls: List[Any],
        block_identifier: Union[int, str] = "latest",
    ) -> List[Any]:
        """
        Execute calls at block_identifier, returning one result per call in order.

        With strict set, any failed call fails the whole batch.
        """
        pass

    def _chunk(self, items: List[Any]) -> List[List[Any]]:
        size = self.config.batch_size
        return [items[start:start + size] for start in range(0, len(items), size)]

    async def _retry_operation(self, operation, *args, **kwargs) -> Any:
        attempts = self.config.max_retries
        if attempts < 1:
            raise BatchError("max_retries must be at least 1")

        name = getattr(operation, "__name__", repr(operation))
        for attempt in range(attempts):
            try:
                return await operation(*args, **kwargs)
            except Exception as e:
                self.error_handler.log_error(
                    e, {"attempt": attempt + 1, "max_retries": attempts, "operation": name}
                )
                if not self.error_handler.should_retry(e, attempt, attempts):
                    raise

                delay = self.error_handler.get_retry_delay(e, attempt) * self.config.retry_delay
                self.logger.info(f"Retrying {name} in {delay}s ({attempt + 1}/{attempts})")
                await asyncio.sleep(delay)

    def _validate_address(self, address: str) -> str:
        """Return the checksummed address, or raise ValidationError."""
        try:
            return Web3.to_checksum_address(address)
        except (ValueError, TypeError) as e:
            raise ValidationError(f"Invalid address {address}: {e}")
