"""
Block-keyed cache of stata exchange rates.

The local map is the first tier. The shared DexCache (Redis) is the second
tier and lets adapter processes reuse each other's on-chain reads. Only when
both miss is StaticATokenLM.rate() read on chain.
"""

import logging
from typing import Dict, Optional

from ..batchers import MulticallBatcher, MulticallCall, uint256_to_int
from ..core.storage import DexCache
from .abi import StataFunctions, encode_function_data
from .types import RateRecord

logger = logging.getLogger(__name__)


class RateStore:
    """
    Owns the rate record of every known stata pool on one network.

    Pool ids are lower-cased stata token addresses. No locking is done:
    concurrent refreshes of one pool read the same chain state, so the last
    write wins without changing the result.
    """

    def __init__(
        self,
        dex_key: str,
        network: str,
        cache: DexCache,
        multicall: MulticallBatcher,
        rate_cache_ttl: int = 60,
    ):
        self.dex_key = dex_key
        self.network = network
        self.cache = cache
        self.multicall = multicall
        self.rate_cache_ttl = rate_cache_ttl
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self._records: Dict[str, RateRecord] = {}
        # highest block each pool's record has been confirmed current for
        self._checked: Dict[str, int] = {}

    @staticmethod
    def cache_key(pool_id: str) -> str:
        return f"state_{pool_id.lower()}"

    def ensure(self, pool_id: str) -> RateRecord:
        """Return the local record for pool_id, creating an empty one if needed."""
        return self._records.setdefault(pool_id.lower(), RateRecord())

    def peek(self, pool_id: str) -> Optional[RateRecord]:
        """Return the local record without any I/O."""
        return self._records.get(pool_id.lower())

    def reset(self) -> None:
        """Forget every local record."""
        self._records.clear()
        self._checked.clear()

    async def get_rate(self, pool_id: str, at_block: int) -> RateRecord:
        """
        Return a rate record valid as of at_block.

        The local record is returned as-is when it is at least as fresh as
        at_block, or was already adopted or fetched for at_block. Otherwise the shared cache is consulted, then the chain.
        A shared record older than at_block is still adopted unless it is
        older than what is already held locally.

        Raises:
            BatchError: The on-chain read failed
            StorageError: The shared cache could not be reached
        """
        pool_id = pool_id.lower()
        current = self.ensure(pool_id)
        if max(current.block_number, self._checked.get(pool_id, 0)) >= at_block:
            return current

        cached = await self.cache.get(self.dex_key, self.network, self.cache_key(pool_id))
        if cached:
            record = RateRecord.from_dict(cached)
            if record.block_number >= current.block_number:
                self.logger.debug(
                    f"Adopted shared rate for {pool_id} at block {record.block_number} "
                    f"(requested {at_block})"
                )
                self._records[pool_id] = record
                self._checked[pool_id] = at_block
                return record
            self.logger.debug(
                f"Ignoring shared rate for {pool_id} at block {record.block_number}, "
                f"local record is at {current.block_number}"
            )

        record = await self._fetch_rate(pool_id, at_block)
        self._records[pool_id] = record
        self._checked[pool_id] = at_block
        # a failed publish still fails the quote; the local record is kept
        await self.cache.setex(
            self.dex_key,
            self.network,
            self.cache_key(pool_id),
            self.rate_cache_ttl,
            record.to_dict(),
        )
        return record

    async def _fetch_rate(self, pool_id: str, at_block: int) -> RateRecord:
        results = await self.multicall.try_aggregate(
            True,
            [
                MulticallCall(
                    target=pool_id,
                    call_data=encode_function_data(StataFunctions.rate, []),
                    decoder=uint256_to_int,
                )
            ],
            at_block,
        )
        rate = results[0].return_data
        self.logger.info(f"Fetched rate {rate} for {pool_id} at block {at_block}")
        return RateRecord(block_number=at_block, rate=rate)
