"""Pool provider protocols and an in-memory implementation.

Pool fetching is supplied by the caller. Anything with an async
get_pools(candidates) returning a PoolAccessor can be passed in; no base
class is required.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Protocol, TypeAlias

import structlog

from rollup_gas.models import Token, short_address

from .constants import FeeTier
from .pool import V3Pool

logger = structlog.get_logger()

# (token_a, token_b, fee tier); token order is not significant
PoolCandidate: TypeAlias = tuple[Token, Token, FeeTier]

PoolKey: TypeAlias = tuple[int, str, str, int]


def pool_key(token_a: Token, token_b: Token, fee: int) -> PoolKey:
    """Order-independent lookup key for a pool."""
    low, high = sorted((token_a.address, token_b.address), key=lambda a: int(a, 16))
    return (token_a.chain_id, low, high, int(fee))


class PoolAccessor(Protocol):
    """Result of a batched pool fetch."""

    def get_pool(self, token_a: Token, token_b: Token, fee: FeeTier) -> V3Pool | None:
        """Get the pool for a token pair and fee tier (order independent).

        Returns:
            The pool, or None if it does not exist
        """
        ...


class PoolProvider(Protocol):
    """Fetches pools for a batch of candidates.

    Implementations must be safe to call concurrently. A missing pool is
    reported by the accessor returning None; fetch failures should raise.
    """

    async def get_pools(self, candidates: Sequence[PoolCandidate]) -> PoolAccessor:
        """Fetch all candidate pools in one batch."""
        ...


class StaticPoolAccessor:
    """PoolAccessor over a fixed set of pools."""

    def __init__(self, pools: dict[PoolKey, V3Pool]) -> None:
        self._pools = pools

    def get_pool(self, token_a: Token, token_b: Token, fee: FeeTier) -> V3Pool | None:
        return self._pools.get(pool_key(token_a, token_b, fee))

    @property
    def pools(self) -> list[V3Pool]:
        return list(self._pools.values())


class StaticPoolProvider:
    """PoolProvider backed by pools known up front.

    Only pools that were requested are visible through the returned
    accessor. Each batched request is recorded in `requests`.

    Usage:
        provider = StaticPoolProvider([weth_usdc_pool, weth_dai_pool])
        accessor = await provider.get_pools(candidates)
    """

    def __init__(self, pools: Iterable[V3Pool] = ()) -> None:
        self._pools: dict[PoolKey, V3Pool] = {}
        self.requests: list[list[PoolCandidate]] = []
        for pool in pools:
            self.add_pool(pool)

    def add_pool(self, pool: V3Pool) -> None:
        key = pool_key(pool.token0, pool.token1, pool.fee)
        if key in self._pools:
            logger.debug(
                "pool_replaced",
                token0=short_address(pool.token0.address),
                token1=short_address(pool.token1.address),
                fee=int(pool.fee),
            )
        self._pools[key] = pool

    @property
    def pool_count(self) -> int:
        return len(self._pools)

    async def get_pools(self, candidates: Sequence[PoolCandidate]) -> StaticPoolAccessor:
        self.requests.append(list(candidates))
        found: dict[PoolKey, V3Pool] = {}
        for token_a, token_b, fee in candidates:
            key = pool_key(token_a, token_b, fee)
            pool = self._pools.get(key)
            if pool is not None:
                found[key] = pool
        return StaticPoolAccessor(found)


__all__ = [
    "PoolCandidate",
    "PoolAccessor",
    "PoolProvider",
    "StaticPoolAccessor",
    "StaticPoolProvider",
    "pool_key",
]
