"""Highest-liquidity pool selection for gas cost conversion.

Two candidate sets are used:
- native/USD: every USD reference token of the chain, at every fee tier
- native/target: the target token at the HIGH, MEDIUM and LOW tiers

Both are fetched in one batch and the deepest pool wins. Ties go to the
candidate listed first.
"""

from __future__ import annotations

from collections.abc import Sequence

import structlog

from rollup_gas.chains import ChainConfig, get_chain_config
from rollup_gas.errors import NoUsdPool, NoUsdReferenceToken
from rollup_gas.models import Token, short_address

from .constants import NATIVE_POOL_FEE_TIERS, USD_POOL_FEE_TIERS
from .pool import V3Pool
from .provider import PoolCandidate, PoolProvider

logger = structlog.get_logger()


def native_pool_candidates(native: Token, target: Token) -> list[PoolCandidate]:
    """Candidates pairing the native currency with `target`."""
    return [(native, target, fee) for fee in NATIVE_POOL_FEE_TIERS]


def usd_pool_candidates(native: Token, usd_tokens: Sequence[Token]) -> list[PoolCandidate]:
    """Candidates pairing the native currency with each USD token.

    Ordered by fee tier, then by the configured USD token order.

    Raises:
        NoUsdReferenceToken: If usd_tokens is empty
    """
    if not usd_tokens:
        raise NoUsdReferenceToken(
            f"Could not find a USD token for computing gas costs on chain {native.chain_id}"
        )
    return [(native, usd_token, fee) for fee in USD_POOL_FEE_TIERS for usd_token in usd_tokens]


async def select_best(
    candidates: Sequence[PoolCandidate],
    provider: PoolProvider,
) -> V3Pool | None:
    """Return the candidate pool with the greatest liquidity.

    Issues a single batched fetch. Missing pools are skipped; among the rest
    the first pool with strictly greater liquidity than all earlier ones
    wins, so ties resolve to the earliest candidate.

    Returns:
        The deepest pool, or None if no candidate exists
    """
    accessor = await provider.get_pools(candidates)

    best: V3Pool | None = None
    for token_a, token_b, fee in candidates:
        pool = accessor.get_pool(token_a, token_b, fee)
        if pool is None:
            continue
        if best is None or pool.liquidity > best.liquidity:
            best = pool
    return best


def _describe(candidates: Sequence[PoolCandidate]) -> list[str]:
    return [f"{a}/{b}/{int(fee)}" for a, b, fee in candidates]


async def get_highest_liquidity_usd_pool(
    chain_id: int,
    provider: PoolProvider,
    chain_config: ChainConfig | None = None,
) -> V3Pool:
    """Deepest pool pricing the chain's native currency in USD.

    Raises:
        UnsupportedChain: If the chain is not configured
        NoUsdReferenceToken: If the chain has no USD tokens configured
        NoUsdPool: If none of the candidate pools exist
    """
    config = chain_config or get_chain_config()
    native = config.native_currency_of(chain_id)
    candidates = usd_pool_candidates(native, config.usd_reference_tokens_of(chain_id))

    pool = await select_best(candidates, provider)
    if pool is None:
        message = f"Could not find a USD/{native} pool for computing gas costs."
        logger.error(
            "usd_pool_not_found",
            chain_id=chain_id,
            native=short_address(native.address),
            candidates=_describe(candidates),
        )
        raise NoUsdPool(message)

    logger.debug(
        "usd_pool_selected",
        chain_id=chain_id,
        token0=short_address(pool.token0.address),
        token1=short_address(pool.token1.address),
        fee=int(pool.fee),
        liquidity=pool.liquidity,
    )
    return pool


async def get_highest_liquidity_native_pool(
    chain_id: int,
    token: Token,
    provider: PoolProvider,
    chain_config: ChainConfig | None = None,
) -> V3Pool | None:
    """Deepest pool pairing the native currency with `token`, or None."""
    config = chain_config or get_chain_config()
    native = config.native_currency_of(chain_id)
    candidates = native_pool_candidates(native, token)

    pool = await select_best(candidates, provider)
    if pool is None:
        logger.info(
            "native_pool_not_found",
            chain_id=chain_id,
            native=short_address(native.address),
            token=short_address(token.address),
            candidates=_describe(candidates),
        )
    return pool


__all__ = [
    "native_pool_candidates",
    "usd_pool_candidates",
    "select_best",
    "get_highest_liquidity_usd_pool",
    "get_highest_liquidity_native_pool",
]
