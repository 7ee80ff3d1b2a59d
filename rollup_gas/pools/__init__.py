"""Pool types, providers and highest-liquidity pool selection."""

from .constants import NATIVE_POOL_FEE_TIERS, USD_POOL_FEE_TIERS, FeeTier
from .pool import V3Pool
from .provider import (
    PoolAccessor,
    PoolCandidate,
    PoolProvider,
    StaticPoolAccessor,
    StaticPoolProvider,
    pool_key,
)
from .selection import (
    get_highest_liquidity_native_pool,
    get_highest_liquidity_usd_pool,
    native_pool_candidates,
    select_best,
    usd_pool_candidates,
)

__all__ = [
    "FeeTier",
    "NATIVE_POOL_FEE_TIERS",
    "USD_POOL_FEE_TIERS",
    "V3Pool",
    "PoolAccessor",
    "PoolCandidate",
    "PoolProvider",
    "StaticPoolAccessor",
    "StaticPoolProvider",
    "pool_key",
    "select_best",
    "native_pool_candidates",
    "usd_pool_candidates",
    "get_highest_liquidity_usd_pool",
    "get_highest_liquidity_native_pool",
]
