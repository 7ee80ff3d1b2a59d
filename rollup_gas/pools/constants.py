"""Uniswap V3 style fee tiers."""

from enum import IntEnum


class FeeTier(IntEnum):
    """Pool fee in hundredths of a basis point (fee = units / 1,000,000)."""

    LOWEST = 100  # 0.01% - stable pairs
    LOW = 500  # 0.05% - stable pairs
    MEDIUM = 3000  # 0.30% - most pairs
    HIGH = 10000  # 1.00% - exotic pairs


# Tiers searched when pricing the native currency against an arbitrary token
NATIVE_POOL_FEE_TIERS = (FeeTier.HIGH, FeeTier.MEDIUM, FeeTier.LOW)

# Tiers searched when pricing the native currency against USD stablecoins
USD_POOL_FEE_TIERS = (FeeTier.HIGH, FeeTier.MEDIUM, FeeTier.LOW, FeeTier.LOWEST)

# sqrtPriceX96 fixed point: price = (sqrt_price_x96 / 2**96) ** 2
Q96 = 2**96
Q192 = Q96**2

__all__ = [
    "FeeTier",
    "NATIVE_POOL_FEE_TIERS",
    "USD_POOL_FEE_TIERS",
    "Q96",
    "Q192",
]
