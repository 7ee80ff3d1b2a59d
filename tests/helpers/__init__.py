"""Test helpers module for shared test utilities.

- constants: Tokens and sqrt prices
- factories: Pool and chain config factory functions
"""

from tests.helpers.constants import (
    DAI,
    HIGH_TOKEN,
    LOW_TOKEN,
    ONE_ETHER,
    SQRT_PRICE_1_1,
    SQRT_PRICE_4_1,
    UNI,
    USDC,
    USDT,
    WBTC,
    WETH,
    WETH_OP,
)
from tests.helpers.factories import make_chain_config, make_pool

__all__ = [
    # Constants
    "WETH",
    "USDC",
    "DAI",
    "USDT",
    "UNI",
    "WBTC",
    "LOW_TOKEN",
    "HIGH_TOKEN",
    "WETH_OP",
    "ONE_ETHER",
    "SQRT_PRICE_1_1",
    "SQRT_PRICE_4_1",
    # Factories
    "make_pool",
    "make_chain_config",
]
