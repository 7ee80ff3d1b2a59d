"""Value types shared across fee calculation and conversion."""

from rollup_gas.models.amounts import CurrencyAmount, Price, Token
from rollup_gas.models.types import (
    UINT256_MAX,
    Address,
    Decimals,
    is_valid_address,
    normalize_address,
    short_address,
)

__all__ = [
    "Token",
    "CurrencyAmount",
    "Price",
    "Address",
    "Decimals",
    "UINT256_MAX",
    "is_valid_address",
    "normalize_address",
    "short_address",
]
