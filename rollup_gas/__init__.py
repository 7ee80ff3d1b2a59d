"""Rollup L1 security fee calculation and gas cost conversion."""

from rollup_gas.fees import PriceConverter, arbitrum_fee, gas_used_for_calldata, optimism_fee

__version__ = "0.1.0"
__all__ = [
    "PriceConverter",
    "arbitrum_fee",
    "gas_used_for_calldata",
    "optimism_fee",
    "__version__",
]
