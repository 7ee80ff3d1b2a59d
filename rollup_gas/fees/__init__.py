"""L1 security fee calculation and conversion.

This module provides:
- Per-rollup L1 fee formulas (Arbitrum, Optimism)
- Readers for the rollups' on-chain fee parameters
- Conversion of fees into USD and a quote token via the deepest pools

Usage:
    from rollup_gas.fees import PriceConverter, optimism_fee

    l1_gas_used, l1_fee_wei = optimism_fee(calldata, overhead, base_fee, scalar, decimals)

    converter = PriceConverter()
    costs = await converter.convert(chain_id, usdc, l1_fee_wei, pool_provider)
"""

from rollup_gas.fees.calculator import (
    SIGNATURE_GAS_SURCHARGE,
    ArbitrumGasData,
    GasCostBreakdown,
    GasData,
    OptimismGasData,
    arbitrum_fee,
    calculate_l1_security_fee,
    decode_calldata,
    gas_used_for_calldata,
    optimism_fee,
)
from rollup_gas.fees.conversion import (
    PriceConverter,
    estimate_l1_gas_cost,
    get_gas_costs_in_usd_and_quote,
)
from rollup_gas.fees.gas_data import (
    ArbitrumGasDataProvider,
    OptimismGasDataProvider,
)
from rollup_gas.fees.result import ConversionIssue, GasCostInTerms, L1GasCost

__all__ = [
    # Calculator
    "GasCostBreakdown",
    "ArbitrumGasData",
    "OptimismGasData",
    "GasData",
    "SIGNATURE_GAS_SURCHARGE",
    "decode_calldata",
    "gas_used_for_calldata",
    "arbitrum_fee",
    "optimism_fee",
    "calculate_l1_security_fee",
    # Gas data
    "ArbitrumGasDataProvider",
    "OptimismGasDataProvider",
    # Conversion
    "PriceConverter",
    "get_gas_costs_in_usd_and_quote",
    "estimate_l1_gas_cost",
    # Result
    "GasCostInTerms",
    "L1GasCost",
    "ConversionIssue",
]
