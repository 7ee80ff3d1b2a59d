"""L1 security fee calculation for rollup transactions.

Rollups pay the L1 to publish each transaction's calldata. The gas charged
for that data is priced per byte (4 gas for a zero byte, 16 for any other
byte) plus a fixed 68-byte signature surcharge. Each rollup turns that gas
figure into a wei fee with its own formula:

- Arbitrum: gas_used * per_l1_calldata_fee + per_l2_tx_fee
- Optimism: gas_used * l1_base_fee * scalar / 10**decimals

All arithmetic is on Python ints via SafeInt; results must fit in uint256.
"""

from __future__ import annotations

import binascii
from collections.abc import Iterator
from dataclasses import dataclass

from rollup_gas.errors import InvalidCalldata
from rollup_gas.safe_int import S

CALLDATA_PREFIX = "0x"

ZERO_BYTE_GAS = 4
NONZERO_BYTE_GAS = 16

# 68 bytes of signature data charged at the non-zero byte rate
SIGNATURE_GAS_SURCHARGE = 68 * NONZERO_BYTE_GAS  # = 1088

# 10**78 no longer fits in a uint256
MAX_FEE_SCALAR_DECIMALS = 77


@dataclass(frozen=True)
class GasCostBreakdown:
    """L1 gas used and the resulting fee in wei.

    Unpacks as `(l1_gas_used, l1_fee_wei)`.
    """

    l1_gas_used: int
    l1_fee_wei: int

    def __iter__(self) -> Iterator[int]:
        yield self.l1_gas_used
        yield self.l1_fee_wei


@dataclass(frozen=True)
class ArbitrumGasData:
    """Arbitrum L1 pricing parameters (from ArbGasInfo).

    Attributes:
        per_l2_tx_fee: Flat wei fee charged per L2 transaction
        per_l1_calldata_fee: Wei charged per unit of calldata gas
    """

    per_l2_tx_fee: int
    per_l1_calldata_fee: int


@dataclass(frozen=True)
class OptimismGasData:
    """Optimism L1 pricing parameters (from the GasPriceOracle predeploy).

    Attributes:
        l1_base_fee: Current L1 base fee in wei
        scalar: Fee scalar numerator
        decimals: Fee scalar is scalar / 10**decimals
        overhead: Fixed gas overhead added per transaction
    """

    l1_base_fee: int
    scalar: int
    decimals: int
    overhead: int


GasData = ArbitrumGasData | OptimismGasData


def decode_calldata(calldata: str) -> bytes:
    """Decode 0x-prefixed hex calldata.

    Raises:
        InvalidCalldata: If the prefix is missing, the digit count is odd,
            or a non-hex character is present
    """
    if not isinstance(calldata, str) or not calldata.startswith(CALLDATA_PREFIX):
        raise InvalidCalldata(f"Calldata must start with {CALLDATA_PREFIX!r}: {calldata!r:.20}")
    digits = calldata[len(CALLDATA_PREFIX) :]
    if len(digits) % 2:
        raise InvalidCalldata(f"Calldata has an odd number of hex digits ({len(digits)})")
    try:
        # unlike bytes.fromhex, unhexlify rejects embedded whitespace
        return binascii.unhexlify(digits)
    except (binascii.Error, ValueError) as err:
        raise InvalidCalldata(f"Calldata is not valid hex: {err}") from err


def gas_used_for_calldata(calldata: str, overhead: int) -> int:
    """L1 gas charged for publishing calldata.

    Args:
        calldata: 0x-prefixed hex
        overhead: Extra gas added per transaction (0 for Arbitrum)

    Returns:
        overhead + 4 per zero byte + 16 per non-zero byte + 1088
    """
    if overhead < 0:
        raise ValueError(f"Overhead cannot be negative: {overhead}")
    data = decode_calldata(calldata)
    zero_bytes = data.count(0)
    byte_gas = zero_bytes * ZERO_BYTE_GAS + (len(data) - zero_bytes) * NONZERO_BYTE_GAS
    return overhead + byte_gas + SIGNATURE_GAS_SURCHARGE


def arbitrum_fee(
    calldata: str,
    per_l2_tx_fee_wei: int,
    per_l1_calldata_fee_wei: int,
) -> GasCostBreakdown:
    """Arbitrum L1 security fee.

    Returns:
        GasCostBreakdown where fee = gas_used * per_l1_calldata_fee_wei + per_l2_tx_fee_wei
    """
    _require_non_negative(
        per_l2_tx_fee_wei=per_l2_tx_fee_wei,
        per_l1_calldata_fee_wei=per_l1_calldata_fee_wei,
    )
    gas_used = gas_used_for_calldata(calldata, 0)
    fee = S(gas_used) * per_l1_calldata_fee_wei + per_l2_tx_fee_wei
    return GasCostBreakdown(l1_gas_used=gas_used, l1_fee_wei=fee.to_uint256())


def optimism_fee(
    calldata: str,
    overhead: int,
    l1_base_fee_wei: int,
    scalar: int,
    decimals: int,
) -> GasCostBreakdown:
    """Optimism L1 security fee.

    Returns:
        GasCostBreakdown where fee = floor(gas_used * l1_base_fee_wei * scalar / 10**decimals)

    Raises:
        ValueError: If a parameter is negative or decimals exceeds MAX_FEE_SCALAR_DECIMALS
    """
    _require_non_negative(
        overhead=overhead,
        l1_base_fee_wei=l1_base_fee_wei,
        scalar=scalar,
        decimals=decimals,
    )
    if decimals > MAX_FEE_SCALAR_DECIMALS:
        raise ValueError(f"decimals exceeds {MAX_FEE_SCALAR_DECIMALS}: {decimals}")
    gas_used = gas_used_for_calldata(calldata, overhead)
    unscaled = S(gas_used) * l1_base_fee_wei * scalar
    fee = unscaled // 10**decimals
    return GasCostBreakdown(l1_gas_used=gas_used, l1_fee_wei=fee.to_uint256())


def calculate_l1_security_fee(calldata: str, gas_data: GasData) -> GasCostBreakdown:
    """Compute the L1 fee with the formula matching the gas data's rollup."""
    if isinstance(gas_data, ArbitrumGasData):
        return arbitrum_fee(calldata, gas_data.per_l2_tx_fee, gas_data.per_l1_calldata_fee)
    if isinstance(gas_data, OptimismGasData):
        return optimism_fee(
            calldata,
            gas_data.overhead,
            gas_data.l1_base_fee,
            gas_data.scalar,
            gas_data.decimals,
        )
    raise TypeError(f"Unknown gas data type: {type(gas_data).__name__}")


def _require_non_negative(**params: int) -> None:
    for name, value in params.items():
        if value < 0:
            raise ValueError(f"{name} cannot be negative: {value}")
