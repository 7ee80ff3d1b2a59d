"""Gas cost conversion result types."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from rollup_gas.models import CurrencyAmount
    from rollup_gas.pools import V3Pool


class ConversionIssue(Enum):
    """Non-fatal conditions met while converting a gas cost."""

    NO_NATIVE_POOL = "no_native_pool"


@dataclass(frozen=True)
class GasCostInTerms:
    """An L1 fee expressed in USD and in the caller's quote token.

    Attributes:
        cost_in_quote_token: Fee in the quote token. Zero when no
            native/quote pool exists (see issue).
        cost_in_usd: Fee in the USD token of the selected USD pool.
        usd_pool: Pool used for the USD conversion.
        native_pool: Pool used for the quote token conversion, or None when
            the quote token is the native currency or no pool was found.
        issue: Set when the quote token conversion degraded.

    Examples:
        result = await converter.convert(chain_id, usdc, fee_wei, provider)
        if result.is_degraded:
            # cost_in_quote_token is zero
            ...
    """

    cost_in_quote_token: CurrencyAmount
    cost_in_usd: CurrencyAmount
    usd_pool: V3Pool
    native_pool: V3Pool | None = None
    issue: ConversionIssue | None = None

    @property
    def is_degraded(self) -> bool:
        """True if the quote token amount could not be computed."""
        return self.issue is not None


@dataclass(frozen=True)
class L1GasCost:
    """L1 security fee of a transaction with its converted costs."""

    l1_gas_used: int
    l1_fee_wei: int
    cost_in_quote_token: CurrencyAmount
    cost_in_usd: CurrencyAmount
    issue: ConversionIssue | None = None
