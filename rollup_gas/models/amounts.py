"""Token, amount and price value types.

Amounts are raw integers in the token's smallest unit (wei for 18-decimal
tokens). Prices are kept as exact fractions of raw amounts so that quoting
an amount never goes through floating point.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal

from rollup_gas.models.types import UINT256_MAX, normalize_address
from rollup_gas.safe_int import S


@dataclass(frozen=True)
class Token:
    """An ERC20 token on a specific chain.

    Two tokens are equal when they share chain id and address; decimals and
    symbol are metadata and do not take part in comparisons.
    """

    chain_id: int
    address: str
    decimals: int = field(default=18, compare=False)
    symbol: str | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "address", normalize_address(self.address, validate=True))
        if not 0 <= self.decimals <= 255:
            raise ValueError(f"Token decimals out of range: {self.decimals}")

    def sorts_before(self, other: Token) -> bool:
        """True if this token is token0 in a pool with `other` (lower address)."""
        if self.chain_id != other.chain_id:
            raise ValueError("Tokens must be on the same chain")
        if self.address == other.address:
            raise ValueError("Tokens must have different addresses")
        return int(self.address, 16) < int(other.address, 16)

    def __str__(self) -> str:
        return self.symbol or self.address


@dataclass(frozen=True)
class CurrencyAmount:
    """A raw, non-negative amount of a token."""

    currency: Token
    raw: int

    def __post_init__(self) -> None:
        if isinstance(self.raw, bool) or not isinstance(self.raw, int):
            raise TypeError(f"Amount must be int, got {type(self.raw).__name__}")
        if not 0 <= self.raw <= UINT256_MAX:
            raise ValueError(f"Amount out of uint256 range: {self.raw}")

    @classmethod
    def from_raw_amount(cls, currency: Token, raw: int) -> CurrencyAmount:
        return cls(currency=currency, raw=raw)

    @classmethod
    def zero(cls, currency: Token) -> CurrencyAmount:
        return cls(currency=currency, raw=0)

    @property
    def decimals(self) -> int:
        return self.currency.decimals

    def add(self, other: CurrencyAmount) -> CurrencyAmount:
        if other.currency != self.currency:
            raise ValueError(f"Cannot add {other.currency} to {self.currency}")
        return CurrencyAmount(self.currency, (S(self.raw) + other.raw).to_uint256())

    def to_exact(self) -> str:
        """Human-readable amount, e.g. '1.5' for 1.5e18 wei. For display only."""
        return str(Decimal(self.raw).scaleb(-self.decimals).normalize())

    def __str__(self) -> str:
        return f"{self.to_exact()} {self.currency}"


@dataclass(frozen=True)
class Price:
    """Exchange rate between two tokens, as a fraction of raw amounts.

    `quote_raw = base_raw * numerator / denominator`, truncated.
    """

    base: Token
    quote_currency: Token
    numerator: int
    denominator: int

    def __post_init__(self) -> None:
        if self.numerator < 0 or self.denominator < 0:
            raise ValueError("Price fraction must be non-negative")

    def quote(self, amount: CurrencyAmount) -> CurrencyAmount:
        """Convert an amount of the base token into the quote token.

        Raises:
            ValueError: If the amount is not denominated in the base token
            DivisionByZero: If the price has a zero denominator
        """
        if amount.currency != self.base:
            raise ValueError(f"Cannot quote {amount.currency} with a {self.base} price")
        raw = S(amount.raw) * self.numerator // self.denominator
        return CurrencyAmount(self.quote_currency, raw.to_uint256())

    def invert(self) -> Price:
        return Price(
            base=self.quote_currency,
            quote_currency=self.base,
            numerator=self.denominator,
            denominator=self.numerator,
        )
