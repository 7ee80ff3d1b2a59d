"""V3Pool dataclass for concentrated liquidity pools."""

from __future__ import annotations

from dataclasses import dataclass

from rollup_gas.models import Price, Token

from .constants import Q192, FeeTier


@dataclass
class V3Pool:
    """A Uniswap V3 style concentrated liquidity pool.

    Only the state needed to rank pools and read their spot price is kept:
    - Current price (as sqrtPriceX96)
    - Active liquidity at the current tick

    Tokens may be passed in either order; they are stored sorted by address
    so that token0 matches the on-chain pool. Callers should resolve
    prices by token identity through price_of() rather than by position.
    """

    token0: Token
    token1: Token
    fee: FeeTier
    sqrt_price_x96: int  # Current sqrt(token1/token0 raw price) * 2^96
    liquidity: int  # Current active liquidity

    def __post_init__(self) -> None:
        self.fee = FeeTier(self.fee)
        if self.liquidity < 0:
            raise ValueError(f"Pool liquidity cannot be negative: {self.liquidity}")
        if self.sqrt_price_x96 <= 0:
            raise ValueError(f"Pool sqrt price must be positive: {self.sqrt_price_x96}")
        if not self.token0.sorts_before(self.token1):
            # sqrt price is always token1/token0 of the on-chain ordering
            self.token0, self.token1 = self.token1, self.token0

    @property
    def chain_id(self) -> int:
        return self.token0.chain_id

    @property
    def token0_price(self) -> Price:
        """Price of token0 in terms of token1."""
        return Price(self.token0, self.token1, self.sqrt_price_x96**2, Q192)

    @property
    def token1_price(self) -> Price:
        """Price of token1 in terms of token0."""
        return self.token0_price.invert()

    def price_of(self, token: Token) -> Price:
        """Price of `token` in terms of the other pool token.

        Raises:
            ValueError: If the token is not one of the pool's tokens
        """
        if token == self.token0:
            return self.token0_price
        if token == self.token1:
            return self.token1_price
        raise ValueError(f"Token {token} not in pool")


__all__ = ["V3Pool"]
