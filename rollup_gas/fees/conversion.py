"""Conversion of L1 fees from wei into USD and a quote token.

The fee is wrapped as an amount of the chain's wrapped native currency, then
priced through the deepest native/USD pool and, unless the quote token is
the native currency itself, through the deepest native/quote pool.

Missing USD pricing is fatal (NoUsdPool). A missing native/quote pool is
not: the quote token cost degrades to zero and the result is flagged.
"""

from __future__ import annotations

import structlog

from rollup_gas.chains import ChainConfig, get_chain_config
from rollup_gas.fees.calculator import GasData, calculate_l1_security_fee
from rollup_gas.fees.result import ConversionIssue, GasCostInTerms, L1GasCost
from rollup_gas.models import CurrencyAmount, Token, short_address
from rollup_gas.pools import (
    PoolProvider,
    get_highest_liquidity_native_pool,
    get_highest_liquidity_usd_pool,
)

logger = structlog.get_logger()


class PriceConverter:
    """Convert L1 fees into USD and quote token amounts.

    Holds only the read-only chain configuration; every call brings its own
    pool provider, so one converter can serve concurrent requests.
    """

    def __init__(self, chain_config: ChainConfig | None = None) -> None:
        """Initialize the converter.

        Args:
            chain_config: Chain configuration. Defaults to the process-wide
                configuration from get_chain_config().
        """
        self._chain_config = chain_config or get_chain_config()

    @property
    def chain_config(self) -> ChainConfig:
        return self._chain_config

    async def convert(
        self,
        chain_id: int,
        target_token: Token,
        l1_fee_wei: int,
        provider: PoolProvider,
    ) -> GasCostInTerms:
        """Express an L1 fee in USD and in `target_token`.

        Args:
            chain_id: Chain the fee was paid on
            target_token: Quote token for the caller
            l1_fee_wei: Fee in wei of the native currency
            provider: Pool provider for this request

        Returns:
            GasCostInTerms with both amounts

        Raises:
            UnsupportedChain: If the chain is not configured
            NoUsdReferenceToken: If the chain has no USD tokens configured
            NoUsdPool: If no native/USD pool exists
        """
        native = self._chain_config.native_currency_of(chain_id)
        cost_native = CurrencyAmount.from_raw_amount(native, l1_fee_wei)

        usd_pool = await get_highest_liquidity_usd_pool(chain_id, provider, self._chain_config)
        cost_in_usd = usd_pool.price_of(native).quote(cost_native)

        if target_token == native:
            return GasCostInTerms(
                cost_in_quote_token=cost_native,
                cost_in_usd=cost_in_usd,
                usd_pool=usd_pool,
            )

        native_pool = await get_highest_liquidity_native_pool(
            chain_id, target_token, provider, self._chain_config
        )
        if native_pool is None:
            logger.info(
                "gas_cost_quote_token_unavailable",
                chain_id=chain_id,
                token=short_address(target_token.address),
                reason="no pool to convert the cost into the quote token",
            )
            return GasCostInTerms(
                cost_in_quote_token=CurrencyAmount.zero(target_token),
                cost_in_usd=cost_in_usd,
                usd_pool=usd_pool,
                issue=ConversionIssue.NO_NATIVE_POOL,
            )

        cost_in_quote_token = native_pool.price_of(native).quote(cost_native)
        return GasCostInTerms(
            cost_in_quote_token=cost_in_quote_token,
            cost_in_usd=cost_in_usd,
            usd_pool=usd_pool,
            native_pool=native_pool,
        )

    async def estimate_l1_gas_cost(
        self,
        chain_id: int,
        calldata: str,
        gas_data: GasData,
        target_token: Token,
        provider: PoolProvider,
    ) -> L1GasCost:
        """Compute a transaction's L1 security fee and convert it.

        Raises:
            InvalidCalldata: If calldata is malformed
            NoUsdPool: If no native/USD pool exists
        """
        l1_gas_used, l1_fee_wei = calculate_l1_security_fee(calldata, gas_data)
        costs = await self.convert(chain_id, target_token, l1_fee_wei, provider)

        logger.debug(
            "l1_gas_cost_estimated",
            chain_id=chain_id,
            l1_gas_used=l1_gas_used,
            l1_fee_wei=l1_fee_wei,
            cost_in_usd=costs.cost_in_usd.to_exact(),
            cost_in_quote_token=costs.cost_in_quote_token.to_exact(),
        )
        return L1GasCost(
            l1_gas_used=l1_gas_used,
            l1_fee_wei=l1_fee_wei,
            cost_in_quote_token=costs.cost_in_quote_token,
            cost_in_usd=costs.cost_in_usd,
            issue=costs.issue,
        )


async def get_gas_costs_in_usd_and_quote(
    chain_id: int,
    target_token: Token,
    l1_fee_wei: int,
    provider: PoolProvider,
) -> GasCostInTerms:
    """Convert with the process-wide chain configuration."""
    return await PriceConverter().convert(chain_id, target_token, l1_fee_wei, provider)


async def estimate_l1_gas_cost(
    chain_id: int,
    calldata: str,
    gas_data: GasData,
    target_token: Token,
    provider: PoolProvider,
    chain_config: ChainConfig | None = None,
) -> L1GasCost:
    """Compute and convert a transaction's L1 security fee."""
    converter = PriceConverter(chain_config)
    return await converter.estimate_l1_gas_cost(
        chain_id, calldata, gas_data, target_token, provider
    )


__all__ = [
    "PriceConverter",
    "get_gas_costs_in_usd_and_quote",
    "estimate_l1_gas_cost",
]
