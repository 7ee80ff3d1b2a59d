"""Tests for the in-memory pool provider."""

from rollup_gas.pools import FeeTier, StaticPoolProvider, pool_key
from tests.helpers import DAI, USDC, WETH, make_pool


class TestPoolKey:
    """Tests for order-independent pool keys."""

    def test_order_independent(self):
        assert pool_key(WETH, USDC, FeeTier.LOW) == pool_key(USDC, WETH, FeeTier.LOW)

    def test_fee_distinguishes(self):
        assert pool_key(WETH, USDC, FeeTier.LOW) != pool_key(WETH, USDC, FeeTier.MEDIUM)


class TestStaticPoolProvider:
    """Tests for StaticPoolProvider."""

    async def test_returns_requested_pools(self):
        pool = make_pool(WETH, USDC, FeeTier.MEDIUM)
        provider = StaticPoolProvider([pool])

        accessor = await provider.get_pools([(WETH, USDC, FeeTier.MEDIUM)])

        assert accessor.get_pool(WETH, USDC, FeeTier.MEDIUM) is pool
        assert accessor.get_pool(USDC, WETH, FeeTier.MEDIUM) is pool

    async def test_missing_pool_is_none(self):
        provider = StaticPoolProvider([make_pool(WETH, USDC, FeeTier.MEDIUM)])

        accessor = await provider.get_pools([(WETH, USDC, FeeTier.LOW)])

        assert accessor.get_pool(WETH, USDC, FeeTier.LOW) is None

    async def test_unrequested_pools_hidden(self):
        """Only pools named in the batch are visible on the accessor."""
        provider = StaticPoolProvider(
            [make_pool(WETH, USDC, FeeTier.MEDIUM), make_pool(WETH, DAI, FeeTier.MEDIUM)]
        )

        accessor = await provider.get_pools([(WETH, USDC, FeeTier.MEDIUM)])

        assert accessor.get_pool(WETH, DAI, FeeTier.MEDIUM) is None
        assert len(accessor.pools) == 1

    async def test_records_requests(self):
        provider = StaticPoolProvider()
        candidates = [(WETH, USDC, FeeTier.HIGH), (WETH, USDC, FeeTier.LOW)]

        await provider.get_pools(candidates)

        assert provider.requests == [candidates]

    def test_add_pool_replaces(self):
        provider = StaticPoolProvider([make_pool(liquidity=1)])
        provider.add_pool(make_pool(liquidity=2))
        assert provider.pool_count == 1
