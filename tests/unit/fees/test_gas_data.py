"""Tests for on-chain gas data readers."""

import pytest
from eth_abi import encode  # type: ignore[attr-defined]
from web3 import AsyncHTTPProvider, AsyncWeb3

from rollup_gas.errors import GasDataError
from rollup_gas.fees import (
    ArbitrumGasData,
    ArbitrumGasDataProvider,
    OptimismGasData,
    OptimismGasDataProvider,
)
from rollup_gas.fees.gas_data import ARB_GAS_INFO_ADDRESS, OPTIMISM_GAS_PRICE_ORACLE_ADDRESS
from tests.conftest import StubRpcProvider

ARB_PRICES = [150_000_000_000_000, 16 * 1_250_000_000, 2_000_000, 100_000_000, 0, 100_000_000]


def _uints(*values: int) -> bytes:
    return encode(["uint256"] * len(values), list(values))


def _oracle_results(decimals: int = 6) -> dict[str, bytes]:
    return {
        "l1BaseFee": _uints(31_000_000_000),
        "scalar": _uints(684_000),
        "decimals": _uints(decimals),
        "overhead": _uints(188),
    }


class TestArbitrumGasDataProvider:
    """Tests for ArbGasInfo reads."""

    async def test_get_gas_data(self):
        rpc = StubRpcProvider(results={"getPricesInWei": _uints(*ARB_PRICES)})

        gas_data = await ArbitrumGasDataProvider(AsyncWeb3(rpc)).get_gas_data()

        assert gas_data == ArbitrumGasData(
            per_l2_tx_fee=150_000_000_000_000,
            per_l1_calldata_fee=1_250_000_000,
        )

    async def test_calls_arb_gas_info(self):
        rpc = StubRpcProvider(results={"getPricesInWei": _uints(*ARB_PRICES)})

        await ArbitrumGasDataProvider(AsyncWeb3(rpc)).get_gas_data()

        (call,) = rpc.eth_calls()
        assert call["to"].lower() == ARB_GAS_INFO_ADDRESS.lower()

    async def test_short_response(self):
        rpc = StubRpcProvider(results={"getPricesInWei": _uints(1, 2)})

        with pytest.raises(GasDataError, match="getPricesInWei"):
            await ArbitrumGasDataProvider(AsyncWeb3(rpc)).get_gas_data()

    async def test_reverted_call(self):
        rpc = StubRpcProvider()

        with pytest.raises(GasDataError, match="getPricesInWei"):
            await ArbitrumGasDataProvider(AsyncWeb3(rpc)).get_gas_data()

    @pytest.mark.parametrize(
        "error",
        [
            {"code": -32005, "message": "rate limited"},
            "rate limited",
        ],
    )
    async def test_node_error_object(self, error):
        """Well-formed and malformed error members both surface as GasDataError."""
        rpc = StubRpcProvider(errors={"getPricesInWei": error})

        with pytest.raises(GasDataError, match="getPricesInWei"):
            await ArbitrumGasDataProvider(AsyncWeb3(rpc)).get_gas_data()

    def test_from_url(self):
        provider = ArbitrumGasDataProvider.from_url("https://arb1.arbitrum.io/rpc")

        assert isinstance(provider.w3.provider, AsyncHTTPProvider)
        assert provider.w3.provider.endpoint_uri == "https://arb1.arbitrum.io/rpc"
        assert provider.contract.address.lower() == ARB_GAS_INFO_ADDRESS.lower()


class TestOptimismGasDataProvider:
    """Tests for GasPriceOracle reads."""

    async def test_get_gas_data(self):
        rpc = StubRpcProvider(results=_oracle_results())

        gas_data = await OptimismGasDataProvider(AsyncWeb3(rpc)).get_gas_data()

        assert gas_data == OptimismGasData(
            l1_base_fee=31_000_000_000,
            scalar=684_000,
            decimals=6,
            overhead=188,
        )
        assert {call["to"].lower() for call in rpc.eth_calls()} == {
            OPTIMISM_GAS_PRICE_ORACLE_ADDRESS.lower()
        }

    async def test_reverted_call(self):
        rpc = StubRpcProvider(results={"l1BaseFee": _uints(1)})

        with pytest.raises(GasDataError):
            await OptimismGasDataProvider(AsyncWeb3(rpc)).get_gas_data()

    async def test_failed_read_waits_for_the_others(self):
        """The first failure is raised only after every read has finished."""
        results = _oracle_results()
        del results["l1BaseFee"]
        rpc = StubRpcProvider(results=results)

        with pytest.raises(GasDataError, match="l1BaseFee"):
            await OptimismGasDataProvider(AsyncWeb3(rpc)).get_gas_data()

        assert len(rpc.eth_calls()) == 4

    async def test_largest_decimals_accepted(self):
        rpc = StubRpcProvider(results=_oracle_results(decimals=77))

        gas_data = await OptimismGasDataProvider(AsyncWeb3(rpc)).get_gas_data()

        assert gas_data.decimals == 77

    @pytest.mark.parametrize("decimals", [78, 2**255])
    async def test_decimals_out_of_range(self, decimals):
        rpc = StubRpcProvider(results=_oracle_results(decimals=decimals))

        with pytest.raises(GasDataError, match="decimals"):
            await OptimismGasDataProvider(AsyncWeb3(rpc)).get_gas_data()
