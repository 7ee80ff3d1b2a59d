"""Read rollup L1 pricing parameters from system contracts.

- Arbitrum: ArbGasInfo precompile, getPricesInWei()
- Optimism: GasPriceOracle predeploy, l1BaseFee()/scalar()/decimals()/overhead()

Contracts are read through web3's async contract API. Connection failures
propagate unchanged; node error objects, reverts, malformed responses and
undecodable return data raise GasDataError.
"""

from __future__ import annotations

import asyncio
from typing import Any

import structlog
from web3 import AsyncHTTPProvider, AsyncWeb3
from web3.contract.async_contract import AsyncContractFunction
from web3.exceptions import Web3Exception

from rollup_gas.errors import GasDataError
from rollup_gas.fees.calculator import MAX_FEE_SCALAR_DECIMALS, ArbitrumGasData, OptimismGasData

logger = structlog.get_logger()

ARB_GAS_INFO_ADDRESS = "0x000000000000000000000000000000000000006C"
OPTIMISM_GAS_PRICE_ORACLE_ADDRESS = "0x420000000000000000000000000000000000000F"


def _uint256_view(name: str, outputs: int = 1) -> dict:
    return {
        "name": name,
        "type": "function",
        "stateMutability": "view",
        "inputs": [],
        "outputs": [{"name": "", "type": "uint256"} for _ in range(outputs)],
    }


# Only the view functions read here
ARB_GAS_INFO_ABI = [_uint256_view("getPricesInWei", outputs=6)]

GAS_PRICE_ORACLE_ABI = [
    _uint256_view("l1BaseFee"),
    _uint256_view("scalar"),
    _uint256_view("decimals"),
    _uint256_view("overhead"),
]


async def _call(function: AsyncContractFunction, name: str) -> Any:
    try:
        return await function.call()
    except (Web3Exception, ValueError) as e:
        raise GasDataError(f"{name}() call failed: {e}") from e


class ArbitrumGasDataProvider:
    """Read Arbitrum L1 pricing from ArbGasInfo.getPricesInWei().

    getPricesInWei returns, in wei:
    per L2 tx, per L1 calldata byte, per storage allocation,
    per ArbGas base, per ArbGas congestion, per ArbGas total.

    Usage:
        provider = ArbitrumGasDataProvider.from_url("https://arb1.arbitrum.io/rpc")
        gas_data = await provider.get_gas_data()
    """

    def __init__(self, w3: AsyncWeb3, address: str = ARB_GAS_INFO_ADDRESS) -> None:
        self.w3 = w3
        self.contract = w3.eth.contract(
            address=AsyncWeb3.to_checksum_address(address),
            abi=ARB_GAS_INFO_ABI,
        )

    @classmethod
    def from_url(cls, rpc_url: str) -> ArbitrumGasDataProvider:
        return cls(AsyncWeb3(AsyncHTTPProvider(rpc_url)))

    async def get_gas_data(self) -> ArbitrumGasData:
        prices = await _call(self.contract.functions.getPricesInWei(), "getPricesInWei")

        # per-byte price re-expressed per calldata gas unit (16 gas per byte)
        gas_data = ArbitrumGasData(
            per_l2_tx_fee=int(prices[0]),
            per_l1_calldata_fee=int(prices[1]) // 16,
        )
        logger.debug(
            "arbitrum_gas_data_fetched",
            per_l2_tx_fee=gas_data.per_l2_tx_fee,
            per_l1_calldata_fee=gas_data.per_l1_calldata_fee,
        )
        return gas_data


class OptimismGasDataProvider:
    """Read Optimism L1 pricing from the GasPriceOracle predeploy."""

    def __init__(self, w3: AsyncWeb3, address: str = OPTIMISM_GAS_PRICE_ORACLE_ADDRESS) -> None:
        self.w3 = w3
        self.contract = w3.eth.contract(
            address=AsyncWeb3.to_checksum_address(address),
            abi=GAS_PRICE_ORACLE_ABI,
        )

    @classmethod
    def from_url(cls, rpc_url: str) -> OptimismGasDataProvider:
        return cls(AsyncWeb3(AsyncHTTPProvider(rpc_url)))

    async def get_gas_data(self) -> OptimismGasData:
        """Read the four oracle values concurrently.

        Raises:
            GasDataError: If any read fails, or decimals is too large to
                scale a uint256 fee
        """
        functions = self.contract.functions
        results = await asyncio.gather(
            _call(functions.l1BaseFee(), "l1BaseFee"),
            _call(functions.scalar(), "scalar"),
            _call(functions.decimals(), "decimals"),
            _call(functions.overhead(), "overhead"),
            return_exceptions=True,
        )
        for result in results:
            if isinstance(result, BaseException):
                raise result
        l1_base_fee, scalar, decimals, overhead = (int(r) for r in results)

        if decimals > MAX_FEE_SCALAR_DECIMALS:
            raise GasDataError(
                f"GasPriceOracle decimals() out of range: {decimals} > {MAX_FEE_SCALAR_DECIMALS}"
            )

        gas_data = OptimismGasData(
            l1_base_fee=l1_base_fee,
            scalar=scalar,
            decimals=decimals,
            overhead=overhead,
        )
        logger.debug(
            "optimism_gas_data_fetched",
            l1_base_fee=l1_base_fee,
            scalar=scalar,
            decimals=decimals,
            overhead=overhead,
        )
        return gas_data


__all__ = [
    "ArbitrumGasDataProvider",
    "OptimismGasDataProvider",
    "ARB_GAS_INFO_ADDRESS",
    "OPTIMISM_GAS_PRICE_ORACLE_ADDRESS",
]
