"""Pytest configuration and fixtures."""

from collections.abc import Sequence
from typing import Any

import pytest
from web3 import AsyncWeb3
from web3.providers import AsyncBaseProvider

from rollup_gas.chains import ChainConfig
from rollup_gas.pools import PoolCandidate, StaticPoolProvider
from tests.helpers import DAI, USDC, USDT, WETH, make_chain_config


@pytest.fixture
def mainnet_config() -> ChainConfig:
    """Mainnet-only config: WETH native, DAI/USDC/USDT as USD references."""
    return make_chain_config(native=WETH, usd_tokens=(DAI, USDC, USDT))


@pytest.fixture
def empty_provider() -> StaticPoolProvider:
    """Provider that knows no pools."""
    return StaticPoolProvider()


# =============================================================================
# Mock classes for dependency injection
# =============================================================================


class FailingPoolProvider:
    """Pool provider whose fetches always fail.

    Usage:
        provider = FailingPoolProvider(TimeoutError("rpc timed out"))
    """

    def __init__(self, error: Exception) -> None:
        self.error = error
        self.calls: list[list[PoolCandidate]] = []

    async def get_pools(self, candidates: Sequence[PoolCandidate]):
        self.calls.append(list(candidates))
        raise self.error


class StubRpcProvider(AsyncBaseProvider):
    """JSON-RPC provider answering no-argument eth_calls from canned data.

    Responses are keyed by function name. Unknown functions revert.

    Usage:
        provider = StubRpcProvider(results={"decimals": encode(["uint256"], [6])})
        w3 = AsyncWeb3(provider)
    """

    def __init__(
        self,
        results: dict[str, bytes] | None = None,
        errors: dict[str, Any] | None = None,
    ) -> None:
        super().__init__()
        self.results = {self.selector(name): data for name, data in (results or {}).items()}
        self.errors = {self.selector(name): error for name, error in (errors or {}).items()}
        self.calls: list[tuple[str, Any]] = []

    @staticmethod
    def selector(name: str) -> str:
        return bytes(AsyncWeb3.keccak(text=f"{name}()")[:4]).hex()

    def eth_calls(self) -> list[dict]:
        return [params[0] for method, params in self.calls if method == "eth_call"]

    async def make_request(self, method, params):
        self.calls.append((method, params))
        response: dict[str, Any] = {"jsonrpc": "2.0", "id": len(self.calls)}
        if method == "eth_chainId":
            return {**response, "result": "0x1"}

        data = params[0]["data"]
        if isinstance(data, (bytes, bytearray)):
            data = data.hex()
        selector = data.removeprefix("0x")[:8].lower()

        if selector in self.errors:
            return {**response, "error": self.errors[selector]}
        if selector in self.results:
            return {**response, "result": "0x" + self.results[selector].hex()}
        return {**response, "error": {"code": -32000, "message": "execution reverted"}}
