"""Chain configuration: wrapped native currency and USD reference tokens.

The configuration is read-only and loaded once per process by
get_chain_config(). Well-known token addresses are validated at import
time to catch typos early.
"""

from __future__ import annotations

import json
import os
from collections.abc import Mapping
from dataclasses import dataclass
from enum import IntEnum
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType

import structlog
from pydantic import BaseModel, ConfigDict, Field

from rollup_gas.errors import UnsupportedChain
from rollup_gas.models import Address, Decimals, Token, is_valid_address

logger = structlog.get_logger()

# Environment variable naming a JSON chain config file (see ChainConfigFile)
CHAIN_CONFIG_ENV = "ROLLUP_GAS_CHAIN_CONFIG"


class ChainId(IntEnum):
    MAINNET = 1
    OPTIMISM = 10
    ARBITRUM_ONE = 42161


def _validate_token_address(name: str, address: str) -> str:
    """Validate and return a token address.

    Raises:
        ValueError: If the address is invalid
    """
    if not is_valid_address(address):
        raise ValueError(f"Invalid {name} address: {address} (must be 0x + 40 hex chars)")
    return address


# Mainnet
WETH_MAINNET = Token(
    ChainId.MAINNET,
    _validate_token_address("WETH", "0xc02aaa39b223fe8d0a0e5c4f27ead9083c756cc2"),
    18,
    "WETH",
)
DAI_MAINNET = Token(
    ChainId.MAINNET,
    _validate_token_address("DAI", "0x6b175474e89094c44da98b954eedeac495271d0f"),
    18,
    "DAI",
)
USDC_MAINNET = Token(
    ChainId.MAINNET,
    _validate_token_address("USDC", "0xa0b86991c6218b36c1d19d4a2e9eb0ce3606eb48"),
    6,
    "USDC",
)
USDT_MAINNET = Token(
    ChainId.MAINNET,
    _validate_token_address("USDT", "0xdac17f958d2ee523a2206206994597c13d831ec7"),
    6,
    "USDT",
)

# Optimism
WETH_OPTIMISM = Token(
    ChainId.OPTIMISM,
    _validate_token_address("WETH", "0x4200000000000000000000000000000000000006"),
    18,
    "WETH",
)
DAI_OPTIMISM = Token(
    ChainId.OPTIMISM,
    _validate_token_address("DAI", "0xda10009cbd5d07dd0cecc66161fc93d7c9000da1"),
    18,
    "DAI",
)
USDC_OPTIMISM = Token(
    ChainId.OPTIMISM,
    _validate_token_address("USDC", "0x7f5c764cbc14f9669b88837ca1490cca17c31607"),
    6,
    "USDC",
)
USDT_OPTIMISM = Token(
    ChainId.OPTIMISM,
    _validate_token_address("USDT", "0x94b008aa00579c1307b0ef2c499ad98a8ce58e58"),
    6,
    "USDT",
)

# Arbitrum One
WETH_ARBITRUM = Token(
    ChainId.ARBITRUM_ONE,
    _validate_token_address("WETH", "0x82af49447d8a07e3bd95bd0d56f35241523fbab1"),
    18,
    "WETH",
)
DAI_ARBITRUM = Token(
    ChainId.ARBITRUM_ONE,
    _validate_token_address("DAI", "0xda10009cbd5d07dd0cecc66161fc93d7c9000da1"),
    18,
    "DAI",
)
USDC_ARBITRUM = Token(
    ChainId.ARBITRUM_ONE,
    _validate_token_address("USDC", "0xff970a61a04b1ca14834a43f5de4533ebddb5cc8"),
    6,
    "USDC",
)
USDT_ARBITRUM = Token(
    ChainId.ARBITRUM_ONE,
    _validate_token_address("USDT", "0xfd086bc7cd5c481dcc9c85ebe478a1c0b69fcbb9"),
    6,
    "USDT",
)


@dataclass(frozen=True)
class ChainSettings:
    """Per-chain gas pricing tokens.

    Attributes:
        native: Wrapped native currency the L1 fee is denominated in
        usd_tokens: USD stablecoins to price the native currency against, in
            preference order (may be empty)
    """

    native: Token
    usd_tokens: tuple[Token, ...] = ()

    def __post_init__(self) -> None:
        for token in self.usd_tokens:
            if token.chain_id != self.native.chain_id:
                raise ValueError(
                    f"USD token {token} is on chain {token.chain_id}, "
                    f"native currency is on chain {self.native.chain_id}"
                )


class ChainConfig:
    """Immutable mapping of chain id to ChainSettings."""

    def __init__(self, chains: Mapping[int, ChainSettings]) -> None:
        for chain_id, settings in chains.items():
            if settings is None or settings.native is None:
                raise ValueError(f"Chain {chain_id} has no native currency")
            if settings.native.chain_id != chain_id:
                raise ValueError(
                    f"Native currency {settings.native} belongs to chain "
                    f"{settings.native.chain_id}, not {chain_id}"
                )
        self._chains: Mapping[int, ChainSettings] = MappingProxyType(dict(chains))

    @property
    def chain_ids(self) -> tuple[int, ...]:
        return tuple(self._chains)

    def __contains__(self, chain_id: object) -> bool:
        return chain_id in self._chains

    def settings_of(self, chain_id: int) -> ChainSettings:
        try:
            return self._chains[chain_id]
        except KeyError:
            raise UnsupportedChain(f"Chain {chain_id} is not configured") from None

    def native_currency_of(self, chain_id: int) -> Token:
        return self.settings_of(chain_id).native

    def usd_reference_tokens_of(self, chain_id: int) -> tuple[Token, ...]:
        return self.settings_of(chain_id).usd_tokens


DEFAULT_CHAIN_CONFIG = ChainConfig(
    {
        ChainId.MAINNET: ChainSettings(
            native=WETH_MAINNET,
            usd_tokens=(DAI_MAINNET, USDC_MAINNET, USDT_MAINNET),
        ),
        ChainId.OPTIMISM: ChainSettings(
            native=WETH_OPTIMISM,
            usd_tokens=(DAI_OPTIMISM, USDC_OPTIMISM, USDT_OPTIMISM),
        ),
        ChainId.ARBITRUM_ONE: ChainSettings(
            native=WETH_ARBITRUM,
            usd_tokens=(DAI_ARBITRUM, USDC_ARBITRUM, USDT_ARBITRUM),
        ),
    }
)


# =============================================================================
# File-based configuration
# =============================================================================


class TokenEntry(BaseModel):
    """A token in a chain config file."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    address: Address
    decimals: Decimals = 18
    symbol: str | None = None

    def to_token(self, chain_id: int) -> Token:
        return Token(chain_id, self.address, self.decimals, self.symbol)


class ChainEntry(BaseModel):
    """Settings for one chain in a chain config file."""

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    native: TokenEntry
    usd_tokens: list[TokenEntry] = Field(default_factory=list, alias="usdTokens")


class ChainConfigFile(BaseModel):
    """Schema of a JSON chain config file.

    Example:
        {
          "chains": {
            "10": {
              "native": {"address": "0x4200...0006", "symbol": "WETH"},
              "usdTokens": [{"address": "0x7f5c...1607", "decimals": 6}]
            }
          }
        }
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    chains: dict[int, ChainEntry]

    def to_chain_config(self) -> ChainConfig:
        return ChainConfig(
            {
                chain_id: ChainSettings(
                    native=entry.native.to_token(chain_id),
                    usd_tokens=tuple(t.to_token(chain_id) for t in entry.usd_tokens),
                )
                for chain_id, entry in self.chains.items()
            }
        )


def load_chain_config(path: str | Path) -> ChainConfig:
    """Load and validate a chain config file.

    Raises:
        pydantic.ValidationError: If the file does not match ChainConfigFile
        ValueError: If a chain's settings are inconsistent
    """
    with open(path) as f:
        data = json.load(f)
    config = ChainConfigFile.model_validate(data).to_chain_config()
    logger.debug("chain_config_loaded", path=str(path), chains=list(config.chain_ids))
    return config


@lru_cache(maxsize=1)
def get_chain_config() -> ChainConfig:
    """Process-wide chain configuration.

    Reads the file named by ROLLUP_GAS_CHAIN_CONFIG if set, else returns
    DEFAULT_CHAIN_CONFIG. Evaluated once.
    """
    path = os.environ.get(CHAIN_CONFIG_ENV)
    if path:
        return load_chain_config(path)
    return DEFAULT_CHAIN_CONFIG
