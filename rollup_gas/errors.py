"""Exceptions raised by the gas cost calculation and conversion layers."""


class RollupGasError(Exception):
    """Base class for rollup gas cost errors."""

    pass


class InvalidCalldata(RollupGasError, ValueError):
    """Calldata is not 0x-prefixed hex with a whole number of bytes."""

    pass


class NoUsdReferenceToken(RollupGasError):
    """The chain has no USD reference tokens configured."""

    pass


class NoUsdPool(RollupGasError):
    """None of the native/USD candidate pools exist."""

    pass


class UnsupportedChain(RollupGasError, KeyError):
    """The chain id has no entry in the chain configuration."""

    def __str__(self) -> str:
        # KeyError repr-quotes its message
        return str(self.args[0]) if self.args else ""


class GasDataError(RollupGasError):
    """A node returned an unusable response while reading fee parameters."""

    pass
