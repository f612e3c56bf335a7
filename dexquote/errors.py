"""Error classes for pool resolution and swap quoting.

Validation errors also derive from ValueError so callers that only care
about bad input can catch them generically.
"""


class DexQuoteError(Exception):
    """Base error for dexquote operations."""

    pass


class UnsupportedChainError(DexQuoteError):
    """Chain is not in the registry or lacks the requested deployment."""

    pass


class PoolNotFoundError(DexQuoteError):
    """Factory returned the zero address: no pool exists for the pair."""

    pass


class ZeroLiquidityError(DexQuoteError):
    """Pool state cannot yield a price (zero reserve, uninitialized price or empty quote)."""

    pass


class InvalidAmountError(DexQuoteError, ValueError):
    """Trade amount must be positive and representable in base units."""

    pass


class InvalidSlippageError(DexQuoteError, ValueError):
    """Slippage tolerance must be an integer in [0, 10000) basis points."""

    pass


class InvalidFeeDiscountError(DexQuoteError, ValueError):
    """Fee discount must be in [0, 1]."""

    pass


class InvalidFeeTierError(DexQuoteError, ValueError):
    """Fee tier is not a known UniswapV3 tier."""

    pass


class InvalidAddressError(DexQuoteError, ValueError):
    """Address is not 0x + 40 hex chars."""

    pass


class ChainReadError(DexQuoteError):
    """Base error for failed read-only contract calls.

    Raised by ChainClient implementations and propagated unchanged by
    the resolvers and the quote builder.
    """

    def __init__(self, message: str, *, address: str | None = None, function: str | None = None):
        super().__init__(message)
        self.address = address
        self.function = function


class CallRevertedError(ChainReadError):
    """The contract call reverted."""

    pass


class ChainTransportError(ChainReadError):
    """Network failure or timeout while talking to the RPC endpoint."""

    pass


class MalformedResponseError(ChainReadError):
    """The call returned data that could not be decoded or is out of range."""

    pass
