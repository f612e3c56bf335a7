"""dexquote - pool normalization and swap quotes for Uniswap-style AMMs."""

__version__ = "0.1.0"

from dexquote.chains import ChainConfig, ChainRegistry, load_chain_registry  # noqa: E402
from dexquote.engine import PoolQuoteEngine  # noqa: E402
from dexquote.models import (  # noqa: E402
    DexVariant,
    PoolSnapshot,
    SwapDirection,
    SwapRequest,
    V2PoolSnapshot,
    V3PoolSnapshot,
)

__all__ = [
    "ChainConfig",
    "ChainRegistry",
    "load_chain_registry",
    "PoolQuoteEngine",
    "DexVariant",
    "PoolSnapshot",
    "V2PoolSnapshot",
    "V3PoolSnapshot",
    "SwapDirection",
    "SwapRequest",
    "__version__",
]
