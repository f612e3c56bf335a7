"""Value types for pool snapshots and swap requests."""

from dexquote.models.pool import (
    VOLUME_24H_UNAVAILABLE,
    AnyPoolSnapshot,
    DexVariant,
    PoolSnapshot,
    UnavailableMetric,
    V2PoolSnapshot,
    V3PoolSnapshot,
)
from dexquote.models.swap import (
    AdvisoryFee,
    SwapDirection,
    SwapRequest,
    SwapTransaction,
    V2Route,
    V3Route,
)
from dexquote.models.types import Address, is_valid_address, normalize_address, same_address

__all__ = [
    # Types
    "Address",
    "normalize_address",
    "is_valid_address",
    "same_address",
    # Pool snapshots
    "DexVariant",
    "PoolSnapshot",
    "V2PoolSnapshot",
    "V3PoolSnapshot",
    "AnyPoolSnapshot",
    "UnavailableMetric",
    "VOLUME_24H_UNAVAILABLE",
    # Swaps
    "SwapDirection",
    "SwapRequest",
    "SwapTransaction",
    "AdvisoryFee",
    "V2Route",
    "V3Route",
]
