"""Swap requests produced by the quote builder."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import TypeAlias

from dexquote.models.pool import DexVariant


class SwapDirection(str, Enum):
    """Trade direction relative to the queried token."""

    BUY = "buy"  # native -> token
    SELL = "sell"  # token -> native

    @classmethod
    def _missing_(cls, value: object) -> SwapDirection | None:
        if isinstance(value, str):
            return next((m for m in cls if m.value == value.strip().lower()), None)
        return None


@dataclass(frozen=True)
class V2Route:
    """Router path for a single-pair V2 swap."""

    path: tuple[str, str]


@dataclass(frozen=True)
class V3Route:
    """Single-pool V3 swap through the pool's fee tier."""

    fee_tier: int


SwapRoute: TypeAlias = V2Route | V3Route


@dataclass(frozen=True)
class AdvisoryFee:
    """Informational fee layered on top of protocol fees.

    Not enforced on-chain by this package; exposed for display and
    accounting. Amounts are in token_in base units.
    """

    rate: Decimal
    discount: Decimal
    amount: int
    discounted_amount: int


@dataclass(frozen=True)
class SwapRequest:
    """Trade intent plus its slippage bound, ready for a caller to sign.

    Invariants:
        amount_out_minimum <= quoted_amount_out, strictly less when slippage_bps > 0
        deadline is always creation time + DEADLINE_WINDOW_SECONDS
    """

    chain: str
    dex_variant: DexVariant
    pool_address: str
    direction: SwapDirection
    token_in: str
    token_out: str
    amount_in: int
    quoted_amount_out: int
    amount_out_minimum: int
    slippage_bps: int
    deadline: int
    route: SwapRoute
    fee: AdvisoryFee


@dataclass(frozen=True)
class SwapTransaction:
    """Unsigned transaction for a SwapRequest."""

    to: str
    data: str  # 0x-prefixed calldata
    value: int  # native amount to attach, in wei


__all__ = [
    "SwapDirection",
    "V2Route",
    "V3Route",
    "SwapRoute",
    "AdvisoryFee",
    "SwapRequest",
    "SwapTransaction",
]
