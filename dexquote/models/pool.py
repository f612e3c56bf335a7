"""Normalized pool snapshots.

A snapshot is the chain-agnostic result of resolving one pool. V2 and V3
pools share the PoolSnapshot shape; their variant-specific state lives in
typed fields on the subclasses and is exposed to callers only through
``raw`` for diagnostics.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any, TypeAlias

from dexquote.models.types import same_address


class DexVariant(str, Enum):
    """AMM design of a pool."""

    V2 = "v2"  # constant product
    V3 = "v3"  # concentrated liquidity

    @classmethod
    def _missing_(cls, value: object) -> DexVariant | None:
        # Accept "V2" / "V3" as well as the canonical lowercase values
        if isinstance(value, str):
            return next((m for m in cls if m.value == value.strip().lower()), None)
        return None


@dataclass(frozen=True)
class UnavailableMetric:
    """A metric that cannot be derived from on-chain state.

    Carries a placeholder value so consumers expecting a number still get
    one, but ``available`` is always False so it is never mistaken for a
    real measurement.
    """

    reason: str
    value: Decimal = Decimal(0)

    @property
    def available(self) -> bool:
        return False


VOLUME_24H_UNAVAILABLE = UnavailableMetric(reason="not computable from on-chain state")


@dataclass(frozen=True)
class PoolSnapshot(ABC):
    """Common shape of a resolved pool.

    Attributes:
        chain: Registry key of the chain the pool lives on
        token_address: The queried token (lowercase)
        native_address: Wrapped native token of the chain (lowercase)
        token_symbol: ERC20 symbol of the queried token
        token_decimals: ERC20 decimals of the queried token
        pool_address: Pair (V2) or pool (V3) contract (lowercase)
        token_reserve: Human-scaled token side liquidity
        native_reserve: Human-scaled native side liquidity
        price: Native units per 1 token, independent of token0/token1 order
        market_value_estimate: 2 x native_reserve. A rough doubling
            heuristic assuming balanced pool value, not a market cap.
    """

    chain: str
    token_address: str
    native_address: str
    token_symbol: str
    token_decimals: int
    pool_address: str
    token_reserve: Decimal
    native_reserve: Decimal
    price: Decimal
    market_value_estimate: Decimal
    token0: str
    token1: str

    @property
    @abstractmethod
    def dex_variant(self) -> DexVariant:
        """AMM design this snapshot was resolved from."""

    @property
    def volume_24h(self) -> UnavailableMetric:
        """24h volume needs historical swap events; never available here."""
        return VOLUME_24H_UNAVAILABLE

    @property
    def is_token0(self) -> bool:
        """True if the queried token is stored as token0 in the pool."""
        return same_address(self.token_address, self.token0)

    @property
    def raw(self) -> dict[str, Any]:
        """Variant-specific fields for diagnostics."""
        return {"token0": self.token0, "token1": self.token1}


@dataclass(frozen=True)
class V2PoolSnapshot(PoolSnapshot):
    """Snapshot of a UniswapV2-style constant product pair."""

    reserve0: int
    reserve1: int
    block_timestamp_last: int
    # Standard UniswapV2 fee, in basis points
    fee_bps: int = 30

    @property
    def dex_variant(self) -> DexVariant:
        return DexVariant.V2

    @property
    def raw(self) -> dict[str, Any]:
        return {
            "token0": self.token0,
            "token1": self.token1,
            "reserve0": str(self.reserve0),
            "reserve1": str(self.reserve1),
            "block_timestamp_last": self.block_timestamp_last,
            "fee_bps": self.fee_bps,
        }


@dataclass(frozen=True)
class V3PoolSnapshot(PoolSnapshot):
    """Snapshot of a UniswapV3-style concentrated liquidity pool.

    token_reserve / native_reserve are the ERC20 balances held by the
    pool contract. The active ``liquidity`` figure is in sqrt-price units
    and would need tick-range integration to become a token amount, so it
    is kept for diagnostics only.
    """

    fee_tier: int  # Fee in Uniswap units (e.g., 3000 for 0.3%)
    sqrt_price_x96: int  # Current sqrt(price) * 2^96
    liquidity: int  # Current active liquidity
    tick: int  # Current tick index

    @property
    def dex_variant(self) -> DexVariant:
        return DexVariant.V3

    @property
    def fee_decimal(self) -> Decimal:
        """Fee as decimal (e.g., 0.003 for 0.3%)."""
        return Decimal(self.fee_tier) / Decimal(1_000_000)

    @property
    def raw(self) -> dict[str, Any]:
        return {
            "token0": self.token0,
            "token1": self.token1,
            "fee_tier": self.fee_tier,
            "sqrt_price_x96": str(self.sqrt_price_x96),
            "liquidity": str(self.liquidity),
            "tick": self.tick,
        }


# Union type for all snapshot variants
AnyPoolSnapshot: TypeAlias = V2PoolSnapshot | V3PoolSnapshot

__all__ = [
    "DexVariant",
    "UnavailableMetric",
    "VOLUME_24H_UNAVAILABLE",
    "PoolSnapshot",
    "V2PoolSnapshot",
    "V3PoolSnapshot",
    "AnyPoolSnapshot",
]
