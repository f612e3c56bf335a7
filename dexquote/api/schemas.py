"""Pydantic response and request models for the HTTP API."""

from __future__ import annotations

import decimal
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, Field

from dexquote.constants import BPS_DENOMINATOR
from dexquote.models.pool import AnyPoolSnapshot, DexVariant
from dexquote.models.swap import SwapDirection, SwapRequest, V2Route
from dexquote.models.types import Address
from dexquote.units import DECIMAL_HIGH_PREC_CONTEXT


def _fmt(value: Decimal) -> str:
    """Plain decimal string without exponent or trailing zeros."""
    with decimal.localcontext(DECIMAL_HIGH_PREC_CONTEXT):
        return format(value.normalize(), "f")


class UnavailableMetricResponse(BaseModel):
    """A metric that on-chain state cannot provide."""

    value: str
    available: bool
    reason: str


class PoolSnapshotResponse(BaseModel):
    """Normalized pool state."""

    chain: str
    dex_variant: DexVariant
    pool_address: str
    token_address: str
    token_symbol: str
    token_decimals: int
    native_address: str
    token_reserve: str
    native_reserve: str
    price: str = Field(description="Native units per 1 token")
    market_value_estimate: str = Field(
        description="2 x native reserve; an approximation, not a market cap"
    )
    volume_24h: UnavailableMetricResponse
    raw: dict[str, Any]

    @classmethod
    def from_snapshot(cls, snapshot: AnyPoolSnapshot) -> PoolSnapshotResponse:
        volume = snapshot.volume_24h
        return cls(
            chain=snapshot.chain,
            dex_variant=snapshot.dex_variant,
            pool_address=snapshot.pool_address,
            token_address=snapshot.token_address,
            token_symbol=snapshot.token_symbol,
            token_decimals=snapshot.token_decimals,
            native_address=snapshot.native_address,
            token_reserve=_fmt(snapshot.token_reserve),
            native_reserve=_fmt(snapshot.native_reserve),
            price=_fmt(snapshot.price),
            market_value_estimate=_fmt(snapshot.market_value_estimate),
            volume_24h=UnavailableMetricResponse(
                value=_fmt(volume.value), available=volume.available, reason=volume.reason
            ),
            raw=snapshot.raw,
        )


class QuoteRequest(BaseModel):
    """Swap quote request body."""

    token: Address
    direction: SwapDirection
    amount: Decimal = Field(gt=0, description="Human-readable amount of the input token")
    slippage_bps: int = Field(ge=0, lt=BPS_DENOMINATOR)
    variant: DexVariant = DexVariant.V2
    fee_tier: int | None = None
    fee_discount: Decimal = Field(default=Decimal(0), ge=0, le=1)


class AdvisoryFeeResponse(BaseModel):
    """Informational fee, in input token base units."""

    rate: str
    discount: str
    amount: str
    discounted_amount: str


class SwapRequestResponse(BaseModel):
    """Swap request with its slippage bound."""

    chain: str
    dex_variant: DexVariant
    pool_address: str
    direction: SwapDirection
    token_in: str
    token_out: str
    amount_in: str
    quoted_amount_out: str
    amount_out_minimum: str
    slippage_bps: int
    deadline: int
    path: list[str] | None = None
    fee_tier: int | None = None
    fee: AdvisoryFeeResponse

    @classmethod
    def from_request(cls, request: SwapRequest) -> SwapRequestResponse:
        route = request.route
        return cls(
            chain=request.chain,
            dex_variant=request.dex_variant,
            pool_address=request.pool_address,
            direction=request.direction,
            token_in=request.token_in,
            token_out=request.token_out,
            amount_in=str(request.amount_in),
            quoted_amount_out=str(request.quoted_amount_out),
            amount_out_minimum=str(request.amount_out_minimum),
            slippage_bps=request.slippage_bps,
            deadline=request.deadline,
            path=list(route.path) if isinstance(route, V2Route) else None,
            fee_tier=None if isinstance(route, V2Route) else route.fee_tier,
            fee=AdvisoryFeeResponse(
                rate=_fmt(request.fee.rate),
                discount=_fmt(request.fee.discount),
                amount=str(request.fee.amount),
                discounted_amount=str(request.fee.discounted_amount),
            ),
        )


class QuoteResponse(BaseModel):
    """Resolved pool plus the swap request built through it."""

    pool: PoolSnapshotResponse
    swap: SwapRequestResponse
