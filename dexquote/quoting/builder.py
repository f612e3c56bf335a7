"""Swap quote builder.

Turns a resolved pool snapshot and a trade intent into a SwapRequest with
a slippage-protected minimum output. Nothing here signs or submits.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from decimal import Decimal

import structlog

from dexquote.chains.registry import ChainConfig
from dexquote.client.base import ChainClient
from dexquote.config import DEFAULT_QUOTE_CONFIG, QuoteConfig
from dexquote.constants import DEADLINE_WINDOW_SECONDS, NATIVE_DECIMALS
from dexquote.contracts import (
    V2_ROUTER_GET_AMOUNTS_OUT,
    V3_QUOTER_V1_QUOTE_EXACT_INPUT_SINGLE,
    V3_QUOTER_V2_QUOTE_EXACT_INPUT_SINGLE,
)
from dexquote.errors import (
    InvalidAmountError,
    MalformedResponseError,
    UnsupportedChainError,
    ZeroLiquidityError,
)
from dexquote.models.pool import AnyPoolSnapshot, V2PoolSnapshot, V3PoolSnapshot
from dexquote.models.swap import SwapDirection, SwapRequest, SwapRoute, V2Route, V3Route
from dexquote.quoting.slippage import (
    advisory_fee,
    amount_out_minimum,
    validate_fee_discount,
    validate_slippage_bps,
)
from dexquote.resolvers.base import read_one
from dexquote.units import to_base_units, to_decimal

logger = structlog.get_logger()


def validate_trade_intent(
    direction: SwapDirection | str,
    amount: Decimal | int | float | str,
    slippage_bps: int,
    fee_discount: Decimal | float | int | str = 0,
) -> tuple[SwapDirection, Decimal, Decimal]:
    """Check a trade request without touching the chain.

    Returns:
        Tuple of (direction, human amount, fee discount)

    Raises:
        ValueError: If direction is not buy or sell
        InvalidAmountError: If amount is not a positive number
        InvalidSlippageError: If slippage_bps is out of range
        InvalidFeeDiscountError: If fee_discount is out of range
    """
    direction = SwapDirection(direction)
    human_amount = to_decimal(amount)
    if human_amount <= 0:
        raise InvalidAmountError(f"Amount must be positive, got {amount}")
    validate_slippage_bps(slippage_bps)
    discount = validate_fee_discount(fee_discount)
    return direction, human_amount, discount


class SwapQuoteBuilder:
    """Builds bounded swap requests from pool snapshots.

    V2 quotes come from the router's getAmountsOut over [token_in, token_out];
    V3 quotes come from the chain's Quoter for the snapshot's fee tier.
    """

    def __init__(
        self,
        client: ChainClient,
        config: QuoteConfig = DEFAULT_QUOTE_CONFIG,
        clock: Callable[[], float] = time.time,
    ):
        """Initialize builder.

        Args:
            client: Chain client used for the quote call
            config: Quote configuration (advisory fee rate)
            clock: Source of the current unix time
        """
        self.client = client
        self.config = config
        self.clock = clock

    async def build(
        self,
        chain: ChainConfig,
        snapshot: AnyPoolSnapshot,
        direction: SwapDirection | str,
        amount: Decimal | int | float | str,
        slippage_bps: int,
        fee_discount: Decimal | float | int | str = 0,
    ) -> SwapRequest:
        """Quote a swap and bound its output.

        All inputs are validated before the quote call is issued.

        Args:
            chain: Configuration of the snapshot's chain
            snapshot: Resolved pool to trade through
            direction: BUY (native -> token) or SELL (token -> native)
            amount: Human-readable amount of token_in
            slippage_bps: Slippage tolerance in basis points, [0, 10000)
            fee_discount: Fraction of the advisory fee waived, [0, 1]

        Returns:
            SwapRequest ready for a caller to sign

        Raises:
            InvalidAmountError: If amount is not positive or rounds to zero base units
            InvalidSlippageError: If slippage_bps is out of range
            InvalidFeeDiscountError: If fee_discount is out of range
            ZeroLiquidityError: If the quote returns zero output
            ChainReadError: If the quote call fails (propagated unchanged)
        """
        direction, human_amount, discount = validate_trade_intent(
            direction, amount, slippage_bps, fee_discount
        )
        if chain.name != snapshot.chain:
            raise ValueError(f"Snapshot is for chain {snapshot.chain}, not {chain.name}")

        if direction is SwapDirection.BUY:
            token_in, token_out = snapshot.native_address, snapshot.token_address
            decimals_in = NATIVE_DECIMALS
        else:
            token_in, token_out = snapshot.token_address, snapshot.native_address
            decimals_in = snapshot.token_decimals

        amount_in = to_base_units(human_amount, decimals_in)
        if amount_in == 0:
            raise InvalidAmountError(
                f"Amount {amount} is below one base unit ({decimals_in} decimals)"
            )

        route: SwapRoute
        if isinstance(snapshot, V2PoolSnapshot):
            route = V2Route(path=(token_in, token_out))
            quoted = await self._quote_v2(chain, route, amount_in)
        elif isinstance(snapshot, V3PoolSnapshot):
            route = V3Route(fee_tier=snapshot.fee_tier)
            quoted = await self._quote_v3(chain, token_in, token_out, route, amount_in)
        else:
            raise TypeError(f"Unsupported snapshot type: {type(snapshot).__name__}")

        if quoted == 0:
            raise ZeroLiquidityError(
                f"Quote for {amount_in} {token_in} -> {token_out} returned zero output"
            )

        min_out = amount_out_minimum(quoted, slippage_bps)
        fee = advisory_fee(amount_in, self.config.advisory_fee_rate, discount)
        deadline = int(self.clock()) + DEADLINE_WINDOW_SECONDS

        logger.debug(
            "swap_request_built",
            chain=chain.name,
            variant=snapshot.dex_variant.value,
            direction=direction.value,
            amount_in=amount_in,
            quoted_amount_out=quoted,
            amount_out_minimum=min_out,
            slippage_bps=slippage_bps,
        )

        return SwapRequest(
            chain=chain.name,
            dex_variant=snapshot.dex_variant,
            pool_address=snapshot.pool_address,
            direction=direction,
            token_in=token_in,
            token_out=token_out,
            amount_in=amount_in,
            quoted_amount_out=quoted,
            amount_out_minimum=min_out,
            slippage_bps=slippage_bps,
            deadline=deadline,
            route=route,
            fee=fee,
        )

    async def _quote_v2(self, chain: ChainConfig, route: V2Route, amount_in: int) -> int:
        """Quote through the V2 router's constant product math."""
        amounts = await read_one(
            self.client, chain.v2_router, V2_ROUTER_GET_AMOUNTS_OUT, (amount_in, list(route.path))
        )
        if not isinstance(amounts, list | tuple) or len(amounts) != len(route.path):
            raise MalformedResponseError(
                f"getAmountsOut returned {amounts!r} for a {len(route.path)}-token path",
                address=chain.v2_router,
                function=V2_ROUTER_GET_AMOUNTS_OUT.signature,
            )
        return int(amounts[-1])

    async def _quote_v3(
        self,
        chain: ChainConfig,
        token_in: str,
        token_out: str,
        route: V3Route,
        amount_in: int,
    ) -> int:
        """Quote through the chain's Quoter contract for one fee tier."""
        if chain.v3_quoter is None:
            raise UnsupportedChainError(f"Chain {chain.name} has no UniswapV3 quoter configured")

        # sqrtPriceLimitX96 = 0 means no limit
        if chain.v3_quoter_version == 1:
            result = await self.client.call(
                chain.v3_quoter,
                V3_QUOTER_V1_QUOTE_EXACT_INPUT_SINGLE,
                (token_in, token_out, route.fee_tier, amount_in, 0),
            )
        else:
            result = await self.client.call(
                chain.v3_quoter,
                V3_QUOTER_V2_QUOTE_EXACT_INPUT_SINGLE,
                ((token_in, token_out, amount_in, route.fee_tier, 0),),
            )
        if not result:
            raise MalformedResponseError(
                "quoteExactInputSingle returned no values",
                address=chain.v3_quoter,
                function="quoteExactInputSingle",
            )
        # QuoterV2 also returns (sqrtPriceX96After, initializedTicksCrossed, gasEstimate)
        return int(result[0])


__all__ = ["SwapQuoteBuilder", "validate_trade_intent"]
