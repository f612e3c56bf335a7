"""UniswapV2 pool resolver.

Resolves the token/wrapped-native pair of a constant product pool and
normalizes its reserves into a V2PoolSnapshot.
"""

from __future__ import annotations

import decimal

import structlog

from dexquote.chains.registry import ChainConfig
from dexquote.client.base import ChainClient
from dexquote.constants import NATIVE_DECIMALS, ZERO_ADDRESS
from dexquote.contracts import (
    V2_FACTORY_GET_PAIR,
    V2_PAIR_GET_RESERVES,
    V2_PAIR_TOKEN0,
    V2_PAIR_TOKEN1,
)
from dexquote.errors import MalformedResponseError, PoolNotFoundError, ZeroLiquidityError
from dexquote.models.pool import V2PoolSnapshot
from dexquote.models.types import normalize_address, same_address
from dexquote.resolvers.base import fan_out, read_address, read_decimals, read_symbol, read_uint
from dexquote.units import DECIMAL_HIGH_PREC_CONTEXT, from_base_units

logger = structlog.get_logger()


def select_reserves(
    token: str,
    token0: str,
    token1: str,
    reserve0: int,
    reserve1: int,
) -> tuple[int, int]:
    """Order pair reserves as (token_reserve, native_reserve).

    Pairs store tokens sorted by address, so the queried token is token0
    for roughly half of all pools. Skipping this check inverts the price.

    Raises:
        MalformedResponseError: If the token is neither token0 nor token1
    """
    if same_address(token, token0):
        return reserve0, reserve1
    if same_address(token, token1):
        return reserve1, reserve0
    raise MalformedResponseError(f"Token {token} not in pair ({token0}, {token1})")


class UniswapV2PoolResolver:
    """Resolves UniswapV2-style pools through a ChainClient.

    Reads happen in two concurrent stages: token metadata and the pair
    address first, then the pair's state once its address is known.
    """

    def __init__(self, client: ChainClient):
        self.client = client

    async def resolve(self, chain: ChainConfig, token: str) -> V2PoolSnapshot:
        """Resolve the token/wrapped-native pair on a chain.

        Args:
            chain: Configuration of the chain to query
            token: Token address

        Returns:
            Normalized V2PoolSnapshot

        Raises:
            PoolNotFoundError: If the factory has no pair for the token
            ZeroLiquidityError: If either reserve is zero
            ChainReadError: If any read fails (propagated unchanged)
        """
        token = normalize_address(token, validate=True)
        native = chain.wrapped_native

        # Stage 1: nothing here depends on the pair
        symbol, decimals, pair = await fan_out(
            read_symbol(self.client, token),
            read_decimals(self.client, token),
            read_address(self.client, chain.v2_factory, V2_FACTORY_GET_PAIR, (token, native)),
        )

        if pair == ZERO_ADDRESS:
            logger.debug("v2_pair_not_found", chain=chain.name, token=token)
            raise PoolNotFoundError(f"No V2 pair for {token}/{native} on {chain.name}")

        # Stage 2: pair state
        token0, token1, reserves = await fan_out(
            read_address(self.client, pair, V2_PAIR_TOKEN0),
            read_address(self.client, pair, V2_PAIR_TOKEN1),
            self.client.call(pair, V2_PAIR_GET_RESERVES),
        )

        if len(reserves) != 3:
            raise MalformedResponseError(
                f"getReserves() returned {len(reserves)} values, expected 3",
                address=pair,
                function=V2_PAIR_GET_RESERVES.signature,
            )
        reserve0, reserve1, block_timestamp_last = (
            read_uint(value, address=pair, function=V2_PAIR_GET_RESERVES) for value in reserves
        )

        raw_token_reserve, raw_native_reserve = select_reserves(
            token, token0, token1, reserve0, reserve1
        )
        if raw_token_reserve == 0 or raw_native_reserve == 0:
            raise ZeroLiquidityError(
                f"V2 pair {pair} has zero reserves "
                f"(token={raw_token_reserve}, native={raw_native_reserve})"
            )

        token_reserve = from_base_units(raw_token_reserve, decimals)
        native_reserve = from_base_units(raw_native_reserve, NATIVE_DECIMALS)

        with decimal.localcontext(DECIMAL_HIGH_PREC_CONTEXT):
            price = native_reserve / token_reserve
            market_value_estimate = native_reserve * 2

        logger.debug(
            "v2_pool_resolved",
            chain=chain.name,
            token=token,
            pair=pair,
            price=str(price),
        )

        return V2PoolSnapshot(
            chain=chain.name,
            token_address=token,
            native_address=native,
            token_symbol=symbol,
            token_decimals=decimals,
            pool_address=pair,
            token_reserve=token_reserve,
            native_reserve=native_reserve,
            price=price,
            market_value_estimate=market_value_estimate,
            token0=token0,
            token1=token1,
            reserve0=reserve0,
            reserve1=reserve1,
            block_timestamp_last=block_timestamp_last,
        )


__all__ = ["UniswapV2PoolResolver", "select_reserves"]
