"""UniswapV3 pool resolver.

Resolves the token/wrapped-native pool of one fee tier, decodes the
current price from slot0's sqrtPriceX96 and approximates liquidity from
the token balances held by the pool contract.
"""

from __future__ import annotations

import decimal
from decimal import Decimal

import structlog

from dexquote.chains.registry import ChainConfig
from dexquote.client.base import ChainClient
from dexquote.constants import NATIVE_DECIMALS, Q96, V3_FEE_MEDIUM, V3_FEE_TIERS, ZERO_ADDRESS
from dexquote.contracts import (
    ERC20_BALANCE_OF,
    V3_FACTORY_GET_POOL,
    V3_POOL_FEE,
    V3_POOL_LIQUIDITY,
    V3_POOL_SLOT0,
    V3_POOL_TOKEN0,
    V3_POOL_TOKEN1,
)
from dexquote.errors import (
    InvalidFeeTierError,
    MalformedResponseError,
    PoolNotFoundError,
    UnsupportedChainError,
    ZeroLiquidityError,
)
from dexquote.models.pool import V3PoolSnapshot
from dexquote.models.types import normalize_address, same_address
from dexquote.resolvers.base import (
    fan_out,
    read_address,
    read_decimals,
    read_one,
    read_symbol,
    read_uint,
)
from dexquote.units import DECIMAL_HIGH_PREC_CONTEXT, from_base_units

logger = structlog.get_logger()


def decode_sqrt_price_x96(sqrt_price_x96: int) -> Decimal:
    """Decode sqrtPriceX96 into the raw pool price.

    rawPrice = (sqrtPriceX96 / 2^96)^2, i.e. token1 per token0 in base units.

    Raises:
        ZeroLiquidityError: If sqrtPriceX96 is zero (pool never initialized)
    """
    if sqrt_price_x96 <= 0:
        raise ZeroLiquidityError("V3 pool price is not initialized (sqrtPriceX96 = 0)")
    with decimal.localcontext(DECIMAL_HIGH_PREC_CONTEXT):
        # Square the integer first so only one rounding happens
        return Decimal(sqrt_price_x96 * sqrt_price_x96) / Decimal(Q96 * Q96)


def native_per_token(raw_price: Decimal, token_is_token0: bool, token_decimals: int) -> Decimal:
    """Express a raw V3 price as native units per 1 token.

    The protocol price is always token1 per token0, so it is inverted when
    the queried token is token1. The result is then rescaled from base
    units to human units (a no-op for 18-decimal tokens).

    Args:
        raw_price: Decoded sqrtPriceX96 (token1 per token0, base units)
        token_is_token0: True if the queried token is the pool's token0
        token_decimals: Decimals of the queried token

    Returns:
        Human-scaled price in native units per token
    """
    with decimal.localcontext(DECIMAL_HIGH_PREC_CONTEXT):
        base_price = raw_price if token_is_token0 else Decimal(1) / raw_price
        return base_price.scaleb(token_decimals - NATIVE_DECIMALS)


class UniswapV3PoolResolver:
    """Resolves UniswapV3-style pools through a ChainClient.

    Reads happen in two concurrent stages: token metadata and the pool
    address first, then slot0, liquidity and balances once the pool is known.
    """

    def __init__(self, client: ChainClient):
        self.client = client

    async def resolve(
        self,
        chain: ChainConfig,
        token: str,
        fee_tier: int = V3_FEE_MEDIUM,
    ) -> V3PoolSnapshot:
        """Resolve the token/wrapped-native pool for a fee tier.

        Args:
            chain: Configuration of the chain to query
            token: Token address
            fee_tier: Pool fee in Uniswap units (default 3000 = 0.3%)

        Returns:
            Normalized V3PoolSnapshot

        Raises:
            UnsupportedChainError: If the chain has no V3 deployment
            InvalidFeeTierError: If fee_tier is not a known tier
            PoolNotFoundError: If the factory has no pool for the token and tier
            ZeroLiquidityError: If the pool price is not initialized
            ChainReadError: If any read fails (propagated unchanged)
        """
        if chain.v3_factory is None:
            raise UnsupportedChainError(f"Chain {chain.name} has no UniswapV3 factory configured")
        if fee_tier not in V3_FEE_TIERS:
            raise InvalidFeeTierError(f"Unknown V3 fee tier {fee_tier} (known: {V3_FEE_TIERS})")

        token = normalize_address(token, validate=True)
        native = chain.wrapped_native

        # Stage 1: nothing here depends on the pool
        symbol, decimals, pool = await fan_out(
            read_symbol(self.client, token),
            read_decimals(self.client, token),
            read_address(
                self.client, chain.v3_factory, V3_FACTORY_GET_POOL, (token, native, fee_tier)
            ),
        )

        if pool == ZERO_ADDRESS:
            logger.debug("v3_pool_not_found", chain=chain.name, token=token, fee_tier=fee_tier)
            raise PoolNotFoundError(
                f"No V3 pool for {token}/{native} at fee tier {fee_tier} on {chain.name}"
            )

        # Stage 2: pool state
        token0, token1, liquidity, slot0, fee, token_balance, native_balance = await fan_out(
            read_address(self.client, pool, V3_POOL_TOKEN0),
            read_address(self.client, pool, V3_POOL_TOKEN1),
            read_one(self.client, pool, V3_POOL_LIQUIDITY),
            self.client.call(pool, V3_POOL_SLOT0),
            read_one(self.client, pool, V3_POOL_FEE),
            read_one(self.client, token, ERC20_BALANCE_OF, (pool,)),
            read_one(self.client, native, ERC20_BALANCE_OF, (pool,)),
        )

        if len(slot0) != len(V3_POOL_SLOT0.outputs):
            raise MalformedResponseError(
                f"slot0() returned {len(slot0)} values, expected 7",
                address=pool,
                function=V3_POOL_SLOT0.signature,
            )
        sqrt_price_x96 = read_uint(slot0[0], address=pool, function=V3_POOL_SLOT0)
        tick = slot0[1]
        if isinstance(tick, bool) or not isinstance(tick, int):
            raise MalformedResponseError(
                f"slot0() tick is {tick!r}, expected int24",
                address=pool,
                function=V3_POOL_SLOT0.signature,
            )
        liquidity = read_uint(liquidity, address=pool, function=V3_POOL_LIQUIDITY)
        fee = read_uint(fee, address=pool, function=V3_POOL_FEE)
        token_balance = read_uint(token_balance, address=token, function=ERC20_BALANCE_OF)
        native_balance = read_uint(native_balance, address=native, function=ERC20_BALANCE_OF)

        if same_address(token, token0):
            is_token0 = True
        elif same_address(token, token1):
            is_token0 = False
        else:
            raise MalformedResponseError(f"Token {token} not in pool {pool} ({token0}, {token1})")

        price = native_per_token(decode_sqrt_price_x96(sqrt_price_x96), is_token0, decimals)

        token_reserve = from_base_units(token_balance, decimals)
        native_reserve = from_base_units(native_balance, NATIVE_DECIMALS)
        with decimal.localcontext(DECIMAL_HIGH_PREC_CONTEXT):
            market_value_estimate = native_reserve * 2

        logger.debug(
            "v3_pool_resolved",
            chain=chain.name,
            token=token,
            pool=pool,
            fee_tier=fee,
            price=str(price),
        )

        return V3PoolSnapshot(
            chain=chain.name,
            token_address=token,
            native_address=native,
            token_symbol=symbol,
            token_decimals=decimals,
            pool_address=pool,
            token_reserve=token_reserve,
            native_reserve=native_reserve,
            price=price,
            market_value_estimate=market_value_estimate,
            token0=token0,
            token1=token1,
            fee_tier=fee,
            sqrt_price_x96=sqrt_price_x96,
            liquidity=liquidity,
            tick=tick,
        )


__all__ = [
    "UniswapV3PoolResolver",
    "decode_sqrt_price_x96",
    "native_per_token",
]
