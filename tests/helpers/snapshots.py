"""Factories for pool snapshots used by quoting tests."""

from decimal import Decimal

from dexquote.chains.registry import ChainConfig
from dexquote.models.pool import V2PoolSnapshot, V3PoolSnapshot
from tests.helpers.constants import LOW_TOKEN, PAIR, POOL, Q96


def make_v2_snapshot(
    chain: ChainConfig,
    token: str = LOW_TOKEN,
    decimals: int = 18,
    pair: str = PAIR,
) -> V2PoolSnapshot:
    """V2 snapshot of token/wrapped-native with token as token0."""
    native = chain.wrapped_native
    return V2PoolSnapshot(
        chain=chain.name,
        token_address=token,
        native_address=native,
        token_symbol="TKN",
        token_decimals=decimals,
        pool_address=pair,
        token_reserve=Decimal(1_000_000),
        native_reserve=Decimal(500),
        price=Decimal("0.0005"),
        market_value_estimate=Decimal(1_000),
        token0=token,
        token1=native,
        reserve0=1_000_000 * 10**decimals,
        reserve1=500 * 10**18,
        block_timestamp_last=1_699_999_000,
    )


def make_v3_snapshot(
    chain: ChainConfig,
    token: str = LOW_TOKEN,
    decimals: int = 18,
    fee_tier: int = 3000,
    pool: str = POOL,
) -> V3PoolSnapshot:
    """V3 snapshot of token/wrapped-native with token as token0."""
    native = chain.wrapped_native
    return V3PoolSnapshot(
        chain=chain.name,
        token_address=token,
        native_address=native,
        token_symbol="TKN",
        token_decimals=decimals,
        pool_address=pool,
        token_reserve=Decimal(1_000),
        native_reserve=Decimal(1_000),
        price=Decimal(1),
        market_value_estimate=Decimal(2_000),
        token0=token,
        token1=native,
        fee_tier=fee_tier,
        sqrt_price_x96=Q96,
        liquidity=10**21,
        tick=0,
    )
