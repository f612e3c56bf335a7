"""Pool resolvers for UniswapV2 and UniswapV3 style pools."""

from dexquote.resolvers.base import fan_out
from dexquote.resolvers.uniswap_v2 import UniswapV2PoolResolver, select_reserves
from dexquote.resolvers.uniswap_v3 import (
    UniswapV3PoolResolver,
    decode_sqrt_price_x96,
    native_per_token,
)

__all__ = [
    "fan_out",
    "UniswapV2PoolResolver",
    "select_reserves",
    "UniswapV3PoolResolver",
    "decode_sqrt_price_x96",
    "native_per_token",
]
