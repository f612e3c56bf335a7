"""Protocol constants shared by the resolvers and the quote builder."""

# Wrapped native tokens (WETH, WBNB, ...) always use 18 decimals
NATIVE_DECIMALS = 18

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"

# Basis point denominator (10000 bps = 100%)
BPS_DENOMINATOR = 10_000

# Swap deadlines are always now + 20 minutes to bound staleness
DEADLINE_WINDOW_SECONDS = 20 * 60

# UniswapV3 fee tiers in Uniswap units (hundredths of a basis point)
# Fee = units / 1,000,000 (e.g., 3000 = 0.3%)
V3_FEE_LOWEST = 100  # 0.01% - stable pairs
V3_FEE_LOW = 500  # 0.05% - stable pairs
V3_FEE_MEDIUM = 3000  # 0.30% - most pairs
V3_FEE_HIGH = 10000  # 1.00% - exotic pairs

V3_FEE_TIERS = [V3_FEE_LOWEST, V3_FEE_LOW, V3_FEE_MEDIUM, V3_FEE_HIGH]

# sqrtPriceX96 fixed-point denominator
Q96 = 2**96

__all__ = [
    "NATIVE_DECIMALS",
    "ZERO_ADDRESS",
    "BPS_DENOMINATOR",
    "DEADLINE_WINDOW_SECONDS",
    "V3_FEE_LOWEST",
    "V3_FEE_LOW",
    "V3_FEE_MEDIUM",
    "V3_FEE_HIGH",
    "V3_FEE_TIERS",
    "Q96",
]
