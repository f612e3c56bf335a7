"""Contract functions read or encoded by dexquote.

Each ContractFunction carries its ABI input and output types, so a
ChainClient can encode arguments and decode return data without a full
JSON ABI.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import cached_property

from web3 import Web3


@dataclass(frozen=True)
class ContractFunction:
    """A contract function with its ABI types."""

    name: str
    inputs: tuple[str, ...] = ()
    outputs: tuple[str, ...] = ()

    @property
    def signature(self) -> str:
        """Canonical signature used for the selector (e.g., "getPair(address,address)")."""
        return f"{self.name}({','.join(self.inputs)})"

    @cached_property
    def selector(self) -> bytes:
        """First 4 bytes of keccak256(signature)."""
        return bytes(Web3.keccak(text=self.signature)[:4])

    def __str__(self) -> str:
        return f"{self.signature}({','.join(self.outputs)})"


# ERC20
ERC20_SYMBOL = ContractFunction("symbol", (), ("string",))
ERC20_DECIMALS = ContractFunction("decimals", (), ("uint8",))
ERC20_BALANCE_OF = ContractFunction("balanceOf", ("address",), ("uint256",))

# UniswapV2
V2_FACTORY_GET_PAIR = ContractFunction("getPair", ("address", "address"), ("address",))
V2_PAIR_TOKEN0 = ContractFunction("token0", (), ("address",))
V2_PAIR_TOKEN1 = ContractFunction("token1", (), ("address",))
V2_PAIR_GET_RESERVES = ContractFunction("getReserves", (), ("uint112", "uint112", "uint32"))
V2_ROUTER_GET_AMOUNTS_OUT = ContractFunction(
    "getAmountsOut", ("uint256", "address[]"), ("uint256[]",)
)
V2_ROUTER_SWAP_EXACT_ETH_FOR_TOKENS = ContractFunction(
    "swapExactETHForTokens", ("uint256", "address[]", "address", "uint256"), ("uint256[]",)
)
V2_ROUTER_SWAP_EXACT_TOKENS_FOR_ETH = ContractFunction(
    "swapExactTokensForETH",
    ("uint256", "uint256", "address[]", "address", "uint256"),
    ("uint256[]",),
)

# UniswapV3
V3_FACTORY_GET_POOL = ContractFunction("getPool", ("address", "address", "uint24"), ("address",))
V3_POOL_TOKEN0 = ContractFunction("token0", (), ("address",))
V3_POOL_TOKEN1 = ContractFunction("token1", (), ("address",))
V3_POOL_FEE = ContractFunction("fee", (), ("uint24",))
V3_POOL_LIQUIDITY = ContractFunction("liquidity", (), ("uint128",))
V3_POOL_SLOT0 = ContractFunction(
    "slot0", (), ("uint160", "int24", "uint16", "uint16", "uint16", "uint8", "bool")
)

# Quoter (V1): flat arguments, returns amountOut only
V3_QUOTER_V1_QUOTE_EXACT_INPUT_SINGLE = ContractFunction(
    "quoteExactInputSingle",
    ("address", "address", "uint24", "uint256", "uint160"),
    ("uint256",),
)
# QuoterV2: (tokenIn, tokenOut, amountIn, fee, sqrtPriceLimitX96) struct
# Returns (amountOut, sqrtPriceX96After, initializedTicksCrossed, gasEstimate)
V3_QUOTER_V2_QUOTE_EXACT_INPUT_SINGLE = ContractFunction(
    "quoteExactInputSingle",
    ("(address,address,uint256,uint24,uint160)",),
    ("uint256", "uint160", "uint32", "uint256"),
)

# SwapRouter: exactInputSingle((tokenIn, tokenOut, fee, recipient, deadline,
#                               amountIn, amountOutMinimum, sqrtPriceLimitX96))
V3_ROUTER_EXACT_INPUT_SINGLE = ContractFunction(
    "exactInputSingle",
    ("(address,address,uint24,address,uint256,uint256,uint256,uint160)",),
    ("uint256",),
)

__all__ = [
    "ContractFunction",
    "ERC20_SYMBOL",
    "ERC20_DECIMALS",
    "ERC20_BALANCE_OF",
    "V2_FACTORY_GET_PAIR",
    "V2_PAIR_TOKEN0",
    "V2_PAIR_TOKEN1",
    "V2_PAIR_GET_RESERVES",
    "V2_ROUTER_GET_AMOUNTS_OUT",
    "V2_ROUTER_SWAP_EXACT_ETH_FOR_TOKENS",
    "V2_ROUTER_SWAP_EXACT_TOKENS_FOR_ETH",
    "V3_FACTORY_GET_POOL",
    "V3_POOL_TOKEN0",
    "V3_POOL_TOKEN1",
    "V3_POOL_FEE",
    "V3_POOL_LIQUIDITY",
    "V3_POOL_SLOT0",
    "V3_QUOTER_V1_QUOTE_EXACT_INPUT_SINGLE",
    "V3_QUOTER_V2_QUOTE_EXACT_INPUT_SINGLE",
    "V3_ROUTER_EXACT_INPUT_SINGLE",
]
