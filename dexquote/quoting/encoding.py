"""Calldata encoding for swap requests.

Produces the unsigned transaction a caller would sign for a SwapRequest.
Signing and broadcasting stay with the caller.
"""

from __future__ import annotations

from eth_abi import encode  # type: ignore[attr-defined]

from dexquote.chains.registry import ChainConfig
from dexquote.contracts import (
    V2_ROUTER_SWAP_EXACT_ETH_FOR_TOKENS,
    V2_ROUTER_SWAP_EXACT_TOKENS_FOR_ETH,
    V3_ROUTER_EXACT_INPUT_SINGLE,
    ContractFunction,
)
from dexquote.errors import UnsupportedChainError
from dexquote.models.swap import SwapDirection, SwapRequest, SwapTransaction, V2Route, V3Route
from dexquote.models.types import normalize_address


def _calldata(function: ContractFunction, args: list[object]) -> str:
    return "0x" + (function.selector + encode(list(function.inputs), args)).hex()


def encode_v2_swap(chain: ChainConfig, request: SwapRequest, recipient: str) -> SwapTransaction:
    """Encode a V2 router swap.

    BUY uses swapExactETHForTokens (amount_in sent as value, the router
    wraps it); SELL uses swapExactTokensForETH (the router unwraps the
    output). The router must already be approved to spend the token on SELL.
    """
    if not isinstance(request.route, V2Route):
        raise TypeError("V2 encoding needs a V2Route")
    path = list(request.route.path)

    if request.direction is SwapDirection.BUY:
        data = _calldata(
            V2_ROUTER_SWAP_EXACT_ETH_FOR_TOKENS,
            [request.amount_out_minimum, path, recipient, request.deadline],
        )
        value = request.amount_in
    else:
        data = _calldata(
            V2_ROUTER_SWAP_EXACT_TOKENS_FOR_ETH,
            [request.amount_in, request.amount_out_minimum, path, recipient, request.deadline],
        )
        value = 0

    return SwapTransaction(to=chain.v2_router, data=data, value=value)


def encode_v3_swap(chain: ChainConfig, request: SwapRequest, recipient: str) -> SwapTransaction:
    """Encode a SwapRouter exactInputSingle call.

    On BUY the native amount is attached as value and wrapped by the router.
    """
    if not isinstance(request.route, V3Route):
        raise TypeError("V3 encoding needs a V3Route")
    if chain.v3_swap_router is None:
        raise UnsupportedChainError(f"Chain {chain.name} has no UniswapV3 swap router configured")

    params = (
        request.token_in,
        request.token_out,
        request.route.fee_tier,
        recipient,
        request.deadline,
        request.amount_in,
        request.amount_out_minimum,
        0,  # sqrtPriceLimitX96 = 0 means no limit
    )
    data = _calldata(V3_ROUTER_EXACT_INPUT_SINGLE, [params])
    value = request.amount_in if request.direction is SwapDirection.BUY else 0
    return SwapTransaction(to=chain.v3_swap_router, data=data, value=value)


def encode_swap_transaction(
    chain: ChainConfig,
    request: SwapRequest,
    recipient: str,
) -> SwapTransaction:
    """Encode the unsigned transaction for a swap request.

    Args:
        chain: Configuration of the request's chain
        request: Swap request from SwapQuoteBuilder
        recipient: Address receiving the output

    Returns:
        SwapTransaction (target, calldata, value)
    """
    if chain.name != request.chain:
        raise ValueError(f"Request is for chain {request.chain}, not {chain.name}")
    recipient = normalize_address(recipient, validate=True)
    if isinstance(request.route, V2Route):
        return encode_v2_swap(chain, request, recipient)
    return encode_v3_swap(chain, request, recipient)


__all__ = [
    "encode_swap_transaction",
    "encode_v2_swap",
    "encode_v3_swap",
]
