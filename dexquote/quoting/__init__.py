"""Swap quoting: slippage bounds, quote building and calldata encoding."""

from dexquote.quoting.builder import SwapQuoteBuilder, validate_trade_intent
from dexquote.quoting.encoding import encode_swap_transaction, encode_v2_swap, encode_v3_swap
from dexquote.quoting.slippage import (
    advisory_fee,
    amount_out_minimum,
    validate_fee_discount,
    validate_slippage_bps,
)

__all__ = [
    "SwapQuoteBuilder",
    "encode_swap_transaction",
    "encode_v2_swap",
    "encode_v3_swap",
    "advisory_fee",
    "amount_out_minimum",
    "validate_fee_discount",
    "validate_slippage_bps",
    "validate_trade_intent",
]
