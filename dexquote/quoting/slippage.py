"""Slippage bound and advisory fee arithmetic.

All amounts are integer base units; the minimum output uses integer
floor division so it never exceeds the quoted amount.
"""

from __future__ import annotations

import decimal
from decimal import ROUND_FLOOR, Decimal

from dexquote.constants import BPS_DENOMINATOR
from dexquote.errors import InvalidFeeDiscountError, InvalidSlippageError
from dexquote.models.swap import AdvisoryFee
from dexquote.units import DECIMAL_HIGH_PREC_CONTEXT, to_decimal


def validate_slippage_bps(slippage_bps: int) -> int:
    """Check that slippage tolerance is an integer in [0, 10000) bps.

    Raises:
        InvalidSlippageError: If outside the range or not an integer
    """
    if isinstance(slippage_bps, bool) or not isinstance(slippage_bps, int):
        raise InvalidSlippageError(f"Slippage must be integer bps, got {slippage_bps!r}")
    if not 0 <= slippage_bps < BPS_DENOMINATOR:
        raise InvalidSlippageError(
            f"Slippage {slippage_bps} bps outside [0, {BPS_DENOMINATOR})"
        )
    return slippage_bps


def validate_fee_discount(fee_discount: Decimal | float | int | str) -> Decimal:
    """Parse a fee discount fraction in [0, 1].

    Raises:
        InvalidFeeDiscountError: If not a number in range
    """
    try:
        discount = to_decimal(fee_discount)
    except ValueError as err:
        raise InvalidFeeDiscountError(f"Fee discount is not a number: {fee_discount!r}") from err
    if not Decimal(0) <= discount <= Decimal(1):
        raise InvalidFeeDiscountError(f"Fee discount {discount} outside [0, 1]")
    return discount


def amount_out_minimum(amount_out: int, slippage_bps: int) -> int:
    """Minimum acceptable output for a quoted amount.

    Formula: floor(amount_out * (10000 - bps) / 10000)

    Equal to amount_out at 0 bps, strictly below it for any positive
    tolerance, and non-increasing as the tolerance grows.
    """
    validate_slippage_bps(slippage_bps)
    if amount_out < 0:
        raise ValueError(f"Quoted amount cannot be negative: {amount_out}")
    return amount_out * (BPS_DENOMINATOR - slippage_bps) // BPS_DENOMINATOR


def _floor_mul(amount: int, factor: Decimal) -> int:
    with decimal.localcontext(DECIMAL_HIGH_PREC_CONTEXT):
        return int((Decimal(amount) * factor).to_integral_value(rounding=ROUND_FLOOR))


def advisory_fee(amount_in: int, fee_rate: Decimal, fee_discount: Decimal) -> AdvisoryFee:
    """Compute the informational fee for a swap.

    fee_amount = floor(amount_in * fee_rate)
    discounted_amount = floor(fee_amount * (1 - fee_discount))
    """
    fee_amount = _floor_mul(amount_in, fee_rate)
    discounted = _floor_mul(fee_amount, Decimal(1) - fee_discount)
    return AdvisoryFee(
        rate=fee_rate,
        discount=fee_discount,
        amount=fee_amount,
        discounted_amount=discounted,
    )


__all__ = [
    "validate_slippage_bps",
    "validate_fee_discount",
    "amount_out_minimum",
    "advisory_fee",
]
