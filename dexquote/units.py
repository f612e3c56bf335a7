"""Conversion between integer base units and human-scaled Decimal quantities.

All conversions run under a 78-digit Decimal context, enough for any
uint256 value (up to ~10^77), so scaling never rounds.
"""

from __future__ import annotations

import decimal
from decimal import ROUND_DOWN, Decimal, InvalidOperation

from dexquote.errors import InvalidAmountError

# 78 digits of precision, enough for uint256 values (up to ~10^77)
DECIMAL_HIGH_PREC_CONTEXT = decimal.Context(prec=78)

# ERC20 decimals() returns uint8
MAX_DECIMALS = 255


def _check_decimals(decimals: int) -> None:
    if isinstance(decimals, bool) or not isinstance(decimals, int):
        raise TypeError(f"decimals must be int, got {type(decimals).__name__}")
    if not 0 <= decimals <= MAX_DECIMALS:
        raise ValueError(f"decimals out of uint8 range: {decimals}")


def to_decimal(amount: Decimal | int | float | str) -> Decimal:
    """Parse a human-readable amount into a finite Decimal.

    Floats go through str() so 0.1 becomes Decimal("0.1"), not its binary expansion.

    Raises:
        InvalidAmountError: If the value is not a finite number
    """
    if isinstance(amount, bool):
        raise InvalidAmountError(f"Amount must be numeric, got {amount!r}")
    try:
        value = amount if isinstance(amount, Decimal) else Decimal(str(amount))
    except (InvalidOperation, ValueError) as err:
        raise InvalidAmountError(f"Amount is not a number: {amount!r}") from err
    if not value.is_finite():
        raise InvalidAmountError(f"Amount must be finite: {amount!r}")
    return value


def to_base_units(amount: Decimal | int | float | str, decimals: int) -> int:
    """Convert a human amount to integer base units.

    Digits beyond the token's precision are truncated (rounded toward zero),
    so the result never exceeds the requested amount.

    Args:
        amount: Human-readable quantity (e.g., Decimal("1.5") for 1.5 WETH)
        decimals: Token decimal count

    Returns:
        Amount in base units (e.g., 1500000000000000000)
    """
    _check_decimals(decimals)
    value = to_decimal(amount)
    # Digits past the context precision are cut, never rounded up
    with decimal.localcontext(DECIMAL_HIGH_PREC_CONTEXT) as ctx:
        ctx.rounding = ROUND_DOWN
        scaled = value.scaleb(decimals)
        return int(scaled.to_integral_value(rounding=ROUND_DOWN))


def from_base_units(raw: int, decimals: int) -> Decimal:
    """Convert integer base units to a human-scaled Decimal.

    Args:
        raw: Amount in base units
        decimals: Token decimal count

    Returns:
        Exact Decimal quantity (e.g., Decimal("1.5") for 1.5e18 wei)
    """
    _check_decimals(decimals)
    with decimal.localcontext(DECIMAL_HIGH_PREC_CONTEXT):
        return Decimal(raw).scaleb(-decimals)


__all__ = [
    "DECIMAL_HIGH_PREC_CONTEXT",
    "MAX_DECIMALS",
    "to_decimal",
    "to_base_units",
    "from_base_units",
]
