"""Tests for base unit / human amount conversion."""

from decimal import Decimal

import pytest

from dexquote.errors import InvalidAmountError
from dexquote.units import from_base_units, to_base_units, to_decimal


class TestToBaseUnits:
    """Tests for to_base_units."""

    def test_whole_amount(self):
        assert to_base_units(Decimal("1"), 18) == 10**18

    def test_fractional_amount(self):
        assert to_base_units("1.5", 6) == 1_500_000

    def test_float_uses_decimal_repr(self):
        """0.1 as float must not become 0.1000000000000000055..."""
        assert to_base_units(0.1, 18) == 10**17

    def test_excess_precision_truncates(self):
        """Digits beyond the token's decimals are dropped, never rounded up."""
        assert to_base_units("1.9999999", 6) == 1_999_999

    def test_more_digits_than_context_precision(self):
        """Ninety 9s after the point must not round up to a whole unit."""
        assert to_base_units("0." + "9" * 90, 18) == 10**18 - 1
        assert to_base_units("1." + "9" * 90, 0) == 1

    def test_zero_decimals(self):
        assert to_base_units(42, 0) == 42

    def test_large_amount_exact(self):
        """uint256-scale amounts convert without rounding."""
        amount = Decimal("123456789012345678901234567890.123456789012345678")
        assert to_base_units(amount, 18) == 123456789012345678901234567890123456789012345678

    def test_rejects_non_numeric(self):
        with pytest.raises(InvalidAmountError):
            to_base_units("abc", 18)

    def test_rejects_infinity(self):
        with pytest.raises(InvalidAmountError):
            to_base_units(Decimal("Infinity"), 18)

    def test_rejects_bad_decimals(self):
        with pytest.raises(ValueError):
            to_base_units(1, 256)


class TestFromBaseUnits:
    """Tests for from_base_units."""

    def test_scales_down(self):
        assert from_base_units(1_500_000, 6) == Decimal("1.5")

    def test_eighteen_decimals(self):
        assert from_base_units(500 * 10**18, 18) == Decimal(500)

    def test_zero(self):
        assert from_base_units(0, 18) == 0

    def test_uint256_max_exact(self):
        raw = 2**256 - 1
        assert to_base_units(from_base_units(raw, 18), 18) == raw


class TestRoundTrip:
    """Human -> base units -> human is exact within one unit of the last decimal."""

    @pytest.mark.parametrize(
        "amount,decimals",
        [
            ("0.000001", 6),
            ("1234.5678", 8),
            ("0.1", 18),
            ("999999999.999999999999999999", 18),
            ("3.14159265358979", 6),  # truncated to 6 decimals
        ],
    )
    def test_round_trip_within_one_unit(self, amount, decimals):
        original = to_decimal(amount)
        back = from_base_units(to_base_units(original, decimals), decimals)
        assert back <= original
        assert original - back < Decimal(1).scaleb(-decimals)
