from decimal import Decimal

import pytest

from amount_recon.utils.amounts import (
    MAX_SCALED_AMOUNT,
    MIN_SCALED_AMOUNT,
    check_scaled,
    format_scaled,
    to_scaled,
)
from amount_recon.utils.exceptions import AmountOverflowError, InvalidAmountError


class TestToScaled:
    """Decimal text to minor units, exactly."""

    def test_two_places(self):
        assert to_scaled("5.00") == 500
        assert to_scaled("12.5") == 1250
        assert to_scaled("0") == 0

    def test_decimal_and_int_inputs(self):
        assert to_scaled(Decimal("3.50")) == 350
        assert to_scaled(7) == 700

    def test_negative(self):
        assert to_scaled("-0.01") == -1
        assert to_scaled("-4.5") == -450

    def test_trailing_zeros_past_scale_are_accepted(self):
        assert to_scaled("5.5000") == 550

    def test_exponent_notation(self):
        assert to_scaled("1E+3") == 100000

    def test_custom_scale(self):
        assert to_scaled("1.2345", scale=4) == 12345
        assert to_scaled("42", scale=0) == 42

    def test_excess_precision_rejected(self):
        with pytest.raises(InvalidAmountError):
            to_scaled("5.005")

    def test_float_rejected(self):
        with pytest.raises(InvalidAmountError):
            to_scaled(0.1)  # type: ignore[arg-type]

    def test_garbage_rejected(self):
        with pytest.raises(InvalidAmountError):
            to_scaled("ten dollars")

    def test_non_finite_rejected(self):
        with pytest.raises(InvalidAmountError):
            to_scaled("NaN")
        with pytest.raises(InvalidAmountError):
            to_scaled("Infinity")

    def test_overflow(self):
        with pytest.raises(AmountOverflowError):
            to_scaled("92233720368547758.08")

    def test_largest_value_fits(self):
        assert to_scaled("92233720368547758.07") == MAX_SCALED_AMOUNT
        assert to_scaled("-92233720368547758.08") == MIN_SCALED_AMOUNT

    def test_huge_exponent_overflows_without_expanding(self):
        with pytest.raises(AmountOverflowError):
            to_scaled("1e99999999")
        with pytest.raises(AmountOverflowError):
            to_scaled("-7E+400000000", scale=4)

    def test_tiny_exponent_rejected_without_expanding(self):
        with pytest.raises(InvalidAmountError):
            to_scaled("1e-99999999")

    def test_zero_with_any_exponent(self):
        assert to_scaled("0e99999999") == 0
        assert to_scaled("0E-99999999") == 0


class TestCheckScaled:
    def test_bounds(self):
        assert check_scaled(MAX_SCALED_AMOUNT) == MAX_SCALED_AMOUNT
        assert check_scaled(MIN_SCALED_AMOUNT) == MIN_SCALED_AMOUNT
        with pytest.raises(AmountOverflowError):
            check_scaled(MAX_SCALED_AMOUNT + 1)
        with pytest.raises(AmountOverflowError):
            check_scaled(MIN_SCALED_AMOUNT - 1)

    def test_rejects_non_integers(self):
        with pytest.raises(TypeError):
            check_scaled(5.0)  # type: ignore[arg-type]
        with pytest.raises(TypeError):
            check_scaled(True)


class TestFormatScaled:
    def test_format(self):
        assert format_scaled(500) == "5.00"
        assert format_scaled(5) == "0.05"
        assert format_scaled(-1250) == "-12.50"
        assert format_scaled(0) == "0.00"

    def test_scale_zero(self):
        assert format_scaled(42, scale=0) == "42"

    def test_round_trips_text(self):
        assert format_scaled(to_scaled("1234.56")) == "1234.56"
