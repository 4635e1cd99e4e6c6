"""
Scaled-integer amount helpers.

Amounts travel through the engine as integers in minor units (e.g. cents at
scale 2). These helpers convert decimal text to that representation and
back without ever going through binary floating point.
"""

from decimal import Decimal, InvalidOperation
from typing import Union

from .exceptions import AmountOverflowError, InvalidAmountError

# Signed 64-bit range
MIN_SCALED_AMOUNT = -(2**63)
MAX_SCALED_AMOUNT = 2**63 - 1

DEFAULT_SCALE = 2


def check_scaled(value: int, what: str = "amount") -> int:
    """
    Validate that a scaled amount is an integer inside the representable range.

    Args:
        value: Scaled integer amount
        what: Label used in error messages

    Returns:
        The value, unchanged

    Raises:
        TypeError: If value is not an int (floats are never accepted)
        AmountOverflowError: If value is outside the signed 64-bit range
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(
            f"{what} must be a scaled integer, got {type(value).__name__}"
        )
    if value < MIN_SCALED_AMOUNT or value > MAX_SCALED_AMOUNT:
        raise AmountOverflowError(
            f"{what} {value} is outside the representable range "
            f"[{MIN_SCALED_AMOUNT}, {MAX_SCALED_AMOUNT}]"
        )
    return value


def to_scaled(value: Union[str, Decimal, int], scale: int = DEFAULT_SCALE) -> int:
    """
    Convert decimal text or a Decimal into a scaled integer.

    Args:
        value: Amount such as "12.50", Decimal("12.5") or 12
        scale: Number of fractional digits kept in minor units

    Returns:
        Amount in minor units

    Raises:
        InvalidAmountError: If the value is not a finite decimal or carries
            more fractional digits than the scale allows
        AmountOverflowError: If the scaled value does not fit the range
    """
    if isinstance(value, float):
        raise InvalidAmountError(
            f"Refusing binary float amount {value!r}; pass text or Decimal"
        )

    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    except InvalidOperation as e:
        raise InvalidAmountError(f"Not a decimal amount: {value!r}") from e

    if not amount.is_finite():
        raise InvalidAmountError(f"Amount must be finite: {value!r}")

    sign, digits, exp = amount.as_tuple()
    if not any(digits):
        return 0

    # Bound the exponent before building any integer from it.
    # 10**19 minor units already exceeds the signed 64-bit range.
    magnitude = amount.adjusted() + scale
    if magnitude > 18:
        raise AmountOverflowError(
            f"Amount {value!r} is outside the representable range at scale {scale}"
        )
    if magnitude < 0:
        raise InvalidAmountError(
            f"Amount {value!r} has more than {scale} fractional digit(s)"
        )

    unscaled = int("".join(map(str, digits)))
    shift = exp + scale
    if shift >= 0:
        scaled = unscaled * 10**shift
    else:
        scaled, dropped = divmod(unscaled, 10**-shift)
        # Trailing zeros past the scale are fine, anything else needs rounding
        if dropped:
            raise InvalidAmountError(
                f"Amount {value!r} has more than {scale} fractional digit(s)"
            )
    if sign:
        scaled = -scaled

    return check_scaled(scaled)


def format_scaled(value: int, scale: int = DEFAULT_SCALE) -> str:
    """Render a scaled integer as fixed-point text, e.g. 500 -> "5.00"."""
    if scale <= 0:
        return str(value)
    sign = "-" if value < 0 else ""
    whole, fraction = divmod(abs(value), 10**scale)
    return f"{sign}{whole}.{fraction:0{scale}d}"
