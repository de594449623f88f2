"""
Conversion between human decimal amounts and exact scaled integers.

Every amount inside exact_money is an ``int`` counting units of
``10 ** -scale``. This module is the only place where text, floats and
``Decimal`` values cross into that representation. Parsing is done on the
decimal text (splitting on ``.`` and padding), never by floating point
multiplication, so an input such as ``"1.005"`` stays exactly 1.005.
"""

from __future__ import annotations

# Standard library imports
import math
import re
from decimal import Decimal
from typing import Tuple, Union

# Local application imports
from exact_money.error import InvalidAmountError, InvalidOperationError

Numeric = Union[int, float, Decimal, str]

# optional leading minus, digits, optional fractional part
DECIMAL_PATTERN = re.compile(r"-?[0-9]+(\.[0-9]+)?")


def _check_scale(scale: int) -> None:
    if isinstance(scale, bool) or not isinstance(scale, int) or scale < 0:
        raise InvalidOperationError(f"scale must be a non-negative integer, got {scale!r}")


def to_decimal_text(value: Numeric) -> str:
    """
    Return the plain decimal text of ``value`` (no exponent, no grouping).

    Floats go through their shortest ``repr`` so ``0.1`` becomes ``"0.1"``
    rather than its binary expansion.
    """
    if isinstance(value, bool):
        raise InvalidAmountError(f"Invalid amount: {value!r}")
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if not math.isfinite(value):
            raise InvalidAmountError(f"Invalid amount: {value}")
        text = format(Decimal(repr(value)), "f")
    elif isinstance(value, Decimal):
        if not value.is_finite():
            raise InvalidAmountError(f"Invalid amount: {value}")
        text = format(value, "f")
    elif isinstance(value, str):
        text = value
    else:
        raise InvalidAmountError(f"Unsupported type for amount: {type(value).__name__}")

    if not DECIMAL_PATTERN.fullmatch(text):
        raise InvalidAmountError(f"Invalid amount format: {value!r}")
    return text


def fractional_digit_count(text: str) -> int:
    _, _, fraction = text.partition(".")
    return len(fraction)


def decimal_to_scaled_int(value: Numeric, scale: int) -> int:
    """
    Convert a decimal amount to an integer scaled by ``10 ** scale``.

    Fractional digits beyond ``scale`` are rounded half away from zero.

    Args:
        value: An int, float, Decimal or a string matching ``-?\\d+(\\.\\d+)?``.
        scale: The number of fractional digits the result represents.

    Returns:
        int: ``value * 10 ** scale`` rounded to an integer.

    Raises:
        InvalidAmountError: If the value is malformed, NaN or infinite.

    Examples:
        >>> decimal_to_scaled_int("10.99", 2)
        1099
        >>> decimal_to_scaled_int("-1.005", 2)
        -101
        >>> decimal_to_scaled_int(0.1, 6)
        100000
    """
    _check_scale(scale)
    if isinstance(value, int) and not isinstance(value, bool):
        return value * 10**scale

    text = to_decimal_text(value)
    negative = text.startswith("-")
    if negative:
        text = text[1:]
    integer_part, _, fraction = text.partition(".")

    kept = fraction[:scale].ljust(scale, "0")
    dropped = fraction[scale:]
    magnitude = int(integer_part + kept)
    if dropped and dropped[0] >= "5":
        magnitude += 1
    return -magnitude if negative else magnitude


def scaled_int_to_decimal_string(value: int, scale: int) -> str:
    """
    Render a scaled integer with exactly ``scale`` fractional digits.

    >>> scaled_int_to_decimal_string(-5, 2)
    '-0.05'
    >>> scaled_int_to_decimal_string(1999, 0)
    '1999'
    """
    _check_scale(scale)
    if scale == 0:
        return str(value)
    sign = "-" if value < 0 else ""
    integer_part, fraction = divmod(abs(value), 10**scale)
    return f"{sign}{integer_part}.{str(fraction).zfill(scale)}"


def exact_ratio(value: Numeric) -> Tuple[int, int]:
    """
    Express a numeric factor as ``(numerator, 10 ** k)`` with no loss.

    ``k`` is the number of fractional digits the factor is written with, so
    ``1.25`` becomes ``(125, 100)`` and ``3`` becomes ``(3, 1)``. Multipliers,
    divisors, exchange rates and allocation weights all pass through here
    before touching a scaled amount.
    """
    if isinstance(value, int) and not isinstance(value, bool):
        return value, 1
    text = to_decimal_text(value)
    digits = fractional_digit_count(text)
    return decimal_to_scaled_int(text, digits), 10**digits
