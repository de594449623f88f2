"""
Rounding policies for monetary amounts.

Two entry points share the same eight policies:

* ``round_fraction`` / ``round_scaled`` work on exact integers and are what
  ``Money`` uses internally. Ties are detected by integer comparison, never by
  looking at a float.
* ``round_decimal`` works on ``Decimal`` values through ``quantize`` inside a
  context wide enough for the value, for callers holding plain decimal amounts.
"""

from __future__ import annotations

# Standard library imports
import contextlib
import functools
import logging
import threading
from decimal import (
    ROUND_CEILING,
    ROUND_DOWN,
    ROUND_FLOOR,
    ROUND_HALF_DOWN,
    ROUND_HALF_EVEN,
    ROUND_HALF_UP,
    ROUND_UP,
    Decimal,
    InvalidOperation,
    localcontext,
)
from enum import Enum
from typing import Any, Callable, Iterator, Optional, TypeVar, Union, cast

# Local application imports
from exact_money.error import InvalidAmountError, InvalidOperationError
from exact_money.scaled import Numeric, to_decimal_text

logger = logging.getLogger(__name__)

# Decimal precision for every Decimal computation in the package. Wide enough
# for 18+ fractional digits on top of a large integer part.
DECIMAL_PRECISION = 64

# Absolute maximum number of decimal places supported by round_decimal
ABSOLUTE_MAX_DECIMAL_PLACES = 34

T = TypeVar("T", bound=Callable)


def decimal_context(fn: T) -> T:
    """
    Run the decorated function inside a local Decimal context set to
    DECIMAL_PRECISION, leaving the caller's context untouched.
    """

    @functools.wraps(fn)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        with localcontext() as ctx:
            ctx.prec = DECIMAL_PRECISION
            return fn(*args, **kwargs)

    return cast(T, wrapper)


class RoundingMode(Enum):
    """
    Rounding policies. Examples are for two decimal places.
    """

    # 1.984 -> 1.99, -1.984 -> -1.98
    CEILING = "CEILING"
    # 1.984 -> 1.98, -1.984 -> -1.99
    FLOOR = "FLOOR"
    # toward zero: 1.989 -> 1.98, -1.989 -> -1.98
    DOWN = "DOWN"
    # away from zero: 1.981 -> 1.99, -1.981 -> -1.99
    UP = "UP"
    # 1.985 -> 1.99, -1.985 -> -1.99
    HALF_UP = "HALF_UP"
    # 1.985 -> 1.98, 1.986 -> 1.99
    HALF_DOWN = "HALF_DOWN"
    # banker's rounding: 1.985 -> 1.98, 1.975 -> 1.98
    HALF_EVEN = "HALF_EVEN"
    # keep every digit
    NONE = "NONE"

    @classmethod
    def parse(cls, value: Union["RoundingMode", str]) -> "RoundingMode":
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls[value.strip().upper()]
            except KeyError:
                pass
        raise InvalidOperationError(f"Unknown rounding mode: {value!r}")

    @property
    def decimal_rounding(self) -> Optional[str]:
        """The matching ``decimal`` module constant, None for NONE."""
        return _DECIMAL_ROUNDING.get(self)


_DECIMAL_ROUNDING = {
    RoundingMode.CEILING: ROUND_CEILING,
    RoundingMode.FLOOR: ROUND_FLOOR,
    RoundingMode.DOWN: ROUND_DOWN,
    RoundingMode.UP: ROUND_UP,
    RoundingMode.HALF_UP: ROUND_HALF_UP,
    RoundingMode.HALF_DOWN: ROUND_HALF_DOWN,
    RoundingMode.HALF_EVEN: ROUND_HALF_EVEN,
}


# Process-wide default. Only operations called without an explicit mode read it.
_default_rounding_mode = RoundingMode.NONE
_default_lock = threading.Lock()


def get_default_rounding_mode() -> RoundingMode:
    return _default_rounding_mode


def set_default_rounding_mode(mode: Union[RoundingMode, str]) -> RoundingMode:
    """
    Replace the process-wide default rounding mode and return the previous one.

    The default starts as ``RoundingMode.NONE`` and is never reset
    automatically. Writes are serialized with a lock.
    """
    global _default_rounding_mode
    new_mode = RoundingMode.parse(mode)
    with _default_lock:
        previous = _default_rounding_mode
        _default_rounding_mode = new_mode
    logger.debug("Default rounding mode changed from %s to %s", previous.name, new_mode.name)
    return previous


@contextlib.contextmanager
def default_rounding_mode(mode: Union[RoundingMode, str]) -> Iterator[RoundingMode]:
    """
    Temporarily change the default rounding mode.

    Example:
        with default_rounding_mode(RoundingMode.HALF_EVEN):
            total.get_amount()  # rounded half-even
    """
    previous = set_default_rounding_mode(mode)
    try:
        yield get_default_rounding_mode()
    finally:
        set_default_rounding_mode(previous)


def resolve_mode(mode: Optional[Union[RoundingMode, str]]) -> RoundingMode:
    if mode is None:
        return get_default_rounding_mode()
    return RoundingMode.parse(mode)


def round_fraction(numerator: int, denominator: int, mode: RoundingMode) -> int:
    """
    Round the exact rational ``numerator / denominator`` to an integer.

    NONE truncates toward zero here since an integer has to come out.

    Raises:
        InvalidOperationError: If ``denominator`` is zero.
    """
    if denominator == 0:
        raise InvalidOperationError("Cannot round a fraction with a zero denominator")
    if denominator < 0:
        numerator, denominator = -numerator, -denominator

    quotient, remainder = divmod(numerator, denominator)  # floor quotient, remainder >= 0
    if remainder == 0:
        return quotient

    negative = numerator < 0
    if mode is RoundingMode.FLOOR:
        return quotient
    if mode is RoundingMode.CEILING:
        return quotient + 1
    if mode in (RoundingMode.DOWN, RoundingMode.NONE):
        return quotient + 1 if negative else quotient
    if mode is RoundingMode.UP:
        return quotient if negative else quotient + 1

    # nearest neighbour; compare twice the remainder against the denominator
    twice = 2 * remainder
    if twice < denominator:
        return quotient
    if twice > denominator:
        return quotient + 1
    if mode is RoundingMode.HALF_UP:
        return quotient if negative else quotient + 1
    if mode is RoundingMode.HALF_DOWN:
        return quotient + 1 if negative else quotient
    if mode is RoundingMode.HALF_EVEN:
        return quotient if quotient % 2 == 0 else quotient + 1
    raise InvalidOperationError(f"Unknown rounding mode: {mode!r}")


def round_scaled(value: int, from_scale: int, to_scale: int, mode: RoundingMode) -> int:
    """
    Reduce an integer scaled by ``10 ** from_scale`` to ``10 ** to_scale``.

    NONE returns ``value`` untouched, still at ``from_scale``. When the
    target scale is not smaller the value is re-scaled exactly.

    >>> round_scaled(19850, 4, 2, RoundingMode.HALF_EVEN)
    198
    """
    if mode is RoundingMode.NONE:
        return value
    if to_scale >= from_scale:
        return value * 10 ** (to_scale - from_scale)
    return round_fraction(value, 10 ** (from_scale - to_scale), mode)


@decimal_context
def round_decimal(
    value: Numeric,
    target_scale: int,
    mode: Union[RoundingMode, str, None] = None,
) -> Decimal:
    """
    Round a decimal amount to ``target_scale`` fractional digits.

    Args:
        value: A Decimal, float, int or decimal string.
        target_scale: Number of fractional digits to keep.
        mode: Rounding policy. Defaults to the process-wide default; NONE
            returns the value unchanged.

    Returns:
        Decimal: The rounded value.

    Raises:
        InvalidAmountError: If the value is NaN, infinite or malformed.
        InvalidOperationError: If ``target_scale`` is out of range.

    Examples:
        >>> round_decimal("1.985", 2, RoundingMode.HALF_EVEN)
        Decimal('1.98')
        >>> round_decimal(Decimal("-1.985"), 2, "FLOOR")
        Decimal('-1.99')
    """
    resolved = resolve_mode(mode)
    if target_scale < 0 or target_scale > ABSOLUTE_MAX_DECIMAL_PLACES:
        raise InvalidOperationError(
            f"target_scale must be between 0 and {ABSOLUTE_MAX_DECIMAL_PLACES}"
        )
    decimal_value = Decimal(to_decimal_text(value))
    if resolved is RoundingMode.NONE:
        return decimal_value

    try:
        with localcontext() as ctx:
            # quantize needs room for every integer digit plus the target scale
            ctx.prec = max(DECIMAL_PRECISION, decimal_value.adjusted() + target_scale + 2)
            return decimal_value.quantize(Decimal(1).scaleb(-target_scale), rounding=resolved.decimal_rounding)
    except InvalidOperation as e:
        raise InvalidAmountError(f"Invalid quantization operation: {e}") from e
