from __future__ import annotations

# Standard library imports
import functools
import logging
from decimal import Decimal
from numbers import Number
from typing import (
    Any,
    Dict,
    Iterable,
    List,
    Optional,
    Sequence,
    Type,
    Union,
)

# Library we need to support custom serializations
from pydantic_core import core_schema

# Local application imports
from exact_money.currency import Currency, to_currency
from exact_money.error import (
    AllocationError,
    CurrencyMismatchError,
    InvalidAmountError,
    InvalidOperationError,
    MoneyError,
)
from exact_money.formatter import FormatOptions, format_money
from exact_money.rounding import (
    RoundingMode,
    resolve_mode,
    round_fraction,
    round_scaled,
)
from exact_money.scaled import (
    Numeric,
    decimal_to_scaled_int,
    exact_ratio,
    scaled_int_to_decimal_string,
)

logger = logging.getLogger(__name__)

# Extra fractional digits kept beyond the currency's own scale so that
# multiplication, division and conversion results are not rounded until a
# caller asks for it.
GUARD_DIGITS = 4

# Allocation weights are scaled by this factor (and rounded half up) to get
# integer weights.
ALLOCATION_PRECISION = 1000

CurrencyLike = Union[Currency, str]


class Money:
    """
    An exact amount of money in a single currency.

    The amount is held as an ``int`` counting units of
    ``10 ** -(currency.fractional_digits + GUARD_DIGITS)``; one US dollar is
    stored as ``1_000_000``. Addition, subtraction, negation, comparison,
    allocation and distribution are pure integer operations and never round.
    Multiplication, division and conversion normalise their factor into an
    exact ``numerator / 10 ** k`` pair first, so a factor like ``1.1`` never
    brings binary floating point error with it.

    Rounding to the currency's own scale happens only when asked for, through
    ``get_amount``/``divide`` with a ``RoundingMode`` or the process-wide
    default set with ``set_default_rounding_mode``.

    Every operation returns a new instance.

    Example:
        >>> price = Money.from_string("19.99", "USD")
        >>> total = price * 3
        >>> total.get_amount()
        '59.97'
        >>> [part.get_amount(RoundingMode.HALF_UP) for part in total.distribute(2)]
        ['29.99', '29.99']
    """

    __slots__ = ("_scaled_amount", "_currency")

    def __init__(self, scaled_amount: int, currency: CurrencyLike):
        if isinstance(scaled_amount, bool) or not isinstance(scaled_amount, int):
            raise InvalidAmountError(f"Scaled amount must be an integer: {scaled_amount!r}")
        self._scaled_amount = scaled_amount
        self._currency = to_currency(currency)

    @property
    def currency(self) -> Currency:
        return self._currency

    @property
    def currency_code(self) -> str:
        return self._currency.code

    @property
    def scaled_amount(self) -> int:
        return self._scaled_amount

    @property
    def scale(self) -> int:
        """Number of fractional digits the internal integer represents."""
        return self._currency.fractional_digits + GUARD_DIGITS

    # -- constructors -----------------------------------------------------

    @classmethod
    def from_decimal(cls, amount: Numeric, currency: CurrencyLike) -> Money:
        """
        Create Money from a major-unit amount (int, float, Decimal or str).

        Digits beyond the guarded precision are rounded half away from zero.

        Raises:
            InvalidAmountError: On NaN, infinity or a malformed string.
            InvalidCurrencyError: On an unknown currency code.
        """
        currency_obj = to_currency(currency)
        scaled = decimal_to_scaled_int(amount, currency_obj.fractional_digits + GUARD_DIGITS)
        return cls(scaled, currency_obj)

    @classmethod
    def from_float(cls, amount: Union[float, int], currency: CurrencyLike) -> Money:
        if isinstance(amount, bool) or not isinstance(amount, (float, int)):
            raise InvalidAmountError(f"Invalid amount: {amount!r}")
        return cls.from_decimal(amount, currency)

    @classmethod
    def from_string(cls, amount: str, currency: CurrencyLike) -> Money:
        if not isinstance(amount, str):
            raise InvalidAmountError(f"Invalid amount format: {amount!r}")
        return cls.from_decimal(amount, currency)

    @classmethod
    def from_minor_units(cls, amount: int, currency: CurrencyLike) -> Money:
        """
        Create Money from a count of the currency's smallest unit.

        >>> Money.from_minor_units(1099, "USD").get_amount()
        '10.99'
        """
        if isinstance(amount, bool) or not isinstance(amount, int):
            raise InvalidAmountError(f"Amount must be an integer: {amount!r}")
        return cls(amount * 10**GUARD_DIGITS, currency)

    @classmethod
    def from_scaled(cls, amount: int, currency: CurrencyLike) -> Money:
        """Create Money from a raw integer already at guarded precision."""
        return cls(amount, currency)

    @classmethod
    def zero(cls, currency: CurrencyLike) -> Money:
        return cls(0, currency)

    @classmethod
    def sum(cls, moneys: Iterable[Money], currency: CurrencyLike) -> Money:
        """
        Add up an iterable of Money in ``currency``; an empty iterable gives zero.

        Raises:
            CurrencyMismatchError: If any element is in another currency.
        """
        return functools.reduce(lambda acc, money: acc.add(money), moneys, cls.zero(currency))

    # -- arithmetic -------------------------------------------------------

    def _is_same_currency(self, other: Money) -> None:
        if not isinstance(other, Money):
            raise InvalidOperationError(f"Expected Money, got {type(other).__name__}")
        if not self._matches_currency(other):
            raise CurrencyMismatchError(
                f"Currency mismatch: {self.currency_code} and {other.currency_code}"
            )

    def _matches_currency(self, other: Money) -> bool:
        # a custom currency reusing a code at another scale is a different currency
        return (
            self._currency == other._currency
            and self._currency.fractional_digits == other._currency.fractional_digits
        )

    def _new(self, scaled_amount: int, currency: Optional[Currency] = None) -> Money:
        return self.__class__(scaled_amount, currency or self._currency)

    def add(self, other: Money) -> Money:
        self._is_same_currency(other)
        return self._new(self._scaled_amount + other._scaled_amount)

    def subtract(self, other: Money) -> Money:
        self._is_same_currency(other)
        return self._new(self._scaled_amount - other._scaled_amount)

    def multiply(self, factor: Numeric) -> Money:
        """
        Multiply by an int, float, Decimal or decimal string.

        The factor is taken at face value (``1.1`` is eleven tenths) and the
        product is truncated toward zero at guarded precision.

        Raises:
            InvalidAmountError: If the factor is NaN, infinite or malformed.
        """
        numerator, denominator = exact_ratio(factor)
        return self._new(
            round_fraction(self._scaled_amount * numerator, denominator, RoundingMode.DOWN)
        )

    def divide(
        self,
        divisor: Numeric,
        mode: Union[RoundingMode, str, None] = None,
    ) -> Money:
        """
        Divide by an int, float, Decimal or decimal string.

        Args:
            divisor: Non-zero, finite divisor.
            mode: How to round the quotient to the currency's own scale.
                Defaults to the process-wide default. With NONE the quotient
                keeps guarded precision (truncated there).

        Raises:
            InvalidAmountError: On a zero, NaN or infinite divisor.

        Example:
            >>> Money.from_decimal(10, "BHD").divide(7, RoundingMode.FLOOR).get_amount()
            '1.428'
        """
        numerator, denominator = exact_ratio(divisor)
        if numerator == 0:
            raise InvalidAmountError(f"Invalid divisor: {divisor!r}")
        resolved = resolve_mode(mode)
        dividend = self._scaled_amount * denominator
        if resolved is RoundingMode.NONE:
            return self._new(round_fraction(dividend, numerator, RoundingMode.DOWN))

        guard = 10**GUARD_DIGITS
        canonical = round_fraction(dividend, numerator * guard, resolved)
        return self._new(canonical * guard)

    def ratio_to(self, other: Money) -> float:
        """
        Return ``self / other`` as a float.

        Raises:
            CurrencyMismatchError: If the currencies differ.
            InvalidOperationError: If ``other`` is zero.
        """
        self._is_same_currency(other)
        if other._scaled_amount == 0:
            raise InvalidOperationError("Cannot compute a ratio to a zero amount")
        if self._scaled_amount == 0:
            return 0.0
        return self._scaled_amount / other._scaled_amount

    def absolute(self) -> Money:
        if self._scaled_amount < 0:
            return self.negative()
        return self

    def negative(self) -> Money:
        return self._new(-self._scaled_amount)

    def allocate(self, ratios: Sequence[Numeric]) -> List[Money]:
        """
        Split the amount proportionally to ``ratios`` without losing a unit.

        Each weight is scaled by ALLOCATION_PRECISION and rounded half up;
        every share is ``floor(amount * weight / total_weight)`` and the units
        left over are handed out one at a time from the first share onward.
        The shares always add back up to the original amount.

        Raises:
            AllocationError: If ``ratios`` is empty, holds a negative or
                non-numeric weight, or all weights are zero.

        Example:
            >>> m = Money.from_minor_units(100, "USD")
            >>> [s.get_amount() for s in m.allocate([1, 1, 1])]
            ['0.333334', '0.333333', '0.333333']
        """
        ratios = list(ratios)
        if not ratios:
            raise AllocationError("Cannot allocate to empty ratios")

        exact = []
        for ratio in ratios:
            try:
                exact.append(exact_ratio(ratio))
            except InvalidAmountError as e:
                raise AllocationError(f"Invalid allocation ratio: {ratio!r}") from e
        if any(numerator < 0 for numerator, _ in exact):
            raise AllocationError("Cannot allocate to negative ratios")
        if all(numerator == 0 for numerator, _ in exact):
            raise AllocationError("Cannot allocate to zero ratios")

        weights = [
            round_fraction(numerator * ALLOCATION_PRECISION, denominator, RoundingMode.HALF_UP)
            for numerator, denominator in exact
        ]
        total = sum(weights)
        if total == 0:
            raise AllocationError(
                f"Ratios are too small for allocation precision {ALLOCATION_PRECISION}"
            )

        shares = [self._scaled_amount * weight // total for weight in weights]
        remainder = self._scaled_amount - sum(shares)
        for i in range(remainder):
            shares[i] += 1
        return [self._new(share) for share in shares]

    def distribute(self, n: int) -> List[Money]:
        """
        Split the amount into ``n`` parts that differ by at most one unit.

        Raises:
            InvalidOperationError: If ``n`` is not a positive integer.
        """
        if isinstance(n, bool) or not isinstance(n, int) or n <= 0:
            raise InvalidOperationError(f"Invalid distribution count: {n!r}")
        part, remainder = divmod(self._scaled_amount, n)
        return [self._new(part + 1 if i < remainder else part) for i in range(n)]

    def convert(self, currency: CurrencyLike, rate: Numeric) -> Money:
        """
        Convert to ``currency`` at ``rate`` target units per source unit.

        The product is rescaled from this currency's guarded precision to the
        target's and truncated toward zero.

        Raises:
            InvalidAmountError: If the rate is not a positive finite number.
            InvalidCurrencyError: If ``currency`` is an unknown code.
        """
        target = to_currency(currency)
        try:
            numerator, denominator = exact_ratio(rate)
        except InvalidAmountError as e:
            raise InvalidAmountError(f"Invalid exchange rate: {rate!r}") from e
        if numerator <= 0:
            raise InvalidAmountError(f"Invalid exchange rate: {rate!r}")

        product = self._scaled_amount * numerator
        digits_diff = self._currency.fractional_digits - target.fractional_digits
        if digits_diff > 0:
            converted = round_fraction(product, denominator * 10**digits_diff, RoundingMode.DOWN)
        elif digits_diff < 0:
            converted = round_fraction(product * 10**-digits_diff, denominator, RoundingMode.DOWN)
        else:
            converted = round_fraction(product, denominator, RoundingMode.DOWN)

        logger.debug(
            "Converted %s %s to %s at rate %s",
            self.currency_code,
            self._guarded_string(),
            target.code,
            rate,
        )
        return self.__class__(converted, target)

    # -- comparison -------------------------------------------------------

    def equals(self, other: Money) -> bool:
        """Same currency and same amount; a different currency is simply unequal."""
        if not isinstance(other, Money) or not self._matches_currency(other):
            return False
        return self._scaled_amount == other._scaled_amount

    def less_than(self, other: Money) -> bool:
        self._is_same_currency(other)
        return self._scaled_amount < other._scaled_amount

    def less_than_or_equal(self, other: Money) -> bool:
        self._is_same_currency(other)
        return self._scaled_amount <= other._scaled_amount

    def greater_than(self, other: Money) -> bool:
        self._is_same_currency(other)
        return self._scaled_amount > other._scaled_amount

    def greater_than_or_equal(self, other: Money) -> bool:
        self._is_same_currency(other)
        return self._scaled_amount >= other._scaled_amount

    def is_zero(self) -> bool:
        return self._scaled_amount == 0

    def is_positive(self) -> bool:
        return self._scaled_amount > 0

    def is_negative(self) -> bool:
        return self._scaled_amount < 0

    # -- output -----------------------------------------------------------

    def _guarded_string(self) -> str:
        # full guarded precision, trailing zeros trimmed back to the currency's scale
        text = scaled_int_to_decimal_string(self._scaled_amount, self.scale)
        integer_part, _, fraction = text.partition(".")
        fraction = fraction.rstrip("0").ljust(self._currency.fractional_digits, "0")
        return f"{integer_part}.{fraction}" if fraction else integer_part

    def get_amount(self, mode: Union[RoundingMode, str, None] = None) -> str:
        """
        Return the amount in major units as a decimal string.

        Args:
            mode: Rounding to the currency's scale. Defaults to the
                process-wide default. NONE keeps every guarded digit that is
                not a trailing zero.

        Examples:
            >>> m = Money.from_string("1.98765", "USD")
            >>> m.get_amount(RoundingMode.HALF_UP)
            '1.99'
            >>> m.get_amount(RoundingMode.NONE)
            '1.98765'
        """
        resolved = resolve_mode(mode)
        if resolved is RoundingMode.NONE:
            return self._guarded_string()
        digits = self._currency.fractional_digits
        canonical = round_scaled(self._scaled_amount, self.scale, digits, resolved)
        return scaled_int_to_decimal_string(canonical, digits)

    def get_amount_in_minor_units(self) -> int:
        """
        Return the raw internal integer, including the guard digits.

        ``Money.from_minor_units(1099, "USD").get_amount_in_minor_units()`` is
        ``10990000``. Round with ``get_amount`` first when canonical minor
        units are needed.
        """
        return self._scaled_amount

    def to_decimal(self, mode: Union[RoundingMode, str, None] = None) -> Decimal:
        return Decimal(self.get_amount(mode))

    def format(self, options: Optional[FormatOptions] = None, **overrides: Any) -> str:
        """Render for display; see ``exact_money.formatter.format_money``."""
        return format_money(self, options, **overrides)

    def __repr__(self) -> str:
        return f"<Money {self.currency_code} {self._guarded_string()}>"

    def __str__(self) -> str:
        return f"{self._guarded_string()} {self.currency_code}"

    # -- operators --------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Money):
            return self.equals(other)
        return False

    def __hash__(self) -> int:
        return hash((self.currency_code, self._scaled_amount))

    def __lt__(self, other: Money) -> bool:
        return self.less_than(other)

    def __le__(self, other: Money) -> bool:
        return self.less_than_or_equal(other)

    def __gt__(self, other: Money) -> bool:
        return self.greater_than(other)

    def __ge__(self, other: Money) -> bool:
        return self.greater_than_or_equal(other)

    def __add__(self, other: Money) -> Money:
        return self.add(other)

    def __sub__(self, other: Money) -> Money:
        return self.subtract(other)

    def __neg__(self) -> Money:
        return self.negative()

    def __abs__(self) -> Money:
        return self.absolute()

    def __mul__(self, other: Union[int, float, Decimal]) -> Money:
        if not isinstance(other, Number):
            return NotImplemented
        return self.multiply(other)

    __rmul__ = __mul__

    def __truediv__(self, other: Union[int, float, Decimal]) -> Money:
        if not isinstance(other, Number):
            return NotImplemented
        return self.divide(other)

    # -- serialization ----------------------------------------------------

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: Any
    ) -> core_schema.CoreSchema:
        """
        The new (version > 2) way to support custom serialization and validation with Pydantic.
        https://docs.pydantic.dev/latest/concepts/types/#customizing-validation-with-__get_pydantic_core_schema__
        """
        return core_schema.with_info_plain_validator_function(
            cls._validate,
            serialization=core_schema.plain_serializer_function_ser_schema(
                cls.serialize
            ),
        )

    @classmethod
    def _validate(cls: Type[Any], value: Any, context: Any) -> Money:
        """
        Validator used by Pydantic when Money is a model field.

        Accepts a Money instance, a ``{"amount", "currency_code"}`` dict or an
        ``(amount, currency_code)`` tuple.
        """
        if isinstance(value, Money):
            return value
        if isinstance(value, tuple) and len(value) == 2:
            return cls.from_decimal(value[0], value[1])
        if isinstance(value, dict):
            return cls.deserialize(value)
        raise ValueError(f"Invalid value type: {type(value)}")

    @classmethod
    def deserialize(cls, data: Dict[str, Any]) -> Money:
        """
        Build Money from the dict produced by ``serialize``.

        Raises:
            MoneyError: If a field is missing.
        """
        try:
            amount = data["amount"]
            currency_code = data["currency_code"]
        except (KeyError, TypeError) as e:
            raise MoneyError(f"Unhandled data: {data!r}") from e
        return cls.from_decimal(amount, currency_code)

    def serialize(self) -> Dict[str, str]:
        """
        Convert to a dict; the amount keeps full guarded precision.
        """
        return {
            "amount": self._guarded_string(),
            "currency_code": self.currency_code,
        }
