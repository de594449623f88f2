"""
exact_money: exact decimal money arithmetic with explicit rounding.

Shorthand factories:

    >>> from exact_money import money_from_float, money_from_minor_units, RoundingMode
    >>> money_from_float(10, "BHD").divide(7, RoundingMode.FLOOR).get_amount()
    '1.428'
    >>> money_from_minor_units(1099, "USD").get_amount()
    '10.99'
"""

# Standard library imports
import logging
from typing import Union

# Local application imports
from exact_money.currency import (
    ISO_CURRENCIES,
    Currency,
    CurrencyMetadata,
    custom_currency,
    get_currency_symbol,
    get_decimal_places,
    lookup,
    supported_currency_codes,
)
from exact_money.error import (
    AllocationError,
    BaseError,
    CurrencyMismatchError,
    InvalidAmountError,
    InvalidCurrencyError,
    InvalidOperationError,
    MoneyError,
)
from exact_money.exchange import CurrencyConverter, ExchangeRateProvider
from exact_money.formatter import (
    DefaultNumberFormatter,
    FormatOptions,
    NumberFormatter,
    format_accounting,
    format_financial,
    format_money,
    format_money_table,
)
from exact_money.money import ALLOCATION_PRECISION, GUARD_DIGITS, Money
from exact_money.rounding import (
    RoundingMode,
    default_rounding_mode,
    get_default_rounding_mode,
    round_decimal,
    set_default_rounding_mode,
)
from exact_money.scaled import decimal_to_scaled_int, scaled_int_to_decimal_string

logging.getLogger(__name__).addHandler(logging.NullHandler())

CurrencyLike = Union[Currency, str]


def money_from_float(amount: Union[int, float], currency: CurrencyLike) -> Money:
    """Money from a major-unit number, e.g. ``money_from_float(10.99, "USD")``."""
    return Money.from_float(amount, currency)


def money_from_string(amount: str, currency: CurrencyLike) -> Money:
    return Money.from_string(amount, currency)


def money_from_minor_units(amount: int, currency: CurrencyLike) -> Money:
    return Money.from_minor_units(amount, currency)


def money_from_scaled(amount: int, currency: CurrencyLike) -> Money:
    return Money.from_scaled(amount, currency)


def zero(currency: CurrencyLike) -> Money:
    return Money.zero(currency)


def get_currency(code: str) -> Currency:
    return Currency(code)


__all__ = [
    "ALLOCATION_PRECISION",
    "GUARD_DIGITS",
    "ISO_CURRENCIES",
    "AllocationError",
    "BaseError",
    "Currency",
    "CurrencyConverter",
    "CurrencyMetadata",
    "CurrencyMismatchError",
    "DefaultNumberFormatter",
    "ExchangeRateProvider",
    "FormatOptions",
    "InvalidAmountError",
    "InvalidCurrencyError",
    "InvalidOperationError",
    "Money",
    "MoneyError",
    "NumberFormatter",
    "RoundingMode",
    "custom_currency",
    "decimal_to_scaled_int",
    "default_rounding_mode",
    "format_accounting",
    "format_financial",
    "format_money",
    "format_money_table",
    "get_currency",
    "get_currency_symbol",
    "get_decimal_places",
    "get_default_rounding_mode",
    "lookup",
    "money_from_float",
    "money_from_minor_units",
    "money_from_scaled",
    "money_from_string",
    "round_decimal",
    "scaled_int_to_decimal_string",
    "set_default_rounding_mode",
    "supported_currency_codes",
    "zero",
]
