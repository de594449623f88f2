"""
Display formatting for Money.

Digit grouping and decimal separators are delegated to a ``NumberFormatter``.
The bundled ``DefaultNumberFormatter`` covers a table of common locales;
applications that need full CLDR coverage can pass their own implementation
through ``FormatOptions.number_formatter``.
"""

from __future__ import annotations

# Standard library imports
import dataclasses
import re
from dataclasses import dataclass
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Dict, Optional, Protocol, Sequence, Tuple, Union

# Local application imports
from exact_money.currency import Currency
from exact_money.error import InvalidOperationError
from exact_money.rounding import RoundingMode
from exact_money.scaled import decimal_to_scaled_int, scaled_int_to_decimal_string

if TYPE_CHECKING:
    from exact_money.money import Money

DEFAULT_LOCALE = "en-US"

AMOUNT_PLACEHOLDER = "${amount}"

# locale -> (group separator, decimal separator)
LOCALE_SEPARATORS: Dict[str, Tuple[str, str]] = {
    "en": (",", "."),
    "en-US": (",", "."),
    "en-GB": (",", "."),
    "en-IN": (",", "."),
    "ja": (",", "."),
    "zh": (",", "."),
    "ko": (",", "."),
    "de": (".", ","),
    "de-CH": ("\u2019", "."),
    "es": (".", ","),
    "it": (".", ","),
    "nl": (".", ","),
    "pt": (".", ","),
    "pt-BR": (".", ","),
    "id": (".", ","),
    "tr": (".", ","),
    "fr": ("\u202f", ","),
    "fr-CH": ("\u202f", "."),
    "sv": ("\u00a0", ","),
    "nb": ("\u00a0", ","),
    "fi": ("\u00a0", ","),
    "pl": ("\u00a0", ","),
    "cs": ("\u00a0", ","),
    "ru": ("\u00a0", ","),
    "uk": ("\u00a0", ","),
}

_LEADING_SIGN = re.compile(r"^([^\d\-]+)-")


class NumberFormatter(Protocol):
    def format_number(
        self,
        value: Decimal,
        locale: str,
        decimal_places: int,
        use_grouping: bool,
    ) -> str:
        ...


class DefaultNumberFormatter:
    """
    Locale-aware decimal rendering from LOCALE_SEPARATORS.

    Unknown locales fall back to their language part, then to DEFAULT_LOCALE.
    Values are rounded half away from zero to ``decimal_places`` on the
    scaled integer, so there is no limit on the number of digits.
    """

    def separators(self, locale: str) -> Tuple[str, str]:
        tag = (locale or DEFAULT_LOCALE).replace("_", "-")
        for candidate in (tag, tag.split("-")[0], DEFAULT_LOCALE):
            if candidate in LOCALE_SEPARATORS:
                return LOCALE_SEPARATORS[candidate]
        return LOCALE_SEPARATORS[DEFAULT_LOCALE]

    def format_number(
        self,
        value: Decimal,
        locale: str,
        decimal_places: int,
        use_grouping: bool,
    ) -> str:
        scaled = decimal_to_scaled_int(value, decimal_places)
        text = scaled_int_to_decimal_string(scaled, decimal_places)
        sign = "-" if text.startswith("-") else ""
        integer_part, _, fraction = text.lstrip("-").partition(".")
        group, decimal_sep = self.separators(locale)
        if use_grouping:
            integer_part = f"{int(integer_part):,}".replace(",", group)
        return f"{sign}{integer_part}{decimal_sep}{fraction}" if fraction else f"{sign}{integer_part}"


DEFAULT_NUMBER_FORMATTER = DefaultNumberFormatter()


@dataclass(frozen=True)
class FormatOptions:
    symbol: bool = True
    code: bool = False
    locale: str = DEFAULT_LOCALE
    # None means the currency's own number of fractional digits
    decimal_places: Optional[int] = None
    use_grouping: bool = True
    rounding_mode: Optional[RoundingMode] = None
    show_positive_sign: bool = False
    # full currency name in place of the symbol
    show_currency_name: bool = False
    # templates with a literal ${amount} placeholder, e.g. "(${amount})"
    negative_format: Optional[str] = None
    positive_format: Optional[str] = None
    number_formatter: Optional[NumberFormatter] = None


def _resolve_options(options: Optional[FormatOptions], overrides: Dict[str, Any]) -> FormatOptions:
    resolved = options or FormatOptions()
    if overrides:
        resolved = dataclasses.replace(resolved, **overrides)
    if resolved.decimal_places is not None and (
        isinstance(resolved.decimal_places, bool)
        or not isinstance(resolved.decimal_places, int)
        or resolved.decimal_places < 0
    ):
        raise InvalidOperationError(
            f"decimal_places must be a non-negative integer, got {resolved.decimal_places!r}"
        )
    return resolved


def format_amount(currency: Currency, amount: Union[Decimal, str], options: FormatOptions) -> str:
    """
    Render a major-unit amount with the currency's symbol, code or name.
    """
    decimal_places = (
        currency.fractional_digits if options.decimal_places is None else options.decimal_places
    )
    formatter = options.number_formatter or DEFAULT_NUMBER_FORMATTER
    number = formatter.format_number(
        Decimal(amount), options.locale, decimal_places, options.use_grouping
    )

    result = ""
    if options.symbol and not options.show_currency_name:
        result += currency.symbol
    result += number
    if options.show_currency_name:
        result += f" {currency.name}"
    elif options.code:
        result += f" {currency.code}"
    return result


def _render(money: Money, options: FormatOptions) -> str:
    return format_amount(money.currency, money.get_amount(options.rounding_mode), options)


def format_money(money: Money, options: Optional[FormatOptions] = None, **overrides: Any) -> str:
    """
    Format Money for display.

    Args:
        money: The value to format.
        options: Base FormatOptions; keyword arguments override single fields.

    Examples:
        >>> m = Money.from_string("-1234.5", "USD")
        >>> format_money(m)
        '-$1,234.50'
        >>> format_money(m, negative_format="(${amount})")
        '($1,234.50)'
        >>> format_money(m.negative(), show_positive_sign=True, code=True, symbol=False)
        '+1,234.50 USD'
    """
    opts = _resolve_options(options, overrides)

    if money.is_negative():
        if opts.negative_format:
            return opts.negative_format.replace(AMOUNT_PLACEHOLDER, _render(money.absolute(), opts))
        # keep the minus sign ahead of a leading symbol
        return _LEADING_SIGN.sub(r"-\1", _render(money, opts), count=1)

    formatted = _render(money, opts)
    if not money.is_zero():
        if opts.show_positive_sign:
            formatted = "+" + formatted
        if opts.positive_format:
            formatted = opts.positive_format.replace(AMOUNT_PLACEHOLDER, formatted)
    return formatted


def format_accounting(money: Money, options: Optional[FormatOptions] = None, **overrides: Any) -> str:
    """Negative amounts in parentheses without a sign: ``($12.00)``."""
    opts = _resolve_options(options, overrides)
    if money.is_negative():
        return f"({_render(money.absolute(), opts)})"
    return _render(money, opts)


def format_financial(money: Money, options: Optional[FormatOptions] = None, **overrides: Any) -> str:
    """Always signed and grouped: ``+$1,200.00`` / ``-$1,200.00``."""
    opts = _resolve_options(options, overrides)
    return format_money(money, dataclasses.replace(opts, show_positive_sign=True, use_grouping=True))


def format_money_table(
    moneys: Sequence[Money],
    options: Optional[FormatOptions] = None,
    align: str = "left",
    **overrides: Any,
) -> str:
    """
    Format each value on its own line, space padded to a common width.

    ``align="left"`` pads on the right; ``align="right"`` pads on the left so
    the digits line up.
    """
    if align not in ("left", "right"):
        raise InvalidOperationError(f"align must be 'left' or 'right', got {align!r}")
    if not moneys:
        return ""
    opts = _resolve_options(options, overrides)
    rows = [format_money(money, opts) for money in moneys]
    width = max(len(row) for row in rows)
    if align == "right":
        return "\n".join(row.rjust(width) for row in rows)
    return "\n".join(row.ljust(width) for row in rows)
