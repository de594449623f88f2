"""
Exchange rates and currency conversion.

``ExchangeRateProvider`` stores "1 unit of the base currency buys ``rate``
units of X" for a set of currencies and derives cross rates from it.
``CurrencyConverter`` applies those rates to Money.
"""

from __future__ import annotations

# Standard library imports
import logging
import math
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

# Local application imports
from exact_money.currency import Currency, to_currency
from exact_money.error import InvalidAmountError, InvalidCurrencyError, InvalidOperationError
from exact_money.money import Money

logger = logging.getLogger(__name__)

Rate = Union[int, float, Decimal]


def _normalize_code(code: Any) -> str:
    if isinstance(code, Currency):
        return code.code
    if not isinstance(code, str) or not code.strip():
        raise InvalidCurrencyError(f"Unknown currency: {code!r}")
    return code.strip().upper()


def _validate_rate(code: str, rate: Any) -> float:
    if isinstance(rate, bool) or not isinstance(rate, (int, float, Decimal)):
        raise InvalidAmountError(f"Invalid exchange rate for {code}: {rate!r}")
    if isinstance(rate, Decimal) and not rate.is_finite():
        raise InvalidAmountError(f"Invalid exchange rate for {code}: {rate!r}")
    try:
        value = float(rate)
    except (ValueError, OverflowError) as e:
        raise InvalidAmountError(f"Invalid exchange rate for {code}: {rate!r}") from e
    if not math.isfinite(value) or value <= 0:
        raise InvalidAmountError(f"Invalid exchange rate for {code}: {rate!r}")
    return value


class ExchangeRateProvider:
    """
    A table of exchange rates relative to one base currency.

    The base currency always has rate 1.0. Every stored rate is finite and
    strictly positive.

    Example:
        >>> provider = ExchangeRateProvider("USD", {"EUR": 0.85, "GBP": 0.75})
        >>> provider.get_rate("USD", "EUR")
        0.85
        >>> provider.get_rate("EUR", "USD")  # cross rate 1.0 / 0.85
        1.1764705882352942

    Rates may be changed in place with ``update_rate``/``update_rates``;
    ``with_base_currency`` returns a new provider and leaves this one alone.
    Writers shared between threads need external locking.
    """

    def __init__(
        self,
        base_currency: Union[str, Currency],
        rates: Mapping[str, Rate],
        timestamp: Optional[datetime] = None,
    ):
        self._base_currency = _normalize_code(base_currency)
        self._rates: Dict[str, float] = {}
        for code, rate in rates.items():
            normalized = _normalize_code(code)
            self._rates[normalized] = _validate_rate(normalized, rate)
        self._rates[self._base_currency] = 1.0
        self._timestamp = timestamp

    @classmethod
    def from_data(cls, data: Mapping[str, Any]) -> ExchangeRateProvider:
        """
        Build a provider from ``{"base_currency": ..., "rates": {...}, "timestamp": ...}``.

        ``baseCurrency`` is accepted as an alias for ``base_currency``.

        Raises:
            InvalidCurrencyError: If the base currency is missing.
            InvalidAmountError: If rates are missing or any rate is invalid.
        """
        base = data.get("base_currency", data.get("baseCurrency"))
        if base is None:
            raise InvalidCurrencyError("Exchange rate data has no base currency")
        rates = data.get("rates")
        if not isinstance(rates, Mapping):
            raise InvalidAmountError("Exchange rate data has no rates mapping")
        return cls(base, rates, data.get("timestamp"))

    @property
    def base_currency(self) -> str:
        return self._base_currency

    @property
    def timestamp(self) -> Optional[datetime]:
        return self._timestamp

    @property
    def rates(self) -> Dict[str, float]:
        """A copy of the rate table."""
        return dict(self._rates)

    def get_rate(self, from_currency: Union[str, Currency], to_currency: Union[str, Currency]) -> float:
        """
        Return how many units of ``to_currency`` one unit of ``from_currency`` buys.

        Raises:
            InvalidCurrencyError: If either currency is not in the table.
        """
        from_code = _normalize_code(from_currency)
        to_code = _normalize_code(to_currency)
        if from_code not in self._rates:
            raise InvalidCurrencyError(f"Unknown currency: {from_currency}")
        if to_code not in self._rates:
            raise InvalidCurrencyError(f"Unknown currency: {to_currency}")
        return self._rates[to_code] / self._rates[from_code]

    def supports_currency(self, currency: Union[str, Currency]) -> bool:
        try:
            return _normalize_code(currency) in self._rates
        except InvalidCurrencyError:
            return False

    def supported_currencies(self) -> List[str]:
        return list(self._rates)

    def update_rate(self, currency: Union[str, Currency], rate: Rate) -> None:
        self.update_rates({_normalize_code(currency): rate})

    def update_rates(self, rates: Mapping[str, Rate]) -> None:
        """
        Set several rates at once. Nothing is changed unless every rate is valid.

        Raises:
            InvalidAmountError: If any rate is NaN, infinite, zero or negative.
            InvalidOperationError: If the base currency's rate would change
                from 1.0.
        """
        validated: Dict[str, float] = {}
        for code, rate in rates.items():
            normalized = _normalize_code(code)
            value = _validate_rate(normalized, rate)
            if normalized == self._base_currency and value != 1.0:
                raise InvalidOperationError(
                    f"The base currency {self._base_currency} always has rate 1.0; "
                    "use with_base_currency to rebase"
                )
            validated[normalized] = value
        self._rates.update(validated)
        logger.debug("Updated %d exchange rate(s) against %s", len(validated), self._base_currency)

    def with_base_currency(self, currency: Union[str, Currency]) -> ExchangeRateProvider:
        """
        Return a new provider with every rate expressed against ``currency``.

        Raises:
            InvalidCurrencyError: If ``currency`` is not in the table.
        """
        code = _normalize_code(currency)
        if code not in self._rates:
            raise InvalidCurrencyError(f"Unknown currency: {currency}")
        base_rate = self._rates[code]
        rebased = {other: rate / base_rate for other, rate in self._rates.items() if other != code}
        logger.debug("Rebased exchange rates from %s to %s", self._base_currency, code)
        return self.__class__(code, rebased, self._timestamp)

    def __repr__(self) -> str:
        return f"ExchangeRateProvider(base_currency={self._base_currency!r}, currencies={len(self._rates)})"


class CurrencyConverter:
    """
    Converts Money between currencies using an ExchangeRateProvider.

    Example:
        >>> converter = CurrencyConverter(ExchangeRateProvider("USD", {"EUR": 0.85}))
        >>> converter.convert(Money.from_string("100", "USD"), "EUR").get_amount()
        '85.00'
    """

    def __init__(self, provider: ExchangeRateProvider):
        self._provider = provider

    @property
    def provider(self) -> ExchangeRateProvider:
        return self._provider

    @provider.setter
    def provider(self, provider: ExchangeRateProvider) -> None:
        self._provider = provider

    def convert(self, money: Money, target_currency: Union[str, Currency]) -> Money:
        """
        Convert ``money`` into ``target_currency``.

        Money already in the target currency is returned as is, without
        looking at the rate table.

        Raises:
            InvalidCurrencyError: If either currency is unknown or not in the
                provider's table.
        """
        if _normalize_code(target_currency) == money.currency_code:
            return money
        target = to_currency(target_currency)
        if not self._provider.supports_currency(money.currency_code):
            raise InvalidCurrencyError(f"Source currency not supported: {money.currency_code}")
        if not self._provider.supports_currency(target.code):
            raise InvalidCurrencyError(f"Target currency not supported: {target.code}")
        rate = self._provider.get_rate(money.currency_code, target.code)
        return money.convert(target, rate)

    def convert_to_multiple(
        self,
        money: Money,
        target_currencies: Iterable[Union[str, Currency]],
    ) -> Dict[str, Money]:
        """Convert into each target; keys are codes, in input order."""
        result: Dict[str, Money] = {}
        for target in target_currencies:
            converted = self.convert(money, target)
            result[converted.currency_code] = converted
        return result

    def convert_to_all_supported(self, money: Money) -> Dict[str, Money]:
        return self.convert_to_multiple(money, self._provider.supported_currencies())
