"""
A module for holding currency-related information.
"""

from __future__ import annotations

# Standard library imports
from typing import Any, Dict, List, NamedTuple, Union

# Local application imports
from exact_money.error import InvalidCurrencyError


class CurrencyMetadata(NamedTuple):
    name: str
    symbol: str
    fractional_digits: int


# ISO 4217 currencies with their canonical number of decimal places
ISO_CURRENCIES: Dict[str, CurrencyMetadata] = {
    "AED": CurrencyMetadata("UAE Dirham", "د.إ", 2),
    "AFN": CurrencyMetadata("Afghani", "؋", 2),
    "ALL": CurrencyMetadata("Lek", "L", 2),
    "AMD": CurrencyMetadata("Armenian Dram", "֏", 2),
    "ANG": CurrencyMetadata("Netherlands Antillean Guilder", "ƒ", 2),
    "AOA": CurrencyMetadata("Kwanza", "Kz", 2),
    "ARS": CurrencyMetadata("Argentine Peso", "$", 2),
    "AUD": CurrencyMetadata("Australian Dollar", "$", 2),
    "AWG": CurrencyMetadata("Aruban Florin", "ƒ", 2),
    "AZN": CurrencyMetadata("Azerbaijan Manat", "₼", 2),
    "BAM": CurrencyMetadata("Convertible Mark", "KM", 2),
    "BBD": CurrencyMetadata("Barbados Dollar", "$", 2),
    "BDT": CurrencyMetadata("Taka", "৳", 2),
    "BGN": CurrencyMetadata("Bulgarian Lev", "лв", 2),
    "BHD": CurrencyMetadata("Bahraini Dinar", ".د.ب", 3),
    "BIF": CurrencyMetadata("Burundi Franc", "FBu", 0),
    "BMD": CurrencyMetadata("Bermudian Dollar", "$", 2),
    "BND": CurrencyMetadata("Brunei Dollar", "$", 2),
    "BOB": CurrencyMetadata("Boliviano", "Bs.", 2),
    "BRL": CurrencyMetadata("Brazilian Real", "R$", 2),
    "BSD": CurrencyMetadata("Bahamian Dollar", "$", 2),
    "BTN": CurrencyMetadata("Ngultrum", "Nu.", 2),
    "BWP": CurrencyMetadata("Pula", "P", 2),
    "BYN": CurrencyMetadata("Belarusian Ruble", "Br", 2),
    "BZD": CurrencyMetadata("Belize Dollar", "$", 2),
    "CAD": CurrencyMetadata("Canadian Dollar", "$", 2),
    "CDF": CurrencyMetadata("Congolese Franc", "FC", 2),
    "CHF": CurrencyMetadata("Swiss Franc", "CHF", 2),
    "CLF": CurrencyMetadata("Unidad de Fomento", "UF", 4),
    "CLP": CurrencyMetadata("Chilean Peso", "$", 0),
    "CNY": CurrencyMetadata("Yuan Renminbi", "¥", 2),
    "COP": CurrencyMetadata("Colombian Peso", "$", 2),
    "CRC": CurrencyMetadata("Costa Rican Colon", "₡", 2),
    "CUP": CurrencyMetadata("Cuban Peso", "$", 2),
    "CVE": CurrencyMetadata("Cabo Verde Escudo", "$", 2),
    "CZK": CurrencyMetadata("Czech Koruna", "Kč", 2),
    "DJF": CurrencyMetadata("Djibouti Franc", "Fdj", 0),
    "DKK": CurrencyMetadata("Danish Krone", "kr", 2),
    "DOP": CurrencyMetadata("Dominican Peso", "RD$", 2),
    "DZD": CurrencyMetadata("Algerian Dinar", "د.ج", 2),
    "EGP": CurrencyMetadata("Egyptian Pound", "E£", 2),
    "ERN": CurrencyMetadata("Nakfa", "Nfk", 2),
    "ETB": CurrencyMetadata("Ethiopian Birr", "Br", 2),
    "EUR": CurrencyMetadata("Euro", "€", 2),
    "FJD": CurrencyMetadata("Fiji Dollar", "$", 2),
    "FKP": CurrencyMetadata("Falkland Islands Pound", "£", 2),
    "GBP": CurrencyMetadata("Pound Sterling", "£", 2),
    "GEL": CurrencyMetadata("Lari", "₾", 2),
    "GHS": CurrencyMetadata("Ghana Cedi", "₵", 2),
    "GIP": CurrencyMetadata("Gibraltar Pound", "£", 2),
    "GMD": CurrencyMetadata("Dalasi", "D", 2),
    "GNF": CurrencyMetadata("Guinean Franc", "FG", 0),
    "GTQ": CurrencyMetadata("Quetzal", "Q", 2),
    "GYD": CurrencyMetadata("Guyana Dollar", "$", 2),
    "HKD": CurrencyMetadata("Hong Kong Dollar", "$", 2),
    "HNL": CurrencyMetadata("Lempira", "L", 2),
    "HTG": CurrencyMetadata("Gourde", "G", 2),
    "HUF": CurrencyMetadata("Forint", "Ft", 2),
    "IDR": CurrencyMetadata("Rupiah", "Rp", 2),
    "ILS": CurrencyMetadata("New Israeli Sheqel", "₪", 2),
    "INR": CurrencyMetadata("Indian Rupee", "₹", 2),
    "IQD": CurrencyMetadata("Iraqi Dinar", "ع.د", 3),
    "IRR": CurrencyMetadata("Iranian Rial", "﷼", 2),
    "ISK": CurrencyMetadata("Iceland Krona", "kr", 0),
    "JMD": CurrencyMetadata("Jamaican Dollar", "$", 2),
    "JOD": CurrencyMetadata("Jordanian Dinar", "د.ا", 3),
    "JPY": CurrencyMetadata("Yen", "¥", 0),
    "KES": CurrencyMetadata("Kenyan Shilling", "KSh", 2),
    "KGS": CurrencyMetadata("Som", "с", 2),
    "KHR": CurrencyMetadata("Riel", "៛", 2),
    "KMF": CurrencyMetadata("Comorian Franc", "CF", 0),
    "KPW": CurrencyMetadata("North Korean Won", "₩", 2),
    "KRW": CurrencyMetadata("Won", "₩", 0),
    "KWD": CurrencyMetadata("Kuwaiti Dinar", "د.ك", 3),
    "KYD": CurrencyMetadata("Cayman Islands Dollar", "$", 2),
    "KZT": CurrencyMetadata("Tenge", "₸", 2),
    "LAK": CurrencyMetadata("Lao Kip", "₭", 2),
    "LBP": CurrencyMetadata("Lebanese Pound", "ل.ل", 2),
    "LKR": CurrencyMetadata("Sri Lanka Rupee", "Rs", 2),
    "LRD": CurrencyMetadata("Liberian Dollar", "$", 2),
    "LSL": CurrencyMetadata("Loti", "L", 2),
    "LYD": CurrencyMetadata("Libyan Dinar", "ل.د", 3),
    "MAD": CurrencyMetadata("Moroccan Dirham", "د.م.", 2),
    "MDL": CurrencyMetadata("Moldovan Leu", "L", 2),
    "MGA": CurrencyMetadata("Malagasy Ariary", "Ar", 2),
    "MKD": CurrencyMetadata("Denar", "ден", 2),
    "MMK": CurrencyMetadata("Kyat", "K", 2),
    "MNT": CurrencyMetadata("Tugrik", "₮", 2),
    "MOP": CurrencyMetadata("Pataca", "MOP$", 2),
    "MRU": CurrencyMetadata("Ouguiya", "UM", 2),
    "MUR": CurrencyMetadata("Mauritius Rupee", "₨", 2),
    "MVR": CurrencyMetadata("Rufiyaa", "Rf", 2),
    "MWK": CurrencyMetadata("Malawi Kwacha", "MK", 2),
    "MXN": CurrencyMetadata("Mexican Peso", "$", 2),
    "MYR": CurrencyMetadata("Malaysian Ringgit", "RM", 2),
    "MZN": CurrencyMetadata("Mozambique Metical", "MT", 2),
    "NAD": CurrencyMetadata("Namibia Dollar", "$", 2),
    "NGN": CurrencyMetadata("Naira", "₦", 2),
    "NIO": CurrencyMetadata("Cordoba Oro", "C$", 2),
    "NOK": CurrencyMetadata("Norwegian Krone", "kr", 2),
    "NPR": CurrencyMetadata("Nepalese Rupee", "Rs", 2),
    "NZD": CurrencyMetadata("New Zealand Dollar", "$", 2),
    "OMR": CurrencyMetadata("Rial Omani", "ر.ع.", 3),
    "PAB": CurrencyMetadata("Balboa", "B/.", 2),
    "PEN": CurrencyMetadata("Sol", "S/", 2),
    "PGK": CurrencyMetadata("Kina", "K", 2),
    "PHP": CurrencyMetadata("Philippine Peso", "₱", 2),
    "PKR": CurrencyMetadata("Pakistan Rupee", "₨", 2),
    "PLN": CurrencyMetadata("Zloty", "zł", 2),
    "PYG": CurrencyMetadata("Guarani", "₲", 0),
    "QAR": CurrencyMetadata("Qatari Rial", "ر.ق", 2),
    "RON": CurrencyMetadata("Romanian Leu", "lei", 2),
    "RSD": CurrencyMetadata("Serbian Dinar", "дин.", 2),
    "RUB": CurrencyMetadata("Russian Ruble", "₽", 2),
    "RWF": CurrencyMetadata("Rwanda Franc", "FRw", 0),
    "SAR": CurrencyMetadata("Saudi Riyal", "ر.س", 2),
    "SBD": CurrencyMetadata("Solomon Islands Dollar", "$", 2),
    "SCR": CurrencyMetadata("Seychelles Rupee", "₨", 2),
    "SDG": CurrencyMetadata("Sudanese Pound", "ج.س.", 2),
    "SEK": CurrencyMetadata("Swedish Krona", "kr", 2),
    "SGD": CurrencyMetadata("Singapore Dollar", "$", 2),
    "SHP": CurrencyMetadata("Saint Helena Pound", "£", 2),
    "SLE": CurrencyMetadata("Leone", "Le", 2),
    "SOS": CurrencyMetadata("Somali Shilling", "Sh", 2),
    "SRD": CurrencyMetadata("Surinam Dollar", "$", 2),
    "SSP": CurrencyMetadata("South Sudanese Pound", "£", 2),
    "STN": CurrencyMetadata("Dobra", "Db", 2),
    "SYP": CurrencyMetadata("Syrian Pound", "£", 2),
    "SZL": CurrencyMetadata("Lilangeni", "E", 2),
    "THB": CurrencyMetadata("Baht", "฿", 2),
    "TJS": CurrencyMetadata("Somoni", "SM", 2),
    "TMT": CurrencyMetadata("Turkmenistan New Manat", "m", 2),
    "TND": CurrencyMetadata("Tunisian Dinar", "د.ت", 3),
    "TOP": CurrencyMetadata("Pa'anga", "T$", 2),
    "TRY": CurrencyMetadata("Turkish Lira", "₺", 2),
    "TTD": CurrencyMetadata("Trinidad and Tobago Dollar", "$", 2),
    "TWD": CurrencyMetadata("New Taiwan Dollar", "NT$", 2),
    "TZS": CurrencyMetadata("Tanzanian Shilling", "TSh", 2),
    "UAH": CurrencyMetadata("Hryvnia", "₴", 2),
    "UGX": CurrencyMetadata("Uganda Shilling", "USh", 0),
    "USD": CurrencyMetadata("US Dollar", "$", 2),
    "UYU": CurrencyMetadata("Peso Uruguayo", "$U", 2),
    "UYW": CurrencyMetadata("Unidad Previsional", "UP", 4),
    "UZS": CurrencyMetadata("Uzbekistan Sum", "сўм", 2),
    "VES": CurrencyMetadata("Bolivar Soberano", "Bs.S", 2),
    "VND": CurrencyMetadata("Dong", "₫", 0),
    "VUV": CurrencyMetadata("Vatu", "VT", 0),
    "WST": CurrencyMetadata("Tala", "WS$", 2),
    "XAF": CurrencyMetadata("CFA Franc BEAC", "FCFA", 0),
    "XCD": CurrencyMetadata("East Caribbean Dollar", "$", 2),
    "XOF": CurrencyMetadata("CFA Franc BCEAO", "CFA", 0),
    "XPF": CurrencyMetadata("CFP Franc", "₣", 0),
    "YER": CurrencyMetadata("Yemeni Rial", "﷼", 2),
    "ZAR": CurrencyMetadata("Rand", "R", 2),
    "ZMW": CurrencyMetadata("Zambian Kwacha", "ZK", 2),
    "ZWL": CurrencyMetadata("Zimbabwe Dollar", "$", 2),
}


class Currency:
    """
    An immutable currency: code, display name, symbol and canonical scale.

    ``Currency("usd")`` looks the code up in ISO_CURRENCIES. Currencies that
    are not in the table (tokens, loyalty points, in-game credits) are made
    with ``Currency.from_metadata``. Both routes go through the same
    validation and end in the same state; equality and hashing use the code
    only.

    Example:
        >>> Currency("usd").fractional_digits
        2
        >>> Currency.from_metadata("pts", "Points", "P", 0).code
        'PTS'
    """

    __slots__ = ("_code", "_name", "_symbol", "_fractional_digits")

    def __init__(self, code: str):
        metadata = _lookup_metadata(code)
        self._set(code, metadata.name, metadata.symbol, metadata.fractional_digits)

    def _set(self, code: Any, name: Any, symbol: Any, fractional_digits: Any) -> None:
        if not isinstance(code, str) or not code.strip():
            raise InvalidCurrencyError("Currency code is required and must be a string")
        if not isinstance(name, str) or not name:
            raise InvalidCurrencyError("Currency name is required and must be a string")
        if not isinstance(symbol, str) or not symbol:
            raise InvalidCurrencyError("Currency symbol is required and must be a string")
        if (
            isinstance(fractional_digits, bool)
            or not isinstance(fractional_digits, int)
            or fractional_digits < 0
        ):
            raise InvalidCurrencyError("fractional_digits must be a non-negative integer")
        object.__setattr__(self, "_code", code.strip().upper())
        object.__setattr__(self, "_name", name)
        object.__setattr__(self, "_symbol", symbol)
        object.__setattr__(self, "_fractional_digits", fractional_digits)

    @classmethod
    def lookup(cls, code: str) -> Currency:
        return cls(code)

    @classmethod
    def from_metadata(
        cls,
        code: str,
        name: str,
        symbol: str,
        fractional_digits: int,
    ) -> Currency:
        """
        Create a currency from caller supplied metadata.

        The ISO table is not consulted, so any non-empty code is accepted.

        Raises:
            InvalidCurrencyError: If any field is empty, not a string, or
                ``fractional_digits`` is not a non-negative integer.
        """
        currency = cls.__new__(cls)
        currency._set(code, name, symbol, fractional_digits)
        return currency

    @property
    def code(self) -> str:
        return self._code

    @property
    def name(self) -> str:
        return self._name

    @property
    def symbol(self) -> str:
        return self._symbol

    @property
    def fractional_digits(self) -> int:
        return self._fractional_digits

    @property
    def decimal_factor(self) -> int:
        """Minor units per major unit, e.g. 100 for USD."""
        return 10**self._fractional_digits

    def __setattr__(self, key: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Currency):
            return self._code == other._code
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._code)

    def __repr__(self) -> str:
        return f"Currency({self._code!r})"

    def __str__(self) -> str:
        return self._code


def _lookup_metadata(code: Any) -> CurrencyMetadata:
    if not isinstance(code, str):
        raise InvalidCurrencyError(f"Invalid currency code: {code!r}")
    try:
        return ISO_CURRENCIES[code.strip().upper()]
    except KeyError:
        raise InvalidCurrencyError(f"Invalid currency code: {code}") from None


def lookup(code: str) -> Currency:
    """Return the ISO currency for ``code`` (case-insensitive)."""
    return Currency(code)


def custom_currency(code: str, name: str, symbol: str, fractional_digits: int) -> Currency:
    return Currency.from_metadata(code, name, symbol, fractional_digits)


def to_currency(currency: Union[Currency, str]) -> Currency:
    """Accept either a Currency or an ISO code."""
    if isinstance(currency, Currency):
        return currency
    return Currency(currency)


def get_decimal_places(currency_code: str) -> int:
    """Get the number of decimal places for a given currency."""
    return _lookup_metadata(currency_code).fractional_digits


def get_currency_symbol(currency_code: str) -> str:
    return _lookup_metadata(currency_code).symbol


def supported_currency_codes() -> List[str]:
    return list(ISO_CURRENCIES)
