# Standard library imports
import unittest

# Local application imports
from exact_money.currency import (
    ISO_CURRENCIES,
    Currency,
    custom_currency,
    get_currency_symbol,
    get_decimal_places,
    lookup,
    supported_currency_codes,
)
from exact_money.error import InvalidCurrencyError, MoneyError


class TestCurrencyTable(unittest.TestCase):
    def test_get_decimal_places(self):
        self.assertEqual(get_decimal_places("USD"), 2)
        self.assertEqual(get_decimal_places("eur"), 2)
        self.assertEqual(get_decimal_places("JPY"), 0)
        self.assertEqual(get_decimal_places("BHD"), 3)
        self.assertEqual(get_decimal_places("CLF"), 4)

    def test_get_currency_symbol(self):
        self.assertEqual(get_currency_symbol("USD"), "$")
        self.assertEqual(get_currency_symbol("EUR"), "€")
        self.assertEqual(get_currency_symbol("GBP"), "£")

    def test_unknown_code(self):
        with self.assertRaises(InvalidCurrencyError):
            get_decimal_places("XYZ")

    def test_supported_codes(self):
        codes = supported_currency_codes()
        self.assertIn("USD", codes)
        self.assertEqual(len(codes), len(ISO_CURRENCIES))
        for code, metadata in ISO_CURRENCIES.items():
            with self.subTest(code=code):
                self.assertEqual(len(code), 3)
                self.assertGreaterEqual(metadata.fractional_digits, 0)


class TestCurrency(unittest.TestCase):
    def test_lookup(self):
        usd = Currency("usd")
        self.assertEqual(usd.code, "USD")
        self.assertEqual(usd.name, "US Dollar")
        self.assertEqual(usd.symbol, "$")
        self.assertEqual(usd.fractional_digits, 2)
        self.assertEqual(usd.decimal_factor, 100)
        self.assertEqual(lookup("jpy").fractional_digits, 0)
        self.assertEqual(Currency.lookup("BHD").decimal_factor, 1000)

    def test_lookup_failures(self):
        for bad in ["XYZ", "", "US", 123, None]:
            with self.subTest(code=bad):
                with self.assertRaises(InvalidCurrencyError):
                    Currency(bad)

    def test_error_key(self):
        with self.assertRaises(MoneyError) as ctx:
            Currency("nope")
        self.assertEqual(ctx.exception.error_key, MoneyError.INVALID_CURRENCY)

    def test_from_metadata(self):
        btc = Currency.from_metadata("btc", "Bitcoin", "₿", 8)
        self.assertEqual(btc.code, "BTC")
        self.assertEqual(btc.name, "Bitcoin")
        self.assertEqual(btc.fractional_digits, 8)
        points = custom_currency("LOYALTY", "Loyalty Points", "P", 0)
        self.assertEqual(points.code, "LOYALTY")

    def test_from_metadata_validation(self):
        invalid = [
            ("", "Name", "S", 2),
            ("ABC", "", "S", 2),
            ("ABC", "Name", "", 2),
            ("ABC", "Name", "S", -1),
            ("ABC", "Name", "S", 1.5),
            ("ABC", "Name", "S", True),
            (None, "Name", "S", 2),
            ("ABC", 5, "S", 2),
        ]
        for args in invalid:
            with self.subTest(args=args):
                with self.assertRaises(InvalidCurrencyError):
                    Currency.from_metadata(*args)

    def test_equality_is_by_code(self):
        self.assertEqual(Currency("USD"), Currency("usd"))
        custom = Currency.from_metadata("usd", "Other Dollar", "D", 5)
        self.assertEqual(Currency("USD"), custom)
        self.assertEqual(hash(Currency("USD")), hash(custom))
        self.assertNotEqual(Currency("USD"), Currency("EUR"))
        self.assertNotEqual(Currency("USD"), "USD")

    def test_immutable(self):
        usd = Currency("USD")
        with self.assertRaises(AttributeError):
            usd.code = "EUR"
        with self.assertRaises(AttributeError):
            usd.fractional_digits = 3

    def test_repr(self):
        self.assertEqual(repr(Currency("USD")), "Currency('USD')")
        self.assertEqual(str(Currency("USD")), "USD")


if __name__ == "__main__":
    unittest.main()
