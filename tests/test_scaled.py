# Standard library imports
import unittest
from decimal import Decimal

# Local application imports
from exact_money.error import InvalidAmountError, InvalidOperationError
from exact_money.scaled import (
    decimal_to_scaled_int,
    exact_ratio,
    scaled_int_to_decimal_string,
)


class TestDecimalToScaledInt(unittest.TestCase):
    def test_strings(self):
        self.assertEqual(decimal_to_scaled_int("10.99", 2), 1099)
        self.assertEqual(decimal_to_scaled_int("10.9", 2), 1090)
        self.assertEqual(decimal_to_scaled_int("10", 2), 1000)
        self.assertEqual(decimal_to_scaled_int("0", 0), 0)
        self.assertEqual(decimal_to_scaled_int("-0.05", 2), -5)

    def test_excess_digits_round_half_away_from_zero(self):
        self.assertEqual(decimal_to_scaled_int("10.999", 2), 1100)
        self.assertEqual(decimal_to_scaled_int("1.004", 2), 100)
        self.assertEqual(decimal_to_scaled_int("1.005", 2), 101)
        self.assertEqual(decimal_to_scaled_int("-1.005", 2), -101)
        self.assertEqual(decimal_to_scaled_int("-1.0049", 2), -100)

    def test_floats_use_their_shortest_repr(self):
        self.assertEqual(decimal_to_scaled_int(0.1, 6), 100000)
        self.assertEqual(decimal_to_scaled_int(1.005, 2), 101)
        self.assertEqual(decimal_to_scaled_int(0.1 + 0.2, 6), 300000)
        self.assertEqual(decimal_to_scaled_int(1e-7, 7), 1)
        self.assertEqual(decimal_to_scaled_int(1.5e20, 0), 150000000000000000000)

    def test_ints_and_decimals(self):
        self.assertEqual(decimal_to_scaled_int(5, 3), 5000)
        self.assertEqual(decimal_to_scaled_int(-5, 0), -5)
        self.assertEqual(decimal_to_scaled_int(Decimal("1E+2"), 0), 100)
        self.assertEqual(decimal_to_scaled_int(Decimal("-2.50"), 4), -25000)

    def test_invalid_input(self):
        for bad in ["abc", "1.", ".5", "1e5", "+1", " 1", "1\n", "1,000.00", "", "--1"]:
            with self.subTest(value=bad):
                with self.assertRaises(InvalidAmountError):
                    decimal_to_scaled_int(bad, 2)
        for bad in [float("nan"), float("inf"), float("-inf"), Decimal("NaN"), Decimal("Infinity"), True, None]:
            with self.subTest(value=bad):
                with self.assertRaises(InvalidAmountError):
                    decimal_to_scaled_int(bad, 2)

    def test_negative_scale(self):
        with self.assertRaises(InvalidOperationError):
            decimal_to_scaled_int("1", -1)


class TestScaledIntToDecimalString(unittest.TestCase):
    def test_rendering(self):
        self.assertEqual(scaled_int_to_decimal_string(-5, 2), "-0.05")
        self.assertEqual(scaled_int_to_decimal_string(1999, 0), "1999")
        self.assertEqual(scaled_int_to_decimal_string(123000, 3), "123.000")
        self.assertEqual(scaled_int_to_decimal_string(0, 2), "0.00")
        self.assertEqual(scaled_int_to_decimal_string(-123456, 4), "-12.3456")

    def test_round_trip(self):
        for text in ["0.5", "-12.34", "1000", "0.001", "-0.0001", "987654321.123456789"]:
            for scale in (4, 9, 18):
                with self.subTest(text=text, scale=scale):
                    if len(text.partition(".")[2]) > scale:
                        continue
                    rendered = scaled_int_to_decimal_string(decimal_to_scaled_int(text, scale), scale)
                    self.assertEqual(Decimal(rendered), Decimal(text))
                    self.assertEqual(len(rendered.partition(".")[2]), scale)


class TestExactRatio(unittest.TestCase):
    def test_ratio(self):
        self.assertEqual(exact_ratio(3), (3, 1))
        self.assertEqual(exact_ratio(1.25), (125, 100))
        self.assertEqual(exact_ratio("0.10"), (10, 100))
        self.assertEqual(exact_ratio(Decimal("-2.5")), (-25, 10))
        self.assertEqual(exact_ratio(1e-7), (1, 10**7))
        self.assertEqual(exact_ratio(1.1), (11, 10))

    def test_invalid(self):
        with self.assertRaises(InvalidAmountError):
            exact_ratio(float("nan"))
        with self.assertRaises(InvalidAmountError):
            exact_ratio(False)


if __name__ == "__main__":
    unittest.main()
