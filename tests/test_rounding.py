# Standard library imports
import unittest
from decimal import Decimal

# Local application imports
from exact_money.error import InvalidAmountError, InvalidOperationError
from exact_money.rounding import (
    RoundingMode,
    default_rounding_mode,
    get_default_rounding_mode,
    round_decimal,
    round_fraction,
    round_scaled,
    set_default_rounding_mode,
)
from exact_money.scaled import decimal_to_scaled_int, scaled_int_to_decimal_string

ROUNDING_MODES = [mode for mode in RoundingMode if mode is not RoundingMode.NONE]


class TestRoundScaled(unittest.TestCase):
    # value at 3 places -> expected at 2 places
    CASES = {
        RoundingMode.CEILING: [(1984, 199), (-1984, -198), (1980, 198)],
        RoundingMode.FLOOR: [(1984, 198), (-1984, -199), (-1980, -198)],
        RoundingMode.DOWN: [(1989, 198), (-1989, -198)],
        RoundingMode.UP: [(1981, 199), (-1981, -199), (1990, 199)],
        RoundingMode.HALF_UP: [(1985, 199), (-1985, -199), (1984, 198), (-1984, -198)],
        RoundingMode.HALF_DOWN: [(1985, 198), (-1985, -198), (1986, 199), (-1986, -199)],
        RoundingMode.HALF_EVEN: [
            (1985, 198),
            (1975, 198),
            (1965, 196),
            (1955, 196),
            (-1985, -198),
            (-1975, -198),
            (1986, 199),
        ],
    }

    def test_modes(self):
        for mode, cases in self.CASES.items():
            for value, expected in cases:
                with self.subTest(mode=mode, value=value):
                    self.assertEqual(round_scaled(value, 3, 2, mode), expected)

    def test_none_is_identity(self):
        self.assertEqual(round_scaled(1985, 3, 2, RoundingMode.NONE), 1985)

    def test_idempotent(self):
        for mode in ROUNDING_MODES:
            for value in (1985, -1985, 1234567, -1, 0, 999):
                with self.subTest(mode=mode, value=value):
                    once = round_scaled(value, 3, 2, mode)
                    twice = round_scaled(once * 10, 3, 2, mode)
                    self.assertEqual(once, twice)

    def test_upscaling_is_exact(self):
        self.assertEqual(round_scaled(199, 2, 4, RoundingMode.HALF_UP), 19900)

    def test_ties_are_exact_at_high_precision(self):
        # 0.5 units at 18 extra digits must be seen as an exact tie
        tie = 10**18 // 2
        self.assertEqual(round_scaled(tie, 18, 0, RoundingMode.HALF_EVEN), 0)
        self.assertEqual(round_scaled(tie + 1, 18, 0, RoundingMode.HALF_EVEN), 1)
        self.assertEqual(round_scaled(3 * tie, 18, 0, RoundingMode.HALF_EVEN), 2)


class TestRoundFraction(unittest.TestCase):
    def test_zero_denominator(self):
        with self.assertRaises(InvalidOperationError):
            round_fraction(1, 0, RoundingMode.HALF_UP)

    def test_negative_denominator(self):
        self.assertEqual(round_fraction(7, -2, RoundingMode.FLOOR), -4)
        self.assertEqual(round_fraction(7, -2, RoundingMode.HALF_EVEN), -4)

    def test_none_truncates(self):
        self.assertEqual(round_fraction(-7, 2, RoundingMode.NONE), -3)
        self.assertEqual(round_fraction(7, 2, RoundingMode.NONE), 3)


class TestRoundDecimal(unittest.TestCase):
    def test_half_even_ties(self):
        self.assertEqual(round_decimal("1.985", 2, RoundingMode.HALF_EVEN), Decimal("1.98"))
        self.assertEqual(round_decimal("1.975", 2, RoundingMode.HALF_EVEN), Decimal("1.98"))
        self.assertEqual(round_decimal("1.965", 2, RoundingMode.HALF_EVEN), Decimal("1.96"))

    def test_float_input_has_no_false_ties(self):
        # binary 1.985 is slightly below 1.985; the decimal text is what counts
        self.assertEqual(round_decimal(1.985, 2, RoundingMode.HALF_UP), Decimal("1.99"))
        self.assertEqual(round_decimal(1.985, 2, RoundingMode.HALF_DOWN), Decimal("1.98"))

    def test_mode_by_name(self):
        self.assertEqual(round_decimal(Decimal("-1.985"), 2, "FLOOR"), Decimal("-1.99"))
        self.assertEqual(round_decimal(Decimal("-1.985"), 2, "ceiling"), Decimal("-1.98"))

    def test_none(self):
        self.assertEqual(round_decimal("1.98765", 2, RoundingMode.NONE), Decimal("1.98765"))

    def test_many_places(self):
        value = "123456789012.123456789012345678"
        self.assertEqual(round_decimal(value, 18, RoundingMode.HALF_UP), Decimal(value))
        self.assertEqual(
            round_decimal(value, 17, RoundingMode.HALF_UP), Decimal("123456789012.12345678901234568")
        )

    def test_beyond_default_precision(self):
        value = "9" * 70 + ".995"
        self.assertEqual(
            round_decimal(value, 2, RoundingMode.HALF_UP), Decimal("1" + "0" * 70 + ".00")
        )
        self.assertEqual(round_decimal(value, 2, RoundingMode.DOWN), Decimal("9" * 70 + ".99"))

    def test_invalid(self):
        with self.assertRaises(InvalidAmountError):
            round_decimal(float("nan"), 2, RoundingMode.HALF_UP)
        with self.assertRaises(InvalidAmountError):
            round_decimal(Decimal("Infinity"), 2, RoundingMode.HALF_UP)
        with self.assertRaises(InvalidOperationError):
            round_decimal("1.00", 35, RoundingMode.HALF_UP)

    def test_agrees_with_integer_rounding(self):
        for mode in ROUNDING_MODES:
            for text in ("1.0050", "-1.0050", "2.4999", "-2.5001", "0.0001", "7.1250", "7.1350"):
                with self.subTest(mode=mode, text=text):
                    scaled = round_scaled(decimal_to_scaled_int(text, 4), 4, 2, mode)
                    self.assertEqual(
                        round_decimal(text, 2, mode),
                        Decimal(scaled_int_to_decimal_string(scaled, 2)),
                    )


class TestDefaultRoundingMode(unittest.TestCase):
    def test_initial_default_is_none(self):
        self.assertIs(get_default_rounding_mode(), RoundingMode.NONE)

    def test_set_returns_previous(self):
        previous = set_default_rounding_mode(RoundingMode.HALF_EVEN)
        try:
            self.assertIs(previous, RoundingMode.NONE)
            self.assertIs(get_default_rounding_mode(), RoundingMode.HALF_EVEN)
            self.assertEqual(round_decimal("1.985", 2), Decimal("1.98"))
        finally:
            set_default_rounding_mode(previous)

    def test_context_manager_restores(self):
        with self.assertRaises(RuntimeError):
            with default_rounding_mode("floor") as mode:
                self.assertIs(mode, RoundingMode.FLOOR)
                raise RuntimeError("boom")
        self.assertIs(get_default_rounding_mode(), RoundingMode.NONE)

    def test_unknown_mode(self):
        with self.assertRaises(InvalidOperationError):
            set_default_rounding_mode("bankers")
        self.assertIs(RoundingMode.parse("half_even"), RoundingMode.HALF_EVEN)


if __name__ == "__main__":
    unittest.main()
