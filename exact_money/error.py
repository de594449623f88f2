"""
A module for holding error classes.
"""


class BaseError(Exception):
    def __init__(self, message: str, error_key: str):
        self.message = message
        self.error_key = error_key
        super().__init__(self.message)


class MoneyError(BaseError):
    """
    Root of every error raised by exact_money.

    Each subclass is a distinct kind with its own default ``error_key`` so
    callers can branch on either the class or the key.
    """

    INVALID_AMOUNT = "INVALID_AMOUNT"
    INVALID_CURRENCY = "INVALID_CURRENCY"
    CURRENCY_MISMATCH = "CURRENCY_MISMATCH"
    INVALID_OPERATION = "INVALID_OPERATION"
    ALLOCATION = "ALLOCATION"

    default_key = "MONEY_ERROR"

    def __init__(self, message: str, error_key: str = ""):
        super().__init__(message, error_key or self.default_key)


class InvalidAmountError(MoneyError):
    # malformed or non-finite numbers, bad multipliers/divisors/rates
    default_key = MoneyError.INVALID_AMOUNT


class InvalidCurrencyError(MoneyError):
    # unknown code or malformed custom metadata
    default_key = MoneyError.INVALID_CURRENCY


class CurrencyMismatchError(MoneyError):
    default_key = MoneyError.CURRENCY_MISMATCH


class InvalidOperationError(MoneyError):
    default_key = MoneyError.INVALID_OPERATION


class AllocationError(MoneyError):
    default_key = MoneyError.ALLOCATION
