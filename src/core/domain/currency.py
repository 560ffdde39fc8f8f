"""
Currency: conversion between invoice currencies and AUD

Rates are supplied by the caller as a mapping from currency code to
"units of that currency per 1 AUD" (AUD itself is always 1.0). Nothing here
fetches or hardcodes rates.

    amount_aud = amount / rate
    amount     = amount_aud * rate

Both directions round to 2 dp.
"""

from typing import Final, Mapping

from src.core.math.numerical_safeguards import round_money, validate_positive


# =============================================================================
# CONSTANTS
# =============================================================================

BASE_CURRENCY: Final[str] = "AUD"


# =============================================================================
# EXCEPTIONS
# =============================================================================


class UnknownCurrencyError(KeyError):
    """No rate was supplied for the requested currency."""

    def __init__(self, currency: str):
        super().__init__(currency)
        self.currency = currency

    def __str__(self) -> str:
        return f"No exchange rate supplied for currency {self.currency!r}"


# =============================================================================
# CONVERTERS
# =============================================================================


def normalize_currency(currency: str) -> str:
    """'usd ' -> 'USD'"""
    return currency.strip().upper()


def rate_for(currency: str, rates: Mapping[str, float]) -> float:
    """
    Rate for a currency (units per 1 AUD).

    Args:
        currency: ISO 4217 code, case-insensitive
        rates: Caller-supplied rate table

    Returns:
        Rate; 1.0 for AUD whether or not the table lists it

    Raises:
        UnknownCurrencyError: If the table has no entry for the currency
        ValueError: If the rate is not a positive number
    """
    code = normalize_currency(currency)
    if code == BASE_CURRENCY:
        return 1.0

    normalized = {normalize_currency(k): v for k, v in rates.items()}
    if code not in normalized:
        raise UnknownCurrencyError(code)

    rate = normalized[code]
    validate_positive(rate, f"exchange rate for {code}")
    return float(rate)


def to_aud(amount: float, currency: str, rates: Mapping[str, float]) -> float:
    """
    Convert a foreign-currency amount to AUD.

    Examples:
        >>> to_aud(656.20, "USD", {"USD": 0.6562})
        1000.0
    """
    return round_money(amount / rate_for(currency, rates))


def from_aud(amount_aud: float, currency: str, rates: Mapping[str, float]) -> float:
    """
    Convert an AUD amount back to the invoice currency.

    Examples:
        >>> from_aud(1000.0, "USD", {"USD": 0.6562})
        656.2
    """
    return round_money(amount_aud * rate_for(currency, rates))
