"""Tests for currency conversion to and from AUD"""

import pytest

from src.core.domain.currency import (
    BASE_CURRENCY,
    UnknownCurrencyError,
    from_aud,
    normalize_currency,
    rate_for,
    to_aud,
)

RATES = {"USD": 0.6562, "eur": 0.6051}


def test_base_currency_is_aud():
    assert BASE_CURRENCY == "AUD"
    assert rate_for("AUD", {}) == 1.0
    assert rate_for("aud", {"AUD": 2.0}) == 1.0


def test_normalize_currency():
    assert normalize_currency(" usd ") == "USD"


def test_rate_lookup_is_case_insensitive():
    assert rate_for("usd", RATES) == 0.6562
    assert rate_for("EUR", RATES) == 0.6051


def test_to_aud():
    assert to_aud(656.20, "USD", RATES) == 1000.0
    assert to_aud(1000.0, "AUD", RATES) == 1000.0


def test_from_aud():
    assert from_aud(1000.0, "USD", RATES) == 656.2
    assert from_aud(100.0, "EUR", RATES) == 60.51


def test_unknown_currency():
    with pytest.raises(UnknownCurrencyError) as exc_info:
        to_aud(10.0, "jpy", RATES)

    assert exc_info.value.currency == "JPY"
    assert isinstance(exc_info.value, KeyError)
    assert "JPY" in str(exc_info.value)


@pytest.mark.parametrize("rate", [0.0, -1.5, float("nan")])
def test_non_positive_rate_rejected(rate):
    with pytest.raises(ValueError):
        rate_for("USD", {"USD": rate})
