"""
Numerical Safeguards: Money Rounding & Safe Math Primitives

Every monetary figure that leaves the valuation engine goes through this
module. The figures end up on customs filings, so rounding has to reproduce
the cent-level output the filings expect:

- Round half away from zero (101672.005 -> 101672.01, -0.125 -> -0.13)
- Binary representation error is corrected before rounding: the float is
  rounded from its shortest decimal representation, not from its exact
  binary value (101672.005 is stored as 101672.00499999999...)
- NaN/Inf are never rounded into plausible-looking amounts

Invariants:
1. Division by zero never happens (fallback is returned)
2. NaN/Inf pass through rounding unchanged and are caught by validation
3. Every operation is deterministic
"""

import math
from decimal import ROUND_HALF_UP, Decimal
from numbers import Real
from typing import Any, Final

# =============================================================================
# PRECISION
# =============================================================================

# Decimal places for monetary amounts (AUD and foreign currency)
MONEY_PLACES: Final[int] = 2

# Decimal places for dimensionless ratios (valuation factor, FOB / invoice total)
FACTOR_PLACES: Final[int] = 8


# =============================================================================
# NaN/Inf CHECKS
# =============================================================================


def is_valid_float(value: float) -> bool:
    """
    Check that a float is finite (not NaN, not Inf).

    Args:
        value: Value to check

    Returns:
        True if finite, False for NaN or Inf
    """
    return math.isfinite(value)


def is_valid_amount(value: Any) -> bool:
    """
    Check that a value can be used as a monetary amount.

    Accepts ints and floats (bool excluded, even though it is an int
    subclass) that are finite. Strings are rejected even when they look
    numeric: front-end payloads must send numbers.

    Examples:
        >>> is_valid_amount(10)
        True
        >>> is_valid_amount(float("nan"))
        False
        >>> is_valid_amount("10")
        False
        >>> is_valid_amount(True)
        False
    """
    if isinstance(value, bool) or not isinstance(value, Real):
        return False
    try:
        return is_valid_float(float(value))
    except OverflowError:
        # int beyond float range
        return False


# =============================================================================
# ROUNDING
# =============================================================================


def round_half_away(value: float, places: int) -> float:
    """
    Round to `places` decimals, halves away from zero.

    The float is converted through its shortest repr so that a value typed as
    101672.005 rounds as 101672.005 and not as the binary 101672.00499999...
    Non-finite values are returned unchanged.

    Args:
        value: Value to round
        places: Number of decimal places (>= 0)

    Returns:
        Rounded value as float

    Raises:
        ValueError: If places is negative

    Examples:
        >>> round_half_away(101672.005, 2)
        101672.01
        >>> round_half_away(1.005, 2)
        1.01
        >>> round_half_away(-2.5, 0)
        -3.0
        >>> round_half_away(0.1 + 0.2, 2)
        0.3
    """
    if places < 0:
        raise ValueError(f"places must be non-negative, got {places}")

    if not is_valid_float(value):
        return value

    quantum = Decimal(1).scaleb(-places)
    rounded = Decimal(repr(float(value))).quantize(quantum, rounding=ROUND_HALF_UP)

    # normalise -0.0
    return float(rounded) + 0.0


def round_money(value: float) -> float:
    """
    Round a monetary amount to 2 decimal places.

    Examples:
        >>> round_money(930.0)
        930.0
        >>> round_money(25.004999)
        25.0
    """
    return round_half_away(value, MONEY_PLACES)


# =============================================================================
# SAFE DIVISION
# =============================================================================


def safe_divide(numerator: float, denominator: float, fallback: float = 0.0) -> float:
    """
    Division guarded against zero denominators and NaN/Inf.

    Args:
        numerator: Numerator
        denominator: Denominator
        fallback: Returned for a zero denominator or a non-finite result

    Returns:
        numerator / denominator, or fallback

    Examples:
        >>> safe_divide(10.0, 4.0)
        2.5
        >>> safe_divide(10.0, 0.0)
        0.0
    """
    if not is_valid_float(denominator) or denominator == 0.0:
        return fallback

    result = numerator / denominator
    if not is_valid_float(result):
        return fallback
    return result


# =============================================================================
# VALIDATION
# =============================================================================


def validate_positive(value: float, name: str) -> None:
    """
    Check that a value is a positive number.

    Args:
        value: Value to check
        name: Parameter name for the error message

    Raises:
        ValueError: If value <= 0 or NaN/Inf
    """
    if not is_valid_amount(value):
        raise ValueError(f"{name} must be a valid number (not NaN/Inf), got {value!r}")

    if value <= 0:
        raise ValueError(f"{name} must be positive, got {value}")


def validate_non_negative(value: float, name: str) -> None:
    """
    Check that a value is a non-negative number.

    Raises:
        ValueError: If value < 0 or NaN/Inf
    """
    if not is_valid_amount(value):
        raise ValueError(f"{name} must be a valid number (not NaN/Inf), got {value!r}")

    if value < 0:
        raise ValueError(f"{name} must be non-negative, got {value}")
