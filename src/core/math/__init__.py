"""
Core math modules

Money rounding and guarded arithmetic shared by every valuation formula.
"""

from src.core.math.numerical_safeguards import (
    # Precision
    FACTOR_PLACES,
    MONEY_PLACES,
    # NaN/Inf checks
    is_valid_amount,
    is_valid_float,
    # Rounding
    round_half_away,
    round_money,
    # Safe division
    safe_divide,
    # Validation
    validate_non_negative,
    validate_positive,
)

__all__ = [
    # Precision
    "FACTOR_PLACES",
    "MONEY_PLACES",
    # NaN/Inf checks
    "is_valid_amount",
    "is_valid_float",
    # Rounding
    "round_half_away",
    "round_money",
    # Safe division
    "safe_divide",
    # Validation
    "validate_non_negative",
    "validate_positive",
]
