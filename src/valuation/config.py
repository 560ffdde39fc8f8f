"""Valuation configuration."""

from dataclasses import dataclass
from typing import Final

from src.core.math.numerical_safeguards import FACTOR_PLACES, validate_non_negative

# Overseas insurance as a fraction of the invoice total (ITOT), when the
# declaration payload does not carry its own factor
DEFAULT_INSURANCE_FACTOR: Final[float] = 0.0025


@dataclass(frozen=True)
class ValuationConfig:
    """Customs valuation settings.

    Attributes:
        insurance_factor: default overseas insurance factor `k`
        factor_places: decimal places of the valuation factor (FOB / invoice total)
    """

    insurance_factor: float = DEFAULT_INSURANCE_FACTOR
    factor_places: int = FACTOR_PLACES

    def __post_init__(self):
        validate_non_negative(self.insurance_factor, "insurance_factor")
        if self.factor_places < 0:
            raise ValueError(f"factor_places must be non-negative, got {self.factor_places}")


DEFAULT_CONFIG = ValuationConfig()
