"""
Domain models and value objects.

Contains the valuation vocabulary (Incoterm, ValuationElement, ValuationRule),
the invoice and result models, the declaration payload and currency conversion.
"""

from src.core.domain.currency import (
    BASE_CURRENCY,
    UnknownCurrencyError,
    from_aud,
    normalize_currency,
    rate_for,
    to_aud,
)
from src.core.domain.declaration import (
    EXTERNAL_ELEMENT_CODES,
    AllocationMethod,
    DeclarationLine,
    DeclarationPayload,
    ExternalValuation,
)
from src.core.domain.incoterms import (
    ELEMENT_LABELS,
    Incoterm,
    ValuationElement,
    ValuationRule,
)
from src.core.domain.invoice import (
    FobCifResult,
    Invoice,
    ValidationResult,
    Violation,
    ViolationKind,
)

__all__ = [
    # Vocabulary
    "Incoterm",
    "ValuationElement",
    "ValuationRule",
    "ELEMENT_LABELS",
    # Invoice & results
    "Invoice",
    "ValidationResult",
    "Violation",
    "ViolationKind",
    "FobCifResult",
    # Declaration payload
    "AllocationMethod",
    "DeclarationLine",
    "DeclarationPayload",
    "ExternalValuation",
    "EXTERNAL_ELEMENT_CODES",
    # Currency
    "BASE_CURRENCY",
    "UnknownCurrencyError",
    "normalize_currency",
    "rate_for",
    "to_aud",
    "from_aud",
]
