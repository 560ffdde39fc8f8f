"""
Invoice: valuation input and results

Immutable Pydantic models for one valuation request:
- Invoice: Incoterm + goods value (AUD) + valuation elements present on the invoice
- ValidationResult: outcome of checking an invoice against the rule matrix
- FobCifResult: derived FOB / CIF pair

An element absent from `Invoice.elements` means "not on this invoice", which
is not the same thing as an element explicitly entered as 0.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

from src.core.domain.incoterms import Incoterm, ValuationElement


# =============================================================================
# INVOICE
# =============================================================================


class Invoice(BaseModel):
    """
    Valuation input for a single commercial invoice.

    Amounts are AUD; the caller converts foreign-currency figures before
    building the invoice (see src.core.domain.currency).
    """

    incoterm: Incoterm = Field(..., description="Incoterm printed on the invoice")
    goods_value_aud: float = Field(
        ...,
        alias="goodsValueAUD",
        description="Invoice price of goods in AUD, excluding valuation elements",
    )
    elements: Dict[ValuationElement, float] = Field(
        default_factory=dict,
        description="Valuation elements present on the invoice (AUD)",
    )

    model_config = {"frozen": True, "populate_by_name": True}

    def amount(self, element: ValuationElement) -> float:
        """Amount of an element, 0.0 when the element is not on the invoice."""
        return self.elements.get(element, 0.0)

    def has(self, element: ValuationElement) -> bool:
        return element in self.elements

    def with_incoterm(self, incoterm: Incoterm) -> "Invoice":
        """
        New invoice under a different Incoterm.

        Valuation elements are dropped: the mandatory/forbidden sets differ
        between terms, so elements entered for the old term cannot carry over.
        """
        return Invoice(incoterm=incoterm, goods_value_aud=self.goods_value_aud)


# =============================================================================
# VALIDATION RESULT
# =============================================================================


class ViolationKind(str, Enum):
    """Violation class.

    RULE: forbidden element present or mandatory element missing
    TYPE: missing, non-numeric or non-finite value, unknown code
    """

    RULE = "RULE"
    TYPE = "TYPE"


class Violation(BaseModel):
    """One problem found while validating an invoice or a declaration payload."""

    kind: ViolationKind = Field(..., description="Violation class")
    message: str = Field(..., min_length=1, description="Human-readable description")
    element: Optional[str] = Field(None, description="Element code or field the violation refers to")

    model_config = {"frozen": True}


class ValidationResult(BaseModel):
    """
    Outcome of `validate` / `process`.

    `customs_value_aud` is present only on a valid result; a failed result
    carries the violations and nothing computed.
    """

    valid: bool = Field(..., description="True when no violation was found")
    errors: List[str] = Field(default_factory=list, description="Violation messages, in detection order")
    violations: List[Violation] = Field(default_factory=list, description="Structured violations")
    customs_value_aud: Optional[float] = Field(
        None,
        alias="customsValueAUD",
        validate_default=True,
        description="Customs value (AUD, 2 dp)",
    )

    model_config = {"frozen": True, "populate_by_name": True}

    @field_validator("customs_value_aud")
    @classmethod
    def validate_customs_value_presence(cls, v: Optional[float], info) -> Optional[float]:
        """Customs value must accompany a valid result and only a valid result."""
        if "valid" in info.data:
            valid = info.data["valid"]
            if valid and v is None:
                raise ValueError("valid result must carry customs_value_aud")
            if not valid and v is not None:
                raise ValueError("invalid result must not carry customs_value_aud")
        return v

    @classmethod
    def passed(cls, customs_value_aud: float) -> "ValidationResult":
        return cls(valid=True, customs_value_aud=customs_value_aud)

    @classmethod
    def failed(cls, violations: List[Violation]) -> "ValidationResult":
        if not violations:
            raise ValueError("failed result requires at least one violation")
        return cls(
            valid=False,
            errors=[v.message for v in violations],
            violations=list(violations),
        )


# =============================================================================
# FOB / CIF
# =============================================================================


@dataclass(frozen=True)
class FobCifResult:
    """FOB and CIF in AUD, each rounded to 2 dp."""

    fob: float
    cif: float
