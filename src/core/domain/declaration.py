"""
Declaration: external payload received from the declaration front-end

The payload uses the broker-facing element vocabulary (PCT, COM, DIS, OTS),
which differs from the canonical ValuationElement codes. Translation to
canonical codes happens in src.valuation.processor.

Field names mirror the JSON contract (contracts/schema/declaration_payload.json);
snake_case names are accepted as well.
"""

from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from src.core.domain.incoterms import Incoterm


# =============================================================================
# ENUMS
# =============================================================================


class AllocationMethod(str, Enum):
    """Basis for splitting header amounts across declaration lines"""

    VALUE = "Value"
    WEIGHT = "Weight"
    QUANTITY = "Quantity"
    MANUAL = "Manual"


# External element codes in payload order (ITOT excluded)
EXTERNAL_ELEMENT_CODES = ("FIF", "PCT", "COM", "OTA", "OFT", "LCH", "DIS", "OTS")


# =============================================================================
# NESTED MODELS
# =============================================================================


class DeclarationLine(BaseModel):
    """One tariff line of the declaration."""

    id: str = Field(..., min_length=1, description="Line identifier")
    itot: float = Field(..., description="Line value (invoice currency)")
    weight: float = Field(0.0, ge=0.0, description="Gross weight")
    qty: float = Field(0.0, ge=0.0, description="Quantity")
    duty_rate: float = Field(0.0, alias="dutyRate", ge=0.0, description="Duty rate (%)")

    model_config = {"frozen": True, "populate_by_name": True}


class ExternalValuation(BaseModel):
    """
    Header valuation block.

    ITOT is the invoice total (goods value); every other field is an
    external element code. Codes outside EXTERNAL_ELEMENT_CODES are ignored,
    including any insurance figure: insurance is always derived from ITOT.
    """

    ITOT: float = Field(..., description="Invoice total (goods value)")
    FIF: Optional[float] = None
    PCT: Optional[float] = None
    COM: Optional[float] = None
    OTA: Optional[float] = None
    OFT: Optional[float] = None
    LCH: Optional[float] = None
    DIS: Optional[float] = None
    OTS: Optional[float] = None

    model_config = {"frozen": True}

    def external_amounts(self) -> Dict[str, Optional[float]]:
        """External code -> amount, in EXTERNAL_ELEMENT_CODES order."""
        return {code: getattr(self, code) for code in EXTERNAL_ELEMENT_CODES}


# =============================================================================
# DECLARATION PAYLOAD
# =============================================================================


class DeclarationPayload(BaseModel):
    """
    Declaration payload.

    `k` is the overseas insurance factor; None means "use the configured
    default". `fx_rate` is carried for audit only and never enters a formula.
    """

    incoterm: Incoterm = Field(..., description="Incoterm of the invoice")
    k: Optional[float] = Field(None, ge=0.0, description="Overseas insurance factor")
    fx_rate: float = Field(..., alias="fxRate", description="Exchange rate (audit only)")
    valuation: ExternalValuation = Field(..., description="Header valuation block")
    lines: List[DeclarationLine] = Field(default_factory=list, description="Declaration lines")
    allocation_method: AllocationMethod = Field(
        AllocationMethod.VALUE, alias="allocationMethod", description="Line allocation basis"
    )
    manual_splits: Optional[Dict[str, float]] = Field(
        None, alias="manualSplits", description="Line id -> share, for Manual allocation"
    )

    model_config = {"frozen": True, "populate_by_name": True}
