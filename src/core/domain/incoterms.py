"""Incoterms and valuation element vocabularies

Enumerations shared by the rule matrix, the calculators and the declaration
processor:
- Incoterm: trade term printed on the commercial invoice (current + legacy)
- ValuationElement: canonical surcharge/deduction codes (ICS valuation codes)
- ValuationRule: Mandatory / Optional / Forbidden, as printed in the ICS matrix
"""

from enum import Enum


# =============================================================================
# ENUMS
# =============================================================================


class Incoterm(str, Enum):
    """Trade term selected once per invoice.

    Declaration order follows the shipping chain: origin terms first, then
    main-carriage-paid, then delivered terms, then legacy (pre-2010) terms.
    """

    EXW = "EXW"
    FCA = "FCA"
    FAS = "FAS"
    FOB = "FOB"
    CFR = "CFR"
    CPT = "CPT"
    CIF = "CIF"
    CIP = "CIP"
    DAP = "DAP"
    DAT = "DAT"
    DPU = "DPU"
    DDP = "DDP"

    # Legacy
    DES = "DES"
    DEQ = "DEQ"
    DDU = "DDU"

    @property
    def is_legacy(self) -> bool:
        return self in _LEGACY_TERMS


_LEGACY_TERMS = frozenset({Incoterm.DES, Incoterm.DEQ, Incoterm.DDU})


class ValuationElement(str, Enum):
    """Canonical valuation element codes."""

    PACKING_COSTS = "PC"
    FOREIGN_INLAND_FREIGHT = "FIF"
    OVERSEAS_INSURANCE = "ONS"
    OVERSEAS_FREIGHT = "OFT"
    LANDING_CHARGES = "LCH"
    COMMISSION = "COMM"
    OTHER_ADDITIONS = "OTA"
    OTHER_DEDUCTIONS = "OTD"
    DISCOUNT = "DSC"

    @property
    def label(self) -> str:
        return ELEMENT_LABELS[self]


ELEMENT_LABELS = {
    ValuationElement.PACKING_COSTS: "Packing Costs",
    ValuationElement.FOREIGN_INLAND_FREIGHT: "Foreign Inland Freight",
    ValuationElement.OVERSEAS_INSURANCE: "Overseas Insurance",
    ValuationElement.OVERSEAS_FREIGHT: "Overseas Freight",
    ValuationElement.LANDING_CHARGES: "Landing Charges",
    ValuationElement.COMMISSION: "Commission",
    ValuationElement.OTHER_ADDITIONS: "Other Additions",
    ValuationElement.OTHER_DEDUCTIONS: "Other Deductions",
    ValuationElement.DISCOUNT: "Discount",
}


class ValuationRule(str, Enum):
    """Rule for one (Incoterm, ValuationElement) cell of the matrix."""

    MANDATORY = "M"
    OPTIONAL = "O"
    FORBIDDEN = "X"
