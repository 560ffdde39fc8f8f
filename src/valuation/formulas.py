"""Formula groups: shared adjustment formula for customs value and FOB

Incoterms are partitioned by how far along the shipping chain the seller
carries cost. The group decides which of overseas freight (OFT) and overseas
insurance (ONS) are already inside the invoice price and must be deducted:

    ORIGIN                  EXW FCA FAS FOB       anchor + ADD - (LCH + DSC + OTD)
    FREIGHT_PAID            CFR CPT               anchor + ADD - (OFT + LCH + DSC + OTD)
    FREIGHT_INSURANCE_PAID  CIF CIP DAP DPU DDP,  anchor + ADD - (OFT + ONS + LCH + DSC + OTD)
                            and every other term

    ADD = FIF + PC + COMM + OTA

Customs value and FOB both evaluate this one formula over the goods value;
they only differ in what the caller does with the result.
"""

from enum import Enum
from typing import Dict, Mapping, Tuple

from src.core.domain.incoterms import Incoterm, ValuationElement

_E = ValuationElement


# =============================================================================
# GROUPS
# =============================================================================


class FormulaGroup(str, Enum):
    ORIGIN = "ORIGIN"
    FREIGHT_PAID = "FREIGHT_PAID"
    FREIGHT_INSURANCE_PAID = "FREIGHT_INSURANCE_PAID"


_GROUP_BY_TERM: Dict[Incoterm, FormulaGroup] = {
    Incoterm.EXW: FormulaGroup.ORIGIN,
    Incoterm.FCA: FormulaGroup.ORIGIN,
    Incoterm.FAS: FormulaGroup.ORIGIN,
    Incoterm.FOB: FormulaGroup.ORIGIN,
    Incoterm.CFR: FormulaGroup.FREIGHT_PAID,
    Incoterm.CPT: FormulaGroup.FREIGHT_PAID,
}

ADDITIONS: Tuple[ValuationElement, ...] = (
    _E.FOREIGN_INLAND_FREIGHT,
    _E.PACKING_COSTS,
    _E.COMMISSION,
    _E.OTHER_ADDITIONS,
)

# Deducted for every group, after the group-specific carriage deductions
COMMON_DEDUCTIONS: Tuple[ValuationElement, ...] = (
    _E.LANDING_CHARGES,
    _E.DISCOUNT,
    _E.OTHER_DEDUCTIONS,
)

_CARRIAGE_DEDUCTIONS: Dict[FormulaGroup, Tuple[ValuationElement, ...]] = {
    FormulaGroup.ORIGIN: (),
    FormulaGroup.FREIGHT_PAID: (_E.OVERSEAS_FREIGHT,),
    FormulaGroup.FREIGHT_INSURANCE_PAID: (_E.OVERSEAS_FREIGHT, _E.OVERSEAS_INSURANCE),
}


def formula_group(incoterm: Incoterm) -> FormulaGroup:
    """Group of an Incoterm; terms outside ORIGIN and FREIGHT_PAID fall back to FREIGHT_INSURANCE_PAID."""
    return _GROUP_BY_TERM.get(incoterm, FormulaGroup.FREIGHT_INSURANCE_PAID)


def deductions_for(group: FormulaGroup) -> Tuple[ValuationElement, ...]:
    return _CARRIAGE_DEDUCTIONS[group] + COMMON_DEDUCTIONS


# =============================================================================
# FORMULA
# =============================================================================


def adjusted_value(
    anchor: float,
    incoterm: Incoterm,
    elements: Mapping[ValuationElement, float],
) -> float:
    """
    anchor + Σ(additions) − Σ(deductions of the Incoterm's group), unrounded.

    Absent elements contribute 0. Sums are taken in the order of ADDITIONS and
    deductions_for(), so cent-level output is stable.

    Args:
        anchor: Goods value (AUD)
        incoterm: Incoterm selecting the deduction set
        elements: Valuation elements present on the invoice

    Returns:
        Adjusted value before rounding
    """
    additions = sum(elements.get(el, 0.0) for el in ADDITIONS)
    deductions = sum(elements.get(el, 0.0) for el in deductions_for(formula_group(incoterm)))
    return anchor + additions - deductions
