"""FOB / CIF Calculator

    FOB = customs value = round2(goods value + additions − group deductions)
    CIF = round2(FOB + OFT + ONS)

CIF adds freight and insurance back for every group, including the groups
whose FOB formula deducted them. CIF is built on the already rounded FOB.
"""

from src.core.domain.incoterms import ValuationElement
from src.core.domain.invoice import FobCifResult, Invoice
from src.core.math.numerical_safeguards import round_money
from src.valuation.customs_value import customs_value


def compute_fob(invoice: Invoice) -> float:
    """FOB of an invoice (AUD, 2 dp); same figure as the customs value."""
    return customs_value(invoice)


def compute_fob_cif(invoice: Invoice) -> FobCifResult:
    """
    FOB and CIF of an invoice (AUD, 2 dp each).

    Examples:
        >>> compute_fob_cif(Invoice(incoterm="CIF", goods_value_aud=1000, elements={"OFT": 50, "ONS": 20}))
        FobCifResult(fob=930.0, cif=1000.0)
    """
    fob = compute_fob(invoice)
    cif = round_money(
        fob
        + invoice.amount(ValuationElement.OVERSEAS_FREIGHT)
        + invoice.amount(ValuationElement.OVERSEAS_INSURANCE)
    )
    return FobCifResult(fob=fob, cif=cif)
