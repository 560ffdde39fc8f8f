"""Customs Value Calculator

customs value = round2(goods value + additions − group deductions)

See src.valuation.formulas for the group partition. Input is assumed to be
validated; on an inconsistent invoice the figure is computed but meaningless.
"""

from src.core.domain.invoice import Invoice
from src.core.math.numerical_safeguards import round_money
from src.valuation.formulas import adjusted_value


def customs_value(invoice: Invoice) -> float:
    """
    Declared customs value of an invoice (AUD, 2 dp).

    Examples:
        >>> customs_value(Invoice(incoterm="CIF", goods_value_aud=1000, elements={"OFT": 50, "ONS": 20}))
        930.0
    """
    return round_money(adjusted_value(invoice.goods_value_aud, invoice.incoterm, invoice.elements))
