"""Valuation summary: every header figure of a validated invoice at once."""

from dataclasses import dataclass
from typing import Optional

from src.core.domain.incoterms import ValuationElement
from src.core.domain.invoice import Invoice
from src.core.math.numerical_safeguards import is_valid_float, round_half_away, round_money
from src.valuation.config import DEFAULT_CONFIG, ValuationConfig
from src.valuation.customs_value import customs_value
from src.valuation.fob_cif import compute_fob_cif


@dataclass(frozen=True)
class ValuationSummary:
    """Header figures (AUD).

    transport_and_insurance: OFT + ONS ("T & I")
    valuation_factor: FOB / invoice total, None when the total is zero
    """

    customs_value_aud: float
    fob: float
    cif: float
    transport_and_insurance: float
    valuation_factor: Optional[float]


def summarize(
    invoice: Invoice,
    invoice_total: Optional[float] = None,
    config: Optional[ValuationConfig] = None,
) -> ValuationSummary:
    """
    Summary of a validated invoice.

    Args:
        invoice: Invoice that passed validation
        invoice_total: Denominator of the valuation factor (default: goods value)
        config: Valuation settings (default: DEFAULT_CONFIG)
    """
    config = config or DEFAULT_CONFIG
    fob_cif = compute_fob_cif(invoice)

    total = invoice.goods_value_aud if invoice_total is None else invoice_total
    factor = None
    if is_valid_float(total) and total != 0:
        factor = round_half_away(fob_cif.fob / total, config.factor_places)

    return ValuationSummary(
        customs_value_aud=customs_value(invoice),
        fob=fob_cif.fob,
        cif=fob_cif.cif,
        transport_and_insurance=round_money(
            invoice.amount(ValuationElement.OVERSEAS_FREIGHT)
            + invoice.amount(ValuationElement.OVERSEAS_INSURANCE)
        ),
        valuation_factor=factor,
    )
