"""Declaration Processor: from front-end payload to validated customs value

Pipeline:
1. Raw payloads are checked against the declaration_payload contract
   (violations → TYPE violations, returned as data)
2. Overseas insurance is derived: ONS = round2(ITOT × k), k defaults to the
   configured insurance factor. Always derived; never read from the payload
3. Remaining external codes are mapped to canonical elements; an amount of 0
   (or null) means "not on this invoice"
4. The resulting invoice goes through the InvoiceValidator

The processor never raises for domain failures: everything the caller may
have got wrong comes back in `ValidationResult.errors`.
"""

import logging
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Union

from pydantic import ValidationError

from src.core.contracts.validators import DeclarationPayloadValidator
from src.core.domain.declaration import DeclarationPayload
from src.core.domain.incoterms import ValuationElement
from src.core.domain.invoice import Invoice, ValidationResult, Violation, ViolationKind
from src.core.math.numerical_safeguards import round_money
from src.valuation.allocation import allocate_to_lines
from src.valuation.config import DEFAULT_CONFIG, ValuationConfig
from src.valuation.validator import InvoiceValidator

logger = logging.getLogger(__name__)


# External (broker-facing) code → canonical element
CODE_MAP: Mapping[str, ValuationElement] = MappingProxyType(
    {
        "FIF": ValuationElement.FOREIGN_INLAND_FREIGHT,
        "PCT": ValuationElement.PACKING_COSTS,
        "COM": ValuationElement.COMMISSION,
        "OTA": ValuationElement.OTHER_ADDITIONS,
        "OFT": ValuationElement.OVERSEAS_FREIGHT,
        "LCH": ValuationElement.LANDING_CHARGES,
        "DIS": ValuationElement.DISCOUNT,
        "OTS": ValuationElement.OTHER_DEDUCTIONS,
    }
)


class DeclarationProcessor:
    """Turns declaration payloads into validation results.

    Stateless between calls; one instance can serve any number of callers.
    """

    def __init__(
        self,
        config: Optional[ValuationConfig] = None,
        validator: Optional[InvoiceValidator] = None,
    ):
        """
        Args:
            config: valuation settings (default: DEFAULT_CONFIG)
            validator: invoice validator (default: new InvoiceValidator)
        """
        self.config = config or DEFAULT_CONFIG
        self.validator = validator or InvoiceValidator()
        self._contract = DeclarationPayloadValidator()

    def process(self, payload: Union[DeclarationPayload, Mapping[str, Any]]) -> ValidationResult:
        """Validate a declaration payload and compute its customs value.

        Args:
            payload: DeclarationPayload or raw JSON mapping

        Returns:
            ValidationResult
        """
        if not isinstance(payload, DeclarationPayload):
            parsed = self.parse(payload)
            if isinstance(parsed, ValidationResult):
                return parsed
            payload = parsed

        invoice = self.build_invoice(payload)
        logger.debug(
            "Processing declaration: incoterm=%s fx_rate=%s k=%s elements=%s",
            payload.incoterm.value,
            payload.fx_rate,
            self.insurance_factor(payload),
            {el.value: amount for el, amount in invoice.elements.items()},
        )
        return self.validator.validate(invoice)

    def parse(self, data: Mapping[str, Any]) -> Union[DeclarationPayload, ValidationResult]:
        """Raw mapping → DeclarationPayload, or a failed result listing every contract violation."""
        messages = self._contract.error_messages(data)
        if messages:
            logger.info("Declaration payload rejected by contract: %s", messages)
            return ValidationResult.failed(
                [Violation(kind=ViolationKind.TYPE, message=m) for m in messages]
            )

        try:
            return DeclarationPayload.model_validate(data)
        except ValidationError as e:
            violations = [
                Violation(
                    kind=ViolationKind.TYPE,
                    message=f"{'.'.join(str(p) for p in err['loc']) or 'payload'}: {err['msg']}",
                )
                for err in e.errors()
            ]
            logger.info("Declaration payload rejected: %s", [v.message for v in violations])
            return ValidationResult.failed(violations)

    def insurance_factor(self, payload: DeclarationPayload) -> float:
        return self.config.insurance_factor if payload.k is None else payload.k

    def build_invoice(self, payload: DeclarationPayload) -> Invoice:
        """Canonical invoice for a payload (derived ONS + mapped elements)."""
        goods_value = payload.valuation.ITOT

        elements: Dict[ValuationElement, float] = {
            ValuationElement.OVERSEAS_INSURANCE: round_money(goods_value * self.insurance_factor(payload)),
        }

        for code, amount in payload.valuation.external_amounts().items():
            if amount is None or amount == 0:
                continue
            elements[CODE_MAP[code]] = amount

        return Invoice(incoterm=payload.incoterm, goods_value_aud=goods_value, elements=elements)

    def allocate_customs_value(
        self,
        payload: DeclarationPayload,
        result: ValidationResult,
    ) -> Dict[str, float]:
        """
        Split the customs value of a processed payload across its lines.

        Raises:
            ValueError: If the result is not valid, or Manual splits miss a line
        """
        if not result.valid:
            raise ValueError("cannot allocate the customs value of an invalid declaration")

        return allocate_to_lines(
            result.customs_value_aud,
            payload.lines,
            payload.allocation_method,
            payload.manual_splits,
        )


_DEFAULT_PROCESSOR = DeclarationProcessor()


def process(payload: Union[DeclarationPayload, Mapping[str, Any]]) -> ValidationResult:
    """Process a declaration payload with the default processor."""
    return _DEFAULT_PROCESSOR.process(payload)
