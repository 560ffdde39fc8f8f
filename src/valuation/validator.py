"""Validator: checks an invoice against the rule matrix

Checks, in order, accumulating every violation (no fail-fast):
1. Forbidden elements present on the invoice               (RULE)
2. Mandatory elements missing from the invoice             (RULE)
3. Present elements whose amount is not a finite number    (TYPE)
4. Goods value that is not a finite number                 (TYPE)

Any violation → invalid result, no customs value.
Otherwise → valid result carrying the customs value.

Expected failures are returned as data, never raised. Only a configuration
defect in the rule matrix (RuleMatrixIncompleteError) propagates.
"""

import logging
from typing import Any, List, Mapping, Optional, Union

from src.core.domain.incoterms import Incoterm, ValuationElement, ValuationRule
from src.core.domain.invoice import Invoice, ValidationResult, Violation, ViolationKind
from src.core.math.numerical_safeguards import is_valid_amount
from src.valuation.customs_value import customs_value
from src.valuation.rule_matrix import rule_for

logger = logging.getLogger(__name__)

GOODS_VALUE_FIELD = "goodsValueAUD"


class InvoiceValidator:
    """Validator for single invoices.

    Accepts either an `Invoice` model or the raw JSON mapping sent by the
    front-end ({"incoterm", "goodsValueAUD", "elements"}). Raw mappings may
    hold anything; malformed values become TYPE violations.
    """

    def validate(self, invoice: Union[Invoice, Mapping[str, Any]]) -> ValidationResult:
        """Validate an invoice and compute its customs value when it passes.

        Args:
            invoice: Invoice model or raw mapping

        Returns:
            ValidationResult
        """
        if not isinstance(invoice, Invoice):
            return self._validate_raw(invoice)

        violations = self.check(invoice.incoterm, invoice.goods_value_aud, invoice.elements)
        if violations:
            return self._failed(invoice.incoterm, violations)
        return self._passed(invoice)

    def check(
        self,
        incoterm: Incoterm,
        goods_value: Any,
        elements: Mapping[ValuationElement, Any],
    ) -> List[Violation]:
        """Run checks 1-4 and return every violation found."""
        violations: List[Violation] = []

        # 1. Forbidden
        for element in elements:
            if rule_for(incoterm, element) == ValuationRule.FORBIDDEN:
                violations.append(
                    Violation(
                        kind=ViolationKind.RULE,
                        element=element.value,
                        message=f"{element.value} is not allowed for Incoterm {incoterm.value}",
                    )
                )

        # 2. Mandatory (None counts as missing)
        for element in ValuationElement:
            if rule_for(incoterm, element) != ValuationRule.MANDATORY:
                continue
            if elements.get(element) is None:
                violations.append(
                    Violation(
                        kind=ViolationKind.RULE,
                        element=element.value,
                        message=f"{element.value} is mandatory for Incoterm {incoterm.value}",
                    )
                )

        # 3. Element amounts (null included)
        for element, amount in elements.items():
            if not is_valid_amount(amount):
                violations.append(
                    Violation(
                        kind=ViolationKind.TYPE,
                        element=element.value,
                        message=f"{element.value} must be a numeric value",
                    )
                )

        # 4. Goods value
        if not is_valid_amount(goods_value):
            violations.append(
                Violation(
                    kind=ViolationKind.TYPE,
                    element=GOODS_VALUE_FIELD,
                    message=f"{GOODS_VALUE_FIELD} must be a numeric value",
                )
            )

        return violations

    def _validate_raw(self, data: Mapping[str, Any]) -> ValidationResult:
        """Validate front-end JSON without building the model first."""
        if not isinstance(data, Mapping):
            return self._failed(
                None,
                [Violation(kind=ViolationKind.TYPE, message="invoice must be a JSON object")],
            )

        violations: List[Violation] = []

        incoterm = _parse_incoterm(data.get("incoterm"), violations)

        raw_elements = data.get("elements") or {}
        if not isinstance(raw_elements, Mapping):
            violations.append(
                Violation(
                    kind=ViolationKind.TYPE,
                    element="elements",
                    message="elements must map valuation element codes to amounts",
                )
            )
            raw_elements = {}

        elements = {}
        for code, amount in raw_elements.items():
            try:
                elements[ValuationElement(code)] = amount
            except ValueError:
                violations.append(
                    Violation(
                        kind=ViolationKind.TYPE,
                        element=str(code),
                        message=f"Unknown valuation element {code!r}",
                    )
                )

        goods_value = data.get(GOODS_VALUE_FIELD, data.get("goods_value_aud"))

        # no Incoterm, no matrix row to check against
        if incoterm is None:
            return self._failed(None, violations)

        violations.extend(self.check(incoterm, goods_value, elements))
        if violations:
            return self._failed(incoterm, violations)

        invoice = Invoice(incoterm=incoterm, goods_value_aud=goods_value, elements=elements)
        return self._passed(invoice)

    def _passed(self, invoice: Invoice) -> ValidationResult:
        value = customs_value(invoice)
        logger.debug(
            "Invoice valid: incoterm=%s goods_value_aud=%s customs_value_aud=%s",
            invoice.incoterm.value,
            invoice.goods_value_aud,
            value,
        )
        return ValidationResult.passed(value)

    def _failed(self, incoterm: Optional[Incoterm], violations: List[Violation]) -> ValidationResult:
        logger.info(
            "Invoice rejected: incoterm=%s violations=%s",
            incoterm.value if incoterm is not None else None,
            [v.message for v in violations],
        )
        return ValidationResult.failed(violations)


def _parse_incoterm(value: Any, violations: List[Violation]) -> Optional[Incoterm]:
    if value is None:
        violations.append(
            Violation(kind=ViolationKind.TYPE, element="incoterm", message="incoterm is required")
        )
        return None
    try:
        return Incoterm(value)
    except ValueError:
        violations.append(
            Violation(
                kind=ViolationKind.TYPE,
                element="incoterm",
                message=f"Unknown Incoterm {value!r}",
            )
        )
        return None


_DEFAULT_VALIDATOR = InvoiceValidator()


def validate(invoice: Union[Invoice, Mapping[str, Any]]) -> ValidationResult:
    """Validate an invoice with the default validator."""
    return _DEFAULT_VALIDATOR.validate(invoice)
