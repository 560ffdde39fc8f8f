"""Tests for the InvoiceValidator

Coverage:
- Forbidden / mandatory rule checks
- Numeric checks on elements and goods value
- Violation order and accumulation (no fail-fast)
- Raw JSON mappings from the front-end
"""

import itertools
import logging
import math

import pytest

from src.core.domain.incoterms import Incoterm, ValuationElement, ValuationRule
from src.core.domain.invoice import Invoice, ViolationKind
from src.valuation.rule_matrix import mandatory_elements, rule_for
from src.valuation.validator import InvoiceValidator, validate

E = ValuationElement

FORBIDDEN_PAIRS = [
    (term, element)
    for term, element in itertools.product(Incoterm, ValuationElement)
    if rule_for(term, element) == ValuationRule.FORBIDDEN
]

MANDATORY_PAIRS = [
    (term, element)
    for term, element in itertools.product(Incoterm, ValuationElement)
    if rule_for(term, element) == ValuationRule.MANDATORY
]


@pytest.fixture
def validator():
    return InvoiceValidator()


def make_invoice(term, goods=1000.0, **elements):
    return Invoice(
        incoterm=term,
        goods_value_aud=goods,
        elements={E(code): amount for code, amount in elements.items()},
    )


# =============================================================================
# RULE CHECKS
# =============================================================================


class TestRuleChecks:
    def test_exw_without_elements_is_valid(self, validator):
        result = validator.validate(make_invoice(Incoterm.EXW))

        assert result.valid
        assert result.errors == []
        assert result.customs_value_aud == 1000.0

    def test_cif_missing_insurance(self, validator):
        result = validator.validate(make_invoice(Incoterm.CIF, OFT=50))

        assert not result.valid
        assert result.customs_value_aud is None
        assert "ONS is mandatory for Incoterm CIF" in result.errors
        assert result.violations[0].kind == ViolationKind.RULE
        assert result.violations[0].element == "ONS"

    def test_cif_complete(self, validator):
        result = validator.validate(make_invoice(Incoterm.CIF, OFT=50, ONS=20))

        assert result.valid
        assert result.customs_value_aud == 930.0

    def test_forbidden_landing_charges_on_fob(self, validator):
        result = validator.validate(make_invoice(Incoterm.FOB, LCH=10))

        assert not result.valid
        assert result.errors == ["LCH is not allowed for Incoterm FOB"]

    def test_forbidden_even_when_zero(self, validator):
        """An element entered as 0 is still present on the invoice."""
        result = validator.validate(make_invoice(Incoterm.FOB, LCH=0.0))

        assert not result.valid
        assert result.errors == ["LCH is not allowed for Incoterm FOB"]

    def test_mandatory_satisfied_by_zero(self, validator):
        result = validator.validate(make_invoice(Incoterm.CFR, OFT=0.0))

        assert result.valid
        assert result.customs_value_aud == 1000.0

    def test_every_mandatory_reported(self, validator):
        result = validator.validate(make_invoice(Incoterm.DAP))

        assert result.errors == [
            "OFT is mandatory for Incoterm DAP",
            "LCH is mandatory for Incoterm DAP",
        ]

    def test_legacy_term_validated_by_its_own_row(self, validator):
        result = validator.validate(make_invoice(Incoterm.DEQ, PC=5, LCH=15))

        assert result.valid
        assert result.customs_value_aud == 990.0


@pytest.mark.parametrize("term, element", FORBIDDEN_PAIRS)
def test_every_forbidden_pair_rejected(validator, term, element):
    elements = {el: 1.0 for el in mandatory_elements(term)}
    elements[element] = 10.0

    result = validator.validate(Invoice(incoterm=term, goods_value_aud=1000.0, elements=elements))

    assert not result.valid
    assert result.errors == [f"{element.value} is not allowed for Incoterm {term.value}"]


@pytest.mark.parametrize("term, element", MANDATORY_PAIRS)
def test_every_mandatory_pair_required(validator, term, element):
    elements = {el: 1.0 for el in mandatory_elements(term) if el != element}

    result = validator.validate(Invoice(incoterm=term, goods_value_aud=1000.0, elements=elements))

    assert not result.valid
    assert result.errors == [f"{element.value} is mandatory for Incoterm {term.value}"]


def test_pair_lists_cover_matrix():
    assert len(FORBIDDEN_PAIRS) == 32
    assert len(MANDATORY_PAIRS) == 16


# =============================================================================
# NUMERIC CHECKS
# =============================================================================


class TestNumericChecks:
    def test_nan_element(self, validator):
        result = validator.validate(make_invoice(Incoterm.EXW, PC=float("nan")))

        assert not result.valid
        assert result.errors == ["PC must be a numeric value"]
        assert result.violations[0].kind == ViolationKind.TYPE

    def test_infinite_goods_value(self, validator):
        result = validator.validate(make_invoice(Incoterm.EXW, goods=math.inf))

        assert not result.valid
        assert result.errors == ["goodsValueAUD must be a numeric value"]
        assert result.violations[0].element == "goodsValueAUD"


# =============================================================================
# ORDER AND ACCUMULATION
# =============================================================================


def test_violations_accumulate_in_check_order(validator):
    invoice = make_invoice(Incoterm.DAP, goods=float("nan"), PC=5, FIF=float("nan"))

    result = validator.validate(invoice)

    assert result.errors == [
        "PC is not allowed for Incoterm DAP",
        "FIF is not allowed for Incoterm DAP",
        "OFT is mandatory for Incoterm DAP",
        "LCH is mandatory for Incoterm DAP",
        "FIF must be a numeric value",
        "goodsValueAUD must be a numeric value",
    ]
    assert [v.kind for v in result.violations] == [ViolationKind.RULE] * 4 + [ViolationKind.TYPE] * 2


def test_validate_is_idempotent(validator):
    invoice = make_invoice(Incoterm.CIF, goods=2500.0, OFT=120.5, ONS=6.25, COMM=30)

    assert validator.validate(invoice) == validator.validate(invoice)


def test_module_level_validate():
    result = validate(make_invoice(Incoterm.CIF, OFT=50, ONS=20))

    assert result.valid
    assert result.customs_value_aud == 930.0


# =============================================================================
# RAW MAPPINGS
# =============================================================================


class TestRawMappings:
    def test_valid_mapping(self, validator):
        result = validator.validate(
            {"incoterm": "CIF", "goodsValueAUD": 1000, "elements": {"OFT": 50, "ONS": 20}}
        )

        assert result.valid
        assert result.customs_value_aud == 930.0

    def test_snake_case_goods_value(self, validator):
        result = validator.validate({"incoterm": "EXW", "goods_value_aud": 250.0})

        assert result.valid
        assert result.customs_value_aud == 250.0

    def test_non_numeric_values_and_unknown_codes(self, validator):
        result = validator.validate(
            {
                "incoterm": "CIF",
                "goodsValueAUD": "abc",
                "elements": {"ZZZ": 1, "OFT": "x", "ONS": 20},
            }
        )

        assert not result.valid
        assert result.errors == [
            "Unknown valuation element 'ZZZ'",
            "OFT must be a numeric value",
            "goodsValueAUD must be a numeric value",
        ]
        assert all(v.kind == ViolationKind.TYPE for v in result.violations)

    def test_bool_is_not_a_number(self, validator):
        result = validator.validate({"incoterm": "EXW", "goodsValueAUD": True})

        assert result.errors == ["goodsValueAUD must be a numeric value"]

    def test_missing_goods_value(self, validator):
        result = validator.validate({"incoterm": "EXW", "elements": {}})

        assert result.errors == ["goodsValueAUD must be a numeric value"]

    def test_null_mandatory_element(self, validator):
        result = validator.validate(
            {"incoterm": "CIF", "goodsValueAUD": 1000, "elements": {"OFT": 50, "ONS": None}}
        )

        assert result.errors == [
            "ONS is mandatory for Incoterm CIF",
            "ONS must be a numeric value",
        ]

    def test_null_optional_element(self, validator):
        result = validator.validate({"incoterm": "EXW", "goodsValueAUD": 1000, "elements": {"FIF": None}})

        assert not result.valid
        assert result.customs_value_aud is None
        assert result.errors == ["FIF must be a numeric value"]
        assert result.violations[0].kind == ViolationKind.TYPE

    def test_int_beyond_float_range(self, validator):
        result = validator.validate(
            {"incoterm": "EXW", "goodsValueAUD": 10**400, "elements": {"FIF": 10**400}}
        )

        assert result.errors == [
            "FIF must be a numeric value",
            "goodsValueAUD must be a numeric value",
        ]

    def test_missing_incoterm(self, validator):
        result = validator.validate({"goodsValueAUD": 1000})

        assert not result.valid
        assert result.errors == ["incoterm is required"]

    def test_unknown_incoterm(self, validator):
        result = validator.validate({"incoterm": "XYZ", "goodsValueAUD": 1000, "elements": {"QQ": 1}})

        assert result.errors == ["Unknown Incoterm 'XYZ'", "Unknown valuation element 'QQ'"]

    def test_elements_not_a_mapping(self, validator):
        result = validator.validate({"incoterm": "EXW", "goodsValueAUD": 1000, "elements": [1, 2]})

        assert result.errors == ["elements must map valuation element codes to amounts"]

    def test_not_a_mapping(self, validator):
        result = validator.validate(["CIF", 1000])

        assert result.errors == ["invoice must be a JSON object"]


def test_rejection_is_logged(validator, caplog):
    with caplog.at_level(logging.INFO, logger="src.valuation.validator"):
        validator.validate(make_invoice(Incoterm.FOB, LCH=10))

    assert "Invoice rejected" in caplog.text
    assert "LCH is not allowed for Incoterm FOB" in caplog.text
