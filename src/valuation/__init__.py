"""Valuation: rule matrix, validator and customs value / FOB / CIF formulas.

Control flow:
- DeclarationProcessor: canonicalises the payload, derives overseas insurance
- InvoiceValidator: rule matrix checks, violations returned as data
- customs_value / compute_fob_cif: pure formulas over a validated invoice
"""

from .allocation import allocate_to_lines, distribute, line_basis, line_ratios, manual_shares
from .config import DEFAULT_CONFIG, DEFAULT_INSURANCE_FACTOR, ValuationConfig
from .customs_value import customs_value
from .fob_cif import compute_fob, compute_fob_cif
from .formulas import FormulaGroup, adjusted_value, deductions_for, formula_group
from .processor import CODE_MAP, DeclarationProcessor, process
from .rule_matrix import (
    VALUATION_RULES,
    RuleMatrixIncompleteError,
    allowed_elements,
    assert_matrix_complete,
    forbidden_elements,
    is_allowed,
    is_mandatory,
    mandatory_elements,
    missing_rules,
    rule_for,
)
from .summary import ValuationSummary, summarize
from .validator import InvoiceValidator, validate

__all__ = [
    # Rule matrix
    "VALUATION_RULES",
    "RuleMatrixIncompleteError",
    "rule_for",
    "is_allowed",
    "is_mandatory",
    "mandatory_elements",
    "allowed_elements",
    "forbidden_elements",
    "missing_rules",
    "assert_matrix_complete",
    # Formulas
    "FormulaGroup",
    "formula_group",
    "deductions_for",
    "adjusted_value",
    "customs_value",
    "compute_fob",
    "compute_fob_cif",
    # Validation & processing
    "InvoiceValidator",
    "validate",
    "DeclarationProcessor",
    "CODE_MAP",
    "process",
    # Allocation
    "distribute",
    "line_basis",
    "manual_shares",
    "allocate_to_lines",
    "line_ratios",
    # Summary
    "ValuationSummary",
    "summarize",
    # Config
    "ValuationConfig",
    "DEFAULT_CONFIG",
    "DEFAULT_INSURANCE_FACTOR",
]
