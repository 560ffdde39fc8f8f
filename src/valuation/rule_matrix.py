"""Rule Matrix: which valuation elements each Incoterm allows

ICS valuation matrix: for every (Incoterm, ValuationElement) pair exactly one
of Mandatory (M), Optional (O) or Forbidden (X).

The matrix is total. A missing cell is a configuration defect, not bad user
input: `assert_matrix_complete` runs when this module is imported and
`rule_for` raises RuleMatrixIncompleteError instead of guessing.
"""

from types import MappingProxyType
from typing import Dict, List, Mapping, Tuple

from src.core.domain.incoterms import Incoterm, ValuationElement, ValuationRule


# =============================================================================
# EXCEPTIONS
# =============================================================================


class RuleMatrixIncompleteError(Exception):
    """
    The rule matrix has no rule for a declared (Incoterm, ValuationElement) pair.

    Fatal: there is no sensible partial result, the matrix itself must be fixed.
    """

    def __init__(self, missing: List[Tuple[Incoterm, ValuationElement]]):
        self.missing = missing
        cells = ", ".join(f"{term.value}/{element.value}" for term, element in missing)
        super().__init__(f"Rule matrix has no rule for: {cells}")


# =============================================================================
# MATRIX
# =============================================================================

RuleMatrix = Mapping[Incoterm, Mapping[ValuationElement, ValuationRule]]

# Column order of the rows below
_COLUMNS: Tuple[ValuationElement, ...] = (
    ValuationElement.PACKING_COSTS,
    ValuationElement.FOREIGN_INLAND_FREIGHT,
    ValuationElement.OVERSEAS_INSURANCE,
    ValuationElement.OVERSEAS_FREIGHT,
    ValuationElement.LANDING_CHARGES,
    ValuationElement.COMMISSION,
    ValuationElement.OTHER_ADDITIONS,
    ValuationElement.OTHER_DEDUCTIONS,
    ValuationElement.DISCOUNT,
)

#                  PC FIF ONS OFT LCH COMM OTA OTD DSC
_ROWS: Dict[Incoterm, str] = {
    Incoterm.EXW: "O  O   O   O   X   O    O   O   O",
    Incoterm.FCA: "O  O   O   O   X   O    O   O   O",
    Incoterm.FAS: "X  X   O   O   X   O    O   O   O",
    Incoterm.FOB: "X  X   O   O   X   O    O   O   O",
    Incoterm.CFR: "X  X   O   M   X   O    O   O   O",
    Incoterm.CPT: "X  X   O   M   X   O    O   O   O",
    Incoterm.CIF: "X  X   M   M   X   O    O   O   O",
    Incoterm.CIP: "X  X   M   M   X   O    O   O   O",
    Incoterm.DAP: "X  X   O   M   M   O    O   O   O",
    Incoterm.DAT: "X  X   O   M   M   O    O   O   O",
    Incoterm.DPU: "X  X   O   M   M   O    O   O   O",
    Incoterm.DDP: "X  X   O   M   M   O    O   O   O",
    # Legacy
    Incoterm.DES: "O  X   O   O   X   O    O   O   O",
    Incoterm.DEQ: "O  X   O   O   M   O    O   O   O",
    Incoterm.DDU: "O  X   O   O   M   O    O   O   O",
}


def _parse_row(row: str) -> Mapping[ValuationElement, ValuationRule]:
    codes = row.split()
    if len(codes) != len(_COLUMNS):
        raise ValueError(f"Matrix row has {len(codes)} cells, expected {len(_COLUMNS)}: {row!r}")
    return MappingProxyType({el: ValuationRule(code) for el, code in zip(_COLUMNS, codes)})


VALUATION_RULES: RuleMatrix = MappingProxyType(
    {term: _parse_row(row) for term, row in _ROWS.items()}
)


# =============================================================================
# QUERIES
# =============================================================================


def missing_rules(matrix: RuleMatrix = VALUATION_RULES) -> List[Tuple[Incoterm, ValuationElement]]:
    """Every declared (Incoterm, ValuationElement) pair the matrix has no rule for."""
    return [
        (term, element)
        for term in Incoterm
        for element in ValuationElement
        if element not in matrix.get(term, {})
    ]


def assert_matrix_complete(matrix: RuleMatrix = VALUATION_RULES) -> None:
    """
    Raises:
        RuleMatrixIncompleteError: If any declared pair has no rule
    """
    missing = missing_rules(matrix)
    if missing:
        raise RuleMatrixIncompleteError(missing)


def rule_for(
    incoterm: Incoterm,
    element: ValuationElement,
    matrix: RuleMatrix = VALUATION_RULES,
) -> ValuationRule:
    """
    Rule for one matrix cell.

    Args:
        incoterm: Incoterm of the invoice
        element: Valuation element
        matrix: Rule matrix (default: ICS matrix)

    Returns:
        ValuationRule

    Raises:
        RuleMatrixIncompleteError: If the cell is missing (configuration defect)
    """
    try:
        return matrix[incoterm][element]
    except KeyError:
        raise RuleMatrixIncompleteError([(incoterm, element)]) from None


def is_allowed(incoterm: Incoterm, element: ValuationElement) -> bool:
    return rule_for(incoterm, element) != ValuationRule.FORBIDDEN


def is_mandatory(incoterm: Incoterm, element: ValuationElement) -> bool:
    return rule_for(incoterm, element) == ValuationRule.MANDATORY


def _elements_with(incoterm: Incoterm, *rules: ValuationRule) -> List[ValuationElement]:
    return [el for el in ValuationElement if rule_for(incoterm, el) in rules]


def mandatory_elements(incoterm: Incoterm) -> List[ValuationElement]:
    """Mandatory elements, in ValuationElement declaration order."""
    return _elements_with(incoterm, ValuationRule.MANDATORY)


def allowed_elements(incoterm: Incoterm) -> List[ValuationElement]:
    """Mandatory and optional elements, in ValuationElement declaration order."""
    return _elements_with(incoterm, ValuationRule.MANDATORY, ValuationRule.OPTIONAL)


def forbidden_elements(incoterm: Incoterm) -> List[ValuationElement]:
    return _elements_with(incoterm, ValuationRule.FORBIDDEN)


assert_matrix_complete()
