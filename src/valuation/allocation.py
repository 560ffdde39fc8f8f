"""Allocation: splitting header amounts across declaration lines

`distribute` is the generic divide-by-sum: it returns fractional shares, not
re-scaled totals. `allocate_to_lines` applies those shares to a header amount
(typically the customs value) using the line attribute picked by the
allocation method.
"""

import logging
from typing import Dict, List, Mapping, Optional, Sequence, Union

from src.core.domain.declaration import AllocationMethod, DeclarationLine
from src.core.math.numerical_safeguards import is_valid_float, round_money, safe_divide

logger = logging.getLogger(__name__)


def distribute(
    totals: Sequence[float],
    method: Union[AllocationMethod, str],
    manual: Optional[Sequence[float]] = None,
) -> List[float]:
    """
    Proportional shares of `totals`.

    Manual with a `manual` array returns that array verbatim (length and sum
    are the caller's responsibility). Otherwise each value is divided by the
    sum of all values; a zero (or non-finite) sum gives a zero vector.

    Examples:
        >>> distribute([100, 200, 300], "Value")
        [0.16666666666666666, 0.3333333333333333, 0.5]
        >>> distribute([0, 0], "Weight")
        [0.0, 0.0]
        >>> distribute([1, 2], "Manual", [0.7, 0.3])
        [0.7, 0.3]

    Raises:
        ValueError: If method is not an AllocationMethod value
    """
    method = AllocationMethod(method)

    if method == AllocationMethod.MANUAL and manual is not None:
        return list(manual)

    total = sum(totals)
    if total == 0 or not is_valid_float(total):
        return [0.0 for _ in totals]

    return [t / total for t in totals]


def line_basis(lines: Sequence[DeclarationLine], method: Union[AllocationMethod, str]) -> List[float]:
    """
    Per-line allocation basis: line value, weight or quantity.

    Manual allocation has no basis of its own; line values are returned so
    that Manual without splits degrades to allocation by value.
    """
    method = AllocationMethod(method)
    if method == AllocationMethod.WEIGHT:
        return [line.weight for line in lines]
    if method == AllocationMethod.QUANTITY:
        return [line.qty for line in lines]
    return [line.itot for line in lines]


def manual_shares(lines: Sequence[DeclarationLine], splits: Mapping[str, float]) -> List[float]:
    """
    Manual shares in line order.

    Raises:
        ValueError: If a line has no entry in `splits`
    """
    missing = [line.id for line in lines if line.id not in splits]
    if missing:
        raise ValueError(f"manual splits missing for lines: {', '.join(missing)}")
    return [splits[line.id] for line in lines]


def allocate_to_lines(
    amount: float,
    lines: Sequence[DeclarationLine],
    method: Union[AllocationMethod, str],
    manual_splits: Optional[Mapping[str, float]] = None,
) -> Dict[str, float]:
    """
    Split a header amount across lines.

    Args:
        amount: Header amount (AUD)
        lines: Declaration lines
        method: Allocation basis
        manual_splits: Line id -> share, used with Manual

    Returns:
        Line id -> allocated amount, rounded to 2 dp. Rounded amounts are not
        re-balanced and may differ from `amount` by a few cents in total.
    """
    method = AllocationMethod(method)
    manual = None
    if method == AllocationMethod.MANUAL and manual_splits is not None:
        manual = manual_shares(lines, manual_splits)

    shares = distribute(line_basis(lines, method), method, manual)
    allocated = {line.id: round_money(amount * share) for line, share in zip(lines, shares)}

    logger.debug("Allocated %s by %s across %d lines", amount, method.value, len(lines))
    return allocated


def line_ratios(prices: Sequence[float], invoice_total: float) -> List[float]:
    """
    Share of the invoice total carried by each line price.

    Unlike `distribute`, the denominator is the invoice header total, so
    ratios do not sum to 1 when lines and header disagree. A zero total gives
    a zero vector.
    """
    return [safe_divide(price, invoice_total) for price in prices]
