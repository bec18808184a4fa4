"""
Variable set reconciliation.

Two expressions can only be compared when they reference the same distinct
variables. The reconciled list drives the truth table enumeration.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Sequence

from ..errors import ParameterCountMismatch, ParameterSetMismatch

logger = logging.getLogger(__name__)


def filter_duplicates(params: Iterable[str]) -> List[str]:
    """Remove duplicate names, keeping first-occurrence order."""
    seen = set()
    result = []
    for name in params:
        if name not in seen:
            seen.add(name)
            result.append(name)
    return result


def list_contains(params1: Sequence[str], params2: Sequence[str]) -> None:
    """
    Check that two deduplicated lists hold the same names.

    Raises:
        ParameterCountMismatch: The lists differ in length.
        ParameterSetMismatch: Some name occurs in only one list.
    """
    if len(params1) != len(params2):
        raise ParameterCountMismatch(params1, params2)

    # Equal length alone is not enough: [a, b] and [c, d] share nothing.
    if set(params1) != set(params2):
        raise ParameterSetMismatch(params1, params2)


def reconcile(tokens1: Sequence[str], tokens2: Sequence[str]) -> List[str]:
    """
    Reconcile the variables of two expressions.

    Args:
        tokens1: Variables of the first expression, as extracted.
        tokens2: Variables of the second expression, as extracted.

    Returns:
        The canonical variable list, in first-expression order.
    """
    params1 = filter_duplicates(tokens1)
    params2 = filter_duplicates(tokens2)

    list_contains(params1, params2)

    logger.debug("Reconciled variables: %s", params1)
    return params1
