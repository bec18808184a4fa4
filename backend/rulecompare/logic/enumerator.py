"""
Truth table enumeration.

Generates every 0/1 assignment of a variable list and evaluates a predicate
for each one.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, List, Sequence

logger = logging.getLogger(__name__)

Environment = Dict[str, int]
Predicate = Callable[[Environment], bool]

STRATEGIES = ("recursive", "iterative")


class TruthTableEnumerator:
    """
    Enumerates all 2^n assignments of n binary variables.

    Each variable is tried with 1 first, then 0. A single environment dict
    is mutated in place between leaves. Any exception raised by the
    predicate aborts the enumeration and propagates to the caller.
    """

    def __init__(self, strategy: str = "recursive"):
        if strategy not in STRATEGIES:
            raise ValueError(
                f"Unknown enumeration strategy: {strategy}. "
                f"Expected one of {', '.join(STRATEGIES)}"
            )
        self.strategy = strategy

    def enumerate(self, variables: Sequence[str], evaluate: Predicate) -> List[bool]:
        """
        Evaluate a predicate for every assignment.

        Args:
            variables: Distinct variable names.
            evaluate: Called once per fully populated environment.

        Returns:
            One outcome per assignment, 2^n in total.
        """
        logger.debug(
            "Enumerating %d assignments over %s (%s)",
            2 ** len(variables), list(variables), self.strategy,
        )
        if self.strategy == "iterative":
            return self._enumerate_iterative(variables, evaluate)
        return self._enumerate_recursive(variables, evaluate)

    def _enumerate_recursive(
        self,
        variables: Sequence[str],
        evaluate: Predicate
    ) -> List[bool]:
        outcomes: List[bool] = []
        env: Environment = {}

        def generate(index: int) -> None:
            if index == len(variables):
                outcomes.append(bool(evaluate(env)))
                return
            name = variables[index]
            env[name] = 1
            generate(index + 1)
            env[name] = 0
            generate(index + 1)

        generate(0)
        return outcomes

    def _enumerate_iterative(
        self,
        variables: Sequence[str],
        evaluate: Predicate
    ) -> List[bool]:
        """Bit-counting traversal visiting leaves in the recursive order."""
        outcomes: List[bool] = []
        env: Environment = {}
        width = len(variables)

        for mask in range(2 ** width):
            for position, name in enumerate(variables):
                # Most significant bit is the first variable; a 0 bit means 1.
                bit = (mask >> (width - 1 - position)) & 1
                env[name] = 1 - bit
            outcomes.append(bool(evaluate(env)))

        return outcomes


def enumerate_assignments(
    variables: Sequence[str],
    evaluate: Predicate,
    strategy: str = "recursive"
) -> List[bool]:
    """Convenience function wrapping TruthTableEnumerator."""
    return TruthTableEnumerator(strategy).enumerate(variables, evaluate)
