"""
Expression equivalence check.

Two expressions are equivalent when they agree on every 0/1 assignment of
their shared variables. The check validates both expressions, reconciles
their variables, then evaluates `(expr1) == (expr2)` over the full truth
table.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .errors import VariableLimitExceeded
from .logic.enumerator import Environment, TruthTableEnumerator
from .logic.evaluator import ExpressionEvaluator
from .logic.reconciler import reconcile
from .logic.validator import SyntaxValidator
from .models import ComparisonConfig

logger = logging.getLogger(__name__)


@dataclass
class ComparisonResult:
    """Outcome of comparing two expressions."""
    equivalent: bool
    variables: List[str] = field(default_factory=list)
    outcomes: List[bool] = field(default_factory=list)
    counterexample: Optional[Dict[str, int]] = None

    @property
    def assignments_checked(self) -> int:
        """Number of assignments evaluated (2^n)."""
        return len(self.outcomes)

    @property
    def mismatches(self) -> int:
        """Number of assignments on which the expressions disagree."""
        return self.outcomes.count(False)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "equivalent": self.equivalent,
            "variables": self.variables,
            "assignments_checked": self.assignments_checked,
            "mismatches": self.mismatches,
            "counterexample": self.counterexample,
        }


def combine_expressions(expr1: str, expr2: str) -> str:
    """Build the probe expression comparing the truth values of both sides."""
    return "(" + expr1 + ") == (" + expr2 + ")"


class ExpressionComparator:
    """
    Decides whether two rule expressions are logically equivalent.

    Usage:
        comparator = ExpressionComparator()
        comparator.compare("a == 1 && b == 1", "b == 1 && a == 1").equivalent
        # True
    """

    def __init__(self, config: Optional[ComparisonConfig] = None):
        self.config = config or ComparisonConfig()
        self.validator = SyntaxValidator()
        self.evaluator = ExpressionEvaluator()
        self.enumerator = TruthTableEnumerator(self.config.strategy)

    def check_variable_limit(self, variables: List[str]) -> None:
        """Raise VariableLimitExceeded when the configured limit is exceeded."""
        limit = self.config.max_variables
        if limit is not None and len(variables) > limit:
            raise VariableLimitExceeded(len(variables), limit)

    def compare(self, expr1: str, expr2: str) -> ComparisonResult:
        """
        Compare two expressions over their full truth table.

        Args:
            expr1: First expression.
            expr2: Second expression.

        Returns:
            ComparisonResult; `equivalent` is False when any assignment
            disagrees.

        Raises:
            FormatError, CombinatorError, InvalidCharacterError: Validation
                failed for either expression.
            ParameterCountMismatch, ParameterSetMismatch: The expressions
                reference different variables.
            VariableLimitExceeded: Too many variables for the configured limit.
            CompileError, EvalError: The expression engine failed.
        """
        first = self.validator.validate_expression(expr1)
        second = self.validator.validate_expression(expr2)
        variables = reconcile(first.variables, second.variables)
        self.check_variable_limit(variables)

        # Compile each side first so parse errors point at the right expression.
        self.evaluator.compile(expr1)
        self.evaluator.compile(expr2)
        probe = self.evaluator.compile(combine_expressions(expr1, expr2))

        disagreements: List[Dict[str, int]] = []

        def evaluate(env: Environment) -> bool:
            agrees = self.evaluator.evaluate_bool(probe, env)
            if not agrees and not disagreements:
                disagreements.append(dict(env))
            return agrees

        outcomes = self.enumerator.enumerate(variables, evaluate)
        equivalent = all(outcomes)

        logger.debug(
            "Compared %r with %r over %s: %d/%d assignments agree",
            expr1, expr2, variables, outcomes.count(True), len(outcomes),
        )

        return ComparisonResult(
            equivalent=equivalent,
            variables=variables,
            outcomes=outcomes,
            counterexample=disagreements[0] if disagreements else None,
        )


def check_equivalence(
    expr1: str,
    expr2: str,
    config: Optional[ComparisonConfig] = None
) -> bool:
    """
    Check whether two expressions are duplicates of each other.

    Example:
        check_equivalence("a == 1 && b == 1", "b == 1 && a == 1")  # True

    Errors from validation, reconciliation and evaluation propagate.
    """
    return ExpressionComparator(config).compare(expr1, expr2).equivalent
