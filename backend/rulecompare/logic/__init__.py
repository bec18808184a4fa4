"""
Logic engine for Rule Compare.

Provides syntax validation, variable reconciliation, truth table
enumeration, and expression parsing and evaluation.
"""

from .parser import ExpressionParser
from .evaluator import ExpressionEvaluator, evaluate_expression
from .validator import SyntaxValidator, ValidatedExpression, validate_format
from .reconciler import filter_duplicates, list_contains, reconcile
from .enumerator import TruthTableEnumerator, enumerate_assignments

__all__ = [
    "ExpressionParser",
    "ExpressionEvaluator",
    "evaluate_expression",
    "SyntaxValidator",
    "ValidatedExpression",
    "validate_format",
    "filter_duplicates",
    "list_contains",
    "reconcile",
    "TruthTableEnumerator",
    "enumerate_assignments",
]
