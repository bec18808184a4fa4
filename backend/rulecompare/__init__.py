"""
Rule Compare: equivalence checking for boolean targeting rules.

Decides whether two expressions such as `a == 1 && b == 1` and
`b == 1 && a == 1` are logically equivalent by evaluating both over every
0/1 assignment of their variables.
"""

from .compare import ComparisonResult, ExpressionComparator, check_equivalence
from .analyzer import DuplicateAnalysisResult, DuplicateRuleFinder, find_duplicates_in_file
from .models import ComparisonConfig, Rule, RuleSet
from .errors import (
    ExpressionCompareError,
    ExpressionSyntaxError,
    FormatError,
    CombinatorError,
    InvalidCharacterError,
    ParameterMismatchError,
    ParameterCountMismatch,
    ParameterSetMismatch,
    CompileError,
    EvalError,
    VariableLimitExceeded,
)

__version__ = "1.0.0"
__all__ = [
    # Comparison
    "check_equivalence",
    "ExpressionComparator",
    "ComparisonResult",
    # Duplicate detection
    "DuplicateRuleFinder",
    "DuplicateAnalysisResult",
    "find_duplicates_in_file",
    # Models
    "ComparisonConfig",
    "Rule",
    "RuleSet",
    # Errors
    "ExpressionCompareError",
    "ExpressionSyntaxError",
    "FormatError",
    "CombinatorError",
    "InvalidCharacterError",
    "ParameterMismatchError",
    "ParameterCountMismatch",
    "ParameterSetMismatch",
    "CompileError",
    "EvalError",
    "VariableLimitExceeded",
]
