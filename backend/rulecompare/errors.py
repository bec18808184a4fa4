"""
Error taxonomy for expression comparison.

Validation errors are raised before any enumeration happens. Compile and
eval errors come from the expression engine and indicate a gap between the
validator grammar and the evaluator grammar.
"""

from __future__ import annotations

from typing import List, Optional, Sequence


class ExpressionCompareError(ValueError):
    """Base class for all comparison errors."""


class ExpressionSyntaxError(ExpressionCompareError):
    """An expression failed syntactic validation."""

    def __init__(
        self,
        message: str,
        expression: str = "",
        position: Optional[int] = None,
    ):
        super().__init__(message)
        self.message = message
        self.expression = expression
        self.position = position


class FormatError(ExpressionSyntaxError):
    """Comparator/literal pair does not match `<comparator> <0|1>`."""


class CombinatorError(ExpressionSyntaxError):
    """Logical operator other than `&&` or `||`."""


class InvalidCharacterError(ExpressionSyntaxError):
    """Character outside the expression alphabet."""


class ParameterMismatchError(ExpressionCompareError):
    """The two expressions do not reference the same variables."""

    def __init__(self, message: str, params1: Sequence[str], params2: Sequence[str]):
        super().__init__(message)
        self.params1: List[str] = list(params1)
        self.params2: List[str] = list(params2)


class ParameterCountMismatch(ParameterMismatchError):
    """Different number of distinct variables."""

    def __init__(self, params1: Sequence[str], params2: Sequence[str]):
        super().__init__(
            "expressions have different number of parameters, "
            f"params1: {list(params1)}, params2: {list(params2)}",
            params1,
            params2,
        )


class ParameterSetMismatch(ParameterMismatchError):
    """Same count of distinct variables but different identities."""

    def __init__(self, params1: Sequence[str], params2: Sequence[str]):
        super().__init__(
            "expressions have different parameters, "
            f"params1: {list(params1)}, params2: {list(params2)}",
            params1,
            params2,
        )


class CompileError(ExpressionCompareError):
    """The expression engine could not parse an expression."""

    def __init__(
        self,
        message: str,
        expression: str = "",
        position: Optional[int] = None,
    ):
        detail = message if position is None else f"{message} at position {position}"
        super().__init__(f"Unable to initialize the expression: {detail}")
        self.expression = expression
        self.position = position


class EvalError(ExpressionCompareError):
    """The expression engine failed while evaluating an expression."""

    def __init__(self, message: str):
        super().__init__(f"Unable to evaluate the expression: {message}")


class VariableLimitExceeded(ExpressionCompareError):
    """More distinct variables than the configured enumeration limit."""

    def __init__(self, count: int, limit: int):
        super().__init__(
            f"expressions reference {count} variables, limit is {limit} "
            f"({2 ** count} assignments)"
        )
        self.count = count
        self.limit = limit
