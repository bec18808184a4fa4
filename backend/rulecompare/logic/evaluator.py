"""
Expression Evaluator for rule expressions.

Evaluates JSON Logic expressions against a variable environment.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Mapping, Union

from ..errors import EvalError
from .parser import ExpressionParser


def _is_number(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


class ExpressionEvaluator:
    """
    Evaluator for JSON Logic expressions.

    Unlike loose JSON Logic, values are strictly typed:
    - `and` / `or` only accept booleans
    - `==` / `!=` compare two booleans or two integers
    - `<=` / `>=` only compare integers
    Any other combination raises EvalError.

    Variable names are looked up verbatim, so names containing dots or
    hyphens need no rewriting.
    """

    def __init__(self) -> None:
        self.parser = ExpressionParser()
        self._comparisons: Dict[str, Callable[[Any, Any], bool]] = {
            "==": lambda a, b: a == b,
            "!=": lambda a, b: a != b,
            "<=": lambda a, b: a <= b,
            ">=": lambda a, b: a >= b,
        }

    def compile(self, expression: Union[str, Dict]) -> Any:
        """Parse an expression into JSON Logic, raising CompileError."""
        return self.parser.parse(expression)

    def evaluate(self, logic: Any, data: Mapping[str, Any]) -> Any:
        """
        Evaluate a JSON Logic expression against data.

        Args:
            logic: The JSON Logic expression.
            data: Variable environment.

        Returns:
            The evaluation result.

        Raises:
            EvalError: Unresolved variable, operand type mismatch, or
                unknown operator.
        """
        # Handle primitives
        if isinstance(logic, bool) or _is_number(logic):
            return logic
        if not isinstance(logic, dict) or len(logic) != 1:
            raise EvalError(f"Malformed expression node: {logic!r}")

        operator, args = next(iter(logic.items()))

        if operator == "var":
            return self._get_var(args, data)

        if operator == "and":
            return self._eval_and(args, data)

        if operator == "or":
            return self._eval_or(args, data)

        if operator in self._comparisons:
            return self._eval_comparison(operator, args, data)

        raise EvalError(f"Unknown operator: {operator}")

    def evaluate_bool(self, logic: Any, data: Mapping[str, Any]) -> bool:
        """Evaluate an expression that must produce a boolean."""
        try:
            result = self.evaluate(logic, data)
        except RecursionError:
            raise EvalError("Expression is nested too deeply") from None
        if not isinstance(result, bool):
            raise EvalError(f"Expression did not evaluate to a boolean: {result!r}")
        return result

    def _get_var(self, name: Any, data: Mapping[str, Any]) -> Any:
        if not isinstance(name, str) or name not in data:
            raise EvalError(f"No parameter '{name}' found")
        return data[name]

    def _eval_and(self, args: List, data: Mapping[str, Any]) -> bool:
        """Evaluate AND expression, short-circuiting on the first false."""
        for arg in args:
            if not self._logical_operand("&&", arg, data):
                return False
        return True

    def _eval_or(self, args: List, data: Mapping[str, Any]) -> bool:
        """Evaluate OR expression, short-circuiting on the first true."""
        for arg in args:
            if self._logical_operand("||", arg, data):
                return True
        return False

    def _logical_operand(self, symbol: str, arg: Any, data: Mapping[str, Any]) -> bool:
        value = self.evaluate(arg, data)
        if not isinstance(value, bool):
            raise EvalError(
                f"Value '{value}' cannot be used with the logical operator '{symbol}'"
            )
        return value

    def _eval_comparison(self, operator: str, args: List, data: Mapping[str, Any]) -> bool:
        if not isinstance(args, list) or len(args) != 2:
            raise EvalError(f"Comparator '{operator}' requires 2 operands")

        left = self.evaluate(args[0], data)
        right = self.evaluate(args[1], data)

        if operator in ("<=", ">="):
            if not (_is_number(left) and _is_number(right)):
                raise EvalError(
                    f"Comparator '{operator}' requires numeric operands, "
                    f"got {left!r} and {right!r}"
                )
        elif isinstance(left, bool) != isinstance(right, bool):
            raise EvalError(f"Cannot compare {left!r} with {right!r}")

        return self._comparisons[operator](left, right)


def evaluate_expression(expression: str, parameters: Mapping[str, Any]) -> bool:
    """
    Parse and evaluate a boolean expression in one step.

    Raises:
        CompileError: If the expression cannot be parsed.
        EvalError: If evaluation fails.
    """
    evaluator = ExpressionEvaluator()
    return evaluator.evaluate_bool(evaluator.compile(expression), parameters)
