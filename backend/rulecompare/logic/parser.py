"""
Expression Parser for rule expressions.

Parses `&&` / `||` / comparator syntax into JSON Logic format.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Union

from ..errors import CompileError
from .lexer import (
    COMBINATOR,
    COMPARATOR,
    IDENT,
    LPAREN,
    NUMBER,
    RPAREN,
    Token,
    tokenize,
)


class ExpressionParser:
    """
    Parser for rule expressions.

    Converts expressions like:
        "a == 1"
        "(a == 1 || b == 0) && c != 1"

    Into JSON Logic format:
        {"==": [{"var": "a"}, 1]}
        {"and": [{"or": [{"==": [{"var": "a"}, 1]}, {"==": [{"var": "b"}, 0]}]},
                 {"!=": [{"var": "c"}, 1]}]}

    Comparators bind tighter than `&&`, which binds tighter than `||`.
    Comparators are not associative: `a == 1 == 1` is rejected.
    """

    BINARY_OPS = {
        "||": "or",
        "&&": "and",
        "==": "==",
        "!=": "!=",
        "<=": "<=",
        ">=": ">=",
    }

    def __init__(self) -> None:
        self._expression = ""
        self._tokens: List[Token] = []
        self._index = 0

    def parse(self, expression: Union[str, bool, Dict]) -> Any:
        """
        Parse an expression into JSON Logic.

        Args:
            expression: The expression to parse.

        Returns:
            JSON Logic representation.

        Raises:
            CompileError: If the expression is not well formed.
        """
        if isinstance(expression, bool):
            return expression

        if isinstance(expression, dict):
            # Already JSON Logic, pass through
            return expression

        if not isinstance(expression, str):
            raise CompileError(f"Expected string expression, got {type(expression).__name__}")

        if not expression.strip():
            raise CompileError("Empty expression", expression)

        self._expression = expression
        self._tokens = tokenize(expression)
        self._index = 0

        try:
            logic = self._parse_or()
        except RecursionError:
            raise CompileError("Expression is nested too deeply", expression) from None

        trailing = self._peek()
        if trailing is not None:
            if trailing.kind == COMBINATOR:
                raise self._error(f"Unknown operator '{trailing.text}'", trailing)
            raise self._error(f"Unexpected '{trailing.text}'", trailing)

        return logic

    def _parse_or(self) -> Any:
        """Parse OR expressions (lowest precedence)."""
        parts = [self._parse_and()]
        while self._accept(COMBINATOR, "||"):
            parts.append(self._parse_and())
        if len(parts) > 1:
            return {"or": parts}
        return parts[0]

    def _parse_and(self) -> Any:
        """Parse AND expressions."""
        parts = [self._parse_comparison()]
        while self._accept(COMBINATOR, "&&"):
            parts.append(self._parse_comparison())
        if len(parts) > 1:
            return {"and": parts}
        return parts[0]

    def _parse_comparison(self) -> Any:
        """Parse comparison expressions."""
        left = self._parse_value()

        token = self._peek()
        if token is None or token.kind != COMPARATOR:
            return left

        op = self.BINARY_OPS.get(token.text)
        if op is None:
            raise self._error(f"Unknown comparator '{token.text}'", token)
        self._index += 1

        right = self._parse_value()
        return {op: [left, right]}

    def _parse_value(self) -> Any:
        """Parse a value (parenthesized group, literal, or variable)."""
        token = self._peek()
        if token is None:
            raise self._error("Unexpected end of expression")

        if token.kind == LPAREN:
            self._index += 1
            inner = self._parse_or()
            if not self._accept(RPAREN):
                raise self._error("Missing closing parenthesis", self._peek())
            return inner

        if token.kind == NUMBER:
            self._index += 1
            return int(token.text)

        if token.kind == IDENT:
            self._index += 1
            return {"var": token.text}

        if token.kind == COMBINATOR and token.text not in self.BINARY_OPS:
            raise self._error(f"Unknown operator '{token.text}'", token)

        raise self._error(f"Unexpected '{token.text}'", token)

    def _peek(self) -> Optional[Token]:
        if self._index < len(self._tokens):
            return self._tokens[self._index]
        return None

    def _accept(self, kind: str, text: Optional[str] = None) -> bool:
        """Consume the next token if it matches."""
        token = self._peek()
        if token is None or token.kind != kind:
            return False
        if text is not None and token.text != text:
            return False
        self._index += 1
        return True

    def _error(self, message: str, token: Optional[Token] = None) -> CompileError:
        position = token.position if token is not None else len(self._expression)
        return CompileError(message, self._expression, position)
