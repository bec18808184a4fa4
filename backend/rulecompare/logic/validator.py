"""
Syntax validator for rule expressions.

Checks that an expression only uses `<variable> <comparator> <0|1>` terms
joined by `&&` / `||`, and extracts the referenced variable names in the
order they appear.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Set, Tuple

from ..errors import (
    CombinatorError,
    ExpressionSyntaxError,
    FormatError,
    InvalidCharacterError,
)
from .lexer import (
    COMBINATOR,
    COMBINATORS,
    COMPARATOR,
    COMPARATORS,
    IDENT,
    NUMBER,
    UNKNOWN,
    Token,
    tokenize,
)

logger = logging.getLogger(__name__)

FORMAT_MESSAGE = "Invalid expression, required format 'variable == 1 or 0'"
COMBINATOR_MESSAGE = "Invalid expression, allowed combinators && or ||"
CHARACTER_MESSAGE = "Invalid expression, invalid character"

BINARY_LITERALS = ("0", "1")


@dataclass(frozen=True)
class ValidatedExpression:
    """An expression string with the variables it references."""
    text: str
    variables: Tuple[str, ...]


class SyntaxValidator:
    """
    Validates expressions such as:
        "a == 1 && b == 0"
        "(seg.country == 1 || seg.region == 1) && opt-in != 0"

    Validation runs three passes over the token stream, in order:
    comparator/literal shape, combinators, then unknown characters.
    The first offending token of the earliest failing pass is reported.
    Parentheses are not balance-checked here.
    """

    def validate(self, expression: str) -> List[str]:
        """
        Validate an expression and extract its variables.

        Args:
            expression: The raw expression string.

        Returns:
            Variable names in order of appearance, duplicates retained.

        Raises:
            FormatError: Bad comparator/literal shape or no variables.
            CombinatorError: Operator other than `&&` / `||`.
            InvalidCharacterError: Character outside the expression alphabet.
        """
        if not isinstance(expression, str):
            raise FormatError(
                f"Expected string expression, got {type(expression).__name__}"
            )

        tokens = tokenize(expression)

        self._check_comparisons(expression, tokens)
        self._check_combinators(expression, tokens)
        self._check_characters(expression, tokens)

        variables = [t.text for t in tokens if t.kind == IDENT]
        if not variables:
            raise FormatError(
                f"{FORMAT_MESSAGE}: expression references no variables",
                expression,
            )

        logger.debug("Validated %r: variables=%s", expression, variables)
        return variables

    def validate_expression(self, expression: str) -> ValidatedExpression:
        """Validate and wrap an expression with its variables."""
        return ValidatedExpression(expression, tuple(self.validate(expression)))

    def _check_comparisons(self, expression: str, tokens: List[Token]) -> None:
        """Check comparator/literal pairs and reject stray numbers."""
        literals: Set[int] = set()

        for i, token in enumerate(tokens):
            if token.kind != COMPARATOR:
                continue

            if token.text not in COMPARATORS:
                raise FormatError(
                    f"{FORMAT_MESSAGE}: unsupported comparator '{token.text}'",
                    expression,
                    token.position,
                )

            operand = tokens[i + 1] if i + 1 < len(tokens) else None
            if operand is None or operand.kind not in (NUMBER, IDENT):
                raise FormatError(
                    f"{FORMAT_MESSAGE}: missing literal after '{token.text}'",
                    expression,
                    token.position,
                )
            if operand.text not in BINARY_LITERALS:
                raise FormatError(
                    f"{FORMAT_MESSAGE}: literal '{operand.text}' is not 0 or 1",
                    expression,
                    operand.position,
                )
            literals.add(i + 1)

        for i, token in enumerate(tokens):
            if token.kind == NUMBER and i not in literals:
                raise FormatError(
                    f"{FORMAT_MESSAGE}: literal '{token.text}' without comparator",
                    expression,
                    token.position,
                )

    def _check_combinators(self, expression: str, tokens: List[Token]) -> None:
        for token in tokens:
            if token.kind == COMBINATOR and token.text not in COMBINATORS:
                raise CombinatorError(
                    f"{COMBINATOR_MESSAGE}: got '{token.text}'",
                    expression,
                    token.position,
                )

    def _check_characters(self, expression: str, tokens: List[Token]) -> None:
        for token in tokens:
            if token.kind == UNKNOWN:
                raise InvalidCharacterError(
                    f"{CHARACTER_MESSAGE} '{token.text}'",
                    expression,
                    token.position,
                )

    def check(self, expression: str) -> Tuple[bool, Optional[str]]:
        """
        Validate an expression without raising.

        Returns:
            Tuple of (is_valid, error_message).
        """
        try:
            self.validate(expression)
            return True, None
        except ExpressionSyntaxError as e:
            return False, str(e)


def validate_format(expression: str) -> List[str]:
    """Convenience function returning the variables of an expression."""
    return SyntaxValidator().validate(expression)
