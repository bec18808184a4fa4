"""
Tokenizer shared by the validator and the expression parser.

The lexer never rejects input. Runs of operator characters and unknown
characters come out as tokens so that each consumer can decide which error
to raise for them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List

IDENT = "ident"
NUMBER = "number"
COMPARATOR = "comparator"
COMBINATOR = "combinator"
LPAREN = "lparen"
RPAREN = "rparen"
UNKNOWN = "unknown"

NAME_PUNCTUATION = "_.-"
COMPARATOR_CHARS = "!=<>"
COMBINATOR_CHARS = "&|"

COMPARATORS = ("==", "!=", ">=", "<=")
COMBINATORS = ("&&", "||")


@dataclass(frozen=True)
class Token:
    """A lexical token with its offset in the source string."""
    kind: str
    text: str
    position: int


def is_name_char(char: str) -> bool:
    """Check whether a character may appear in a variable name."""
    return (char.isascii() and char.isalnum()) or char in NAME_PUNCTUATION


def _scan_run(text: str, start: int, alphabet) -> int:
    end = start
    while end < len(text) and alphabet(text[end]):
        end += 1
    return end


def iter_tokens(text: str) -> Iterator[Token]:
    """Yield tokens from an expression string."""
    i = 0
    while i < len(text):
        char = text[i]

        if char.isspace():
            i += 1
            continue

        if char == "(":
            yield Token(LPAREN, char, i)
            i += 1
        elif char == ")":
            yield Token(RPAREN, char, i)
            i += 1
        elif is_name_char(char):
            end = _scan_run(text, i, is_name_char)
            word = text[i:end]
            kind = NUMBER if word.isdigit() else IDENT
            yield Token(kind, word, i)
            i = end
        elif char in COMPARATOR_CHARS:
            end = _scan_run(text, i, lambda c: c in COMPARATOR_CHARS)
            yield Token(COMPARATOR, text[i:end], i)
            i = end
        elif char in COMBINATOR_CHARS:
            end = _scan_run(text, i, lambda c: c in COMBINATOR_CHARS)
            yield Token(COMBINATOR, text[i:end], i)
            i = end
        else:
            yield Token(UNKNOWN, char, i)
            i += 1


def tokenize(text: str) -> List[Token]:
    """Tokenize an expression string into a list."""
    return list(iter_tokens(text))
