"""
Lexical types of the template renderer.

Defines token kinds and the immutable token record shared by the lexer,
the block parser and the evaluator.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass


class TokenKind(enum.Enum):
    """Token kinds in a template document."""
    TEXT = "Text"
    CONDITIONAL_OPEN = "If"
    CONDITIONAL_ELSE = "Else"
    CONDITIONAL_CLOSE = "End"
    ACTION = "Action"

    def is_conditional(self) -> bool:
        return self in (
            TokenKind.CONDITIONAL_OPEN,
            TokenKind.CONDITIONAL_ELSE,
            TokenKind.CONDITIONAL_CLOSE,
        )


@dataclass(frozen=True)
class Token:
    """
    Token with positional information.

    The line is where the token starts (1-based); indent is the number of
    leading spaces of the physical line where the containing block began.
    """
    kind: TokenKind
    value: str
    line: int
    indent: int = 0

    def __repr__(self) -> str:
        return f"Token({self.kind.name}, {self.value!r}, {self.line}:{self.indent})"


OPEN_MARKER = "{{"
CLOSE_MARKER = "}}"


__all__ = ["TokenKind", "Token", "OPEN_MARKER", "CLOSE_MARKER"]
