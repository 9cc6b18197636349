"""
Lexer for conditional expressions.

Splits condition text on whitespace and classifies each word as a logical
keyword (and, or, not) or an operand. Operands are not validated here.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List

from .model import ConditionType


@dataclass(frozen=True)
class Token:
    """
    Condition word.

    Attributes:
        type: Word type (OPERAND, AND, OR, NOT)
        value: Word text
        position: Offset in the condition text
    """
    type: ConditionType
    value: str
    position: int

    def __repr__(self):
        return f"Token({self.type.name}, '{self.value}', pos={self.position})"


class ConditionLexer:
    """Splits a condition string into classified words."""

    _WORD = re.compile(r"\S+")

    KEYWORDS = {
        "and": ConditionType.AND,
        "or": ConditionType.OR,
        "not": ConditionType.NOT,
    }

    def tokenize(self, text: str) -> List[Token]:
        """
        Args:
            text: Condition text (what follows the ``if`` keyword)

        Returns:
            Words in order; empty for blank text
        """
        return [
            Token(
                type=self.KEYWORDS.get(match.group(0), ConditionType.OPERAND),
                value=match.group(0),
                position=match.start(),
            )
            for match in self._WORD.finditer(text)
        ]
