"""
Parser for conditional expressions.

Grammar (words are whitespace separated):
condition → OPERAND
          | "not" OPERAND
          | ("and" | "or") OPERAND+
          | OPERAND ("and" | "or") OPERAND
"""

from __future__ import annotations

import logging
from typing import List, Optional

from ..errors import MalformedConditionError
from .lexer import ConditionLexer, Token
from .model import (
    Condition,
    ConditionType,
    InfixCondition,
    OperandCondition,
    PrefixCondition,
)

logger = logging.getLogger(__name__)

_BINARY = (ConditionType.AND, ConditionType.OR)


class ConditionParser:
    """
    Parser for the condition text of ``{{if ...}}`` markers.

    Recognizes the single-operand, prefix and infix shapes; everything
    else is rejected with MalformedConditionError.
    """

    def __init__(self):
        self.lexer = ConditionLexer()

    def parse(self, condition_str: str, line: Optional[int] = None) -> Condition:
        """
        Parses a condition string.

        Args:
            condition_str: Text following the ``if`` keyword
            line: Source line used in error reports

        Returns:
            Parsed condition

        Raises:
            MalformedConditionError: If the words do not form a known shape
        """
        words = self.lexer.tokenize(condition_str)
        logger.debug("Parsing condition %r -> %r", condition_str, words)

        if len(words) == 1 and words[0].type == ConditionType.OPERAND:
            return OperandCondition(expression=words[0].value)

        if words and words[0].type in (ConditionType.AND, ConditionType.OR, ConditionType.NOT):
            return self._parse_prefix(words, condition_str, line)

        if (
            len(words) == 3
            and words[0].type == ConditionType.OPERAND
            and words[1].type in _BINARY
            and words[2].type == ConditionType.OPERAND
        ):
            return InfixCondition(left=words[0].value, operator=words[1].type, right=words[2].value)

        raise MalformedConditionError("invalid condition structure", condition_str, line)

    def _parse_prefix(self, words: List[Token], condition_str: str, line: Optional[int]) -> PrefixCondition:
        operator = words[0].type
        operands = words[1:]

        if operator == ConditionType.NOT:
            if len(operands) != 1 or operands[0].type != ConditionType.OPERAND:
                raise MalformedConditionError("not expects one expression", condition_str, line)
            return PrefixCondition(operator=operator, operands=(operands[0].value,))

        if not operands or any(word.type != ConditionType.OPERAND for word in operands):
            raise MalformedConditionError(
                f"expected expression after {operator.value}", condition_str, line
            )
        return PrefixCondition(operator=operator, operands=tuple(word.value for word in operands))


def parse_condition(condition_str: str, line: Optional[int] = None) -> Condition:
    """Convenience wrapper around ConditionParser.parse."""
    return ConditionParser().parse(condition_str, line)


__all__ = ["ConditionParser", "parse_condition"]
