"""
Data models for conditional expressions.

A condition is one of three shapes:
- a single operand: ``.Values.enabled``
- a prefix form: ``and .Values.a .Values.b``, ``not .Values.a``
- an infix form: ``.Values.a or .Values.b``
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple, Union


class ConditionType(Enum):
    """Condition word and operator types."""
    OPERAND = "operand"
    AND = "and"
    OR = "or"
    NOT = "not"


@dataclass(frozen=True)
class OperandCondition:
    """
    Single operand: a dotted-path expression.

    True if the expression resolves to a truthy value.
    """
    expression: str

    def __str__(self) -> str:
        return self.expression


@dataclass(frozen=True)
class PrefixCondition:
    """
    Prefix operator applied to the remaining operands.

    - AND: every operand is truthy (one or more operands)
    - OR: any operand is truthy (one or more operands)
    - NOT: the single operand is falsy
    """
    operator: ConditionType
    operands: Tuple[str, ...]

    def __str__(self) -> str:
        return " ".join((self.operator.value,) + self.operands)


@dataclass(frozen=True)
class InfixCondition:
    """Binary operation ``left op right`` with op AND or OR."""
    left: str
    operator: ConditionType
    right: str

    def __str__(self) -> str:
        return f"{self.left} {self.operator.value} {self.right}"


# Combined type for all conditions
Condition = Union[OperandCondition, PrefixCondition, InfixCondition]

__all__ = [
    "Condition",
    "ConditionType",
    "OperandCondition",
    "PrefixCondition",
    "InfixCondition",
]
