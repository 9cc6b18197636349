"""
Conditional expressions of ``{{if ...}}`` markers: model, parsing, evaluation.
"""

from .evaluator import ConditionEvaluator, EvaluationError, evaluate_condition_string
from .model import (
    Condition,
    ConditionType,
    InfixCondition,
    OperandCondition,
    PrefixCondition,
)
from .parser import ConditionParser, parse_condition

__all__ = [
    "Condition",
    "ConditionType",
    "OperandCondition",
    "PrefixCondition",
    "InfixCondition",
    "ConditionParser",
    "parse_condition",
    "ConditionEvaluator",
    "EvaluationError",
    "evaluate_condition_string",
]
