"""
Evaluator of conditional expressions.

Resolves the operands of a parsed condition against a value context and
combines their truthiness.
"""

from __future__ import annotations

from typing import List, Optional

from ..errors import TemplateError
from ..values import ValueContext, is_truthy
from .model import (
    Condition,
    ConditionType,
    InfixCondition,
    OperandCondition,
    PrefixCondition,
)


class EvaluationError(TemplateError):
    """Condition of an unknown shape reached the evaluator."""
    pass


class ConditionEvaluator:
    """
    Evaluator of conditional expressions.

    Every operand is resolved even when the result is already known, so a
    lookup error anywhere in the condition is always reported.
    """

    def __init__(self, context: ValueContext):
        """
        Args:
            context: Value context for operand lookups
        """
        self.context = context

    def evaluate(self, condition: Condition, line: Optional[int] = None) -> bool:
        """
        Computes the value of a condition.

        Args:
            condition: Parsed condition
            line: Source line attached to lookup errors

        Returns:
            Boolean result

        Raises:
            UnresolvedExpressionError: If an operand cannot be resolved
            EvaluationError: For an unknown condition type
        """
        try:
            if isinstance(condition, OperandCondition):
                return self._truth(condition.expression)
            if isinstance(condition, PrefixCondition):
                return self._evaluate_prefix(condition)
            if isinstance(condition, InfixCondition):
                return self._combine(condition.operator, [
                    self._truth(condition.left),
                    self._truth(condition.right),
                ])
        except TemplateError as e:
            if line is not None:
                e.with_line(line)
            raise
        raise EvaluationError(f"Unknown condition type: {type(condition).__name__}", str(condition), line)

    def _evaluate_prefix(self, condition: PrefixCondition) -> bool:
        results = [self._truth(operand) for operand in condition.operands]
        if condition.operator == ConditionType.NOT:
            return not results[0]
        return self._combine(condition.operator, results)

    @staticmethod
    def _combine(operator: ConditionType, results: List[bool]) -> bool:
        if operator == ConditionType.AND:
            return all(results)
        if operator == ConditionType.OR:
            return any(results)
        raise EvaluationError(f"unsupported operator: {operator.value}")

    def _truth(self, expression: str) -> bool:
        return is_truthy(self.context.resolve(expression))


def evaluate_condition_string(condition_str: str, context: ValueContext) -> bool:
    """
    Convenience function: parses and evaluates a condition string.

    Raises:
        MalformedConditionError: On a parse error
        UnresolvedExpressionError: On a lookup error
    """
    from .parser import ConditionParser

    parser = ConditionParser()
    ast = parser.parse(condition_str)

    evaluator = ConditionEvaluator(context)
    return evaluator.evaluate(ast)
