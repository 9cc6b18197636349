"""
Tests for the condition evaluator.
"""

import pytest

from helmish.conditions.evaluator import ConditionEvaluator, evaluate_condition_string
from helmish.conditions.parser import ConditionParser
from helmish.errors import UnresolvedExpressionError
from tests.infrastructure import make_context


class TestConditionEvaluator:

    def setup_method(self):
        self.context = make_context({
            "yes": True,
            "no": False,
            "text_true": "true",
            "text_false": "false",
            "empty": "",
            "word": "hello",
            "zero": 0,
            "nothing": None,
            "nested": {"on": True},
        })
        self.evaluator = ConditionEvaluator(self.context)
        self.parser = ConditionParser()

    def _eval(self, text):
        return self.evaluator.evaluate(self.parser.parse(text))

    @pytest.mark.parametrize("operand,expected", [
        (".Values.yes", True),
        (".Values.no", False),
        (".Values.text_true", True),
        (".Values.text_false", False),
        (".Values.empty", False),
        (".Values.word", True),
        (".Values.zero", True),
        (".Values.nothing", False),
        (".Values.missing", False),
        (".Values.nested", True),
        (".Values.nested.on", True),
    ])
    def test_single_operand_truthiness(self, operand, expected):
        """Test truthiness of resolved values"""
        assert self._eval(operand) is expected
        assert self._eval(f"not {operand}") is (not expected)

    def test_prefix_and(self):
        """Test prefix and over several operands"""
        assert self._eval("and .Values.yes .Values.word .Values.zero") is True
        assert self._eval("and .Values.yes .Values.word .Values.empty") is False
        assert self._eval("and .Values.yes") is True

    def test_prefix_or(self):
        """Test prefix or over several operands"""
        assert self._eval("or .Values.no .Values.empty .Values.word") is True
        assert self._eval("or .Values.no .Values.empty .Values.missing") is False

    @pytest.mark.parametrize("left", [".Values.yes", ".Values.no"])
    @pytest.mark.parametrize("right", [".Values.word", ".Values.empty"])
    @pytest.mark.parametrize("op", ["and", "or"])
    def test_infix_matches_prefix(self, left, right, op):
        """Test that infix forms agree with prefix forms"""
        assert self._eval(f"{left} {op} {right}") == self._eval(f"{op} {left} {right}")

    def test_infix_and_requires_both(self):
        """Test a and b with b false"""
        assert self._eval(".Values.yes and .Values.no") is False

    def test_literals(self):
        """Test literal operands"""
        assert self._eval("true") is True
        assert self._eval("not false") is True
        assert self._eval('""') is False

    def test_all_operands_are_resolved(self):
        """Test that a lookup error is reported even when the result is known"""
        with pytest.raises(UnresolvedExpressionError):
            self._eval(".Values.no and .Unknown.x")
        with pytest.raises(UnresolvedExpressionError):
            self._eval("or .Values.yes .Unknown.x")

    def test_error_gets_line(self):
        """Test that lookup errors carry the marker line"""
        cond = self.parser.parse(".Values.word.length")
        with pytest.raises(UnresolvedExpressionError) as exc:
            self.evaluator.evaluate(cond, line=12)
        assert exc.value.line == 12
        assert exc.value.expression == ".Values.word.length"

    def test_convenience_function(self):
        """Test evaluate_condition_string"""
        assert evaluate_condition_string(".Values.yes or .Values.no", self.context) is True
