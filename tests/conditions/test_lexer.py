"""
Tests for the condition lexer.
"""

from helmish.conditions.lexer import ConditionLexer
from helmish.conditions.model import ConditionType


class TestConditionLexer:

    def setup_method(self):
        self.lexer = ConditionLexer()

    def test_empty_string(self):
        """Test that blank text yields no words"""
        assert self.lexer.tokenize("") == []
        assert self.lexer.tokenize("   \t ") == []

    def test_keywords(self):
        """Test recognition of logical keywords"""
        words = self.lexer.tokenize("and or not")
        assert [w.type for w in words] == [ConditionType.AND, ConditionType.OR, ConditionType.NOT]

    def test_keywords_are_case_sensitive(self):
        """Test that upper-case keywords are plain operands"""
        words = self.lexer.tokenize("AND Not")
        assert all(w.type == ConditionType.OPERAND for w in words)

    def test_operands_are_not_validated(self):
        """Test that unusual words are still operands"""
        words = self.lexer.tokenize('.Values.a (eq 1) "x"')
        assert [w.value for w in words] == [".Values.a", "(eq", "1)", '"x"']
        assert all(w.type == ConditionType.OPERAND for w in words)

    def test_positions(self):
        """Test word offsets"""
        words = self.lexer.tokenize(".a  and .b")
        assert [w.position for w in words] == [0, 4, 8]
