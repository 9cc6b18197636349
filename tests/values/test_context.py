"""
Tests for value resolution, formatting and truthiness.
"""

import pytest

from helmish.errors import UnresolvedExpressionError
from helmish.values import NO_VALUE, ValueContext, format_value, is_simple_expression, is_truthy


class TestValueContext:

    def setup_method(self):
        self.ctx = ValueContext(
            values={"image": {"tag": "1.2", "ports": [80, 443]}, "empty": None},
            metadata={"name": "demo", "appVersion": "2.0"},
            capabilities={"KubeVersion": {"Version": "v1.25"}},
        )

    def test_values_path(self):
        """Test nested lookups"""
        assert self.ctx.resolve(".Values.image.tag") == "1.2"
        assert self.ctx.resolve("$.Values.image.tag") == "1.2"
        assert self.ctx.resolve(".Values.image.ports.1") == 443

    def test_missing_key_is_none(self):
        """Test that an absent key resolves to None"""
        assert self.ctx.resolve(".Values.image.digest") is None
        assert self.ctx.resolve_text(".Values.image.digest") == NO_VALUE

    def test_chart_keys_are_folded(self):
        """Test capitalized accessors over lower-case metadata"""
        assert self.ctx.resolve(".Chart.Name") == "demo"
        assert self.ctx.resolve(".Chart.AppVersion") == "2.0"

    def test_values_keys_are_not_folded(self):
        """Test that values lookups are exact"""
        assert self.ctx.resolve(".Values.Image") is None

    def test_literals(self):
        """Test literal expressions"""
        assert self.ctx.resolve("true") is True
        assert self.ctx.resolve("nil") is None
        assert self.ctx.resolve("42") == 42
        assert self.ctx.resolve("-1.5") == -1.5
        assert self.ctx.resolve('"a \\"b\\""') == 'a "b"'
        assert self.ctx.resolve("`raw`") == "raw"

    def test_string_literal_escapes(self):
        """Test standard backslash escapes in double-quoted literals"""
        assert self.ctx.resolve('"a\\tb\\n"') == "a\tb\n"
        assert self.ctx.resolve('"caf\\u00e9"') == "café"
        assert self.ctx.resolve('"back\\\\slash"') == "back\\slash"
        assert self.ctx.resolve("`raw\\n`") == "raw\\n"

    def test_invalid_string_literal(self):
        """Test that a broken escape is a lookup failure"""
        with pytest.raises(UnresolvedExpressionError, match="invalid string literal"):
            self.ctx.resolve('"\\x4"')

    @pytest.mark.parametrize("expression,message", [
        (".Foo.bar", "unknown root 'Foo'"),
        (".Values.empty.x", "nil pointer evaluating .Values.empty.x"),
        (".Values.missing.x", "nil pointer"),
        (".Values.image.tag.x", "can't evaluate field x in type str"),
        (".Values.image.ports.5", "index 5 out of range"),
        ("include \"x\" .", "unsupported expression"),
    ])
    def test_lookup_failures(self, expression, message):
        """Test structural lookup errors"""
        with pytest.raises(UnresolvedExpressionError) as exc:
            self.ctx.resolve(expression)
        assert message in exc.value.message
        assert exc.value.expression == expression

    def test_simple_expression(self):
        """Test detection of resolvable expressions"""
        assert is_simple_expression(".Values.a-b.c_d")
        assert is_simple_expression("$")
        assert is_simple_expression('"x"')
        assert not is_simple_expression(".Values.a | quote")
        assert not is_simple_expression("default 1 .Values.a")


class TestFormatting:

    @pytest.mark.parametrize("value,expected", [
        (None, "<no value>"),
        (True, "true"),
        (False, "false"),
        ("text", "text"),
        (3, "3"),
        (2.0, "2"),
        (0.25, "0.25"),
        ([1, None, "x"], "[1 <nil> x]"),
        ({"b": [1], "a": {"c": False}}, "map[a:map[c:false] b:[1]]"),
    ])
    def test_format_value(self, value, expected):
        """Test textual forms"""
        assert format_value(value) == expected

    @pytest.mark.parametrize("value,expected", [
        (True, True),
        (False, False),
        ("true", True),
        ("false", False),
        ("False", True),
        ("", False),
        ("x", True),
        (None, False),
        (0, True),
        ({}, True),
        ([], True),
    ])
    def test_is_truthy(self, value, expected):
        """Test truthiness rules"""
        assert is_truthy(value) is expected
