"""
Value context for template expressions.

Resolves dotted-path expressions (``.Values.image.tag``, ``.Chart.Name``)
against the chart values and metadata trees.
"""

from __future__ import annotations

import ast
import logging
import re
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Sequence

from ..errors import UnresolvedExpressionError
from .format import format_value

logger = logging.getLogger(__name__)

# $, ., .a, .a.b, $.a.b, .list.0
_PATH = re.compile(r"^\$?(?:\.|(?:\.[A-Za-z0-9_-]+)+)$|^\$$")
_STRING = re.compile(r'^"(?:[^"\\]|\\.)*"$|^`[^`]*`$')
_NUMBER = re.compile(r"^-?\d+(?:\.\d+)?$")

_LITERALS: Dict[str, Any] = {"true": True, "false": False, "nil": None}

VALUES_ROOT = "Values"
CHART_ROOT = "Chart"
CAPABILITIES_ROOT = "Capabilities"

# Roots whose keys follow Helm's capitalized accessors over lower-case files
_FOLDED_ROOTS = (CHART_ROOT, CAPABILITIES_ROOT)


def is_path(expression: str) -> bool:
    """Checks that the expression is a dotted path."""
    return bool(_PATH.match(expression))


def is_literal(expression: str) -> bool:
    return (
        expression in _LITERALS
        or bool(_STRING.match(expression))
        or bool(_NUMBER.match(expression))
    )


def is_simple_expression(expression: str) -> bool:
    """Checks that the expression is something the context can resolve."""
    return is_path(expression) or is_literal(expression)


@dataclass(frozen=True)
class ValueContext:
    """
    Read-only data against which template expressions are resolved.

    Attributes:
        values: Merged chart values (``.Values``)
        metadata: Chart metadata from Chart.yaml (``.Chart``)
        capabilities: Cluster capabilities of the active profile (``.Capabilities``)
    """
    values: Mapping[str, Any] = field(default_factory=dict)
    metadata: Mapping[str, Any] = field(default_factory=dict)
    capabilities: Mapping[str, Any] = field(default_factory=dict)

    def roots(self) -> Dict[str, Any]:
        return {
            VALUES_ROOT: self.values,
            CHART_ROOT: self.metadata,
            CAPABILITIES_ROOT: self.capabilities,
        }

    def resolve(self, expression: str) -> Any:
        """
        Resolves an expression.

        A key missing from a mapping resolves to None; stepping further into
        None, into a scalar or past the end of a list is a lookup failure.

        Args:
            expression: Dotted path or literal

        Returns:
            Resolved value (None for missing keys)

        Raises:
            UnresolvedExpressionError: If the expression cannot be resolved
        """
        expression = expression.strip()
        if is_literal(expression):
            return self._literal(expression)
        if not is_path(expression):
            raise UnresolvedExpressionError("unsupported expression", expression)

        segments = [s for s in expression.lstrip("$").split(".") if s]
        current: Any = self.roots()
        folded = False
        walked = ""
        for segment in segments:
            if current is None:
                raise UnresolvedExpressionError(
                    f"nil pointer evaluating {walked or '.'}.{segment}", expression
                )
            if isinstance(current, Mapping):
                if not walked and segment not in current:
                    raise UnresolvedExpressionError(f"unknown root '{segment}'", expression)
                current = self._lookup(current, segment, folded)
                if not walked:
                    folded = segment in _FOLDED_ROOTS
            elif isinstance(current, Sequence) and not isinstance(current, str) and segment.isdigit():
                index = int(segment)
                if index >= len(current):
                    raise UnresolvedExpressionError(
                        f"index {index} out of range at {walked}", expression
                    )
                current = current[index]
            else:
                raise UnresolvedExpressionError(
                    f"can't evaluate field {segment} in type {type(current).__name__}", expression
                )
            walked += "." + segment

        logger.debug("Resolved %s -> %r", expression, current)
        return current

    def resolve_text(self, expression: str) -> str:
        """Resolves an expression and returns its textual form."""
        return format_value(self.resolve(expression))

    @staticmethod
    def _lookup(mapping: Mapping[str, Any], key: str, folded: bool) -> Optional[Any]:
        if key in mapping:
            return mapping[key]
        if folded and key:
            lowered = key[0].lower() + key[1:]
            if lowered in mapping:
                return mapping[lowered]
        return None

    @staticmethod
    def _literal(expression: str) -> Any:
        if expression in _LITERALS:
            return _LITERALS[expression]
        if _NUMBER.match(expression):
            return float(expression) if "." in expression else int(expression)
        if expression.startswith("`"):
            return expression[1:-1]
        # double-quoted: standard backslash escapes (\n, \t, \", \u00e9, ...)
        try:
            return ast.literal_eval(expression)
        except (SyntaxError, ValueError) as e:
            raise UnresolvedExpressionError(f"invalid string literal: {e}", expression) from e


__all__ = [
    "ValueContext",
    "is_path",
    "is_literal",
    "is_simple_expression",
    "VALUES_ROOT",
    "CHART_ROOT",
    "CAPABILITIES_ROOT",
]
