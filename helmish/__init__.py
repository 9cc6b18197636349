"""
helmish: preview of templated YAML charts.
"""

from .errors import (
    ChartLoadError,
    HelmishUserError,
    MalformedConditionError,
    UnresolvedExpressionError,
)
from .rendering import Token, TokenKind, render
from .values import ValueContext

__all__ = [
    "render",
    "Token",
    "TokenKind",
    "ValueContext",
    "HelmishUserError",
    "MalformedConditionError",
    "UnresolvedExpressionError",
    "ChartLoadError",
]
