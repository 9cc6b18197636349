"""
Base exceptions for user-facing errors.

All expected errors that should be displayed to the user
as clean messages (without stack traces) must inherit from HelmishUserError.

Programming errors and bugs should NOT inherit from HelmishUserError:
they will propagate with full tracebacks.
"""

from __future__ import annotations

from typing import Optional


class HelmishUserError(Exception):
    """
    Base class for all user-facing errors in helmish.

    These errors indicate problems that the user can fix:
    malformed templates, missing values, broken chart files, etc.
    """
    pass


class TemplateError(HelmishUserError):
    """
    Error tied to a concrete place in a template document.

    Carries the offending expression and the source line so that callers
    can report the failure without re-parsing the document.
    """

    def __init__(self, message: str, expression: str = "", line: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.expression = expression
        self.line = line

    def with_line(self, line: int) -> "TemplateError":
        """Attaches a source line if the error does not have one yet."""
        if self.line is None:
            self.line = line
        return self

    def __str__(self) -> str:
        where = f"line {self.line}: " if self.line is not None else ""
        expr = f" (expression: {self.expression!r})" if self.expression else ""
        return f"{where}{self.message}{expr}"


class MalformedConditionError(TemplateError):
    """Condition text does not match any supported shape."""
    pass


class UnresolvedExpressionError(TemplateError):
    """Expression cannot be resolved against the value context."""
    pass


class ChartLoadError(HelmishUserError):
    """Chart directory or one of its files cannot be loaded."""
    pass


__all__ = [
    "HelmishUserError",
    "TemplateError",
    "MalformedConditionError",
    "UnresolvedExpressionError",
    "ChartLoadError",
]
