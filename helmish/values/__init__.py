"""
Value context: dotted-path resolution, textual form and truthiness of values.
"""

from .context import ValueContext, is_path, is_simple_expression
from .format import NO_VALUE, format_value, is_truthy

__all__ = [
    "ValueContext",
    "is_path",
    "is_simple_expression",
    "format_value",
    "is_truthy",
    "NO_VALUE",
]
