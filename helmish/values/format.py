"""
Textual form and truthiness of resolved values.
"""

from __future__ import annotations

from typing import Any, Mapping

NO_VALUE = "<no value>"


def is_truthy(value: Any) -> bool:
    """
    Maps a resolved value to a branching decision.

    Rules:
    - bool is itself
    - text "true"/"false" map to their boolean meaning
    - any other non-empty text is truthy, empty text is falsy
    - None is falsy
    - any other type (numbers, mappings, lists) is truthy
    """
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    if isinstance(value, str):
        if value == "true":
            return True
        if value == "false":
            return False
        return value != ""
    return True


def format_value(value: Any) -> str:
    """
    Renders a resolved value the way the templating engine prints it.

    Scalars print bare, mappings as ``map[k:v ...]`` with sorted keys,
    sequences as ``[a b]``; a missing top-level value prints as ``<no value>``.
    """
    if value is None:
        return NO_VALUE
    return _format(value)


def _format(value: Any) -> str:
    if value is None:
        return "<nil>"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value
    if isinstance(value, float):
        return str(int(value)) if value.is_integer() else repr(value)
    if isinstance(value, Mapping):
        items = sorted(value.items(), key=lambda kv: str(kv[0]))
        return "map[" + " ".join(f"{k}:{_format(v)}" for k, v in items) + "]"
    if isinstance(value, (list, tuple)):
        return "[" + " ".join(_format(v) for v in value) + "]"
    return str(value)


__all__ = ["NO_VALUE", "is_truthy", "format_value"]
