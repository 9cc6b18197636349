"""
Text views of rendered token streams.
"""

from __future__ import annotations

from itertools import groupby
from typing import Iterable, List, Sequence

from .rendering import Token

DOCUMENT_JOINER = "\n---\n"


def _lines(tokens: Sequence[Token]) -> List[List[Token]]:
    ordered = sorted(tokens, key=lambda t: t.line)  # stable: keeps order within a line
    return [list(group) for _, group in groupby(ordered, key=lambda t: t.line)]


def format_raw(tokens: Sequence[Token]) -> str:
    """Concatenation of token values."""
    return "".join(t.value for t in tokens)


def format_text(tokens: Sequence[Token]) -> str:
    """
    Rendered document grouped by source line.

    Lines left blank by resolved markers are dropped.
    """
    lines: List[str] = []
    for group in _lines(tokens):
        text = "".join(t.value for t in group).rstrip("\n")
        if text.strip():
            lines.append(text)
    return "\n".join(lines)


def format_annotated(tokens: Sequence[Token]) -> str:
    """
    Debug view: ``Kind: value`` entries per source line, indented by the
    line's recorded indentation.
    """
    lines: List[str] = []
    for group in _lines(tokens):
        parts = [f"{t.kind.value}: {t.value.strip()}" for t in group if t.value.strip()]
        if parts:
            lines.append(" " * group[0].indent + " ".join(parts))
    return "\n".join(lines)


def join_documents(rendered: Iterable[str]) -> str:
    return DOCUMENT_JOINER.join(rendered)


FORMATTERS = {
    "text": format_text,
    "raw": format_raw,
    "annotated": format_annotated,
}


__all__ = ["format_raw", "format_text", "format_annotated", "join_documents", "FORMATTERS"]
