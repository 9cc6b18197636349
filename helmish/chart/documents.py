"""
Splitting of multi-document template files.
"""

from __future__ import annotations

import re
from typing import List, Tuple

from ..rendering.lexer import split_lines

DOCUMENT_SEPARATOR = "---"

# unindented "---", optionally followed by whitespace or a comment
_SEPARATOR_LINE = re.compile(rf"^{re.escape(DOCUMENT_SEPARATOR)}(?:\s|#|$)")


def split_documents(text: str) -> List[Tuple[str, int]]:
    """
    Splits a file on document separator lines.

    A separator is ``---`` at the start of a line followed by nothing,
    whitespace or a comment; an indented ``---`` (e.g. inside a block scalar)
    is content. Separator lines are dropped together with anything after
    the ``---``; documents containing only whitespace are skipped. Line
    numbers stay relative to the whole file.

    Returns:
        List of tuples (document text, line number of its first line)
    """
    documents: List[Tuple[str, int]] = []
    current: List[str] = []
    first_line = 1

    for number, line in enumerate(split_lines(text), start=1):
        if _SEPARATOR_LINE.match(line):
            _flush(documents, current, first_line)
            current = []
            first_line = number + 1
            continue
        current.append(line)
    _flush(documents, current, first_line)
    return documents


def _flush(documents: List[Tuple[str, int]], lines: List[str], first_line: int) -> None:
    body = "".join(lines)
    if body.strip():
        documents.append((body, first_line))


__all__ = ["split_documents", "DOCUMENT_SEPARATOR"]
