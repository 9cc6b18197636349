"""
Lexical analyzer for templated YAML documents.

Splits a document into Text and marker tokens. Markers are delimited by
``{{`` and ``}}`` and may nest (``{{ include "x" (dict "a" "{{b}}") }}``) or
span several physical lines. Each marker is classified as a conditional
opener/else/closer or a generic action.
"""

from __future__ import annotations

import logging
import re
from typing import List, Tuple

from .tokens import CLOSE_MARKER, OPEN_MARKER, Token, TokenKind

logger = logging.getLogger(__name__)

_IF_KEYWORD = re.compile(r"^if\b")


def strip_marker(raw: str) -> str:
    """
    Returns the inner text of a marker without delimiters and whitespace.

    Helm whitespace-trim markers (``{{- `` and `` -}}``) are removed too.
    The caller is responsible for checking that ``raw`` is a well-formed marker.
    """
    inner = raw.strip()[len(OPEN_MARKER):-len(CLOSE_MARKER)]
    if inner.startswith("- ") or inner == "-":
        inner = inner[1:]
    if inner.endswith(" -"):
        inner = inner[:-1]
    return inner.strip()


def is_well_formed_marker(raw: str) -> bool:
    """Checks that the text is enclosed in both marker delimiters."""
    text = raw.strip()
    return (
        len(text) >= len(OPEN_MARKER) + len(CLOSE_MARKER)
        and text.startswith(OPEN_MARKER)
        and text.endswith(CLOSE_MARKER)
    )


def classify_marker(raw: str) -> TokenKind:
    """
    Determines the kind of a marker token from its full raw text.

    Args:
        raw: Marker text including the enclosing delimiters

    Returns:
        CONDITIONAL_OPEN, CONDITIONAL_ELSE, CONDITIONAL_CLOSE or ACTION.
        Malformed markers are always ACTION.
    """
    if not is_well_formed_marker(raw):
        return TokenKind.ACTION

    inner = strip_marker(raw)
    if inner == "else":
        return TokenKind.CONDITIONAL_ELSE
    if inner == "end":
        return TokenKind.CONDITIONAL_CLOSE
    if _IF_KEYWORD.match(inner):
        return TokenKind.CONDITIONAL_OPEN
    return TokenKind.ACTION


class TemplateLexer:
    """
    Lexer for a single block of template text.

    Scans the text character by character:
    - outside markers, text is accumulated and split at newlines
      (the newline stays with the text it terminates);
    - inside markers, nested ``{{``/``}}`` pairs are counted so that the
      marker ends only when the depth returns to zero.

    A conditional marker that is alone on its line absorbs its leading
    indentation and the trailing newline, so removing a resolved
    conditional does not leave blank lines behind.
    """

    def __init__(self, text: str, start_line: int = 1, indent: int = 0):
        """
        Args:
            text: Raw block text
            start_line: Line number of the first character (1-based)
            indent: Indentation recorded on every produced token
        """
        self.text = text
        self.start_line = start_line
        self.indent = indent
        self.length = len(text)

    def tokenize(self) -> List[Token]:
        """
        Tokenizes the whole text.

        Returns:
            Tokens covering the entire input in order, with no gaps or overlaps
        """
        tokens: List[Token] = []
        text = self.text
        pos = 0
        line = self.start_line
        line_start = 0  # offset of the current physical line

        while pos < self.length:
            if text.startswith(OPEN_MARKER, pos):
                end, newlines, closed = self._scan_marker(pos)
                raw = text[pos:end]
                kind = classify_marker(raw)
                if not closed:
                    logger.warning(
                        "Unterminated template marker at line %d: %r", line, raw[:40]
                    )

                token_start = pos
                token_end = end
                if kind.is_conditional() and closed:
                    token_start, token_end = self._standalone_span(pos, end, line_start)
                    if token_start < pos:
                        # leading indentation was already emitted as text; take it back
                        tokens.pop()

                tokens.append(Token(kind, text[token_start:token_end], line, self.indent))
                line += newlines
                if token_end > end:
                    line += 1
                    line_start = token_end
                elif newlines:
                    line_start = text.rfind("\n", pos, end) + 1
                pos = token_end
                continue

            start = pos
            while pos < self.length and not text.startswith(OPEN_MARKER, pos):
                if text[pos] == "\n":
                    pos += 1
                    break
                pos += 1
            value = text[start:pos]
            if value:
                tokens.append(Token(TokenKind.TEXT, value, line, self.indent))
            if value.endswith("\n"):
                line += 1
                line_start = pos

        return tokens

    def _scan_marker(self, start: int) -> Tuple[int, int, bool]:
        """
        Scans a marker region starting at ``{{``.

        Returns:
            Tuple (end offset, newlines inside the marker, closed flag).
            An unterminated marker ends at the end of input.
        """
        text = self.text
        pos = start + len(OPEN_MARKER)
        depth = 1
        newlines = 0
        while pos < self.length and depth > 0:
            if text[pos] == "\n":
                newlines += 1
                pos += 1
            elif text.startswith(OPEN_MARKER, pos):
                depth += 1
                pos += len(OPEN_MARKER)
            elif text.startswith(CLOSE_MARKER, pos):
                depth -= 1
                pos += len(CLOSE_MARKER)
            else:
                pos += 1
        return pos, newlines, depth == 0

    def _standalone_span(self, start: int, end: int, line_start: int) -> Tuple[int, int]:
        """
        Widens a conditional marker to its whole line if it stands alone there.

        Returns:
            The (start, end) span of the token
        """
        text = self.text
        before = text[line_start:start]
        if before.strip():
            return start, end

        after = end
        while after < self.length and text[after] in " \t\r":
            after += 1
        if after < self.length and text[after] != "\n":
            return start, end
        if after < self.length:
            after += 1
        return line_start, after


def split_lines(text: str) -> List[str]:
    """
    Splits text into physical lines, keeping each trailing ``\\n``.

    Only ``\\n`` ends a line, matching the lexer's line counting
    (``str.splitlines`` also breaks on ``\\r`` and other separators).
    """
    lines = [line + "\n" for line in text.split("\n")]
    lines[-1] = lines[-1][:-1]
    if not lines[-1]:
        lines.pop()
    return lines


def _leading_indent(line: str) -> int:
    return len(line) - len(line.lstrip(" "))


def _marker_depth(line: str, depth: int) -> int:
    """Updates the marker nesting depth after scanning one physical line."""
    pos = 0
    while pos < len(line):
        if line.startswith(OPEN_MARKER, pos):
            depth += 1
            pos += len(OPEN_MARKER)
        elif depth > 0 and line.startswith(CLOSE_MARKER, pos):
            depth -= 1
            pos += len(CLOSE_MARKER)
        else:
            pos += 1
    return depth


def split_blocks(text: str, first_line: int = 1) -> List[Tuple[str, int, int]]:
    """
    Splits a document into blocks.

    Every physical line is its own block, except that a line leaving a marker
    open starts a multi-line block that extends up to the line closing it.
    Each block keeps its trailing newline.

    Returns:
        List of tuples (block text, first line number, indentation)
    """
    lines = split_lines(text)
    blocks: List[Tuple[str, int, int]] = []
    i = 0
    while i < len(lines):
        start = i
        depth = _marker_depth(lines[i], 0)
        i += 1
        while depth > 0 and i < len(lines):
            depth = _marker_depth(lines[i], depth)
            i += 1
        blocks.append(("".join(lines[start:i]), first_line + start, _leading_indent(lines[start])))
    return blocks


def tokenize_document(text: str, first_line: int = 1) -> List[Token]:
    """
    Tokenizes a whole template document block by block.

    Args:
        text: Raw document text
        first_line: Line number of the first document line in its source file

    Returns:
        Flat list of classified tokens
    """
    tokens: List[Token] = []
    for block, line, indent in split_blocks(text, first_line):
        tokens.extend(TemplateLexer(block, line, indent).tokenize())
    return tokens


__all__ = [
    "TemplateLexer",
    "classify_marker",
    "strip_marker",
    "is_well_formed_marker",
    "split_blocks",
    "split_lines",
    "tokenize_document",
]
