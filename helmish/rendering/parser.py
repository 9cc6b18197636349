"""
Block parser for template documents.

Turns the flat token stream into a tree where ``{{if}}``/``{{else}}``/``{{end}}``
markers become ConditionalNode structure. Nesting is tracked with an explicit
stack of open conditionals, so depth is limited only by memory.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Sequence, Tuple

from ..conditions.model import Condition
from ..conditions.parser import ConditionParser
from .lexer import strip_marker, tokenize_document
from .nodes import ActionNode, ConditionalNode, Node, TemplateAST, TextNode
from .tokens import Token, TokenKind

logger = logging.getLogger(__name__)


def condition_text(token: Token) -> str:
    """Extracts the condition from an ``{{if ...}}`` marker."""
    inner = strip_marker(token.value)
    return inner[len("if"):].strip()


@dataclass
class _OpenConditional:
    """Conditional whose ``{{end}}`` has not been reached yet."""
    opener: Token
    condition: Condition
    then_branch: List[Node] = field(default_factory=list)
    else_branch: List[Node] = field(default_factory=list)
    in_else: bool = False

    def branch(self) -> List[Node]:
        return self.else_branch if self.in_else else self.then_branch

    def close(self) -> ConditionalNode:
        return ConditionalNode(
            token=self.opener,
            condition=self.condition,
            then_branch=tuple(self.then_branch),
            else_branch=tuple(self.else_branch),
        )


class TemplateParser:
    """
    Block parser over classified tokens.

    Tolerates unterminated conditionals (the branch ends at end of input)
    and ignores ``{{else}}``/``{{end}}`` markers without a matching opener.
    """

    def __init__(self, tokens: Sequence[Token]):
        """
        Args:
            tokens: Classified tokens of one document
        """
        self.tokens = tokens
        self.position = 0
        self.condition_parser = ConditionParser()

    def parse(self) -> TemplateAST:
        """
        Parses all tokens.

        Returns:
            Top-level nodes of the document

        Raises:
            MalformedConditionError: If a condition cannot be parsed
        """
        root: List[Node] = []
        stack: List[_OpenConditional] = []

        self.position = 0
        while self.position < len(self.tokens):
            token = self.tokens[self.position]
            self.position += 1
            current = stack[-1].branch() if stack else root

            if token.kind == TokenKind.TEXT:
                current.append(TextNode(token))
            elif token.kind == TokenKind.ACTION:
                current.append(ActionNode(token))
            elif token.kind == TokenKind.CONDITIONAL_OPEN:
                condition = self.condition_parser.parse(condition_text(token), token.line)
                stack.append(_OpenConditional(opener=token, condition=condition))
            elif token.kind == TokenKind.CONDITIONAL_ELSE and stack and not stack[-1].in_else:
                stack[-1].in_else = True
            elif token.kind == TokenKind.CONDITIONAL_CLOSE and stack:
                node = stack.pop().close()
                (stack[-1].branch() if stack else root).append(node)
            else:
                logger.debug("Skipping stray %s at line %d", token.kind.name, token.line)

        while stack:
            block = stack.pop()
            logger.warning(
                "Unterminated conditional opened at line %d; closing at end of input",
                block.opener.line,
            )
            (stack[-1].branch() if stack else root).append(block.close())

        return root


def parse_tokens(tokens: Sequence[Token]) -> TemplateAST:
    """Parses classified tokens into an AST."""
    return TemplateParser(tokens).parse()


def parse_template(text: str, first_line: int = 1) -> Tuple[TemplateAST, List[Token]]:
    """
    Tokenizes and parses a document.

    Returns:
        Tuple (AST, source tokens)
    """
    tokens = tokenize_document(text, first_line)
    return parse_tokens(tokens), tokens


__all__ = ["TemplateParser", "parse_tokens", "parse_template", "condition_text"]
