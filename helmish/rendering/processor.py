"""
Template processor.

Combines the lexer, the block parser and the condition evaluator: walks the
AST depth-first, resolves conditionals away and substitutes action values,
producing the flat token stream of the rendered document.
"""

from __future__ import annotations

import logging
from typing import Iterator, List, Sequence

from ..conditions.evaluator import ConditionEvaluator
from ..errors import TemplateError
from ..values import ValueContext, is_simple_expression
from .lexer import is_well_formed_marker, strip_marker
from .nodes import ActionNode, ConditionalNode, Node, TemplateAST, TextNode
from .parser import parse_template, parse_tokens
from .tokens import Token, TokenKind

logger = logging.getLogger(__name__)


class TemplateProcessor:
    """
    Evaluates template ASTs against a value context.

    Evaluation is single pass and fail fast: the first malformed condition
    or unresolved expression aborts the whole document.
    """

    def __init__(self, context: ValueContext):
        """
        Args:
            context: Value context for actions and conditions
        """
        self.context = context
        self.condition_evaluator = ConditionEvaluator(context)

    def evaluate(self, ast: TemplateAST) -> List[Token]:
        """
        Evaluates an AST.

        Returns:
            Flat token list containing only TEXT and ACTION tokens

        Raises:
            UnresolvedExpressionError: If an expression cannot be resolved
        """
        out: List[Token] = []
        # one iterator per entered branch, innermost last
        pending: List[Iterator[Node]] = [iter(ast)]
        while pending:
            node = next(pending[-1], None)
            if node is None:
                pending.pop()
                continue
            branch = self._evaluate_node(node, out)
            if branch:
                pending.append(iter(branch))
        return out

    def _evaluate_node(self, node: Node, out: List[Token]) -> Sequence[Node]:
        """Emits a leaf node, or returns the branch selected by a conditional."""
        if isinstance(node, TextNode):
            out.append(node.token)
        elif isinstance(node, ActionNode):
            self._evaluate_action(node, out)
        elif isinstance(node, ConditionalNode):
            taken = self.condition_evaluator.evaluate(node.condition, node.token.line)
            logger.debug("Condition %r at line %d -> %s", str(node.condition), node.token.line, taken)
            return node.then_branch if taken else node.else_branch
        else:
            raise TypeError(f"Unknown node type: {type(node).__name__}")
        return ()

    def _evaluate_action(self, node: ActionNode, out: List[Token]) -> None:
        token = node.token
        if not is_well_formed_marker(token.value):
            # already resolved or truncated marker
            out.append(token)
            return

        inner = strip_marker(token.value)
        if inner.startswith("/*") and inner.endswith("*/"):
            return
        if not is_simple_expression(inner):
            logger.debug("Leaving unsupported expression as is at line %d: %s", token.line, inner)
            out.append(token)
            return

        try:
            value = self.context.resolve_text(inner)
        except TemplateError as e:
            raise e.with_line(token.line)
        out.append(Token(TokenKind.ACTION, value, token.line, token.indent))


def render_tokens(tokens: Sequence[Token], context: ValueContext) -> List[Token]:
    """
    Parses and evaluates an already tokenized document.

    Rendering an already rendered token stream is a no-op.
    """
    return TemplateProcessor(context).evaluate(parse_tokens(tokens))


def render(document_text: str, context: ValueContext, first_line: int = 1) -> List[Token]:
    """
    Renders one document.

    Args:
        document_text: Raw document text
        context: Value context
        first_line: Line number of the first document line in its file

    Returns:
        Ordered TEXT/ACTION tokens of the rendered document

    Raises:
        MalformedConditionError: If a conditional marker cannot be parsed
        UnresolvedExpressionError: If an expression cannot be resolved
    """
    ast, _ = parse_template(document_text, first_line)
    return TemplateProcessor(context).evaluate(ast)


__all__ = ["TemplateProcessor", "render", "render_tokens"]
