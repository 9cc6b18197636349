"""
AST nodes of a template document.

The tree is a closed union of three immutable node types. Conditional nodes
exclusively own their branch children; there is no sharing between nodes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple, Union

from ..conditions.model import Condition
from .tokens import Token


@dataclass(frozen=True)
class TextNode:
    """
    Static text.

    Emitted to the output as is.
    """
    token: Token


@dataclass(frozen=True)
class ActionNode:
    """Marker whose resolved value is substituted into the output."""
    token: Token


@dataclass(frozen=True)
class ConditionalNode:
    """
    Conditional block ``{{if cond}}...{{else}}...{{end}}``.

    ``else_branch`` is empty when the block has no ``{{else}}``.
    """
    token: Token  # the opening marker, kept for diagnostics
    condition: Condition
    then_branch: Tuple["Node", ...]
    else_branch: Tuple["Node", ...] = ()


Node = Union[TextNode, ActionNode, ConditionalNode]

# Top-level node list of a document
TemplateAST = List[Node]


def iter_tokens(ast: TemplateAST) -> List[Token]:
    """
    Collects the source tokens of all nodes in document order (for debugging).

    Conditional nodes contribute their opening token followed by both branches.
    """
    out: List[Token] = []
    stack: List[Node] = list(reversed(ast))
    while stack:
        node = stack.pop()
        out.append(node.token)
        if isinstance(node, ConditionalNode):
            stack.extend(reversed(node.then_branch + node.else_branch))
    return out


__all__ = ["TextNode", "ActionNode", "ConditionalNode", "Node", "TemplateAST", "iter_tokens"]
