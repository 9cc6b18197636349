"""
Rendering pipeline for templated YAML documents.

Lexer → block parser (with condition parsing) → evaluator, producing a flat
stream of TEXT/ACTION tokens that keeps source lines and indentation.
"""

from .lexer import TemplateLexer, classify_marker, tokenize_document
from .nodes import ActionNode, ConditionalNode, TemplateAST, TextNode
from .parser import TemplateParser, parse_template, parse_tokens
from .processor import TemplateProcessor, render, render_tokens
from .tokens import Token, TokenKind

__all__ = [
    # Main entry point
    "render",
    "render_tokens",

    # Types
    "Token",
    "TokenKind",
    "TextNode",
    "ActionNode",
    "ConditionalNode",
    "TemplateAST",

    # Lower-level stages (for testing and debugging)
    "TemplateLexer",
    "TemplateParser",
    "TemplateProcessor",
    "classify_marker",
    "tokenize_document",
    "parse_template",
    "parse_tokens",
]
