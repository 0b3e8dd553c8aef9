"""JavaScript parsing — tree-sitter trees lowered to typed nodes."""

from storelint.parsing.nodes import (
    CallExpression,
    CatchClause,
    Expression,
    Identifier,
    ObjectLiteral,
    Opaque,
    Property,
    Span,
    StringLiteral,
    lower_call,
    lower_catch,
    lower_expression,
)
from storelint.parsing.parser import parse

__all__ = [
    "CallExpression",
    "CatchClause",
    "Expression",
    "Identifier",
    "ObjectLiteral",
    "Opaque",
    "Property",
    "Span",
    "StringLiteral",
    "lower_call",
    "lower_catch",
    "lower_expression",
    "parse",
]
