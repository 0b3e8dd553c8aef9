"""Typed node variants lowered from tree-sitter JavaScript nodes.

Rules never touch raw tree-sitter nodes. The driver lowers the nodes it
dispatches on into this closed set of frozen dataclasses, and anything
outside the set becomes :class:`Opaque`, so rule bodies match with
``isinstance`` instead of probing optional fields.
"""

from __future__ import annotations

from dataclasses import dataclass

import tree_sitter

from storelint.constants import NodeKind

# Named children that never carry meaning for matching
_TRIVIA = frozenset({"comment"})

# Nesting levels below a dispatched node that are lowered to typed variants
MAX_LOWERING_DEPTH = 2

_SIMPLE_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "b": "\b",
    "f": "\f",
    "v": "\v",
    "0": "\0",
}


@dataclass(frozen=True, slots=True)
class Span:
    """Source range of a node. Lines and columns are 1-based.

    Columns count UTF-8 bytes, as tree-sitter does.
    """

    start_line: int
    start_column: int
    end_line: int
    end_column: int
    start_byte: int
    end_byte: int

    @classmethod
    def of(cls, node: tree_sitter.Node) -> Span:
        return cls(
            start_line=node.start_point[0] + 1,
            start_column=node.start_point[1] + 1,
            end_line=node.end_point[0] + 1,
            end_column=node.end_point[1] + 1,
            start_byte=node.start_byte,
            end_byte=node.end_byte,
        )


@dataclass(frozen=True, slots=True)
class Identifier:
    name: str
    span: Span
    kind: str = NodeKind.IDENTIFIER


@dataclass(frozen=True, slots=True)
class StringLiteral:
    value: str
    span: Span
    kind: str = NodeKind.STRING_LITERAL


@dataclass(frozen=True, slots=True)
class Opaque:
    """Any node outside the closed set (spread, template, member access...)."""

    kind: str
    span: Span


@dataclass(frozen=True, slots=True)
class Property:
    """One ``key: value`` entry of an object literal.

    ``key`` is ``None`` for computed or numeric keys. Shorthand entries
    (``{ aModule }``) and methods (``load() {}``) are also properties;
    their values are an :class:`Identifier` and an :class:`Opaque`.
    ``kind`` is the tree-sitter type of the entry.
    """

    key: str | None
    value: Expression
    span: Span
    shorthand: bool = False
    kind: str = NodeKind.PROPERTY


@dataclass(frozen=True, slots=True)
class ObjectLiteral:
    properties: tuple[Property | Opaque, ...]
    span: Span
    kind: str = NodeKind.OBJECT_LITERAL

    def keys(self) -> list[str]:
        """Property keys in source order; spreads and computed keys skipped."""
        return [
            p.key
            for p in self.properties
            if isinstance(p, Property) and p.key is not None
        ]


@dataclass(frozen=True, slots=True)
class CallExpression:
    callee: Expression
    arguments: tuple[Expression, ...]
    span: Span
    kind: str = NodeKind.CALL_EXPRESSION

    @property
    def callee_name(self) -> str | None:
        """Name of a plain-identifier callee, else ``None``."""
        if isinstance(self.callee, Identifier):
            return self.callee.name
        return None

    @property
    def first_argument(self) -> Expression | None:
        return self.arguments[0] if self.arguments else None


@dataclass(frozen=True, slots=True)
class CatchClause:
    statement_count: int
    body_span: Span
    span: Span
    kind: str = NodeKind.CATCH_CLAUSE

    @property
    def is_empty(self) -> bool:
        return self.statement_count == 0


Expression = Identifier | StringLiteral | ObjectLiteral | CallExpression | Opaque


# ---------------------------------------------------------------------------
# Lowering
# ---------------------------------------------------------------------------


def lower_expression(node: tree_sitter.Node, depth: int = 0) -> Expression:
    """Lower a tree-sitter expression node into a typed variant.

    Call arguments and object values are lowered one level below their
    parent. Below :data:`MAX_LOWERING_DEPTH` every node is :class:`Opaque`,
    so lowering cost stays bounded however deeply the source nests.
    """
    while node.type == "parenthesized_expression":
        inner = _meaningful(node)
        if len(inner) != 1:
            return Opaque(kind=node.type, span=Span.of(node))
        node = inner[0]

    span = Span.of(node)
    if depth > MAX_LOWERING_DEPTH:
        return Opaque(kind=node.type, span=span)
    match node.type:
        case "identifier":
            return Identifier(name=_text(node), span=span)
        case "string":
            return StringLiteral(value=string_value(node), span=span)
        case "object":
            return ObjectLiteral(
                properties=tuple(
                    _lower_member(child, depth + 1)
                    for child in _meaningful(node)
                ),
                span=span,
            )
        case "call_expression":
            return lower_call(node, depth)
        case _:
            return Opaque(kind=node.type, span=span)


def lower_call(node: tree_sitter.Node, depth: int = 0) -> CallExpression:
    """Lower a ``call_expression`` node."""
    func = node.child_by_field_name("function")
    args = node.child_by_field_name("arguments")
    span = Span.of(node)

    callee: Expression = (
        lower_expression(func, depth + 1)
        if func is not None
        else Opaque("missing", span)
    )
    arguments: tuple[Expression, ...] = ()
    if args is not None:
        if args.type == "arguments":
            arguments = tuple(
                lower_expression(a, depth + 1) for a in _meaningful(args)
            )
        else:
            # Tagged template: mapGetters`aModule`
            arguments = (Opaque(kind=args.type, span=Span.of(args)),)

    return CallExpression(callee=callee, arguments=arguments, span=span)


def lower_catch(node: tree_sitter.Node) -> CatchClause:
    """Lower a ``catch_clause`` node; comments do not count as statements."""
    body = node.child_by_field_name("body")
    span = Span.of(node)
    if body is None:
        return CatchClause(statement_count=0, body_span=span, span=span)
    return CatchClause(
        statement_count=len(_meaningful(body)),
        body_span=Span.of(body),
        span=span,
    )


def string_value(node: tree_sitter.Node) -> str:
    """Cooked value of a ``string`` node (escapes decoded, no quotes)."""
    parts: list[str] = []
    for child in node.named_children:
        if child.type == "escape_sequence":
            parts.append(_decode_escape(_text(child)))
        else:
            parts.append(_text(child))
    return "".join(parts)


def _lower_member(node: tree_sitter.Node, depth: int) -> Property | Opaque:
    span = Span.of(node)
    if node.type == "pair":
        key_node = node.child_by_field_name("key")
        value_node = node.child_by_field_name("value")
        if value_node is None:
            return Opaque(kind=node.type, span=span)
        return Property(
            key=_property_key(key_node),
            value=lower_expression(value_node, depth),
            span=span,
        )
    if node.type == "shorthand_property_identifier":
        name = _text(node)
        return Property(
            key=name,
            value=Identifier(name=name, span=span),
            span=span,
            shorthand=True,
            kind=node.type,
        )
    if node.type == "method_definition":
        name_node = node.child_by_field_name("name")
        return Property(
            key=_property_key(name_node),
            value=Opaque(kind=node.type, span=span),
            span=span,
            kind=node.type,
        )
    return Opaque(kind=node.type, span=span)


def _property_key(node: tree_sitter.Node | None) -> str | None:
    if node is None:
        return None
    if node.type == "property_identifier":
        return _text(node)
    if node.type == "string":
        return string_value(node)
    # computed_property_name, number, private_property_identifier
    return None


def _decode_escape(raw: str) -> str:
    body = raw[1:]
    if body.startswith("u{") and body.endswith("}"):
        return _from_hex(body[2:-1], raw)
    if body[:1] in ("u", "x") and len(body) > 1:
        return _from_hex(body[1:], raw)
    if body in _SIMPLE_ESCAPES:
        return _SIMPLE_ESCAPES[body]
    if body.startswith(("\n", "\r", "\u2028", "\u2029")):
        # line continuation
        return ""
    # identity escapes: \" \' \\ \/ ...
    return body


def _from_hex(digits: str, raw: str) -> str:
    try:
        return chr(int(digits, 16))
    except ValueError:
        return raw


def _meaningful(node: tree_sitter.Node) -> list[tree_sitter.Node]:
    return [c for c in node.named_children if c.type not in _TRIVIA]


def _text(node: tree_sitter.Node) -> str:
    return node.text.decode("utf-8") if node.text else ""
