"""
Narrow interface over the syntax tree consumed by the analyzers.

The tree is a Babel/ESTree-shaped document: every node is a mapping with a
``"type"`` key and, when the producer knows it, a ``"loc"`` entry of the form
``{"start": {"line": 1, "column": 0}}``. Any parser that emits this shape can
be plugged in front of the pipeline; the analyzers only ever touch nodes
through the helpers in this module and plain ``dict.get`` lookups.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

Node = dict[str, Any]

# Keys that hold metadata rather than child nodes
_NON_CHILD_KEYS = frozenset(
    {
        "type",
        "loc",
        "start",
        "end",
        "range",
        "extra",
        "comments",
        "leadingComments",
        "trailingComments",
        "innerComments",
        "tokens",
        "typeAnnotation",
        "returnType",
        "typeParameters",
    }
)


@dataclass(frozen=True)
class SourceLocation:
    """Start position of a node: 1-indexed line, 0-indexed column."""

    line: int = 0
    column: int = 0

    def to_dict(self) -> dict[str, int]:
        return {"line": self.line, "column": self.column}


@dataclass
class NodePath:
    """A visited node together with the node that holds it."""

    node: Node
    parent: Node | None = None
    key: str | None = None


def is_node(value: Any) -> bool:
    """Check whether a value looks like a syntax node."""
    return isinstance(value, dict) and isinstance(value.get("type"), str)


def node_type(node: Any) -> str | None:
    """Return the kind of a node, or None for anything that is not a node."""
    if is_node(node):
        return node["type"]
    return None


def source_location(node: Any) -> SourceLocation:
    """
    Return the start location of a node.

    Missing or malformed location data downgrades to ``(0, 0)``.
    """
    if not is_node(node):
        return SourceLocation()
    start = (node.get("loc") or {}).get("start") or {}
    line = start.get("line")
    column = start.get("column")
    if not isinstance(line, int) or not isinstance(column, int):
        return SourceLocation()
    return SourceLocation(line=line, column=column)


def children(node: Node) -> Iterator[tuple[str, Node]]:
    """Yield ``(key, child)`` pairs of a node in field order."""
    for key, value in node.items():
        if key in _NON_CHILD_KEYS:
            continue
        if is_node(value):
            yield key, value
        elif isinstance(value, list):
            for item in value:
                if is_node(item):
                    yield key, item


def walk(tree: Node) -> Iterator[NodePath]:
    """
    Visit every node of the tree in document (pre-order) order.

    Iterative so deeply nested markup cannot exhaust the recursion limit.
    """
    if not is_node(tree):
        return
    stack: list[NodePath] = [NodePath(tree)]
    while stack:
        path = stack.pop()
        yield path
        nested = [NodePath(child, path.node, key) for key, child in children(path.node)]
        stack.extend(reversed(nested))


def for_each_node(tree: Node, node_kind: str) -> Iterator[NodePath]:
    """Visit only the nodes of the given kind."""
    for path in walk(tree):
        if path.node["type"] == node_kind:
            yield path


def program_body(tree: Node) -> list[Node]:
    """Return the top-level statements of a File or Program node."""
    if node_type(tree) == "File":
        tree = tree.get("program") or {}
    if node_type(tree) != "Program":
        return []
    return [stmt for stmt in tree.get("body") or [] if is_node(stmt)]


# Shape predicates shared by the analyzers


def is_identifier(node: Any, name: str | None = None) -> bool:
    if node_type(node) != "Identifier":
        return False
    return name is None or node.get("name") == name


def identifier_name(node: Any) -> str | None:
    if node_type(node) in ("Identifier", "JSXIdentifier"):
        name = node.get("name")
        return name if isinstance(name, str) else None
    return None


def is_string_literal(node: Any) -> bool:
    return node_type(node) == "StringLiteral"


def string_value(node: Any) -> str | None:
    if is_string_literal(node):
        value = node.get("value")
        return value if isinstance(value, str) else None
    return None


def template_text(node: Any) -> str:
    """Concatenate the literal segments of a template literal."""
    parts = []
    for quasi in node.get("quasis") or []:
        value = quasi.get("value") or {}
        raw = value.get("raw")
        if raw is None:
            raw = value.get("cooked") or ""
        parts.append(raw)
    return "".join(parts)


def property_key_name(prop: Any) -> str | None:
    """Return the static key of an ObjectProperty (identifier or string key)."""
    if node_type(prop) != "ObjectProperty" or prop.get("computed"):
        return None
    key = prop.get("key")
    return identifier_name(key) or string_value(key)


def is_function_like(node: Any) -> bool:
    return node_type(node) in ("ArrowFunctionExpression", "FunctionExpression")


def js_number_to_string(value: Any) -> str:
    """Render a numeric literal the way JavaScript's ``String(n)`` does."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if value != value:
            return "NaN"
        if value in (float("inf"), float("-inf")):
            return "Infinity" if value > 0 else "-Infinity"
        if value.is_integer() and abs(value) < 1e21:
            return str(int(value))
        return repr(value)
    return str(value)
