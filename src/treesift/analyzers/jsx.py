"""
JSX structure extraction.

Builds a one-level description of every markup element: its props, its
direct children and, for intrinsic (lowercase) tags, its attributes.

Elements are stored by tag name, so when a tag appears more than once only
the last visited instance is kept. The ordered list of every tag name seen
is recorded separately in ``components``.
"""

from __future__ import annotations

import logging
from typing import Any

from treesift.models import (
    ComponentResult,
    JSXChild,
    JSXChildKind,
    JSXElementInfo,
    JSXProp,
)
from treesift.syntax.tree import Node, identifier_name, node_type, string_value, walk

from .base import Analyzer

logger = logging.getLogger(__name__)

SPREAD_NAME = "..."


def element_name(name_node: Any) -> str | None:
    """Render a JSX tag name: ``div``, ``Card.Header`` or ``svg:path``."""
    kind = node_type(name_node)
    if kind == "JSXIdentifier":
        return identifier_name(name_node)
    if kind == "JSXMemberExpression":
        obj = element_name(name_node.get("object"))
        prop = element_name(name_node.get("property"))
        if obj and prop:
            return f"{obj}.{prop}"
        return None
    if kind == "JSXNamespacedName":
        namespace = element_name(name_node.get("namespace"))
        name = element_name(name_node.get("name"))
        if namespace and name:
            return f"{namespace}:{name}"
    return None


def attribute_value(value: Any) -> str | None:
    """Best-effort literal value of an attribute."""
    if node_type(value) == "StringLiteral":
        return string_value(value)
    if node_type(value) == "JSXExpressionContainer":
        expression = value.get("expression")
        if node_type(expression) == "StringLiteral":
            return string_value(expression)
        if node_type(expression) == "Identifier":
            return identifier_name(expression)
    return None


def collect_props(opening: Node) -> list[JSXProp]:
    props = []
    for attribute in opening.get("attributes") or []:
        kind = node_type(attribute)
        if kind == "JSXSpreadAttribute":
            props.append(JSXProp(name=SPREAD_NAME, value=None, is_spread=True))
        elif kind == "JSXAttribute":
            name = element_name(attribute.get("name"))
            if name:
                props.append(JSXProp(name=name, value=attribute_value(attribute.get("value"))))
    return props


def collect_children(element: Node) -> list[JSXChild]:
    found = []
    for child in element.get("children") or []:
        kind = node_type(child)
        if kind == "JSXText":
            text = (child.get("value") or "").strip()
            if text:
                found.append(JSXChild(JSXChildKind.TEXT, text))
        elif kind == "JSXElement":
            name = element_name((child.get("openingElement") or {}).get("name"))
            if name:
                found.append(JSXChild(JSXChildKind.ELEMENT, name))
        elif kind == "JSXExpressionContainer":
            expression = child.get("expression")
            if node_type(expression) == "Identifier":
                found.append(JSXChild(JSXChildKind.EXPRESSION, identifier_name(expression) or ""))
        elif kind == "JSXFragment":
            found.append(JSXChild(JSXChildKind.FRAGMENT, "Fragment"))
    return found


class JSXStructureCollector(Analyzer):
    """Collects markup elements keyed by tag name."""

    name = "JSXStructureCollector"
    description = "Analyzes JSX elements in the code"
    owned_fields = ("jsx_elements", "components")

    def analyze(self, tree: Node, result: ComponentResult) -> None:
        elements: dict[str, JSXElementInfo] = {}
        seen: dict[str, None] = {}

        for path in walk(tree):
            node = path.node
            if node["type"] != "JSXElement":
                continue
            opening = node.get("openingElement") or {}
            name = element_name(opening.get("name"))
            if not name:
                continue

            props = collect_props(opening)
            attributes = []
            if name[:1].islower():
                attributes = [JSXProp(name=prop.name, value=prop.value) for prop in props]

            elements[name] = JSXElementInfo(
                name=name,
                props=props,
                children=collect_children(node),
                attributes=attributes,
            )
            seen.setdefault(name, None)

        result.jsx_elements = elements
        result.components = list(seen)
        logger.debug("Collected %d distinct JSX elements", len(elements))
