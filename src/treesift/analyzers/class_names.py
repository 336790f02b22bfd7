"""
Class-name utility usage.

Tracks calls to the conventional class joining helpers (``cn``, ``clsx``,
``classnames``, ``cx``) including imported aliases of them, and classifies
each argument: strings, ``{cls: flag}`` objects, arrays, identifiers and
``test ? "a" : "b"`` conditionals.
"""

from __future__ import annotations

import logging
from typing import Any

from treesift.models import (
    ClassNameArg,
    ClassNameArgKind,
    ClassNameUsage,
    ClassNameUsageSummary,
    ComponentResult,
    ConditionalClass,
)
from treesift.syntax.tree import (
    Node,
    for_each_node,
    identifier_name,
    js_number_to_string,
    node_type,
    source_location,
    string_value,
    template_text,
    walk,
)

from .base import Analyzer

logger = logging.getLogger(__name__)

UTILITY_NAMES = ("cn", "clsx", "classnames", "cx")


def _render_operand(node: Any) -> str:
    """Render one side of a binary test."""
    kind = node_type(node)
    if kind == "Identifier":
        return identifier_name(node) or ""
    if kind == "MemberExpression" and not node.get("computed"):
        obj = _render_operand(node.get("object"))
        prop = identifier_name(node.get("property")) or ""
        return f"{obj}.{prop}"
    if kind == "NumericLiteral":
        return js_number_to_string(node.get("value"))
    if kind == "StringLiteral":
        return string_value(node) or ""
    return ""


def _render_condition(test: Any) -> str:
    kind = node_type(test)
    if kind in ("BinaryExpression", "LogicalExpression"):
        left = _render_operand(test.get("left"))
        right = _render_operand(test.get("right"))
        return f"{left} {test.get('operator', '')} {right}"
    if kind == "Identifier":
        return identifier_name(test) or ""
    return ""


def _render_branch(node: Any) -> str:
    return string_value(node) or identifier_name(node) or ""


def classify_argument(arg: Any) -> ClassNameArg:
    """Turn one call argument into a typed record."""
    kind = node_type(arg)

    if kind == "StringLiteral":
        return ClassNameArg(ClassNameArgKind.STRING, string_value(arg) or "")

    if kind == "TemplateLiteral":
        return ClassNameArg(ClassNameArgKind.STRING, template_text(arg))

    if kind == "ObjectExpression":
        flags: dict[str, Any] = {}
        for prop in arg.get("properties") or []:
            if node_type(prop) != "ObjectProperty" or prop.get("computed"):
                continue
            key = identifier_name(prop.get("key"))
            if not key:
                continue
            value = prop.get("value")
            if node_type(value) == "BooleanLiteral":
                flags[key] = bool(value.get("value"))
            elif node_type(value) == "StringLiteral":
                flags[key] = string_value(value) or ""
            else:
                flags[key] = True
        return ClassNameArg(ClassNameArgKind.OBJECT, flags)

    if kind == "ArrayExpression":
        names = []
        for element in arg.get("elements") or []:
            name = string_value(element) or identifier_name(element)
            if name:
                names.append(name)
        return ClassNameArg(ClassNameArgKind.ARRAY, names)

    if kind == "Identifier":
        return ClassNameArg(ClassNameArgKind.IDENTIFIER, identifier_name(arg) or "")

    if kind == "ConditionalExpression":
        return ClassNameArg(
            ClassNameArgKind.CONDITIONAL,
            ConditionalClass(
                condition=_render_condition(arg.get("test")),
                true_value=_render_branch(arg.get("consequent")),
                false_value=_render_branch(arg.get("alternate")),
            ),
        )

    return ClassNameArg(ClassNameArgKind.UNKNOWN, "")


def collect_utility_imports(tree: Node) -> tuple[dict[str, str], str]:
    """
    Map local bindings of imported utilities to their import source.

    Returns the bindings and the source of the last matching import.
    """
    bindings: dict[str, str] = {}
    last_source = ""

    for path in for_each_node(tree, "ImportDeclaration"):
        source = string_value(path.node.get("source"))
        if source is None:
            continue
        for specifier in path.node.get("specifiers") or []:
            if node_type(specifier) != "ImportSpecifier":
                continue
            local = identifier_name(specifier.get("local"))
            imported = identifier_name(specifier.get("imported")) or string_value(
                specifier.get("imported")
            )
            if not local:
                continue
            if local in UTILITY_NAMES or imported in UTILITY_NAMES:
                bindings[local] = source
                last_source = source

    return bindings, last_source


def usage_kind(callee_name: str, bindings: dict[str, str]) -> str:
    """Display kind of a utility call."""
    if callee_name in bindings or callee_name == "cn":
        return "cn"
    if callee_name == "clsx":
        return "clsx"
    return "classnames"


class ClassNameUsageAnalyzer(Analyzer):
    """Collects class-name utility imports and call sites."""

    name = "ClassNameUsageAnalyzer"
    description = "Analyzes className utility usage in components"
    category = "styling"
    owned_fields = ("class_name_usage",)

    def analyze(self, tree: Node, result: ComponentResult) -> None:
        bindings, import_source = collect_utility_imports(tree)
        summary = ClassNameUsageSummary(
            has_utility=bool(bindings),
            import_source=import_source,
        )

        # Calls inside a className={...} container are reached by the same walk
        for path in walk(tree):
            node = path.node
            if node["type"] != "CallExpression":
                continue
            callee_name = identifier_name(node.get("callee"))
            if not callee_name:
                continue
            if callee_name not in UTILITY_NAMES and callee_name not in bindings:
                continue

            summary.has_utility = True
            summary.usages.append(
                ClassNameUsage(
                    kind=usage_kind(callee_name, bindings),
                    arguments=[classify_argument(arg) for arg in node.get("arguments") or []],
                    location=source_location(node),
                )
            )

        result.class_name_usage = summary
        logger.debug("Collected %d class-name utility calls", len(summary.usages))
