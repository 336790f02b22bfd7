"""
Hook call extraction.

Every call to an identifier starting with ``use`` is recorded, covering the
built-in hooks (useState, useEffect, ...) and custom ones alike. Arguments
are minified to short strings; functions collapse to ``() => {...}`` and
anything without a literal rendering to ``...``.
"""

from __future__ import annotations

import logging
from typing import Any

from treesift.models import ComponentResult, HookUsage
from treesift.syntax.tree import (
    Node,
    is_function_like,
    js_number_to_string,
    node_type,
    walk,
)

from .base import Analyzer

logger = logging.getLogger(__name__)

HOOK_PREFIX = "use"
FUNCTION_PLACEHOLDER = "() => {...}"
UNKNOWN_PLACEHOLDER = "..."


def _serialize_scalar(node: Any) -> str | None:
    kind = node_type(node)
    if kind == "Identifier":
        return node.get("name", UNKNOWN_PLACEHOLDER)
    if kind == "StringLiteral":
        return node.get("value", "")
    if kind == "NumericLiteral":
        return js_number_to_string(node.get("value"))
    return None


def serialize_hook_argument(node: Any) -> str:
    """Render one hook argument as a short string."""
    scalar = _serialize_scalar(node)
    if scalar is not None:
        return scalar

    if node_type(node) == "ArrayExpression":
        elements = []
        for element in node.get("elements") or []:
            value = _serialize_scalar(element)
            elements.append(value if value is not None else UNKNOWN_PLACEHOLDER)
        return f"[{', '.join(elements)}]"

    if is_function_like(node):
        return FUNCTION_PLACEHOLDER

    return UNKNOWN_PLACEHOLDER


class HookCollector(Analyzer):
    """Collects every ``use*`` call site with its serialized arguments."""

    name = "HookCollector"
    description = "Analyzes React hooks usage"
    owned_fields = ("hooks",)

    def analyze(self, tree: Node, result: ComponentResult) -> None:
        hooks: list[HookUsage] = []

        for path in walk(tree):
            node = path.node
            if node["type"] != "CallExpression":
                continue
            callee = node.get("callee")
            if node_type(callee) != "Identifier":
                continue
            callee_name = callee.get("name") or ""
            if not callee_name.startswith(HOOK_PREFIX):
                continue

            arguments = [serialize_hook_argument(arg) for arg in node.get("arguments") or []]
            hooks.append(HookUsage(name=callee_name, arguments=arguments))

        result.hooks = hooks
        logger.debug("Collected %d hook calls", len(hooks))
