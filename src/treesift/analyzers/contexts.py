"""
Context and higher-order component detection.

Records which React contexts the file consumes (``useContext(ThemeContext)``)
and provides (``const ThemeContext = createContext(...)``), plus the wrapper
calls applied to components, e.g. ``export default memo(forwardRef(Button))``.
"""

from __future__ import annotations

import logging
from typing import Any

from treesift.models import ComponentResult, ContextUsage
from treesift.syntax.tree import (
    Node,
    identifier_name,
    is_function_like,
    is_identifier,
    node_type,
    walk,
)

from .base import Analyzer

logger = logging.getLogger(__name__)

HOC_WRAPPERS = ("memo", "forwardRef", "observer")


def callee_name(call: Node) -> str | None:
    """Name of a call's callee, looking through ``React.<name>``."""
    callee = call.get("callee")
    if node_type(callee) == "Identifier":
        return identifier_name(callee)
    if (
        node_type(callee) == "MemberExpression"
        and not callee.get("computed")
        and is_identifier(callee.get("object"), "React")
    ):
        return identifier_name(callee.get("property"))
    return None


def wrapper_chain(node: Any) -> list[str]:
    """
    Return the HOC names wrapping a component expression, outermost first.

    Empty unless the innermost wrapped value is a function or an identifier.
    """
    chain: list[str] = []
    current = node
    while node_type(current) == "CallExpression":
        name = callee_name(current)
        if name not in HOC_WRAPPERS:
            return []
        chain.append(name)
        arguments = current.get("arguments") or []
        if not arguments:
            return []
        current = arguments[0]
    if chain and (is_function_like(current) or node_type(current) == "Identifier"):
        return chain
    return []


class ContextCollector(Analyzer):
    """Collects consumed/provided contexts and HOC wrappers."""

    name = "ContextCollector"
    description = "Detects React context usage and component wrappers"
    owned_fields = ("contexts", "hoc_wrappers")

    def analyze(self, tree: Node, result: ComponentResult) -> None:
        consumes: dict[str, None] = {}
        provides: dict[str, None] = {}
        wrappers: dict[str, None] = {}

        for path in walk(tree):
            node = path.node
            kind = node["type"]

            if kind == "CallExpression" and callee_name(node) == "useContext":
                arguments = node.get("arguments") or []
                name = identifier_name(arguments[0]) if arguments else None
                if name:
                    consumes.setdefault(name, None)

            elif kind == "VariableDeclarator":
                name = identifier_name(node.get("id"))
                init = node.get("init")
                if not name or node_type(init) != "CallExpression":
                    continue
                if callee_name(init) == "createContext":
                    provides.setdefault(name, None)
                elif name[:1].isupper():
                    for wrapper in wrapper_chain(init):
                        wrappers.setdefault(wrapper, None)

            elif kind == "ExportDefaultDeclaration":
                for wrapper in wrapper_chain(node.get("declaration")):
                    wrappers.setdefault(wrapper, None)

        result.contexts = ContextUsage(consumes=list(consumes), provides=list(provides))
        result.hoc_wrappers = list(wrappers)
        logger.debug(
            "Contexts consumed=%s provided=%s wrappers=%s",
            result.contexts.consumes,
            result.contexts.provides,
            result.hoc_wrappers,
        )
