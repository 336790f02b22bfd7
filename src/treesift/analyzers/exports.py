"""
Export classification.

Collects the names a module exports and decides whether the identified
component is the default export. Must run after ComponentIdentifier, since
the decision compares against the name it found.
"""

from __future__ import annotations

import logging

from treesift.models import ComponentResult, ExportType
from treesift.syntax.tree import (
    Node,
    identifier_name,
    node_type,
    string_value,
    walk,
)

from .base import Analyzer

logger = logging.getLogger(__name__)

DEFAULT_MARKER = "default: "
ANONYMOUS = "(anonymous)"


def collect_exports(tree: Node) -> list[str]:
    """
    Return every exported name in document order.

    Default exports are reported as ``default: <name>`` and star re-exports
    as ``* from <source>``.
    """
    exports: dict[str, None] = {}

    for path in walk(tree):
        node = path.node
        kind = node["type"]

        if kind == "ExportNamedDeclaration":
            declaration = node.get("declaration")
            if node_type(declaration) == "VariableDeclaration":
                for declarator in declaration.get("declarations") or []:
                    name = identifier_name(declarator.get("id"))
                    if name:
                        exports.setdefault(name, None)
            elif node_type(declaration) in ("FunctionDeclaration", "ClassDeclaration"):
                name = identifier_name(declaration.get("id"))
                if name:
                    exports.setdefault(name, None)
            elif declaration is None:
                for specifier in node.get("specifiers") or []:
                    if node_type(specifier) != "ExportSpecifier":
                        continue
                    exported = specifier.get("exported")
                    name = identifier_name(exported) or string_value(exported)
                    if name:
                        exports.setdefault(name, None)

        elif kind == "ExportDefaultDeclaration":
            declaration = node.get("declaration")
            if node_type(declaration) == "Identifier":
                name = identifier_name(declaration)
            elif node_type(declaration) in ("FunctionDeclaration", "ClassDeclaration"):
                name = identifier_name(declaration.get("id")) or ANONYMOUS
            else:
                name = ANONYMOUS
            exports.setdefault(DEFAULT_MARKER + (name or ANONYMOUS), None)

        elif kind == "ExportAllDeclaration":
            source = string_value(node.get("source"))
            if source is not None:
                exports.setdefault(f"* from {source}", None)

    return list(exports)


class ExportClassifier(Analyzer):
    """Records the module's exports and the component's export style."""

    name = "ExportClassifier"
    description = "Detects exports"
    owned_fields = ("exports", "export_type")

    def analyze(self, tree: Node, result: ComponentResult) -> None:
        exports = collect_exports(tree)
        result.exports = exports

        if DEFAULT_MARKER + result.name in exports:
            result.export_type = ExportType.DEFAULT
        else:
            result.export_type = ExportType.NAMED
        logger.debug("Export type of %s is %s", result.name, result.export_type.value)
