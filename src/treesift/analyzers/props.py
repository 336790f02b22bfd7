"""
Prop detection.

Props are found by syntactic presence only:
- ``props.title``
- ``function Card({ title, body }) {}`` / ``({ title }) => ...``
- ``const { title } = props``

Every hit is recorded with type ``any`` and marked optional. Repeated names
are kept, one entry per occurrence.
"""

from __future__ import annotations

import logging

from treesift.models import ComponentResult, PropInfo
from treesift.syntax.tree import Node, identifier_name, is_identifier, node_type, walk

from .base import Analyzer

logger = logging.getLogger(__name__)


def _pattern_props(pattern: Node) -> list[PropInfo]:
    """Props named by the identifier keys of an object pattern."""
    found = []
    for prop in pattern.get("properties") or []:
        if node_type(prop) != "ObjectProperty" or prop.get("computed"):
            continue
        name = identifier_name(prop.get("key"))
        if name:
            found.append(PropInfo(name=name))
    return found


class PropCollector(Analyzer):
    """Collects component props from member access and destructuring."""

    name = "PropCollector"
    description = "Analyzes component props"
    owned_fields = ("props",)

    def analyze(self, tree: Node, result: ComponentResult) -> None:
        props: list[PropInfo] = []

        for path in walk(tree):
            node = path.node
            kind = node["type"]

            if kind == "MemberExpression":
                if is_identifier(node.get("object"), "props") and not node.get("computed"):
                    name = identifier_name(node.get("property"))
                    if name:
                        props.append(PropInfo(name=name))

            elif kind in ("FunctionDeclaration", "ArrowFunctionExpression"):
                for param in node.get("params") or []:
                    if node_type(param) == "ObjectPattern":
                        props.extend(_pattern_props(param))

            elif kind == "VariableDeclarator":
                if is_identifier(node.get("init"), "props") and (
                    node_type(node.get("id")) == "ObjectPattern"
                ):
                    props.extend(_pattern_props(node["id"]))

        result.props = props
        logger.debug("Collected %d prop occurrences", len(props))
