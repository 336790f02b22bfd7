"""
Component identification.

Detects the name and declaration style of the component a file defines:
- ``export default function Button() {}``
- ``const Button = () => {}; export default Button;``
- ``export const Button = React.forwardRef(...)``
- ``export class Button extends React.Component {}``

The default export wins. Without one, the last uppercase top-level (or
directly exported) declaration in document order is taken.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from treesift.models import ComponentResult, ComponentType
from treesift.syntax.tree import (
    Node,
    SourceLocation,
    identifier_name,
    is_identifier,
    node_type,
    program_body,
    source_location,
    walk,
)

from .base import Analyzer

logger = logging.getLogger(__name__)

_DOC_COMMENT_TAG = re.compile(r"^\s*@")


@dataclass
class ComponentCandidate:
    """A declaration that may be the component."""

    name: str
    type: ComponentType
    node: Node
    wrapper: Node | None = None


def is_forward_ref_call(node: Node | None) -> bool:
    """Check for ``forwardRef(...)`` or ``React.forwardRef(...)``."""
    if node_type(node) != "CallExpression":
        return False
    callee = node.get("callee")
    if is_identifier(callee, "forwardRef"):
        return True
    return (
        node_type(callee) == "MemberExpression"
        and not callee.get("computed")
        and is_identifier(callee.get("object"), "React")
        and is_identifier(callee.get("property"), "forwardRef")
    )


def classify_initializer(init: Node | None) -> ComponentType | None:
    """Map a variable initializer to a component type, if it is one."""
    kind = node_type(init)
    if kind == "ArrowFunctionExpression":
        return ComponentType.ARROW_FUNCTION
    if kind == "FunctionExpression":
        return ComponentType.FUNCTION_EXPRESSION
    if is_forward_ref_call(init):
        return ComponentType.FORWARD_REF
    return None


def classify_declaration(node: Node) -> list[ComponentCandidate]:
    """Return every component-shaped binding a declaration introduces."""
    kind = node_type(node)
    if kind == "FunctionDeclaration":
        name = identifier_name(node.get("id"))
        if name:
            return [ComponentCandidate(name, ComponentType.FUNCTION_DECLARATION, node)]
    elif kind == "ClassDeclaration":
        name = identifier_name(node.get("id"))
        if name:
            return [ComponentCandidate(name, ComponentType.CLASS_DECLARATION, node)]
    elif kind == "VariableDeclaration":
        found = []
        for declarator in node.get("declarations") or []:
            name = identifier_name(declarator.get("id"))
            component_type = classify_initializer(declarator.get("init"))
            if name and component_type is not None:
                found.append(ComponentCandidate(name, component_type, declarator, node))
        return found
    return []


def extract_doc_summary(*nodes: Node | None) -> str | None:
    """Return the summary of the closest ``/** ... */`` comment on the nodes."""
    for node in nodes:
        if node is None:
            continue
        for comment in reversed(node.get("leadingComments") or []):
            if comment.get("type") != "CommentBlock":
                continue
            text = comment.get("value") or ""
            if not text.startswith("*"):
                continue
            lines = []
            for line in text[1:].splitlines():
                line = line.strip().lstrip("*").strip()
                if _DOC_COMMENT_TAG.match(line):
                    break
                if line:
                    lines.append(line)
                elif lines:
                    break
            if lines:
                return " ".join(lines)
    return None


class ComponentIdentifier(Analyzer):
    """Identifies the component's name, declaration type and location."""

    name = "ComponentIdentifier"
    description = "Detects the component name and how it is declared"
    owned_fields = ("name", "type", "location", "description")

    def analyze(self, tree: Node, result: ComponentResult) -> None:
        candidate = self._find_default_export(tree)
        if candidate is None:
            candidate = self._find_named_component(tree)

        if candidate is None:
            logger.debug("No component declaration found")
            result.name = "Unknown"
            result.type = ComponentType.UNKNOWN
            result.location = None
            result.description = None
            return

        result.name = candidate.name
        result.type = candidate.type
        location = source_location(candidate.node)
        result.location = location if location != SourceLocation() else None
        result.description = extract_doc_summary(
            candidate.node, candidate.wrapper, self._export_parent(tree, candidate)
        )
        logger.debug("Identified component %s (%s)", result.name, result.type.value)

    def _find_default_export(self, tree: Node) -> ComponentCandidate | None:
        """First pass: the default export, resolved to its declaration."""
        default_name: str | None = None
        resolved: ComponentCandidate | None = None

        for path in walk(tree):
            node = path.node
            if node["type"] != "ExportDefaultDeclaration":
                continue
            declaration = node.get("declaration")
            declared_name = identifier_name((declaration or {}).get("id"))
            if node_type(declaration) == "FunctionDeclaration" and declared_name:
                default_name = declared_name
                resolved = ComponentCandidate(
                    declared_name, ComponentType.FUNCTION_DECLARATION, declaration, node
                )
            elif node_type(declaration) == "ClassDeclaration" and declared_name:
                default_name = declared_name
                resolved = ComponentCandidate(
                    declared_name, ComponentType.CLASS_DECLARATION, declaration, node
                )
            elif is_identifier(declaration):
                default_name = declaration["name"]
                resolved = None

        if default_name is None:
            return None
        if resolved is not None:
            return resolved

        # Second pass: find the declaration the exported identifier refers to
        for path in walk(tree):
            for candidate in classify_declaration(path.node):
                if candidate.name == default_name:
                    return candidate

        return ComponentCandidate(default_name, ComponentType.UNKNOWN, {}, None)

    def _find_named_component(self, tree: Node) -> ComponentCandidate | None:
        """Fallback: the last uppercase top-level or exported declaration."""
        winner: ComponentCandidate | None = None
        for statement in program_body(tree):
            declaration = statement
            if node_type(statement) == "ExportNamedDeclaration":
                declaration = statement.get("declaration")
            if declaration is None:
                continue
            for candidate in classify_declaration(declaration):
                if candidate.name[:1].isupper():
                    winner = candidate
        return winner

    @staticmethod
    def _export_parent(tree: Node, candidate: ComponentCandidate) -> Node | None:
        """Return the export statement wrapping the candidate, if any."""
        target = candidate.wrapper or candidate.node
        for statement in program_body(tree):
            if statement.get("declaration") is target:
                return statement
        return None
