"""
Syntax tree access.

The analyzers only see Babel-shaped dict trees through the helpers in
``tree``. Parsers that produce such trees live alongside: ``TreeSitterParser``
(in-process, default) and ``BabelParser`` (Node.js subprocess).
"""

from treesift.exceptions import ConfigurationError

from .babel import BabelParser
from .base import SyntaxTreeProvider
from .tree import Node, NodePath, SourceLocation, node_type, source_location, walk
from .treesitter import TreeSitterParser

PARSER_BACKENDS = {
    "tree-sitter": TreeSitterParser,
    "babel": BabelParser,
}


def create_parser(
    backend: str = "tree-sitter", node_path: str = "node", strict: bool = True
) -> SyntaxTreeProvider:
    """
    Create a parser for the named backend.

    Args:
        backend: "tree-sitter" or "babel"
        node_path: Node.js executable, used by the babel backend
        strict: Fail on syntax errors, used by the tree-sitter backend

    Returns:
        Parser instance

    Raises:
        ConfigurationError: If the backend name is unknown
    """
    if backend == "babel":
        return BabelParser(node_path=node_path)
    if backend == "tree-sitter":
        return TreeSitterParser(strict=strict)
    raise ConfigurationError(
        f"Unknown parser backend: {backend} (expected one of {', '.join(PARSER_BACKENDS)})",
        setting="parser_backend",
    )


__all__ = [
    "BabelParser",
    "Node",
    "NodePath",
    "PARSER_BACKENDS",
    "SourceLocation",
    "SyntaxTreeProvider",
    "TreeSitterParser",
    "create_parser",
    "node_type",
    "source_location",
    "walk",
]
