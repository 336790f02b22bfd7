"""Parser contract for syntax tree providers."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from .tree import Node


@runtime_checkable
class SyntaxTreeProvider(Protocol):
    """
    Anything that turns source text into a Babel-shaped syntax tree.

    Implementations raise ParseError when the source cannot be parsed.
    """

    def parse(self, source: str, file_path: str | None = None) -> Node:
        """
        Parse source text.

        Args:
            source: JavaScript/TypeScript (optionally JSX) source text
            file_path: Optional path, used to pick the dialect and in errors

        Returns:
            A File node whose ``program`` holds the top-level statements
        """
        ...
