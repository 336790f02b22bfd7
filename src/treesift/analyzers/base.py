"""
Abstract base class for component analyzers.

This module defines the interface every extraction pass implements. A pass
walks the whole syntax tree on its own and writes the facts it finds into
the fields of the shared ComponentResult that it owns.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from treesift.models import ComponentResult
    from treesift.syntax.tree import Node


class Analyzer(ABC):
    """
    Abstract base class for one extraction pass.

    Analyzers are total: an unrecognized node shape degrades to the field
    defaults instead of raising. Each analyzer declares the ComponentResult
    fields it writes in ``owned_fields``; no two analyzers in a pipeline may
    own the same field, which is what keeps the passes order-independent.
    """

    name: str = "Analyzer"
    description: str = ""
    category: str = "react"
    owned_fields: tuple[str, ...] = ()

    @abstractmethod
    def analyze(self, tree: Node, result: ComponentResult) -> None:
        """
        Walk the tree and populate the owned fields of the result.

        Args:
            tree: Babel-shaped syntax tree (File or Program node).
            result: The aggregate being built for this analysis run.
        """
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"
