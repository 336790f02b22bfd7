"""Import source collection."""

from __future__ import annotations

import logging

from treesift.models import ComponentResult
from treesift.syntax.tree import Node, for_each_node, string_value

from .base import Analyzer

logger = logging.getLogger(__name__)


class ImportCollector(Analyzer):
    """Collects every import source, de-duplicated in first-seen order."""

    name = "ImportCollector"
    description = "Analyzes import statements"
    owned_fields = ("packages",)

    def analyze(self, tree: Node, result: ComponentResult) -> None:
        packages: dict[str, None] = {}

        for path in for_each_node(tree, "ImportDeclaration"):
            source = string_value(path.node.get("source"))
            if source is not None:
                packages.setdefault(source, None)

        result.packages = list(packages)
        logger.debug("Collected %d import sources", len(result.packages))
