"""
Analyzer pipeline.

Runs a fixed sequence of independent analyzers over one syntax tree and
returns the aggregated ComponentResult. Parsing and file loading happen
before the pipeline runs; ``analyze_source`` and ``analyze_file`` wire the
two together.
"""

from __future__ import annotations

import fnmatch
import logging
import os
from collections.abc import Sequence
from pathlib import Path

from treesift.analyzers import (
    Analyzer,
    ClassNameUsageAnalyzer,
    ComponentIdentifier,
    ContextCollector,
    ExportClassifier,
    HookCollector,
    ImportCollector,
    JSXStructureCollector,
    PropCollector,
    StylingLibraryClassifier,
    VariantConfigAnalyzer,
)
from treesift.exceptions import ConfigurationError, SourceFileError
from treesift.models import ComponentResult
from treesift.syntax import SyntaxTreeProvider, TreeSitterParser
from treesift.syntax.tree import Node

logger = logging.getLogger(__name__)

# Directories never descended into when collecting source files
EXCLUDED_DIRS = frozenset({"node_modules", ".git", "dist", "build", ".next", "coverage"})


def default_analyzers() -> list[Analyzer]:
    """
    Build the standard analyzer sequence.

    ExportClassifier compares against the identified component name, so it
    follows ComponentIdentifier. StylingLibraryClassifier reads the variant
    configs, so it follows VariantConfigAnalyzer.
    """
    return [
        ComponentIdentifier(),
        ImportCollector(),
        ExportClassifier(),
        PropCollector(),
        HookCollector(),
        JSXStructureCollector(),
        VariantConfigAnalyzer(),
        ClassNameUsageAnalyzer(),
        StylingLibraryClassifier(),
        ContextCollector(),
    ]


class AnalyzerPipeline:
    """
    Runs analyzers in order against one tree, accumulating a ComponentResult.

    Each analyzer owns a disjoint set of result fields. An analyzer that
    raises anyway does not abort the run: its fields are reset to their
    defaults and the failure is recorded in ``ComponentResult.errors``.
    """

    def __init__(self, analyzers: Sequence[Analyzer] | None = None):
        """
        Initialize the pipeline.

        Args:
            analyzers: Analyzer sequence. Defaults to default_analyzers().

        Raises:
            ConfigurationError: If two analyzers own the same result field
        """
        self.analyzers = list(analyzers) if analyzers is not None else default_analyzers()
        self._check_ownership()

    def _check_ownership(self) -> None:
        owners: dict[str, str] = {}
        for analyzer in self.analyzers:
            for field_name in analyzer.owned_fields:
                if field_name in owners:
                    raise ConfigurationError(
                        f"Field '{field_name}' is owned by both {owners[field_name]} "
                        f"and {analyzer.name}",
                        setting="analyzers",
                    )
                owners[field_name] = analyzer.name

    def run(self, tree: Node, file_path: str = "") -> ComponentResult:
        """
        Analyze one syntax tree.

        Args:
            tree: Babel-shaped File or Program node
            file_path: Path recorded in the result

        Returns:
            A complete ComponentResult; never raises for analyzer failures
        """
        result = ComponentResult(file_path=file_path)

        for analyzer in self.analyzers:
            try:
                analyzer.analyze(tree, result)
            except Exception as e:
                logger.exception("Analyzer %s failed on %s", analyzer.name, file_path or "<tree>")
                result.reset_fields(analyzer.owned_fields)
                result.errors.append(f"{analyzer.name}: {e}")

        logger.info(
            "Analyzed %s: component=%s type=%s props=%d hooks=%d styling=%s",
            file_path or "<tree>",
            result.name,
            result.type.value,
            len(result.props),
            len(result.hooks),
            result.styling_library.type.value,
        )
        return result


def analyze_source(
    source: str,
    file_path: str = "",
    parser: SyntaxTreeProvider | None = None,
    pipeline: AnalyzerPipeline | None = None,
) -> ComponentResult:
    """
    Parse source text and run the pipeline over it.

    Args:
        source: Component source text
        file_path: Path recorded in the result and used to pick the dialect
        parser: Syntax tree provider (default: TreeSitterParser)
        pipeline: Pipeline to run (default: the standard analyzers)

    Returns:
        ComponentResult for the source

    Raises:
        ParseError: If the parser cannot produce a tree
    """
    parser = parser or TreeSitterParser()
    pipeline = pipeline or AnalyzerPipeline()
    tree = parser.parse(source, file_path or None)
    return pipeline.run(tree, file_path)


def analyze_file(
    path: str | Path,
    parser: SyntaxTreeProvider | None = None,
    pipeline: AnalyzerPipeline | None = None,
) -> ComponentResult:
    """
    Read, parse and analyze one component file.

    Raises:
        SourceFileError: If the file is missing or unreadable
        ParseError: If the parser cannot produce a tree
    """
    file_path = Path(path)
    if not file_path.is_file():
        raise SourceFileError(f"Source file not found: {file_path}", file_path=str(file_path))
    try:
        source = file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise SourceFileError(f"Cannot read {file_path}: {e}", file_path=str(file_path)) from e

    logger.debug("Analyzing %s", file_path)
    return analyze_source(source, str(file_path), parser=parser, pipeline=pipeline)


def find_source_files(root: str | Path, include_patterns: Sequence[str]) -> list[Path]:
    """
    Find files under root whose names match any include pattern.

    Skips dependency and build directories such as node_modules.

    Args:
        root: Directory to search
        include_patterns: Glob patterns matched against file names

    Returns:
        Sorted list of matching paths
    """
    files: list[Path] = []
    for dirpath, dirs, filenames in os.walk(root):
        # Prune in place so os.walk does not descend
        dirs[:] = [d for d in dirs if d not in EXCLUDED_DIRS]
        for filename in filenames:
            if any(fnmatch.fnmatch(filename, pattern) for pattern in include_patterns):
                files.append(Path(dirpath) / filename)
    return sorted(files)
