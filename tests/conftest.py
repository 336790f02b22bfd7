"""Pytest configuration and fixtures."""

import os
import textwrap

import pytest

from treesift.config import reset_settings
from treesift.models import ComponentResult
from treesift.pipeline import AnalyzerPipeline
from treesift.syntax import TreeSitterParser


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    """Isolate every test from TREESIFT_* variables and cached settings."""
    for key in list(os.environ):
        if key.startswith("TREESIFT_"):
            monkeypatch.delenv(key)
    reset_settings()
    yield
    reset_settings()


@pytest.fixture(scope="session")
def ts_parser():
    """Shared tree-sitter parser."""
    return TreeSitterParser()


@pytest.fixture
def pipeline():
    """Pipeline with the default analyzers."""
    return AnalyzerPipeline()


@pytest.fixture
def parse(ts_parser):
    """Parse a dedented TSX snippet into a Babel-shaped tree."""

    def _parse(source: str, file_path: str = "Component.tsx"):
        return ts_parser.parse(textwrap.dedent(source), file_path)

    return _parse


@pytest.fixture
def analyze(parse, pipeline):
    """Parse a dedented TSX snippet and run the full pipeline over it."""

    def _analyze(source: str, file_path: str = "Component.tsx") -> ComponentResult:
        return pipeline.run(parse(source, file_path), file_path)

    return _analyze


@pytest.fixture
def component_dir(tmp_path):
    """A small component tree on disk."""
    (tmp_path / "components").mkdir()
    (tmp_path / "components" / "Button.tsx").write_text(
        textwrap.dedent(
            """\
            import { cn } from "@/lib/utils";

            export default function Button({ label }) {
              return <button className={cn("px-4", "bg-blue-500")}>{label}</button>;
            }
            """
        )
    )
    (tmp_path / "components" / "Card.jsx").write_text(
        textwrap.dedent(
            """\
            export const Card = (props) => <div className="rounded-lg p-4">{props.title}</div>;
            """
        )
    )
    (tmp_path / "components" / "notes.md").write_text("# not a component\n")
    (tmp_path / "node_modules").mkdir()
    (tmp_path / "node_modules" / "Dep.tsx").write_text("export const Dep = () => null;\n")
    return tmp_path
