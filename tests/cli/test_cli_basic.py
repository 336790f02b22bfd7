"""Basic tests for TreeSift CLI commands."""

import json

import pytest
from click.testing import CliRunner

from treesift import __version__
from treesift.cli.main import main


@pytest.fixture
def cli_runner():
    """Create CLI runner."""
    return CliRunner()


def test_cli_help(cli_runner):
    """Test that CLI help works."""
    result = cli_runner.invoke(main, ["--help"])
    assert result.exit_code == 0
    assert "TreeSift" in result.output


def test_cli_version(cli_runner):
    """Test that version command works."""
    result = cli_runner.invoke(main, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_analyze_command_help(cli_runner):
    """Test analyze command help."""
    result = cli_runner.invoke(main, ["analyze", "--help"])
    assert result.exit_code == 0
    assert "--parser" in result.output


def test_analyze_single_file(cli_runner, component_dir):
    """A single file renders as one JSON document."""
    path = component_dir / "components" / "Button.tsx"
    result = cli_runner.invoke(main, ["analyze", str(path)])

    assert result.exit_code == 0
    document = json.loads(result.output)
    assert document["name"] == "Button"
    assert document["exportType"] == "default"
    assert document["props"] == [{"name": "label", "type": "any", "isOptional": True}]
    assert document["classNameUsage"]["importSource"] == "@/lib/utils"


def test_analyze_directory(cli_runner, component_dir):
    """A directory renders an object keyed by relative path."""
    result = cli_runner.invoke(main, ["analyze", str(component_dir)])

    assert result.exit_code == 0
    documents = json.loads(result.output)
    assert list(documents) == ["components/Button.tsx", "components/Card.jsx"]
    assert documents["components/Card.jsx"]["name"] == "Card"
    assert documents["components/Card.jsx"]["stylingLibrary"]["type"] == "tailwindLike"


def test_analyze_text_format(cli_runner, component_dir):
    """Test the human-readable summary."""
    path = component_dir / "components" / "Button.tsx"
    result = cli_runner.invoke(main, ["analyze", str(path), "--format", "text"])

    assert result.exit_code == 0
    assert "Component: Button (FunctionDeclaration, default export)" in result.output
    assert "Elements: button" in result.output


def test_analyze_output_file(cli_runner, component_dir, tmp_path):
    """Test writing results to a file."""
    path = component_dir / "components" / "Card.jsx"
    output = tmp_path / "out" / "card.json"
    result = cli_runner.invoke(main, ["analyze", str(path), "-o", str(output)])

    assert result.exit_code == 0
    assert "Results written to" in result.output
    assert json.loads(output.read_text())["name"] == "Card"


def test_analyze_verbose_logs(cli_runner, component_dir):
    """Verbose mode emits debug logging."""
    path = component_dir / "components" / "Card.jsx"
    result = cli_runner.invoke(main, ["analyze", str(path), "--verbose"])

    assert result.exit_code == 0
    assert "analysis finished" in result.output


def test_analyze_missing_path(cli_runner, tmp_path):
    """Test analysis of a missing path."""
    result = cli_runner.invoke(main, ["analyze", str(tmp_path / "missing.tsx")])
    assert result.exit_code == 2  # CONFIG_ERROR


def test_analyze_empty_directory(cli_runner, tmp_path):
    """A directory without component files is an error."""
    (tmp_path / "README.md").write_text("nothing here\n")

    result = cli_runner.invoke(main, ["analyze", str(tmp_path)])
    assert result.exit_code == 2  # CONFIG_ERROR


def test_analyze_parse_error(cli_runner, tmp_path):
    """Unparseable files are reported and the rest still analyzed."""
    (tmp_path / "Broken.tsx").write_text("export default function (\n")
    (tmp_path / "Good.tsx").write_text("export const Good = () => <div />;\n")

    result = cli_runner.invoke(main, ["analyze", str(tmp_path)])

    assert result.exit_code == 3  # PARSE_ERROR
    assert "Parse error in" in result.output
    assert "Good.tsx" in result.output


def test_invalid_settings(cli_runner, component_dir):
    """Invalid environment settings are a configuration error."""
    path = component_dir / "components" / "Card.jsx"
    result = cli_runner.invoke(
        main, ["analyze", str(path)], env={"TREESIFT_PARSER_BACKEND": "esprima"}
    )

    assert result.exit_code == 2  # CONFIG_ERROR
    assert "TREESIFT_" in result.output


def test_analyze_deeply_nested_source(cli_runner, tmp_path):
    """Source too deep to lower is a parse error, not a crash."""
    terms = " + ".join(["a"] * 1500)
    path = tmp_path / "Big.tsx"
    path.write_text(f"export const Big = () => <div className={{{terms}}} />;\n")

    result = cli_runner.invoke(main, ["analyze", str(path)])

    assert result.exit_code == 3  # PARSE_ERROR
    assert "nested too deeply" in result.output
