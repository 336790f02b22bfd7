"""TreeSift CLI - Main entry point.

Exit codes:
    0: Success
    2: Configuration or file error
    3: Parse error
"""

import sys
from pathlib import Path

import click
from pydantic import ValidationError

from treesift import __version__
from treesift.config import TreeSiftSettings, get_settings
from treesift.exceptions import ConfigurationError, ParseError, SourceFileError
from treesift.logging import get_logger, setup_logging
from treesift.pipeline import AnalyzerPipeline, analyze_file, find_source_files
from treesift.syntax import PARSER_BACKENDS, create_parser

from .formatters import format_results

# Exit codes
EXIT_SUCCESS = 0
EXIT_CONFIG_ERROR = 2
EXIT_PARSE_ERROR = 3


def load_settings() -> TreeSiftSettings | None:
    """Load settings from the environment, reporting invalid values.

    Returns:
        Settings, or None if they fail validation
    """
    try:
        return get_settings()
    except ValidationError as e:
        click.echo(f"Error: Invalid TREESIFT_* settings: {e}", err=True)
        return None


@click.group()
@click.version_option(version=__version__, prog_name="treesift")
@click.pass_context
def main(ctx: click.Context) -> None:
    """TreeSift - Static analysis of React component files.

    Extracts component name, props, hooks, variant configs, class-name
    usage, markup structure and the styling library in use.
    """
    ctx.ensure_object(dict)


@main.command()
@click.argument("path", type=click.Path(path_type=Path))
@click.option(
    "--parser",
    "parser_backend",
    type=click.Choice(list(PARSER_BACKENDS)),
    default=None,
    help="Parser backend (default: TREESIFT_PARSER_BACKEND or tree-sitter)",
)
@click.option(
    "--format",
    "-f",
    "format_type",
    type=click.Choice(["json", "text"]),
    default="json",
    help="Output format",
)
@click.option("--output", "-o", type=click.Path(path_type=Path), help="Write output to a file")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
def analyze(
    path: Path,
    parser_backend: str | None,
    format_type: str,
    output: Path | None,
    verbose: bool,
) -> None:
    """Analyze a component file, or every component file in a directory.

    PATH: Source file or directory
    """
    settings = load_settings()
    if settings is None:
        sys.exit(EXIT_CONFIG_ERROR)

    setup_logging(
        level="DEBUG" if verbose else settings.log_level,
        log_file=settings.log_file,
        structured=settings.structured_logging,
    )
    log = get_logger(__name__)

    if not path.exists():
        click.echo(f"Error: Path not found: {path}", err=True)
        sys.exit(EXIT_CONFIG_ERROR)

    if path.is_dir():
        files = find_source_files(path, settings.include_patterns)
        if not files:
            click.echo(f"Error: No matching source files under {path}", err=True)
            sys.exit(EXIT_CONFIG_ERROR)
        base = path
    else:
        files = [path]
        base = path.parent

    try:
        parser = create_parser(
            parser_backend or settings.parser_backend,
            node_path=settings.node_path,
            strict=settings.strict_parsing,
        )
    except ConfigurationError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(EXIT_CONFIG_ERROR)

    pipeline = AnalyzerPipeline()
    documents = {}
    exit_code = EXIT_SUCCESS

    for file_path in files:
        key = file_path.relative_to(base).as_posix()
        try:
            result = analyze_file(file_path, parser=parser, pipeline=pipeline)
        except ParseError as e:
            click.echo(f"Parse error in {file_path}: {e}", err=True)
            exit_code = EXIT_PARSE_ERROR
            continue
        except (SourceFileError, ConfigurationError) as e:
            click.echo(f"Error: {e}", err=True)
            sys.exit(EXIT_CONFIG_ERROR)
        documents[key] = result.to_dict()

    log.info("analysis finished", files=len(files), analyzed=len(documents))

    if documents:
        rendered = format_results(documents, format_type, indent=settings.json_indent)
        if output:
            output.parent.mkdir(parents=True, exist_ok=True)
            output.write_text(rendered + "\n", encoding="utf-8")
            click.echo(f"Results written to: {output}", err=True)
        else:
            click.echo(rendered)

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
