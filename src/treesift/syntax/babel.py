"""
Python wrapper for the Node.js Babel parser.

Runs ``parser.js`` (bundled next to this module) under Node.js. The script
parses the source with @babel/parser and writes the resulting AST as JSON to
a temporary file, which keeps large trees out of the stdout pipe.
"""

import asyncio
import json
import logging
import tempfile
from pathlib import Path
from typing import Any

from treesift.exceptions import ConfigurationError, ParseError, SourceFileError

from .tree import Node

logger = logging.getLogger(__name__)


class BabelParser:
    """
    Parse JS/JSX/TS/TSX source with @babel/parser running under Node.js.

    Requires ``node`` on the PATH (or ``node_path``) and the ``@babel/parser``
    package resolvable from the working directory or NODE_PATH.
    """

    def __init__(self, node_path: str = "node"):
        """
        Initialize the Babel parser.

        Args:
            node_path: Path to the Node.js executable (default: "node")
        """
        self.node_path = node_path
        self.parser_script = Path(__file__).parent / "parser.js"

        if not self.parser_script.exists():
            raise ConfigurationError(
                f"Parser script not found at {self.parser_script}", setting="parser_backend"
            )

    async def parse_async(self, source: str, file_path: str | None = None) -> Node:
        """
        Parse source text into a Babel File node.

        Args:
            source: Source text
            file_path: Optional path; ``.ts`` files are parsed without JSX

        Returns:
            File node

        Raises:
            ParseError: If Babel rejects the source
            ConfigurationError: If Node.js or @babel/parser is unavailable
        """
        # Use a temporary file to avoid stdout buffer limits
        with tempfile.NamedTemporaryFile(mode="w", suffix=".json", delete=False) as output_file:
            output_path = output_file.name

        try:
            config = {
                "source": source,
                "filePath": file_path,
                "outputFile": output_path,
            }

            try:
                process = await asyncio.create_subprocess_exec(
                    self.node_path,
                    str(self.parser_script),
                    stdin=asyncio.subprocess.PIPE,
                    stdout=asyncio.subprocess.PIPE,
                    stderr=asyncio.subprocess.PIPE,
                )
            except FileNotFoundError as e:
                raise ConfigurationError(
                    f"Node.js executable not found: {self.node_path}", setting="node_path"
                ) from e

            _, stderr = await process.communicate(input=json.dumps(config).encode("utf-8"))

            if process.returncode != 0:
                error_msg = stderr.decode("utf-8") if stderr else "Unknown error"
                raise ConfigurationError(
                    f"Babel parser failed with exit code {process.returncode}: {error_msg}",
                    setting="parser_backend",
                )

            with open(output_path, encoding="utf-8") as f:
                output: dict[str, Any] = json.load(f)

        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Failed to read Babel parser output: {e}") from e
        finally:
            Path(output_path).unlink(missing_ok=True)

        error = output.get("error")
        if error:
            raise ParseError(
                error.get("message") or "Babel could not parse the source",
                file_path=file_path,
                line=error.get("line"),
                column=error.get("column"),
            )

        ast = output.get("ast")
        if not isinstance(ast, dict):
            raise ConfigurationError("Babel parser output has no AST")

        logger.debug("Parsed %s with Babel", file_path or "<source>")
        return ast

    def parse(self, source: str, file_path: str | None = None) -> Node:
        """
        Synchronous version of parse_async.

        Runs its own event loop, so it cannot be called from a coroutine;
        await parse_async there instead.

        Raises:
            RuntimeError: If called while an event loop is running
        """
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            return asyncio.run(self.parse_async(source, file_path))
        raise RuntimeError(
            "BabelParser.parse() cannot run inside an event loop; await parse_async() instead"
        )

    def parse_file(self, file_path: str | Path) -> Node:
        """
        Read and parse a source file.

        Raises:
            SourceFileError: If the file cannot be read
        """
        path = Path(file_path)
        try:
            source = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise SourceFileError(f"Cannot read {path}: {e}", file_path=str(path)) from e
        return self.parse(source, str(path))
