"""Exception classes for TreeSift.

The analyzer pipeline itself never raises; these exceptions belong to the
collaborators around it (parsers, file loading, configuration, CLI).
"""

from typing import Any


class TreeSiftException(Exception):
    """Base exception for all TreeSift errors.

    Attributes:
        message: Human-readable error message
        error_code: Optional error code for programmatic handling
        context: Additional context information
    """

    def __init__(
        self, message: str, error_code: str | None = None, context: dict[str, Any] | None = None
    ) -> None:
        """Initialize the exception.

        Args:
            message: Error message
            error_code: Optional error code
            context: Optional context dictionary
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.context = context or {}

    def __str__(self) -> str:
        """Return string representation."""
        if self.error_code:
            return f"[{self.error_code}] {self.message}"
        return self.message


class ParseError(TreeSiftException):
    """Raised when source text cannot be turned into a syntax tree."""

    def __init__(
        self,
        message: str,
        file_path: str | None = None,
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        context: dict[str, Any] = {}
        if file_path is not None:
            context["file_path"] = file_path
        if line is not None:
            context["line"] = line
            context["column"] = column
        super().__init__(message, error_code="PARSE_ERROR", context=context)
        self.file_path = file_path
        self.line = line
        self.column = column


class SourceFileError(TreeSiftException):
    """Raised when a source file is missing or cannot be read."""

    def __init__(self, message: str, file_path: str | None = None) -> None:
        super().__init__(
            message,
            error_code="SOURCE_FILE_ERROR",
            context={"file_path": file_path} if file_path else None,
        )
        self.file_path = file_path


class ConfigurationError(TreeSiftException):
    """Raised for invalid settings or an unavailable parser backend."""

    def __init__(self, message: str, setting: str | None = None) -> None:
        super().__init__(
            message,
            error_code="CONFIGURATION_ERROR",
            context={"setting": setting} if setting else None,
        )
        self.setting = setting
