"""TreeSift: static analysis of React component source files.

Parses a component file and extracts its name, props, hooks, variant
configs, class-name utility usage, markup structure and a best guess of
the styling library in use.
"""

from .exceptions import ConfigurationError, ParseError, SourceFileError, TreeSiftException
from .models import ComponentResult, ComponentType, ExportType, StylingLibraryType
from .pipeline import AnalyzerPipeline, analyze_file, analyze_source, default_analyzers

__version__ = "0.1.0"

__all__ = [
    "AnalyzerPipeline",
    "ComponentResult",
    "ComponentType",
    "ConfigurationError",
    "ExportType",
    "ParseError",
    "SourceFileError",
    "StylingLibraryType",
    "TreeSiftException",
    "__version__",
    "analyze_file",
    "analyze_source",
    "default_analyzers",
]
