"""
Component analyzers.

Each analyzer is one independent extraction pass over the syntax tree that
fills its own fields of the shared ComponentResult.
"""

from .base import Analyzer
from .class_names import ClassNameUsageAnalyzer
from .component_identifier import ComponentIdentifier
from .contexts import ContextCollector
from .exports import ExportClassifier
from .hooks import HookCollector
from .imports import ImportCollector
from .jsx import JSXStructureCollector
from .props import PropCollector
from .styling import StylingLibraryClassifier
from .variants import VariantConfigAnalyzer

__all__ = [
    "Analyzer",
    "ComponentIdentifier",
    "ImportCollector",
    "ExportClassifier",
    "PropCollector",
    "HookCollector",
    "JSXStructureCollector",
    "VariantConfigAnalyzer",
    "ClassNameUsageAnalyzer",
    "StylingLibraryClassifier",
    "ContextCollector",
]
