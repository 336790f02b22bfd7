"""
Styling approach detection.

Scores every styling category from the evidence found in the file and
reports the strongest one:
- imports (tailwind, clsx, tailwind-merge, styled-components, emotion, .css)
- utility-looking ``className="..."`` strings
- ``styled.div`...``` tagged templates
- ``css(...)`` calls
- variant configs (read from VariantConfigAnalyzer's output, so that
  analyzer must run first)
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field

from treesift.models import (
    ComponentResult,
    StylingLibrary,
    StylingLibraryType,
    VariantConfig,
    VariantConfigValue,
)
from treesift.syntax.tree import Node, identifier_name, node_type, string_value, walk
from treesift.values import iter_strings

from .base import Analyzer

logger = logging.getLogger(__name__)

# Tie-break order: on equal scores the earlier category wins
CATEGORY_PRIORITY: tuple[StylingLibraryType, ...] = (
    StylingLibraryType.TAILWIND_LIKE,
    StylingLibraryType.STYLED_COMPONENTS_LIKE,
    StylingLibraryType.EMOTION_LIKE,
    StylingLibraryType.VARIANT_AUTHORING,
    StylingLibraryType.UNKNOWN,
)

UTILITY_CLASS_PATTERNS: tuple[str, ...] = (
    "text-",
    "bg-",
    "p-",
    "m-",
    "flex-",
    "grid-",
    "w-",
    "h-",
    "rounded-",
    "border-",
    "shadow-",
    "transition-",
    "hover:",
    "focus:",
    "active:",
    "disabled:",
    "dark:",
    "light:",
)

EMOTION_SOURCE = "@emotion/react"
STYLED_COMPONENTS_SOURCE = "styled-components"

VARIANT_CONFIG_SCORE = 100
VARIANT_UTILITY_SCORE = 50
TAILWIND_IMPORT_SCORE = 30
HELPER_IMPORT_SCORE = 20
LIBRARY_IMPORT_SCORE = 50
CSS_IMPORT_SCORE = 15
UTILITY_CLASS_SCORE = 25
TAGGED_TEMPLATE_SCORE = 30
CSS_CALL_SCORE = 30

INDICATOR_WEIGHT = 15
MAX_CONFIDENCE = 100
RUNNER_UP_THRESHOLD = 50
CONTESTED_CONFIDENCE = (60, 80)


@dataclass
class CategoryScore:
    score: int = 0
    indicators: list[str] = field(default_factory=list)

    def add(self, points: int, indicator: str) -> None:
        self.score += points
        self.indicators.append(indicator)


def has_utility_class(text: str) -> bool:
    return any(pattern in text for pattern in UTILITY_CLASS_PATTERNS)


def _config_has_utility_class(config: VariantConfig) -> bool:
    if config.value is not None:
        return any(has_utility_class(text) for text in _config_strings(config.value))
    return has_utility_class(config.config_object)


def _config_strings(value: VariantConfigValue) -> Iterator[str]:
    yield from iter_strings(value.base)
    yield from iter_strings(value.variants)
    yield from iter_strings(value.default_variants)
    yield from iter_strings(value.compound_variants)


class StylingLibraryClassifier(Analyzer):
    """Scores styling categories and picks the most likely one."""

    name = "StylingLibraryClassifier"
    description = "Detects which styling library is being used in a component"
    category = "styling"
    owned_fields = ("styling_library",)

    def analyze(self, tree: Node, result: ComponentResult) -> None:
        scores = {category: CategoryScore() for category in CATEGORY_PRIORITY}

        self._score_variant_configs(result.variant_configs, scores)

        for path in walk(tree):
            node = path.node
            kind = node["type"]
            if kind == "ImportDeclaration":
                self._score_import(node, scores)
            elif kind == "JSXAttribute":
                self._score_class_name(node, scores)
            elif kind == "TaggedTemplateExpression":
                self._score_tagged_template(node, scores)
            elif kind == "CallExpression":
                self._score_css_call(node, scores)

        result.styling_library = self._decide(scores)
        logger.debug(
            "Styling library %s (confidence %d)",
            result.styling_library.type.value,
            result.styling_library.confidence,
        )

    def _score_variant_configs(
        self, configs: list[VariantConfig], scores: dict[StylingLibraryType, CategoryScore]
    ) -> None:
        if not configs:
            return
        scores[StylingLibraryType.VARIANT_AUTHORING].add(
            VARIANT_CONFIG_SCORE,
            f"Defines variant configs: {', '.join(c.variable_name for c in configs)}",
        )
        for config in configs:
            if _config_has_utility_class(config):
                scores[StylingLibraryType.TAILWIND_LIKE].add(
                    VARIANT_UTILITY_SCORE,
                    f"Variant config {config.variable_name} uses Tailwind-like classes",
                )

    def _score_import(self, node: Node, scores: dict[StylingLibraryType, CategoryScore]) -> None:
        source = string_value(node.get("source"))
        if source is None:
            return

        tailwind = scores[StylingLibraryType.TAILWIND_LIKE]
        if "tailwind" in source:
            tailwind.add(TAILWIND_IMPORT_SCORE, f"Imports from {source}")
        if "clsx" in source or "tailwind-merge" in source:
            tailwind.add(HELPER_IMPORT_SCORE, f"Imports class-name helper from {source}")
        if source == STYLED_COMPONENTS_SOURCE:
            scores[StylingLibraryType.STYLED_COMPONENTS_LIKE].add(
                LIBRARY_IMPORT_SCORE, f"Imports from {source}"
            )
        if source == EMOTION_SOURCE:
            scores[StylingLibraryType.EMOTION_LIKE].add(
                LIBRARY_IMPORT_SCORE, f"Imports from {source}"
            )
        if source.endswith(".css") and not source.endswith(".module.css"):
            tailwind.add(CSS_IMPORT_SCORE, f"Imports CSS file: {source}")

    def _score_class_name(
        self, node: Node, scores: dict[StylingLibraryType, CategoryScore]
    ) -> None:
        name = node.get("name")
        if node_type(name) != "JSXIdentifier" or name.get("name") != "className":
            return
        class_name = string_value(node.get("value"))
        if class_name is not None and has_utility_class(class_name):
            scores[StylingLibraryType.TAILWIND_LIKE].add(
                UTILITY_CLASS_SCORE, f"Uses Tailwind-like class: {class_name}"
            )

    def _score_tagged_template(
        self, node: Node, scores: dict[StylingLibraryType, CategoryScore]
    ) -> None:
        tag = node.get("tag")
        if node_type(tag) == "MemberExpression" and not tag.get("computed"):
            # styled.div`...`
            if node_type(tag.get("object")) == "Identifier":
                tag = tag.get("object")
        tag_name = identifier_name(tag)
        if node_type(tag) != "Identifier" or not tag_name:
            return
        if tag_name == "styled" or tag_name.endswith("Styled"):
            scores[StylingLibraryType.STYLED_COMPONENTS_LIKE].add(
                TAGGED_TEMPLATE_SCORE, f"Uses styled-components: {tag_name}"
            )

    def _score_css_call(self, node: Node, scores: dict[StylingLibraryType, CategoryScore]) -> None:
        callee = node.get("callee")
        if node_type(callee) == "Identifier" and callee.get("name") == "css":
            scores[StylingLibraryType.EMOTION_LIKE].add(CSS_CALL_SCORE, "Uses Emotion css function")

    @staticmethod
    def _decide(scores: dict[StylingLibraryType, CategoryScore]) -> StylingLibrary:
        winner: StylingLibraryType | None = None
        best = 0
        for category in CATEGORY_PRIORITY:
            if scores[category].score > best:
                best = scores[category].score
                winner = category

        if winner is None:
            return StylingLibrary()

        indicators = list(scores[winner].indicators)
        confidence = min(MAX_CONFIDENCE, best + len(indicators) * INDICATOR_WEIGHT)

        runner_up: StylingLibraryType | None = None
        runner_up_score = 0
        for category in CATEGORY_PRIORITY:
            if category is winner:
                continue
            if scores[category].score > runner_up_score:
                runner_up_score = scores[category].score
                runner_up = category

        if runner_up is not None and runner_up_score > RUNNER_UP_THRESHOLD:
            low, high = CONTESTED_CONFIDENCE
            confidence = max(low, min(high, confidence))
            indicators.append(f"Also matches {runner_up.value} (score {runner_up_score})")

        return StylingLibrary(type=winner, confidence=round(confidence), indicators=indicators)
