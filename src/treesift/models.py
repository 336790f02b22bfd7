"""
Component analysis models.

These models hold the facts extracted from a single component source file.
One ComponentResult is created per analysis run, filled in by the analyzer
pipeline and rendered to a plain key/value document with ``to_dict``.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any

from treesift.syntax.tree import SourceLocation
from treesift.values import ArrayValue, MappingValue, StringValue, Value


class ComponentType(Enum):
    """How the component is declared."""

    FUNCTION_DECLARATION = "FunctionDeclaration"
    ARROW_FUNCTION = "ArrowFunctionExpression"
    FUNCTION_EXPRESSION = "FunctionExpression"
    CLASS_DECLARATION = "ClassDeclaration"
    FORWARD_REF = "ForwardRefComponent"
    UNKNOWN = "Unknown"


class ExportType(Enum):
    DEFAULT = "default"
    NAMED = "named"


class StylingLibraryType(Enum):
    """Styling approach categories, in tie-break priority order."""

    TAILWIND_LIKE = "tailwindLike"
    STYLED_COMPONENTS_LIKE = "styledComponentsLike"
    EMOTION_LIKE = "emotionLike"
    VARIANT_AUTHORING = "variantAuthoring"
    UNKNOWN = "unknown"


class ClassNameArgKind(Enum):
    STRING = "string"
    OBJECT = "object"
    ARRAY = "array"
    IDENTIFIER = "identifier"
    CONDITIONAL = "conditional"
    UNKNOWN = "unknown"


class JSXChildKind(Enum):
    TEXT = "text"
    ELEMENT = "element"
    EXPRESSION = "expression"
    FRAGMENT = "fragment"


@dataclass
class PropInfo:
    """A prop found by syntactic presence; the type is never inferred."""

    name: str
    type: str = "any"
    is_optional: bool = True
    default_value: str | None = None
    description: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "name": self.name,
            "type": self.type,
            "isOptional": self.is_optional,
        }
        if self.default_value is not None:
            data["defaultValue"] = self.default_value
        if self.description is not None:
            data["description"] = self.description
        return data


@dataclass
class HookUsage:
    """One call site of a ``use*`` function."""

    name: str
    arguments: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "arguments": list(self.arguments)}


@dataclass
class VariantConfigValue:
    """Reconstructed ``cva(base, {variants, defaultVariants, compoundVariants})``."""

    base: Value = field(default_factory=lambda: StringValue(""))
    variants: MappingValue = field(default_factory=MappingValue)
    default_variants: MappingValue = field(default_factory=MappingValue)
    compound_variants: ArrayValue = field(default_factory=ArrayValue)

    def to_plain(self) -> dict[str, Any]:
        return {
            "base": self.base.to_plain(),
            "variants": self.variants.to_plain(),
            "defaultVariants": self.default_variants.to_plain(),
            "compoundVariants": self.compound_variants.to_plain(),
        }


@dataclass
class VariantConfig:
    variable_name: str
    value: VariantConfigValue | None
    config_object: str = "{}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "variableName": self.variable_name,
            "value": self.value.to_plain() if self.value is not None else None,
            "configObject": self.config_object,
        }


@dataclass
class ConditionalClass:
    """A ``test ? a : b`` argument of a class-name utility call."""

    condition: str = ""
    true_value: str = ""
    false_value: str = ""

    def to_dict(self) -> dict[str, str]:
        return {
            "condition": self.condition,
            "trueValue": self.true_value,
            "falseValue": self.false_value,
        }

    def render(self) -> str:
        return f'{self.condition} ? "{self.true_value}" : "{self.false_value}"'


@dataclass
class ClassNameArg:
    """
    A typed argument of a class-name utility call.

    ``value`` depends on ``kind``: a string for string/identifier/unknown, a
    mapping of class name to flag for object, a list of names for array and
    a ConditionalClass for conditional.
    """

    kind: ClassNameArgKind
    value: Any = ""

    def plain_value(self) -> Any:
        if isinstance(self.value, ConditionalClass):
            return self.value.to_dict()
        if isinstance(self.value, dict):
            return dict(self.value)
        if isinstance(self.value, list):
            return list(self.value)
        return self.value

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind.value, "value": self.plain_value()}

    def flatten(self) -> str:
        """Render the argument for the legacy string-only view."""
        if isinstance(self.value, ConditionalClass):
            return self.value.render()
        if isinstance(self.value, str):
            return self.value
        return json.dumps(self.plain_value(), separators=(",", ":"), ensure_ascii=False)


@dataclass
class ClassNameUsage:
    kind: str
    arguments: list[ClassNameArg] = field(default_factory=list)
    location: SourceLocation = field(default_factory=SourceLocation)

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind,
            "arguments": [arg.to_dict() for arg in self.arguments],
            "line": self.location.line,
            "column": self.location.column,
        }


@dataclass
class ClassNameUsageSummary:
    has_utility: bool = False
    import_source: str = ""
    usages: list[ClassNameUsage] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "hasUtility": self.has_utility,
            "importSource": self.import_source,
            "usages": [usage.to_dict() for usage in self.usages],
        }

    def legacy_view(self) -> dict[str, Any]:
        """Flattened view with every argument rendered as a string."""
        return {
            "importSource": self.import_source,
            "importName": self.usages[0].kind if self.usages else None,
            "usages": [
                {
                    "line": usage.location.line,
                    "column": usage.location.column,
                    "arguments": [arg.flatten() for arg in usage.arguments],
                }
                for usage in self.usages
            ],
        }


@dataclass
class JSXProp:
    name: str
    value: str | None = None
    is_spread: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "value": self.value, "isSpread": self.is_spread}


@dataclass
class JSXChild:
    kind: JSXChildKind
    content: str

    def to_dict(self) -> dict[str, str]:
        return {"kind": self.kind.value, "content": self.content}


@dataclass
class JSXElementInfo:
    name: str
    props: list[JSXProp] = field(default_factory=list)
    children: list[JSXChild] = field(default_factory=list)
    attributes: list[JSXProp] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "props": [prop.to_dict() for prop in self.props],
            "children": [child.to_dict() for child in self.children],
            "attributes": [{"name": attr.name, "value": attr.value} for attr in self.attributes],
        }


@dataclass
class StylingLibrary:
    type: StylingLibraryType = StylingLibraryType.UNKNOWN
    confidence: int = 0
    indicators: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type.value,
            "confidence": self.confidence,
            "indicators": list(self.indicators),
        }


@dataclass
class ContextUsage:
    consumes: list[str] = field(default_factory=list)
    provides: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, list[str]]:
        return {"consumes": list(self.consumes), "provides": list(self.provides)}


@dataclass
class ComponentResult:
    """
    Aggregate facts about one component file.

    Every field starts with an explicit default so the record is complete
    and serializable even when nothing could be detected. Each analyzer owns
    a disjoint subset of the fields.
    """

    file_path: str = ""
    name: str = "Unknown"
    type: ComponentType = ComponentType.UNKNOWN
    export_type: ExportType = ExportType.NAMED
    location: SourceLocation | None = None
    description: str | None = None

    props: list[PropInfo] = field(default_factory=list)
    hooks: list[HookUsage] = field(default_factory=list)
    variant_configs: list[VariantConfig] = field(default_factory=list)
    class_name_usage: ClassNameUsageSummary = field(default_factory=ClassNameUsageSummary)
    packages: list[str] = field(default_factory=list)
    exports: list[str] = field(default_factory=list)
    jsx_elements: dict[str, JSXElementInfo] = field(default_factory=dict)
    components: list[str] = field(default_factory=list)
    styling_library: StylingLibrary = field(default_factory=StylingLibrary)
    contexts: ContextUsage = field(default_factory=ContextUsage)
    hoc_wrappers: list[str] = field(default_factory=list)

    errors: list[str] = field(default_factory=list)

    def reset_fields(self, names: tuple[str, ...]) -> None:
        """Restore the given fields to their defaults."""
        fresh = ComponentResult(file_path=self.file_path)
        known = {f.name for f in fields(self)}
        for name in names:
            if name in known and name != "file_path":
                setattr(self, name, getattr(fresh, name))

    def to_dict(self) -> dict[str, Any]:
        """Render as a plain, JSON-encodable document."""
        return {
            "name": self.name,
            "type": self.type.value,
            "exportType": self.export_type.value,
            "filePath": self.file_path,
            "location": self.location.to_dict() if self.location is not None else None,
            "description": self.description,
            "props": [prop.to_dict() for prop in self.props],
            "hooks": [hook.to_dict() for hook in self.hooks],
            "variantConfigs": [config.to_dict() for config in self.variant_configs],
            "classNameUsage": self.class_name_usage.to_dict(),
            "classNames": self.class_name_usage.legacy_view(),
            "packages": list(self.packages),
            "exports": list(self.exports),
            "jsxElements": {name: el.to_dict() for name, el in self.jsx_elements.items()},
            "components": list(self.components),
            "stylingLibrary": self.styling_library.to_dict(),
            "contexts": self.contexts.to_dict(),
            "hocWrappers": list(self.hoc_wrappers),
            "errors": list(self.errors),
        }

    def to_json(self, indent: int | None = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)
