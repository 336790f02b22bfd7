"""
Variant-authoring config extraction.

Detects ``cva`` configurations assigned to a variable:

    const button = cva("px-4 py-2", {
        variants: {intent: {primary: "bg-blue-500"}},
        defaultVariants: {intent: "primary"},
        compoundVariants: [],
    })

and rebuilds the literal value of the config without evaluating anything.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from treesift.models import ComponentResult, VariantConfig, VariantConfigValue
from treesift.syntax.tree import (
    Node,
    identifier_name,
    is_identifier,
    node_type,
    property_key_name,
    string_value,
    template_text,
    walk,
)
from treesift.values import (
    EMPTY_STRING,
    ArrayValue,
    BooleanValue,
    CallValue,
    IdentifierValue,
    MappingValue,
    NullValue,
    NumberValue,
    StringValue,
    Value,
)

from .base import Analyzer

logger = logging.getLogger(__name__)

VARIANT_FACTORY = "cva"


def reconstruct_value(node: Any) -> Value:
    """
    Rebuild a literal value from an expression node.

    Unrecognized shapes become an empty string.
    """
    kind = node_type(node)

    if kind == "StringLiteral":
        return StringValue(string_value(node) or "")
    if kind == "TemplateLiteral":
        return StringValue(template_text(node))
    if kind == "ArrayExpression":
        return reconstruct_array(node)
    if kind == "ObjectExpression":
        return reconstruct_mapping(node)
    if kind == "Identifier":
        return IdentifierValue(identifier_name(node) or "")
    if kind == "NumericLiteral":
        value = node.get("value")
        return NumberValue(value if isinstance(value, (int, float)) else 0)
    if kind == "BooleanLiteral":
        return BooleanValue(bool(node.get("value")))
    if kind == "NullLiteral":
        return NullValue()
    if kind == "CallExpression":
        return CallValue(
            callee=reconstruct_value(node.get("callee")),
            arguments=tuple(reconstruct_value(arg) for arg in node.get("arguments") or []),
        )
    return EMPTY_STRING


def reconstruct_array(node: Node) -> ArrayValue:
    items: list[Value] = []
    for element in node.get("elements") or []:
        items.append(NullValue() if element is None else reconstruct_value(element))
    return ArrayValue(tuple(items))


def reconstruct_mapping(node: Node) -> MappingValue:
    entries: dict[str, Value] = {}
    for prop in node.get("properties") or []:
        kind = node_type(prop)
        if kind == "ObjectProperty":
            key = property_key_name(prop)
            if key is not None:
                entries[key] = reconstruct_value(prop.get("value"))
        elif kind == "SpreadElement":
            spread = reconstruct_value(prop.get("argument"))
            if isinstance(spread, MappingValue):
                entries.update(spread.entries)
    return MappingValue(entries)


def _find_property(config: Node, key: str) -> Node | None:
    for prop in config.get("properties") or []:
        if property_key_name(prop) == key:
            return prop.get("value")
    return None


def parse_variant_config(call: Node) -> VariantConfigValue:
    """Build the config value from the arguments of a ``cva`` call."""
    arguments = call.get("arguments") or []
    if not arguments:
        return VariantConfigValue()

    config = VariantConfigValue(base=reconstruct_value(arguments[0]))

    if len(arguments) > 1 and node_type(arguments[1]) == "ObjectExpression":
        options = arguments[1]

        variants = _find_property(options, "variants")
        if node_type(variants) == "ObjectExpression":
            config.variants = reconstruct_mapping(variants)

        default_variants = _find_property(options, "defaultVariants")
        if node_type(default_variants) == "ObjectExpression":
            config.default_variants = reconstruct_mapping(default_variants)

        compound_variants = _find_property(options, "compoundVariants")
        if node_type(compound_variants) == "ArrayExpression":
            config.compound_variants = reconstruct_array(compound_variants)

    return config


def is_variant_factory_call(node: Any) -> bool:
    return node_type(node) == "CallExpression" and is_identifier(
        node.get("callee"), VARIANT_FACTORY
    )


class VariantConfigAnalyzer(Analyzer):
    """Collects ``cva`` configs keyed by the variable they are assigned to."""

    name = "VariantConfigAnalyzer"
    description = "Analyzes Class Variance Authority (CVA) usage in components"
    category = "styling"
    owned_fields = ("variant_configs",)

    def analyze(self, tree: Node, result: ComponentResult) -> None:
        configs: list[VariantConfig] = []

        for path in walk(tree):
            if not is_variant_factory_call(path.node):
                continue
            parent = path.parent
            if node_type(parent) != "VariableDeclarator" or path.key != "init":
                continue
            variable_name = identifier_name(parent.get("id"))
            if not variable_name:
                continue

            value = parse_variant_config(path.node)
            configs.append(
                VariantConfig(
                    variable_name=variable_name,
                    value=value,
                    config_object=json.dumps(value.to_plain(), indent=2, ensure_ascii=False),
                )
            )
            logger.debug("Found variant config %s", variable_name)

        result.variant_configs = configs
