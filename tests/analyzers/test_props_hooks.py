"""Tests for PropCollector and HookCollector."""

import pytest
from nodes import (
    array,
    arrow,
    call,
    const,
    expr,
    file,
    function_decl,
    function_expr,
    ident,
    member,
    number,
    obj,
    object_pattern,
    string,
)

from treesift.analyzers import HookCollector, PropCollector
from treesift.analyzers.hooks import serialize_hook_argument
from treesift.models import ComponentResult


def collect_props(tree) -> list[str]:
    result = ComponentResult()
    PropCollector().analyze(tree, result)
    return [prop.name for prop in result.props]


class TestPropCollector:
    """Props are found by syntactic presence."""

    def test_member_access_on_props(self) -> None:
        tree = file(
            function_decl("Card", ident("props"), body=[expr(member("props", "title"))]),
        )

        assert collect_props(tree) == ["title"]

    def test_computed_member_access_ignored(self) -> None:
        tree = file(expr(member("props", "title", computed=True)))

        assert collect_props(tree) == []

    def test_destructured_function_parameter(self) -> None:
        tree = file(function_decl("Card", object_pattern("title", "body")))

        assert collect_props(tree) == ["title", "body"]

    def test_destructured_arrow_parameter(self) -> None:
        tree = file(const("Card", arrow(object_pattern("label"))))

        assert collect_props(tree) == ["label"]

    def test_function_expression_parameter_not_scanned(self) -> None:
        tree = file(const("Card", function_expr(object_pattern("label"))))

        assert collect_props(tree) == []

    def test_destructuring_props_variable(self) -> None:
        tree = file(const(object_pattern("size", "variant"), ident("props")))

        assert collect_props(tree) == ["size", "variant"]

    def test_destructuring_other_variable_ignored(self) -> None:
        tree = file(const(object_pattern("size"), ident("options")))

        assert collect_props(tree) == []

    def test_duplicates_kept(self) -> None:
        tree = file(
            function_decl(
                "Card",
                object_pattern("title"),
                body=[expr(member("props", "title"))],
            )
        )

        assert collect_props(tree) == ["title", "title"]

    def test_prop_record_defaults(self) -> None:
        result = ComponentResult()
        PropCollector().analyze(file(expr(member("props", "title"))), result)

        assert result.props[0].to_dict() == {"name": "title", "type": "any", "isOptional": True}


class TestSerializeHookArgument:
    """Hook argument serialization policy."""

    @pytest.mark.parametrize(
        "node,expected",
        [
            (ident("count"), "count"),
            (string("dark"), "dark"),
            (number(0), "0"),
            (number(1.5), "1.5"),
            (array(ident("a"), string("b"), number(2)), "[a, b, 2]"),
            (array(ident("a"), obj()), "[a, ...]"),
            (array(), "[]"),
            (arrow(), "() => {...}"),
            (function_expr(), "() => {...}"),
            (obj(), "..."),
            (call("compute"), "..."),
        ],
    )
    def test_policy(self, node, expected) -> None:
        assert serialize_hook_argument(node) == expected


class TestHookCollector:
    """Every use* call is recorded."""

    def test_builtin_and_custom_hooks(self) -> None:
        tree = file(
            const("state", call("useState", number(0))),
            expr(call("useEffect", arrow(), array(ident("state")))),
            expr(call("useTheme")),
            expr(call("user")),
            expr(call(member("React", "useState"), number(1))),
            expr(call("compute")),
        )
        result = ComponentResult()

        HookCollector().analyze(tree, result)

        assert [hook.to_dict() for hook in result.hooks] == [
            {"name": "useState", "arguments": ["0"]},
            {"name": "useEffect", "arguments": ["() => {...}", "[state]"]},
            {"name": "useTheme", "arguments": []},
            {"name": "user", "arguments": []},
        ]

    def test_repeated_calls_not_deduplicated(self) -> None:
        tree = file(expr(call("useRef")), expr(call("useRef")))
        result = ComponentResult()

        HookCollector().analyze(tree, result)

        assert len(result.hooks) == 2
