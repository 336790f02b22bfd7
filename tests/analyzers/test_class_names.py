"""Tests for ClassNameUsageAnalyzer."""

from nodes import (
    array,
    binary,
    boolean,
    call,
    conditional,
    expr,
    file,
    ident,
    import_decl,
    import_spec,
    jsx,
    jsx_attr,
    jsx_container,
    member,
    number,
    obj,
    prop,
    string,
    template,
)

from treesift.analyzers import ClassNameUsageAnalyzer
from treesift.analyzers.class_names import classify_argument, collect_utility_imports
from treesift.models import ClassNameArgKind, ComponentResult


def analyze(tree) -> ComponentResult:
    result = ComponentResult()
    ClassNameUsageAnalyzer().analyze(tree, result)
    return result


class TestClassifyArgument:
    """Typed argument records."""

    def test_string_and_template(self) -> None:
        assert classify_argument(string("px-4")).to_dict() == {"kind": "string", "value": "px-4"}
        assert classify_argument(template("p-", "")).to_dict() == {"kind": "string", "value": "p-"}

    def test_object_flags(self) -> None:
        node = obj(
            prop("active", boolean(True)),
            prop("hidden", boolean(False)),
            prop("tone", string("muted")),
            prop("open", ident("isOpen")),
        )

        assert classify_argument(node).value == {
            "active": True,
            "hidden": False,
            "tone": "muted",
            "open": True,
        }

    def test_array_drops_unnamed_elements(self) -> None:
        node = array(string("a"), ident("b"), number(1))

        assert classify_argument(node).value == ["a", "b"]

    def test_identifier(self) -> None:
        assert classify_argument(ident("className")).to_dict() == {
            "kind": "identifier",
            "value": "className",
        }

    def test_conditional_with_binary_test(self) -> None:
        node = conditional(
            binary(member("props", "size"), "===", string("lg")),
            string("h-12"),
            ident("fallback"),
        )

        arg = classify_argument(node)

        assert arg.kind == ClassNameArgKind.CONDITIONAL
        assert arg.to_dict()["value"] == {
            "condition": "props.size === lg",
            "trueValue": "h-12",
            "falseValue": "fallback",
        }
        assert arg.flatten() == 'props.size === lg ? "h-12" : "fallback"'

    def test_conditional_with_identifier_test(self) -> None:
        arg = classify_argument(conditional(ident("active"), string("a"), string("b")))

        assert arg.value.condition == "active"

    def test_unknown(self) -> None:
        assert classify_argument(call("fn")).to_dict() == {"kind": "unknown", "value": ""}


class TestUtilityImports:
    """Pass one: bindings of imported utilities."""

    def test_canonical_names_and_aliases(self) -> None:
        tree = file(
            import_decl("clsx", import_spec("clsx")),
            import_decl("@/lib/utils", import_spec("cn", "classes")),
            import_decl("react", import_spec("useState")),
        )

        bindings, source = collect_utility_imports(tree)

        assert bindings == {"clsx": "clsx", "classes": "@/lib/utils"}
        assert source == "@/lib/utils"


class TestClassNameUsageAnalyzer:
    """Pass two: call sites."""

    def test_call_inside_class_name_attribute_counted_once(self) -> None:
        tree = file(
            import_decl("@/lib/utils", import_spec("cn")),
            expr(
                jsx(
                    "div",
                    [jsx_attr("className", jsx_container(call("cn", string("p-4"), line=7)))],
                )
            ),
        )

        summary = analyze(tree).class_name_usage

        assert summary.has_utility is True
        assert summary.import_source == "@/lib/utils"
        assert [usage.to_dict() for usage in summary.usages] == [
            {
                "kind": "cn",
                "arguments": [{"kind": "string", "value": "p-4"}],
                "line": 7,
                "column": 4,
            }
        ]

    def test_display_kinds(self) -> None:
        tree = file(
            import_decl("classnames", import_spec("default", "cls")),
            import_decl("@/lib/utils", import_spec("cn", "merge")),
            expr(call("clsx", string("a"))),
            expr(call("classnames", string("b"))),
            expr(call("cx", string("c"))),
            expr(call("merge", string("d"))),
            expr(call("cls", string("e"))),
        )

        usages = analyze(tree).class_name_usage.usages

        assert [usage.kind for usage in usages] == ["clsx", "classnames", "classnames", "cn"]

    def test_canonical_call_without_import(self) -> None:
        summary = analyze(file(expr(call("clsx", string("a"))))).class_name_usage

        assert summary.has_utility is True
        assert summary.import_source == ""

    def test_missing_location_is_zero(self) -> None:
        usage = analyze(file(expr(call("cn")))).class_name_usage.usages[0]

        assert (usage.location.line, usage.location.column) == (0, 0)

    def test_legacy_view(self) -> None:
        tree = file(
            expr(
                call(
                    "cn",
                    string("base"),
                    obj(prop("active", boolean(True))),
                    conditional(ident("open"), string("a"), string("b")),
                    line=3,
                )
            )
        )

        legacy = analyze(tree).class_name_usage.legacy_view()

        assert legacy == {
            "importSource": "",
            "importName": "cn",
            "usages": [
                {
                    "line": 3,
                    "column": 4,
                    "arguments": ["base", '{"active":true}', 'open ? "a" : "b"'],
                }
            ],
        }

    def test_legacy_view_keeps_non_ascii_keys(self) -> None:
        tree = file(expr(call("cn", obj(prop("é-active", boolean(True))), array(string("ü")))))

        legacy = analyze(tree).class_name_usage.legacy_view()

        assert legacy["usages"][0]["arguments"] == ['{"é-active":true}', '["ü"]']

    def test_no_usage(self) -> None:
        summary = analyze(file(expr(call("format", string("x"))))).class_name_usage

        assert summary.has_utility is False
        assert summary.usages == []
        assert summary.legacy_view()["importName"] is None
