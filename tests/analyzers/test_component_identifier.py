"""Tests for ComponentIdentifier."""

from nodes import (
    arrow,
    call,
    class_decl,
    const,
    doc_comment,
    export_default,
    export_named,
    file,
    function_decl,
    function_expr,
    ident,
    member,
    with_comments,
)

from treesift.analyzers import ComponentIdentifier
from treesift.analyzers.component_identifier import extract_doc_summary, is_forward_ref_call
from treesift.models import ComponentResult, ComponentType
from treesift.syntax.tree import SourceLocation


def identify(tree) -> ComponentResult:
    result = ComponentResult(file_path="Component.tsx")
    ComponentIdentifier().analyze(tree, result)
    return result


class TestDefaultExport:
    """Default exports take precedence over every other declaration."""

    def test_default_exported_function(self) -> None:
        tree = file(export_default(function_decl("Widget", line=3)))

        result = identify(tree)

        assert result.name == "Widget"
        assert result.type == ComponentType.FUNCTION_DECLARATION
        assert result.location == SourceLocation(3, 0)

    def test_default_exported_class(self) -> None:
        tree = file(export_default(class_decl("Panel", member("React", "Component"))))

        result = identify(tree)

        assert result.name == "Panel"
        assert result.type == ComponentType.CLASS_DECLARATION

    def test_identifier_resolved_to_arrow_function(self) -> None:
        tree = file(
            const("Button", arrow(), line=1),
            export_default(ident("Button")),
        )

        result = identify(tree)

        assert result.name == "Button"
        assert result.type == ComponentType.ARROW_FUNCTION
        assert result.location == SourceLocation(1, 6)

    def test_identifier_resolved_to_function_expression(self) -> None:
        tree = file(const("Button", function_expr()), export_default(ident("Button")))

        assert identify(tree).type == ComponentType.FUNCTION_EXPRESSION

    def test_identifier_resolved_to_forward_ref(self) -> None:
        tree = file(
            const("Input", call(member("React", "forwardRef"), arrow())),
            export_default(ident("Input")),
        )

        result = identify(tree)

        assert result.name == "Input"
        assert result.type == ComponentType.FORWARD_REF

    def test_identifier_resolved_to_class(self) -> None:
        tree = file(class_decl("Legacy"), export_default(ident("Legacy")))

        assert identify(tree).type == ComponentType.CLASS_DECLARATION

    def test_unresolved_identifier_keeps_name(self) -> None:
        tree = file(export_default(ident("Imported")))

        result = identify(tree)

        assert result.name == "Imported"
        assert result.type == ComponentType.UNKNOWN
        assert result.location is None

    def test_default_export_wins_over_later_named_component(self) -> None:
        tree = file(
            export_default(function_decl("Main")),
            export_named(const("Helper", arrow())),
        )

        assert identify(tree).name == "Main"


class TestNamedFallback:
    """Without a default export the last uppercase declaration wins."""

    def test_last_uppercase_declaration_wins(self) -> None:
        tree = file(
            const("First", arrow()),
            export_named(const("Second", arrow())),
            function_decl("helper"),
        )

        result = identify(tree)

        assert result.name == "Second"
        assert result.type == ComponentType.ARROW_FUNCTION

    def test_exported_forward_ref(self) -> None:
        tree = file(export_named(const("TextField", call("forwardRef", arrow()))))

        assert identify(tree).type == ComponentType.FORWARD_REF

    def test_no_components_gives_unknown(self) -> None:
        tree = file(const("value", arrow()), function_decl("helper"))

        result = identify(tree)

        assert result.name == "Unknown"
        assert result.type == ComponentType.UNKNOWN
        assert result.description is None

    def test_empty_tree(self) -> None:
        assert identify(file()).name == "Unknown"

    def test_non_component_initializer_ignored(self) -> None:
        tree = file(const("Theme", call("createTheme")))

        assert identify(tree).name == "Unknown"


class TestDescription:
    """Doc comment summaries."""

    def test_summary_from_export_wrapper(self) -> None:
        tree = file(
            with_comments(
                export_default(function_decl("Widget")),
                doc_comment("*\n * Renders a widget.\n * Second line.\n *\n * @param props x\n "),
            )
        )

        assert identify(tree).description == "Renders a widget. Second line."

    def test_summary_from_variable_declaration(self) -> None:
        tree = file(with_comments(const("Badge", arrow()), doc_comment("* A small badge. ")))

        assert identify(tree).description == "A small badge."

    def test_plain_block_comment_ignored(self) -> None:
        node = with_comments(const("A", arrow()), doc_comment(" plain "))

        assert extract_doc_summary(node) is None

    def test_stops_at_tag(self) -> None:
        node = with_comments({"type": "X"}, doc_comment("*\n * @deprecated\n "))

        assert extract_doc_summary(node) is None


def test_is_forward_ref_call() -> None:
    assert is_forward_ref_call(call("forwardRef", arrow()))
    assert is_forward_ref_call(call(member("React", "forwardRef"), arrow()))
    assert not is_forward_ref_call(call(member("Other", "forwardRef"), arrow()))
    assert not is_forward_ref_call(None)
