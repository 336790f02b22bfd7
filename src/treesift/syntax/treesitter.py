"""
Tree-sitter backed parser.

Parses JavaScript/TypeScript (with JSX) using the tree-sitter TSX and
TypeScript grammars, then lowers the concrete syntax tree into the
Babel-shaped document the analyzers consume. Only the node kinds the
analyzers look at are lowered precisely; anything else becomes a generic
node (PascalCase kind, ``children`` list) so nested expressions stay
reachable by the walker.
"""

from __future__ import annotations

import html
import logging
import re
from pathlib import Path
from typing import Any

import tree_sitter_typescript
from tree_sitter import Language, Parser
from tree_sitter import Node as TSNode

from treesift.exceptions import ParseError, SourceFileError

from .tree import Node

logger = logging.getLogger(__name__)

TSX_LANGUAGE = Language(tree_sitter_typescript.language_tsx())
TYPESCRIPT_LANGUAGE = Language(tree_sitter_typescript.language_typescript())

# Type-only subtrees are dropped; the analyzers never look at types
_SKIPPED_KINDS = frozenset(
    {
        "comment",
        "type_annotation",
        "type_arguments",
        "type_parameters",
        "asserts_annotation",
        "accessibility_modifier",
        "override_modifier",
        "decorator",
    }
)

_LOGICAL_OPERATORS = frozenset({"&&", "||", "??"})

# Adjacent runs of these become a single JSXText
_JSX_TEXT_KINDS = frozenset({"jsx_text", "html_character_reference"})

_SIMPLE_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "b": "\b",
    "f": "\f",
    "v": "\v",
    "0": "\0",
}

_UNICODE_ESCAPE = re.compile(
    r"^\\u\{([0-9a-fA-F]+)\}$|^\\u([0-9a-fA-F]{4})$|^\\x([0-9a-fA-F]{2})$"
)


def _pascal(kind: str) -> str:
    return "".join(part.capitalize() for part in kind.split("_") if part)


def _decode_escape(text: str) -> str:
    """Decode one JavaScript escape sequence (including the backslash)."""
    match = _UNICODE_ESCAPE.match(text)
    if match:
        digits = next(group for group in match.groups() if group)
        return chr(int(digits, 16))
    body = text[1:]
    if body.startswith(("\n", "\r")):
        return ""
    if body in _SIMPLE_ESCAPES:
        return _SIMPLE_ESCAPES[body]
    return body


def _char_column(source: bytes, byte_offset: int, byte_column: int) -> int:
    """Convert a byte column to UTF-16 code units, the unit Babel counts in."""
    prefix = source[byte_offset - byte_column : byte_offset]
    if prefix.isascii():
        return byte_column
    return len(prefix.decode("utf-8", errors="replace").encode("utf-16-le")) // 2


def _parse_number(text: str) -> int | float:
    cleaned = text.replace("_", "").lower()
    if cleaned.endswith("n"):
        cleaned = cleaned[:-1]
    try:
        if cleaned.startswith(("0x", "0o", "0b")):
            return int(cleaned, 0)
        if cleaned.isdigit():
            return int(cleaned)
        return float(cleaned)
    except ValueError:
        return 0


class _Lowering:
    """Converts one tree-sitter tree into Babel-shaped nodes."""

    def __init__(self, source: bytes):
        self.source = source
        self.ascii = source.isascii()
        self.comments: list[Node] = []

    # Helpers

    def text(self, node: TSNode) -> str:
        return self.source[node.start_byte : node.end_byte].decode("utf-8", errors="replace")

    def position(self, byte_offset: int, point: tuple[int, int]) -> dict[str, int]:
        """Babel-style position: 1-indexed line, column in UTF-16 code units."""
        row, column = point
        if not self.ascii:
            column = _char_column(self.source, byte_offset, column)
        return {"line": row + 1, "column": column}

    def make(
        self, node_kind: str, ts_node: TSNode, end_node: TSNode | None = None, **fields: Any
    ) -> Node:
        """Build a node of the given type spanning ts_node (through end_node if given)."""
        last = end_node if end_node is not None else ts_node
        node: Node = {"type": node_kind}
        node.update(fields)
        node["loc"] = {
            "start": self.position(ts_node.start_byte, ts_node.start_point),
            "end": self.position(last.end_byte, last.end_point),
        }
        return node

    def named(self, node: TSNode) -> list[TSNode]:
        return [child for child in node.named_children if child.type not in _SKIPPED_KINDS]

    def field(self, node: TSNode, name: str) -> Node | None:
        child = node.child_by_field_name(name)
        return self.convert(child) if child is not None else None

    def convert_all(self, nodes: list[TSNode]) -> list[Node]:
        converted = []
        for child in nodes:
            result = self.convert(child)
            if result is not None:
                converted.append(result)
        return converted

    def comment(self, node: TSNode) -> Node:
        text = self.text(node)
        if text.startswith("/*"):
            return self.make("CommentBlock", node, value=text[2:-2])
        return self.make("CommentLine", node, value=text[2:])

    # Dispatch

    def convert(self, node: TSNode | None) -> Node | None:
        if node is None or node.type in _SKIPPED_KINDS:
            return None
        handler = getattr(self, f"_lower_{node.type}", None)
        if handler is not None:
            return handler(node)
        return self.make(_pascal(node.type), node, children=self.convert_all(self.named(node)))

    def lower_file(self, root: TSNode) -> Node:
        body: list[Node] = []
        pending: list[Node] = []
        for child in root.named_children:
            if child.type == "comment":
                comment = self.comment(child)
                self.comments.append(comment)
                pending.append(comment)
                continue
            statement = self.convert(child)
            if statement is None:
                continue
            if pending:
                statement["leadingComments"] = pending
                pending = []
            body.append(statement)
        program = self.make("Program", root, sourceType="module", body=body)
        return self.make("File", root, program=program, comments=self.comments)

    # Statements

    def _lower_expression_statement(self, node: TSNode) -> Node:
        children = self.convert_all(self.named(node))
        if len(children) == 1:
            return self.make("ExpressionStatement", node, expression=children[0])
        return self.make(
            "ExpressionStatement",
            node,
            expression=self.make("SequenceExpression", node, expressions=children),
        )

    def _lower_return_statement(self, node: TSNode) -> Node:
        children = self.convert_all(self.named(node))
        return self.make("ReturnStatement", node, argument=children[0] if children else None)

    def _lower_statement_block(self, node: TSNode) -> Node:
        return self.make("BlockStatement", node, body=self.convert_all(self.named(node)))

    def _lower_if_statement(self, node: TSNode) -> Node:
        alternate = node.child_by_field_name("alternative")
        if alternate is not None and alternate.type == "else_clause":
            inner = self.named(alternate)
            alternate = inner[0] if inner else None
        return self.make(
            "IfStatement",
            node,
            test=self.field(node, "condition"),
            consequent=self.field(node, "consequence"),
            alternate=self.convert(alternate),
        )

    def _lower_lexical_declaration(self, node: TSNode) -> Node:
        kind = node.children[0].type if node.children else "const"
        declarators = [c for c in self.named(node) if c.type == "variable_declarator"]
        return self.make(
            "VariableDeclaration", node, kind=kind, declarations=self.convert_all(declarators)
        )

    _lower_variable_declaration = _lower_lexical_declaration

    def _lower_variable_declarator(self, node: TSNode) -> Node:
        return self.make(
            "VariableDeclarator",
            node,
            id=self.field(node, "name"),
            init=self.field(node, "value"),
        )

    def _lower_import_statement(self, node: TSNode) -> Node:
        source_node = node.child_by_field_name("source")
        if source_node is None:
            strings = [c for c in node.named_children if c.type == "string"]
            source_node = strings[-1] if strings else None

        specifiers: list[Node] = []
        for clause in node.named_children:
            if clause.type != "import_clause":
                continue
            for part in clause.named_children:
                if part.type == "identifier":
                    specifiers.append(
                        self.make("ImportDefaultSpecifier", part, local=self.convert(part))
                    )
                elif part.type == "namespace_import":
                    names = [c for c in part.named_children if c.type == "identifier"]
                    if names:
                        specifiers.append(
                            self.make(
                                "ImportNamespaceSpecifier", part, local=self.convert(names[0])
                            )
                        )
                elif part.type == "named_imports":
                    for spec in part.named_children:
                        if spec.type != "import_specifier":
                            continue
                        imported = self.field(spec, "name")
                        alias = self.field(spec, "alias")
                        specifiers.append(
                            self.make(
                                "ImportSpecifier",
                                spec,
                                imported=imported,
                                local=alias or imported,
                            )
                        )

        return self.make(
            "ImportDeclaration",
            node,
            specifiers=specifiers,
            source=self.convert(source_node) if source_node is not None else None,
        )

    def _lower_export_statement(self, node: TSNode) -> Node:
        is_default = any(child.type == "default" for child in node.children)
        declaration = node.child_by_field_name("declaration")
        value = node.child_by_field_name("value")
        source = self.field(node, "source")

        if is_default:
            target = declaration or value
            lowered = self.convert(target)
            # export default function () {} / export default class {}
            if lowered is not None and lowered["type"] == "FunctionExpression":
                lowered["type"] = "FunctionDeclaration"
            elif lowered is not None and lowered["type"] == "ClassExpression":
                lowered["type"] = "ClassDeclaration"
            return self.make("ExportDefaultDeclaration", node, declaration=lowered)

        if declaration is not None:
            return self.make(
                "ExportNamedDeclaration",
                node,
                declaration=self.convert(declaration),
                specifiers=[],
                source=None,
            )

        clauses = [c for c in node.named_children if c.type == "export_clause"]
        if not clauses:
            if any(child.type == "*" for child in node.children):
                return self.make("ExportAllDeclaration", node, source=source)
            return self.make(
                "ExportNamedDeclaration", node, declaration=None, specifiers=[], source=source
            )

        specifiers = []
        for spec in clauses[0].named_children:
            if spec.type != "export_specifier":
                continue
            local = self.field(spec, "name")
            alias = self.field(spec, "alias")
            specifiers.append(
                self.make("ExportSpecifier", spec, local=local, exported=alias or local)
            )
        return self.make(
            "ExportNamedDeclaration", node, declaration=None, specifiers=specifiers, source=source
        )

    # Functions and classes

    def params(self, node: TSNode) -> list[Node]:
        single = node.child_by_field_name("parameter")
        if single is not None:
            converted = self.convert(single)
            return [converted] if converted is not None else []
        parameters = node.child_by_field_name("parameters")
        if parameters is None:
            return []
        params: list[Node] = []
        for param in self.named(parameters):
            if param.type in ("required_parameter", "optional_parameter"):
                pattern_node = param.child_by_field_name("pattern")
                pattern = self.convert(pattern_node)
                if pattern is None:
                    continue
                default = param.child_by_field_name("value")
                if default is not None:
                    pattern = self.make(
                        "AssignmentPattern", param, left=pattern, right=self.convert(default)
                    )
                params.append(pattern)
            else:
                converted = self.convert(param)
                if converted is not None:
                    params.append(converted)
        return params

    def function(self, kind: str, node: TSNode) -> Node:
        return self.make(
            kind,
            node,
            id=self.field(node, "name"),
            params=self.params(node),
            body=self.field(node, "body"),
            **{"async": any(child.type == "async" for child in node.children)},
        )

    def _lower_function_declaration(self, node: TSNode) -> Node:
        return self.function("FunctionDeclaration", node)

    _lower_generator_function_declaration = _lower_function_declaration

    def _lower_function_expression(self, node: TSNode) -> Node:
        return self.function("FunctionExpression", node)

    _lower_function = _lower_function_expression
    _lower_generator_function = _lower_function_expression

    def _lower_arrow_function(self, node: TSNode) -> Node:
        return self.make(
            "ArrowFunctionExpression",
            node,
            params=self.params(node),
            body=self.field(node, "body"),
        )

    def super_class(self, node: TSNode) -> Node | None:
        for child in node.named_children:
            if child.type != "class_heritage":
                continue
            for part in child.named_children:
                if part.type == "extends_clause":
                    value = part.child_by_field_name("value")
                    if value is None:
                        inner = self.named(part)
                        value = inner[0] if inner else None
                    return self.convert(value)
                if part.type != "implements_clause":
                    return self.convert(part)
        return None

    def class_node(self, kind: str, node: TSNode) -> Node:
        return self.make(
            kind,
            node,
            id=self.field(node, "name"),
            superClass=self.super_class(node),
            body=self.field(node, "body"),
        )

    def _lower_class_declaration(self, node: TSNode) -> Node:
        return self.class_node("ClassDeclaration", node)

    _lower_abstract_class_declaration = _lower_class_declaration

    def _lower_class(self, node: TSNode) -> Node:
        return self.class_node("ClassExpression", node)

    def _lower_class_body(self, node: TSNode) -> Node:
        return self.make("ClassBody", node, body=self.convert_all(self.named(node)))

    def _lower_method_definition(self, node: TSNode) -> Node:
        return self.make(
            "ClassMethod",
            node,
            key=self.field(node, "name"),
            params=self.params(node),
            body=self.field(node, "body"),
        )

    def _lower_public_field_definition(self, node: TSNode) -> Node:
        key = node.child_by_field_name("name") or node.child_by_field_name("property")
        return self.make(
            "ClassProperty", node, key=self.convert(key), value=self.field(node, "value")
        )

    _lower_field_definition = _lower_public_field_definition

    # Identifiers and literals

    def _lower_identifier(self, node: TSNode) -> Node:
        return self.make("Identifier", node, name=self.text(node))

    _lower_property_identifier = _lower_identifier
    _lower_shorthand_property_identifier = _lower_identifier
    _lower_shorthand_property_identifier_pattern = _lower_identifier
    _lower_type_identifier = _lower_identifier
    _lower_private_property_identifier = _lower_identifier
    _lower_statement_identifier = _lower_identifier
    _lower_undefined = _lower_identifier

    def _lower_this(self, node: TSNode) -> Node:
        return self.make("ThisExpression", node)

    def _lower_string(self, node: TSNode) -> Node:
        parts = self.named(node)
        if not parts:
            value = self.text(node)[1:-1]
        else:
            pieces = []
            for part in parts:
                if part.type == "escape_sequence":
                    pieces.append(_decode_escape(self.text(part)))
                else:
                    pieces.append(self.text(part))
            value = "".join(pieces)
        return self.make("StringLiteral", node, value=value)

    def _lower_template_string(self, node: TSNode) -> Node:
        substitutions = [c for c in node.named_children if c.type == "template_substitution"]
        quasis: list[Node] = []
        expressions: list[Node] = []
        cursor = node.start_byte + 1
        for substitution in substitutions:
            raw = self.source[cursor : substitution.start_byte].decode("utf-8", errors="replace")
            quasis.append({"type": "TemplateElement", "value": {"raw": raw, "cooked": raw}})
            inner = self.convert_all(self.named(substitution))
            if inner:
                expressions.append(inner[0])
            cursor = substitution.end_byte
        raw = self.source[cursor : max(cursor, node.end_byte - 1)].decode(
            "utf-8", errors="replace"
        )
        quasis.append(
            {"type": "TemplateElement", "value": {"raw": raw, "cooked": raw}, "tail": True}
        )
        return self.make("TemplateLiteral", node, quasis=quasis, expressions=expressions)

    def _lower_number(self, node: TSNode) -> Node:
        return self.make("NumericLiteral", node, value=_parse_number(self.text(node)))

    def _lower_true(self, node: TSNode) -> Node:
        return self.make("BooleanLiteral", node, value=True)

    def _lower_false(self, node: TSNode) -> Node:
        return self.make("BooleanLiteral", node, value=False)

    def _lower_null(self, node: TSNode) -> Node:
        return self.make("NullLiteral", node)

    def _lower_regex(self, node: TSNode) -> Node:
        pattern = node.child_by_field_name("pattern")
        return self.make(
            "RegExpLiteral", node, pattern=self.text(pattern) if pattern is not None else ""
        )

    # Collections

    def _lower_array(self, node: TSNode) -> Node:
        elements: list[Node | None] = []
        expecting = True
        for child in node.children:
            if child.type in _SKIPPED_KINDS:
                continue
            if child.type == ",":
                if expecting:
                    elements.append(None)
                expecting = True
            elif child.is_named:
                elements.append(self.convert(child))
                expecting = False
        return self.make("ArrayExpression", node, elements=elements)

    def property_key(self, key: TSNode | None) -> tuple[Node | None, bool]:
        if key is None:
            return None, False
        if key.type == "computed_property_name":
            inner = self.convert_all(self.named(key))
            return (inner[0] if inner else None), True
        return self.convert(key), False

    def _lower_object(self, node: TSNode) -> Node:
        properties: list[Node] = []
        for child in self.named(node):
            if child.type == "pair":
                key, computed = self.property_key(child.child_by_field_name("key"))
                properties.append(
                    self.make(
                        "ObjectProperty",
                        child,
                        key=key,
                        value=self.field(child, "value"),
                        computed=computed,
                        shorthand=False,
                    )
                )
            elif child.type == "shorthand_property_identifier":
                properties.append(
                    self.make(
                        "ObjectProperty",
                        child,
                        key=self.convert(child),
                        value=self.convert(child),
                        computed=False,
                        shorthand=True,
                    )
                )
            elif child.type == "method_definition":
                key, computed = self.property_key(child.child_by_field_name("name"))
                properties.append(
                    self.make(
                        "ObjectMethod",
                        child,
                        key=key,
                        computed=computed,
                        params=self.params(child),
                        body=self.field(child, "body"),
                    )
                )
            else:
                converted = self.convert(child)
                if converted is not None:
                    properties.append(converted)
        return self.make("ObjectExpression", node, properties=properties)

    def _lower_spread_element(self, node: TSNode) -> Node:
        inner = self.convert_all(self.named(node))
        return self.make("SpreadElement", node, argument=inner[0] if inner else None)

    # Patterns

    def _lower_object_pattern(self, node: TSNode) -> Node:
        properties: list[Node] = []
        for child in self.named(node):
            if child.type == "shorthand_property_identifier_pattern":
                properties.append(
                    self.make(
                        "ObjectProperty",
                        child,
                        key=self.convert(child),
                        value=self.convert(child),
                        computed=False,
                        shorthand=True,
                    )
                )
            elif child.type == "pair_pattern":
                key, computed = self.property_key(child.child_by_field_name("key"))
                properties.append(
                    self.make(
                        "ObjectProperty",
                        child,
                        key=key,
                        value=self.field(child, "value"),
                        computed=computed,
                        shorthand=False,
                    )
                )
            elif child.type == "object_assignment_pattern":
                left = self.field(child, "left")
                properties.append(
                    self.make(
                        "ObjectProperty",
                        child,
                        key=left,
                        value=self.make(
                            "AssignmentPattern",
                            child,
                            left=left,
                            right=self.field(child, "right"),
                        ),
                        computed=False,
                        shorthand=True,
                    )
                )
            elif child.type == "rest_pattern":
                properties.append(self._lower_rest_pattern(child))
        return self.make("ObjectPattern", node, properties=properties)

    def _lower_array_pattern(self, node: TSNode) -> Node:
        return self.make("ArrayPattern", node, elements=self.convert_all(self.named(node)))

    def _lower_assignment_pattern(self, node: TSNode) -> Node:
        return self.make(
            "AssignmentPattern",
            node,
            left=self.field(node, "left"),
            right=self.field(node, "right"),
        )

    def _lower_rest_pattern(self, node: TSNode) -> Node:
        inner = self.convert_all(self.named(node))
        return self.make("RestElement", node, argument=inner[0] if inner else None)

    # Expressions

    def _lower_parenthesized_expression(self, node: TSNode) -> Node | None:
        inner = self.convert_all(self.named(node))
        if len(inner) == 1:
            return inner[0]
        return self.make("SequenceExpression", node, expressions=inner)

    def _lower_call_expression(self, node: TSNode) -> Node:
        arguments = node.child_by_field_name("arguments")
        if arguments is not None and arguments.type == "template_string":
            return self.make(
                "TaggedTemplateExpression",
                node,
                tag=self.field(node, "function"),
                quasi=self.convert(arguments),
            )
        return self.make(
            "CallExpression",
            node,
            callee=self.field(node, "function"),
            arguments=self.convert_all(self.named(arguments)) if arguments is not None else [],
        )

    def _lower_new_expression(self, node: TSNode) -> Node:
        arguments = node.child_by_field_name("arguments")
        return self.make(
            "NewExpression",
            node,
            callee=self.field(node, "constructor"),
            arguments=self.convert_all(self.named(arguments)) if arguments is not None else [],
        )

    def _lower_member_expression(self, node: TSNode) -> Node:
        return self.make(
            "MemberExpression",
            node,
            object=self.field(node, "object"),
            property=self.field(node, "property"),
            computed=False,
        )

    def _lower_subscript_expression(self, node: TSNode) -> Node:
        return self.make(
            "MemberExpression",
            node,
            object=self.field(node, "object"),
            property=self.field(node, "index"),
            computed=True,
        )

    def _lower_ternary_expression(self, node: TSNode) -> Node:
        return self.make(
            "ConditionalExpression",
            node,
            test=self.field(node, "condition"),
            consequent=self.field(node, "consequence"),
            alternate=self.field(node, "alternative"),
        )

    def _lower_binary_expression(self, node: TSNode) -> Node:
        operator_node = node.child_by_field_name("operator")
        operator = operator_node.type if operator_node is not None else ""
        kind = "LogicalExpression" if operator in _LOGICAL_OPERATORS else "BinaryExpression"
        return self.make(
            kind,
            node,
            left=self.field(node, "left"),
            operator=operator,
            right=self.field(node, "right"),
        )

    def _lower_unary_expression(self, node: TSNode) -> Node:
        operator_node = node.child_by_field_name("operator")
        return self.make(
            "UnaryExpression",
            node,
            operator=operator_node.type if operator_node is not None else "",
            argument=self.field(node, "argument"),
        )

    def _lower_assignment_expression(self, node: TSNode) -> Node:
        operator_node = node.child_by_field_name("operator")
        return self.make(
            "AssignmentExpression",
            node,
            left=self.field(node, "left"),
            operator=operator_node.type if operator_node is not None else "=",
            right=self.field(node, "right"),
        )

    _lower_augmented_assignment_expression = _lower_assignment_expression

    def _lower_await_expression(self, node: TSNode) -> Node:
        inner = self.convert_all(self.named(node))
        return self.make("AwaitExpression", node, argument=inner[0] if inner else None)

    def _lower_as_expression(self, node: TSNode) -> Node:
        inner = self.convert_all(self.named(node)[:1])
        return self.make("TSAsExpression", node, expression=inner[0] if inner else None)

    _lower_satisfies_expression = _lower_as_expression

    def _lower_non_null_expression(self, node: TSNode) -> Node:
        inner = self.convert_all(self.named(node))
        return self.make("TSNonNullExpression", node, expression=inner[0] if inner else None)

    # JSX

    def jsx_name(self, node: TSNode | None) -> Node | None:
        if node is None:
            return None
        if node.type in ("identifier", "jsx_identifier", "property_identifier"):
            return self.make("JSXIdentifier", node, name=self.text(node))
        if node.type == "member_expression":
            return self.make(
                "JSXMemberExpression",
                node,
                object=self.jsx_name(node.child_by_field_name("object")),
                property=self.jsx_name(node.child_by_field_name("property")),
            )
        if node.type == "nested_identifier":
            parts = node.named_children
            if len(parts) >= 2:
                return self.make(
                    "JSXMemberExpression",
                    node,
                    object=self.jsx_name(parts[0]),
                    property=self.jsx_name(parts[-1]),
                )
        if node.type == "jsx_namespace_name":
            parts = node.named_children
            if len(parts) >= 2:
                return self.make(
                    "JSXNamespacedName",
                    node,
                    namespace=self.jsx_name(parts[0]),
                    name=self.jsx_name(parts[1]),
                )
        return self.make("JSXIdentifier", node, name=self.text(node))

    def jsx_attributes(self, opening: TSNode) -> list[Node]:
        attributes: list[Node] = []
        for child in opening.named_children:
            if child.type == "jsx_attribute":
                parts = [c for c in child.named_children if c.type != "comment"]
                name = self.jsx_name(parts[0]) if parts else None
                value = self.convert(parts[1]) if len(parts) > 1 else None
                attributes.append(self.make("JSXAttribute", child, name=name, value=value))
            elif child.type == "jsx_expression":
                inner = self.named(child)
                if inner and inner[0].type == "spread_element":
                    spread = self.convert_all(self.named(inner[0]))
                    attributes.append(
                        self.make(
                            "JSXSpreadAttribute", child, argument=spread[0] if spread else None
                        )
                    )
        return attributes

    def jsx_text_run(self, run: list[TSNode]) -> Node:
        """One JSXText for adjacent text and entity nodes, entities decoded."""
        # Whitespace between the parts is not in the tree, so take the whole span
        raw = self.source[run[0].start_byte : run[-1].end_byte].decode("utf-8", errors="replace")
        return self.make("JSXText", run[0], run[-1], value=html.unescape(raw))

    def jsx_children(self, node: TSNode) -> list[Node]:
        children: list[Node] = []
        run: list[TSNode] = []
        for child in self.named(node):
            if child.type in ("jsx_opening_element", "jsx_closing_element"):
                continue
            if child.type in _JSX_TEXT_KINDS:
                run.append(child)
                continue
            if run:
                children.append(self.jsx_text_run(run))
                run = []
            converted = self.convert(child)
            if converted is not None:
                children.append(converted)
        if run:
            children.append(self.jsx_text_run(run))
        return children

    def _lower_jsx_element(self, node: TSNode) -> Node:
        opening = node.child_by_field_name("open_tag")
        if opening is None:
            opening = next(
                (c for c in node.named_children if c.type == "jsx_opening_element"), None
            )
        name_node = opening.child_by_field_name("name") if opening is not None else None

        if name_node is None:
            return self.make("JSXFragment", node, children=self.jsx_children(node))

        opening_element = self.make(
            "JSXOpeningElement",
            opening,
            name=self.jsx_name(name_node),
            attributes=self.jsx_attributes(opening),
            selfClosing=False,
        )
        return self.make(
            "JSXElement",
            node,
            openingElement=opening_element,
            children=self.jsx_children(node),
        )

    def _lower_jsx_self_closing_element(self, node: TSNode) -> Node:
        opening_element = self.make(
            "JSXOpeningElement",
            node,
            name=self.jsx_name(node.child_by_field_name("name")),
            attributes=self.jsx_attributes(node),
            selfClosing=True,
        )
        return self.make("JSXElement", node, openingElement=opening_element, children=[])

    def _lower_jsx_expression(self, node: TSNode) -> Node:
        inner = self.named(node)
        if inner and inner[0].type == "spread_element":
            spread = self.convert_all(self.named(inner[0]))
            return self.make("JSXSpreadChild", node, expression=spread[0] if spread else None)
        converted = self.convert_all(inner)
        if not converted:
            empty = {"type": "JSXEmptyExpression"}
            return self.make("JSXExpressionContainer", node, expression=empty)
        return self.make("JSXExpressionContainer", node, expression=converted[0])

    def _lower_jsx_text(self, node: TSNode) -> Node:
        return self.jsx_text_run([node])

    _lower_html_character_reference = _lower_jsx_text


def _first_error(root: TSNode) -> TSNode | None:
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type == "ERROR" or node.is_missing:
            return node
        # Reversed so the leftmost error is found first
        stack.extend(
            child for child in reversed(node.children) if child.has_error or child.is_missing
        )
    return None


class TreeSitterParser:
    """
    Parse JS/JSX/TS/TSX source with tree-sitter.

    ``.ts`` files use the TypeScript grammar (so ``<T>value`` casts parse);
    everything else uses the TSX grammar.
    """

    def __init__(self, strict: bool = True):
        """
        Initialize the parser.

        Args:
            strict: Raise ParseError when the source contains syntax errors.
                With strict off, error regions are kept as generic nodes.
        """
        self.strict = strict
        self._tsx_parser = Parser(TSX_LANGUAGE)
        self._ts_parser = Parser(TYPESCRIPT_LANGUAGE)

    def parse(self, source: str, file_path: str | None = None) -> Node:
        """
        Parse source text into a Babel-shaped File node.

        Args:
            source: Source text
            file_path: Optional path; selects the grammar by suffix

        Returns:
            File node

        Raises:
            ParseError: If strict and the source has syntax errors, or if the
                source is nested too deeply to lower
        """
        data = source.encode("utf-8")
        parser = self._tsx_parser
        if file_path is not None and Path(file_path).suffix in (".ts", ".mts", ".cts"):
            parser = self._ts_parser

        tree = parser.parse(data)
        root = tree.root_node

        if root.has_error and self.strict:
            error = _first_error(root) or root
            line, column = error.start_point
            column = _char_column(data, error.start_byte, column)
            raise ParseError(
                f"Syntax error at line {line + 1}, column {column}",
                file_path=file_path,
                line=line + 1,
                column=column,
            )

        try:
            document = _Lowering(data).lower_file(root)
        except RecursionError as e:
            raise ParseError(
                "Source is nested too deeply to build a syntax tree", file_path=file_path
            ) from e
        logger.debug(
            "Parsed %s: %d top-level statements",
            file_path or "<source>",
            len(document["program"]["body"]),
        )
        return document

    def parse_file(self, file_path: str | Path) -> Node:
        """
        Read and parse a source file.

        Raises:
            SourceFileError: If the file cannot be read
            ParseError: If strict and the source has syntax errors
        """
        path = Path(file_path)
        try:
            source = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise SourceFileError(f"Cannot read {path}: {e}", file_path=str(path)) from e
        return self.parse(source, str(path))
