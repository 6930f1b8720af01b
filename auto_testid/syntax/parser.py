"""Parse JSX/TSX source into the transform's node model.

Parsing is done with tree-sitter and the TypeScript/TSX grammars. The concrete
syntax tree is lowered into ``auto_testid.core.nodes``: the node kinds the
transform interprets get their own classes and everything else becomes an
``Other`` node. Every lowered node keeps the byte span of its source.
"""

import logging
from functools import lru_cache
from pathlib import Path

import tree_sitter
import tree_sitter_typescript

from auto_testid.core.nodes import (
    CallExpression,
    FunctionDeclaration,
    FunctionExpression,
    Identifier,
    JSXAttribute,
    JSXElement,
    JSXExpressionContainer,
    JSXSpreadAttribute,
    MemberExpression,
    Node,
    Other,
    Param,
    Program,
    StringLiteral,
    VariableDeclarator,
)

logger = logging.getLogger(__name__)

EXTENSION_DIALECTS = {
    ".tsx": "tsx",
    ".jsx": "tsx",
    ".js": "tsx",
    ".ts": "typescript",
}

FUNCTION_DECLARATION_TYPES = frozenset({"function_declaration", "generator_function_declaration"})
FUNCTION_EXPRESSION_TYPES = frozenset(
    {"arrow_function", "function_expression", "function", "generator_function"}
)
PARAMETER_WRAPPER_TYPES = frozenset({"required_parameter", "optional_parameter"})
PROPERTY_NAME_TYPES = frozenset({"property_identifier", "private_property_identifier"})
TAG_NAME_TYPES = frozenset({"identifier", "jsx_identifier"})


@lru_cache(maxsize=None)
def get_language(dialect: str) -> tree_sitter.Language:
    """Return the tree-sitter language for a dialect ("tsx" or "typescript").

    Raises:
        ValueError: If the dialect is unknown
    """
    if dialect == "tsx":
        return tree_sitter.Language(tree_sitter_typescript.language_tsx())
    if dialect == "typescript":
        return tree_sitter.Language(tree_sitter_typescript.language_typescript())
    raise ValueError(f"Unknown dialect: {dialect}")


def dialect_for_path(file_path: Path) -> str:
    """Pick the grammar for a source file from its extension.

    Raises:
        ValueError: If the extension is not a JavaScript/TypeScript one
    """
    dialect = EXTENSION_DIALECTS.get(file_path.suffix.lower())
    if dialect is None:
        raise ValueError(f"Unsupported file type: {file_path}")
    return dialect


def parse_source(source: str | bytes, dialect: str = "tsx") -> Program:
    """Parse source text into a Program.

    tree-sitter recovers from syntax errors, so this never fails on bad input;
    unparseable regions end up as ``Other("ERROR")`` nodes and are left alone
    by the transform.

    Args:
        source: Source text, as str or UTF-8 bytes
        dialect: "tsx" (also used for .js/.jsx) or "typescript"

    Returns:
        The lowered tree, holding the source bytes for printing
    """
    data = source.encode("utf-8") if isinstance(source, str) else source
    parser = tree_sitter.Parser(get_language(dialect))
    tree = parser.parse(data)
    if tree.root_node.has_error:
        logger.debug("Source contains syntax errors; erroneous regions are left untouched")
    return TreeLowering(data).lower_program(tree.root_node)


def parse_file(file_path: Path) -> Program:
    """Read and parse a source file, choosing the dialect from its extension.

    Raises:
        ValueError: If the extension is unsupported or the file is not UTF-8
    """
    dialect = dialect_for_path(file_path)
    data = file_path.read_bytes()
    try:
        data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise ValueError(f"File is not valid UTF-8: {file_path}") from e
    return parse_source(data, dialect)


class TreeLowering:
    """Converts a tree-sitter tree into the node model.

    Lowering does not recurse: subtrees are lowered bottom-up with an explicit
    stack, and each lowered node is kept until its parent's handler takes it
    with ``lower``.
    """

    def __init__(self, source: bytes) -> None:
        self.source = source
        self._lowered: dict[tuple[int, int], Node] = {}

    def lower_program(self, root: tree_sitter.Node) -> Program:
        self._lower_descendants(root)
        return Program(
            body=self.lower_all(root.named_children),
            source=self.source,
            span=(root.start_byte, root.end_byte),
        )

    def lower(self, node: tree_sitter.Node) -> Node:
        """Lower one tree-sitter node and its subtree."""
        lowered = self._lowered.pop(_key(node), None)
        if lowered is None:
            self._lower_descendants(node)
            lowered = self._lower_node(node)
        return lowered

    def lower_all(self, nodes: list[tree_sitter.Node]) -> list[Node]:
        return [self.lower(node) for node in nodes]

    def _lower_descendants(self, root: tree_sitter.Node) -> None:
        """Lower every named descendant of ``root`` in post-order."""
        stack = [(child, False) for child in reversed(root.named_children)]
        while stack:
            node, expanded = stack.pop()
            if expanded:
                self._lowered[_key(node)] = self._lower_node(node)
                continue
            stack.append((node, True))
            stack.extend((child, False) for child in reversed(node.named_children))

    def _lower_node(self, node: tree_sitter.Node) -> Node:
        """Lower one node whose named descendants are already lowered."""
        node_type = node.type
        if node_type in FUNCTION_DECLARATION_TYPES:
            lowered = self._function_declaration(node)
        elif node_type in FUNCTION_EXPRESSION_TYPES:
            lowered = self._function_expression(node)
        elif node_type == "variable_declarator":
            lowered = self._variable_declarator(node)
        elif node_type == "call_expression":
            lowered = self._call_expression(node)
        elif node_type == "member_expression":
            lowered = self._member_expression(node)
        elif node_type in ("jsx_element", "jsx_self_closing_element"):
            lowered = self._jsx_element(node)
        elif node_type == "jsx_attribute":
            lowered = self._jsx_attribute(node)
        elif node_type == "jsx_expression":
            lowered = self._expression_container(node)
        elif node_type == "identifier":
            lowered = Identifier(self.text(node))
        elif node_type == "string":
            lowered = StringLiteral(self.text(node)[1:-1])
        else:
            lowered = Other(node_type, self.lower_all(node.named_children))
        lowered.span = (node.start_byte, node.end_byte)
        return lowered

    def text(self, node: tree_sitter.Node) -> str:
        return self.source[node.start_byte : node.end_byte].decode("utf-8")

    def _function_declaration(self, node: tree_sitter.Node) -> FunctionDeclaration:
        name_node = node.child_by_field_name("name")
        params_node = node.child_by_field_name("parameters")
        return FunctionDeclaration(
            name=self.text(name_node) if name_node is not None else None,
            params=self._params(params_node),
            body=self.lower_all(_without(node.named_children, name_node, params_node)),
        )

    def _function_expression(self, node: tree_sitter.Node) -> FunctionExpression:
        name_node = node.child_by_field_name("name")
        params_node = node.child_by_field_name("parameters")
        single_param = node.child_by_field_name("parameter")
        if single_param is not None:
            # Arrow function with an unparenthesized parameter: x => ...
            params = [self._param(single_param)]
        else:
            params = self._params(params_node)
        return FunctionExpression(
            params=params,
            body=self.lower_all(
                _without(node.named_children, name_node, params_node, single_param)
            ),
            arrow=node.type == "arrow_function",
            name=self.text(name_node) if name_node is not None else None,
        )

    def _params(self, params_node: tree_sitter.Node | None) -> list[Param]:
        if params_node is None:
            return []
        return [self._param(child) for child in self._significant(params_node.named_children)]

    def _param(self, node: tree_sitter.Node) -> Param:
        if node.type == "identifier":
            return Param(self.text(node), span=(node.start_byte, node.end_byte))

        name = None
        children = node.named_children
        if node.type in PARAMETER_WRAPPER_TYPES:
            pattern = node.child_by_field_name("pattern")
            has_default = node.child_by_field_name("value") is not None
            if pattern is not None and pattern.type == "identifier" and not has_default:
                name = self.text(pattern)
                children = _without(children, pattern)
        else:
            children = [node]
        return Param(name, self.lower_all(children), span=(node.start_byte, node.end_byte))

    def _variable_declarator(self, node: tree_sitter.Node) -> VariableDeclarator:
        name_node = node.child_by_field_name("name")
        value_node = node.child_by_field_name("value")
        is_identifier = name_node is not None and name_node.type == "identifier"
        pattern = None
        if name_node is not None and not is_identifier:
            pattern = self.lower(name_node)
        return VariableDeclarator(
            name=self.text(name_node) if is_identifier else None,
            init=self.lower(value_node) if value_node is not None else None,
            pattern=pattern,
        )

    def _call_expression(self, node: tree_sitter.Node) -> CallExpression:
        function_node = node.child_by_field_name("function")
        arguments_node = node.child_by_field_name("arguments")
        if arguments_node is None:
            arguments: list[Node] = []
        elif arguments_node.type == "arguments":
            arguments = self.lower_all(self._significant(arguments_node.named_children))
        else:
            # Tagged template: tag`...`
            arguments = [self.lower(arguments_node)]
        callee = (
            self.lower(function_node)
            if function_node is not None
            else Other("missing", span=(node.start_byte, node.start_byte))
        )
        return CallExpression(callee, arguments)

    def _member_expression(self, node: tree_sitter.Node) -> MemberExpression:
        object_node = node.child_by_field_name("object")
        property_node = node.child_by_field_name("property")
        property_name = None
        if property_node is not None and property_node.type in PROPERTY_NAME_TYPES:
            property_name = self.text(property_node)
        lowered_object = (
            self.lower(object_node)
            if object_node is not None
            else Other("missing", span=(node.start_byte, node.start_byte))
        )
        return MemberExpression(lowered_object, property_name)

    def _jsx_element(self, node: tree_sitter.Node) -> JSXElement:
        if node.type == "jsx_self_closing_element":
            opening = node
            content: list[tree_sitter.Node] = []
        else:
            opening = next(
                (child for child in node.named_children if child.type == "jsx_opening_element"),
                None,
            )
            content = [
                child
                for child in node.named_children
                if child.type not in ("jsx_opening_element", "jsx_closing_element")
            ]

        name = None
        attributes: list[Node] = []
        insert_at = None
        if opening is not None:
            name_node = opening.child_by_field_name("name")
            if name_node is not None and name_node.type in TAG_NAME_TYPES:
                name = self.text(name_node)
            for child in _without(opening.named_children, name_node):
                if child.type == "jsx_attribute":
                    attributes.append(self.lower(child))
                elif child.type == "jsx_expression":
                    attributes.append(self._spread_attribute(child))
            tag_parts = self._significant(opening.named_children)
            if tag_parts:
                insert_at = tag_parts[-1].end_byte

        return JSXElement(
            name=name,
            attributes=attributes,
            children=self.lower_all(content),
            self_closing=node.type == "jsx_self_closing_element",
            insert_at=insert_at,
        )

    def _expression_container(self, node: tree_sitter.Node) -> JSXExpressionContainer:
        inner = self._single(self._significant(node.named_children))
        return JSXExpressionContainer(self.lower(inner) if inner is not None else None)

    def _spread_attribute(self, node: tree_sitter.Node) -> Node:
        """Lower a ``{...props}`` entry of an attribute list."""
        inner = self._single(self._significant(node.named_children))
        if inner is None or inner.type != "spread_element":
            return self.lower(node)

        argument = self._single(self._significant(inner.named_children))
        if argument is not None:
            lowered_argument = self.lower(argument)
        else:
            lowered_argument = Other("missing", span=(inner.start_byte, inner.start_byte))
        return JSXSpreadAttribute(lowered_argument, span=(node.start_byte, node.end_byte))

    def _jsx_attribute(self, node: tree_sitter.Node) -> JSXAttribute:
        parts = self._significant(node.named_children)
        name = self.text(parts[0]) if parts else ""
        value = self.lower(parts[1]) if len(parts) > 1 else None
        return JSXAttribute(name, value)

    def _single(self, nodes: list[tree_sitter.Node]) -> tree_sitter.Node | None:
        return nodes[0] if nodes else None

    def _significant(self, nodes: list[tree_sitter.Node]) -> list[tree_sitter.Node]:
        """Drop comments."""
        return [node for node in nodes if node.type != "comment"]


def _without(
    nodes: list[tree_sitter.Node], *excluded: tree_sitter.Node | None
) -> list[tree_sitter.Node]:
    """Return ``nodes`` minus the excluded ones, compared by position and type."""
    keys = {(n.start_byte, n.end_byte, n.type) for n in excluded if n is not None}
    return [n for n in nodes if (n.start_byte, n.end_byte, n.type) not in keys]


def _key(node: tree_sitter.Node) -> tuple[int, int]:
    return (node.id, node.start_byte)
