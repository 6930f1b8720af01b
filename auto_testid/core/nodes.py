"""Syntax tree node types for JSX/TSX compilation units.

The tree is a closed set of dataclasses. Only the node kinds that carry
component, iteration or markup semantics get their own class; everything else
is an ``Other`` node that simply holds its children in source order.
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from auto_testid.core.visitors import NodeVisitor

Span = tuple[int, int]


@dataclass(eq=False)
class Node:
    """Base class for all tree nodes.

    Attributes:
        span: Byte offsets (start, end) of the node in its source text, or None
              for nodes created by a transform
    """

    span: Span | None = field(default=None, kw_only=True)

    def child_nodes(self) -> list["Node"]:
        """Return the direct children of this node in source order."""
        return []

    def visit(self, visitor: "NodeVisitor") -> None:
        """Walk this subtree depth-first with the given visitor.

        The visitor's ``visit_*`` hook runs before the children are walked and
        its ``leave_*`` hook runs after, whether or not the children were
        walked. Children are read after the ``visit_*`` hook returns, so a hook
        that appends to a node sees its additions walked as well.

        Args:
            visitor: The visitor to dispatch to
        """
        stack: list[tuple[Node, bool]] = [(self, False)]
        while stack:
            node, leaving = stack.pop()
            if leaving:
                visitor.on_leave(node)
                continue
            stack.append((node, True))
            if visitor.on_visit(node):
                stack.extend((child, False) for child in reversed(node.child_nodes()))


@dataclass(eq=False)
class Program(Node):
    """Root of one compilation unit.

    Attributes:
        body: Top-level statements
        source: The UTF-8 source the tree was parsed from, if any
    """

    body: list[Node] = field(default_factory=list)
    source: bytes | None = None

    def child_nodes(self) -> list[Node]:
        return list(self.body)


@dataclass(eq=False)
class Other(Node):
    """Any node kind the transform does not interpret."""

    kind: str
    children: list[Node] = field(default_factory=list)

    def child_nodes(self) -> list[Node]:
        return list(self.children)


@dataclass(eq=False)
class Identifier(Node):
    name: str


@dataclass(eq=False)
class StringLiteral(Node):
    value: str


@dataclass(eq=False)
class TemplateLiteral(Node):
    """A template string: ``quasis[0] ${expressions[0]} quasis[1] ...``.

    There is always one more quasi than there are expressions.
    """

    quasis: list[str]
    expressions: list[Node] = field(default_factory=list)

    def child_nodes(self) -> list[Node]:
        return list(self.expressions)


@dataclass(eq=False)
class Param(Node):
    """A function parameter.

    Attributes:
        name: The bound name when the parameter is a plain identifier, else None
        children: Patterns, defaults and annotations belonging to the parameter
    """

    name: str | None
    children: list[Node] = field(default_factory=list)

    def child_nodes(self) -> list[Node]:
        return list(self.children)


@dataclass(eq=False)
class FunctionDeclaration(Node):
    name: str | None
    params: list[Param] = field(default_factory=list)
    body: list[Node] = field(default_factory=list)

    def child_nodes(self) -> list[Node]:
        return [*self.params, *self.body]


@dataclass(eq=False)
class FunctionExpression(Node):
    """An inline function: an arrow function or a function expression."""

    params: list[Param] = field(default_factory=list)
    body: list[Node] = field(default_factory=list)
    arrow: bool = True
    name: str | None = None

    def child_nodes(self) -> list[Node]:
        return [*self.params, *self.body]


@dataclass(eq=False)
class VariableDeclarator(Node):
    """One ``name = init`` binding of a variable declaration.

    Attributes:
        name: The bound name when the target is a plain identifier, else None
        init: The initializer expression, if any
        pattern: The destructuring pattern when the target is not an identifier
    """

    name: str | None
    init: Node | None = None
    pattern: Node | None = None

    def child_nodes(self) -> list[Node]:
        return [child for child in (self.pattern, self.init) if child is not None]


@dataclass(eq=False)
class MemberExpression(Node):
    """Property access ``object.property``.

    ``property`` is None for access forms that are not a plain property name.
    """

    object: Node
    property: str | None

    def child_nodes(self) -> list[Node]:
        return [self.object]


@dataclass(eq=False)
class CallExpression(Node):
    callee: Node
    arguments: list[Node] = field(default_factory=list)

    def child_nodes(self) -> list[Node]:
        return [self.callee, *self.arguments]


@dataclass(eq=False)
class JSXExpressionContainer(Node):
    """A ``{expression}`` in attribute value or child position."""

    expression: Node | None = None

    def child_nodes(self) -> list[Node]:
        return [self.expression] if self.expression is not None else []


@dataclass(eq=False)
class JSXAttribute(Node):
    name: str
    value: Node | None = None

    def child_nodes(self) -> list[Node]:
        return [self.value] if self.value is not None else []


@dataclass(eq=False)
class JSXSpreadAttribute(Node):
    """A ``{...props}`` entry in an attribute list."""

    argument: Node

    def child_nodes(self) -> list[Node]:
        return [self.argument]


@dataclass(eq=False)
class JSXElement(Node):
    """A markup element, paired (``<a>...</a>``) or self-closing (``<a />``).

    Attributes:
        name: The tag name when it is a simple identifier, else None
              (member names such as ``Foo.Bar``, namespaced names, fragments)
        attributes: Attribute entries in source order
        children: Child nodes between the opening and closing tags
        self_closing: Whether the element has no closing tag
        insert_at: Byte offset in the source where a new attribute can be
                   spliced into the opening tag
    """

    name: str | None
    attributes: list[Node] = field(default_factory=list)
    children: list[Node] = field(default_factory=list)
    self_closing: bool = False
    insert_at: int | None = None

    def child_nodes(self) -> list[Node]:
        return [*self.attributes, *self.children]
