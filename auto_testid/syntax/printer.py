"""Print a transformed tree back to source text.

The transform only ever appends attributes, so printing re-emits the original
source and splices every attribute that has no source span into its element's
opening tag. Existing text, formatting and comments are preserved byte for byte.
"""

import json

from auto_testid.core.nodes import (
    Identifier,
    JSXAttribute,
    JSXExpressionContainer,
    Node,
    Program,
    StringLiteral,
    TemplateLiteral,
)
from auto_testid.core.visitors import AttributeCollector


def print_program(program: Program) -> str:
    """Render a parsed and transformed program as source text.

    Args:
        program: A Program produced by ``parse_source``

    Returns:
        The source text with new attributes spliced in

    Raises:
        ValueError: If the program carries no source text, or a new attribute
                    belongs to an element with no known insertion point
    """
    if program.source is None:
        raise ValueError("Program has no source text to print from")

    collector = AttributeCollector(new_only=True)
    program.visit(collector)

    insertions: list[tuple[int, str]] = []
    for element, attr in collector.attributes:
        if element.insert_at is None:
            raise ValueError(f"No insertion point for attribute on <{element.name}>")
        insertions.append((element.insert_at, " " + render_attribute(attr)))

    output = bytearray(program.source)
    # Splice from the end so earlier offsets stay valid
    pending = sorted(enumerate(insertions), key=lambda item: (item[1][0], item[0]), reverse=True)
    for _, (offset, text) in pending:
        output[offset:offset] = text.encode("utf-8")
    return output.decode("utf-8")


def render_attribute(attr: JSXAttribute) -> str:
    """Render one attribute as JSX source, e.g. ``data-testid="Nav.button"``.

    String values containing a double quote are rendered as an expression,
    since JSX string attributes have no escape syntax.
    """
    if attr.value is None:
        return attr.name
    value = attr.value
    if isinstance(value, StringLiteral):
        if '"' in value.value:
            return f"{attr.name}={{{json.dumps(value.value)}}}"
        return f'{attr.name}="{value.value}"'
    if isinstance(value, JSXExpressionContainer):
        inner = render_expression(value.expression) if value.expression is not None else ""
        return f"{attr.name}={{{inner}}}"
    raise ValueError(f"Cannot render attribute value of type {type(value).__name__}")


def render_expression(node: Node) -> str:
    """Render an expression created by the transform.

    Raises:
        ValueError: For node types the transform never creates
    """
    if isinstance(node, Identifier):
        return node.name
    if isinstance(node, StringLiteral):
        return json.dumps(node.value)
    if isinstance(node, TemplateLiteral):
        pieces = [_escape_template(node.quasis[0])]
        for expression, quasi in zip(node.expressions, node.quasis[1:]):
            pieces.append(f"${{{render_expression(expression)}}}")
            pieces.append(_escape_template(quasi))
        return "`" + "".join(pieces) + "`"
    raise ValueError(f"Cannot render expression of type {type(node).__name__}")


def _escape_template(text: str) -> str:
    return text.replace("\\", "\\\\").replace("`", "\\`").replace("${", "\\${")

