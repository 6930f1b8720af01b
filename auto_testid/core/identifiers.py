"""Test id generation policy.

Given the enclosing component and element names of a markup element, decide
whether the element gets a test id and build it. Ids are either static strings
(``Navigation.nav.button``) or, for list items inside a list, a template that
ends in the runtime value of the iteration index (``Navigation.ul.item.${idx}``).
"""

from dataclasses import dataclass
from typing import Sequence

from auto_testid.core.config import AutoTestIdConfig
from auto_testid.core.nodes import (
    Identifier,
    JSXAttribute,
    JSXExpressionContainer,
    Node,
    StringLiteral,
    TemplateLiteral,
)

INTERACTIVE_ELEMENTS = frozenset({"button", "input", "select", "textarea", "a", "form"})

# Formatting, void and metadata elements never contribute a part to an id
EXCLUDED_ELEMENTS = frozenset(
    {
        "b", "i", "em", "strong", "small", "mark", "del", "ins", "sub", "sup",
        "br", "hr", "wbr", "img", "svg", "picture", "source", "audio", "video", "track",
        "meta", "link", "style", "script", "noscript", "template",
    }
)

LIST_ITEM_ELEMENT = "li"
LIST_CONTAINER_ELEMENTS = frozenset({"ul", "ol"})
LIST_ITEM_PART = "item"
DEFAULT_INDEX_VARIABLE = "index"


@dataclass(frozen=True)
class GeneratedId:
    """A generated test id.

    Attributes:
        value: The full id when static; the literal prefix when indexed
        indexed: Whether the id ends in the runtime value of an iteration index
    """

    value: str
    indexed: bool = False

    def describe(self, index_variable: str | None = None) -> str:
        """Render the id as it would read in source, for messages and listings."""
        if not self.indexed:
            return self.value
        return f"{self.value}${{{index_variable or DEFAULT_INDEX_VARIABLE}}}"


def has_attribute(attributes: Sequence[Node], name: str) -> bool:
    """Check whether an attribute list already contains ``name``.

    Spread attributes are not looked into.
    """
    return any(isinstance(attr, JSXAttribute) and attr.name == name for attr in attributes)


def should_add_test_id(
    element_name: str, attributes: Sequence[Node], config: AutoTestIdConfig
) -> bool:
    """Decide whether an element is eligible for a test id.

    Args:
        element_name: Tag name of the element
        attributes: The element's existing attributes
        config: Transform configuration

    Returns:
        False if the element already has the attribute or is skipped, else
        whether it passes the interactive-only filter
    """
    if has_attribute(attributes, config.attribute_name):
        return False

    if element_name in config.skip_elements:
        return False

    if config.only_interactive:
        return element_name in INTERACTIVE_ELEMENTS

    return True


def generate_test_id(
    component_stack: Sequence[str],
    element_stack: Sequence[str],
    element_name: str,
    config: AutoTestIdConfig,
) -> GeneratedId | None:
    """Build the test id for an element from its enclosing hierarchy.

    Args:
        component_stack: Enclosing component names, outermost first
        element_stack: Enclosing element names, outermost first, excluding the
                       element itself
        element_name: Tag name of the element
        config: Transform configuration

    Returns:
        The generated id, or None when the element has no enclosing component
        or no part of the hierarchy contributes to the id
    """
    if not component_stack:
        return None

    parts: list[str] = []

    if config.use_hierarchy:
        parts.extend(component_stack)

    if config.include_element:
        parts.extend(name for name in element_stack if name not in EXCLUDED_ELEMENTS)

        if element_name == LIST_ITEM_ELEMENT:
            parts.append(LIST_ITEM_PART)
            if any(name in LIST_CONTAINER_ELEMENTS for name in element_stack):
                return GeneratedId(config.separator.join(parts) + config.separator, indexed=True)
        elif element_name not in EXCLUDED_ELEMENTS:
            parts.append(element_name)

    value = config.separator.join(parts)
    if not value:
        return None
    return GeneratedId(value)


def build_test_id_attribute(
    generated: GeneratedId, attribute_name: str, index_variable: str | None = None
) -> JSXAttribute:
    """Create the attribute node carrying a generated id.

    Static ids become a string value. Indexed ids become an expression
    container holding a template literal of the prefix followed by the index
    variable (``"index"`` when the enclosing iteration has none).

    Args:
        generated: The generated id
        attribute_name: Name of the attribute to create
        index_variable: Index variable of the innermost enclosing iteration call

    Returns:
        A new attribute node with no source span
    """
    if not generated.indexed:
        return JSXAttribute(attribute_name, StringLiteral(generated.value))

    template = TemplateLiteral(
        quasis=[generated.value, ""],
        expressions=[Identifier(index_variable or DEFAULT_INDEX_VARIABLE)],
    )
    return JSXAttribute(attribute_name, JSXExpressionContainer(template))
