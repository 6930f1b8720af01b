"""Base visitor with component and element scope tracking.

This module provides ComponentAwareVisitor, a NodeVisitor that maintains the
names of the enclosing component definitions and markup elements while the tree
is walked, so subclasses can read the current hierarchy at any node.
"""

from auto_testid.core.nodes import FunctionDeclaration, JSXElement, VariableDeclarator
from auto_testid.core.visitors import NodeVisitor


def is_component_name(name: str | None) -> bool:
    """Check whether a binding name looks like a component definition.

    Components are recognised purely by spelling: the first character is an
    uppercase letter.

    Args:
        name: The bound name, or None for anonymous/pattern bindings

    Returns:
        True if the name starts with an uppercase letter
    """
    return bool(name) and name[0].isupper()


class ComponentAwareVisitor(NodeVisitor):
    """Visitor that tracks component and element nesting during traversal.

    Attributes:
        component_stack: Names of enclosing component definitions, outermost first
        element_stack: Names of enclosing markup elements, outermost first. While
                       ``visit_JSXElement`` runs for an element, the element
                       itself is not yet on the stack.
    """

    def __init__(self) -> None:
        self.component_stack: list[str] = []
        self.element_stack: list[str] = []

    def visit_FunctionDeclaration(self, node: FunctionDeclaration) -> bool:  # noqa: N802
        """Enter a component scope for uppercase function declarations."""
        if is_component_name(node.name):
            self.component_stack.append(node.name)
        return True

    def leave_FunctionDeclaration(self, node: FunctionDeclaration) -> None:  # noqa: N802
        """Leave the component scope opened by visit_FunctionDeclaration."""
        if is_component_name(node.name):
            self.component_stack.pop()

    def visit_VariableDeclarator(self, node: VariableDeclarator) -> bool:  # noqa: N802
        """Enter a component scope for uppercase identifier bindings."""
        if is_component_name(node.name):
            self.component_stack.append(node.name)
        return True

    def leave_VariableDeclarator(self, node: VariableDeclarator) -> None:  # noqa: N802
        """Leave the component scope opened by visit_VariableDeclarator."""
        if is_component_name(node.name):
            self.component_stack.pop()

    def visit_JSXElement(self, node: JSXElement) -> bool:  # noqa: N802
        """Push the element name so its descendants see it as an ancestor.

        Subclasses that need to act on the element before its descendants do
        so first and then call this method.
        """
        if node.name is not None:
            self.element_stack.append(node.name)
        return True

    def leave_JSXElement(self, node: JSXElement) -> None:  # noqa: N802
        """Pop the element name pushed by visit_JSXElement."""
        if node.name is not None:
            self.element_stack.pop()
