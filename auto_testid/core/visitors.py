"""Visitor base class and reusable tree visitors."""

from auto_testid.core.nodes import JSXAttribute, JSXElement, Node


class NodeVisitor:
    """Base class for tree visitors.

    Subclasses define ``visit_<NodeClass>`` and ``leave_<NodeClass>`` methods,
    e.g. ``visit_JSXElement``. A ``visit_*`` method may return False to skip
    the node's children; the matching ``leave_*`` method is still called.

    Example:
        class ElementCounter(NodeVisitor):
            def __init__(self) -> None:
                self.count = 0

            def visit_JSXElement(self, node: JSXElement) -> None:  # noqa: N802
                self.count += 1

        counter = ElementCounter()
        program.visit(counter)
    """

    def on_visit(self, node: Node) -> bool:
        """Dispatch to ``visit_<NodeClass>``.

        Returns:
            True if the node's children should be visited
        """
        visit_func = getattr(self, f"visit_{type(node).__name__}", None)
        if visit_func is None:
            return True
        return visit_func(node) is not False

    def on_leave(self, node: Node) -> None:
        """Dispatch to ``leave_<NodeClass>``."""
        leave_func = getattr(self, f"leave_{type(node).__name__}", None)
        if leave_func is not None:
            leave_func(node)


class ElementCollector(NodeVisitor):
    """Collects markup elements in document order, optionally by tag name.

    Example:
        collector = ElementCollector("li")
        program.visit(collector)
        items = collector.elements
    """

    def __init__(self, name: str | None = None) -> None:
        """Initialize the collector.

        Args:
            name: Only collect elements with this tag name; None collects all
        """
        self.name = name
        self.elements: list[JSXElement] = []

    def visit_JSXElement(self, node: JSXElement) -> None:  # noqa: N802
        """Record the element if it matches."""
        if self.name is None or node.name == self.name:
            self.elements.append(node)


class AttributeCollector(NodeVisitor):
    """Collects attributes from every element, optionally by attribute name.

    With ``new_only`` set, only attributes created by a transform (those with no
    source span) are collected.
    """

    def __init__(self, attribute_name: str | None = None, new_only: bool = False) -> None:
        """Initialize the collector.

        Args:
            attribute_name: Only collect attributes with this name; None collects all
            new_only: Skip attributes that were present in the source
        """
        self.attribute_name = attribute_name
        self.new_only = new_only
        self.attributes: list[tuple[JSXElement, JSXAttribute]] = []

    def visit_JSXElement(self, node: JSXElement) -> None:  # noqa: N802
        """Record matching attributes of this element."""
        for attr in node.attributes:
            if not isinstance(attr, JSXAttribute):
                continue
            if self.attribute_name is not None and attr.name != self.attribute_name:
                continue
            if self.new_only and attr.span is not None:
                continue
            self.attributes.append((node, attr))
