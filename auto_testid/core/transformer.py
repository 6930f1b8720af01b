"""The test id injection transform."""

import logging
from dataclasses import dataclass

from auto_testid.core.component_aware_visitor import ComponentAwareVisitor
from auto_testid.core.config import AutoTestIdConfig
from auto_testid.core.identifiers import (
    GeneratedId,
    build_test_id_attribute,
    generate_test_id,
    should_add_test_id,
)
from auto_testid.core.loop_context import LoopContextTracker, extract_loop_context
from auto_testid.core.nodes import CallExpression, JSXElement, Node

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Injection:
    """Record of one attribute added by the transform."""

    element: JSXElement
    generated: GeneratedId
    index_variable: str | None = None

    def describe(self) -> str:
        return self.generated.describe(self.index_variable)


class AutoTestIdTransformer(ComponentAwareVisitor):
    """Appends a test id attribute to every eligible markup element.

    An instance holds the traversal state for one compilation unit and must not
    be reused across trees.

    Attributes:
        config: Transform configuration
        loops: Iteration calls enclosing the current node
        injections: Every attribute added, in document order
    """

    def __init__(self, config: AutoTestIdConfig | None = None) -> None:
        super().__init__()
        self.config = config or AutoTestIdConfig()
        self.loops = LoopContextTracker()
        self.injections: list[Injection] = []

    @property
    def test_ids(self) -> list[str]:
        """The injected ids as they read in source, in document order."""
        return [injection.describe() for injection in self.injections]

    def visit_CallExpression(self, node: CallExpression) -> bool:  # noqa: N802
        """Open a loop context for iteration calls."""
        context = extract_loop_context(node, self.config.iteration_methods)
        if context is not None:
            self.loops.push(context)
        return True

    def leave_CallExpression(self, node: CallExpression) -> None:  # noqa: N802
        """Close the loop context opened by this call, if any."""
        self.loops.pop_for(node)

    def visit_JSXElement(self, node: JSXElement) -> bool:  # noqa: N802
        """Annotate the element, then enter its scope."""
        if node.name is not None:
            self._annotate(node, node.name)
        return super().visit_JSXElement(node)

    def _annotate(self, node: JSXElement, element_name: str) -> None:
        if not should_add_test_id(element_name, node.attributes, self.config):
            return

        generated = generate_test_id(
            self.component_stack, self.element_stack, element_name, self.config
        )
        if generated is None:
            return

        index_variable = self.loops.index_variable if generated.indexed else None
        node.attributes.append(
            build_test_id_attribute(generated, self.config.attribute_name, index_variable)
        )
        injection = Injection(node, generated, index_variable)
        self.injections.append(injection)
        logger.debug(f"Added {self.config.attribute_name}={injection.describe()!r} to <{element_name}>")


def apply_test_ids(tree: Node, config: AutoTestIdConfig | None = None) -> Node:
    """Inject test ids into a tree in place.

    Args:
        tree: Root of one compilation unit
        config: Transform configuration; None uses the defaults

    Returns:
        The same tree, with attributes appended to eligible elements
    """
    config = config or AutoTestIdConfig()
    if not config.enabled:
        return tree

    tree.visit(AutoTestIdTransformer(config))
    return tree
