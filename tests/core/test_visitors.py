"""Tests for NodeVisitor dispatch and the collector visitors."""

from auto_testid.core.nodes import (
    CallExpression,
    Identifier,
    JSXAttribute,
    JSXElement,
    JSXSpreadAttribute,
    MemberExpression,
    Node,
    Other,
    Program,
    StringLiteral,
)
from auto_testid.core.visitors import AttributeCollector, ElementCollector, NodeVisitor


class EventRecorder(NodeVisitor):
    def __init__(self, skip: str | None = None) -> None:
        self.skip = skip
        self.events: list[str] = []

    def visit_JSXElement(self, node: JSXElement) -> bool:  # noqa: N802
        self.events.append(f"visit {node.name}")
        return node.name != self.skip

    def leave_JSXElement(self, node: JSXElement) -> None:  # noqa: N802
        self.events.append(f"leave {node.name}")


def sample_tree() -> Program:
    return Program(
        [
            JSXElement(
                "div",
                attributes=[JSXAttribute("id", StringLiteral("root"), span=(5, 14))],
                children=[
                    JSXElement("span", children=[JSXElement("b")]),
                    Other("jsx_text"),
                    JSXElement("span"),
                ],
            )
        ]
    )


class TestNodeVisitor:
    """Tests for NodeVisitor dispatch."""

    def test_visit_and_leave_order(self) -> None:
        recorder = EventRecorder()
        sample_tree().visit(recorder)

        assert recorder.events == [
            "visit div",
            "visit span",
            "visit b",
            "leave b",
            "leave span",
            "visit span",
            "leave span",
            "leave div",
        ]

    def test_returning_false_skips_children_but_not_leave(self) -> None:
        recorder = EventRecorder(skip="div")
        sample_tree().visit(recorder)

        assert recorder.events == ["visit div", "leave div"]

    def test_nodes_without_hooks_are_walked(self) -> None:
        """Should descend through node types the visitor has no method for."""
        tree = Program([Other("expression_statement", [Other("parenthesized_expression", [JSXElement("p")])])])
        recorder = EventRecorder()
        tree.visit(recorder)

        assert recorder.events == ["visit p", "leave p"]

    def test_none_return_continues(self) -> None:
        class Counter(NodeVisitor):
            def __init__(self) -> None:
                self.identifiers: list[str] = []

            def visit_Identifier(self, node: Identifier) -> None:  # noqa: N802
                self.identifiers.append(node.name)

        tree = Program([CallExpression(MemberExpression(Identifier("items"), "map"), [Identifier("fn")])])
        counter = Counter()
        tree.visit(counter)

        assert counter.identifiers == ["items", "fn"]

    def test_children_appended_during_visit_are_walked(self) -> None:
        class Appender(NodeVisitor):
            def __init__(self) -> None:
                self.seen: list[str] = []

            def visit_JSXElement(self, node: JSXElement) -> None:  # noqa: N802
                node.attributes.append(JSXAttribute("added"))

            def visit_JSXAttribute(self, node: JSXAttribute) -> None:  # noqa: N802
                self.seen.append(node.name)

        appender = Appender()
        Program([JSXElement("div")]).visit(appender)

        assert appender.seen == ["added"]

    def test_deep_tree(self) -> None:
        """Should walk trees far deeper than the recursion limit."""
        tree: Node = JSXElement("b")
        for _ in range(5000):
            tree = Other("parenthesized_expression", [tree])
        recorder = EventRecorder()
        Program([tree]).visit(recorder)

        assert recorder.events == ["visit b", "leave b"]

    def test_base_visitor_accepts_any_node(self) -> None:
        visitor = NodeVisitor()
        node: Node = Other("anything")

        assert visitor.on_visit(node) is True
        visitor.on_leave(node)


class TestElementCollector:
    """Tests for ElementCollector."""

    def test_collects_all_in_document_order(self) -> None:
        collector = ElementCollector()
        sample_tree().visit(collector)

        assert [e.name for e in collector.elements] == ["div", "span", "b", "span"]

    def test_collects_by_name(self) -> None:
        collector = ElementCollector("span")
        sample_tree().visit(collector)

        assert len(collector.elements) == 2
        assert all(e.name == "span" for e in collector.elements)


class TestAttributeCollector:
    """Tests for AttributeCollector."""

    def test_collects_matching_attributes(self) -> None:
        tree = sample_tree()
        tree.body[0].attributes.append(JSXAttribute("data-testid", StringLiteral("x")))  # type: ignore[attr-defined]

        collector = AttributeCollector("data-testid")
        tree.visit(collector)

        assert len(collector.attributes) == 1
        element, attr = collector.attributes[0]
        assert element.name == "div"
        assert attr.value.value == "x"  # type: ignore[union-attr]

    def test_new_only_ignores_source_attributes(self) -> None:
        existing = JSXAttribute("data-testid", StringLiteral("kept"), span=(4, 22))
        added = JSXAttribute("data-testid", StringLiteral("new"))
        tree = Program([JSXElement("div", [existing]), JSXElement("p", [added])])

        collector = AttributeCollector("data-testid", new_only=True)
        tree.visit(collector)

        assert [attr for _, attr in collector.attributes] == [added]

    def test_spread_attributes_are_ignored(self) -> None:
        tree = Program([JSXElement("div", [JSXSpreadAttribute(Identifier("props"))])])

        collector = AttributeCollector("data-testid")
        tree.visit(collector)

        assert collector.attributes == []

    def test_collects_every_name_by_default(self) -> None:
        added = JSXAttribute("data-testid", StringLiteral("new"))
        tree = Program([JSXElement("div", [JSXAttribute("id", StringLiteral("root"), span=(5, 14)), added])])

        collector = AttributeCollector(new_only=True)
        tree.visit(collector)

        assert [attr for _, attr in collector.attributes] == [added]
