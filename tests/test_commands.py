"""Tests for the command registry and the inject/show commands."""

from pathlib import Path

import pytest

from auto_testid.commands.base import BaseCommand
from auto_testid.commands.inject import InjectCommand
from auto_testid.commands.registry import (
    apply_command,
    discover_and_register_commands,
    get_command,
    register_command,
)
from auto_testid.commands.show import ShowCommand
from auto_testid.core.config import AutoTestIdConfig

CARD = """\
export function Card({ title }) {
  return (
    <section>
      <h2>{title}</h2>
      <button onClick={close}>Close</button>
    </section>
  );
}
"""


class TestRegistry:
    """Tests for command registration and lookup."""

    def test_discovers_builtin_commands(self) -> None:
        discover_and_register_commands()

        assert get_command("inject") is InjectCommand
        assert get_command("show") is ShowCommand

    def test_unknown_command(self) -> None:
        with pytest.raises(ValueError, match="Unknown command: rename"):
            get_command("rename")

    def test_register_requires_name(self) -> None:
        class Nameless(BaseCommand):
            def execute(self) -> None:
                pass

            def validate(self) -> None:
                pass

        with pytest.raises(ValueError, match="must have a 'name' attribute"):
            register_command(Nameless)

    def test_register_returns_class(self) -> None:
        class Noop(BaseCommand):
            name = "noop-for-registry-test"

            def execute(self) -> None:
                pass

            def validate(self) -> None:
                pass

        assert register_command(Noop) is Noop
        assert get_command("noop-for-registry-test") is Noop


class TestInjectCommand:
    """Tests for the inject command."""

    def test_rewrites_file(self, tmp_path: Path) -> None:
        test_file = tmp_path / "Card.jsx"
        test_file.write_text(CARD)

        command = apply_command("inject", test_file)

        assert command.test_ids == ["Card.section", "Card.section.h2", "Card.section.button"]  # type: ignore[attr-defined]
        result = test_file.read_text()
        assert '<section data-testid="Card.section">' in result
        assert '<h2 data-testid="Card.section.h2">{title}</h2>' in result
        assert '<button onClick={close} data-testid="Card.section.button">Close</button>' in result

    def test_second_run_changes_nothing(self, tmp_path: Path) -> None:
        test_file = tmp_path / "Card.jsx"
        test_file.write_text(CARD)

        apply_command("inject", test_file)
        once = test_file.read_text()
        command = apply_command("inject", test_file)

        assert command.test_ids == []  # type: ignore[attr-defined]
        assert test_file.read_text() == once

    def test_file_without_components_is_not_written(self, tmp_path: Path) -> None:
        test_file = tmp_path / "helpers.js"
        test_file.write_text("export const row = (r) => <tr>{r}</tr>;\n")
        before = test_file.stat().st_mtime_ns

        command = apply_command("inject", test_file)

        assert command.test_ids == []  # type: ignore[attr-defined]
        assert test_file.stat().st_mtime_ns == before

    def test_preserves_line_endings(self, tmp_path: Path) -> None:
        test_file = tmp_path / "Card.tsx"
        test_file.write_bytes(b"const Card = () => (\r\n  <div />\r\n);\r\n")

        apply_command("inject", test_file)

        assert test_file.read_bytes() == b'const Card = () => (\r\n  <div data-testid="Card.div" />\r\n);\r\n'

    def test_uses_config(self, tmp_path: Path) -> None:
        test_file = tmp_path / "Card.jsx"
        test_file.write_text(CARD)

        config = AutoTestIdConfig(only_interactive=True, attribute_name="data-cy")
        apply_command("inject", test_file, config=config)

        result = test_file.read_text()
        assert '<button onClick={close} data-cy="Card.section.button">' in result
        assert "<section>" in result

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ValueError, match="File does not exist"):
            apply_command("inject", tmp_path / "Nope.tsx")


class TestShowCommand:
    """Tests for the show command."""

    def test_lists_ids_without_writing(self, tmp_path: Path) -> None:
        test_file = tmp_path / "Card.tsx"
        test_file.write_text(CARD)

        command = apply_command("show", test_file)

        assert command.test_ids == ["Card.section", "Card.section.h2", "Card.section.button"]  # type: ignore[attr-defined]
        assert test_file.read_text() == CARD

    def test_lists_indexed_ids(self, tmp_path: Path) -> None:
        test_file = tmp_path / "List.tsx"
        test_file.write_text(
            "const List = ({ items }) => <ol>{items.map((item, n) => <li>{item}</li>)}</ol>;\n"
        )

        command = apply_command("show", test_file)

        assert command.test_ids == ["List.ol", "List.ol.item.${n}"]  # type: ignore[attr-defined]

    def test_unsupported_file(self, tmp_path: Path) -> None:
        test_file = tmp_path / "notes.txt"
        test_file.write_text("hello")

        with pytest.raises(ValueError, match="Unsupported file type"):
            apply_command("show", test_file)
