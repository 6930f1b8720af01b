"""Pytest configuration and shared fixtures for auto-testid tests."""

import difflib
import shutil
from pathlib import Path
from typing import Any, Optional

import pytest

from auto_testid.core.config import AutoTestIdConfig
from auto_testid.core.nodes import Program
from auto_testid.core.transformer import AutoTestIdTransformer, apply_test_ids
from auto_testid.syntax.parser import parse_source
from auto_testid.syntax.printer import print_program

FIXTURES_DIR = Path(__file__).parent / "fixtures"


class TransformTestBase:
    """Base class for end-to-end transform tests with automatic fixture management.

    Usage:
        class TestInject(TransformTestBase):
            fixture_category = "inject"

            def test_simple_component(self):
                self.transform()

            def test_custom_separator(self):
                self.transform(separator="-")

    Convention:
        - Test method name (minus 'test_' prefix) maps to fixture directory name
        - The fixture directory contains input.<ext> and expected.<ext>
        - Example: test_simple_component() -> fixtures/inject/simple_component/
    """

    fixture_category: Optional[str] = None  # Must be set in subclass

    @pytest.fixture(autouse=True)
    def _setup_fixture(self, tmp_path: Path, request: pytest.FixtureRequest) -> None:  # type: ignore[misc]
        """Automatically copy the fixture input before each test.

        Creates:
            self.tmp_path: Temporary directory for this test
            self.test_file: Copy of the fixture input in tmp_path
            self.expected_file: Path to the expected output in the fixtures
        """
        self.tmp_path = tmp_path

        test_name = request.function.__name__
        fixture_name = test_name[5:] if test_name.startswith("test_") else test_name

        if self.fixture_category is None:
            raise ValueError(f"{self.__class__.__name__} must set fixture_category class attribute")

        fixture_dir = FIXTURES_DIR / self.fixture_category / fixture_name
        if fixture_dir.exists():
            input_files = sorted(fixture_dir.glob("input.*"))
            expected_files = sorted(fixture_dir.glob("expected.*"))
            if len(input_files) != 1 or len(expected_files) != 1:
                raise FileNotFoundError(
                    f"Fixture directory {fixture_dir} must contain exactly one input.* "
                    "and one expected.* file"
                )
            self.test_file: Optional[Path] = tmp_path / input_files[0].name
            self.expected_file: Optional[Path] = expected_files[0]
            shutil.copy(input_files[0], self.test_file)
        else:
            # Allow tests without fixtures
            self.test_file = None
            self.expected_file = None

        yield

    def transform(self, **options: Any) -> list[str]:
        """Run the inject command on the fixture and assert the expected output.

        Args:
            **options: Configuration options (snake_case field names)

        Returns:
            The injected ids
        """
        # Import here to avoid circular dependencies during test collection
        from auto_testid.cli import transform_file

        if self.test_file is None:
            raise RuntimeError("No fixture loaded. Ensure fixture directory exists for this test.")

        test_ids = transform_file(self.test_file, AutoTestIdConfig.parse(options))
        self.assert_matches_expected()
        return test_ids

    def assert_matches_expected(self) -> None:
        """Assert that the transformed file matches the expected file exactly."""
        if self.test_file is None or self.expected_file is None:
            raise RuntimeError("No fixture loaded")

        actual = self.test_file.read_text()
        expected = self.expected_file.read_text()
        assert actual == expected, format_diff(actual, expected)


def format_diff(actual: str, expected: str) -> str:
    """Format a readable diff between actual and expected."""
    diff = difflib.unified_diff(
        expected.splitlines(keepends=True),
        actual.splitlines(keepends=True),
        fromfile="expected",
        tofile="actual",
        lineterm="",
    )
    return "".join(diff)


def transform_source(source: str, **options: Any) -> str:
    """Parse, transform and print a TSX snippet."""
    program = parse_source(source)
    apply_test_ids(program, AutoTestIdConfig.parse(options))
    return print_program(program)


def run_transformer(tree: Program, **options: Any) -> AutoTestIdTransformer:
    """Run a fresh transformer over a tree and return it."""
    transformer = AutoTestIdTransformer(AutoTestIdConfig.parse(options))
    tree.visit(transformer)
    return transformer
