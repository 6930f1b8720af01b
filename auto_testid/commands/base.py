"""Base class for all file commands."""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

from auto_testid.core.config import AutoTestIdConfig
from auto_testid.core.nodes import Program
from auto_testid.core.transformer import AutoTestIdTransformer
from auto_testid.syntax.parser import dialect_for_path, parse_file


class BaseCommand(ABC):
    """Base class for all commands that operate on one source file."""

    name: str  # e.g., "inject"

    def __init__(self, file_path: Path, **params: Any):
        """Initialize the command.

        Args:
            file_path: Path to the source file
            **params: Additional parameters for the command
        """
        self.file_path = file_path
        self.params = params

    @abstractmethod
    def execute(self) -> None:
        """Execute the command.

        Raises:
            ValueError: If the command cannot be applied
        """
        pass

    @abstractmethod
    def validate(self) -> None:
        """Validate the file and parameters before execution.

        Raises:
            ValueError: If the file or parameters are invalid
        """
        pass

    def validate_source_file(self) -> None:
        """Check that the target is an existing file of a supported type.

        Raises:
            ValueError: If the file is missing or not JavaScript/TypeScript
        """
        if not self.file_path.is_file():
            raise ValueError(f"File does not exist: {self.file_path}")
        dialect_for_path(self.file_path)

    @property
    def config(self) -> AutoTestIdConfig:
        """The transform configuration passed as the ``config`` parameter."""
        config = self.params.get("config")
        if config is None:
            return AutoTestIdConfig()
        if not isinstance(config, AutoTestIdConfig):
            raise ValueError(f"config must be an AutoTestIdConfig, got {type(config).__name__}")
        return config

    def apply_transform(self) -> tuple[Program, AutoTestIdTransformer]:
        """Parse the file and run the test id transform over it in memory.

        Returns:
            The transformed tree and the transformer that ran over it

        Raises:
            ValueError: If the file is not valid UTF-8
        """
        program = parse_file(self.file_path)
        transformer = AutoTestIdTransformer(self.config)
        if transformer.config.enabled:
            program.visit(transformer)
        return program, transformer
