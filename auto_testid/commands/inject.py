"""Inject command: write test ids into a source file."""

import logging

from auto_testid.commands.base import BaseCommand
from auto_testid.commands.registry import register_command
from auto_testid.syntax.printer import print_program

logger = logging.getLogger(__name__)


@register_command
class InjectCommand(BaseCommand):
    """Rewrite a file in place with test id attributes added.

    The file is only written when at least one attribute was added.

    Attributes:
        test_ids: The injected ids in document order, as they read in source
    """

    name = "inject"

    def validate(self) -> None:
        """Validate the target file.

        Raises:
            ValueError: If the file is missing or of an unsupported type
        """
        self.validate_source_file()

    def execute(self) -> None:
        """Inject test ids and write the file back."""
        program, transformer = self.apply_transform()
        self.test_ids = transformer.test_ids

        if not transformer.injections:
            logger.info(f"No elements to annotate in {self.file_path}")
            return

        self.file_path.write_text(print_program(program), encoding="utf-8", newline="")
        logger.info(f"Injected {len(self.test_ids)} test ids into {self.file_path}")
