"""Show command: list the test ids a file would receive."""

from auto_testid.commands.base import BaseCommand
from auto_testid.commands.registry import register_command


@register_command
class ShowCommand(BaseCommand):
    """Compute the test ids for a file without modifying it.

    Attributes:
        test_ids: The ids that inject would add, in document order
    """

    name = "show"

    def validate(self) -> None:
        """Validate the target file.

        Raises:
            ValueError: If the file is missing or of an unsupported type
        """
        self.validate_source_file()

    def execute(self) -> None:
        """Run the transform in memory and record the ids."""
        _, transformer = self.apply_transform()
        self.test_ids = transformer.test_ids
