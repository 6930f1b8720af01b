"""File commands run by the CLI."""
