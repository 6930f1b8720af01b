"""CLI entry point for auto-testid."""

import logging
from pathlib import Path
from typing import Iterable, Optional

import click

from auto_testid import __version__
from auto_testid.commands.registry import apply_command, discover_and_register_commands
from auto_testid.core.config import AutoTestIdConfig
from auto_testid.syntax.parser import EXTENSION_DIALECTS

# Dynamically discover and import all command modules
discover_and_register_commands()

SKIPPED_DIRECTORIES = frozenset({"node_modules"})


def setup_logging(verbose: bool = False, debug: bool = False) -> logging.Logger:
    """Setup logging for CLI commands."""
    level = logging.DEBUG if debug else (logging.INFO if verbose else logging.WARNING)
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(levelname)s - %(message)s",
        datefmt="%H:%M:%S",
    )
    return logging.getLogger("auto_testid")


@click.group()
@click.version_option(version=__version__, prog_name="auto-testid")
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output")
@click.option("--debug", is_flag=True, help="Enable debug output")
def main(verbose: bool, debug: bool) -> None:
    """auto-testid - inject hierarchy-derived data-testid attributes into JSX/TSX.

    Every markup element inside a component gets a stable locator built from
    the names of its enclosing components and elements, for example
    Navigation.nav.button.

    Examples:

        # Rewrite files in place
        auto-testid inject src/components

        # List the ids a file would receive
        auto-testid show src/components/Navigation.tsx
    """
    setup_logging(verbose, debug)


def transform_file(file_path: Path, config: AutoTestIdConfig | None = None) -> list[str]:
    """Inject test ids into a file in place.

    Args:
        file_path: Path to a .js/.jsx/.ts/.tsx file
        config: Transform configuration; None uses the defaults

    Returns:
        The injected ids in document order

    Raises:
        ValueError: If the file is missing, of an unsupported type or not UTF-8
    """
    return apply_command("inject", file_path, config=config).test_ids


def transform_directory(
    directory: Path, config: AutoTestIdConfig | None = None
) -> dict[Path, list[str]]:
    """Inject test ids into every source file under a directory.

    Args:
        directory: Directory to walk recursively (node_modules is skipped)
        config: Transform configuration; None uses the defaults

    Returns:
        Injected ids per file

    Raises:
        ValueError: If the directory doesn't exist or contains no source files
    """
    if not directory.exists():
        raise ValueError(f"Directory does not exist: {directory}")
    if not directory.is_dir():
        raise ValueError(f"Path is not a directory: {directory}")

    source_files = find_source_files(directory)
    if not source_files:
        raise ValueError(f"No JavaScript/TypeScript files found in {directory}")

    return {file_path: transform_file(file_path, config) for file_path in source_files}


def find_source_files(directory: Path) -> list[Path]:
    """Find .js/.jsx/.ts/.tsx files under a directory, sorted, skipping node_modules."""
    return sorted(
        path
        for path in directory.rglob("*")
        if path.is_file()
        and path.suffix.lower() in EXTENSION_DIALECTS
        and not SKIPPED_DIRECTORIES.intersection(path.relative_to(directory).parts)
    )


def expand_paths(paths: Iterable[Path]) -> list[Path]:
    """Expand directories into the source files they contain."""
    files: list[Path] = []
    for path in paths:
        if path.is_dir():
            files.extend(find_source_files(path))
        else:
            files.append(path)
    return files


def load_config(config_json: Optional[str], config_file: Optional[Path]) -> AutoTestIdConfig:
    """Resolve CLI configuration options; --config takes precedence over --config-file."""
    if config_json is not None:
        return AutoTestIdConfig.from_json(config_json)
    if config_file is not None:
        return AutoTestIdConfig.from_file(config_file)
    return AutoTestIdConfig()


@main.command()
@click.argument(
    "paths", nargs=-1, required=True, type=click.Path(exists=True, path_type=Path)
)
@click.option(
    "--config",
    "config_json",
    help='Options as a JSON object, e.g. \'{"separator": "-", "onlyInteractive": true}\'',
)
@click.option(
    "--config-file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="JSON file with options (ignored when --config is given)",
)
def inject(paths: tuple[Path, ...], config_json: Optional[str], config_file: Optional[Path]) -> None:
    """Inject test ids into files in place.

    PATHS may be files or directories; directories are searched recursively
    for .js, .jsx, .ts and .tsx files.
    """
    config = load_config(config_json, config_file)
    files = expand_paths(paths)
    if not files:
        raise click.ClickException("No JavaScript/TypeScript files found")

    total = 0
    for file_path in files:
        try:
            test_ids = transform_file(file_path, config)
        except ValueError as e:
            raise click.ClickException(str(e)) from e
        if test_ids:
            click.echo(f"{file_path}: {len(test_ids)} test ids injected")
        total += len(test_ids)
    click.echo(f"Done: {total} test ids injected into {len(files)} files")


@main.command()
@click.argument(
    "paths", nargs=-1, required=True, type=click.Path(exists=True, path_type=Path)
)
@click.option(
    "--config",
    "config_json",
    help='Options as a JSON object, e.g. \'{"separator": "-", "onlyInteractive": true}\'',
)
@click.option(
    "--config-file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="JSON file with options (ignored when --config is given)",
)
def show(paths: tuple[Path, ...], config_json: Optional[str], config_file: Optional[Path]) -> None:
    """Print the test ids files would receive, without modifying them."""
    config = load_config(config_json, config_file)
    files = expand_paths(paths)
    if not files:
        raise click.ClickException("No JavaScript/TypeScript files found")

    for file_path in files:
        try:
            command = apply_command("show", file_path, config=config)
        except ValueError as e:
            raise click.ClickException(str(e)) from e
        if len(files) > 1:
            click.echo(f"{file_path}:")
        for test_id in command.test_ids:
            click.echo(f"  {test_id}" if len(files) > 1 else test_id)
