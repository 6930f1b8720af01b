"""Transform configuration and its parsing from host-supplied options."""

import json
import logging
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Mapping

logger = logging.getLogger(__name__)

DEFAULT_ATTRIBUTE_NAME = "data-testid"
DEFAULT_SKIP_ELEMENTS = frozenset({"br", "hr", "img", "svg"})
DEFAULT_ITERATION_METHODS = frozenset({"map"})

# Host plugin options use camelCase keys
OPTION_ALIASES = {
    "separator": "separator",
    "includeElement": "include_element",
    "useHierarchy": "use_hierarchy",
    "skipElements": "skip_elements",
    "onlyInteractive": "only_interactive",
    "attributeName": "attribute_name",
    "enabled": "enabled",
    "iterationMethods": "iteration_methods",
}


class ConfigError(ValueError):
    """Raised when configuration options have the wrong shape or type."""


@dataclass(frozen=True)
class AutoTestIdConfig:
    """Options controlling which elements get a test id and how it is spelled.

    Attributes:
        separator: Joins the parts of a generated id
        include_element: Whether element names contribute to the id
        use_hierarchy: Whether enclosing component names contribute to the id
        skip_elements: Element names that are never annotated
        only_interactive: Annotate only interactive elements (buttons, inputs, ...)
        attribute_name: Name of the injected attribute
        enabled: When False the transform leaves every tree untouched
        iteration_methods: Method names whose inline callback marks an iteration
    """

    separator: str = "."
    include_element: bool = True
    use_hierarchy: bool = True
    skip_elements: frozenset[str] = DEFAULT_SKIP_ELEMENTS
    only_interactive: bool = False
    attribute_name: str = DEFAULT_ATTRIBUTE_NAME
    enabled: bool = True
    iteration_methods: frozenset[str] = DEFAULT_ITERATION_METHODS

    @classmethod
    def from_dict(cls, options: Mapping[str, Any] | None) -> "AutoTestIdConfig":
        """Build a configuration from plugin options.

        Keys may be camelCase (``includeElement``) or snake_case
        (``include_element``); unknown keys are ignored and missing keys take
        their defaults. If any recognised option has the wrong type, the whole
        default configuration is used instead.

        Args:
            options: Option mapping, or None for defaults

        Returns:
            The parsed configuration, or the default configuration
        """
        try:
            return cls.parse(options)
        except ConfigError as e:
            logger.warning(f"Invalid auto-testid configuration, using defaults: {e}")
            return cls()

    @classmethod
    def from_json(cls, text: str | None) -> "AutoTestIdConfig":
        """Build a configuration from a JSON object string.

        Empty or missing text yields the defaults, as does text that is not
        valid JSON.
        """
        if not text or not text.strip():
            return cls()
        try:
            options = json.loads(text)
        except json.JSONDecodeError as e:
            logger.warning(f"Malformed auto-testid configuration JSON, using defaults: {e}")
            return cls()
        return cls.from_dict(options)

    @classmethod
    def from_file(cls, path: Path) -> "AutoTestIdConfig":
        """Build a configuration from a JSON file.

        Raises:
            OSError: If the file cannot be read
        """
        return cls.from_json(path.read_text())

    @classmethod
    def parse(cls, options: Mapping[str, Any] | None) -> "AutoTestIdConfig":
        """Strictly parse plugin options.

        Raises:
            ConfigError: If options is not a mapping or an option has the wrong type
        """
        if options is None:
            return cls()
        if not isinstance(options, Mapping):
            raise ConfigError(f"Expected an object of options, got {type(options).__name__}")

        defaults = {f.name: f.default for f in fields(cls)}
        changes: dict[str, Any] = {}
        for key, value in options.items():
            field_name = OPTION_ALIASES.get(key, key)
            if field_name not in defaults:
                continue
            changes[field_name] = _coerce(field_name, value, defaults[field_name])
        return replace(cls(), **changes)


def _coerce(field_name: str, value: Any, default: Any) -> Any:
    """Check an option value against the type of its default."""
    if isinstance(default, bool):
        if not isinstance(value, bool):
            raise ConfigError(f"{field_name} must be a boolean, got {value!r}")
        return value
    if isinstance(default, str):
        if not isinstance(value, str):
            raise ConfigError(f"{field_name} must be a string, got {value!r}")
        return value
    if isinstance(value, (str, bytes)) or not isinstance(value, (list, tuple, set, frozenset)):
        raise ConfigError(f"{field_name} must be a list of strings, got {value!r}")
    if not all(isinstance(item, str) for item in value):
        raise ConfigError(f"{field_name} must contain only strings, got {value!r}")
    return frozenset(value)
