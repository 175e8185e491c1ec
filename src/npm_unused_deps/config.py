r"""Load options from the `.npm-unused-deps.yaml` configuration file.

Example:
    ```yaml
    extensions: [js, mjs]
    recursive: true
    sections: [dependencies]
    ignore: [typescript]
    exclude-dirs: [node_modules, dist]
    error-on-unused: true
    ```
"""

__all__ = [
    # Constants
    "KNOWN_KEYS",
    # Classes
    "Options",
    # Functions
    "find_config_file",
    "load_config",
    "merge_options",
]

import logging
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Final, Optional

import yaml

from npm_unused_deps.constants import (
    CONFIG_FILE,
    DEPENDENCY_SECTIONS,
    EXCLUDED_DIRS,
    SOURCE_EXTENSIONS,
)
from npm_unused_deps.utils import ConfigError

__logger__ = logging.getLogger(__name__)


@dataclass(frozen=True)
class Options:
    r"""Options of a single scan."""

    extensions: tuple[str, ...] = SOURCE_EXTENSIONS
    r"""File suffixes that are scanned for imports."""
    recursive: bool = False
    r"""Whether to descend into sub-directories."""
    sections: tuple[str, ...] = DEPENDENCY_SECTIONS
    r"""Manifest keys that hold dependencies."""
    ignore: tuple[str, ...] = ()
    r"""Dependencies that are never reported as unused."""
    exclude_dirs: tuple[str, ...] = tuple(sorted(EXCLUDED_DIRS))
    r"""Directory names skipped during a recursive scan."""
    error_on_unused: bool = False
    r"""Exit with a non-zero status if unused dependencies are found."""


KNOWN_KEYS: Final[dict[str, str]] = {
    field.name.replace("_", "-"): field.name for field in fields(Options)
}
r"""Maps keys of the configuration file to the fields of `Options`."""


def _as_strings(key: str, value: Any, /) -> tuple[str, ...]:
    match value:
        case str(item):
            return (item,)
        case list(items) if all(isinstance(item, str) for item in items):
            return tuple(items)
        case _:
            raise ConfigError(f"Option {key!r} must be a string or list of strings.")


def _as_bool(key: str, value: Any, /) -> bool:
    if not isinstance(value, bool):
        raise ConfigError(f"Option {key!r} must be a boolean, got {value!r}.")
    return value


def find_config_file(root: str | Path, /) -> Optional[Path]:
    r"""Get the configuration file of the project, if present."""
    path = Path(root) / CONFIG_FILE
    return path if path.is_file() else None


def load_config(path: str | Path, /) -> dict[str, Any]:
    r"""Load and validate the configuration file.

    Returns:
        A dictionary keyed by the field names of `Options`.

    Raises:
        ConfigError: If the file is unreadable, not a mapping,
            or contains unknown keys or values of the wrong type.
    """
    path = Path(path)
    try:
        with path.open(encoding="utf-8") as file:
            config = yaml.safe_load(file)
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigError(f"Could not load configuration file {path}") from exc

    if config is None:
        return {}
    if not isinstance(config, dict):
        raise ConfigError(f"Configuration file {path} must contain a mapping.")

    unknown = sorted(set(config) - KNOWN_KEYS.keys())
    if unknown:
        raise ConfigError(f"Unknown options in {path}: {unknown}")

    options: dict[str, Any] = {}
    for key, value in config.items():
        name = KNOWN_KEYS[key]
        match name:
            case "recursive" | "error_on_unused":
                options[name] = _as_bool(key, value)
            case _:
                options[name] = _as_strings(key, value)

    __logger__.debug("Loaded options from %s: %s", path, options)
    return options


def merge_options(base: Options, /, *overrides: dict[str, Any]) -> Options:
    r"""Apply the overrides in order, skipping values that are `None`."""
    options = base
    for override in overrides:
        changes = {key: val for key, val in override.items() if val is not None}
        options = replace(options, **changes)
    return options
