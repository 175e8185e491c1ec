r"""Some utility functions for npm_unused_deps."""

__all__ = [
    # Exceptions
    "ConfigError",
    "InvalidPathError",
    "ManifestReadError",
    "ScanError",
    "SourceReadError",
    # Functions
    "get_path_relative_to_cwd",
    "get_project_dir",
    "get_source_files",
    "normalize_extensions",
]

import logging
from collections.abc import Iterable
from pathlib import Path

from npm_unused_deps.constants import EXCLUDED_DIRS, SOURCE_EXTENSIONS

__logger__ = logging.getLogger(__name__)


class ScanError(Exception):
    r"""Base class for all failures of a scan."""


class InvalidPathError(ScanError):
    r"""The scanned path does not exist or is not a directory."""


class ManifestReadError(ScanError):
    r"""The manifest file could not be read."""


class SourceReadError(ScanError):
    r"""A directory could not be listed or a source file could not be read."""


class ConfigError(ScanError):
    r"""The configuration file is unreadable or contains invalid values."""


def get_project_dir(path: str | Path, /) -> Path:
    r"""Validate that the given path is an existing directory.

    Raises:
        InvalidPathError: If the path does not exist or is a file.
    """
    root = Path(path)
    if not root.exists():
        raise InvalidPathError(f"Invalid path: {root} does not exist!")
    if not root.is_dir():
        raise InvalidPathError(f"Path must be a directory: {root}")
    return root


def normalize_extensions(extensions: Iterable[str], /) -> frozenset[str]:
    r"""Ensure every extension carries its leading dot, e.g. `js` -> `.js`."""
    return frozenset(ext if ext.startswith(".") else f".{ext}" for ext in extensions)


def _is_excluded_dir(name: str, excluded: Iterable[str], /) -> bool:
    return name in excluded or name.startswith(".")


def _raise_unlistable(exc: OSError, /) -> None:
    raise SourceReadError(f"Could not list directory {exc.filename}") from exc


def get_source_files(
    root: str | Path,
    /,
    *,
    extensions: Iterable[str] = SOURCE_EXTENSIONS,
    recursive: bool = False,
    excluded: Iterable[str] = EXCLUDED_DIRS,
) -> list[Path]:
    r"""Get all source files in the given directory, sorted by path.

    Only files whose suffix is one of `extensions` are returned.
    Without `recursive`, only the immediate children of `root` are considered.
    With `recursive`, sub-directories are visited as well, skipping hidden
    directories and those named in `excluded`.

    Directory symlinks are never followed.

    Raises:
        SourceReadError: If a directory cannot be listed.
    """
    suffixes = normalize_extensions(extensions)
    excluded = frozenset(excluded)
    files: list[Path] = []

    for dirpath, dirnames, filenames in Path(root).walk(on_error=_raise_unlistable):
        skipped = [
            name
            for name in dirnames
            if not recursive or _is_excluded_dir(name, excluded)
        ]
        for name in skipped:
            __logger__.debug('Skipped "%s" - not scanned!', dirpath / name)
        # prune in place, so that the walk does not descend
        dirnames[:] = [name for name in dirnames if name not in skipped]

        for name in filenames:
            path = dirpath / name
            # symlinks to directories are listed among the files
            if path.suffix in suffixes and path.is_file():
                files.append(path)

    return sorted(files)


def get_path_relative_to_cwd(path: Path, /) -> Path:
    r"""Get the relative path to the current working directory."""
    if path.is_relative_to(Path.cwd()):
        return path.relative_to(Path.cwd())
    return path
