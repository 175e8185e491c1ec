#!/usr/bin/env python
r"""Check that dependencies declared in `package.json` are imported by the project.

Declared names are matched against imported modules by exact string,
so sub-path imports like `lodash/fp` do not count as a use of `lodash`.
"""

__all__ = [
    # Classes
    "ScanResult",
    # Functions
    "check_project",
    "find_unused",
    "get_options",
    "main",
    "scan_project",
]

import argparse
import logging
import sys
from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import Any, NamedTuple, Optional

from npm_unused_deps.config import Options, find_config_file, load_config, merge_options
from npm_unused_deps.constants import MANIFEST_FILE
from npm_unused_deps.imports import scan_imports
from npm_unused_deps.manifest import (
    DeclaredDependency,
    get_declared_dependencies,
    get_dependency_names,
    read_manifest,
)
from npm_unused_deps.utils import get_path_relative_to_cwd, get_project_dir

__logger__ = logging.getLogger(__name__)


class ScanResult(NamedTuple):
    r"""A named tuple containing the outcome of a single scan."""

    dependencies: list[DeclaredDependency]
    r"""Declared dependencies, tagged with their manifest section."""
    declared: list[str]
    r"""Names of the declared dependencies, in manifest order."""
    imported: list[str]
    r"""Modules imported by the scanned files, in file order."""
    unused: list[str]
    r"""Dependencies that are declared but not imported."""
    files: list[Path]
    r"""The scanned source files."""


def find_unused(
    declared: Sequence[str],
    imported: Iterable[str],
    /,
    *,
    ignored: Iterable[str] = (),
) -> list[str]:
    r"""Get the declared names that are not imported, in declared order."""
    found = frozenset(imported)
    skipped = frozenset(ignored)
    return [name for name in declared if name not in found and name not in skipped]


def scan_project(root: str | Path, /, *, options: Options = Options()) -> ScanResult:
    r"""Scan a project directory for unused dependencies.

    Raises:
        InvalidPathError: If root is not an existing directory.
        ManifestReadError: If the manifest cannot be read.
        SourceReadError: If a source file cannot be read.
    """
    project_dir = get_project_dir(root)

    text = read_manifest(project_dir / MANIFEST_FILE)
    dependencies = get_declared_dependencies(text, options.sections)
    declared = get_dependency_names(dependencies)
    __logger__.debug("Declared dependencies: %s", declared)

    files, imported = scan_imports(
        project_dir,
        extensions=options.extensions,
        recursive=options.recursive,
        excluded=options.exclude_dirs,
    )
    __logger__.debug("Imported modules: %s", imported)

    unused = find_unused(declared, imported, ignored=options.ignore)

    return ScanResult(
        dependencies=dependencies,
        declared=declared,
        imported=imported,
        unused=unused,
        files=files,
    )


def check_project(root: str | Path, /, *, options: Options = Options()) -> int:
    r"""Print the declared and unused dependencies of a project.

    Returns:
        The number of violations, 1 if any unused dependency was found.
    """
    result = scan_project(root, options=options)

    for file in result.files:
        __logger__.debug("Scanned %s", get_path_relative_to_cwd(file))

    print(f"Found dependencies: {result.declared}")
    print(f"Unused dependencies: {result.unused}")

    return int(bool(result.unused))


def get_options(args: argparse.Namespace, /) -> Options:
    r"""Combine the defaults, the configuration file and the command line."""
    config_file: Optional[Path] = (
        Path(args.config) if args.config is not None else find_config_file(args.path)
    )
    from_file = {} if config_file is None else load_config(config_file)
    from_cli: dict[str, Any] = {
        key: None if value is None else tuple(value)
        for key, value in {
            "extensions": args.extensions,
            "sections": args.sections,
            "ignore": args.ignore,
            "exclude_dirs": args.exclude_dirs,
        }.items()
    }
    # flags
    from_cli["recursive"] = args.recursive
    from_cli["error_on_unused"] = args.error_on_unused

    return merge_options(Options(), from_file, from_cli)


def main() -> None:
    r"""Report the unused dependencies of a project."""
    parser = argparse.ArgumentParser(
        description="Report dependencies declared in package.json that are never imported.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "path",
        type=str,
        help="The project directory containing package.json and the source files.",
    )
    parser.add_argument(
        "--config",
        default=None,
        type=str,
        help="Path to a configuration file.",
    )
    parser.add_argument(
        "--extensions",
        nargs="*",
        default=None,
        type=str,
        help="File extensions scanned for imports.",
    )
    parser.add_argument(
        "--sections",
        nargs="*",
        default=None,
        type=str,
        help="Manifest sections holding dependencies.",
    )
    parser.add_argument(
        "--ignore",
        nargs="*",
        default=None,
        type=str,
        help="List of dependencies never reported as unused.",
    )
    parser.add_argument(
        "--exclude-dirs",
        nargs="*",
        default=None,
        type=str,
        help="Directory names skipped in recursive mode.",
    )
    # flags ----------------------------------------------------------------------------
    parser.add_argument(
        "--recursive",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Scan sub-directories as well.",
    )
    parser.add_argument(
        "--error-on-unused",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Exit with status 1 if unused dependencies are found.",
    )
    parser.add_argument(
        "--debug",
        action=argparse.BooleanOptionalAction,
        default=False,
        help="Print debug information.",
    )
    args = parser.parse_args()

    if args.debug:
        logging.basicConfig(stream=sys.stdout, level=logging.DEBUG)
        __logger__.debug("args: %s", vars(args))

    try:
        options = get_options(args)
        violations = check_project(args.path, options=options)
    except Exception as exc:
        exc.add_note(f"Checking project {args.path!s} failed!")
        raise

    if violations and options.error_on_unused:
        raise SystemExit(1)


if __name__ == "__main__":
    main()
