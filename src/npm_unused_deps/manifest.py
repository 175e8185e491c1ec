r"""Extract declared dependencies from a `package.json` manifest.

The manifest is decoded as JSON and every recognized section is extracted
independently. Manifests that are not strict JSON (comments, trailing commas)
fall back to a textual match of the first dependency section.

References:
    - https://docs.npmjs.com/cli/configuring-npm/package-json#dependencies
    - https://docs.npmjs.com/cli/configuring-npm/package-json#devdependencies
"""

__all__ = [
    # Constants
    "DEPENDENCY_REGEX",
    "SECTION_REGEX",
    # Classes
    "DeclaredDependency",
    "ObjectPairs",
    # Functions
    "find_dependency_section",
    "get_declared_dependencies",
    "get_dependency_names",
    "get_section_regex",
    "read_manifest",
    "yield_dependencies",
    "yield_dependencies_from_text",
]

import json
import logging
import re
from collections.abc import Iterable, Iterator, Mapping, Sequence
from pathlib import Path
from typing import Any, NamedTuple, Optional

from npm_unused_deps.constants import DEPENDENCY_SECTIONS
from npm_unused_deps.utils import ManifestReadError

__logger__ = logging.getLogger(__name__)


class DeclaredDependency(NamedTuple):
    r"""A dependency declared in the manifest."""

    name: str
    r"""The package name, as written in the manifest."""
    spec: str
    r"""The version specifier (not validated)."""
    section: str
    r"""The manifest section the entry was found in."""


class ObjectPairs(list):
    r"""A decoded JSON object, kept as its list of `(key, value)` pairs.

    Unlike a dict, this preserves duplicate keys.
    """


def get_section_regex(sections: Iterable[str] = DEPENDENCY_SECTIONS, /) -> re.Pattern:
    r"""Build a regular expression matching the first of the given sections."""
    # impossible regex `(?!)` if no section is wanted
    alternatives = "|".join(re.escape(section) for section in sections) or "(?!)"
    return re.compile(rf"""(?x:  # verbose regex
    "(?P<section>{alternatives})"
    \s*:\s*
    \{{(?P<body>[^}}]*)\}}
)""")


SECTION_REGEX: re.Pattern = get_section_regex(DEPENDENCY_SECTIONS)
r"""Regular expression matching the first brace-delimited dependency section."""

DEPENDENCY_REGEX: re.Pattern = re.compile(r"""(?x:  # verbose regex
    "(?P<name>[^"]+)"
    \s*:\s*
    "(?P<spec>.*?[^\\])"
)""")
r"""Regular expression matching a single `"name": "versionSpec"` entry."""


def read_manifest(path: str | Path, /) -> str:
    r"""Read the manifest as text.

    Raises:
        ManifestReadError: If the file cannot be read.
    """
    path = Path(path)
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ManifestReadError(f"Failed to read manifest {path}") from exc


def _iter_pairs(obj: Mapping[str, Any] | ObjectPairs, /) -> Iterator[tuple[str, Any]]:
    if isinstance(obj, Mapping):
        yield from obj.items()
    else:
        yield from obj


def yield_dependencies(
    manifest: Mapping[str, Any] | ObjectPairs,
    sections: Iterable[str] = DEPENDENCY_SECTIONS,
    /,
) -> Iterator[DeclaredDependency]:
    r"""Yield the dependencies from the decoded manifest.

    Sections are visited in the order they appear in the manifest,
    so that the result follows the manifest text.
    """
    wanted = frozenset(sections)
    for key, group in _iter_pairs(manifest):
        if key not in wanted:
            continue
        if not isinstance(group, Mapping | ObjectPairs):
            __logger__.warning("Ignoring section %r: not an object.", key)
            continue
        for name, spec in _iter_pairs(group):
            yield DeclaredDependency(name, str(spec), key)


def find_dependency_section(
    text: str, sections: Iterable[str] = DEPENDENCY_SECTIONS, /
) -> Optional[re.Match]:
    r"""Find the first of the given dependency sections in the manifest text."""
    return get_section_regex(sections).search(text)


def yield_dependencies_from_text(
    text: str, sections: Iterable[str] = DEPENDENCY_SECTIONS, /
) -> Iterator[DeclaredDependency]:
    r"""Yield the dependencies of the first section found in the manifest text.

    Note:
        Only a single section is captured, and nested objects inside it
        terminate the match early.
    """
    match = find_dependency_section(text, sections)
    if match is None:
        return

    section = match.group("section")
    for entry in DEPENDENCY_REGEX.finditer(match.group("body")):
        yield DeclaredDependency(entry.group("name"), entry.group("spec"), section)


def get_declared_dependencies(
    text: str,
    /,
    sections: Iterable[str] = DEPENDENCY_SECTIONS,
) -> list[DeclaredDependency]:
    r"""Extract the declared dependencies from the manifest text.

    Args:
        text: The raw content of the manifest.
        sections: The manifest keys that hold dependencies.

    Returns:
        The dependencies in manifest order, duplicates preserved.
        An empty list if no section matched.
    """
    sections = tuple(sections)
    try:
        manifest = json.loads(text, object_pairs_hook=ObjectPairs)
    except json.JSONDecodeError as exc:
        __logger__.warning(
            "Manifest is not valid JSON (%s), falling back to text matching.", exc
        )
        return list(yield_dependencies_from_text(text, sections))

    if not isinstance(manifest, ObjectPairs):
        __logger__.warning("Manifest is not a JSON object, no dependencies found.")
        return []

    return list(yield_dependencies(manifest, sections))


def get_dependency_names(deps: Sequence[DeclaredDependency], /) -> list[str]:
    r"""Get the names from a list of declared dependencies."""
    return [dep.name for dep in deps]
