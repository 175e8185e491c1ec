r"""Constants for npm_unused_deps."""

__all__ = [
    "CONFIG_FILE",
    "DEPENDENCY_SECTIONS",
    "EXCLUDED_DIRS",
    "MANIFEST_FILE",
    "SOURCE_EXTENSIONS",
]

from typing import Final

MANIFEST_FILE: Final[str] = "package.json"
r"""Name of the manifest file inside the scanned directory."""

CONFIG_FILE: Final[str] = ".npm-unused-deps.yaml"
r"""Name of the optional configuration file inside the scanned directory."""

DEPENDENCY_SECTIONS: Final[tuple[str, ...]] = ("dependencies", "devDependencies")
r"""Manifest keys whose entries count as declared dependencies."""

SOURCE_EXTENSIONS: Final[tuple[str, ...]] = (".js",)
r"""File suffixes that are scanned for import statements."""

EXCLUDED_DIRS: Final[frozenset[str]] = frozenset({"node_modules"})
r"""Directory names never entered during a recursive scan."""
