r"""Collect the modules imported by JavaScript source files."""

__all__ = [
    # Constants
    "IMPORT_REGEX",
    # Functions
    "read_source",
    "scan_imports",
    "yield_imports",
]

import logging
import re
from collections.abc import Iterable, Iterator
from pathlib import Path

from npm_unused_deps.constants import EXCLUDED_DIRS, SOURCE_EXTENSIONS
from npm_unused_deps.utils import SourceReadError, get_source_files

__logger__ = logging.getLogger(__name__)

IMPORT_REGEX: re.Pattern = re.compile(r"""(?x:  # verbose regex
    import\s+
    [^'"]+          # bindings
    \s+from\s+
    ['"](?P<module>[^'"]+)['"]
    ;
)""")
r"""Regular expression matching `import <bindings> from '<module>';`."""


def yield_imports(text: str, /) -> Iterator[str]:
    r"""Yield all imported modules from the source text, in order."""
    for match in IMPORT_REGEX.finditer(text.strip()):
        yield match.group("module")


def read_source(path: Path, /) -> str:
    r"""Read a source file as text.

    Raises:
        SourceReadError: If the file cannot be read.
    """
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise SourceReadError(f"Failed to read source file {path}") from exc


def scan_imports(
    root: str | Path,
    /,
    *,
    extensions: Iterable[str] = SOURCE_EXTENSIONS,
    recursive: bool = False,
    excluded: Iterable[str] = EXCLUDED_DIRS,
) -> tuple[list[Path], list[str]]:
    r"""Scan the source files below root for imports.

    Returns:
        The scanned files and the imported modules, concatenated across
        files in the order of the files.
    """
    files = get_source_files(
        root, extensions=extensions, recursive=recursive, excluded=excluded
    )
    imported: list[str] = []

    for file in files:
        __logger__.debug('Checking "%s:0"', file)
        imported.extend(yield_imports(read_source(file)))

    return files, imported
