r"""Report unused dependencies of npm projects."""

__all__ = [
    # constants
    "__version__",
    # module
    "check_unused_dependencies",
    "config",
    "imports",
    "manifest",
]


from importlib import metadata

from npm_unused_deps import check_unused_dependencies, config, imports, manifest

try:  # single-source version
    __version__ = metadata.version(__package__ or __name__)
except metadata.PackageNotFoundError:
    __version__ = "0"

del metadata
